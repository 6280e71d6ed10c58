""" Average squared distance of a point to its neighbors. """

__all__ = ["average_neighbor_distance"]

import numpy as np
import numpy.typing as npt

from ._neighbor_query import NeighborQuery


def average_neighbor_distance(
    query_position: npt.ArrayLike, neighbor_query: NeighborQuery, k: int, radius: float = 0.0
) -> float:
    """
    Computes the average squared distance between a query position and its neighbors. The neighbors are retrieved
    from :code:`neighbor_query`, so if the query position is one of the indexed points, the point itself is among its
    neighbors.

    Args:
        query_position: Query position.
        neighbor_query: Neighbor search structure that is used to retrieve the neighbors.
        k: Number of neighbors to consider. Must be at least 2.
        radius: Radius of the spherical neighborhood. If set to zero, the :code:`k` nearest neighbors are used.
            Otherwise, at most :code:`k` neighbors within the given radius are used. Defaults to zero.

    Returns:
        Average squared distance between the query position and its neighbors.

    Raises:
        ValueError: If :code:`k` is smaller than 2, :code:`radius` is negative, or no neighbors were found.

    Shape:
        - :code:`query_position`: :math:`(3)`
    """

    if k < 2:
        raise ValueError(f"At least two neighbors are required, got k={k}.")
    if radius < 0:
        raise ValueError(f"The neighborhood radius must not be negative, got {radius}.")

    query_position = np.asarray(query_position, dtype=np.float64)
    neighbor_xyz = neighbor_query.query(query_position, k, radius)

    if len(neighbor_xyz) == 0:
        raise ValueError(
            f"No neighbors were found for the point {query_position.tolist()}. "
            + "The neighborhood radius may be too small."
        )

    return float(((neighbor_xyz - query_position) ** 2).sum(axis=-1).mean())
