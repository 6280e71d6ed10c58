""" Neighbor search structures used to retrieve the neighborhood of a query point. """

__all__ = ["NeighborQuery", "KDTreeNeighborQuery", "BruteForceNeighborQuery"]

import abc

import numpy as np
import numpy.typing as npt
from scipy.spatial import KDTree

from pointfilter.type_aliases import FloatArray


class NeighborQuery(abc.ABC):
    """
    Abstract base class for neighbor search structures. A neighbor search structure indexes a fixed set of 3D points
    and returns the neighbors of arbitrary query positions among these points.

    Args:
        xyz: Coordinates of the points to be indexed.

    Raises:
        ValueError: If :code:`xyz` is empty or does not have shape :math:`(N, 3)`.

    Shape:
        - :code:`xyz`: :math:`(N, 3)`
    """

    def __init__(self, xyz: npt.ArrayLike):
        xyz = np.asarray(xyz, dtype=np.float64)
        if xyz.ndim != 2 or xyz.shape[1] != 3:
            raise ValueError(f"The indexed points must have shape (N, 3), got {xyz.shape}.")
        if len(xyz) == 0:
            raise ValueError("The indexed point set must not be empty.")
        self._xyz = xyz

    def __len__(self) -> int:
        """
        Returns:
            Number of indexed points.
        """

        return len(self._xyz)

    def query(self, position: npt.ArrayLike, k: int, radius: float = 0.0) -> FloatArray:
        r"""
        Retrieves the neighbors of a query position. The query position itself is not excluded, i.e., if the query
        position is one of the indexed points, it is returned as its own neighbor at distance zero.

        Args:
            position: Query position.
            k: Maximum number of neighbors to retrieve.
            radius: Radius of the spherical neighborhood. If set to zero, the :code:`k` nearest neighbors are returned.
                Otherwise, the points within the closed ball of the given radius are returned, limited to the
                :code:`k` nearest of them. Defaults to zero.

        Returns:
            Coordinates of the neighbors.

        Raises:
            ValueError: If :code:`k` is smaller than one, :code:`radius` is negative, or the query position does not
                have shape :math:`(3)`.

        Shape:
            - :code:`position`: :math:`(3)`
            - Output: :math:`(M, 3)`

              | where
              |
              | :math:`M = \text{ number of neighbors found}, M \leq k`
        """

        position = np.asarray(position, dtype=np.float64)
        if position.shape != (3,):
            raise ValueError(f"The query position must have shape (3,), got {position.shape}.")
        if k < 1:
            raise ValueError(f"At least one neighbor must be requested, got k={k}.")
        if radius < 0:
            raise ValueError(f"The neighborhood radius must not be negative, got {radius}.")

        return self._query(position, min(k, len(self._xyz)), float(radius))

    @abc.abstractmethod
    def _query(self, position: FloatArray, k: int, radius: float) -> FloatArray:
        """
        Retrieves the neighbors of a query position. This method has to be overriden by child classes. The arguments
        are already validated and :code:`k` does not exceed the number of indexed points.

        Args:
            position: Query position.
            k: Maximum number of neighbors to retrieve.
            radius: Radius of the spherical neighborhood or zero for a pure k-nearest neighbor search.

        Returns:
            Coordinates of the neighbors.
        """


class KDTreeNeighborQuery(NeighborQuery):
    """
    Neighbor search based on `scipy's KDTree <https://docs.scipy.org/doc/scipy/reference/generated/\
    scipy.spatial.KDTree.html>`__.

    Args:
        xyz: Coordinates of the points to be indexed.
        leafsize: Number of points at which the KD tree switches to brute force search. Defaults to 10.

    Shape:
        - :code:`xyz`: :math:`(N, 3)`
    """

    def __init__(self, xyz: npt.ArrayLike, leafsize: int = 10):
        super().__init__(xyz)
        self._kd_tree = KDTree(self._xyz, leafsize=leafsize)

    def _query(self, position: FloatArray, k: int, radius: float) -> FloatArray:
        if radius > 0:
            # scipy only returns neighbors strictly closer than the upper bound
            neighbor_dists, neighbor_indices = self._kd_tree.query(
                position, k=list(range(1, k + 1)), distance_upper_bound=np.nextafter(radius, np.inf)
            )
        else:
            neighbor_dists, neighbor_indices = self._kd_tree.query(position, k=list(range(1, k + 1)))

        neighbor_indices = np.atleast_1d(neighbor_indices)
        # missing neighbors are marked with an infinite distance and an index equal to the number of points
        valid_mask = np.isfinite(np.atleast_1d(neighbor_dists))

        return self._xyz[neighbor_indices[valid_mask]]


class BruteForceNeighborQuery(NeighborQuery):
    """
    Exhaustive neighbor search that computes the distances between the query position and all indexed points. Only
    suitable for small point sets.

    Args:
        xyz: Coordinates of the points to be indexed.

    Shape:
        - :code:`xyz`: :math:`(N, 3)`
    """

    def _query(self, position: FloatArray, k: int, radius: float) -> FloatArray:
        sq_dists = ((self._xyz - position) ** 2).sum(axis=-1)

        if radius > 0:
            candidate_indices = np.flatnonzero(sq_dists <= radius * radius)
        else:
            candidate_indices = np.arange(len(self._xyz), dtype=np.int64)

        if len(candidate_indices) > k:
            partition = np.argpartition(sq_dists[candidate_indices], k - 1)[:k]
            candidate_indices = candidate_indices[partition]

        return self._xyz[candidate_indices]
