""" Statistical outlier removal for point clouds stored as numpy arrays. """

__all__ = ["remove_outliers_from_array"]

from typing import Optional, Tuple

import numpy as np

from pointfilter.type_aliases import FloatArray, LongArray, ProgressCallback

from ._neighbor_query import KDTreeNeighborQuery
from ._remove_outliers import remove_outliers


def remove_outliers_from_array(  # pylint: disable=too-many-arguments
    xyz: FloatArray,
    k: int,
    neighbor_radius: float = 0.0,
    threshold_percent: float = 10.0,
    threshold_distance: float = 0.0,
    progress: Optional[ProgressCallback] = None,
) -> Tuple[FloatArray, LongArray, LongArray]:
    r"""
    Statistical outlier filter for point clouds stored as numpy arrays. The points are filtered as described for
    :code:`remove_outliers` but the input array is not modified.

    Args:
        xyz: Points to be filtered. Only the first three columns are used as coordinates, further columns are treated
            as point features.
        k: Number of neighbors used to compute the average squared distance of each point. Must be at least 2.
        neighbor_radius: Radius of the spherical neighborhood. If set to zero, the :code:`k` nearest neighbors are
            used. Defaults to zero.
        threshold_percent: Maximum percentage of points to remove. Defaults to 10.
        threshold_distance: Minimum distance for a point to be considered as outlier. Defaults to zero.
        progress: Callback that is called after each scored point with the fraction of points scored so far. If it
            returns `False`, the filtering is stopped and no point is removed. Defaults to `None`.

    Returns:
        : Tuple of three arrays:
            - Inlier points remaining after filtering, in ascending order of their average neighbor distance.
            - Indices of the inlier points with respect to the input array.
            - Indices of the outlier points with respect to the input array.

    Raises:
        ValueError: If :code:`xyz` does not have shape :math:`(N, 3 + D)` or is empty, or if one of the parameters is
            invalid (see :code:`remove_outliers`).

    Shape:
        - :code:`xyz`: :math:`(N, 3 + D)`
        - Output: :math:`(N', 3 + D)`, :math:`(N')`, :math:`(N - N')`

          | where
          |
          | :math:`N = \text{ number of points before the filtering}`
          | :math:`N' = \text{ number of points after the filtering}`
          | :math:`D = \text{ number of feature channels excluding coordinate channels}`
    """

    if xyz.ndim != 2 or xyz.shape[1] < 3:
        raise ValueError(f"The point cloud must have shape (N, 3 + D), got {xyz.shape}.")
    if len(xyz) == 0:
        raise ValueError("The point cloud must not be empty.")

    coords = xyz[:, :3]
    point_indices = list(range(len(xyz)))

    boundary = remove_outliers(
        point_indices,
        k,
        point_accessor=lambda idx: coords[idx],
        neighbor_radius=neighbor_radius,
        threshold_percent=threshold_percent,
        threshold_distance=threshold_distance,
        progress=progress,
        neighbor_query=KDTreeNeighborQuery(coords),
    )

    sorted_indices = np.array(point_indices, dtype=np.int64)
    inlier_indices = sorted_indices[:boundary]

    return xyz[inlier_indices], inlier_indices, sorted_indices[boundary:]
