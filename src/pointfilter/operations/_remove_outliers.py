""" Statistical outlier removal based on the average squared distance of each point to its neighbors. """

__all__ = ["remove_outliers", "positions_of", "check_parameters"]

import logging
from typing import Any, MutableSequence, Optional, Sequence, Union

import numpy as np

from pointfilter.type_aliases import FloatArray, PointAccessor, ProgressCallback

from ._average_neighbor_distance import average_neighbor_distance
from ._compact import compact
from ._cutoff_selector import select_cutoff
from ._neighbor_query import KDTreeNeighborQuery, NeighborQuery
from ._scored_ranking import ScoredRanking

_logger = logging.getLogger(__name__)


def positions_of(
    sequence: Union[Sequence[Any], np.ndarray], point_accessor: Optional[PointAccessor] = None
) -> FloatArray:
    r"""
    Collects the 3D positions of the elements of a point sequence.

    Args:
        sequence: Point sequence.
        point_accessor: Function that maps an element of the sequence to its 3D position. Defaults to `None`, which
            means that the elements themselves are used as positions.

    Returns:
        Coordinates of the elements.

    Raises:
        ValueError: If the position of an element does not consist of three coordinates.

    Shape:
        - Output: :math:`(N, 3)`

          | where
          |
          | :math:`N = \text{ number of elements in the sequence}`
    """

    xyz = np.empty((len(sequence), 3), dtype=np.float64)
    for idx in range(len(sequence)):
        element = sequence[idx]
        position = np.asarray(element if point_accessor is None else point_accessor(element), dtype=np.float64)
        if position.shape != (3,):
            raise ValueError(f"The position of element {idx} must have shape (3,), got {position.shape}.")
        xyz[idx] = position

    return xyz


def check_parameters(k: int, neighbor_radius: float, threshold_percent: float, threshold_distance: float) -> None:
    """
    Checks the parameters of the statistical outlier removal.

    Raises:
        ValueError: If :code:`k` is smaller than 2, :code:`threshold_percent` is not within [0, 100], or
            :code:`neighbor_radius` or :code:`threshold_distance` is negative.
    """

    if k < 2:
        raise ValueError(f"At least two neighbors are required, got k={k}.")
    if not 0 <= threshold_percent <= 100:
        raise ValueError(f"threshold_percent must be within [0, 100], got {threshold_percent}.")
    if neighbor_radius < 0:
        raise ValueError(f"neighbor_radius must not be negative, got {neighbor_radius}.")
    if threshold_distance < 0:
        raise ValueError(f"threshold_distance must not be negative, got {threshold_distance}.")


def remove_outliers(  # pylint: disable=too-many-arguments, too-many-locals
    sequence: Union[MutableSequence[Any], np.ndarray],
    k: int,
    point_accessor: Optional[PointAccessor] = None,
    neighbor_radius: float = 0.0,
    threshold_percent: float = 10.0,
    threshold_distance: float = 0.0,
    progress: Optional[ProgressCallback] = None,
    neighbor_query: Optional[NeighborQuery] = None,
) -> int:
    r"""
    Statistical outlier filter for 3D point sets: First, it computes the average squared distance that each point has
    to its :code:`k` nearest neighbors (the point itself is included in its neighborhood). Then, the points are sorted
    in ascending order of this average distance and the sequence is rewritten in place so that the points to keep form
    its prefix and the outliers form its suffix. The index of the first outlier is returned, so that the outliers can be
    erased by the caller, e.g., using :code:`del points[boundary:]`.

    Two thresholds decide how many points are removed: :code:`threshold_percent` and :code:`threshold_distance`. The
    smallest number of outliers is removed so that at least one of these thresholds is fulfilled. This means that if
    :code:`threshold_percent` is 100, only :code:`threshold_distance` is taken into account; if
    :code:`threshold_distance` is zero, only :code:`threshold_percent` is taken into account. Points with equal scores
    are ranked in the order in which they appear in the sequence, so if several points have exactly the score at which
    the thresholds cut, which of them are removed depends on the input order.

    The original order of the sequence is not preserved, not even for the points that are kept. Callers that depend on
    the original order need to copy the sequence beforehand.

    Args:
        sequence: Point sequence to filter. It is modified in place but its length is not changed. If the sequence is
            a numpy array, its entries are copied before the array is rewritten because they are views into the array.
            Entries of other sequences are moved as they are.
        k: Number of neighbors used to compute the average squared distance of each point. Must be at least 2. If
            :code:`neighbor_radius` is greater than zero, :code:`k` limits the number of neighbors within the radius.
        point_accessor: Function that maps an element of the sequence to its 3D position. Defaults to `None`, which
            means that the elements themselves are used as positions.
        neighbor_radius: Radius of the spherical neighborhood. If set to zero, the :code:`k` nearest neighbors are
            used. Defaults to zero.
        threshold_percent: Maximum percentage of points to remove. Defaults to 10.
        threshold_distance: Minimum distance for a point to be considered as outlier. The distance is compared with the
            square root of a point's average squared neighbor distance. Defaults to zero.
        progress: Callback that is called after each scored point with the fraction of points scored so far. If it
            returns `False`, the operation is stopped, the sequence is left unchanged, and the length of the sequence is
            returned. Defaults to `None`.
        neighbor_query: Neighbor search structure indexing the positions of the sequence. Defaults to `None`, which
            means that a :code:`KDTreeNeighborQuery` is built from the positions.

    Returns:
        Index of the first point to remove. Points before this index are kept.

    Raises:
        ValueError: If the sequence is empty, :code:`k` is smaller than 2, :code:`threshold_percent` is not within
            [0, 100], :code:`neighbor_radius` or :code:`threshold_distance` is negative, the position of an element is
            not three-dimensional, or no neighbors were found for a point.
    """

    num_points = len(sequence)
    if num_points == 0:
        raise ValueError("The point sequence must not be empty.")
    check_parameters(k, neighbor_radius, threshold_percent, threshold_distance)

    xyz = positions_of(sequence, point_accessor)
    if neighbor_query is None:
        neighbor_query = KDTreeNeighborQuery(xyz)

    ranking = ScoredRanking()
    for idx in range(num_points):
        score = average_neighbor_distance(xyz[idx], neighbor_query, k, neighbor_radius)

        element = sequence[idx]
        # rows and records of an array are views that the rewrite would overwrite
        if isinstance(sequence, np.ndarray) and isinstance(element, (np.ndarray, np.generic)):
            element = element.copy()
        ranking.add(score, element)

        if progress is not None and not progress((idx + 1) / num_points):
            _logger.info("Outlier removal cancelled after %d of %d points.", idx + 1, num_points)
            ranking.clear()
            return num_points

    quota_index, score_cutoff = select_cutoff(num_points, threshold_percent, threshold_distance)
    _logger.debug("Keeping ranking positions up to %d and scores below %f.", quota_index, score_cutoff)

    boundary = compact(sequence, ranking, quota_index, score_cutoff)
    _logger.debug("Found %d outliers among %d points.", num_points - boundary, num_points)

    return boundary
