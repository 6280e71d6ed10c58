""" Selection of the boundary between inliers and outliers. """

__all__ = ["select_cutoff", "is_kept"]

from typing import Tuple


def select_cutoff(num_points: int, threshold_percent: float, threshold_distance: float) -> Tuple[int, float]:
    """
    Computes the two thresholds that decide which points of a ranking sorted in ascending order of the average squared
    neighbor distance are kept. A point is kept if at least one of the two thresholds is fulfilled (see
    :code:`is_kept`). Therefore, if :code:`threshold_percent` is 100, only :code:`threshold_distance` determines which
    points are removed; if :code:`threshold_distance` is zero, only :code:`threshold_percent` does.

    Args:
        num_points: Number of ranked points.
        threshold_percent: Maximum percentage of points to remove.
        threshold_distance: Minimum distance for a point to be considered as outlier. The distance is compared with the
            square root of a point's average squared neighbor distance.

    Returns:
        Tuple of two values:
            - Highest position in the ranking up to which points are kept based on :code:`threshold_percent`.
            - Squared distance below which points are kept based on :code:`threshold_distance`.

    Raises:
        ValueError: If :code:`num_points` is smaller than one, :code:`threshold_percent` is not within [0, 100], or
            :code:`threshold_distance` is negative.
    """

    if num_points < 1:
        raise ValueError(f"The ranking must contain at least one point, got {num_points}.")
    if not 0 <= threshold_percent <= 100:
        raise ValueError(f"threshold_percent must be within [0, 100], got {threshold_percent}.")
    if threshold_distance < 0:
        raise ValueError(f"threshold_distance must not be negative, got {threshold_distance}.")

    quota_index = int(float(num_points) * ((100.0 - threshold_percent) / 100.0))
    score_cutoff = float(threshold_distance) * float(threshold_distance)

    return quota_index, score_cutoff


def is_kept(index: int, score: float, quota_index: int, score_cutoff: float) -> bool:
    """
    Args:
        index: Position of a point in the ranking sorted in ascending order of the scores.
        score: Average squared neighbor distance of the point.
        quota_index: Highest position up to which points are kept, as computed by :code:`select_cutoff`.
        score_cutoff: Squared distance below which points are kept, as computed by :code:`select_cutoff`.

    Returns:
        `True` if the point is to be kept and `False` if it is an outlier.
    """

    return index <= quota_index or score < score_cutoff
