""" In-place partitioning of a point sequence into inliers and outliers. """

__all__ = ["compact"]

from typing import Any, MutableSequence, Union

import numpy as np

from ._cutoff_selector import is_kept
from ._scored_ranking import ScoredRanking


def compact(
    sequence: Union[MutableSequence[Any], np.ndarray], ranking: ScoredRanking, quota_index: int, score_cutoff: float
) -> int:
    """
    Rewrites a point sequence so that it contains the ranked elements in ascending order of their scores. The kept
    elements form a prefix of the sequence and the outliers form the remaining suffix. The sequence is modified in
    place and its original order is lost. Callers that depend on the original order need to copy the sequence
    beforehand. The ranking is emptied.

    Args:
        sequence: Point sequence to rewrite. Must have as many entries as the ranking.
        ranking: Ranking of all elements of the sequence.
        quota_index: Highest ranking position up to which elements are kept (see :code:`select_cutoff`).
        score_cutoff: Score below which elements are kept (see :code:`select_cutoff`).

    Returns:
        Index of the first element to remove. All elements before this index are kept.

    Raises:
        ValueError: If the ranking and the sequence differ in length.
    """

    if len(ranking) != len(sequence):
        raise ValueError(
            f"The ranking contains {len(ranking)} elements but the sequence has length {len(sequence)}."
        )

    boundary = 0
    index = 0
    while len(ranking) > 0:
        score, element = ranking.pop()
        sequence[index] = element
        if is_kept(index, score, quota_index, score_cutoff):
            boundary = index + 1
        index += 1

    return boundary
