"""Collection of scored elements that can be traversed in ascending order of their scores."""

__all__ = ["ScoredRanking"]

import heapq
import itertools
from typing import Any, Iterator, List, Tuple


class ScoredRanking:
    """
    Collection of scored elements that can be traversed in ascending order of their scores. Multiple elements may
    have the same score. Elements with equal scores are ordered by the order in which they were added. The elements
    themselves are never compared, so they do not need to be orderable.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, Any]] = []
        self._counter = itertools.count()

    def add(self, score: float, element: Any) -> None:
        """
        Adds an element to the ranking.

        Args:
            score: Score of the element.
            element: The element.
        """
        heapq.heappush(self._heap, (score, next(self._counter), element))

    def pop(self) -> Tuple[float, Any]:
        """
        Removes and returns the element with the lowest score.

        Returns:
            The score and the element with the lowest score.

        Raises:
            KeyError: If the ranking is empty.
        """
        if not self._heap:
            raise KeyError("Cannot pop from an empty ranking.")
        score, _, element = heapq.heappop(self._heap)
        return score, element

    def clear(self) -> None:
        """
        Removes all elements from the ranking.
        """
        self._heap = []

    def __iter__(self) -> Iterator[Tuple[float, Any]]:
        """
        Returns:
            Iterator over the scores and elements in ascending order of the scores. The ranking is not modified.
        """
        for score, _, element in sorted(self._heap, key=lambda entry: entry[:2]):
            yield score, element

    def __len__(self) -> int:
        """
        Returns:
            Number of elements in the ranking.
        """
        return len(self._heap)
