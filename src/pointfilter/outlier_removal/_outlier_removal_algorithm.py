""" Configurable statistical outlier removal with logging and performance tracking. """

__all__ = ["OutlierRemovalAlgorithm"]

import logging
import sys
from typing import Any, MutableSequence, Optional, Union

import numpy as np
import pandas as pd

from pointfilter.evaluation import PerformanceTracker, Profiler
from pointfilter.operations import NeighborQuery, check_parameters, remove_outliers
from pointfilter.type_aliases import PointAccessor, ProgressCallback


class OutlierRemovalAlgorithm:
    """
    Statistical outlier removal that ranks the points of a point sequence by their average squared distance to their
    neighbors and moves the outliers to the end of the sequence (see :code:`pointfilter.operations.remove_outliers`).

    Args:
        k: Number of neighbors used to compute the average squared distance of each point. Must be at least 2.
            Defaults to 24.
        neighbor_radius: Radius of the spherical neighborhood. If set to zero, the :code:`k` nearest neighbors are
            used. Defaults to zero.
        threshold_percent: Maximum percentage of points to remove. Defaults to 10.
        threshold_distance: Minimum distance for a point to be considered as outlier. Defaults to zero.

    Raises:
        ValueError: If :code:`k` is smaller than 2, :code:`threshold_percent` is not within [0, 100], or
            :code:`neighbor_radius` or :code:`threshold_distance` is negative.
    """

    def __init__(
        self,
        k: int = 24,
        neighbor_radius: float = 0.0,
        threshold_percent: float = 10.0,
        threshold_distance: float = 0.0,
    ):
        check_parameters(k, neighbor_radius, threshold_percent, threshold_distance)

        self._k = k
        self._neighbor_radius = neighbor_radius
        self._threshold_percent = threshold_percent
        self._threshold_distance = threshold_distance

        self._performance_tracker = PerformanceTracker()
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s:%(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=[logging.StreamHandler(sys.stdout)],
        )
        self._logger = logging.getLogger(__name__)
        self._logger.setLevel(logging.INFO)

    def performance_metrics(self) -> pd.DataFrame:
        """
        Returns:
            Tracked performance metrics as
            `pandas.DataFrame <https://pandas.pydata.org/docs/reference/api/pandas.DataFrame.html>`__ with the columns
            :code:`"Description"`, :code:`"Calls"`, :code:`"Wallclock Time [s]"`, :code:`"CPU Time [s]"`,
            :code:`"Memory Usage [GB]"`, and :code:`"Memory Increment [GB]"`.
        """

        return self._performance_tracker.to_pandas()

    def __call__(
        self,
        sequence: Union[MutableSequence[Any], np.ndarray],
        point_accessor: Optional[PointAccessor] = None,
        progress: Optional[ProgressCallback] = None,
        neighbor_query: Optional[NeighborQuery] = None,
    ) -> int:
        """
        Moves the outliers of a point sequence to its end.

        Args:
            sequence: Point sequence to filter. It is reordered in place.
            point_accessor: Function that maps an element of the sequence to its 3D position. Defaults to `None`,
                which means that the elements themselves are used as positions.
            progress: Callback that is called after each scored point with the fraction of points scored so far. If it
                returns `False`, the filtering is stopped and the sequence is left unchanged. Defaults to `None`.
            neighbor_query: Neighbor search structure indexing the positions of the sequence. Defaults to `None`,
                which means that a KD tree is built from the positions as part of the outlier removal.

        Returns:
            Index of the first point to remove. Points before this index are kept.

        Raises:
            ValueError: If the sequence is empty, the position of an element is not three-dimensional, or no
                neighbors were found for a point.
        """

        num_points = len(sequence)

        cancelled = False

        def progress_gate(fraction: float) -> bool:
            nonlocal cancelled
            if progress is not None and not progress(fraction):
                cancelled = True
            return not cancelled

        with Profiler("Outlier removal", self._performance_tracker):
            self._logger.info("Compute average neighbor distances of %d points...", num_points)
            boundary = remove_outliers(
                sequence,
                self._k,
                point_accessor=point_accessor,
                neighbor_radius=self._neighbor_radius,
                threshold_percent=self._threshold_percent,
                threshold_distance=self._threshold_distance,
                progress=progress_gate if progress is not None else None,
                neighbor_query=neighbor_query,
            )

        if cancelled:
            self._logger.info("Outlier removal was cancelled, the point sequence is left unchanged.")
        else:
            self._logger.info("Detected %d outliers among %d points.", num_points - boundary, num_points)

        return boundary
