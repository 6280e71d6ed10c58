""" A context manager that tracks the execution time and memory usage of the contained code. """

__all__ = ["Profiler"]

import os
import time

import psutil

from ._performance_tracker import PerformanceTracker


class Profiler:
    """
    A context manager that tracks the execution time and memory usage of the contained code. The measurements are
    also saved if the contained code raises an exception.

    Args:
        desc: Description of the tracked code.
        performance_tracker: Performance tracker in which the measured performance metrics are to be stored.
    """

    def __init__(self, desc: str, performance_tracker: PerformanceTracker):
        self._desc = desc
        self._performance_tracker = performance_tracker
        self._process = psutil.Process(os.getpid())
        self._start_time_wall_clock = 0.0
        self._start_time_cpu = 0.0
        self._start_memory = 0

    def __enter__(self) -> "Profiler":
        self._start_memory = self._process.memory_info().rss
        self._start_time_wall_clock = time.perf_counter()
        self._start_time_cpu = time.process_time()
        return self

    def __exit__(self, *_) -> None:
        execution_time_wall_clock = time.perf_counter() - self._start_time_wall_clock
        execution_time_cpu = time.process_time() - self._start_time_cpu
        memory_usage = self._process.memory_info().rss
        memory_increment = memory_usage - self._start_memory

        self._performance_tracker.save(
            self._desc,
            execution_time_wall_clock,
            execution_time_cpu,
            round(memory_usage / 1e9, 4),
            round(memory_increment / 1e9, 4),
        )
