"""A tracker that stores the execution time and memory usage of different code sections."""

__all__ = ["PerformanceTracker"]

from typing import Dict

import pandas as pd


class PerformanceTracker:
    """
    A tracker that stores the execution time and memory usage of different code sections. Measurements saved under the
    same description are aggregated: times and memory increments are summed, the memory usage keeps the peak value,
    and the number of measurements is counted.
    """

    METRIC_NAMES = ["Calls", "Wallclock Time [s]", "CPU Time [s]", "Memory Usage [GB]", "Memory Increment [GB]"]

    def __init__(self):
        self._records: Dict[str, Dict[str, float]] = {}

    def reset(self) -> None:
        """
        Deletes all tracked measurements.
        """

        self._records = {}

    def save(
        self, desc: str, wall_clock_time: float, cpu_time: float, memory_usage: float, memory_increment: float
    ) -> None:
        """
        Saves the performance metrics of a certain code section.

        Args:
            desc: Description of the tracked code.
            wall_clock_time: Wallclock time needed to execute the tracked code in seconds.
            cpu_time: CPU time needed to execute the tracked code in seconds.
            memory_usage: Memory usage of the process after executing the tracked code in GB.
            memory_increment: Change of the memory usage during the execution of the tracked code in GB.
        """

        if desc not in self._records:
            self._records[desc] = dict.fromkeys(PerformanceTracker.METRIC_NAMES, 0)

        record = self._records[desc]
        record["Calls"] += 1
        record["Wallclock Time [s]"] += wall_clock_time
        record["CPU Time [s]"] += cpu_time
        record["Memory Usage [GB]"] = max(record["Memory Usage [GB]"], memory_usage)
        record["Memory Increment [GB]"] += memory_increment

    def to_pandas(self) -> pd.DataFrame:
        """
        Returns:
            Tracked performance metrics as
            `pandas.DataFrame <https://pandas.pydata.org/docs/reference/api/pandas.DataFrame.html>`__ with the columns
            :code:`"Description"`, :code:`"Calls"`, :code:`"Wallclock Time [s]"`, :code:`"CPU Time [s]"`,
            :code:`"Memory Usage [GB]"`, and :code:`"Memory Increment [GB]"`.
        """

        rows = [
            [desc, *[record[metric_name] for metric_name in PerformanceTracker.METRIC_NAMES]]
            for desc, record in self._records.items()
        ]
        return pd.DataFrame(rows, columns=["Description", *PerformanceTracker.METRIC_NAMES])
