"""Tools for tracking the performance of the filtering."""

from ._performance_tracker import *
from ._profiler import *

__all__ = [name for name in globals().keys() if not name.startswith("_")]
