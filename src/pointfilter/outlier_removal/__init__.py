"""Configurable statistical outlier removal."""

from ._outlier_removal_algorithm import *

__all__ = [name for name in globals().keys() if not name.startswith("_")]
