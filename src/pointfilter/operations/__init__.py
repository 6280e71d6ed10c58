"""Operations for statistical outlier removal."""

from ._average_neighbor_distance import *
from ._compact import *
from ._cutoff_selector import *
from ._neighbor_query import *
from ._remove_outliers import *
from ._remove_outliers_from_array import *
from ._scored_ranking import *

__all__ = [name for name in globals().keys() if not name.startswith("_")]
