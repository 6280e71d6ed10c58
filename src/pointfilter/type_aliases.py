"""Type aliases."""

__all__ = ["BoolArray", "FloatArray", "LongArray", "PointAccessor", "ProgressCallback"]

from typing import Any, Callable, Union

import numpy as np
import numpy.typing as npt

BoolArray = npt.NDArray[np.bool_]
FloatArray = npt.NDArray[Union[np.float32, np.float64]]
LongArray = npt.NDArray[np.int64]
PointAccessor = Callable[[Any], npt.ArrayLike]
ProgressCallback = Callable[[float], bool]
