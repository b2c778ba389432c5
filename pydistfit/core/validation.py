"""
Input validation utilities for pydistfit.

These validators follow the "fail fast, fail loud" principle for caller
errors. They are NOT used to reject data that an estimator merely cannot
fit; estimators report that through EstimationResult.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pydistfit.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.size > 0 and not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_sample(data: ArrayLike, name: str = "data") -> NDArray[np.floating[Any]]:
    """
    Convert a sample to a finite 1D float64 array.

    Empty samples are accepted: estimators and scorers decide what an empty
    sample means for them.

    Raises:
        ValidationError: If the sample is non-numeric or non-finite
        DimensionError: If the sample is not 1D
    """
    arr = check_array(data, name)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    check_1d(arr, name)
    check_finite(arr, name)
    return arr


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_level(level: float, name: str = "level") -> None:
    """
    Verify a confidence level or probability lies strictly inside (0, 1).

    Raises:
        ValidationError: If level is outside (0, 1)
    """
    if not (0.0 < level < 1.0):
        raise ValidationError(f"{name}: must be in (0, 1), got {level}")


def check_positive_int(value: int, name: str) -> None:
    """
    Verify value is an integer >= 1.

    Raises:
        ValidationError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise ValidationError(f"{name}: must be a positive integer, got {value!r}")


def check_positive(value: float, name: str) -> None:
    """
    Verify value is a finite number > 0.

    Raises:
        ValidationError: If value <= 0 or non-finite
    """
    if not np.isfinite(value) or value <= 0.0:
        raise ValidationError(f"{name}: must be > 0, got {value}")
