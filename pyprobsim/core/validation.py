"""
Input validation utilities for pyprobsim.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. Samplers and estimators call
them before doing any partial work.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyprobsim.core.exceptions import (
    DimensionError,
    EmptyInput,
    InvalidArgument,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Booleans are accepted and become 0.0/1.0, so that event indicators
    ("any duplicate birthday") can be averaged into proportions.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        InvalidArgument: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise InvalidArgument(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise InvalidArgument(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_:
        return result.astype(np.float64)

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise InvalidArgument(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        InvalidArgument: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InvalidArgument(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray, name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_nonempty(array: NDArray, name: str) -> None:
    """
    Verify array has at least one element.

    Raises:
        EmptyInput: If array has length 0
    """
    if array.shape[0] == 0:
        raise EmptyInput(f"{name}: empty sequence, need at least 1 value", name=name)


def check_min_samples(array: NDArray, min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        InvalidArgument: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise InvalidArgument(
            f"{name}: requires at least {min_samples} values, got {n}"
        )


def check_integer(value: Any, name: str, *, minimum: int = 0) -> int:
    """
    Verify value is an integer (not bool) no smaller than `minimum`.

    Returns:
        value as a Python int

    Raises:
        InvalidArgument: If value is not integral or is below minimum
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(
            f"{name}: expected an integer, got {type(value).__name__} {value!r}"
        )
    value = int(value)
    if value < minimum:
        raise InvalidArgument(f"{name}: must be >= {minimum}, got {value}")
    return value


def check_probability(value: Any, name: str) -> float:
    """
    Verify value is a real number in [0, 1].

    Raises:
        InvalidArgument: If value is not a probability
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(
            f"{name}: expected a probability, got {type(value).__name__} {value!r}"
        )
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise InvalidArgument(f"{name}: must be in [0, 1], got {value}")
    return value


def check_positive(value: Any, name: str) -> float:
    """
    Verify value is a finite real number strictly greater than zero.

    Raises:
        InvalidArgument: If value is not positive
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(
            f"{name}: expected a number, got {type(value).__name__} {value!r}"
        )
    value = float(value)
    if not np.isfinite(value) or value <= 0.0:
        raise InvalidArgument(f"{name}: must be a positive finite number, got {value}")
    return value
