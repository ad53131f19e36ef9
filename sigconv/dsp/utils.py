"""Utility functions for signal processing.

Provides input validation shared by the convolution routines and the
engine.
"""

import numpy as np

from sigconv.errors import ValidationError, ValidationErrorCode


def check_1d_array(x, name: str = "Input") -> np.ndarray:
    """Validate and cast input to a non-empty 1D float64 array.

    Args:
        x: Input array-like object.
        name: Label used in error messages.

    Returns:
        1D float64 numpy array.

    Raises:
        ValidationError: If input is empty, not 1D, contains NaN, or
            contains Inf.
    """
    try:
        arr = np.asarray(x, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"{name} must be numeric: {exc}", ValidationErrorCode.NON_FINITE
        ) from exc
    if arr.ndim == 0:
        arr = arr.reshape(1)
    elif arr.ndim > 1:
        raise ValidationError(
            f"Expected 1D array for {name}, got {arr.ndim}D array",
            ValidationErrorCode.NOT_ONE_DIMENSIONAL,
        )
    if arr.size == 0:
        raise ValidationError(f"{name} is empty", ValidationErrorCode.EMPTY)
    if np.any(np.isnan(arr)):
        raise ValidationError(
            f"{name} contains NaN values", ValidationErrorCode.NON_FINITE
        )
    if np.any(np.isinf(arr)):
        raise ValidationError(
            f"{name} contains Inf values", ValidationErrorCode.NON_FINITE
        )
    return arr
