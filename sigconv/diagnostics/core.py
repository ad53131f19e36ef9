"""Core diagnostic functions for sampled signals and time grids."""

from __future__ import annotations

import numpy as np

from sigconv.errors import ValidationError, ValidationErrorCode


def max_abs_error(a: np.ndarray, b: np.ndarray) -> float:
    """
    Maximum absolute element-wise difference between two sequences.

    Parameters
    ----------
    a, b:
        One-dimensional sequences.

    Returns
    -------
    float
        ``max(|a - b|)``; ``inf`` if the lengths differ and ``0.0`` if both
        are empty.
    """
    a = np.asarray(a, dtype=float).ravel()
    b = np.asarray(b, dtype=float).ravel()
    if a.shape != b.shape:
        return float("inf")
    if a.size == 0:
        return 0.0
    return float(np.max(np.abs(a - b)))


def is_unit_impulse(x: np.ndarray, atol: float = 1e-10) -> bool:
    """
    Check whether a sequence is the one-sample unit impulse ``[1]``.

    Parameters
    ----------
    x:
        Sequence to test.
    atol:
        Absolute tolerance for ``|x[0] - 1|``.

    Returns
    -------
    bool
        True only for a length-1 sequence whose sample is 1 within ``atol``.
    """
    x = np.asarray(x, dtype=float).ravel()
    return x.size == 1 and abs(x[0] - 1.0) < atol


def is_uniform(values: np.ndarray, atol: float = 1e-9) -> bool:
    """
    Check whether consecutive differences of ``values`` are all equal.

    Sequences with fewer than three samples are trivially uniform.
    """
    values = np.asarray(values, dtype=float).ravel()
    if values.size < 3:
        return True
    steps = np.diff(values)
    return bool(np.all(np.abs(steps - steps[0]) <= atol))


def assert_uniform_increasing(
    values: np.ndarray,
    name: str = "time grid",
    atol: float = 1e-9,
) -> None:
    """
    Assert that ``values`` is non-empty, finite, strictly increasing and
    uniformly spaced.

    Parameters
    ----------
    values:
        Candidate grid positions.
    name:
        Label used in error messages.
    atol:
        Uniformity tolerance.

    Raises
    ------
    ValidationError
        If any of the grid invariants is violated.
    """
    values = np.asarray(values, dtype=float)
    if values.ndim != 1:
        raise ValidationError(
            f"{name} must be one-dimensional, got {values.ndim}D",
            ValidationErrorCode.NOT_ONE_DIMENSIONAL,
        )
    if values.size == 0:
        raise ValidationError(f"{name} is empty", ValidationErrorCode.EMPTY)
    if not np.all(np.isfinite(values)):
        raise ValidationError(
            f"{name} contains non-finite values", ValidationErrorCode.NON_FINITE
        )
    if values.size > 1 and np.any(np.diff(values) <= 0):
        raise ValidationError(
            f"{name} must have strictly increasing values",
            ValidationErrorCode.NON_INCREASING,
        )
    if not is_uniform(values, atol=atol):
        raise ValidationError(
            f"{name} must be uniformly spaced", ValidationErrorCode.NON_UNIFORM
        )
