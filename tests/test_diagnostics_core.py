"""Tests for diagnostic helpers on sequences and grids."""

import numpy as np
import pytest

from sigconv.diagnostics import (
    assert_uniform_increasing,
    is_uniform,
    is_unit_impulse,
    max_abs_error,
)
from sigconv.errors import ValidationError, ValidationErrorCode


def test_max_abs_error() -> None:
    assert max_abs_error([1.0, 2.0, 3.0], [1.0, 2.5, 2.0]) == pytest.approx(1.0)
    assert max_abs_error([], []) == 0.0
    assert max_abs_error([1.0, 2.0], [1.0]) == float("inf")


def test_is_unit_impulse() -> None:
    assert is_unit_impulse([1.0])
    assert is_unit_impulse(np.array([1.0 + 1e-12]))
    assert not is_unit_impulse([1.0, 0.0])
    assert not is_unit_impulse([0.5])
    assert not is_unit_impulse([1.0 + 1e-6], atol=1e-10)


def test_is_uniform() -> None:
    assert is_uniform([0.0, 0.5, 1.0, 1.5])
    assert is_uniform([3.0])
    assert is_uniform([0.0, 7.0])
    assert not is_uniform([0.0, 1.0, 3.0])
    # Rounding in decimal steps stays within tolerance
    assert is_uniform(np.arange(11) * 0.1)


@pytest.mark.parametrize(
    "values, code",
    [
        ([], ValidationErrorCode.EMPTY),
        ([[0.0, 1.0]], ValidationErrorCode.NOT_ONE_DIMENSIONAL),
        ([0.0, np.nan, 2.0], ValidationErrorCode.NON_FINITE),
        ([0.0, 2.0, 1.0], ValidationErrorCode.NON_INCREASING),
        ([0.0, 0.0, 1.0], ValidationErrorCode.NON_INCREASING),
        ([0.0, 1.0, 3.0], ValidationErrorCode.NON_UNIFORM),
    ],
)
def test_assert_uniform_increasing_rejects(values, code) -> None:
    with pytest.raises(ValidationError) as excinfo:
        assert_uniform_increasing(np.array(values, dtype=float))
    assert excinfo.value.code is code


def test_assert_uniform_increasing_accepts() -> None:
    assert_uniform_increasing(np.array([-2.0, -1.5, -1.0]))
    assert_uniform_increasing(np.array([4.0]))
