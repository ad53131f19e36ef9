"""Tests for numeric tolerance configuration."""

import dataclasses

import pytest

from sigconv.config import DEFAULT_TOLERANCES, Tolerances
from sigconv.errors import ValidationError, ValidationErrorCode


def test_default_tolerances() -> None:
    assert DEFAULT_TOLERANCES.grid_uniformity == 1e-9
    assert DEFAULT_TOLERANCES.delta_width == 1e-10
    assert DEFAULT_TOLERANCES.compliance == 1e-10
    assert DEFAULT_TOLERANCES.nonzero == 1e-12


def test_tolerances_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_TOLERANCES.compliance = 1.0  # type: ignore[misc]


def test_tolerances_replace() -> None:
    loose = dataclasses.replace(DEFAULT_TOLERANCES, compliance=1e-6)
    assert loose.compliance == 1e-6
    assert loose.delta_width == DEFAULT_TOLERANCES.delta_width


@pytest.mark.parametrize("field", ["grid_uniformity", "delta_width", "compliance", "nonzero"])
@pytest.mark.parametrize("value", [-1e-3, float("nan")])
def test_invalid_tolerances_rejected(field, value) -> None:
    with pytest.raises(ValidationError) as excinfo:
        Tolerances(**{field: value})
    assert excinfo.value.code is ValidationErrorCode.INVALID_CONFIG
    assert field in str(excinfo.value)
