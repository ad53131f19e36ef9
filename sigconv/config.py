"""Numeric tolerances shared by the parser and the convolution engine."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ValidationError, ValidationErrorCode


@dataclass(frozen=True)
class Tolerances:
    """
    Tolerance settings for grid validation, primitives and verification.

    Args:
        grid_uniformity: Maximum deviation between consecutive grid steps
            before a grid is considered non-uniform. Defaults to 1e-9.
        delta_width: ``delta[arg]`` is 1 where ``|arg|`` is below this
            value. Defaults to 1e-10.
        compliance: Maximum absolute error accepted by the theory checks.
            Defaults to 1e-10.
        nonzero: Samples with magnitude at or below this value are treated
            as zero when signals are remapped onto the unified grid.
            Defaults to 1e-12.
    """

    grid_uniformity: float = 1e-9
    delta_width: float = 1e-10
    compliance: float = 1e-10
    nonzero: float = 1e-12

    def __post_init__(self) -> None:
        for name in ("grid_uniformity", "delta_width", "compliance", "nonzero"):
            value = getattr(self, name)
            if not value >= 0.0:
                raise ValidationError(
                    f"Tolerance '{name}' must be non-negative, got {value!r}",
                    ValidationErrorCode.INVALID_CONFIG,
                )


DEFAULT_TOLERANCES = Tolerances()

__all__ = ["Tolerances", "DEFAULT_TOLERANCES"]
