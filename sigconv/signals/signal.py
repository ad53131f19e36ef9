"""Sampled signal container."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from sigconv.dsp.utils import check_1d_array
from sigconv.errors import ValidationError, ValidationErrorCode

from .timegrid import TimeGrid


@dataclass(frozen=True, eq=False)
class Signal:
    """
    Samples of a discrete signal over a time grid.

    Attributes:
        grid: Sample positions.
        samples: Read-only sample values, one per grid position.
    """

    grid: TimeGrid
    samples: np.ndarray

    def __post_init__(self) -> None:
        grid = TimeGrid.from_values(self.grid)
        samples = np.array(check_1d_array(self.samples, "Signal samples"))
        if len(samples) != len(grid):
            raise ValidationError(
                f"Signal has {len(samples)} samples but its grid has "
                f"{len(grid)} positions",
                ValidationErrorCode.LENGTH_MISMATCH,
            )
        samples.flags.writeable = False
        object.__setattr__(self, "grid", grid)
        object.__setattr__(self, "samples", samples)

    def __len__(self) -> int:
        return len(self.samples)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signal):
            return NotImplemented
        return self.grid == other.grid and np.array_equal(self.samples, other.samples)

    __hash__ = None  # type: ignore[assignment]

    def support(self) -> Tuple[float, float]:
        """First and last grid position."""
        return self.grid.start, self.grid.end

    def nonzero_positions(self, atol: float = 0.0) -> np.ndarray:
        """Grid positions whose sample magnitude exceeds ``atol``."""
        return self.grid.values[np.abs(self.samples) > atol]


__all__ = ["Signal"]
