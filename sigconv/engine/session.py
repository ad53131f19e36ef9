"""Session state and step records of the convolution engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

import numpy as np

from sigconv.signals import TimeGrid

from .compliance import ConvolutionComparison
from .materialize import MaterializedPair


class EngineState(Enum):
    """Lifecycle of a ConvolutionEngine."""

    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"


class StepResult(NamedTuple):
    """
    Data produced for one output sample.

    Attributes:
        y_n: Output value at ``n`` (taken from the reference output).
        h_shifted: ``h[n - k]`` for every position ``k`` of the unified grid.
        product: ``x[k] * h[n - k]`` on the unified grid.
        n: Output time position.
    """

    y_n: float
    h_shifted: np.ndarray
    product: np.ndarray
    n: float

    @property
    def is_sentinel(self) -> bool:
        return bool(np.isnan(self.n))


def sentinel_step() -> StepResult:
    """Step returned once every output sample has been revealed."""
    return StepResult(float("nan"), np.empty(0), np.empty(0), float("nan"))


@dataclass
class ConvolutionSession:
    """
    Mutable state of one initialised convolution.

    ``x``/``h`` and ``reference`` are never modified after creation; only
    ``cursor`` and ``y_output`` change while stepping.

    Attributes:
        x: Original first signal.
        h: Original second signal.
        nx: Grid of ``x``.
        nh: Grid of ``h``.
        reference: Authoritative full convolution of ``x`` and ``h``.
        output_grid: Time positions of ``reference``.
        pair: Both signals placed on the unified visualisation grid.
        cursor: Number of output samples revealed so far (0..len(reference)).
        y_output: Revealed output samples; zero beyond the cursor.
    """

    x: np.ndarray
    h: np.ndarray
    nx: TimeGrid
    nh: TimeGrid
    reference: np.ndarray
    output_grid: TimeGrid
    pair: MaterializedPair
    cursor: int = 0
    y_output: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        if self.y_output is None:
            self.y_output = np.zeros(len(self.reference), dtype=float)

    @property
    def output_length(self) -> int:
        return len(self.reference)

    @property
    def is_complete(self) -> bool:
        return self.cursor >= self.output_length


@dataclass(frozen=True)
class EngineInfo:
    """
    Read-only snapshot of an engine, for status displays.

    Fields other than ``initialized``, ``progress`` and ``is_complete``
    are None while the engine is idle.
    """

    initialized: bool
    state: EngineState
    progress: float
    is_complete: bool
    output_length: int = 0
    cursor: int = 0
    current_n: Optional[float] = None
    grid_length: Optional[int] = None
    step: Optional[float] = None
    output_range: Optional[Tuple[float, float]] = None
    x_max: Optional[float] = None
    h_max: Optional[float] = None
    y_max: Optional[float] = None
    comparison: Optional[ConvolutionComparison] = None


__all__ = [
    "EngineState",
    "StepResult",
    "sentinel_step",
    "ConvolutionSession",
    "EngineInfo",
]
