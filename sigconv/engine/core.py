"""Step-wise discrete convolution engine.

The engine computes the full convolution once, on the original unpadded
inputs, and then replays it one output sample at a time. Each step also
yields the flipped-and-shifted ``h`` and the element-wise product on a
shared visualisation grid, which is what a teaching display animates.

Typical use::

    engine = ConvolutionEngine()
    engine.initialize(x, h, nx, nh)
    while not engine.is_complete():
        step = engine.compute_step()
    report = engine.verify_compliance()
"""

from __future__ import annotations

import operator
from typing import Optional, Tuple, Union

import numpy as np

from sigconv.config import DEFAULT_TOLERANCES, Tolerances
from sigconv.diagnostics.debug_mode import is_debug_enabled
from sigconv.dsp import check_1d_array, convolve, output_support
from sigconv.errors import (
    StateError,
    StateErrorCode,
    ValidationError,
    ValidationErrorCode,
)
from sigconv.logging import get_logger
from sigconv.signals import Signal, TimeGrid

from .compliance import (
    CheckStatus,
    ComplianceReport,
    ConvolutionComparison,
    compare_outputs,
    verify_compliance,
)
from .materialize import materialize, sample_at
from .session import (
    ConvolutionSession,
    EngineInfo,
    EngineState,
    StepResult,
    sentinel_step,
)

logger = get_logger(__name__)

SignalLike = Union[Signal, np.ndarray, list]
GridLike = Union[TimeGrid, np.ndarray, list, None]


def _coerce_input(
    signal: SignalLike, grid: GridLike, name: str, atol: float
) -> Tuple[np.ndarray, Optional[TimeGrid]]:
    if isinstance(signal, Signal):
        samples = np.array(signal.samples, dtype=float)
        if grid is None:
            grid = signal.grid
    else:
        samples = check_1d_array(signal, name)
    if grid is None:
        return samples, None
    return samples, TimeGrid.from_values(grid, atol=atol)


def _leading(grid: TimeGrid, count: int, atol: float) -> TimeGrid:
    if len(grid) == count:
        return grid
    logger.debug("Using the first %d of %d grid positions", count, len(grid))
    return TimeGrid(grid.values[:count], atol=atol)


class ConvolutionEngine:
    """
    Stateful engine that reveals a discrete convolution one sample at a time.

    Args:
        config: Numeric tolerances. Defaults to DEFAULT_TOLERANCES.

    The engine owns at most one session. Output indices are 0-based: the
    cursor counts revealed samples and runs from 0 to the output length.
    Instances are not thread-safe; use one engine per concurrent session.
    """

    def __init__(self, config: Optional[Tolerances] = None) -> None:
        self.config = config if config is not None else DEFAULT_TOLERANCES
        self._session: Optional[ConvolutionSession] = None

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def initialize(
        self,
        x: SignalLike,
        h: SignalLike,
        nx: GridLike = None,
        nh: GridLike = None,
    ) -> None:
        """
        Start a new convolution session, replacing any previous one.

        Initialisation is all-or-nothing: if validation fails, the previous
        session (if any) is left untouched.

        Args:
            x: First signal (array-like or Signal).
            h: Second signal (array-like or Signal).
            nx: Grid of ``x``. Taken from ``x`` when it is a Signal.
            nh: Grid of ``h``. Taken from ``h`` when it is a Signal,
                otherwise defaults to ``nx``.

        Raises:
            ValidationError: If a signal is empty or non-finite, a grid
                violates the TimeGrid invariants, no grid is available for
                ``x``, or a signal has more samples than its grid.
        """
        atol = self.config.grid_uniformity
        x_values, nx_grid = _coerce_input(x, nx, "x", atol)
        h_values, nh_grid = _coerce_input(h, nh, "h", atol)
        if nx_grid is None:
            raise ValidationError(
                "A time grid for x is required", ValidationErrorCode.EMPTY
            )
        if nh_grid is None:
            nh_grid = nx_grid

        for name, values, grid in (("x", x_values, nx_grid), ("h", h_values, nh_grid)):
            if len(values) > len(grid):
                raise ValidationError(
                    f"Signal {name} has {len(values)} samples but its grid has "
                    f"only {len(grid)} positions",
                    ValidationErrorCode.LENGTH_MISMATCH,
                )

        # Samples sit on the leading positions of a longer grid; the rest of
        # the grid carries no signal and must not stretch the output axis.
        nx_grid = _leading(nx_grid, len(x_values), atol)
        nh_grid = _leading(nh_grid, len(h_values), atol)

        reference = convolve(x_values, h_values)
        output_grid = TimeGrid(
            output_support(nx_grid.values, nh_grid.values, len(reference)), atol=atol
        )
        pair = materialize(x_values, nx_grid, h_values, nh_grid, self.config)

        reference.flags.writeable = False
        self._session = ConvolutionSession(
            x=x_values,
            h=h_values,
            nx=nx_grid,
            nh=nh_grid,
            reference=reference,
            output_grid=output_grid,
            pair=pair,
        )
        logger.info(
            "Initialized convolution: Lx=%d, Lh=%d, output length %d on [%g, %g]",
            len(x_values),
            len(h_values),
            len(reference),
            output_grid.start,
            output_grid.end,
        )
        self._debug_check()

    def reset(self) -> None:
        """Drop the current session and return to the idle state."""
        self._session = None
        logger.debug("Engine reset")

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def compute_step(self) -> StepResult:
        """
        Reveal the next output sample and advance the cursor by one.

        Returns:
            StepResult for the revealed sample, or the sentinel
            ``(nan, [], [], nan)`` once every sample has been revealed.

        Raises:
            StateError: If the engine is not initialised.
        """
        session = self._require_session()
        if session.is_complete:
            return sentinel_step()

        result = self._step_data(session, session.cursor)
        session.y_output[session.cursor] = result.y_n
        session.cursor += 1
        logger.debug(
            "Step %d/%d: y[%g] = %g",
            session.cursor,
            session.output_length,
            result.n,
            result.y_n,
        )
        if session.is_complete:
            logger.info("Convolution complete")
        self._debug_check()
        return result

    def compute_step_for_index(self, index: int) -> StepResult:
        """
        Step data for an arbitrary output index, without moving the cursor.

        Args:
            index: Output index in ``[0, output_length - 1]``.

        Returns:
            The same StepResult that the ``index``-th forward step yields.

        Raises:
            StateError: If the engine is not initialised or ``index`` is
                out of range.
        """
        session = self._require_session()
        index = self._check_index(index, session.output_length - 1)
        return self._step_data(session, index)

    def rewind(self, index: int) -> None:
        """
        Move the cursor back to ``index`` and forget later samples.

        Samples at positions ``index`` and beyond are cleared from the
        revealed output, so stepping forward again recomputes them.

        Args:
            index: New cursor position in ``[0, cursor]``.

        Raises:
            StateError: If the engine is not initialised or ``index`` is
                outside ``[0, cursor]``.
        """
        session = self._require_session()
        index = self._check_index(index, session.cursor)
        session.cursor = index
        session.y_output[index:] = 0.0
        logger.debug("Rewound to index %d", index)
        self._debug_check()

    def step_back(self) -> StepResult:
        """
        Undo the last step.

        Returns:
            Step data of the last sample still revealed afterwards, or the
            sentinel when nothing is revealed any more.

        Raises:
            StateError: If the engine is not initialised.
        """
        session = self._require_session()
        if session.cursor == 0:
            return sentinel_step()
        self.rewind(session.cursor - 1)
        if session.cursor == 0:
            return sentinel_step()
        return self._step_data(session, session.cursor - 1)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._session is not None

    @property
    def state(self) -> EngineState:
        session = self._session
        if session is None:
            return EngineState.IDLE
        if session.is_complete:
            return EngineState.COMPLETED
        if session.cursor > 0:
            return EngineState.RUNNING
        return EngineState.READY

    @property
    def cursor(self) -> int:
        return 0 if self._session is None else self._session.cursor

    @property
    def output_length(self) -> int:
        return 0 if self._session is None else self._session.output_length

    @property
    def y_output(self) -> np.ndarray:
        """Copy of the revealed output (zeros beyond the cursor)."""
        if self._session is None:
            return np.empty(0)
        return self._session.y_output.copy()

    @property
    def reference(self) -> np.ndarray:
        """Copy of the authoritative full convolution."""
        return self._require_session().reference.copy()

    @property
    def unified_grid(self) -> TimeGrid:
        """Shared visualisation grid of the current session."""
        return self._require_session().pair.grid

    def is_complete(self) -> bool:
        return self._session is not None and self._session.is_complete

    def progress(self) -> float:
        """Percentage of revealed output samples, in ``[0, 100]``."""
        session = self._session
        if session is None or session.output_length == 0:
            return 0.0
        return float(min(100.0, max(0.0, 100.0 * session.cursor / session.output_length)))

    def needs_reset_for_new_inputs(self) -> bool:
        """True once stepping has started on the current session."""
        return self.state in (EngineState.RUNNING, EngineState.COMPLETED)

    def get_complete_output(self) -> Tuple[TimeGrid, np.ndarray]:
        """
        Full result, available right after initialisation.

        Returns:
            ``(output_grid, reference)``.

        Raises:
            StateError: If the engine is not initialised.
        """
        session = self._require_session()
        return session.output_grid, session.reference.copy()

    def validate_state(self) -> bool:
        """
        Check the internal consistency of the session.

        Always True while idle. Otherwise checks that the inputs and
        reference are present, the output buffer has the reference length
        and the cursor is in range.
        """
        session = self._session
        if session is None:
            return True
        if session.x.size == 0 or session.h.size == 0 or len(session.nx) == 0:
            return False
        if session.reference is None or session.reference.size == 0:
            return False
        if session.y_output is None or len(session.y_output) != session.output_length:
            return False
        if len(session.output_grid) != session.output_length:
            return False
        return 0 <= session.cursor <= session.output_length

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify_compliance(self) -> ComplianceReport:
        """
        Check the current session against convolution theory.

        Returns:
            A ComplianceReport. Failed checks are reported, not raised.

        Raises:
            StateError: If the engine is not initialised.
        """
        session = self._require_session()
        report = verify_compliance(
            session.x,
            session.h,
            session.nx.values,
            session.nh.values,
            session.reference,
            session.output_grid.values,
            session.y_output,
            session.cursor,
            self.config,
        )
        if report.is_valid:
            logger.debug("Compliance: %s", report.status)
        else:
            logger.warning(
                "Compliance: %s (%s)",
                report.status,
                "; ".join(str(c) for c in report.checks if c.status is CheckStatus.FAIL),
            )
        return report

    def get_convolution_comparison(self) -> ConvolutionComparison:
        """Compare the revealed output with the reference.

        Raises:
            StateError: If the engine is not initialised.
        """
        session = self._require_session()
        return compare_outputs(session.y_output, session.reference, self.config)

    def get_engine_info(self) -> EngineInfo:
        """Snapshot of the engine status."""
        session = self._session
        if session is None:
            return EngineInfo(
                initialized=False,
                state=EngineState.IDLE,
                progress=0.0,
                is_complete=False,
            )

        current_n = None
        if 0 < session.cursor <= session.output_length:
            current_n = float(session.output_grid[session.cursor - 1])
        return EngineInfo(
            initialized=True,
            state=self.state,
            progress=self.progress(),
            is_complete=session.is_complete,
            output_length=session.output_length,
            cursor=session.cursor,
            current_n=current_n,
            grid_length=len(session.pair.grid),
            step=session.pair.grid.step,
            output_range=(session.output_grid.start, session.output_grid.end),
            x_max=float(np.max(np.abs(session.x))),
            h_max=float(np.max(np.abs(session.h))),
            y_max=float(np.max(np.abs(session.y_output))),
            comparison=self.get_convolution_comparison(),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_session(self) -> ConvolutionSession:
        if self._session is None:
            raise StateError(
                "Engine not initialized; call initialize() first",
                StateErrorCode.NOT_INITIALIZED,
            )
        return self._session

    @staticmethod
    def _check_index(index: int, upper: int) -> int:
        try:
            index = operator.index(index)
        except TypeError as exc:
            raise StateError(
                f"Index must be an integer, got {type(index).__name__}",
                StateErrorCode.INDEX_OUT_OF_RANGE,
            ) from exc
        if not 0 <= index <= upper:
            raise StateError(
                f"Index {index} out of range [0, {upper}]",
                StateErrorCode.INDEX_OUT_OF_RANGE,
            )
        return index

    def _step_data(self, session: ConvolutionSession, index: int) -> StepResult:
        n = float(session.output_grid[index])
        y_n = float(session.reference[index])

        grid = session.pair.grid
        with np.errstate(all="ignore"):
            h_shifted = sample_at(session.pair.h, grid, n - grid.values)
            product = session.pair.x * h_shifted

        bad = ~np.isfinite(product)
        if np.any(bad):
            logger.warning(
                "Step at n=%g produced %d non-finite products; clamping to zero",
                n,
                int(np.count_nonzero(bad)),
            )
            product = np.where(bad, 0.0, product)
        return StepResult(y_n, h_shifted, product, n)

    def _debug_check(self) -> None:
        if is_debug_enabled() and not self.validate_state():
            raise StateError(
                "Engine state is inconsistent", StateErrorCode.INCONSISTENT_STATE
            )


__all__ = ["ConvolutionEngine"]
