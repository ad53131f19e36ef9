"""Entry point turning expression text into a sampled :class:`Signal`."""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from sigconv.config import DEFAULT_TOLERANCES, Tolerances
from sigconv.errors import ParseError, ParseErrorCode
from sigconv.logging import get_logger
from sigconv.signals import Signal, TimeGrid

from .evaluate import evaluate
from .expression import parse_expression

logger = get_logger(__name__)


def parse_signal(
    text: str,
    grid: Union[TimeGrid, np.ndarray, list],
    tolerances: Optional[Tolerances] = None,
) -> Signal:
    """
    Parse a signal expression and sample it over a time grid.

    The function is pure: the same text and grid always give the same
    signal.

    Parameters
    ----------
    text : str
        Expression, e.g. ``"u[n] + 0.5*sin[0.2*n]"`` or ``"[1, 2, 1]"``.
    grid : TimeGrid or array-like
        Sample positions. Array-likes must satisfy the TimeGrid invariants.
    tolerances : Tolerances, optional
        Numeric tolerances (default: :data:`DEFAULT_TOLERANCES`).

    Returns
    -------
    Signal
        Samples over ``grid``. Non-finite samples (e.g. ``tan`` poles or
        ``0^n`` at negative ``n``) are replaced by zero and reported with
        a warning.

    Raises
    ------
    ParseError
        If the expression is empty, malformed, or evaluates to the wrong
        length (``LENGTH_MISMATCH``).
    ValidationError
        If ``grid`` is not a valid time grid.
    """
    if tolerances is None:
        tolerances = DEFAULT_TOLERANCES
    grid = TimeGrid.from_values(grid, atol=tolerances.grid_uniformity)

    logger.debug("Parsing %r over %r", text, grid)
    node = parse_expression(text)
    samples = np.asarray(evaluate(node, grid.values, tolerances), dtype=float)

    if samples.shape != (len(grid),):
        raise ParseError(
            f"Output signal length ({samples.size}) does not match time grid "
            f"length ({len(grid)})",
            ParseErrorCode.LENGTH_MISMATCH,
            text,
        )

    bad = ~np.isfinite(samples)
    if np.any(bad):
        logger.warning(
            "Signal %r contains %d non-finite values; replacing them with zero",
            text,
            int(np.count_nonzero(bad)),
        )
        samples = np.where(bad, 0.0, samples)

    return Signal(grid, samples)


__all__ = ["parse_signal"]
