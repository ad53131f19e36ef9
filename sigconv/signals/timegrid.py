"""Uniform time grids and the parser for their textual notation.

Supported notations:
    - ``start:end`` (unit step, ``start < end``)
    - ``start:step:end`` (``step != 0``, direction must agree with the step sign)
    - ``[v1, v2, ...]`` (commas and/or whitespace, scientific notation allowed)
    - a single scalar

Unsorted or duplicated positions are sorted and deduplicated; the result
must be finite, strictly increasing and uniformly spaced.
"""

from __future__ import annotations

import math
import re
from typing import Iterator, List, Union

import numpy as np

from sigconv.diagnostics.core import assert_uniform_increasing
from sigconv.errors import (
    ParseError,
    ParseErrorCode,
    ValidationError,
    ValidationErrorCode,
)
from sigconv.logging import get_logger

logger = get_logger(__name__)

NUMBER_PATTERN = re.compile(r"[-+]?\d*\.?\d+(?:[eE][-+]?\d+)?")

# Slack added before flooring the sample count of a colon range, so that
# 0:0.1:1 yields 11 samples despite rounding in (end - start) / step.
_RANGE_SLACK = 1e-10

GRID_TOLERANCE = 1e-9


class TimeGrid:
    """Immutable, strictly increasing, uniformly spaced sample positions.

    Args:
        values: Sample positions (1D array-like, at least one element).
        atol: Tolerance on the equality of consecutive steps.

    Raises:
        ValidationError: If the positions are empty, non-finite, not
            strictly increasing or not uniformly spaced.
    """

    __slots__ = ("_values",)

    def __init__(self, values, atol: float = GRID_TOLERANCE) -> None:
        arr = np.array(values, dtype=float)
        if arr.ndim == 0:
            arr = arr.reshape(1)
        assert_uniform_increasing(arr, name="Time grid", atol=atol)
        arr.flags.writeable = False
        self._values = arr

    @classmethod
    def from_values(
        cls,
        values: Union["TimeGrid", np.ndarray, List[float]],
        atol: float = GRID_TOLERANCE,
    ) -> "TimeGrid":
        """Return ``values`` as a TimeGrid, validating array-like input.

        ``atol`` applies to array-like input only; an existing TimeGrid is
        returned as is.
        """
        if isinstance(values, cls):
            return values
        return cls(values, atol=atol)

    @classmethod
    def arange(cls, start: float, end: float, step: float = 1.0) -> "TimeGrid":
        """Inclusive range ``start:step:end`` with colon-operator semantics.

        A negative step walks from ``start`` down to ``end``; the positions
        are returned in increasing order.
        """
        if step == 0:
            raise ValueError("Step size cannot be zero")
        count = math.floor((end - start) / step + _RANGE_SLACK) + 1
        if count <= 0:
            raise ValidationError(
                f"Range {start}:{step}:{end} is empty", ValidationErrorCode.EMPTY
            )
        values = start + step * np.arange(count, dtype=float)
        return cls(np.sort(values))

    @property
    def values(self) -> np.ndarray:
        """Read-only array of sample positions."""
        return self._values

    @property
    def start(self) -> float:
        return float(self._values[0])

    @property
    def end(self) -> float:
        return float(self._values[-1])

    @property
    def step(self) -> float:
        """Grid spacing; 1.0 for a single-sample grid."""
        if len(self._values) < 2:
            return 1.0
        return float((self._values[-1] - self._values[0]) / (len(self._values) - 1))

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    def __getitem__(self, index):
        return self._values[index]

    def __array__(self, dtype=None, copy=None):
        if dtype is None and not copy:
            return self._values
        return np.array(self._values, dtype=dtype)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeGrid):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if len(self) == 1:
            return f"TimeGrid([{self.start:g}])"
        return f"TimeGrid({self.start:g}:{self.step:g}:{self.end:g}, n={len(self)})"


def parse_time_grid(text: str) -> TimeGrid:
    """Parse a textual time-grid specification.

    Args:
        text: ``start:end``, ``start:step:end``, ``[v1, v2, ...]`` or a scalar.

    Returns:
        The parsed TimeGrid.

    Raises:
        ParseError: With codes ``EMPTY_INPUT``, ``INVALID_NUMBER``,
            ``TOO_MANY_COLONS``, ``ZERO_STEP``, ``DIRECTION_MISMATCH``,
            ``NON_FINITE_VALUES``, ``NON_INCREASING_AFTER_DEDUP`` or
            ``NON_UNIFORM_GRID``.
    """
    if text is None or not text.strip():
        raise ParseError("Time grid string is empty", ParseErrorCode.EMPTY_INPUT, text)
    text = text.strip()
    logger.debug("Parsing time grid %r", text)

    if ":" in text:
        values = _parse_colon_notation(text)
    elif text.startswith("[") and text.endswith("]"):
        values = parse_bracket_numbers(text)
    else:
        values = np.array([_parse_number(text, text)])

    if not np.all(np.isfinite(values)):
        raise ParseError(
            f"Time grid {text!r} contains non-finite values",
            ParseErrorCode.NON_FINITE_VALUES,
            text,
        )

    if values.size > 1 and np.any(np.diff(values) <= 0):
        logger.warning("Time grid %r was not strictly increasing; sorting", text)
        values = np.sort(values)
        if np.any(np.diff(values) <= 0):
            values = np.unique(values)
            logger.warning("Removed duplicate positions from time grid %r", text)
        if np.any(np.diff(values) <= 0):
            raise ParseError(
                f"Time grid {text!r} cannot be made strictly increasing",
                ParseErrorCode.NON_INCREASING_AFTER_DEDUP,
                text,
            )

    try:
        grid = TimeGrid(values)
    except ValidationError as exc:
        raise ParseError(
            f"Time grid {text!r} is not uniformly spaced: {exc}",
            ParseErrorCode.NON_UNIFORM_GRID,
            text,
        ) from exc

    logger.debug("Parsed time grid %r into %r", text, grid)
    return grid


def _parse_number(token: str, text: str) -> float:
    try:
        return float(token.strip())
    except ValueError:
        raise ParseError(
            f"Cannot parse {token.strip()!r} as a number in time grid {text!r}",
            ParseErrorCode.INVALID_NUMBER,
            text,
        ) from None


def _parse_colon_notation(text: str) -> np.ndarray:
    parts = text.split(":")
    if len(parts) > 3:
        raise ParseError(
            f"Invalid colon notation {text!r}: too many colons",
            ParseErrorCode.TOO_MANY_COLONS,
            text,
        )

    numbers = [_parse_number(part, text) for part in parts]
    if not all(math.isfinite(v) for v in numbers):
        raise ParseError(
            f"Time grid {text!r} contains non-finite values",
            ParseErrorCode.NON_FINITE_VALUES,
            text,
        )

    if len(numbers) == 2:
        start, end = numbers
        step = 1.0
        if start >= end:
            raise ParseError(
                f"Start value ({start:g}) must be less than end value ({end:g})",
                ParseErrorCode.DIRECTION_MISMATCH,
                text,
            )
    else:
        start, step, end = numbers
        if step == 0:
            raise ParseError(
                "Step size cannot be zero", ParseErrorCode.ZERO_STEP, text
            )
        if step > 0 and start >= end:
            raise ParseError(
                f"For positive step, start ({start:g}) must be less than end ({end:g})",
                ParseErrorCode.DIRECTION_MISMATCH,
                text,
            )
        if step < 0 and start <= end:
            raise ParseError(
                f"For negative step, start ({start:g}) must be greater than end ({end:g})",
                ParseErrorCode.DIRECTION_MISMATCH,
                text,
            )

    count = math.floor((end - start) / step + _RANGE_SLACK) + 1
    return start + step * np.arange(count, dtype=float)


def parse_bracket_numbers(text: str) -> np.ndarray:
    """Extract the numbers of a ``[v1, v2, ...]`` literal.

    Entries may be separated by commas and/or whitespace.

    Raises:
        ParseError: ``EMPTY_INPUT`` for empty brackets, ``NESTED_BRACKETS``
            for ``[[...]]`` and ``INVALID_NUMBER`` when anything other than
            numbers and separators appears between the brackets.
    """
    content = text.strip()[1:-1].strip()
    if not content:
        raise ParseError("Empty brackets not allowed", ParseErrorCode.EMPTY_INPUT, text)
    if "[" in content or "]" in content:
        raise ParseError(
            f"Nested brackets are not supported: {text!r}",
            ParseErrorCode.NESTED_BRACKETS,
            text,
        )

    tokens = NUMBER_PATTERN.findall(content)
    leftover = NUMBER_PATTERN.sub(" ", content)
    if not tokens or leftover.replace(",", " ").strip():
        raise ParseError(
            f"Invalid numbers in bracket notation {text!r}",
            ParseErrorCode.INVALID_NUMBER,
            text,
        )
    return np.array([float(t) for t in tokens], dtype=float)


__all__ = ["TimeGrid", "parse_time_grid", "parse_bracket_numbers", "NUMBER_PATTERN"]
