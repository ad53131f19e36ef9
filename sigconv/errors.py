"""Exception types raised by sigconv.

Every exception carries a ``code`` member from one of the enums below so
that callers can branch on the failure kind without matching messages.
Compliance failures are not exceptions; they are reported through
:class:`sigconv.engine.compliance.ComplianceReport`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ParseErrorCode(Enum):
    """Failure kinds of the time-grid and expression parsers."""

    EMPTY_INPUT = "empty_input"
    INVALID_NUMBER = "invalid_number"
    NON_INCREASING_AFTER_DEDUP = "non_increasing_after_dedup"
    ZERO_STEP = "zero_step"
    DIRECTION_MISMATCH = "direction_mismatch"
    TOO_MANY_COLONS = "too_many_colons"
    NON_UNIFORM_GRID = "non_uniform_grid"
    NON_FINITE_VALUES = "non_finite_values"
    LENGTH_MISMATCH = "length_mismatch"
    UNPARSEABLE_EXPRESSION = "unparseable_expression"
    DIVISION_NOT_SUPPORTED = "division_not_supported"
    NESTED_BRACKETS = "nested_brackets"
    COMPLEX_LITERAL = "complex_literal"
    UNKNOWN_IDENTIFIER = "unknown_identifier"
    UNEXPECTED_CHARACTER = "unexpected_character"


class ValidationErrorCode(Enum):
    """Failure kinds for numeric signal and grid data."""

    EMPTY = "empty"
    NOT_ONE_DIMENSIONAL = "not_one_dimensional"
    NON_FINITE = "non_finite"
    NON_INCREASING = "non_increasing"
    NON_UNIFORM = "non_uniform"
    LENGTH_MISMATCH = "length_mismatch"
    INVALID_CONFIG = "invalid_config"


class StateErrorCode(Enum):
    """Failure kinds for misuse of the convolution engine."""

    NOT_INITIALIZED = "not_initialized"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    INCONSISTENT_STATE = "inconsistent_state"


class SigconvError(Exception):
    """Base class for all sigconv errors."""

    def __init__(self, message: str, code: Optional[Enum] = None) -> None:
        super().__init__(message)
        self.code = code


class ParseError(SigconvError, ValueError):
    """Raised when a time grid or signal expression cannot be parsed."""

    def __init__(
        self,
        message: str,
        code: ParseErrorCode = ParseErrorCode.UNPARSEABLE_EXPRESSION,
        text: Optional[str] = None,
    ) -> None:
        super().__init__(message, code)
        self.text = text


class ValidationError(SigconvError, ValueError):
    """Raised when numeric input data violates a signal or grid invariant."""

    def __init__(self, message: str, code: ValidationErrorCode) -> None:
        super().__init__(message, code)


class StateError(SigconvError, RuntimeError):
    """Raised when an engine operation is invalid in the current state."""

    def __init__(self, message: str, code: StateErrorCode) -> None:
        super().__init__(message, code)


__all__ = [
    "ParseErrorCode",
    "ValidationErrorCode",
    "StateErrorCode",
    "SigconvError",
    "ParseError",
    "ValidationError",
    "StateError",
]
