"""sigconv - step-by-step discrete-time convolution for teaching."""

__version__ = "0.1.0"

# Configuration
from .config import DEFAULT_TOLERANCES, Tolerances

# Diagnostics
from .diagnostics import debug_context, is_debug_enabled, set_debug_enabled

# Convolution primitives
from .dsp import convolve, output_support

# Convolution engine
from .engine import (
    CheckStatus,
    ComplianceCheck,
    ComplianceReport,
    ConvolutionComparison,
    ConvolutionEngine,
    EngineInfo,
    EngineState,
    StepResult,
    materialize,
)

# Errors
from .errors import (
    ParseError,
    ParseErrorCode,
    SigconvError,
    StateError,
    StateErrorCode,
    ValidationError,
    ValidationErrorCode,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Signal expressions
from .parser import parse_expression, parse_signal

# Time grids and signals
from .signals import Signal, TimeGrid, parse_time_grid

__all__ = [
    "__version__",
    # Configuration
    "Tolerances",
    "DEFAULT_TOLERANCES",
    # Diagnostics
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Convolution primitives
    "convolve",
    "output_support",
    # Convolution engine
    "ConvolutionEngine",
    "EngineState",
    "EngineInfo",
    "StepResult",
    "materialize",
    "CheckStatus",
    "ComplianceCheck",
    "ComplianceReport",
    "ConvolutionComparison",
    # Errors
    "SigconvError",
    "ParseError",
    "ParseErrorCode",
    "ValidationError",
    "ValidationErrorCode",
    "StateError",
    "StateErrorCode",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Signal expressions
    "parse_signal",
    "parse_expression",
    # Time grids and signals
    "TimeGrid",
    "Signal",
    "parse_time_grid",
]
