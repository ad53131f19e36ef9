"""Diagnostics and debugging utilities for sigconv."""

from .core import (
    assert_uniform_increasing,
    is_uniform,
    is_unit_impulse,
    max_abs_error,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "max_abs_error",
    "is_unit_impulse",
    "is_uniform",
    "assert_uniform_increasing",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
