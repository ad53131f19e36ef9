"""Engine self-checks switch.

When the switch is on, every cursor mutation of a ConvolutionEngine is
followed by a full ``validate_state()`` and an inconsistent session raises
StateError(INCONSISTENT_STATE). The initial value comes from the
``SIGCONV_DEBUG`` environment variable (``1``, ``true``, ``yes`` or ``on``).
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

DEBUG_ENV_VAR = "SIGCONV_DEBUG"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


_self_checks = _env_flag(DEBUG_ENV_VAR)


def is_debug_enabled() -> bool:
    """True while engine self-checks are switched on."""
    return _self_checks


def set_debug_enabled(enabled: bool) -> bool:
    """
    Switch engine self-checks on or off for the whole process.

    Parameters
    ----------
    enabled:
        New value of the switch.

    Returns
    -------
    bool
        The value the switch had before the call, so callers can restore it.
    """
    global _self_checks
    previous = _self_checks
    _self_checks = bool(enabled)
    return previous


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Scope the self-checks switch to a ``with`` block.

    The previous value is restored on exit, including when the block raises.

    Example
    -------
    >>> engine = ConvolutionEngine()
    >>> engine.initialize([1.0, 2.0], [1.0], [0, 1])
    >>> with debug_context():
    ...     step = engine.compute_step()
    """
    previous = set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)
