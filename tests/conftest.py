"""Pytest configuration and shared fixtures for sigconv tests.

This module provides:
- A deterministic numpy RNG fixture
- Capture of sigconv log output
- Restoration of the global debug flag after each test
"""

import logging
import os
from io import StringIO

import numpy as np
import pytest

from sigconv.diagnostics import is_debug_enabled, set_debug_enabled
from sigconv.logging import configure_logging


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def log_stream():
    """Route every cached sigconv logger to a StringIO at WARNING level.

    Modules create their loggers at import time, so by the time a test runs
    the loggers it exercises are already cached and get the new handler.
    """
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)
    try:
        yield stream
    finally:
        configure_logging(level=logging.WARNING)


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Auto-use fixture that restores the global debug flag."""
    original = is_debug_enabled()
    yield
    set_debug_enabled(original)
