"""Tests for dsp.conv module."""

import numpy as np
import pytest

from sigconv.dsp.conv import convolve, output_support
from sigconv.errors import ValidationError


def test_convolve():
    """Test direct full convolution."""
    x = np.array([1.0, 2.0, 3.0])
    h = np.array([0.5, 0.5])

    y = convolve(x, h)
    expected = np.array([0.5, 1.5, 2.5, 1.5])
    np.testing.assert_array_almost_equal(y, expected)
    assert len(y) == len(x) + len(h) - 1


def test_convolve_matches_numpy(rng):
    """Random signals agree with numpy's full convolution."""
    x = rng.standard_normal(37)
    h = rng.standard_normal(11)
    np.testing.assert_array_equal(convolve(x, h), np.convolve(x, h, mode="full"))


def test_convolve_classic_example():
    """x = [1, 2, 1, 1], h = [1, 1, 1]."""
    y = convolve([1, 2, 1, 1], [1, 1, 1])
    np.testing.assert_array_equal(y, [1.0, 3.0, 4.0, 4.0, 2.0, 1.0])


def test_convolve_impulse_identity(rng):
    """Convolving with [1] returns the other signal."""
    h = rng.standard_normal(9)
    np.testing.assert_allclose(convolve([1.0], h), h, atol=1e-12)


def test_convolve_rejects_invalid_input():
    with pytest.raises(ValidationError):
        convolve([], [1.0])
    with pytest.raises(ValidationError):
        convolve([1.0, np.inf], [1.0])


def test_output_support():
    """Support runs from nx[0] + nh[0] to nx[-1] + nh[-1]."""
    nx = np.arange(-3.0, 9.0)
    nh = np.arange(-3.0, 9.0)
    n = output_support(nx, nh, 6)
    assert n[0] == -6.0
    assert n[-1] == 16.0
    assert len(n) == 6


def test_output_support_single_sample():
    n = output_support(np.array([2.0]), np.array([-1.0]), 1)
    np.testing.assert_array_equal(n, [1.0])


def test_output_support_invalid_length():
    with pytest.raises(ValueError, match="positive"):
        output_support(np.array([0.0]), np.array([0.0]), 0)
