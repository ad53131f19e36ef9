"""Discrete convolution and its time support.

The engine treats the output of :func:`convolve` as the authoritative
result; :func:`output_support` places it on the time axis.
"""

import numpy as np

from .utils import check_1d_array


def convolve(x: np.ndarray, h: np.ndarray) -> np.ndarray:
    """Direct full convolution of two 1D arrays.

    Computes y[n] = sum_k x[k] * h[n-k] using the direct O(N*M) method.

    Args:
        x: First input signal (1D array).
        h: Second input signal (impulse response, 1D array).

    Returns:
        Convolved signal of length len(x) + len(h) - 1.

    Raises:
        ValidationError: If either input is empty or non-finite.
    """
    x = check_1d_array(x, "x")
    h = check_1d_array(h, "h")

    return np.convolve(x, h, mode="full")


def output_support(nx: np.ndarray, nh: np.ndarray, length: int) -> np.ndarray:
    """Time positions of a full convolution output.

    For x on [nx[0], nx[-1]] and h on [nh[0], nh[-1]] the convolution lives
    on [nx[0] + nh[0], nx[-1] + nh[-1]]. The support is derived from the
    input supports only and spread linearly over ``length`` samples.

    Args:
        nx: Time positions of x (1D array).
        nh: Time positions of h (1D array).
        length: Number of output samples.

    Returns:
        Output time positions (1D array of ``length`` samples).

    Raises:
        ValueError: If ``length`` is not positive.
    """
    if length <= 0:
        raise ValueError(f"Output length must be positive, got {length}")

    nx = check_1d_array(nx, "nx")
    nh = check_1d_array(nh, "nh")

    n_start = nx[0] + nh[0]
    n_end = nx[-1] + nh[-1]

    if length == 1:
        return np.array([n_start], dtype=float)
    return np.linspace(n_start, n_end, length)
