"""Discrete convolution primitives.

This package provides the numeric building blocks of the engine:
- Input validation for 1D sample sequences
- Direct full discrete convolution
- Output time support derived from the input supports
"""

from .conv import convolve, output_support
from .utils import check_1d_array

__all__ = [
    "check_1d_array",
    "convolve",
    "output_support",
]
