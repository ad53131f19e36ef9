"""Time grids and sampled signals."""

from .signal import Signal
from .timegrid import TimeGrid, parse_bracket_numbers, parse_time_grid

__all__ = [
    "TimeGrid",
    "Signal",
    "parse_time_grid",
    "parse_bracket_numbers",
]
