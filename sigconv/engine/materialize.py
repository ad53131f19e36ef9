"""Placement of two signals onto one shared visualisation grid.

The two inputs of a convolution may live on different, even disjoint,
grids. Stepping visualisation needs both on one uniform grid that is long
enough to host every non-zero input sample. Samples are placed by
nearest index rather than resampled, so isolated impulses survive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from sigconv.config import DEFAULT_TOLERANCES, Tolerances
from sigconv.logging import get_logger
from sigconv.signals import TimeGrid

logger = get_logger(__name__)


@dataclass(frozen=True)
class MaterializedPair:
    """
    Two signals remapped onto one shared grid.

    Attributes:
        grid: Unified, extended time grid.
        x: First signal on ``grid``.
        h: Second signal on ``grid``.
    """

    grid: TimeGrid
    x: np.ndarray
    h: np.ndarray


def grid_step(nx: TimeGrid, nh: TimeGrid) -> float:
    """Spacing of the first grid with at least two samples, else 1."""
    if len(nx) > 1:
        return nx.step
    if len(nh) > 1:
        return nh.step
    return 1.0


def unified_grid(nx: TimeGrid, nh: TimeGrid, conv_length: int) -> TimeGrid:
    """Extended grid starting at the earlier input start.

    The grid holds at least ``conv_length + max(len(nx), len(nh))``
    samples and is extended further when the two input grids are far
    apart, so that it always reaches the end of both.

    Args:
        nx: Grid of the first signal.
        nh: Grid of the second signal.
        conv_length: Length of the full convolution, ``Lx + Lh - 1``.

    Returns:
        The unified TimeGrid.
    """
    start = min(nx.start, nh.start)
    step = grid_step(nx, nh)
    count = conv_length + max(len(nx), len(nh))
    span = max(nx.end, nh.end) - start
    count = max(count, int(np.ceil(span / step - 1e-9)) + 1)
    return TimeGrid(start + step * np.arange(count, dtype=float))


def nearest_indices(grid: TimeGrid, positions: np.ndarray) -> np.ndarray:
    """Index of the grid sample closest to each position (clamped)."""
    positions = np.asarray(positions, dtype=float)
    if len(grid) == 1:
        return np.zeros(positions.shape, dtype=int)
    idx = np.rint((positions - grid.start) / grid.step)
    return np.clip(idx, 0, len(grid) - 1).astype(int)


def map_signal_without_loss(
    samples: np.ndarray,
    positions: np.ndarray,
    target: TimeGrid,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> np.ndarray:
    """Place the non-zero samples of a signal onto ``target``.

    Only samples with magnitude above ``tolerances.nonzero`` are placed,
    each at the index nearest to its position. Everything else on the
    target grid stays zero.

    Args:
        samples: Signal values.
        positions: Positions of ``samples`` (same length).
        target: Grid to place the samples on.
        tolerances: Supplies the non-zero threshold.

    Returns:
        Array with one value per ``target`` position.
    """
    samples = np.asarray(samples, dtype=float)
    positions = np.asarray(positions, dtype=float)
    mapped = np.zeros(len(target), dtype=float)

    keep = np.abs(samples) > tolerances.nonzero
    if not np.any(keep):
        return mapped

    idx = nearest_indices(target, positions[keep])
    offset = np.abs(target.values[idx] - positions[keep])
    misaligned = int(np.count_nonzero(offset >= target.step / 2.0))
    if misaligned:
        logger.warning(
            "%d non-zero samples are more than half a step away from the "
            "unified grid; placing them at the nearest position",
            misaligned,
        )
    mapped[idx] = samples[keep]
    return mapped


def sample_at(
    values: np.ndarray,
    grid: TimeGrid,
    positions: np.ndarray,
) -> np.ndarray:
    """Look up ``values`` (defined on ``grid``) at arbitrary positions.

    A position takes the value of its nearest grid sample when it lies
    within half a step of it, and zero otherwise.
    """
    values = np.asarray(values, dtype=float)
    positions = np.asarray(positions, dtype=float)
    idx = nearest_indices(grid, positions)
    hit = np.abs(grid.values[idx] - positions) < grid.step / 2.0
    return np.where(hit, values[idx], 0.0)


def materialize(
    x: np.ndarray,
    nx: TimeGrid,
    h: np.ndarray,
    nh: TimeGrid,
    tolerances: Optional[Tolerances] = None,
) -> MaterializedPair:
    """Map two signals onto one unified grid without losing impulses.

    Signals shorter than their grid occupy the leading positions of it.

    Args:
        x: First signal values.
        nx: Grid of ``x`` (at least ``len(x)`` positions).
        h: Second signal values.
        nh: Grid of ``h`` (at least ``len(h)`` positions).
        tolerances: Numeric tolerances (default: DEFAULT_TOLERANCES).

    Returns:
        The unified grid with both signals placed on it.
    """
    if tolerances is None:
        tolerances = DEFAULT_TOLERANCES
    x = np.asarray(x, dtype=float)
    h = np.asarray(h, dtype=float)

    grid = unified_grid(nx, nh, len(x) + len(h) - 1)
    x_mapped = map_signal_without_loss(x, nx.values[: len(x)], grid, tolerances)
    h_mapped = map_signal_without_loss(h, nh.values[: len(h)], grid, tolerances)

    logger.debug(
        "Unified grid [%g:%g] with %d points", grid.start, grid.end, len(grid)
    )
    return MaterializedPair(grid=grid, x=x_mapped, h=h_mapped)


__all__ = [
    "MaterializedPair",
    "grid_step",
    "unified_grid",
    "nearest_indices",
    "map_signal_without_loss",
    "sample_at",
    "materialize",
]
