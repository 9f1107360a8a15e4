"""
Pattern stencils and anchor clamping for stamping shapes into a grid.

Stencils are small (3, 3) bool arrays. Offsets are relative to the top-left
corner of the window, and the window is centered on the (clamped) anchor.
These helpers carry no grid state.
"""
from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np

from .constants import GLIDER_MARGIN, PATTERN_SIZE, PULSAR_FAR_MARGIN, PULSAR_MARGIN


class PatternError(Exception):
    """Raised when a grid is too small to hold a pattern window"""
    pass


def _make_glider() -> np.ndarray:
    stencil = np.ones((PATTERN_SIZE, PATTERN_SIZE), dtype=bool)
    stencil[0, 1:] = False  # top row except its leftmost cell
    stencil[1, 1] = False   # center
    stencil[1, 0] = False   # left of center
    return stencil


# #..
# ..#   (the top-left spark dies on the first tick, leaving a glider
# ###    that travels down-right)
GLIDER = _make_glider()
GLIDER.flags.writeable = False

# Solid block stamped by insert_pulsar
PULSAR = np.ones((PATTERN_SIZE, PATTERN_SIZE), dtype=bool)
PULSAR.flags.writeable = False


def clamp_glider_anchor(value: int, extent: int) -> int:
    """
    Pull a glider anchor one cell inward when it touches an edge.

    Args:
        value: Row or column of the requested anchor
        extent: Grid height (for rows) or width (for columns)

    Returns:
        Anchor whose 3-cell window fits in [0, extent)
    """
    if extent < PATTERN_SIZE:
        raise PatternError(f"glider needs an extent of at least {PATTERN_SIZE}, got {extent}")

    if value == 0:
        return value + GLIDER_MARGIN
    if value >= extent - 1:
        return value - GLIDER_MARGIN
    return value


def clamp_pulsar_anchor(value: int, extent: int) -> int:
    """
    Pull a pulsar anchor away from the edges.

    An anchor of 0 moves to PULSAR_MARGIN; anything at or past
    extent - PULSAR_FAR_MARGIN is pinned to extent - PULSAR_FAR_MARGIN.
    """
    if extent < PULSAR_FAR_MARGIN + 1:
        raise PatternError(
            f"pulsar needs an extent of at least {PULSAR_FAR_MARGIN + 1}, got {extent}")

    limit = extent - PULSAR_FAR_MARGIN

    if value == 0:
        return value + PULSAR_MARGIN
    if value >= limit:
        return limit
    return value


def window_cells(stencil: np.ndarray, row: int, column: int) -> Iterator[Tuple[int, int, bool]]:
    """
    Yield (row, column, alive) for every stencil cell centered on an anchor.

    The anchor must already be clamped; no wraparound is applied.
    """
    half = stencil.shape[0] // 2
    for x in range(stencil.shape[0]):
        for y in range(stencil.shape[1]):
            yield row + x - half, column + y - half, bool(stencil[x, y])
