"""
Universe: a bit-packed toroidal grid running Conway's Game of Life.

The universe owns a single FixedBitSet addressed in row-major order
(index = row * width + column). Every mutator replaces or edits that one
bit set; callers read it through get_cells() (a copy) or cells() (a
read-only view that is valid until the next mutating call).
"""

import logging
import os
import time
from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

import numpy as np
from scipy.ndimage import convolve

from . import constants
from .bitset import FixedBitSet
from .constants import ALIVE_PROBABILITY, DEFAULT_HEIGHT, DEFAULT_WIDTH, TICK_TIME_WINDOW
from .data_types import PatternKind, UniverseConfig
from .diagnostics import install_diagnostic_hook
from .patterns import GLIDER, PULSAR, clamp_glider_anchor, clamp_pulsar_anchor, window_cells
from .rng import RandomSource, make_random_source, make_seed, random_cell_states

logger = logging.getLogger(__name__)

# Moore neighborhood, center excluded
NEIGHBOR_KERNEL = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.uint8)


class Cell(IntEnum):
    DEAD = 0
    ALIVE = 1


def next_cell_state(alive: bool, live_neighbors: int) -> bool:
    """Apply the fixed Game of Life rule to one cell"""
    # Rule 1: underpopulation
    if alive and live_neighbors < 2:
        return False
    # Rule 2: survival
    if alive and live_neighbors in (2, 3):
        return True
    # Rule 3: overpopulation
    if alive and live_neighbors > 3:
        return False
    # Rule 4: reproduction
    if not alive and live_neighbors == 3:
        return True
    return alive


class Universe:
    """
    Fixed-size toroidal Game of Life grid.

    width and height are plain attributes; change them only through
    set_width() / set_height(), which also reallocate the cells.

    Row and column arguments must lie in [0, height) and [0, width).
    They are not validated: a column of width addresses the first cell of
    the next row, and anything past the last cell raises IndexError.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        random: Optional[RandomSource] = None,
        vectorized: Optional[bool] = None,
        alive_probability: float = ALIVE_PROBABILITY,
        randomize: bool = True
    ):
        """
        Args:
            width: Number of columns
            height: Number of rows
            random: Uniform [0, 1) source (default: fresh PCG64 generator)
            vectorized: Tick implementation; None follows
                        constants.USE_VECTORIZED_TICK at tick time
            alive_probability: Coin-flip threshold used by randomize_cells()
            randomize: If False, start with every cell dead
        """
        install_diagnostic_hook()

        self.width: int = width
        self.height: int = height
        self.tick_count: int = 0

        self._random: RandomSource = random if random is not None else make_random_source()
        self._alive_probability: float = alive_probability
        self._vectorized: Optional[bool] = vectorized

        # Performance metrics
        self._tick_times: List[float] = []
        self._tick_time_sum: float = 0.0
        self._tick_time_window: int = TICK_TIME_WINDOW

        if randomize:
            self._cells = self._make_random_cells(width, height)
        else:
            self._cells = self._make_dead_cells(width * height)

        logger.debug("Universe created: %dx%d (randomized=%s)", width, height, randomize)

    @classmethod
    def new(cls) -> "Universe":
        """Default 64x64 universe with coin-flip content"""
        return cls()

    @classmethod
    def from_config(cls, config: UniverseConfig) -> "Universe":
        """
        Build a universe from a loaded UniverseConfig.

        Seeding uses a PCG64 source derived from config.seed, so the same
        config always yields the same first generation. Pattern placements
        are stamped after seeding, in file order.
        """
        random = None
        if config.seed is not None:
            random = make_random_source(make_seed(config.seed, "cells"))

        universe = cls(
            width=config.width,
            height=config.height,
            random=random,
            vectorized=config.vectorized,
            alive_probability=config.alive_probability,
            randomize=config.randomize
        )

        for placement in config.patterns:
            if placement.kind == PatternKind.GLIDER:
                universe.insert_glider(placement.row, placement.column)
            elif placement.kind == PatternKind.PULSAR:
                universe.insert_pulsar(placement.row, placement.column)
            else:
                universe.set_cells([(placement.row, placement.column)])

        return universe

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def get_index(self, row: int, column: int) -> int:
        return row * self.width + column

    def is_alive(self, row: int, column: int) -> bool:
        return self._cells[self.get_index(row, column)]

    def cells(self) -> np.ndarray:
        """
        Zero-copy, read-only view of the packed cell words.

        Cell i is bit i % 32 of word i // 32 (byte i // 8, bit i % 8 when
        read as little-endian bytes). The view only stays meaningful until
        the next mutating call: tick, resize, randomize and kill swap in new
        storage, leaving the view on the old generation.
        """
        return self._cells.as_slice()

    def get_cells(self) -> List[Cell]:
        """Get the dead and alive values of the entire universe, row-major"""
        return [Cell.ALIVE if alive else Cell.DEAD for alive in self._cells.to_bools()]

    def as_array(self) -> np.ndarray:
        """(height, width) bool copy of the grid"""
        return self._cells.to_bools().reshape(self.height, self.width)

    def set_cells(self, cells: Iterable[Tuple[int, int]]):
        """
        Set cells to be alive by passing the row and column of each cell.

        Other cells are left untouched.
        """
        for row, column in cells:
            self._cells.set(self.get_index(row, column), True)

    def toggle_cell(self, row: int, column: int):
        self._cells.toggle(self.get_index(row, column))

    def population(self) -> int:
        return self._cells.count_ones()

    # ------------------------------------------------------------------
    # Construction & reset
    # ------------------------------------------------------------------

    def randomize_cells(self):
        self._cells = self._make_random_cells(self.width, self.height)

    def kill_all_cells(self):
        self._cells = self._make_dead_cells(self.width * self.height)

    def set_width(self, width: int):
        """
        Set the width of the universe.

        Resets all cells to the dead state.
        """
        self.width = width
        self._cells = self._make_dead_cells(width * self.height)
        logger.debug("Universe resized to %dx%d", self.width, self.height)

    def set_height(self, height: int):
        """
        Set the height of the universe.

        Resets all cells to the dead state.
        """
        self.height = height
        self._cells = self._make_dead_cells(height * self.width)
        logger.debug("Universe resized to %dx%d", self.width, self.height)

    def _make_dead_cells(self, size: int) -> FixedBitSet:
        return FixedBitSet.with_capacity(size)

    def _make_random_cells(self, width: int, height: int) -> FixedBitSet:
        states = random_cell_states(width * height, self._random, self._alive_probability)
        return FixedBitSet.from_bools(states)

    # ------------------------------------------------------------------
    # Pattern insertion
    # ------------------------------------------------------------------

    def insert_glider(self, row: int, column: int):
        """
        Stamp a glider around (row, column).

        Anchors on an edge are pulled one cell inward so the 3x3 window fits.
        All nine window cells are written, so dead stencil cells clear
        whatever was there.
        """
        corrected_row = clamp_glider_anchor(row, self.height)
        corrected_column = clamp_glider_anchor(column, self.width)

        for cell_row, cell_column, alive in window_cells(GLIDER, corrected_row, corrected_column):
            self._cells.set(self.get_index(cell_row, cell_column), alive)

    def insert_pulsar(self, row: int, column: int):
        """
        Stamp a solid 3x3 block around (row, column).

        The anchor is kept well away from the edges (see
        clamp_pulsar_anchor). Only the nine block cells are written.
        """
        corrected_row = clamp_pulsar_anchor(row, self.height)
        corrected_column = clamp_pulsar_anchor(column, self.width)

        for cell_row, cell_column, alive in window_cells(PULSAR, corrected_row, corrected_column):
            self._cells.set(self.get_index(cell_row, cell_column), alive)

    # ------------------------------------------------------------------
    # Transition rule
    # ------------------------------------------------------------------

    def live_neighbor_count(self, row: int, column: int) -> int:
        """
        Count alive cells among the 8 toroidal neighbors of (row, column).

        Offsets are written as extent - 1, 0, 1 so the modulo never sees a
        negative operand.
        """
        count = 0
        for delta_row in (self.height - 1, 0, 1):
            for delta_col in (self.width - 1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue

                neighbor_row = (row + delta_row) % self.height
                neighbor_col = (column + delta_col) % self.width
                count += self._cells[self.get_index(neighbor_row, neighbor_col)]
        return count

    def tick(self):
        """
        Advance the universe by one generation.

        Generation N+1 is computed entirely from generation N into a fresh
        bit set, which then replaces the current one. No cell ever sees a
        neighbor's N+1 state, so the result does not depend on visiting
        order.
        """
        start_time = time.perf_counter()

        vectorized = self._vectorized
        if vectorized is None:
            vectorized = constants.USE_VECTORIZED_TICK

        # A side of 1 makes a cell its own neighbor; only the loop counts that
        # the same way as live_neighbor_count()
        if vectorized and self.width > 1 and self.height > 1:
            next_cells = self._next_generation_vectorized()
        else:
            next_cells = self._next_generation_reference()

        self._cells = next_cells
        self.tick_count += 1

        # Record timing
        elapsed = time.perf_counter() - start_time
        self._record_tick_time(elapsed)

        # Debug invariant check (zero perf impact when env var not set)
        if os.getenv('LIFEGRID_DEBUG_INVARIANTS') == '1':
            assert len(self._cells) == self.width * self.height, \
                f"len(cells) ({len(self._cells)}) != width*height ({self.width * self.height})"

    def _next_generation_reference(self) -> FixedBitSet:
        """Per-cell loop, one live_neighbor_count() per cell"""
        next_cells = self._cells.copy()

        for row in range(self.height):
            for column in range(self.width):
                index = self.get_index(row, column)
                cell = self._cells[index]
                live_neighbors = self.live_neighbor_count(row, column)
                next_cells.set(index, next_cell_state(cell, live_neighbors))

        return next_cells

    def _next_generation_vectorized(self) -> FixedBitSet:
        """Whole-grid neighbor sums via a wrapping convolution"""
        alive = self.as_array()
        neighbors = convolve(alive.astype(np.uint8), NEIGHBOR_KERNEL, mode='wrap')

        survive = alive & ((neighbors == 2) | (neighbors == 3))
        born = ~alive & (neighbors == 3)

        return FixedBitSet.from_bools(survive | born)

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def get_tick_stats(self) -> dict:
        """
        Get current tick timing statistics.

        Returns:
            Dict with tick_count, avg_tick_time_ms, last_tick_time_ms
        """
        if not self._tick_times:
            return {
                'tick_count': self.tick_count,
                'avg_tick_time_ms': 0.0,
                'last_tick_time_ms': 0.0
            }

        avg_time = self._tick_time_sum / len(self._tick_times)
        last_time = self._tick_times[-1]

        return {
            'tick_count': self.tick_count,
            'avg_tick_time_ms': avg_time * 1000.0,
            'last_tick_time_ms': last_time * 1000.0
        }

    def _record_tick_time(self, elapsed: float):
        self._tick_times.append(elapsed)
        self._tick_time_sum += elapsed

        # Maintain rolling window
        if len(self._tick_times) > self._tick_time_window:
            removed = self._tick_times.pop(0)
            self._tick_time_sum -= removed

    def get_snapshot(self) -> dict:
        """
        Get complete universe state snapshot.

        Returns:
            Dict with tick_count, dimensions, population, packed words, timing
        """
        return {
            'tick_count': self.tick_count,
            'width': self.width,
            'height': self.height,
            'population': self.population(),
            'words': self._cells.as_slice().tolist(),
            'timing': self.get_tick_stats()
        }

    def print_tick_summary(self):
        """Print tick summary to console (lightweight monitoring)"""
        stats = self.get_tick_stats()
        print(f"Tick {stats['tick_count']:5d} | "
              f"Avg: {stats['avg_tick_time_ms']:6.3f} ms | "
              f"Last: {stats['last_tick_time_ms']:6.3f} ms | "
              f"Alive: {self.population()}/{self.width * self.height}")
