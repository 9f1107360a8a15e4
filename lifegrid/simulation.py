"""
Headless host driver for a Universe.

Plays the role of a rendering surface: advances the universe a number of
ticks per animation frame, handles play/pause, maps clicks (with modifier
keys) to toggle / glider / pulsar edits, and renders the packed cells
without copying them out of the universe.
"""

import math
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .constants import (
    ALIVE_CHAR,
    CELL_SIZE_PX,
    DEAD_CHAR,
    DEFAULT_TICKS_PER_FRAME,
    TICK_SUMMARY_INTERVAL,
)
from .profiler import FrameProfiler
from .universe import Universe


class ClickModifier(str, Enum):
    """Modifier key held while clicking a cell"""
    NONE = "none"
    META = "meta"    # insert glider
    SHIFT = "shift"  # insert pulsar


def parse_ticks_per_frame(value) -> int:
    """Coerce slider input to a tick count; garbage falls back to the default"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TICKS_PER_FRAME

    if math.isnan(number) or math.isinf(number) or number < 0:
        return DEFAULT_TICKS_PER_FRAME
    return int(number)


def ticks_per_frame_label(value) -> Optional[str]:
    """Slider label text, or None when the value is not a number"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None

    count = int(number)
    prefix = "1 tick" if count == 1 else f"{count} ticks"
    return f"{prefix} per frame"


def bit_is_set(index: int, buffer: np.ndarray) -> bool:
    """Test cell `index` in a little-endian byte view of packed cells"""
    byte = index // 8
    mask = 1 << (index % 8)
    return (int(buffer[byte]) & mask) == mask


class Simulation:
    """
    Drives one universe frame by frame.

    A paused simulation ignores frame(); play() resumes it. Edits made
    through the simulation leave the play state alone, while randomize and
    kill pause first.
    """

    def __init__(self, universe: Optional[Universe] = None):
        self.universe: Universe = universe if universe is not None else Universe.new()
        self.profiler = FrameProfiler()
        self.ticks_per_frame: int = DEFAULT_TICKS_PER_FRAME
        self.frame_count: int = 0
        self._playing: bool = False

    @property
    def universe_width(self) -> int:
        return self.universe.width

    @property
    def universe_height(self) -> int:
        return self.universe.height

    @property
    def is_paused(self) -> bool:
        return not self._playing

    # ------------------------------------------------------------------
    # Play state
    # ------------------------------------------------------------------

    def play(self, ticks_per_frame=DEFAULT_TICKS_PER_FRAME):
        self.ticks_per_frame = parse_ticks_per_frame(ticks_per_frame)
        if not self._playing:
            self.profiler.reset()
        self._playing = True

    def pause(self):
        self._playing = False

    def toggle_play(self, ticks_per_frame=DEFAULT_TICKS_PER_FRAME):
        if self.is_paused:
            self.play(ticks_per_frame)
        else:
            self.pause()

    def frame(self) -> bool:
        """
        Run one animation frame.

        Returns:
            True if the universe advanced, False when paused
        """
        if self.is_paused:
            return False

        for _ in range(self.ticks_per_frame):
            self.universe.tick()

        self.profiler.record_frame()
        self.frame_count += 1
        return True

    def run(self, frames: int, summary_every: int = TICK_SUMMARY_INTERVAL) -> int:
        """
        Play for up to `frames` frames, printing a summary every
        `summary_every` frames (0 disables).

        Returns:
            Number of frames actually run
        """
        ran = 0
        for _ in range(frames):
            if not self.frame():
                break
            ran += 1
            if summary_every and self.frame_count % summary_every == 0:
                self.print_frame_summary()
        return ran

    # ------------------------------------------------------------------
    # Buttons
    # ------------------------------------------------------------------

    def pause_and_randomize(self):
        self.pause()
        self.universe.randomize_cells()
        self.universe.tick()

    def kill_all_cells(self):
        self.pause()
        self.universe.kill_all_cells()

    # ------------------------------------------------------------------
    # Clicks
    # ------------------------------------------------------------------

    def cell_at_pixel(self, x: float, y: float) -> Tuple[int, int]:
        """Map canvas pixel coordinates to (row, column), clamped to the grid"""
        pitch = CELL_SIZE_PX + 1
        row = min(int(y // pitch), self.universe_height - 1)
        column = min(int(x // pitch), self.universe_width - 1)
        return row, column

    def click(self, row: int, column: int, modifier: ClickModifier = ClickModifier.NONE):
        """
        Edit the cell under a click.

        META stamps a glider, SHIFT a pulsar, and a plain click toggles the
        cell. Coordinates past the last row/column land on it.
        """
        row = min(row, self.universe_height - 1)
        column = min(column, self.universe_width - 1)
        modifier = ClickModifier(modifier)

        if modifier == ClickModifier.META:
            self.universe.insert_glider(row, column)
        elif modifier == ClickModifier.SHIFT:
            self.universe.insert_pulsar(row, column)
        else:
            self.universe.toggle_cell(row, column)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render_text(self, alive: str = ALIVE_CHAR, dead: str = DEAD_CHAR) -> str:
        """Draw the grid straight from the universe's packed cell words"""
        cells = self.universe.cells().view(np.uint8)
        width = self.universe_width

        lines = []
        for row in range(self.universe_height):
            lines.append("".join(
                alive if bit_is_set(row * width + column, cells) else dead
                for column in range(width)
            ))
        return "\n".join(lines)

    def print_frame_summary(self):
        """Print frame summary to console (lightweight monitoring)"""
        fps = self.profiler.get_stats()
        ticks = self.universe.get_tick_stats()
        print(f"Frame {self.frame_count:5d} | "
              f"FPS: {fps['latest']:7.1f} (avg {fps['mean']:7.1f}) | "
              f"Tick avg: {ticks['avg_tick_time_ms']:6.3f} ms | "
              f"Alive: {self.universe.population()}")
