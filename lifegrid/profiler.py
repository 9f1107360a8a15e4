"""
Frames-per-second profiler for the host driver.

Converts the time between consecutive frames into an fps sample and keeps
the latest PROFILER_WINDOW samples for min/max/mean reporting.
"""

import math
import time
from collections import deque
from typing import Callable, Optional

from .constants import PROFILER_WINDOW


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (not to even)"""
    return int(math.floor(value + 0.5))


class FrameProfiler:
    """Rolling frames-per-second statistics"""

    def __init__(self, window: int = PROFILER_WINDOW, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            window: Number of fps samples kept
            clock: Monotonic clock in seconds (default time.perf_counter)
        """
        self._clock = clock or time.perf_counter
        self._frames = deque(maxlen=window)
        self._last_frame_time = self._clock()
        self.latest: float = 0.0

    def record_frame(self) -> float:
        """
        Record one rendered frame.

        Returns:
            Frames per second implied by the time since the previous frame
        """
        now = self._clock()
        delta = now - self._last_frame_time
        self._last_frame_time = now

        # Two frames inside one clock tick carry no rate information
        if delta <= 0.0:
            return self.latest

        self.latest = 1.0 / delta
        self._frames.append(self.latest)
        return self.latest

    def reset(self):
        self._frames.clear()
        self._last_frame_time = self._clock()
        self.latest = 0.0

    def get_stats(self) -> dict:
        """
        Returns:
            Dict with latest, mean, min, max fps and the sample count
        """
        if not self._frames:
            return {'latest': 0.0, 'mean': 0.0, 'min': 0.0, 'max': 0.0, 'samples': 0}

        return {
            'latest': self.latest,
            'mean': sum(self._frames) / len(self._frames),
            'min': min(self._frames),
            'max': max(self._frames),
            'samples': len(self._frames)
        }

    def format_stats(self) -> str:
        stats = self.get_stats()
        window = self._frames.maxlen
        return (f"Frames per Second:\n"
                f"  latest = {round_half_up(stats['latest'])}\n"
                f"  avg of last {window} = {round_half_up(stats['mean'])}\n"
                f"  min of last {window} = {round_half_up(stats['min'])}\n"
                f"  max of last {window} = {round_half_up(stats['max'])}")
