"""
Test the headless host driver.

Verifies:
- Play / pause / toggle and ticks-per-frame parsing
- Randomize and kill buttons pause the simulation
- Click modifiers map to toggle / glider / pulsar
- Text rendering reads the packed cells directly
- Frame profiler statistics
"""

import math
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from lifegrid.profiler import FrameProfiler, round_half_up
from lifegrid.simulation import (
    ClickModifier,
    Simulation,
    bit_is_set,
    parse_ticks_per_frame,
    ticks_per_frame_label,
)
from lifegrid.universe import Universe


def make_simulation(width=12, height=10):
    return Simulation(Universe(width=width, height=height, randomize=False))


def test_default_simulation_wraps_new_universe():
    simulation = Simulation()
    assert simulation.universe_width == 64
    assert simulation.universe_height == 64
    assert simulation.is_paused


def test_paused_frame_does_nothing():
    simulation = make_simulation()
    assert simulation.frame() is False
    assert simulation.universe.tick_count == 0


def test_play_advances_ticks_per_frame():
    simulation = make_simulation()
    simulation.play(3)

    assert not simulation.is_paused
    assert simulation.frame() is True
    assert simulation.frame() is True
    assert simulation.universe.tick_count == 6
    assert simulation.frame_count == 2


def test_toggle_play():
    simulation = make_simulation()
    simulation.toggle_play(2)
    assert not simulation.is_paused
    assert simulation.ticks_per_frame == 2

    simulation.toggle_play(2)
    assert simulation.is_paused


@pytest.mark.parametrize("value,expected", [
    (1, 1), ("4", 4), (2.0, 2), ("abc", 1), (None, 1), (math.nan, 1), (-3, 1), (0, 0),
])
def test_parse_ticks_per_frame(value, expected):
    assert parse_ticks_per_frame(value) == expected


def test_ticks_per_frame_label():
    assert ticks_per_frame_label(1) == "1 tick per frame"
    assert ticks_per_frame_label("5") == "5 ticks per frame"
    assert ticks_per_frame_label("x") is None


def test_run_stops_when_paused():
    simulation = make_simulation()
    assert simulation.run(5, summary_every=0) == 0

    simulation.play()
    assert simulation.run(5, summary_every=0) == 5
    assert simulation.universe.tick_count == 5


def test_run_prints_summaries(capsys):
    simulation = make_simulation()
    simulation.play()
    simulation.run(4, summary_every=2)

    out = capsys.readouterr().out
    assert out.count("Frame ") == 2
    assert "Alive: 0" in out


def test_pause_and_randomize():
    universe = Universe(width=8, height=8, random=lambda: 0.0, randomize=False)
    simulation = Simulation(universe)
    simulation.play()
    simulation.pause_and_randomize()

    assert simulation.is_paused
    assert universe.tick_count == 1
    # An all-alive torus dies of overpopulation in one tick
    assert universe.population() == 0


def test_kill_all_cells_pauses():
    simulation = Simulation(Universe(width=8, height=8, random=lambda: 0.0))
    simulation.play()
    simulation.kill_all_cells()

    assert simulation.is_paused
    assert simulation.universe.population() == 0


def test_click_modifiers():
    simulation = make_simulation(20, 20)

    simulation.click(2, 3)
    assert simulation.universe.is_alive(2, 3)
    simulation.click(2, 3, ClickModifier.NONE)
    assert not simulation.universe.is_alive(2, 3)

    simulation.click(10, 10, ClickModifier.META)
    assert simulation.universe.population() == 5

    simulation.click(0, 0, "shift")
    assert simulation.universe.population() == 5 + 9


def test_click_clamps_to_last_cell():
    simulation = make_simulation(12, 10)
    simulation.click(50, 50)
    assert simulation.universe.is_alive(9, 11)


def test_cell_at_pixel():
    simulation = make_simulation(12, 10)
    assert simulation.cell_at_pixel(0, 0) == (0, 0)
    assert simulation.cell_at_pixel(13, 7) == (1, 2)
    assert simulation.cell_at_pixel(10_000, 10_000) == (9, 11)


def test_render_text_matches_grid():
    simulation = make_simulation(5, 3)
    simulation.universe.set_cells([(0, 0), (1, 4), (2, 2)])

    assert simulation.render_text() == "#....\n....#\n..#.."
    assert simulation.render_text(alive="O", dead=" ") == "O    \n    O\n  O  "


def test_bit_is_set():
    buffer = bytes([0b0000_0101, 0b1000_0000])
    assert bit_is_set(0, buffer)
    assert not bit_is_set(1, buffer)
    assert bit_is_set(2, buffer)
    assert bit_is_set(15, buffer)


def test_frame_profiler_stats():
    times = iter([0.0, 1.0, 1.5, 1.75])
    profiler = FrameProfiler(window=2, clock=lambda: next(times))

    assert profiler.get_stats()['samples'] == 0
    assert profiler.record_frame() == 1.0
    profiler.record_frame()
    profiler.record_frame()

    stats = profiler.get_stats()
    # Only the latest two samples (2 fps, 4 fps) are kept
    assert stats['samples'] == 2
    assert stats['latest'] == 4.0
    assert stats['min'] == 2.0
    assert stats['max'] == 4.0
    assert stats['mean'] == 3.0
    assert "avg of last 2 = 3" in profiler.format_stats()


def test_frame_profiler_rounds_halves_up():
    times = iter([0.0, 2.0])
    profiler = FrameProfiler(clock=lambda: next(times))

    assert profiler.record_frame() == 0.5
    assert "latest = 1\n" in profiler.format_stats()


@pytest.mark.parametrize("value,expected", [
    (0.5, 1), (2.5, 3), (1.49, 1), (3.0, 3), (0.0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_frame_profiler_ignores_zero_delta():
    profiler = FrameProfiler(clock=lambda: 1.0)
    assert profiler.record_frame() == 0.0
    assert profiler.get_stats()['samples'] == 0
