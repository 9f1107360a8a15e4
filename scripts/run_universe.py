"""
Run a universe headlessly and print text frames.

Loads a YAML universe config (or the default 64x64 coin-flip universe),
plays it for a number of frames and prints the grid plus timing summaries.

Usage:
    python scripts/run_universe.py --config data/universes/gliders.yaml --frames 40
"""

import argparse
import logging
import sys
from pathlib import Path

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lifegrid.loader import DataLoadError, load_universe_config
from lifegrid.patterns import PatternError
from lifegrid.simulation import Simulation
from lifegrid.universe import Universe


def build_universe(config_path):
    if config_path is None:
        return Universe.new()

    config = load_universe_config(Path(config_path))
    print(f"[OK] Loaded {config_path}: {config.width}x{config.height}"
          + (f" ({config.description})" if config.description else ""))
    return Universe.from_config(config)


def main():
    parser = argparse.ArgumentParser(description="Run a Game of Life universe headlessly")
    parser.add_argument('--config', type=str, default=None, help='universe YAML file')
    parser.add_argument('--frames', type=int, default=20)
    parser.add_argument('--ticks-per-frame', type=str, default='1')
    parser.add_argument('--show-every', type=int, default=10,
                        help='print the grid every N frames (0 = only after the last frame)')
    parser.add_argument('--summary-every', type=int, default=10)
    parser.add_argument('--verbose', action='store_true', help='enable debug logging')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        universe = build_universe(args.config)
    except (DataLoadError, PatternError) as e:
        print(f"[FAIL] {e}")
        sys.exit(1)

    simulation = Simulation(universe)
    simulation.play(args.ticks_per_frame)
    print(f"Playing {args.frames} frames, {simulation.ticks_per_frame} tick(s) per frame")

    # Run in chunks of show_every frames, drawing the grid after each chunk
    chunk = args.show_every or args.frames
    remaining = args.frames
    while remaining > 0:
        ran = simulation.run(min(chunk, remaining), summary_every=args.summary_every)
        if ran == 0:
            break
        remaining -= ran
        print(simulation.render_text())
        print()

    print()
    print(simulation.profiler.format_stats())
    universe.print_tick_summary()


if __name__ == '__main__':
    main()
