"""
Multi-size tick performance validation.

Runs the reference loop and the vectorized tick at several grid sizes and
reports median/p90. The reference loop is skipped above 128x128.
"""

# Pin threading for stable measurement
import os
os.environ.update({
    'OPENBLAS_NUM_THREADS': '1',
    'MKL_NUM_THREADS': '1',
    'NUMEXPR_NUM_THREADS': '1',
    'OMP_NUM_THREADS': '1'
})

import gc
import sys
import time
from pathlib import Path

import numpy as np

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lifegrid.rng import make_random_source
from lifegrid.universe import Universe

REFERENCE_MAX_SIDE = 128


def run_tick_perf_test(side: int, vectorized: bool, runs: int = 7) -> dict:
    """
    Run tick performance test on a side x side universe.

    Args:
        side: Grid width and height
        vectorized: Tick implementation under test
        runs: Number of timed ticks (default 7 for stable median)

    Returns:
        Dict with p50, p90, min, max and final population
    """
    universe = Universe(width=side, height=side,
                        random=make_random_source(42), vectorized=vectorized)

    # Warmup
    universe.tick()

    # Measure (GC disabled for stable timing)
    gc.collect()
    gc.disable()

    times_ns = []
    try:
        for _ in range(runs):
            start = time.perf_counter_ns()
            universe.tick()
            elapsed_ns = time.perf_counter_ns() - start
            times_ns.append(elapsed_ns)
    finally:
        gc.enable()

    # Statistics
    times_ms = np.array(times_ns) / 1_000_000

    return {
        'side': side,
        'vectorized': vectorized,
        'runs': runs,
        'p50_ms': np.percentile(times_ms, 50),
        'p90_ms': np.percentile(times_ms, 90),
        'min_ms': np.min(times_ms),
        'max_ms': np.max(times_ms),
        'population': universe.population()
    }


def main():
    """Run multi-size tick performance validation."""
    print("=" * 80)
    print("Tick Multi-Size Performance Validation")
    print("=" * 80)
    print()

    test_sizes = [32, 64, 128, 256, 512]

    results = []

    for side in test_sizes:
        print(f"[{side} x {side}]")

        for vectorized in (False, True):
            if not vectorized and side > REFERENCE_MAX_SIDE:
                print("  reference: (skipped, too slow)")
                continue

            result = run_tick_perf_test(side, vectorized)
            label = "vectorized" if vectorized else "reference"
            print(f"  {label}: p50 {result['p50_ms']:.3f}ms, p90 {result['p90_ms']:.3f}ms "
                  f"(min {result['min_ms']:.3f}ms, max {result['max_ms']:.3f}ms)")
            results.append(result)

        # A 64x64 frame at 60 fps leaves ~16ms for everything
        vectorized_result = results[-1]
        if side == 64 and vectorized_result['p50_ms'] >= 16.0:
            print(f"  WARNING: p50 {vectorized_result['p50_ms']:.3f}ms exceeds a 60 fps frame budget!")
        print()

    # Summary table
    print("=" * 80)
    print("Summary Table")
    print("=" * 80)
    print()
    print("| Side | Path       | p50 (ms) | p90 (ms) | Alive |")
    print("|------|------------|----------|----------|-------|")
    for r in results:
        path = "vectorized" if r['vectorized'] else "reference"
        print(f"| {r['side']:4d} | {path:10s} | {r['p50_ms']:8.3f} | {r['p90_ms']:8.3f} | {r['population']:5d} |")

    print()
    print("=" * 80)


if __name__ == '__main__':
    main()
