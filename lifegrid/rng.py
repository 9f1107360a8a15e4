"""
Random source utilities for seeding the universe.

The grid only needs "a float in [0, 1)" per cell, so any zero-argument
callable works as a source. The default source is the random() method of a
numpy.random.Generator(PCG64); seeds can be derived from hierarchical
components with SHA256 for reproducible runs.
"""

import hashlib
import numpy as np
from typing import Any, Callable, Optional

from .constants import ALIVE_PROBABILITY

RandomSource = Callable[[], float]


def make_seed(*components: Any) -> int:
    """
    Generate deterministic 64-bit seed from hierarchical components.

    Uses SHA256 to hash components into stable seed value.

    Args:
        *components: Seed components (config seed, universe name, etc.)

    Returns:
        64-bit integer seed for numpy RNG

    Example:
        seed = make_seed(config.seed, "cells")
    """
    # Join all components with colon separator
    hash_input = ":".join(str(c) for c in components)

    # SHA256 hash and extract 64-bit integer
    hash_bytes = hashlib.sha256(hash_input.encode('utf-8')).digest()
    seed = int.from_bytes(hash_bytes[:8], byteorder='big')

    return seed


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """
    Build a uniform [0, 1) source backed by PCG64.

    Args:
        seed: Optional seed; None draws fresh OS entropy

    Returns:
        Zero-argument callable returning a float in [0, 1)
    """
    rng = np.random.Generator(np.random.PCG64(seed))
    return rng.random


def random_cell_states(size: int, random: RandomSource,
                       probability: float = ALIVE_PROBABILITY) -> np.ndarray:
    """
    Flip one independent coin per cell.

    Args:
        size: Number of cells
        random: Uniform [0, 1) source, called once per cell in index order
        probability: A cell is alive when random() < probability

    Returns:
        (size,) bool array of cell states
    """
    return np.fromiter(
        (random() < probability for _ in range(size)),
        dtype=bool,
        count=size
    )
