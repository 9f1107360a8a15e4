"""
Data types mirroring YAML schema structures.

These dataclasses are populated by loader.py from YAML files.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum

from .constants import ALIVE_PROBABILITY, DEFAULT_HEIGHT, DEFAULT_WIDTH


class PatternKind(str, Enum):
    """Shapes that can be stamped into a universe"""
    GLIDER = "glider"
    PULSAR = "pulsar"
    CELL = "cell"  # single alive cell (set_cells)


@dataclass
class PatternPlacement:
    """A pattern stamped at (row, column) after seeding"""
    kind: PatternKind
    row: int
    column: int

    def __post_init__(self):
        self.kind = PatternKind(self.kind)


@dataclass
class UniverseConfig:
    """Complete universe definition"""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    seed: Optional[int] = None  # None = fresh OS entropy
    alive_probability: float = ALIVE_PROBABILITY
    randomize: bool = True  # False = start all dead
    vectorized: Optional[bool] = None  # None = constants.USE_VECTORIZED_TICK
    patterns: List[PatternPlacement] = field(default_factory=list)
    description: Optional[str] = None
