"""
lifegrid

Conway's Game of Life on a bit-packed toroidal grid. A Universe is driven
one tick at a time by a host (rendering surface, CLI, test) that reads the
packed cells back after every frame.

Architecture: Universe is the source of truth. Renderers are consumers.
"""

__version__ = "0.1.0"
