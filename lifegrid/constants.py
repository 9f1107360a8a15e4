"""
Central configuration constants for the life grid.

Defines default dimensions, seeding thresholds, pattern margins and
tuning switches used across multiple modules.
"""

# ============================================================================
# Universe Defaults
# ============================================================================

# Grid dimensions used by Universe.new()
DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 64

# A cell starts alive when random() < ALIVE_PROBABILITY
ALIVE_PROBABILITY = 0.5

# ============================================================================
# Storage Configuration
# ============================================================================

# Bits per storage word (numpy uint32 blocks, least significant bit first)
BLOCK_BITS = 32

# ============================================================================
# Tick Configuration
# ============================================================================

# Use the scipy convolution tick. Set to False to use the per-cell
# reference loop for A/B comparison.
USE_VECTORIZED_TICK = True


# ============================================================================
# Pattern Insertion
# ============================================================================

# Inward correction applied when an anchor sits on (or past) the grid edge
GLIDER_MARGIN = 1

# Pulsar anchors are corrected up to 6 cells from the near edge and kept
# PULSAR_FAR_MARGIN cells from the far edge
PULSAR_MARGIN = 6
PULSAR_FAR_MARGIN = 7

# Side length of the stamped pattern window
PATTERN_SIZE = 3

# ============================================================================
# Performance Configuration
# ============================================================================

# Tick timing window for rolling average
TICK_TIME_WINDOW = 100  # Number of ticks to average

# Default tick summary interval (print every N ticks)
TICK_SUMMARY_INTERVAL = 100

# Frame profiler keeps only the latest N frames-per-second samples
PROFILER_WINDOW = 100

# ============================================================================
# Host Driver
# ============================================================================

# Ticks advanced per animation frame when none (or garbage) is supplied
DEFAULT_TICKS_PER_FRAME = 1

# Characters used by Simulation.render_text()
ALIVE_CHAR = "#"
DEAD_CHAR = "."

# Canvas cell size in pixels; cells are separated by a 1px grid line
CELL_SIZE_PX = 5
