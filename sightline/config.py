"""
Configuration constants.

Centralizes the magic numbers and configuration values used throughout the codebase.
Organized by functional area for easy maintenance. Most of these can be overridden
from the command line (see ``sightline.main``).
"""

import math
import sys
from pathlib import Path

# =============================================================================
# GENERAL
# =============================================================================

PACKAGE_ROOT_PATH = Path(__file__).resolve().parent

# Test environment detection
IS_TEST_ENVIRONMENT = "pytest" in sys.modules

# =============================================================================
# MAP LOADING
# =============================================================================

# Character that marks an open (see-through) cell in map text. Every other
# character is an obstruction and is kept as that tile's glyph.
EMPTY_TILE_CHAR = " "

DEFAULT_MAP_PATH = PACKAGE_ROOT_PATH / "assets" / "maps" / "demo.txt"

# =============================================================================
# OBSERVER & VIEW
# =============================================================================

DEFAULT_FACING = math.pi / 2  # Looking up the screen
DEFAULT_SIGHT_RADIUS = 12.0
DEFAULT_FOV_WIDTH = math.pi / 2

# Adjustment steps applied by a single key press.
ROTATION_STEP = math.pi / 16
MOVE_STEP = 1.0  # Distance covered by one forward/backward move
RADIUS_STEP = 1.0
FOV_WIDTH_STEP = math.pi / 16

# Whether movement commands refuse to step onto opaque cells. Leaving the grid
# is always refused.
WALLS_BLOCK_MOVEMENT = True

# =============================================================================
# VISIBILITY EVALUATION
# =============================================================================

# Worker threads used by compute_visibility_field. 1 evaluates sequentially.
VISIBILITY_WORKERS = 1

# =============================================================================
# DISPLAY & RENDERING
# =============================================================================

WINDOW_TITLE = "Sightline"

# Rows reserved below the map for the status line.
STATUS_HEIGHT = 1

# Wide enough for the status line on narrow maps.
MIN_CONSOLE_WIDTH = 48

OBSERVER_GLYPH = "@"
FLOOR_GLYPH = "."
UNSEEN_GLYPH = "-"

VSYNC = True
