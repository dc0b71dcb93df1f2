"""Shared constants for the kumiko domain.

All physical values are in millimeters unless noted otherwise.
"""

# Parametric tolerance used by collinear overlap detection and endpoint tests.
EPSILON = 0.01

# Notches closer than this to a (possibly trimmed) strip end are dropped.
EDGE_NOTCH_EPS = 0.01

# Strips at or below this length are degenerate and discarded.
MIN_STRIP_LENGTH_MM = 1.0

# Tolerance for merging vertical export segments.
SEGMENT_MERGE_EPS = 1e-3

# Erase operations keep remnants only beyond these parametric bounds.
ERASE_T_MIN = 0.001
ERASE_T_MAX = 0.999

# Cutting tool and stock defaults
DEFAULT_BIT_SIZE = 6.35  # 1/4" router bit
DEFAULT_CUT_DEPTH = 19.0
DEFAULT_HALF_CUT_DEPTH = 9.5
DEFAULT_GRID_CELL_SIZE = 10.0
DEFAULT_STOCK_LENGTH = 600.0

# Height of one layout row (one strip of stock) in the layout editor.
GRID_CELL_HEIGHT = 20.0

INCH_TO_MM = 25.4
MM_TO_INCH = 1 / INCH_TO_MM

DEFAULT_GROUP_ID = "group1"
DEFAULT_GROUP_NAME = "Default Group"
