"""Geometry constants used across the layout and path modules.

All values are in pixels unless stated otherwise.
"""

import math

# ─── Nodes ───────────────────────────────────────────────────────────────────

NODE_WIDTH: float = 100.0
NODE_HEIGHT: float = 60.0

# ─── Timeline ────────────────────────────────────────────────────────────────

VERTICAL_STACK_SPACING: float = 70.0
"""Distance between centres of nodes stacked at the same depth (node + 10px)."""

HORIZONTAL_SPACING: float = 180.0
"""Distance between depth columns."""

LEFT_MARGIN: float = 120.0
"""Room left of the first column for swimlane labels."""

START_OFFSET: float = 40.0
"""Distance from a swimlane's top edge to the centre of its first row."""

EDGE_VERTICAL_SPACING: float = 70.0
"""Height of one routing slot cleared for a skip-level edge."""

SLOT_LEVELS: int = 3
"""Depth span at which an edge gets the top routing slot (index 0)."""

CHANNEL_INSET: float = 0.25
"""Fraction of a column the channel ends are pulled in from column centres."""

# ─── Network ─────────────────────────────────────────────────────────────────

ELLIPSE_RADIUS_RATIO: float = 0.25
MAX_ELLIPSE_RADIUS_X: float = 400.0
MAX_ELLIPSE_RADIUS_Y: float = 300.0
DEPTH_SPACING: float = 200.0
MAX_DISTANCE: float = 2000.0
FAN_SPREAD: float = math.pi / 6
MAX_COORDINATE: float = 3000.0
CONTENT_PADDING: float = 300.0
INITIAL_WIDTH_MULTIPLIER: int = 3
INITIAL_HEIGHT_MULTIPLIER: int = 2

# ─── Paths ───────────────────────────────────────────────────────────────────

ARROW_CLEARANCE: float = 20.0
"""Gap left between a path's end and the target box for the arrowhead."""

CONTROL_OFFSET_RATIO: float = 0.3
MIN_CONTROL_OFFSET: float = 30.0
MAX_CONTROL_OFFSET: float = 100.0
