"""Path generator — SVG path data (``d`` attribute) for edges between node centres.

Edges leave and enter nodes through the midpoint of the side facing the
other node. The arrival point is pulled back by ``ARROW_CLEARANCE`` so an
arrowhead marker drawn at the end of the path touches the box instead of
overlapping it.
"""

from __future__ import annotations

import math
from enum import Enum

from pattern_graph.layout.constants import (
    ARROW_CLEARANCE,
    CONTROL_OFFSET_RATIO,
    MAX_CONTROL_OFFSET,
    MIN_CONTROL_OFFSET,
    NODE_HEIGHT,
    NODE_WIDTH,
)
from pattern_graph.types import Position


class NodeSide(Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


# Outward unit normal of each side (SVG y grows downward).
_NORMALS: dict[NodeSide, tuple[int, int]] = {
    NodeSide.TOP: (0, -1),
    NodeSide.RIGHT: (1, 0),
    NodeSide.BOTTOM: (0, 1),
    NodeSide.LEFT: (-1, 0),
}


def _num(value: float) -> str:
    """Format a coordinate: at most 2 decimals, no trailing ``.0``."""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded}"


def _pt(p: Position) -> str:
    return f"{_num(p.x)} {_num(p.y)}"


# ─── Geometry Helpers ────────────────────────────────────────────────────────


def closest_side(node: Position, target: Position) -> NodeSide:
    """Side of ``node`` facing ``target``; ties go to the vertical sides."""
    dx = target.x - node.x
    dy = target.y - node.y
    if abs(dx) > abs(dy):
        return NodeSide.RIGHT if dx > 0 else NodeSide.LEFT
    return NodeSide.BOTTOM if dy > 0 else NodeSide.TOP


def connection_point(node: Position, side: NodeSide) -> Position:
    """Midpoint of one side of the node box centred on ``node``."""
    dx, dy = _NORMALS[side]
    return Position(node.x + dx * NODE_WIDTH / 2, node.y + dy * NODE_HEIGHT / 2)


def _offset(point: Position, side: NodeSide, distance: float) -> Position:
    dx, dy = _NORMALS[side]
    return Position(point.x + dx * distance, point.y + dy * distance)


def _control_offset(start: Position, end: Position) -> float:
    distance = math.hypot(end.x - start.x, end.y - start.y)
    return min(max(distance * CONTROL_OFFSET_RATIO, MIN_CONTROL_OFFSET), MAX_CONTROL_OFFSET)


def _endpoints(start: Position, end: Position) -> tuple[NodeSide, Position, NodeSide, Position]:
    """Exit side/point on ``start`` and arrow-adjusted entry side/point on ``end``."""
    from_side = closest_side(start, end)
    to_side = closest_side(end, start)
    exit_point = connection_point(start, from_side)
    entry_point = _offset(connection_point(end, to_side), to_side, ARROW_CLEARANCE)
    return from_side, exit_point, to_side, entry_point


# ─── Public Path Builders ────────────────────────────────────────────────────


def path_for(start: Position, end: Position) -> str:
    """Single cubic curve between two nodes.

    Control points sit on each side's outward normal, so the curve leaves
    and enters perpendicular to the node boundaries. The control distance
    is 30% of the chord, clamped to [30, 100] px.
    """
    from_side, exit_point, to_side, entry_point = _endpoints(start, end)
    offset = _control_offset(exit_point, entry_point)
    cp1 = _offset(exit_point, from_side, offset)
    cp2 = _offset(entry_point, to_side, offset)
    return f"M {_pt(exit_point)} C {_pt(cp1)}, {_pt(cp2)}, {_pt(entry_point)}"


def path_for_skip_level(
    start: Position,
    end: Position,
    channel_y: float,
    channel_start_x: float | None = None,
    channel_end_x: float | None = None,
) -> str:
    """Three-segment path routed through a channel at ``channel_y``.

    Segments:
      1. Curve from the exit point to the channel.
      2. Straight line along the channel.
      3. Curve from the channel to the arrow-adjusted entry point.

    When channel bounds are not given, the channel starts a quarter of the
    way from the exit point and ends a quarter of the way before the entry.
    """
    _, exit_point, _, entry_point = _endpoints(start, end)
    mid_x = (exit_point.x + entry_point.x) / 2

    seg1_end_x = channel_start_x if channel_start_x is not None else exit_point.x + (mid_x - exit_point.x) * 0.5
    seg2_end_x = channel_end_x if channel_end_x is not None else entry_point.x - (entry_point.x - mid_x) * 0.5

    cp1 = Position(exit_point.x + (seg1_end_x - exit_point.x) * 0.6, exit_point.y)
    cp2 = Position(seg1_end_x - (seg1_end_x - exit_point.x) * 0.4, channel_y)
    cp3 = Position(seg2_end_x + (entry_point.x - seg2_end_x) * 0.4, channel_y)
    cp4 = Position(entry_point.x - (entry_point.x - seg2_end_x) * 0.6, entry_point.y)

    channel_in = Position(seg1_end_x, channel_y)
    channel_out = Position(seg2_end_x, channel_y)

    return (
        f"M {_pt(exit_point)} "
        f"C {_pt(cp1)}, {_pt(cp2)}, {_pt(channel_in)} "
        f"L {_pt(channel_out)} "
        f"C {_pt(cp3)}, {_pt(cp4)}, {_pt(entry_point)}"
    )


def curved_path(start: Position, end: Position) -> str:
    """Horizontal-first quadratic curve from the right of ``start`` to the left of ``end``.

    Used by the timeline, where edges run left to right between columns.
    """
    exit_point = connection_point(start, NodeSide.RIGHT)
    entry_point = connection_point(end, NodeSide.LEFT)
    control = Position(exit_point.x + (entry_point.x - exit_point.x) * 0.5, exit_point.y)
    return f"M {_pt(exit_point)} Q {_pt(control)}, {_pt(entry_point)}"
