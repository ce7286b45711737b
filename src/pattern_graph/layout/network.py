"""Network layout — foundational patterns on an ellipse, descendants fanned outward.

Each foundational pattern (depth 0) claims one direction from the ellipse
centre. Its descendants are placed further out along that direction, one
ring per depth level, fanned across a small angle when several share a
depth. No overlap removal is done; fans of neighbouring foundations may
cross.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

import networkx as nx

from pattern_graph.graph import build_graph
from pattern_graph.layout.constants import (
    CONTENT_PADDING,
    DEPTH_SPACING,
    ELLIPSE_RADIUS_RATIO,
    FAN_SPREAD,
    MAX_COORDINATE,
    MAX_DISTANCE,
    MAX_ELLIPSE_RADIUS_X,
    MAX_ELLIPSE_RADIUS_Y,
)
from pattern_graph.layout.depth import compute_depths
from pattern_graph.types import Pattern, Position


def layout_network(patterns: Sequence[Pattern], width: float, height: float) -> dict[int, Position]:
    """Compute network positions for every pattern.

    Args:
        patterns: The pattern snapshot.
        width: Layout width; the ellipse is centred at ``width / 2``.
        height: Layout height; the ellipse is centred at ``height / 2``.
    """
    if not patterns:
        return {}

    depths = compute_depths(patterns)
    graph = build_graph(patterns)
    order = {p.id: i for i, p in enumerate(patterns)}

    center = Position(width / 2, height / 2)
    radius_x = min(width * ELLIPSE_RADIUS_RATIO, MAX_ELLIPSE_RADIUS_X)
    radius_y = min(height * ELLIPSE_RADIUS_RATIO, MAX_ELLIPSE_RADIUS_Y)

    foundational = [p for p in patterns if depths.get(p.id, 0) == 0]
    positions = place_on_ellipse([p.id for p in foundational], center, radius_x, radius_y)

    for index, pattern in enumerate(foundational):
        angle = 2 * math.pi * index / len(foundational)
        buckets = _descendants_by_depth(graph, pattern.id, depths, order)
        positions.update(fan_out(buckets, angle, positions[pattern.id]))

    # Patterns only reachable through a prerequisite cycle have no
    # foundational ancestor; park them on an inner ellipse.
    orphans = [p.id for p in patterns if p.id not in positions]
    positions.update(place_on_ellipse(orphans, center, radius_x / 2, radius_y / 2))

    return {node_id: clamp_position(pos) for node_id, pos in positions.items()}


def place_on_ellipse(
    node_ids: Sequence[int],
    center: Position,
    radius_x: float,
    radius_y: float,
) -> dict[int, Position]:
    """Spread nodes evenly around an ellipse, the i-th at angle 2πi/n."""
    positions: dict[int, Position] = {}
    count = len(node_ids)
    for index, node_id in enumerate(node_ids):
        angle = 2 * math.pi * index / count
        positions[node_id] = Position(
            x=center.x + radius_x * math.cos(angle),
            y=center.y + radius_y * math.sin(angle),
        )
    return positions


def _descendants_by_depth(
    graph: nx.DiGraph,
    root: int,
    depths: Mapping[int, int],
    order: Mapping[int, int],
) -> dict[int, list[int]]:
    """Transitive descendants of ``root`` bucketed by depth, each bucket in input order."""
    buckets: dict[int, list[int]] = {}
    for node_id in sorted(nx.descendants(graph, root), key=order.__getitem__):
        buckets.setdefault(depths.get(node_id, 0), []).append(node_id)
    return dict(sorted(buckets.items()))


def fan_out(
    buckets: Mapping[int, Sequence[int]],
    angle: float,
    origin: Position,
) -> dict[int, Position]:
    """Place each depth bucket along ``angle`` at ``depth * DEPTH_SPACING`` from ``origin``.

    Several nodes at one depth are spread evenly over ``FAN_SPREAD``
    radians centred on ``angle``.
    """
    positions: dict[int, Position] = {}
    for depth, node_ids in buckets.items():
        distance = min(depth * DEPTH_SPACING, MAX_DISTANCE)
        count = len(node_ids)
        step = FAN_SPREAD / (count - 1) if count > 1 else 0.0

        for index, node_id in enumerate(node_ids):
            final_angle = angle + (index - (count - 1) / 2) * step
            positions[node_id] = Position(
                x=origin.x + math.cos(final_angle) * distance,
                y=origin.y + math.sin(final_angle) * distance,
            )
    return positions


def clamp_position(pos: Position) -> Position:
    """Keep a position within ±MAX_COORDINATE on both axes."""
    return Position(
        x=max(-MAX_COORDINATE, min(MAX_COORDINATE, pos.x)),
        y=max(-MAX_COORDINATE, min(MAX_COORDINATE, pos.y)),
    )


def content_bounds(positions: Mapping[int, Position]) -> tuple[float, float, float, float]:
    """Bounding box of all positions as (min_x, max_x, min_y, max_y)."""
    xs = [p.x for p in positions.values()]
    ys = [p.y for p in positions.values()]
    return (min(xs), max(xs), min(ys), max(ys))


def canvas_size(
    positions: Mapping[int, Position],
    initial_width: float,
    initial_height: float,
) -> tuple[float, float]:
    """Canvas large enough to hold every position plus padding.

    Never smaller than the initial size; an empty layout keeps it as is.
    """
    if not positions:
        return initial_width, initial_height

    min_x, max_x, min_y, max_y = content_bounds(positions)
    return (
        max(initial_width, max_x - min_x + CONTENT_PADDING),
        max(initial_height, max_y - min_y + CONTENT_PADDING),
    )
