"""Collision avoidance for skip-level edges in the timeline layout.

A skip-level edge connects two patterns of the same type whose depths
differ by more than one. Drawn straight, it would cut through the patterns
stacked in the columns it skips over. This pass pushes those intermediate
patterns down to clear a horizontal corridor ("channel") and records where
each edge should travel.

Routing priority:
  Each edge gets a slot index ``max(0, SLOT_LEVELS - span)``. Long edges
  get low indices and route high in the cleared space; short edges get
  high indices and route below them. A crossed node is moved down by
  ``(slot + 1) * EDGE_VERTICAL_SPACING`` for the highest slot crossing it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace

from pattern_graph.layout.constants import (
    CHANNEL_INSET,
    EDGE_VERTICAL_SPACING,
    HORIZONTAL_SPACING,
    LEFT_MARGIN,
    NODE_HEIGHT,
    SLOT_LEVELS,
)
from pattern_graph.types import CollisionResult, Pattern, PatternType, Position, SkipLevelEdge

logger = logging.getLogger(__name__)


@dataclass
class _Channel:
    """Routing corridor for one skip-level edge."""

    node_ids: list[int] = field(default_factory=list)
    y: float = 0.0
    start_x: float = 0.0
    end_x: float = 0.0


def apply_collision_avoidance(
    patterns: Sequence[Pattern],
    depths: Mapping[int, int],
    positions: Mapping[int, Position],
) -> CollisionResult:
    """Shift intermediate nodes out of the way of skip-level edges.

    Returns a new position map; ``positions`` is not modified. Patterns
    without a position are skipped.
    """
    pattern_map: dict[int, Pattern] = {p.id: p for p in patterns}
    adjusted: dict[int, Position] = dict(positions)

    skip_edges = find_skip_level_edges(patterns, depths, positions)

    node_max_slot: dict[int, int] = {}
    channels: dict[tuple[int, int], _Channel] = {}

    for edge in skip_edges:
        crossed = _crossed_nodes(edge, pattern_map, patterns, depths, positions)
        if not crossed:
            continue

        slot = slot_index(edge.depth_span)
        for node_id in crossed:
            node_max_slot[node_id] = max(node_max_slot.get(node_id, 0), slot)

        channels[(edge.from_id, edge.to_id)] = _route_channel(edge, crossed, positions)

    required = {node_id: (slot + 1) * EDGE_VERTICAL_SPACING for node_id, slot in node_max_slot.items()}
    shifts, max_shift_per_type = _propagate_shifts(patterns, depths, positions, required)

    for node_id, shift in shifts.items():
        if shift > 0:
            adjusted[node_id] = replace(adjusted[node_id], y=adjusted[node_id].y + shift)

    routed: list[SkipLevelEdge] = []
    for edge in skip_edges:
        channel = channels.get((edge.from_id, edge.to_id))
        if channel is None:
            routed.append(edge)
            continue
        routed.append(
            replace(
                edge,
                intermediate_node_ids=tuple(channel.node_ids),
                channel_y=channel.y,
                channel_start_x=channel.start_x,
                channel_end_x=channel.end_x,
            )
        )

    logger.debug(
        "Collision avoidance: %d skip-level edges, %d nodes shifted",
        len(skip_edges),
        sum(1 for s in shifts.values() if s > 0),
    )

    return CollisionResult(positions=adjusted, skip_level_edges=routed, max_shift_per_type=max_shift_per_type)


def slot_index(depth_span: int) -> int:
    """Routing slot for an edge spanning ``depth_span`` levels (0 = topmost)."""
    return max(0, SLOT_LEVELS - depth_span)


def find_skip_level_edges(
    patterns: Sequence[Pattern],
    depths: Mapping[int, int],
    positions: Mapping[int, Position],
) -> list[SkipLevelEdge]:
    """Find every same-type edge spanning more than one depth level.

    Both endpoints must be positioned. Returned edges carry no channel yet.
    """
    pattern_map: dict[int, Pattern] = {p.id: p for p in patterns}
    edges: list[SkipLevelEdge] = []

    for pattern in patterns:
        if pattern.id not in positions:
            continue
        to_depth = depths.get(pattern.id, 0)

        for prereq_id in dict.fromkeys(pattern.prerequisites):
            prereq = pattern_map.get(prereq_id)
            if prereq is None or prereq_id not in positions:
                continue
            if prereq.type != pattern.type:
                continue

            from_depth = depths.get(prereq_id, 0)
            if to_depth - from_depth <= 1:
                continue

            edges.append(
                SkipLevelEdge(
                    from_id=prereq_id,
                    to_id=pattern.id,
                    from_depth=from_depth,
                    to_depth=to_depth,
                )
            )

    return edges


def _crossed_nodes(
    edge: SkipLevelEdge,
    pattern_map: Mapping[int, Pattern],
    patterns: Sequence[Pattern],
    depths: Mapping[int, int],
    positions: Mapping[int, Position],
) -> list[int]:
    """Ids of same-lane patterns at intermediate depths in the edge's vertical span."""
    lane = pattern_map[edge.from_id].type
    from_y = positions[edge.from_id].y
    to_y = positions[edge.to_id].y
    span_top, span_bottom = min(from_y, to_y), max(from_y, to_y)

    crossed: list[int] = []
    for candidate in patterns:
        if candidate.type != lane:
            continue
        depth = depths.get(candidate.id, 0)
        if not edge.from_depth < depth < edge.to_depth:
            continue
        pos = positions.get(candidate.id)
        if pos is None:
            continue

        node_top = pos.y - NODE_HEIGHT / 2
        node_bottom = pos.y + NODE_HEIGHT / 2
        if span_bottom >= node_top and span_top <= node_bottom:
            crossed.append(candidate.id)

    return crossed


def _route_channel(
    edge: SkipLevelEdge,
    crossed: list[int],
    original: Mapping[int, Position],
) -> _Channel:
    """Place the edge's channel in the space cleared above the topmost crossed node.

    The crossed node used to occupy ``[y - NODE_HEIGHT/2, y + NODE_HEIGHT/2]``;
    after moving down, the band starting at its old top edge is free. Each
    slot below the top one sits a further ``EDGE_VERTICAL_SPACING`` down.
    """
    topmost = min(crossed, key=lambda node_id: original[node_id].y)
    cleared_top = original[topmost].y - NODE_HEIGHT / 2

    first_column = edge.from_depth + 1 - CHANNEL_INSET
    last_column = edge.to_depth - 1 + CHANNEL_INSET

    return _Channel(
        node_ids=list(crossed),
        y=cleared_top + slot_index(edge.depth_span) * EDGE_VERTICAL_SPACING,
        start_x=LEFT_MARGIN + first_column * HORIZONTAL_SPACING,
        end_x=LEFT_MARGIN + last_column * HORIZONTAL_SPACING,
    )


def _propagate_shifts(
    patterns: Sequence[Pattern],
    depths: Mapping[int, int],
    positions: Mapping[int, Position],
    required: Mapping[int, float],
) -> tuple[dict[int, float], dict[PatternType, float]]:
    """Spread required shifts down each (depth, type) stack.

    A node moves by the larger of its own requirement and the move of the
    node directly above it, so stacks keep their order and spacing.

    Returns (shift per node id, largest shift per pattern type).
    """
    stacks: dict[tuple[int, PatternType], list[int]] = {}
    for pattern in patterns:
        if pattern.id not in positions:
            continue
        key = (depths.get(pattern.id, 0), pattern.type)
        stacks.setdefault(key, []).append(pattern.id)

    shifts: dict[int, float] = {}
    max_shift_per_type: dict[PatternType, float] = {t: 0.0 for t in PatternType}

    for (_depth, lane), stack in stacks.items():
        stack.sort(key=lambda node_id: positions[node_id].y)
        previous = 0.0
        for node_id in stack:
            shift = max(required.get(node_id, 0.0), previous)
            shifts[node_id] = shift
            previous = shift
        max_shift_per_type[lane] = max(max_shift_per_type[lane], previous)

    return shifts, max_shift_per_type
