"""Timeline layout — depth columns crossed with one swimlane per pattern type.

Pipeline:
  1. Depth analysis (x = column per depth)
  2. Swimlane sizing (tallest same-depth stack per type)
  3. Initial placement (stacked rows inside each lane)
  4. Collision avoidance (clear channels for skip-level edges)
  5. Lane growth (re-stack lanes so shifted nodes stay inside their lane)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace

from pattern_graph.graph import group_by_type
from pattern_graph.layout.collision import apply_collision_avoidance
from pattern_graph.layout.constants import (
    HORIZONTAL_SPACING,
    LEFT_MARGIN,
    NODE_HEIGHT,
    START_OFFSET,
    VERTICAL_STACK_SPACING,
)
from pattern_graph.layout.depth import compute_depths
from pattern_graph.types import Pattern, PatternType, Position, SwimlaneInfo, TimelineLayout

logger = logging.getLogger(__name__)


def layout_timeline(
    patterns: Sequence[Pattern],
    available_width: float,
    base_height: float,
) -> TimelineLayout:
    """Lay patterns out on the timeline.

    Args:
        patterns: The pattern snapshot.
        available_width: Width offered by the viewport; the layout only
            grows beyond it.
        base_height: Height offered by the viewport; same rule.

    Returns:
        A ``TimelineLayout``. An empty snapshot yields no positions, no
        lanes and the caller's dimensions.
    """
    if not patterns:
        return TimelineLayout(positions={}, min_height=base_height, actual_width=available_width)

    depths = compute_depths(patterns)
    grouped = group_by_type(patterns)

    lane_heights = {lane: lane_height(max_stack) for lane, max_stack in max_stack_per_type(grouped, depths).items()}
    lanes = stack_swimlanes(lane_heights)

    initial = place_patterns(grouped, depths, lanes)
    collision = apply_collision_avoidance(patterns, depths, initial)

    grown_heights = {lane: lane_heights[lane] + collision.max_shift_per_type.get(lane, 0.0) for lane in lane_heights}
    grown_lanes = stack_swimlanes(grown_heights)
    delta = {lane: grown_lanes[lane].y - lanes[lane].y for lane in lanes}

    pattern_lane = {p.id: p.type for p in patterns}
    positions = {
        node_id: replace(pos, y=pos.y + delta[pattern_lane[node_id]]) for node_id, pos in collision.positions.items()
    }
    skip_edges = [
        edge if edge.channel_y is None else replace(edge, channel_y=edge.channel_y + delta[pattern_lane[edge.from_id]])
        for edge in collision.skip_level_edges
    ]

    total_height = sum(info.height for info in grown_lanes.values())
    logger.debug(
        "Timeline layout: %d patterns, %d skip-level edges, lane growth %s",
        len(positions),
        len(skip_edges),
        {lane.value: shift for lane, shift in collision.max_shift_per_type.items() if shift},
    )

    return TimelineLayout(
        positions=positions,
        min_height=max(base_height, total_height),
        actual_width=required_width(depths, available_width),
        swimlanes=grown_lanes,
        skip_level_edges=skip_edges,
    )


def max_stack_per_type(
    grouped: Mapping[PatternType, Sequence[Pattern]],
    depths: Mapping[int, int],
) -> dict[PatternType, int]:
    """Largest number of patterns sharing one depth, per type (at least 1)."""
    result: dict[PatternType, int] = {}
    for lane, lane_patterns in grouped.items():
        counts: dict[int, int] = {}
        for pattern in lane_patterns:
            depth = depths.get(pattern.id, 0)
            counts[depth] = counts.get(depth, 0) + 1
        result[lane] = max(counts.values(), default=1)
    return result


def lane_height(max_stack: int) -> float:
    """Height of a swimlane holding stacks of at most ``max_stack`` patterns."""
    return START_OFFSET + NODE_HEIGHT + (max_stack - 1) * VERTICAL_STACK_SPACING


def stack_swimlanes(heights: Mapping[PatternType, float]) -> dict[PatternType, SwimlaneInfo]:
    """Stack lanes top to bottom in type order, without gaps."""
    lanes: dict[PatternType, SwimlaneInfo] = {}
    y = 0.0
    for lane in PatternType:
        height = heights.get(lane, 0.0)
        lanes[lane] = SwimlaneInfo(y=y, height=height)
        y += height
    return lanes


def required_width(depths: Mapping[int, int], available_width: float) -> float:
    """Canvas width needed to show the deepest column, never below the viewport."""
    max_depth = max(depths.values(), default=0)
    return max(available_width, LEFT_MARGIN + (max_depth + 0.5) * HORIZONTAL_SPACING)


def _stack_key(pattern: Pattern, depths: Mapping[int, int]) -> tuple[int, int, int]:
    """Sort key: depth, then smallest prerequisite id (own id if none), then id."""
    anchor = min(pattern.prerequisites) if pattern.prerequisites else pattern.id
    return (depths.get(pattern.id, 0), anchor, pattern.id)


def place_patterns(
    grouped: Mapping[PatternType, Sequence[Pattern]],
    depths: Mapping[int, int],
    lanes: Mapping[PatternType, SwimlaneInfo],
) -> dict[int, Position]:
    """Initial positions, before collision avoidance.

    Patterns sharing a (depth, type) bucket are stacked in ``_stack_key``
    order, so the result does not depend on input order.
    """
    positions: dict[int, Position] = {}
    for lane, lane_patterns in grouped.items():
        first_row = lanes[lane].y + START_OFFSET
        stack_counter: dict[int, int] = {}

        for pattern in sorted(lane_patterns, key=lambda p: _stack_key(p, depths)):
            depth = depths.get(pattern.id, 0)
            stack_index = stack_counter.get(depth, 0)
            stack_counter[depth] = stack_index + 1

            positions[pattern.id] = Position(
                x=LEFT_MARGIN + depth * HORIZONTAL_SPACING,
                y=first_row + stack_index * VERTICAL_STACK_SPACING,
            )

    return positions
