"""Public API — full view pipelines from a pattern snapshot to drawable edges.

Each pipeline: cycle diagnostics → layout → one path string per edge whose
endpoints both have a position. Detected cycles are logged and returned;
they never stop the layout.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from pattern_graph.graph import generate_edges
from pattern_graph.layout.constants import INITIAL_HEIGHT_MULTIPLIER, INITIAL_WIDTH_MULTIPLIER
from pattern_graph.layout.depth import detect_cycles
from pattern_graph.layout.network import canvas_size, layout_network
from pattern_graph.layout.timeline import layout_timeline
from pattern_graph.paths import curved_path, path_for, path_for_skip_level
from pattern_graph.types import Pattern, Position, TimelineLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgePath:
    """A drawable edge: SVG path data from a prerequisite to its dependant."""

    from_id: int
    to_id: int
    d: str
    skip_level: bool = False


@dataclass
class TimelineView:
    layout: TimelineLayout
    edges: list[EdgePath] = field(default_factory=list)
    cycles: list[list[int]] = field(default_factory=list)


@dataclass
class NetworkView:
    positions: dict[int, Position]
    width: float
    height: float
    edges: list[EdgePath] = field(default_factory=list)
    cycles: list[list[int]] = field(default_factory=list)


def report_cycles(patterns: Sequence[Pattern]) -> list[list[int]]:
    """Detect prerequisite cycles and log a warning for each one."""
    cycles = detect_cycles(patterns)
    for cycle in cycles:
        logger.warning(
            "Circular dependency detected between patterns: %s",
            " -> ".join(str(node_id) for node_id in cycle),
        )
    return cycles


def timeline_view(patterns: Sequence[Pattern], width: float, height: float) -> TimelineView:
    """Lay out the timeline and build a path for every drawable edge.

    Skip-level edges that had a channel cleared for them are routed through
    it; every other edge is a plain left-to-right curve.
    """
    cycles = report_cycles(patterns)
    layout = layout_timeline(patterns, width, height)
    channels = {(e.from_id, e.to_id): e for e in layout.skip_level_edges if e.channel_y is not None}

    edges: list[EdgePath] = []
    for from_id, to_id in generate_edges(patterns):
        start = layout.positions.get(from_id)
        end = layout.positions.get(to_id)
        if start is None or end is None:
            continue

        skip = channels.get((from_id, to_id))
        if skip is not None:
            d = path_for_skip_level(start, end, skip.channel_y, skip.channel_start_x, skip.channel_end_x)
            edges.append(EdgePath(from_id, to_id, d, skip_level=True))
        else:
            edges.append(EdgePath(from_id, to_id, curved_path(start, end)))

    return TimelineView(layout=layout, edges=edges, cycles=cycles)


def network_view(patterns: Sequence[Pattern], viewport_width: float, viewport_height: float) -> NetworkView:
    """Lay out the network view on a canvas sized to its content.

    The layout runs on a canvas several viewports wide so foundational
    patterns have room to fan out; the canvas then grows further if the
    content needs it.
    """
    cycles = report_cycles(patterns)
    initial_width = viewport_width * INITIAL_WIDTH_MULTIPLIER
    initial_height = viewport_height * INITIAL_HEIGHT_MULTIPLIER

    positions = layout_network(patterns, initial_width, initial_height)
    width, height = canvas_size(positions, initial_width, initial_height)

    edges: list[EdgePath] = []
    for from_id, to_id in generate_edges(patterns):
        start = positions.get(from_id)
        end = positions.get(to_id)
        if start is None or end is None:
            continue
        edges.append(EdgePath(from_id, to_id, path_for(start, end)))

    return NetworkView(positions=positions, width=width, height=height, edges=edges, cycles=cycles)
