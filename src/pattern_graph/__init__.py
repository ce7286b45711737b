"""pattern_graph — timeline and network layouts for pattern prerequisite graphs."""

from pattern_graph.api import EdgePath, NetworkView, TimelineView, network_view, timeline_view
from pattern_graph.errors import PatternDataError, PatternGraphError
from pattern_graph.graph import build_graph, generate_edges, group_by_level, group_by_type
from pattern_graph.layout import (
    apply_collision_avoidance,
    compute_depths,
    detect_cycles,
    layout_network,
    layout_timeline,
)
from pattern_graph.paths import curved_path, path_for, path_for_skip_level
from pattern_graph.types import (
    CollisionResult,
    Pattern,
    PatternLevel,
    PatternType,
    Position,
    SkipLevelEdge,
    SwimlaneInfo,
    TimelineLayout,
    load_patterns,
)

__all__ = [
    "CollisionResult",
    "EdgePath",
    "NetworkView",
    "Pattern",
    "PatternDataError",
    "PatternGraphError",
    "PatternLevel",
    "PatternType",
    "Position",
    "SkipLevelEdge",
    "SwimlaneInfo",
    "TimelineLayout",
    "TimelineView",
    "apply_collision_avoidance",
    "build_graph",
    "compute_depths",
    "curved_path",
    "detect_cycles",
    "generate_edges",
    "group_by_level",
    "group_by_type",
    "layout_network",
    "layout_timeline",
    "load_patterns",
    "network_view",
    "path_for",
    "path_for_skip_level",
    "timeline_view",
]
