"""Layout engines: depth analysis, timeline, collision avoidance and network."""

from pattern_graph.layout.collision import apply_collision_avoidance, find_skip_level_edges
from pattern_graph.layout.depth import compute_depths, detect_cycles
from pattern_graph.layout.network import canvas_size, content_bounds, layout_network
from pattern_graph.layout.timeline import layout_timeline

__all__ = [
    "apply_collision_avoidance",
    "canvas_size",
    "compute_depths",
    "content_bounds",
    "detect_cycles",
    "find_skip_level_edges",
    "layout_network",
    "layout_timeline",
]
