"""Graph helpers — the pattern snapshot as a networkx DiGraph, plus groupings."""

from __future__ import annotations

from collections.abc import Sequence

import networkx as nx

from pattern_graph.types import Pattern, PatternLevel, PatternType


def build_graph(patterns: Sequence[Pattern]) -> nx.DiGraph:
    """Build the prerequisite graph for a pattern snapshot.

    Every pattern becomes a node whose ``data`` attribute holds the
    ``Pattern``. Each prerequisite that exists in the snapshot becomes an
    edge prerequisite → pattern; dangling references are dropped.

    Edges into a node are added while visiting that node only, so
    ``graph.predecessors(n)`` follows the prerequisite order of ``n``.
    """
    g: nx.DiGraph = nx.DiGraph()
    for pattern in patterns:
        g.add_node(pattern.id, data=pattern)

    for pattern in patterns:
        for prereq_id in pattern.prerequisites:
            if prereq_id in g:
                g.add_edge(prereq_id, pattern.id)

    return g


def generate_edges(patterns: Sequence[Pattern]) -> list[tuple[int, int]]:
    """Return every (prerequisite_id, pattern_id) pair, in input order.

    Dangling prerequisites are kept; the caller omits edges whose endpoints
    have no position. Repeated prerequisites yield one edge.
    """
    edges: list[tuple[int, int]] = []
    for pattern in patterns:
        for prereq_id in dict.fromkeys(pattern.prerequisites):
            edges.append((prereq_id, pattern.id))
    return edges


def group_by_type(patterns: Sequence[Pattern]) -> dict[PatternType, list[Pattern]]:
    """Group patterns by type. Every type is present, in swimlane order."""
    grouped: dict[PatternType, list[Pattern]] = {t: [] for t in PatternType}
    for pattern in patterns:
        grouped[pattern.type].append(pattern)
    return grouped


def group_by_level(patterns: Sequence[Pattern]) -> dict[PatternLevel, list[Pattern]]:
    """Group patterns by level; a pattern without a level counts as beginner."""
    grouped: dict[PatternLevel, list[Pattern]] = {lvl: [] for lvl in PatternLevel}
    for pattern in patterns:
        grouped[pattern.level or PatternLevel.BEGINNER].append(pattern)
    return grouped
