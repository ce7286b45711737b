"""Depth analysis — longest prerequisite chain per pattern, plus cycle diagnostics.

Depth is the length of the longest chain of prerequisites leading back to a
foundational pattern (one with no prerequisites in the snapshot). The
prerequisite graph is expected to be a DAG but is not trusted to be one:
a cycle is broken where it is found instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import networkx as nx

from pattern_graph.graph import build_graph
from pattern_graph.types import Pattern


@dataclass
class _Frame:
    """One pending pattern on the resolution stack."""

    node_id: int
    prereqs: Iterator[int]
    deepest: int = -1  # deepest resolved prerequisite, -1 when none seen yet


def compute_depths(patterns: Sequence[Pattern]) -> dict[int, int]:
    """Compute the prerequisite depth of every pattern.

    Rules:
    - A pattern with no prerequisites in the snapshot has depth 0.
      Prerequisites pointing at unknown ids are ignored.
    - Otherwise depth = 1 + max(depth of each prerequisite).
    - A prerequisite that is already on the current resolution path closes
      a cycle; it contributes depth 0 and resolution carries on.

    The memo table lives for this call only, so each pattern is resolved
    once per call and nothing leaks between snapshots. Cycle breaking
    depends on input order; the depths it yields inside a cycle carry no
    stronger guarantee.
    """
    graph = build_graph(patterns)
    depths: dict[int, int] = {}

    for pattern in patterns:
        if pattern.id not in depths:
            _resolve(graph, pattern.id, depths)

    return depths


def _resolve(graph: nx.DiGraph, root: int, depths: dict[int, int]) -> None:
    """Resolve ``root`` and every unresolved prerequisite below it.

    Iterative post-order DFS over prerequisite edges, so long chains do
    not hit the interpreter's recursion limit.
    """
    on_path: set[int] = {root}
    stack: list[_Frame] = [_Frame(root, iter(list(graph.predecessors(root))))]

    while stack:
        frame = stack[-1]
        prereq = next(frame.prereqs, None)

        if prereq is None:
            depth = frame.deepest + 1 if frame.deepest >= 0 else 0
            depths[frame.node_id] = depth
            stack.pop()
            on_path.discard(frame.node_id)
            if stack:
                stack[-1].deepest = max(stack[-1].deepest, depth)
            continue

        if prereq in depths:
            frame.deepest = max(frame.deepest, depths[prereq])
        elif prereq in on_path:
            # Cycle: treat the revisited pattern as foundational for this path.
            frame.deepest = max(frame.deepest, 0)
        else:
            on_path.add(prereq)
            stack.append(_Frame(prereq, iter(list(graph.predecessors(prereq)))))


def detect_cycles(patterns: Sequence[Pattern]) -> list[list[int]]:
    """Return every elementary prerequisite cycle in the snapshot.

    Each cycle is a list of pattern ids read in "pattern → one of its
    prerequisites" order, rotated to start at the pattern that comes first
    in the input. Cycles are sorted by their members' input positions.
    A pattern listing itself is a one-element cycle.

    Never raises; the result is a diagnostic for the caller to log or show.
    """
    graph = build_graph(patterns)

    order: dict[int, int] = {}
    for index, pattern in enumerate(patterns):
        order.setdefault(pattern.id, index)

    cycles: list[list[int]] = []
    for cycle in nx.simple_cycles(graph.reverse(copy=False)):
        start = min(range(len(cycle)), key=lambda i: order[cycle[i]])
        cycles.append(cycle[start:] + cycle[:start])

    cycles.sort(key=lambda c: [order[node_id] for node_id in c])
    return cycles
