"""End-to-end tests for api.py — from a pattern snapshot to drawable edges."""

from __future__ import annotations

import logging

from pattern_graph import network_view, timeline_view
from pattern_graph.layout.constants import INITIAL_HEIGHT_MULTIPLIER, INITIAL_WIDTH_MULTIPLIER
from pattern_graph.types import Pattern, PatternType

# ─── Helpers ──────────────────────────────────────────────────────────────────


def skip_snapshot() -> list[Pattern]:
    """One lane with a cross-lane edge and a skip-level edge 1 → 6."""
    return [
        Pattern(1, name="Cascade"),
        Pattern(2, prerequisites=[1]),
        Pattern(3, prerequisites=[2]),
        Pattern(4, prerequisites=[1]),
        Pattern(5, prerequisites=[4]),
        Pattern(6, prerequisites=[1, 5]),
        Pattern(7, prerequisites=[3], type=PatternType.TUCK),
    ]


# ─── timeline_view Tests ──────────────────────────────────────────────────────


class TestTimelineView:
    def test_one_edge_per_prerequisite(self):
        view = timeline_view(skip_snapshot(), 800, 600)
        pairs = [(e.from_id, e.to_id) for e in view.edges]
        assert pairs == [(1, 2), (2, 3), (1, 4), (4, 5), (1, 6), (5, 6), (3, 7)]

    def test_skip_level_edge_routed_through_channel(self):
        view = timeline_view(skip_snapshot(), 800, 600)
        edge = next(e for e in view.edges if (e.from_id, e.to_id) == (1, 6))
        assert edge.skip_level
        assert " L " in edge.d

    def test_ordinary_edges_are_quadratic(self):
        view = timeline_view(skip_snapshot(), 800, 600)
        for edge in view.edges:
            if not edge.skip_level:
                assert " Q " in edge.d
                assert edge.d.startswith("M ")

    def test_dangling_edge_omitted(self):
        view = timeline_view([Pattern(1, prerequisites=[99])], 800, 600)
        assert view.edges == []
        assert set(view.layout.positions) == {1}

    def test_no_cycles_no_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pattern_graph"):
            view = timeline_view(skip_snapshot(), 800, 600)
        assert view.cycles == []
        assert caplog.records == []

    def test_cycle_reported_and_logged(self, caplog):
        patterns = [Pattern(1, prerequisites=[2]), Pattern(2, prerequisites=[1])]
        with caplog.at_level(logging.WARNING, logger="pattern_graph"):
            view = timeline_view(patterns, 800, 600)
        assert view.cycles == [[1, 2]]
        assert "Circular dependency detected between patterns: 1 -> 2" in caplog.text
        assert set(view.layout.positions) == {1, 2}

    def test_empty_snapshot(self):
        view = timeline_view([], 800, 600)
        assert view.edges == []
        assert view.layout.actual_width == 800
        assert view.layout.min_height == 600


# ─── network_view Tests ───────────────────────────────────────────────────────


class TestNetworkView:
    def test_all_patterns_positioned(self):
        view = network_view(skip_snapshot(), 800, 600)
        assert set(view.positions) == {1, 2, 3, 4, 5, 6, 7}

    def test_edges_are_cubic(self):
        view = network_view(skip_snapshot(), 800, 600)
        assert len(view.edges) == 7
        for edge in view.edges:
            assert " C " in edge.d
            assert not edge.skip_level

    def test_canvas_at_least_initial_size(self):
        view = network_view(skip_snapshot(), 800, 600)
        assert view.width >= 800 * INITIAL_WIDTH_MULTIPLIER
        assert view.height >= 600 * INITIAL_HEIGHT_MULTIPLIER

    def test_canvas_covers_content(self):
        view = network_view(skip_snapshot(), 200, 150)
        xs = [p.x for p in view.positions.values()]
        ys = [p.y for p in view.positions.values()]
        assert view.width >= max(xs) - min(xs)
        assert view.height >= max(ys) - min(ys)

    def test_cycle_reported(self, caplog):
        patterns = [Pattern(1, prerequisites=[2]), Pattern(2, prerequisites=[1])]
        with caplog.at_level(logging.WARNING, logger="pattern_graph"):
            view = network_view(patterns, 800, 600)
        assert view.cycles == [[1, 2]]
        assert len(caplog.records) == 1

    def test_empty_snapshot(self):
        view = network_view([], 800, 600)
        assert view.positions == {}
        assert view.edges == []
        assert (view.width, view.height) == (800 * INITIAL_WIDTH_MULTIPLIER, 600 * INITIAL_HEIGHT_MULTIPLIER)
