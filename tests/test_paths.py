"""Tests for paths.py — SVG path data for plain, skip-level and timeline edges.

Expected strings are worked out by hand from node boxes of 100 × 60 and an
arrow clearance of 20 px.
"""

from __future__ import annotations

import re

import pytest

from pattern_graph.paths import (
    NodeSide,
    _num,
    closest_side,
    connection_point,
    curved_path,
    path_for,
    path_for_skip_level,
)
from pattern_graph.types import Position

# ─── Helpers ──────────────────────────────────────────────────────────────────


def commands(d: str) -> list[str]:
    """Command letters of a path, in order."""
    return re.findall(r"[A-Za-z]", d)


# ─── Number Formatting Tests ──────────────────────────────────────────────────


class TestNumberFormat:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (1.0, "1"),
            (-40.0, "-40"),
            (1.234, "1.23"),
            (-0.5, "-0.5"),
            (54.00000000000001, "54"),
            (-0.0, "0"),
        ],
    )
    def test_num(self, value, expected):
        assert _num(value) == expected


# ─── Geometry Tests ───────────────────────────────────────────────────────────


class TestGeometry:
    def test_closest_side_horizontal(self):
        assert closest_side(Position(0, 0), Position(300, 10)) == NodeSide.RIGHT
        assert closest_side(Position(0, 0), Position(-300, 10)) == NodeSide.LEFT

    def test_closest_side_vertical(self):
        assert closest_side(Position(0, 0), Position(10, 300)) == NodeSide.BOTTOM
        assert closest_side(Position(0, 0), Position(10, -300)) == NodeSide.TOP

    def test_closest_side_tie_goes_vertical(self):
        """|dx| == |dy| picks top/bottom."""
        assert closest_side(Position(0, 0), Position(100, 100)) == NodeSide.BOTTOM

    def test_connection_points_are_side_midpoints(self):
        center = Position(100, 100)
        assert connection_point(center, NodeSide.TOP) == Position(100, 70)
        assert connection_point(center, NodeSide.RIGHT) == Position(150, 100)
        assert connection_point(center, NodeSide.BOTTOM) == Position(100, 130)
        assert connection_point(center, NodeSide.LEFT) == Position(50, 100)


# ─── path_for Tests ───────────────────────────────────────────────────────────


class TestPathFor:
    def test_horizontal_edge(self):
        """Right side → left side, entry pulled back 20 px, control 30% of chord."""
        d = path_for(Position(0, 0), Position(300, 0))
        assert d == "M 50 0 C 104 0, 176 0, 230 0"

    def test_vertical_edge(self):
        """Bottom side → top side."""
        d = path_for(Position(0, 0), Position(0, 300))
        assert d == "M 0 30 C 0 96, 0 184, 0 250"

    def test_control_offset_lower_clamp(self):
        """Short chords still get a 30 px control offset."""
        d = path_for(Position(0, 0), Position(110, 0))
        assert d.startswith("M 50 0 C 80 0,")

    def test_control_offset_upper_clamp(self):
        """Long chords cap the control offset at 100 px."""
        d = path_for(Position(0, 0), Position(1000, 0))
        assert d == "M 50 0 C 150 0, 830 0, 930 0"

    def test_single_move_then_cubic(self):
        """One M, one C, nothing else."""
        d = path_for(Position(12.5, 7.25), Position(-400, 310))
        assert commands(d) == ["M", "C"]

    def test_reverse_direction(self):
        """Right-to-left edges leave from the left side."""
        d = path_for(Position(300, 0), Position(0, 0))
        assert d.startswith("M 250 0 ")
        assert d.endswith(", 70 0")


# ─── path_for_skip_level Tests ────────────────────────────────────────────────


class TestPathForSkipLevel:
    def test_with_channel_bounds(self):
        """Curve down into the channel, straight along it, curve up to the target."""
        d = path_for_skip_level(Position(120, 40), Position(660, 40), 10, 255, 525)
        assert d == "M 170 40 C 221 40, 221 10, 255 10 L 525 10 C 551 10, 551 40, 590 40"

    def test_default_channel_bounds(self):
        """Without bounds the channel spans the middle half of the chord."""
        d = path_for_skip_level(Position(120, 40), Position(660, 40), 10)
        assert "275 10 L 485 10" in d

    def test_segment_structure(self):
        """Exactly one M, followed by C, L, C."""
        d = path_for_skip_level(Position(0, 100), Position(900, 160), 80.5, 200, 700)
        assert commands(d) == ["M", "C", "L", "C"]
        assert d.count("M") == 1

    def test_channel_endpoints_on_channel_y(self):
        d = path_for_skip_level(Position(0, 100), Position(900, 160), 80.5, 200, 700)
        assert "200 80.5 L 700 80.5" in d


# ─── curved_path Tests ────────────────────────────────────────────────────────


class TestCurvedPath:
    def test_quadratic_right_to_left(self):
        """Leaves the right side, control at half the horizontal gap, enters the left side."""
        d = curved_path(Position(0, 0), Position(200, 100))
        assert d == "M 50 0 Q 100 0, 150 100"

    def test_single_move_then_quadratic(self):
        assert commands(curved_path(Position(120, 40), Position(300, 110))) == ["M", "Q"]
