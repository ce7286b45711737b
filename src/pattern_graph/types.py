"""Pattern records and the layout result types shared across layout engines."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pattern_graph.errors import PatternDataError


class PatternType(str, Enum):
    """Pattern category. Declaration order is the swimlane order, top to bottom."""

    PUSH = "push"
    PASS = "pass"
    WHIP = "whip"
    TUCK = "tuck"


class PatternLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class Pattern:
    """A node in the prerequisite graph.

    Only ``id``, ``prerequisites``, ``type`` and ``level`` are read by the
    layout engine; the rest is carried for callers.
    """

    id: int
    name: str = ""
    prerequisites: tuple[int, ...] = ()
    type: PatternType = PatternType.PUSH
    level: PatternLevel | None = None
    counts: int = 0
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists from callers but keep the record hashable.
        object.__setattr__(self, "prerequisites", tuple(self.prerequisites))
        object.__setattr__(self, "tags", tuple(self.tags))

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> Pattern:
        """Build a pattern from an exported JSON record.

        Keys the engine has no use for (``videoRefs`` and the like) are
        ignored.

        Raises:
            PatternDataError: if ``id`` is missing or not an integer, if a
                prerequisite or ``counts`` is not an integer, if ``tags`` is
                not a list of strings, or if ``type``/``level`` holds an
                unknown value.
        """
        pattern_id = record.get("id")
        if not _is_int(pattern_id):
            raise PatternDataError("Pattern id must be an integer", field="id", record=record)

        prerequisites = record.get("prerequisites") or []
        if not isinstance(prerequisites, Sequence) or isinstance(prerequisites, str):
            raise PatternDataError("Prerequisites must be a list of ids", field="prerequisites", record=record)
        if not all(_is_int(p) for p in prerequisites):
            raise PatternDataError("Prerequisite ids must be integers", field="prerequisites", record=record)

        raw_type = record.get("type", PatternType.PUSH.value)
        try:
            pattern_type = PatternType(raw_type)
        except ValueError as exc:
            raise PatternDataError(f"Unknown pattern type: {raw_type!r}", field="type", record=record) from exc

        raw_level = record.get("level")
        try:
            level = PatternLevel(raw_level) if raw_level is not None else None
        except ValueError as exc:
            raise PatternDataError(f"Unknown pattern level: {raw_level!r}", field="level", record=record) from exc

        counts = record.get("counts", 0)
        if not _is_int(counts):
            raise PatternDataError("Counts must be an integer", field="counts", record=record)

        tags = record.get("tags") or []
        if not isinstance(tags, Sequence) or isinstance(tags, str):
            raise PatternDataError("Tags must be a list of strings", field="tags", record=record)
        if not all(isinstance(t, str) for t in tags):
            raise PatternDataError("Tags must be strings", field="tags", record=record)

        return cls(
            id=pattern_id,
            name=str(record.get("name") or ""),
            prerequisites=tuple(prerequisites),
            type=pattern_type,
            level=level,
            counts=counts,
            description=str(record.get("description") or ""),
            tags=tuple(tags),
        )


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_patterns(records: Sequence[Mapping[str, Any]]) -> list[Pattern]:
    """Convert exported records to patterns, preserving order."""
    return [Pattern.from_dict(record) for record in records]


@dataclass(frozen=True)
class Position:
    """Centre of a node in pixel coordinates."""

    x: float
    y: float


@dataclass(frozen=True)
class SwimlaneInfo:
    """Vertical band of the timeline reserved for one pattern type."""

    y: float
    height: float


@dataclass(frozen=True)
class SkipLevelEdge:
    """An edge spanning more than one depth level inside a single swimlane.

    The channel fields describe the horizontal corridor the edge is routed
    through. They are ``None`` when no intermediate node had to be moved,
    in which case the edge can be drawn like any other.
    """

    from_id: int
    to_id: int
    from_depth: int
    to_depth: int
    intermediate_node_ids: tuple[int, ...] = ()
    channel_y: float | None = None
    channel_start_x: float | None = None
    channel_end_x: float | None = None

    @property
    def depth_span(self) -> int:
        return self.to_depth - self.from_depth


@dataclass
class CollisionResult:
    """Output of collision avoidance: adjusted positions plus routing data."""

    positions: dict[int, Position]
    skip_level_edges: list[SkipLevelEdge] = field(default_factory=list)
    max_shift_per_type: dict[PatternType, float] = field(default_factory=dict)


@dataclass
class TimelineLayout:
    """Self-contained timeline output — everything a renderer needs."""

    positions: dict[int, Position]
    min_height: float
    actual_width: float
    swimlanes: dict[PatternType, SwimlaneInfo] = field(default_factory=dict)
    skip_level_edges: list[SkipLevelEdge] = field(default_factory=list)
