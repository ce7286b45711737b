"""Exceptions raised at the pattern-loading boundary.

The layout engine itself never raises on malformed graphs; these errors
only surface when converting external records into ``Pattern`` objects.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class PatternGraphError(Exception):
    """Base class for all pattern_graph errors."""


class PatternDataError(PatternGraphError, ValueError):
    """An external pattern record could not be converted.

    Attributes:
        field: Name of the offending record key
        record: The record that failed to load
        message: Human-readable error message
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        record: Mapping[str, Any] | None = None,
    ) -> None:
        self.field = field
        self.record = record
        self.message = message
        super().__init__(self._format())

    def _format(self) -> str:
        if self.record is not None and "id" in self.record:
            return f"{self.message} (pattern {self.record['id']!r})"
        return self.message
