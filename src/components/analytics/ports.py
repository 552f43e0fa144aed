"""
Analytics component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.entities import VisitEvent, VisitStats
from src.ports.clock import ClockPort
from src.ports.repo import VisitFilter


class VisitSourcePort(Protocol):
    """Read side of the visit log."""

    def fetch_events(self, visit_filter: VisitFilter) -> list[VisitEvent]:
        """Events matching the filter, oldest first."""
        ...


class VisitStatsSourcePort(Protocol):
    """Read side of the site-wide visit counter."""

    def get(self) -> VisitStats | None:
        """Counter row, or None if nothing has been counted yet."""
        ...


__all__ = ["ClockPort", "VisitSourcePort", "VisitStatsSourcePort"]
