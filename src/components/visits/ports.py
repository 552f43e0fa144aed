"""
Visits component port definitions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from src.domain.entities import VisitEvent, VisitStats
from src.ports.clock import ClockPort
from src.ports.kv_store import KeyValueStoreError, KeyValueStorePort


class VisitWriterPort(Protocol):
    """Append side of the visit log."""

    def insert(self, event: VisitEvent) -> None:
        ...


class VisitCounterPort(Protocol):
    """Site-wide visit counter."""

    def increment(self, at: datetime) -> VisitStats:
        """Add one visit, creating the counter on first use."""
        ...


__all__ = [
    "ClockPort",
    "KeyValueStoreError",
    "KeyValueStorePort",
    "VisitCounterPort",
    "VisitWriterPort",
]
