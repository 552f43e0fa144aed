"""
Ordering component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from src.domain.entities import OrderedItem

# --- Validation Error ---


@dataclass(frozen=True)
class OrderingValidationError:
    """Ordering error."""

    code: str
    message: str
    field_name: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class ReorderInput:
    """Input for moving one item within its collection."""

    items: list[OrderedItem]
    from_index: int
    to_index: int


@dataclass(frozen=True)
class NormalizeInput:
    """Input for repairing order values of a freshly loaded collection."""

    items: list[OrderedItem]


@dataclass(frozen=True)
class RemoveInput:
    """Input for dropping an item and closing the gap it leaves."""

    items: list[OrderedItem]
    item_id: UUID


# --- Output Models ---


@dataclass(frozen=True)
class OrderingOutput:
    """
    Output for every ordering operation.

    ``items`` is the new in-memory order and is kept even when
    ``persisted`` is False.
    """

    items: list[OrderedItem]
    persisted: bool
    errors: list[OrderingValidationError] = field(default_factory=list)
    success: bool = True
