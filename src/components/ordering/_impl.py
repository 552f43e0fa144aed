"""
OrderingService - Manual ordering of a collection (drag and drop).

Functional Core - list operations are pure; persistence goes through
OrderRepoPort.

Key behaviors:
- A move is a stable single-element remove/insert, never a swap
- After a move every display_order is the item's 1-based position
- New items go after the current maximum
- Removing an item renumbers the rest so the order stays 1..N
- Persistence is optimistic: a failed batch leaves the new in-memory order
  in place and is only reported
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar
from uuid import UUID

from src.domain.entities import OrderedItem
from src.ports.repo import RepositoryError

from .ports import OrderRepoPort

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=OrderedItem)


# --- Pure Functions ---


def renumber(items: Sequence[ItemT]) -> list[ItemT]:
    """Copy of ``items`` with display_order set to each position (1-based)."""
    return [
        item if item.display_order == position else item.model_copy(update={"display_order": position})
        for position, item in enumerate(items, start=1)
    ]


def reorder(items: Sequence[ItemT], from_index: int, to_index: int) -> list[ItemT]:
    """
    Move the item at ``from_index`` so that it ends up at ``to_index``.

    Raises IndexError if either index is outside the list.
    """
    size = len(items)
    for name, index in (("from_index", from_index), ("to_index", to_index)):
        if not 0 <= index < size:
            raise IndexError(f"{name} {index} out of range for {size} items")

    if from_index == to_index:
        return list(items)

    moved = list(items)
    item = moved.pop(from_index)
    moved.insert(to_index, item)
    return renumber(moved)


def normalize_order(items: Sequence[ItemT]) -> list[ItemT]:
    """Give items without a display_order (None or 0) their position; keep the rest."""
    return [
        item if item.display_order else item.model_copy(update={"display_order": position})
        for position, item in enumerate(items, start=1)
    ]


def next_display_order(items: Sequence[OrderedItem]) -> int:
    """display_order for an item appended to ``items``."""
    return max((item.display_order or 0 for item in items), default=0) + 1


def remove_item(items: Sequence[ItemT], item_id: UUID) -> list[ItemT]:
    """Drop ``item_id`` and renumber the remaining items 1..N-1."""
    return renumber([item for item in items if item.id != item_id])


def persist_order(items: Sequence[OrderedItem], repo: OrderRepoPort) -> bool:
    """
    Write each item's position as its display_order.

    Updates are independent: every item is attempted even after a failure.
    Returns True only if all updates succeeded. Nothing is rolled back.
    """
    all_ok = True

    for position, item in enumerate(items, start=1):
        try:
            ok = repo.update_item_order(item.id, position)
        except RepositoryError as e:
            logger.error("Failed to update display_order of %s: %s", item.id, e)
            ok = False
        else:
            if not ok:
                logger.error("display_order update of %s was rejected", item.id)
        all_ok = all_ok and ok

    return all_ok


# --- Ordering Service ---


class OrderingService:
    """
    Ordering service.

    Applies list operations and persists the resulting order.
    """

    def __init__(self, repo: OrderRepoPort) -> None:
        """Initialize service."""
        self._repo = repo

    def load(self, items: Sequence[ItemT]) -> tuple[list[ItemT], bool]:
        """
        Normalize a freshly fetched collection and persist positions.

        Returns:
            Tuple of (items, persisted). A failed write is not fatal.
        """
        normalized = normalize_order(items)
        persisted = persist_order(normalized, self._repo)
        if not persisted:
            logger.warning("Order normalization of %d items was not fully persisted", len(normalized))
        return normalized, persisted

    def move(
        self, items: Sequence[ItemT], from_index: int, to_index: int
    ) -> tuple[list[ItemT], bool]:
        """
        Move one item and persist the new order.

        Raises IndexError for out-of-range indices.
        """
        if from_index == to_index:
            return reorder(items, from_index, to_index), True

        moved = reorder(items, from_index, to_index)
        return moved, persist_order(moved, self._repo)

    def remove(self, items: Sequence[ItemT], item_id: UUID) -> tuple[list[ItemT], bool]:
        """Renumber and persist what remains after ``item_id`` is gone."""
        remaining = remove_item(items, item_id)
        return remaining, persist_order(remaining, self._repo)
