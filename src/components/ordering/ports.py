"""
Ordering component port definitions.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID


class OrderRepoPort(Protocol):
    """Persistence for display_order values."""

    def update_item_order(self, item_id: UUID, display_order: int) -> bool:
        """Set one item's display_order. Returns True on success."""
        ...
