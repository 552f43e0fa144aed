"""
Ordering component - Drag-and-drop reordering with persisted display order.
"""

from ._impl import (
    OrderingService,
    next_display_order,
    normalize_order,
    persist_order,
    remove_item,
    renumber,
    reorder,
)
from .component import run, run_normalize, run_remove, run_reorder
from .models import (
    NormalizeInput,
    OrderingOutput,
    OrderingValidationError,
    RemoveInput,
    ReorderInput,
)
from .ports import OrderRepoPort

__all__ = [
    # Entry points
    "run",
    "run_normalize",
    "run_remove",
    "run_reorder",
    # Input models
    "NormalizeInput",
    "RemoveInput",
    "ReorderInput",
    # Output models
    "OrderingOutput",
    "OrderingValidationError",
    # Ports
    "OrderRepoPort",
    # Service and pure functions
    "OrderingService",
    "next_display_order",
    "normalize_order",
    "persist_order",
    "remove_item",
    "renumber",
    "reorder",
]
