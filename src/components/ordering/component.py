"""
Ordering component - Drag-and-drop reordering of a collection.

Invariants:
- I1: display_order values of a collection are exactly 1..N after every
  move or removal
- I2: a failed persistence batch is reported, never rolled back
"""

from __future__ import annotations

from ._impl import OrderingService
from .models import (
    NormalizeInput,
    OrderingOutput,
    OrderingValidationError,
    RemoveInput,
    ReorderInput,
)
from .ports import OrderRepoPort

NOT_PERSISTED = OrderingValidationError(
    code="order_not_persisted",
    message="The new order could not be saved; it will be restored on reload",
)


def _output(items: list, persisted: bool) -> OrderingOutput:
    errors = [] if persisted else [NOT_PERSISTED]
    return OrderingOutput(items=items, persisted=persisted, errors=errors, success=True)


# --- Component Entry Points ---


def run_reorder(inp: ReorderInput, *, repo: OrderRepoPort) -> OrderingOutput:
    """
    Move one item and persist the resulting order.

    Out-of-range indices leave the list untouched and fail validation.
    """
    size = len(inp.items)
    errors = [
        OrderingValidationError(
            code="index_out_of_range",
            message=f"{name} {index} out of range for {size} items",
            field_name=name,
        )
        for name, index in (("from_index", inp.from_index), ("to_index", inp.to_index))
        if not 0 <= index < size
    ]
    if errors:
        return OrderingOutput(items=list(inp.items), persisted=False, errors=errors, success=False)

    items, persisted = OrderingService(repo=repo).move(inp.items, inp.from_index, inp.to_index)
    return _output(items, persisted)


def run_normalize(inp: NormalizeInput, *, repo: OrderRepoPort) -> OrderingOutput:
    """Repair order values on load; persistence failures are not fatal."""
    items, persisted = OrderingService(repo=repo).load(inp.items)
    return _output(items, persisted)


def run_remove(inp: RemoveInput, *, repo: OrderRepoPort) -> OrderingOutput:
    """Close the gap left by a removed item."""
    items, persisted = OrderingService(repo=repo).remove(inp.items, inp.item_id)
    return _output(items, persisted)


def run(
    inp: ReorderInput | NormalizeInput | RemoveInput,
    *,
    repo: OrderRepoPort,
) -> OrderingOutput:
    """
    Main entry point for the ordering component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ReorderInput):
        return run_reorder(inp, repo=repo)
    elif isinstance(inp, NormalizeInput):
        return run_normalize(inp, repo=repo)
    elif isinstance(inp, RemoveInput):
        return run_remove(inp, repo=repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
