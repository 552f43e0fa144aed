"""
Rate limit component - Exponential backoff for public submissions.

Invariants:
- I1: attempts restart at 1 on the first action of a new local day
- I2: wait after attempt n is base * 2^(n-1) hours
- I3: storage failures never block the action (fail open, logged)
"""

from __future__ import annotations

from src.rules.models import RateLimitActionRules

from ._impl import RateLimitConfig, RateLimitService
from .models import (
    CheckRateLimitInput,
    CheckRateLimitOutput,
    RateLimitValidationError,
    UpdateRateLimitInput,
    UpdateRateLimitOutput,
)
from .ports import ClockPort, KeyValueStorePort


def _build_config(rules: RateLimitActionRules | None) -> RateLimitConfig:
    """Build rate limit config from rules."""
    if rules is None:
        return RateLimitConfig()
    return RateLimitConfig(
        action_key=rules.action_key,
        base_wait_hours=rules.base_wait_hours,
    )


# --- Component Entry Points ---


def run_check(
    inp: CheckRateLimitInput,
    *,
    store: KeyValueStorePort,
    clock: ClockPort,
    rules: RateLimitActionRules | None = None,
) -> CheckRateLimitOutput:
    """
    Check whether the action may run.

    Args:
        inp: Input with optional action key and instant.
        store: Key-value store already scoped to the client.
        clock: Clock port.
        rules: Optional rate limit rules.

    Returns:
        CheckRateLimitOutput with the computed status.
    """
    service = RateLimitService(store=store, clock=clock, config=_build_config(rules))
    status = service.check(action_key=inp.action_key, now=inp.now)
    return CheckRateLimitOutput(status=status)


def run_update(
    inp: UpdateRateLimitInput,
    *,
    store: KeyValueStorePort,
    clock: ClockPort,
    rules: RateLimitActionRules | None = None,
) -> UpdateRateLimitOutput:
    """
    Record a successful action.

    An unwritable store is reported through ``persisted`` and an error
    entry; the call still succeeds.
    """
    service = RateLimitService(store=store, clock=clock, config=_build_config(rules))
    state, persisted = service.update(action_key=inp.action_key, now=inp.now)

    errors = []
    if not persisted:
        errors.append(
            RateLimitValidationError(
                code="state_not_persisted",
                message="Rate limit state could not be saved",
            )
        )

    return UpdateRateLimitOutput(state=state, persisted=persisted, errors=errors, success=True)


def run(
    inp: CheckRateLimitInput | UpdateRateLimitInput,
    *,
    store: KeyValueStorePort,
    clock: ClockPort,
    rules: RateLimitActionRules | None = None,
) -> CheckRateLimitOutput | UpdateRateLimitOutput:
    """
    Main entry point for the rate limit component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, CheckRateLimitInput):
        return run_check(inp, store=store, clock=clock, rules=rules)
    elif isinstance(inp, UpdateRateLimitInput):
        return run_update(inp, store=store, clock=clock, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
