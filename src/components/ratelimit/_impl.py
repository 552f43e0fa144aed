"""
RateLimitService - Exponential backoff throttle for public submissions.

Handles the contact form throttle. Advisory only: it lives on the client's
side of the store and is not a security boundary.

Key behaviors:
- First submission of a local calendar day starts a new series (attempts = 1)
- After attempt n the next submission waits base * 2^(n-1) hours
- A new calendar day clears the wait without touching the stored record
- Unreadable or unwritable state fails open and is logged
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, tzinfo

from src.domain.calendar import is_new_day

from .models import RateLimitState, RateLimitStatus
from .ports import ClockPort, KeyValueStoreError, KeyValueStorePort

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600
DEFAULT_ACTION_KEY = "contact_form_rate_limit"


# --- Configuration ---


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limit configuration."""

    action_key: str = DEFAULT_ACTION_KEY
    base_wait_hours: float = 1


DEFAULT_CONFIG = RateLimitConfig()


# --- Pure Functions ---


def required_wait_seconds(attempts: int, base_wait_hours: float = 1) -> float:
    """Wait imposed after ``attempts`` same-day submissions."""
    if attempts < 1:
        return 0.0
    return base_wait_hours * 2 ** (attempts - 1) * SECONDS_PER_HOUR


def compute_status(
    state: RateLimitState | None,
    now: datetime,
    tz: tzinfo | None = None,
    base_wait_hours: float = 1,
) -> RateLimitStatus:
    """
    Decide whether the action may run at ``now``.

    The stored attempt count is reported only while the series is still
    running; on a new day the status is fully reset.
    """
    if state is None or state.last_attempt_at is None:
        return RateLimitStatus(can_submit=True, wait_time_seconds=0, attempts=0)

    if is_new_day(now, state.last_attempt_at, tz):
        return RateLimitStatus(can_submit=True, wait_time_seconds=0, attempts=0)

    required = required_wait_seconds(state.attempts, base_wait_hours)
    elapsed = (now - state.last_attempt_at).total_seconds()
    remaining = math.ceil(max(0.0, required - elapsed))

    return RateLimitStatus(
        can_submit=remaining == 0,
        wait_time_seconds=remaining,
        attempts=state.attempts,
    )


def next_state(
    state: RateLimitState | None,
    now: datetime,
    tz: tzinfo | None = None,
) -> RateLimitState:
    """State after one more successful submission at ``now``."""
    if state is None or state.last_attempt_at is None or is_new_day(now, state.last_attempt_at, tz):
        return RateLimitState(attempts=1, last_attempt_at=now)
    return RateLimitState(attempts=state.attempts + 1, last_attempt_at=now)


def format_time_remaining(seconds: int) -> str:
    """Human readable wait, rounded up to the coarsest sensible unit."""
    if seconds < 60:
        return f"{seconds} seconds"
    if seconds < SECONDS_PER_HOUR:
        return f"{math.ceil(seconds / 60)} minutes"
    return f"{math.ceil(seconds / SECONDS_PER_HOUR)} hours"


# --- Rate Limit Service ---


class RateLimitService:
    """
    Rate limit service.

    Reads and writes RateLimitState through a key-value store, one key per
    action. Scope the store per client before handing it in.
    """

    def __init__(
        self,
        store: KeyValueStorePort,
        clock: ClockPort,
        config: RateLimitConfig | None = None,
    ) -> None:
        """Initialize service."""
        self._store = store
        self._clock = clock
        self._config = config or DEFAULT_CONFIG

    def _load(self, action_key: str) -> RateLimitState | None:
        record = self._store.get(action_key)
        if record is None:
            return None
        return RateLimitState.from_record(record)

    def check(self, action_key: str | None = None, now: datetime | None = None) -> RateLimitStatus:
        """Check whether the action may run now."""
        key = action_key or self._config.action_key
        at = now or self._clock.now()

        try:
            state = self._load(key)
        except (KeyValueStoreError, ValueError) as e:
            # Fail open.
            logger.warning("Rate limit state for %r unreadable, allowing action: %s", key, e)
            return RateLimitStatus(can_submit=True, wait_time_seconds=0, attempts=0, degraded=True)

        return compute_status(state, at, self._clock.tz, self._config.base_wait_hours)

    def update(
        self, action_key: str | None = None, now: datetime | None = None
    ) -> tuple[RateLimitState, bool]:
        """
        Record a successful action.

        Returns:
            Tuple of (new state, persisted).
        """
        key = action_key or self._config.action_key
        at = now or self._clock.now()

        try:
            previous = self._load(key)
        except (KeyValueStoreError, ValueError) as e:
            logger.warning("Rate limit state for %r unreadable, starting a new series: %s", key, e)
            previous = None

        state = next_state(previous, at, self._clock.tz)

        try:
            self._store.set(key, state.to_record())
        except KeyValueStoreError as e:
            logger.warning("Rate limit state for %r not persisted: %s", key, e)
            return state, False

        return state, True
