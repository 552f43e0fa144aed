"""
Rate limit component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# --- Validation Error ---


@dataclass(frozen=True)
class RateLimitValidationError:
    """Rate limit error."""

    code: str
    message: str
    field_name: str | None = None


# --- State ---


@dataclass(frozen=True)
class RateLimitState:
    """Persisted record for one rate-limited action of one client."""

    attempts: int = 0
    last_attempt_at: datetime | None = None

    def to_record(self) -> dict[str, Any]:
        """Serialize for the key-value store."""
        return {
            "attempts": self.attempts,
            "last_attempt": (
                self.last_attempt_at.isoformat() if self.last_attempt_at else None
            ),
        }

    @classmethod
    def from_record(cls, record: object) -> RateLimitState:
        """
        Parse a stored record.

        Raises ValueError if the record is malformed.
        """
        if not isinstance(record, dict):
            raise ValueError(f"Rate limit record must be an object, got {type(record).__name__}")

        attempts = record.get("attempts", 0)
        if not isinstance(attempts, int) or isinstance(attempts, bool) or attempts < 0:
            raise ValueError(f"Invalid attempts value: {attempts!r}")

        raw_last = record.get("last_attempt")
        if raw_last is None:
            return cls(attempts=attempts)
        if not isinstance(raw_last, str):
            raise ValueError(f"Invalid last_attempt value: {raw_last!r}")

        return cls(attempts=attempts, last_attempt_at=datetime.fromisoformat(raw_last))


@dataclass(frozen=True)
class RateLimitStatus:
    """Answer to "may the action run now?"."""

    can_submit: bool
    wait_time_seconds: int
    attempts: int
    # True when the stored state could not be read and the action was allowed anyway.
    degraded: bool = False


# --- Input Models ---


@dataclass(frozen=True)
class CheckRateLimitInput:
    """Input for checking a rate limit."""

    action_key: str | None = None
    now: datetime | None = None


@dataclass(frozen=True)
class UpdateRateLimitInput:
    """Input for recording a successful action."""

    action_key: str | None = None
    now: datetime | None = None


# --- Output Models ---


@dataclass(frozen=True)
class CheckRateLimitOutput:
    """Output for rate limit check."""

    status: RateLimitStatus
    errors: list[RateLimitValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class UpdateRateLimitOutput:
    """Output for rate limit update."""

    state: RateLimitState
    persisted: bool
    errors: list[RateLimitValidationError] = field(default_factory=list)
    success: bool = True
