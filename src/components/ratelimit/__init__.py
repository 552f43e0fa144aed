"""
Rate limit component - Exponential backoff for public submissions.
"""

from ._impl import (
    DEFAULT_ACTION_KEY,
    RateLimitConfig,
    RateLimitService,
    compute_status,
    format_time_remaining,
    next_state,
    required_wait_seconds,
)
from .component import run, run_check, run_update
from .models import (
    CheckRateLimitInput,
    CheckRateLimitOutput,
    RateLimitState,
    RateLimitStatus,
    RateLimitValidationError,
    UpdateRateLimitInput,
    UpdateRateLimitOutput,
)
from .ports import ClockPort, KeyValueStoreError, KeyValueStorePort

__all__ = [
    # Entry points
    "run",
    "run_check",
    "run_update",
    # Input models
    "CheckRateLimitInput",
    "UpdateRateLimitInput",
    # Output models
    "CheckRateLimitOutput",
    "RateLimitState",
    "RateLimitStatus",
    "RateLimitValidationError",
    "UpdateRateLimitOutput",
    # Ports
    "ClockPort",
    "KeyValueStoreError",
    "KeyValueStorePort",
    # Service and pure functions
    "DEFAULT_ACTION_KEY",
    "RateLimitConfig",
    "RateLimitService",
    "compute_status",
    "format_time_remaining",
    "next_state",
    "required_wait_seconds",
]
