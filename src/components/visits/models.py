"""
Visits component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# --- Validation Error ---


@dataclass(frozen=True)
class VisitsValidationError:
    """Visit tracking error."""

    code: str
    message: str
    field_name: str | None = None


# --- Request Context ---


@dataclass(frozen=True)
class VisitContext:
    """What the request tells us about the visitor."""

    user_agent: str | None = None
    referrer: str | None = None
    country: str | None = None
    city: str | None = None


@dataclass(frozen=True)
class TrackResult:
    """Outcome of one tracking call."""

    tracked: bool
    visitor_id: str | None = None
    # Already tracked in this session.
    duplicate: bool = False


# --- Input Models ---


@dataclass(frozen=True)
class TrackHomeInput:
    """Input for tracking a home page visit."""

    session_key: str
    context: VisitContext = field(default_factory=VisitContext)
    now: datetime | None = None


@dataclass(frozen=True)
class TrackProjectInput:
    """Input for tracking a project page visit."""

    session_key: str
    project_id: str
    project_name: str | None = None
    context: VisitContext = field(default_factory=VisitContext)
    now: datetime | None = None


# --- Output Models ---


@dataclass(frozen=True)
class TrackVisitOutput:
    """Output for visit tracking."""

    result: TrackResult
    errors: list[VisitsValidationError] = field(default_factory=list)
    success: bool = True
