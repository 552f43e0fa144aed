"""
Analytics component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from src.domain.entities import TimeRange

# --- Validation Error ---


@dataclass(frozen=True)
class AnalyticsValidationError:
    """Analytics validation error."""

    code: str
    message: str
    field_name: str | None = None


# --- Buckets ---


@dataclass(frozen=True)
class VisitBucket:
    """One group of a breakdown."""

    name: str
    visits: int
    percentage: float | None = None


@dataclass(frozen=True)
class ProjectVisitBucket(VisitBucket):
    """Project breakdown group, keyed by project id."""

    project_id: str | None = None


@dataclass(frozen=True)
class DailyBucket:
    """Visits on one local calendar date."""

    date: date
    visits: int
    label: str


@dataclass(frozen=True)
class LocationBreakdown:
    """Countries and cities, counted independently."""

    countries: list[VisitBucket] = field(default_factory=list)
    cities: list[VisitBucket] = field(default_factory=list)


@dataclass(frozen=True)
class HomeVisitCounts:
    """Home page visits over the fixed windows."""

    today: int = 0
    last_7_days: int = 0
    last_30_days: int = 0


@dataclass(frozen=True)
class DashboardSummary:
    """Everything the admin analytics page shows."""

    time_range: TimeRange
    generated_at: datetime
    total_visits: int
    last_updated: datetime | None
    home: HomeVisitCounts
    daily: list[DailyBucket]
    projects: list[ProjectVisitBucket]
    devices: list[VisitBucket]
    browsers: list[VisitBucket]
    referrers: list[VisitBucket]
    locations: LocationBreakdown


# --- Input Models ---


@dataclass(frozen=True)
class DashboardInput:
    """Input for building the dashboard summary."""

    time_range: str = "week"
    now: datetime | None = None


@dataclass(frozen=True)
class DailyVisitsInput:
    """Input for the daily series alone."""

    time_range: str = "week"
    now: datetime | None = None


# --- Output Models ---


@dataclass(frozen=True)
class DashboardOutput:
    """Output for dashboard summary."""

    summary: DashboardSummary | None
    errors: list[AnalyticsValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class DailyVisitsOutput:
    """Output for daily visit series."""

    buckets: list[DailyBucket]
    errors: list[AnalyticsValidationError] = field(default_factory=list)
    success: bool = True
