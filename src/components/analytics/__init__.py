"""
Analytics component - Visit aggregation for the admin dashboard.
"""

from ._aggregate import (
    aggregate_by_browser,
    aggregate_by_device,
    aggregate_by_location,
    aggregate_by_project,
    aggregate_by_referrer,
    aggregate_daily,
    count_home_visits,
    day_label,
    with_percentages,
    zero_fill_daily,
)
from ._classify import classify_browser, classify_device, referrer_domain
from ._impl import AnalyticsDashboardService, DashboardConfig
from .component import run, run_daily, run_dashboard
from .models import (
    AnalyticsValidationError,
    DailyBucket,
    DailyVisitsInput,
    DailyVisitsOutput,
    DashboardInput,
    DashboardOutput,
    DashboardSummary,
    HomeVisitCounts,
    LocationBreakdown,
    ProjectVisitBucket,
    VisitBucket,
)
from .ports import ClockPort, VisitSourcePort, VisitStatsSourcePort

__all__ = [
    # Entry points
    "run",
    "run_daily",
    "run_dashboard",
    # Input models
    "DailyVisitsInput",
    "DashboardInput",
    # Output models
    "AnalyticsValidationError",
    "DailyBucket",
    "DailyVisitsOutput",
    "DashboardOutput",
    "DashboardSummary",
    "HomeVisitCounts",
    "LocationBreakdown",
    "ProjectVisitBucket",
    "VisitBucket",
    # Ports
    "ClockPort",
    "VisitSourcePort",
    "VisitStatsSourcePort",
    # Service and pure functions
    "AnalyticsDashboardService",
    "DashboardConfig",
    "aggregate_by_browser",
    "aggregate_by_device",
    "aggregate_by_location",
    "aggregate_by_project",
    "aggregate_by_referrer",
    "aggregate_daily",
    "classify_browser",
    "classify_device",
    "count_home_visits",
    "day_label",
    "referrer_domain",
    "with_percentages",
    "zero_fill_daily",
]
