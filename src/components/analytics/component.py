"""
Analytics component - Visit aggregation for the admin dashboard.

Invariants:
- I1: breakdowns are sorted by visits descending, ties in first-seen order
- I2: percentages of one breakdown sum to 100 within rounding
- I3: daily buckets hold only dates with visits unless zero-filled
"""

from __future__ import annotations

import logging

from src.ports.repo import RepositoryError
from src.rules.models import AnalyticsRules

from ._impl import AnalyticsDashboardService, DashboardConfig
from .models import (
    AnalyticsValidationError,
    DailyVisitsInput,
    DailyVisitsOutput,
    DashboardInput,
    DashboardOutput,
)
from .ports import ClockPort, VisitSourcePort, VisitStatsSourcePort

logger = logging.getLogger(__name__)

UNAVAILABLE = AnalyticsValidationError(
    code="analytics_unavailable",
    message="Visit data could not be loaded",
)


def _build_config(rules: AnalyticsRules | None) -> DashboardConfig:
    """Build dashboard config from rules."""
    if rules is None:
        return DashboardConfig()
    return DashboardConfig(
        city_limit=rules.city_limit,
        zero_fill_daily=rules.zero_fill_daily,
        time_ranges=rules.time_ranges.model_dump(),
    )


def _invalid_range(error: ValueError) -> AnalyticsValidationError:
    return AnalyticsValidationError(
        code="invalid_time_range",
        message=str(error),
        field_name="time_range",
    )


# --- Component Entry Points ---


def run_dashboard(
    inp: DashboardInput,
    *,
    visits: VisitSourcePort,
    stats: VisitStatsSourcePort,
    clock: ClockPort,
    rules: AnalyticsRules | None = None,
) -> DashboardOutput:
    """
    Build the dashboard summary.

    Args:
        inp: Input with the selected time range.
        visits: Visit log port.
        stats: Visit counter port.
        clock: Clock port.
        rules: Optional analytics rules.

    Returns:
        DashboardOutput with the summary, or errors.
    """
    service = AnalyticsDashboardService(visits, stats, clock, _build_config(rules))

    try:
        summary = service.build(inp.time_range, now=inp.now)
    except ValueError as e:
        return DashboardOutput(summary=None, errors=[_invalid_range(e)], success=False)
    except RepositoryError as e:
        logger.error("Failed to build analytics dashboard: %s", e)
        return DashboardOutput(summary=None, errors=[UNAVAILABLE], success=False)

    return DashboardOutput(summary=summary)


def run_daily(
    inp: DailyVisitsInput,
    *,
    visits: VisitSourcePort,
    stats: VisitStatsSourcePort,
    clock: ClockPort,
    rules: AnalyticsRules | None = None,
) -> DailyVisitsOutput:
    """Daily visit series for the selected range."""
    service = AnalyticsDashboardService(visits, stats, clock, _build_config(rules))

    try:
        buckets = service.daily(inp.time_range, now=inp.now)
    except ValueError as e:
        return DailyVisitsOutput(buckets=[], errors=[_invalid_range(e)], success=False)
    except RepositoryError as e:
        logger.error("Failed to load daily visits: %s", e)
        return DailyVisitsOutput(buckets=[], errors=[UNAVAILABLE], success=False)

    return DailyVisitsOutput(buckets=buckets)


def run(
    inp: DashboardInput | DailyVisitsInput,
    *,
    visits: VisitSourcePort,
    stats: VisitStatsSourcePort,
    clock: ClockPort,
    rules: AnalyticsRules | None = None,
) -> DashboardOutput | DailyVisitsOutput:
    """
    Main entry point for the analytics component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, DashboardInput):
        return run_dashboard(inp, visits=visits, stats=stats, clock=clock, rules=rules)
    elif isinstance(inp, DailyVisitsInput):
        return run_daily(inp, visits=visits, stats=stats, clock=clock, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
