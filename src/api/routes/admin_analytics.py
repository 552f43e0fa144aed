"""
Admin Analytics API.

Dashboard summary and daily visit series over a named time range
(week, month, quarter).
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.sqlite.repos import SQLiteVisitRepo, SQLiteVisitStatsRepo
from src.api.deps import get_clock, get_rules, get_visit_repo, get_visit_stats_repo
from src.api.schemas import (
    DailyBucketResponse,
    DailyVisitsResponse,
    DashboardResponse,
    error_detail,
)
from src.components.analytics import (
    AnalyticsValidationError,
    DailyVisitsInput,
    DashboardInput,
    run_daily,
    run_dashboard,
)
from src.ports.clock import ClockPort
from src.rules.models import Rules

router = APIRouter()


def _raise_for_errors(errors: list[AnalyticsValidationError]) -> None:
    if any(err.code == "invalid_time_range" for err in errors):
        raise HTTPException(status_code=400, detail=error_detail(errors))
    raise HTTPException(status_code=503, detail=error_detail(errors))


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    time_range: str = Query("week", description="week, month or quarter"),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    stats: SQLiteVisitStatsRepo = Depends(get_visit_stats_repo),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> DashboardResponse:
    """Everything the analytics page shows for the selected range."""
    result = run_dashboard(
        DashboardInput(time_range=time_range),
        visits=visits,
        stats=stats,
        clock=clock,
        rules=rules.analytics,
    )

    if not result.success:
        _raise_for_errors(result.errors)

    return DashboardResponse.model_validate(result.summary)


@router.get("/daily", response_model=DailyVisitsResponse)
def get_daily_visits(
    time_range: str = Query("week", description="week, month or quarter"),
    visits: SQLiteVisitRepo = Depends(get_visit_repo),
    stats: SQLiteVisitStatsRepo = Depends(get_visit_stats_repo),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> DailyVisitsResponse:
    """Visits per local calendar day, oldest first."""
    result = run_daily(
        DailyVisitsInput(time_range=time_range),
        visits=visits,
        stats=stats,
        clock=clock,
        rules=rules.analytics,
    )

    if not result.success:
        _raise_for_errors(result.errors)

    return DailyVisitsResponse(
        time_range=time_range,
        items=[DailyBucketResponse.model_validate(b) for b in result.buckets],
    )
