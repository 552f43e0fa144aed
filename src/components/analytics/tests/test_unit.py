"""
Analytics component unit tests.

Tests for the dashboard service and component entry points. The pure
aggregation functions are covered in tests/unit/test_analytics_aggregate.py.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from src.adapters.clock import FixedClock
from src.components.analytics import (
    AnalyticsDashboardService,
    DailyVisitsInput,
    DashboardConfig,
    DashboardInput,
    run,
    run_daily,
    run_dashboard,
)
from src.domain.entities import VisitEvent, VisitStats
from src.ports.repo import RepositoryError, VisitFilter
from src.rules.models import AnalyticsRules

NOW = datetime(2025, 10, 18, 15, 0, tzinfo=UTC)


# --- Mock Repositories ---


class MockVisitRepo:
    """In-memory visit log honouring since/until."""

    def __init__(self, events: list[VisitEvent] | None = None) -> None:
        self.events = events or []
        self.filters: list[VisitFilter] = []
        self.fail = False

    def fetch_events(self, visit_filter: VisitFilter) -> list[VisitEvent]:
        self.filters.append(visit_filter)
        if self.fail:
            raise RepositoryError("database is locked")
        return [
            e
            for e in self.events
            if (visit_filter.since is None or e.timestamp >= visit_filter.since)
            and (visit_filter.until is None or e.timestamp <= visit_filter.until)
        ]


class MockStatsRepo:
    def __init__(self, stats: VisitStats | None = None) -> None:
        self.stats = stats

    def get(self) -> VisitStats | None:
        return self.stats


def home(ts: datetime, **kwargs: str) -> VisitEvent:
    return VisitEvent(page_type="home", visitor_id="visitor_1_x", timestamp=ts, **kwargs)


def project(ts: datetime, project_id: str, name: str) -> VisitEvent:
    return VisitEvent(
        page_type="project",
        visitor_id="visitor_1_x",
        timestamp=ts,
        project_id=project_id,
        project_name=name,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW, tz=UTC)


@pytest.fixture
def visits() -> MockVisitRepo:
    return MockVisitRepo(
        [
            home(NOW - timedelta(days=40)),
            home(NOW - timedelta(days=20)),
            home(NOW - timedelta(days=5), referrer="https://github.com/me"),
            home(NOW - timedelta(days=1)),
            home(NOW - timedelta(hours=2)),
            home(NOW - timedelta(hours=1)),
            project(NOW - timedelta(days=2), "p1", "Alpha"),
            project(NOW - timedelta(hours=3), "p1", "Alpha"),
            project(NOW - timedelta(hours=3), "p2", "Beta"),
        ]
    )


@pytest.fixture
def stats() -> MockStatsRepo:
    return MockStatsRepo(VisitStats(total_visits=120, last_updated=NOW - timedelta(minutes=5)))


# --- Service Tests ---


class TestDashboardService:
    """Test summary assembly."""

    def test_totals_from_counter(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        """Totals come from the stats row, not the log."""
        summary = AnalyticsDashboardService(visits, stats, clock).build()

        assert summary.total_visits == 120
        assert summary.last_updated == NOW - timedelta(minutes=5)
        assert summary.generated_at == NOW

    def test_totals_fall_back_to_log(self, visits: MockVisitRepo, clock: FixedClock) -> None:
        """Without a counter row the log size is used."""
        summary = AnalyticsDashboardService(visits, MockStatsRepo(), clock).build()

        assert summary.total_visits == 9
        assert summary.last_updated is None

    def test_home_windows(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        """Today counts from local midnight; 7 and 30 day windows roll."""
        summary = AnalyticsDashboardService(visits, stats, clock).build()

        assert summary.home.today == 2
        assert summary.home.last_7_days == 4
        assert summary.home.last_30_days == 5

    def test_daily_week_zero_filled(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        """Week range covers eight calendar dates including today."""
        summary = AnalyticsDashboardService(visits, stats, clock).build("week")

        assert len(summary.daily) == 8
        assert summary.daily[-1].label == "Oct 18"
        assert summary.daily[-1].visits == 4
        assert sum(b.visits for b in summary.daily) == 7

    def test_daily_without_zero_fill(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        config = DashboardConfig(zero_fill_daily=False)

        daily = AnalyticsDashboardService(visits, stats, clock, config).daily("week")

        assert [b.label for b in daily] == ["Oct 13", "Oct 16", "Oct 17", "Oct 18"]

    def test_daily_fetches_only_range(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        """The daily series asks the repo for the range only."""
        AnalyticsDashboardService(visits, stats, clock).daily("month")

        assert visits.filters[-1].since == NOW - timedelta(days=30)
        assert visits.filters[-1].until == NOW

    def test_breakdowns(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        summary = AnalyticsDashboardService(visits, stats, clock).build()

        assert [(b.name, b.visits) for b in summary.projects] == [("Alpha", 2), ("Beta", 1)]
        assert summary.referrers[0].name == "Direct Link"
        assert summary.devices[0].name == "Unknown"
        assert summary.locations.countries[0].name == "Unknown"

    def test_unknown_range_raises(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        with pytest.raises(ValueError):
            AnalyticsDashboardService(visits, stats, clock).build("decade")


# --- Component Entry Point Tests ---


class TestComponent:
    """Test component entry points."""

    def test_run_dashboard(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        result = run_dashboard(
            DashboardInput(time_range="quarter"), visits=visits, stats=stats, clock=clock
        )

        assert result.success is True
        assert result.summary is not None
        assert result.summary.time_range == "quarter"
        assert len(result.summary.daily) == 91

    def test_rules_applied(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        """Rules control zero fill and range lengths."""
        rules = AnalyticsRules(zero_fill_daily=False, time_ranges={"week": 1, "month": 30, "quarter": 90})

        result = run_daily(
            DailyVisitsInput(time_range="week"), visits=visits, stats=stats, clock=clock, rules=rules
        )

        assert [b.label for b in result.buckets] == ["Oct 17", "Oct 18"]

    def test_invalid_range(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        result = run_dashboard(
            DashboardInput(time_range="year"), visits=visits, stats=stats, clock=clock
        )

        assert result.success is False
        assert result.summary is None
        assert result.errors[0].code == "invalid_time_range"
        assert result.errors[0].field_name == "time_range"
        assert visits.filters == []

    def test_repository_failure(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        visits.fail = True

        result = run_dashboard(DashboardInput(), visits=visits, stats=stats, clock=clock)
        daily = run_daily(DailyVisitsInput(), visits=visits, stats=stats, clock=clock)

        assert result.success is False
        assert result.errors[0].code == "analytics_unavailable"
        assert daily.success is False
        assert daily.buckets == []

    def test_run_dispatch(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        result = run(DailyVisitsInput(), visits=visits, stats=stats, clock=clock)

        assert result.success is True

    def test_run_rejects_unknown_input(
        self, visits: MockVisitRepo, stats: MockStatsRepo, clock: FixedClock
    ) -> None:
        with pytest.raises(ValueError):
            run("dashboard", visits=visits, stats=stats, clock=clock)  # type: ignore[arg-type]
