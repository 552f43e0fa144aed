"""
AnalyticsDashboardService - Admin analytics summary.

Reads the visit log once and derives every dashboard figure from it.

Key behaviors:
- Total visits come from the stats counter, falling back to the log size
  when no counter row exists
- Home visit windows: since local midnight, last 7 days, last 30 days
- The daily series covers the selected range and is optionally zero-filled
- Breakdowns cover the whole log
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from src.domain.calendar import local_date, start_of_day
from src.domain.entities import VisitEvent
from src.ports.repo import VisitFilter

from ._aggregate import (
    DEFAULT_CITY_LIMIT,
    aggregate_by_browser,
    aggregate_by_device,
    aggregate_by_location,
    aggregate_by_project,
    aggregate_by_referrer,
    aggregate_daily,
    count_home_visits,
    zero_fill_daily,
)
from .models import DailyBucket, DashboardSummary, HomeVisitCounts
from .ports import ClockPort, VisitSourcePort, VisitStatsSourcePort

logger = logging.getLogger(__name__)


# --- Configuration ---


def _default_time_ranges() -> dict[str, int]:
    return {"week": 7, "month": 30, "quarter": 90}


@dataclass(frozen=True)
class DashboardConfig:
    """Dashboard configuration."""

    city_limit: int = DEFAULT_CITY_LIMIT
    zero_fill_daily: bool = True
    # Days covered by each selectable range.
    time_ranges: dict[str, int] = field(default_factory=_default_time_ranges)


DEFAULT_CONFIG = DashboardConfig()


# --- Analytics Dashboard Service ---


class AnalyticsDashboardService:
    """
    Analytics dashboard service.

    Builds DashboardSummary objects from the visit log and counter.
    Repository errors propagate to the caller.
    """

    def __init__(
        self,
        visits: VisitSourcePort,
        stats: VisitStatsSourcePort,
        clock: ClockPort,
        config: DashboardConfig | None = None,
    ) -> None:
        """Initialize service."""
        self._visits = visits
        self._stats = stats
        self._clock = clock
        self._config = config or DEFAULT_CONFIG

    def range_days(self, time_range: str) -> int:
        """
        Days covered by ``time_range``.

        Raises ValueError for unknown ranges.
        """
        try:
            return self._config.time_ranges[time_range]
        except KeyError:
            known = ", ".join(sorted(self._config.time_ranges))
            raise ValueError(f"Unknown time range {time_range!r} (expected one of: {known})") from None

    def _daily(self, events: list[VisitEvent], time_range: str, now: datetime) -> list[DailyBucket]:
        start = now - timedelta(days=self.range_days(time_range))
        buckets = aggregate_daily(events, start, now, self._clock.tz)
        if self._config.zero_fill_daily:
            buckets = zero_fill_daily(
                buckets, local_date(start, self._clock.tz), local_date(now, self._clock.tz)
            )
        return buckets

    def daily(self, time_range: str = "week", now: datetime | None = None) -> list[DailyBucket]:
        """Daily visit series for the selected range."""
        at = now or self._clock.now()
        start = at - timedelta(days=self.range_days(time_range))
        events = self._visits.fetch_events(VisitFilter(since=start, until=at))
        return self._daily(events, time_range, at)

    def build(self, time_range: str = "week", now: datetime | None = None) -> DashboardSummary:
        """Assemble the full dashboard summary."""
        at = now or self._clock.now()
        self.range_days(time_range)

        events = self._visits.fetch_events(VisitFilter())
        stats = self._stats.get()

        if stats is None:
            logger.info("No visit counter yet, using %d logged events as total", len(events))
            total_visits, last_updated = len(events), None
        else:
            total_visits, last_updated = stats.total_visits, stats.last_updated

        home = HomeVisitCounts(
            today=count_home_visits(events, start_of_day(at, self._clock.tz), at),
            last_7_days=count_home_visits(events, at - timedelta(days=7), at),
            last_30_days=count_home_visits(events, at - timedelta(days=30), at),
        )

        return DashboardSummary(
            time_range=time_range,  # type: ignore[arg-type]
            generated_at=at,
            total_visits=total_visits,
            last_updated=last_updated,
            home=home,
            daily=self._daily(events, time_range, at),
            projects=aggregate_by_project(events),
            devices=aggregate_by_device(events),
            browsers=aggregate_by_browser(events),
            referrers=aggregate_by_referrer(events),
            locations=aggregate_by_location(events, self._config.city_limit),
        )
