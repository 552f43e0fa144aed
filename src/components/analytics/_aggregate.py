"""
Visit aggregation - pure grouping of VisitEvents into dashboard buckets.

Key behaviors:
- Breakdowns are sorted by visits, descending; ties keep first-seen order
- Percentages are round(visits / total * 100, 1) of the breakdown's own total
- Daily buckets group by local calendar date and never invent empty days;
  zero_fill_daily does that as a separate step
- Empty input gives empty output
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date, datetime, timedelta, tzinfo
from typing import TypeVar

from src.domain.calendar import local_date
from src.domain.entities import VisitEvent

from ._classify import classify_browser, classify_device, location_part, referrer_domain
from .models import DailyBucket, LocationBreakdown, ProjectVisitBucket, VisitBucket

BucketT = TypeVar("BucketT", bound=VisitBucket)

DEFAULT_CITY_LIMIT = 10


# --- Helpers ---


def day_label(day: date) -> str:
    """Short chart label, e.g. "Oct 18"."""
    return f"{day:%b} {day.day}"


def percentage(visits: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(visits / total * 100, 1)


def sort_buckets(buckets: Iterable[BucketT]) -> list[BucketT]:
    """Descending by visits. sorted() is stable, so ties keep their order."""
    return sorted(buckets, key=lambda b: b.visits, reverse=True)


def count_by(names: Iterable[str]) -> list[VisitBucket]:
    """Count occurrences of each name into sorted buckets."""
    counts: dict[str, int] = {}
    for name in names:
        counts[name] = counts.get(name, 0) + 1
    return sort_buckets(VisitBucket(name=name, visits=n) for name, n in counts.items())


def with_percentages(buckets: Sequence[BucketT]) -> list[BucketT]:
    """Annotate each bucket with its share of the group total."""
    total = sum(b.visits for b in buckets)
    return [replace(b, percentage=percentage(b.visits, total)) for b in buckets]


# --- Daily Series ---


def aggregate_daily(
    events: Iterable[VisitEvent],
    start: datetime,
    end: datetime,
    tz: tzinfo | None = None,
) -> list[DailyBucket]:
    """
    Visits per local calendar date for events with start <= timestamp <= end.

    Only dates with at least one visit appear, in ascending order.
    """
    counts: dict[date, int] = {}
    for event in events:
        if start <= event.timestamp <= end:
            day = local_date(event.timestamp, tz)
            counts[day] = counts.get(day, 0) + 1

    return [DailyBucket(date=day, visits=counts[day], label=day_label(day)) for day in sorted(counts)]


def zero_fill_daily(buckets: Sequence[DailyBucket], first: date, last: date) -> list[DailyBucket]:
    """Insert zero-visit buckets for every missing date in [first, last]."""
    by_date = {b.date: b for b in buckets}
    filled = []

    day = first
    while day <= last:
        filled.append(by_date.get(day) or DailyBucket(date=day, visits=0, label=day_label(day)))
        day += timedelta(days=1)

    return filled


# --- Breakdowns ---


def aggregate_by_project(events: Iterable[VisitEvent]) -> list[ProjectVisitBucket]:
    """
    Project page visits grouped by (project_id, project_name).

    Unnamed projects are shown as "Project <id>".
    """
    counts: dict[tuple[str | None, str | None], int] = {}
    for event in events:
        if event.page_type != "project":
            continue
        key = (event.project_id, event.project_name)
        counts[key] = counts.get(key, 0) + 1

    buckets = [
        ProjectVisitBucket(name=name or f"Project {project_id}", visits=n, project_id=project_id)
        for (project_id, name), n in counts.items()
    ]
    return with_percentages(sort_buckets(buckets))


def aggregate_by_device(events: Iterable[VisitEvent]) -> list[VisitBucket]:
    return with_percentages(count_by(classify_device(e.user_agent) for e in events))


def aggregate_by_browser(events: Iterable[VisitEvent]) -> list[VisitBucket]:
    return with_percentages(count_by(classify_browser(e.user_agent) for e in events))


def aggregate_by_referrer(events: Iterable[VisitEvent]) -> list[VisitBucket]:
    """Visits per referrer host, or "Direct Link"."""
    return count_by(referrer_domain(e.referrer) for e in events)


def aggregate_by_location(
    events: Iterable[VisitEvent], city_limit: int = DEFAULT_CITY_LIMIT
) -> LocationBreakdown:
    """Countries and cities counted independently; only the top cities are kept."""
    events = list(events)
    return LocationBreakdown(
        countries=count_by(location_part(e.country) for e in events),
        cities=count_by(location_part(e.city) for e in events)[:city_limit],
    )


def count_home_visits(events: Iterable[VisitEvent], since: datetime, until: datetime | None = None) -> int:
    """Home page visits at or after ``since`` (and at or before ``until``)."""
    return sum(
        1
        for e in events
        if e.page_type == "home" and e.timestamp >= since and (until is None or e.timestamp <= until)
    )
