"""
Local calendar helpers.

Naive datetimes are taken to be local already. Aware datetimes are
converted into ``tz`` when one is given, otherwise into the host's local
zone as it applies at that instant (DST included).
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo


def to_local(ts: datetime, tz: tzinfo | None = None) -> datetime:
    """Express ``ts`` in the local zone."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(tz)


def local_date(ts: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of ``ts`` in the local zone."""
    return to_local(ts, tz).date()


def start_of_day(ts: datetime, tz: tzinfo | None = None) -> datetime:
    """Local midnight of the day containing ``ts``."""
    midnight = to_local(ts, tz).replace(hour=0, minute=0, second=0, microsecond=0)
    if tz is None and ts.tzinfo is not None:
        # Host zone: the offset at midnight can differ from the one at ts.
        return midnight.replace(tzinfo=None).astimezone()
    return midnight


def is_new_day(now: datetime, previous: datetime, tz: tzinfo | None = None) -> bool:
    """True when ``now`` falls on a later local calendar date than ``previous``."""
    return local_date(now, tz) > local_date(previous, tz)
