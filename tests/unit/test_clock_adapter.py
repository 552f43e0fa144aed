import time
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from src.adapters.clock import FixedClock, SystemClock
from src.domain.calendar import local_date, start_of_day, to_local


@pytest.fixture
def new_york_host(monkeypatch):
    """Run with the host zone set to America/New_York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_system_clock():
    clock = SystemClock()
    now = clock.now()
    assert isinstance(now, datetime)
    assert now.tzinfo is not None
    # Sanity check: is it close to real now?
    diff = abs((datetime.now(UTC) - now).total_seconds())
    assert diff < 1.0


def test_system_clock_in_named_zone():
    clock = SystemClock("Africa/Nairobi")

    assert clock.tz == ZoneInfo("Africa/Nairobi")
    assert clock.now().utcoffset() == timedelta(hours=3)


class TestHostZone:
    """Without a configured zone, local dates follow the host's DST rules."""

    def test_zone_left_unresolved(self, new_york_host) -> None:
        clock = SystemClock()

        assert clock.tz is None
        assert clock.now().utcoffset() in (timedelta(hours=-5), timedelta(hours=-4))

    def test_local_date_on_both_sides_of_dst(self, new_york_host) -> None:
        tz = SystemClock().tz

        # 04:30 UTC is 23:30 EST the day before; 03:30 UTC is 23:30 EDT.
        assert local_date(datetime(2026, 12, 1, 4, 30, tzinfo=UTC), tz) == date(2026, 11, 30)
        assert local_date(datetime(2026, 7, 1, 3, 30, tzinfo=UTC), tz) == date(2026, 6, 30)
        assert to_local(datetime(2026, 12, 1, 12, tzinfo=UTC)).utcoffset() == timedelta(hours=-5)
        assert to_local(datetime(2026, 7, 1, 12, tzinfo=UTC)).utcoffset() == timedelta(hours=-4)

    def test_midnight_offset_on_change_day(self, new_york_host) -> None:
        """Clocks go back at 02:00 on 2026-11-01; midnight is still EDT."""
        midnight = start_of_day(datetime(2026, 11, 1, 18, 0, tzinfo=UTC))

        assert (midnight.year, midnight.month, midnight.day, midnight.hour) == (2026, 11, 1, 0)
        assert midnight.utcoffset() == timedelta(hours=-4)


def test_fixed_clock():
    at = datetime(2025, 10, 18, 12, 0, tzinfo=UTC)
    clock = FixedClock(at, tz=UTC)

    assert clock.now() == at
    clock.set(at + timedelta(hours=1))
    assert clock.now() == at + timedelta(hours=1)
