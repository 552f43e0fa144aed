from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo


class SystemClock:
    """
    Wall clock.

    With an IANA zone name readings are in that zone. Without one ``tz`` is
    None and the host's local zone is resolved on every reading, so DST
    changes apply in long-running processes.
    """

    def __init__(self, tz_name: str | None = None) -> None:
        self.tz: tzinfo | None = ZoneInfo(tz_name) if tz_name else None

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(self.tz)


class FixedClock:
    """Clock frozen at a given instant; tests move it with set()."""

    def __init__(self, at: datetime, tz: tzinfo | None = None) -> None:
        self._at = at
        self.tz = tz

    def now(self) -> datetime:
        return self._at

    def set(self, at: datetime) -> None:
        self._at = at
