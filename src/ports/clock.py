from datetime import datetime, tzinfo
from typing import Protocol


class ClockPort(Protocol):
    # Local zone for calendar-day boundaries; None means "use the offsets as given".
    tz: tzinfo | None

    def now(self) -> datetime:
        """Return current local time."""
        ...
