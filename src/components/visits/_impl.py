"""
VisitTrackingService - Page visit logging with per-session deduplication.

Each browser session is identified by a session key. Flags kept in a shared
key-value store (scoped per session) make sure a page is logged at most once
per session.

Key behaviors:
- Home flag "home_visit_tracked", project flag "project_<id>_visit_tracked";
  each flag has a "<flag>_time" companion holding epoch milliseconds
- Flags older than the TTL are dropped by a sweep that runs at most once per
  cleanup interval
- Visitor ids are reused within a session, else "visitor_<ms>_<9 base36>"
- Location is recorded only when enabled; referrer defaults to "Direct Link"
- Flags are set and the counter bumped only after the insert succeeded
"""

from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from src.adapters.kv_store import ScopedKeyValueStore
from src.domain.entities import DIRECT_LINK, UNKNOWN, PageType, VisitEvent
from src.ports.repo import RepositoryError

from .models import TrackResult, VisitContext
from .ports import (
    ClockPort,
    KeyValueStoreError,
    KeyValueStorePort,
    VisitCounterPort,
    VisitWriterPort,
)

logger = logging.getLogger(__name__)

HOME_FLAG = "home_visit_tracked"
VISITOR_ID_KEY = "visitor_id"
TIME_SUFFIX = "_time"
CLEANUP_KEY = "last_cleanup_time"
SESSION_SCOPE = "session"

BASE36 = string.digits + string.ascii_lowercase
VISITOR_SUFFIX_LENGTH = 9


# --- Configuration ---


@dataclass(frozen=True)
class TrackingConfig:
    """Visit tracking configuration."""

    track_location: bool = False
    flag_ttl_seconds: int = 1800
    cleanup_interval_seconds: int = 1800


DEFAULT_CONFIG = TrackingConfig()


# --- Pure Functions ---


def epoch_ms(ts: datetime) -> int:
    return int(ts.timestamp() * 1000)


def project_flag(project_id: str) -> str:
    return f"project_{project_id}_visit_tracked"


def generate_visitor_id(now: datetime) -> str:
    """visitor_<epoch ms>_<9 random base36 chars>"""
    suffix = "".join(secrets.choice(BASE36) for _ in range(VISITOR_SUFFIX_LENGTH))
    return f"visitor_{epoch_ms(now)}_{suffix}"


def build_event(
    page_type: PageType,
    visitor_id: str,
    now: datetime,
    context: VisitContext,
    track_location: bool,
    project_id: str | None = None,
    project_name: str | None = None,
) -> VisitEvent:
    """Assemble the VisitEvent to log, applying the defaults."""
    if track_location:
        country = (context.country or "").strip() or UNKNOWN
        city = (context.city or "").strip() or UNKNOWN
    else:
        country = city = UNKNOWN

    return VisitEvent(
        page_type=page_type,
        visitor_id=visitor_id,
        timestamp=now,
        project_id=project_id,
        project_name=project_name,
        user_agent=context.user_agent,
        referrer=(context.referrer or "").strip() or DIRECT_LINK,
        country=country,
        city=city,
    )


# --- Visit Tracking Service ---


class VisitTrackingService:
    """
    Visit tracking service.

    ``sessions`` is the shared, unscoped store; the service scopes it per
    session key and sweeps expired flags across all sessions.
    """

    def __init__(
        self,
        visits: VisitWriterPort,
        stats: VisitCounterPort,
        sessions: KeyValueStorePort,
        clock: ClockPort,
        config: TrackingConfig | None = None,
        id_factory: Callable[[datetime], str] = generate_visitor_id,
    ) -> None:
        """Initialize service."""
        self._visits = visits
        self._stats = stats
        self._sessions = sessions
        self._clock = clock
        self._config = config or DEFAULT_CONFIG
        self._id_factory = id_factory

    # --- Session Flags ---

    def session(self, session_key: str) -> KeyValueStorePort:
        """Store view for one session."""
        return ScopedKeyValueStore(self._sessions, f"{SESSION_SCOPE}:{session_key}")

    def cleanup_sessions(self, now: datetime | None = None) -> int:
        """
        Drop entries whose "_time" companion is older than the flag TTL.

        Does nothing if the last sweep was less than the cleanup interval ago.

        Returns:
            Number of entries removed.
        """
        now_ms = epoch_ms(now or self._clock.now())

        last = self._sessions.get(CLEANUP_KEY)
        if isinstance(last, int) and now_ms - last < self._config.cleanup_interval_seconds * 1000:
            return 0

        ttl_ms = self._config.flag_ttl_seconds * 1000
        removed = 0
        for key in self._sessions.keys():
            if key == CLEANUP_KEY or key.endswith(TIME_SUFFIX):
                continue
            stamp = self._sessions.get(key + TIME_SUFFIX)
            if isinstance(stamp, int) and now_ms - stamp > ttl_ms:
                self._sessions.remove(key)
                self._sessions.remove(key + TIME_SUFFIX)
                removed += 1

        self._sessions.set(CLEANUP_KEY, now_ms)
        if removed:
            logger.info("Removed %d expired session entries", removed)
        return removed

    def _visitor_id(self, session: KeyValueStorePort, now: datetime) -> str:
        existing = session.get(VISITOR_ID_KEY)
        visitor_id = existing if isinstance(existing, str) else self._id_factory(now)
        session.set(VISITOR_ID_KEY, visitor_id)
        session.set(VISITOR_ID_KEY + TIME_SUFFIX, epoch_ms(now))
        return visitor_id

    # --- Tracking ---

    def _track(
        self,
        session_key: str,
        flag: str,
        page_type: PageType,
        context: VisitContext,
        now: datetime | None,
        project_id: str | None = None,
        project_name: str | None = None,
    ) -> TrackResult:
        at = now or self._clock.now()

        try:
            self.cleanup_sessions(at)
        except KeyValueStoreError as e:
            logger.warning("Session cleanup failed: %s", e)

        session = self.session(session_key)
        if session.get(flag):
            existing = session.get(VISITOR_ID_KEY)
            return TrackResult(
                tracked=False,
                visitor_id=existing if isinstance(existing, str) else None,
                duplicate=True,
            )

        visitor_id = self._visitor_id(session, at)
        event = build_event(
            page_type,
            visitor_id,
            at,
            context,
            self._config.track_location,
            project_id=project_id,
            project_name=project_name,
        )

        try:
            self._visits.insert(event)
        except RepositoryError as e:
            logger.error("Failed to record %s visit: %s", page_type, e)
            return TrackResult(tracked=False, visitor_id=visitor_id)

        session.set(flag, True)
        session.set(flag + TIME_SUFFIX, epoch_ms(at))

        try:
            self._stats.increment(at)
        except RepositoryError as e:
            logger.error("Visit recorded but total visit count not updated: %s", e)

        return TrackResult(tracked=True, visitor_id=visitor_id)

    def track_home(
        self,
        session_key: str,
        context: VisitContext | None = None,
        now: datetime | None = None,
    ) -> TrackResult:
        """Log a home page visit unless this session already did."""
        return self._track(session_key, HOME_FLAG, "home", context or VisitContext(), now)

    def track_project(
        self,
        session_key: str,
        project_id: str,
        project_name: str | None = None,
        context: VisitContext | None = None,
        now: datetime | None = None,
    ) -> TrackResult:
        """Log a project page visit unless this session already saw that project."""
        return self._track(
            session_key,
            project_flag(project_id),
            "project",
            context or VisitContext(),
            now,
            project_id=str(project_id),
            project_name=project_name,
        )
