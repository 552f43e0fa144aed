from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Request

from src.adapters.clock import SystemClock
from src.adapters.kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore
from src.adapters.sqlite.repos import (
    SQLiteContactRepo,
    SQLiteProjectRepo,
    SQLiteVisitRepo,
    SQLiteVisitStatsRepo,
)
from src.app_shell.config import Settings
from src.ports.clock import ClockPort
from src.ports.kv_store import KeyValueStorePort
from src.rules.loader import load_rules
from src.rules.models import Rules

SESSION_HEADER = "X-Session-Id"
SESSION_COOKIE = "session_id"


# --- Settings ---
@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Clock ---
@lru_cache
def _clock_for(tz_name: str | None) -> SystemClock:
    return SystemClock(tz_name)


def get_clock(rules: Rules = Depends(get_rules)) -> ClockPort:
    """Get clock singleton for the configured zone."""
    return _clock_for(rules.ops.timezone)


# --- Repos ---
def get_project_repo(settings: Settings = Depends(get_settings)) -> SQLiteProjectRepo:
    return SQLiteProjectRepo(settings.db_path)


def get_visit_repo(settings: Settings = Depends(get_settings)) -> SQLiteVisitRepo:
    return SQLiteVisitRepo(settings.db_path)


def get_visit_stats_repo(settings: Settings = Depends(get_settings)) -> SQLiteVisitStatsRepo:
    return SQLiteVisitStatsRepo(settings.db_path)


def get_contact_repo(settings: Settings = Depends(get_settings)) -> SQLiteContactRepo:
    return SQLiteContactRepo(settings.db_path)


# --- Key-value stores ---

# Session flags live for the process lifetime only.
_session_store_instance: InMemoryKeyValueStore | None = None


def get_session_store() -> KeyValueStorePort:
    """Get session store singleton."""
    global _session_store_instance
    if _session_store_instance is None:
        _session_store_instance = InMemoryKeyValueStore()
    return _session_store_instance


@lru_cache
def _limits_store_for(path: Path) -> JsonFileKeyValueStore:
    return JsonFileKeyValueStore(path)


def get_limits_store(settings: Settings = Depends(get_settings)) -> KeyValueStorePort:
    """Rate limit records survive restarts; one store per file for the process."""
    return _limits_store_for(settings.kv_path)


# --- Request identity ---
def get_client_key(request: Request) -> str:
    """First X-Forwarded-For hop, else the peer address."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client is not None:
        return request.client.host
    return "unknown"


def get_session_key(request: Request, client_key: str = Depends(get_client_key)) -> str:
    header = request.headers.get(SESSION_HEADER, "").strip()
    if header:
        return header
    cookie = request.cookies.get(SESSION_COOKIE, "").strip()
    if cookie:
        return cookie
    return client_key
