from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from src.adapters.clock import FixedClock
from src.adapters.kv_store import InMemoryKeyValueStore
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api import deps
from src.api.main import app
from src.app_shell.config import Settings
from src.rules.models import Rules

NOW = datetime(2025, 10, 18, 15, 0, tzinfo=UTC)


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    monkeypatch.setenv("PORTFOLIO_DATA_DIR", str(tmp_path))
    settings = Settings()
    SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    return settings


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW, tz=UTC)


@pytest.fixture
def session_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def limits_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def client(
    settings: Settings,
    rules: Rules,
    clock: FixedClock,
    session_store: InMemoryKeyValueStore,
    limits_store: InMemoryKeyValueStore,
):
    """Client for the real app, backed by a temporary database."""
    app.dependency_overrides[deps.get_settings] = lambda: settings
    app.dependency_overrides[deps.get_rules] = lambda: rules
    app.dependency_overrides[deps.get_clock] = lambda: clock
    app.dependency_overrides[deps.get_session_store] = lambda: session_store
    app.dependency_overrides[deps.get_limits_store] = lambda: limits_store

    yield TestClient(app)

    app.dependency_overrides.clear()
