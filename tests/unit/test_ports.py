from typing import Protocol

from src.adapters.clock import FixedClock, SystemClock
from src.adapters.kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore, ScopedKeyValueStore
from src.adapters.sqlite.repos import (
    SQLiteContactRepo,
    SQLiteProjectRepo,
    SQLiteVisitRepo,
    SQLiteVisitStatsRepo,
)
from src.components.ordering import OrderRepoPort
from src.ports.clock import ClockPort
from src.ports.kv_store import KeyValueStorePort
from src.ports.repo import ContactRepoPort, ProjectRepoPort, VisitRepoPort, VisitStatsRepoPort


def public_methods(cls: type) -> set[str]:
    return {name for name in dir(cls) if not name.startswith("_") and callable(getattr(cls, name))}


def test_ports_are_protocols():
    """Verify all defined ports inherit from Protocol."""
    for port in (
        ProjectRepoPort,
        VisitRepoPort,
        VisitStatsRepoPort,
        ContactRepoPort,
        KeyValueStorePort,
        ClockPort,
        OrderRepoPort,
    ):
        assert issubclass(port, Protocol)


def test_adapters_cover_their_ports():
    pairs = [
        (SQLiteProjectRepo, ProjectRepoPort),
        (SQLiteProjectRepo, OrderRepoPort),
        (SQLiteVisitRepo, VisitRepoPort),
        (SQLiteVisitStatsRepo, VisitStatsRepoPort),
        (SQLiteContactRepo, ContactRepoPort),
        (InMemoryKeyValueStore, KeyValueStorePort),
        (JsonFileKeyValueStore, KeyValueStorePort),
        (ScopedKeyValueStore, KeyValueStorePort),
        (SystemClock, ClockPort),
        (FixedClock, ClockPort),
    ]

    for adapter, port in pairs:
        missing = public_methods(port) - public_methods(adapter)
        assert not missing, f"{adapter.__name__} lacks {sorted(missing)}"
