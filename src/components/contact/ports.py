"""
Contact component port definitions.
"""

from __future__ import annotations

from src.ports.clock import ClockPort
from src.ports.kv_store import KeyValueStorePort
from src.ports.repo import ContactRepoPort

__all__ = ["ClockPort", "ContactRepoPort", "KeyValueStorePort"]
