"""
Rate limit component port definitions.
"""

from __future__ import annotations

from src.ports.clock import ClockPort
from src.ports.kv_store import KeyValueStoreError, KeyValueStorePort

__all__ = ["ClockPort", "KeyValueStoreError", "KeyValueStorePort"]
