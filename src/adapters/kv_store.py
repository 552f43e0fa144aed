"""
Local key-value store adapters.

Implements KeyValueStorePort for the values the site keeps on the visitor's
side: rate-limit records (durable) and per-session visit flags.

Implementations:
- InMemoryKeyValueStore: process lifetime, used for session scope and tests
- JsonFileKeyValueStore: durable, a single JSON document rewritten atomically
  under a file lock (POSIX flock)
- ScopedKeyValueStore: prefixes keys so several clients share one backend
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import Lock
from typing import Any

from src.ports.kv_store import KeyValueStoreError, KeyValueStorePort


class InMemoryKeyValueStore:
    """Dict-backed store."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._lock = Lock()

    def get(self, key: str) -> object | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: object) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class JsonFileKeyValueStore:
    """
    File-backed store.

    The whole document is re-read on every access so several processes see
    each other's writes; writes go to a temp file that replaces the original.
    Every access holds an flock on ``<path>.lock``, which serializes
    read-modify-write cycles across threads, store instances and processes.
    """

    def __init__(self, path: str | Path, *, create_dirs: bool = True) -> None:
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")
        self._lock = Lock()

        if create_dirs:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _locked(self, exclusive: bool = True) -> Iterator[None]:
        with self._lock:
            try:
                lock_file = open(self.lock_path, "a")
            except OSError as e:
                raise KeyValueStoreError(f"Cannot lock key-value store {self.path}: {e}") from e
            with lock_file:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
                try:
                    yield
                finally:
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise KeyValueStoreError(f"Cannot read key-value store {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise KeyValueStoreError(f"Key-value store {self.path} is not a JSON object")
        return data

    def _dump(self, data: dict[str, Any]) -> None:
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, sort_keys=True)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise KeyValueStoreError(f"Cannot write key-value store {self.path}: {e}") from e

    def get(self, key: str) -> object | None:
        with self._locked(exclusive=False):
            return self._load().get(key)

    def set(self, key: str, value: object) -> None:
        with self._locked():
            data = self._load()
            data[key] = value
            self._dump(data)

    def remove(self, key: str) -> None:
        with self._locked():
            data = self._load()
            if key in data:
                del data[key]
                self._dump(data)

    def keys(self) -> list[str]:
        with self._locked(exclusive=False):
            return list(self._load())


class ScopedKeyValueStore:
    """View of another store restricted to keys under ``<scope>:``."""

    def __init__(self, inner: KeyValueStorePort, scope: str) -> None:
        self._inner = inner
        self._prefix = f"{scope}:"

    def get(self, key: str) -> object | None:
        return self._inner.get(self._prefix + key)

    def set(self, key: str, value: object) -> None:
        self._inner.set(self._prefix + key, value)

    def remove(self, key: str) -> None:
        self._inner.remove(self._prefix + key)

    def keys(self) -> list[str]:
        n = len(self._prefix)
        return [k[n:] for k in self._inner.keys() if k.startswith(self._prefix)]
