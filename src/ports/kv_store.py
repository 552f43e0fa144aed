from typing import Protocol


class KeyValueStoreError(Exception):
    """Raised when a key-value store cannot be read or written."""


class KeyValueStorePort(Protocol):
    """
    Small local key-value store (string keys, JSON-compatible values).

    Stands in for browser local/session storage: durable implementations
    survive restarts, in-memory ones live as long as the process.
    """

    def get(self, key: str) -> object | None:
        ...

    def set(self, key: str, value: object) -> None:
        ...

    def remove(self, key: str) -> None:
        ...

    def keys(self) -> list[str]:
        ...
