"""Key-value storage port used by the appliance store."""

from __future__ import annotations

from typing import Dict, Optional, Protocol


class KeyValueStore(Protocol):
    """Minimal string store scoped to one user (browser localStorage shaped)."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStore:
    """Dict-backed store. Used for tests and for request-scoped merges."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
