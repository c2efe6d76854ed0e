# src/tasktrack/storage/memory.py

from __future__ import annotations


class InMemoryStorage:
    """Dict-backed StorageAdapter. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self._data.get(key)

    def save(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
