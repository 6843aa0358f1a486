"""In-process storage, for tests and embedding."""

from __future__ import annotations


class MemoryStorage:
    """Dict-backed storage. Counts reads and writes per key."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.reads: dict[str, int] = {}
        self.writes: dict[str, int] = {}

    def read(self, key: str) -> str | None:
        self.reads[key] = self.reads.get(key, 0) + 1
        return self._data.get(key)

    def write(self, key: str, payload: str) -> None:
        self.writes[key] = self.writes.get(key, 0) + 1
        self._data[key] = payload
