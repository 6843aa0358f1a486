"""Durable medium protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Storage(Protocol):
    """Host-provided key-value medium holding serialized payloads."""

    def read(self, key: str) -> str | None:
        """Return the payload stored under ``key``, or None if absent.

        Raises CorruptPersistedStateError when the stored bytes are not text.
        """
        ...

    def write(self, key: str, payload: str) -> None:
        """Durably store ``payload`` under ``key`` before returning."""
        ...
