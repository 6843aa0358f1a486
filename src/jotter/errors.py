"""Exception types raised by jotter."""

from __future__ import annotations


class JotterError(Exception):
    """Base class for all jotter errors."""


class CorruptPersistedStateError(JotterError):
    """A durable payload exists but cannot be decoded into the expected shape.

    Raised on read and never replaced by a default value: silently dropping
    stored notes would lose data the user cannot get back.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Persisted state under '{key}' is corrupt: {reason}")
        self.key = key
        self.reason = reason


class ConfigError(JotterError):
    """Invalid configuration value."""
