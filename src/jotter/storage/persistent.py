"""Lazy-initialized, write-through persisted value bound to one storage key."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Generic, TypeVar, Union

from jotter.errors import CorruptPersistedStateError
from jotter.storage.base import Storage

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNRESOLVED = object()


class PersistentStore(Generic[T]):
    """Holds one value of type ``T`` mirrored to ``storage`` under ``key``.

    The medium is read at most once per instance, on the first ``get()``.
    When nothing is stored yet, ``initial`` is used: either the value itself
    or, if callable, the result of calling it (once). Every ``set()`` writes
    through before returning.

    ``version`` increases on every ``set()``; derived views use it to decide
    whether to recompute.
    """

    def __init__(
        self,
        storage: Storage,
        key: str,
        initial: Union[T, Callable[[], T]],
        *,
        encode: Callable[[T], Any] | None = None,
        decode: Callable[[Any], T] | None = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self._initial = initial
        self._encode = encode or (lambda value: value)
        self._decode = decode or (lambda payload: payload)
        self._value: Any = _UNRESOLVED
        self._error: CorruptPersistedStateError | None = None
        self.version = 0

    def get(self) -> T:
        if self._error is not None:
            raise self._error
        if self._value is _UNRESOLVED:
            self._value = self._load()
        return self._value

    def set(self, value: T) -> None:
        payload = json.dumps(self._encode(value), ensure_ascii=False)
        self.storage.write(self.key, payload)
        self._value = value
        self._error = None
        self.version += 1

    def _load(self) -> T:
        try:
            raw = self.storage.read(self.key)
        except CorruptPersistedStateError as e:
            self._error = e
            logger.error("Stored value for %s is unreadable: %s", self.key, e.reason)
            raise
        if raw is None:
            logger.debug("No stored value for %s, using initial value", self.key)
            if callable(self._initial):
                return self._initial()
            return self._initial
        try:
            value = self._decode(json.loads(raw))
        except (ValueError, KeyError, TypeError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError; deeply nested arrays hit RecursionError
            self._error = CorruptPersistedStateError(self.key, str(e))
            logger.error("Failed to decode stored value for %s: %s", self.key, e)
            raise self._error from e
        logger.debug("Loaded %s from storage", self.key)
        return value
