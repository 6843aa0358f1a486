"""Durable media and the persisted-value container built on them."""

from jotter.storage.base import Storage
from jotter.storage.file import FileStorage
from jotter.storage.memory import MemoryStorage
from jotter.storage.persistent import PersistentStore

__all__ = ["Storage", "FileStorage", "MemoryStorage", "PersistentStore"]
