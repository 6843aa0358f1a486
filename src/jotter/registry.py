"""Tag registry: the authoritative, persisted list of tags."""

from __future__ import annotations

import logging
from dataclasses import replace

from jotter.ids import IdFactory, fresh_id, new_id
from jotter.models import Tag, decode_tags, encode_tags
from jotter.storage import PersistentStore, Storage

logger = logging.getLogger(__name__)

TAGS_KEY = "TAGS"


class TagRegistry:
    """Ordered tags, persisted under one key. Labels need not be unique."""

    def __init__(self, store: PersistentStore[list[Tag]], id_factory: IdFactory = new_id) -> None:
        self.store = store
        self._new_id = id_factory

    @classmethod
    def open(cls, storage: Storage, key: str = TAGS_KEY, id_factory: IdFactory = new_id) -> TagRegistry:
        store = PersistentStore(storage, key, list, encode=encode_tags, decode=decode_tags)
        return cls(store, id_factory)

    @property
    def version(self) -> int:
        return self.store.version

    def list_tags(self) -> list[Tag]:
        return list(self.store.get())

    def get(self, tag_id: str) -> Tag | None:
        for tag in self.store.get():
            if tag.id == tag_id:
                return tag
        return None

    def find_by_label(self, label: str) -> Tag | None:
        """First tag whose label equals ``label`` exactly."""
        for tag in self.store.get():
            if tag.label == label:
                return tag
        return None

    def create(self, label: str) -> Tag:
        tags = self.store.get()
        tag = Tag(id=fresh_id(self._new_id, {t.id for t in tags}), label=label)
        self.store.set([*tags, tag])
        logger.info("Created tag %s (%s)", tag.id, label)
        return tag

    def rename(self, tag_id: str, label: str) -> None:
        tags = self.store.get()
        if not any(t.id == tag_id for t in tags):
            logger.debug("Tag %s not found for rename", tag_id)
            return
        self.store.set([replace(t, label=label) if t.id == tag_id else t for t in tags])
        logger.info("Renamed tag %s to %s", tag_id, label)

    def delete(self, tag_id: str) -> None:
        """Remove a tag. Notes referencing it are not touched."""
        tags = self.store.get()
        if not any(t.id == tag_id for t in tags):
            logger.debug("Tag %s not found for deletion", tag_id)
            return
        self.store.set([t for t in tags if t.id != tag_id])
        logger.info("Deleted tag %s", tag_id)
