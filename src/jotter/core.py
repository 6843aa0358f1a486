"""Notebook: the command/query surface the presentation layer talks to.

Responsibilities:
1. Own one TagRegistry and one NoteRepository, each on its own store
2. Accept full Tag objects from callers and store only their ids
3. Apply the tag deletion policy (dangling references or cascade)
4. Serve the visible note list: cached denormalized view, then filter
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Callable

from jotter.config import JotterConfig
from jotter.errors import ConfigError
from jotter.filters import filter_notes
from jotter.models import DenormalizedNote, Tag
from jotter.registry import TagRegistry
from jotter.repository import NoteRepository
from jotter.storage import FileStorage, Storage
from jotter.storage.file import validate_key
from jotter.view import DenormalizationView

logger = logging.getLogger(__name__)

TagDeletionPolicy = Callable[[NoteRepository, str], None]


def leave_dangling(repository: NoteRepository, tag_id: str) -> None:
    """Keep the deleted id in notes; the view simply stops resolving it."""


def cascade(repository: NoteRepository, tag_id: str) -> None:
    """Strip the deleted id from every note."""
    repository.strip_tag(tag_id)


TAG_DELETION_POLICIES: dict[str, TagDeletionPolicy] = {
    "dangling": leave_dangling,
    "cascade": cascade,
}


class Notebook:
    """Notes and tags for a single user, persisted through one storage medium."""

    def __init__(
        self,
        repository: NoteRepository,
        registry: TagRegistry,
        on_tag_deleted: TagDeletionPolicy = leave_dangling,
    ) -> None:
        self.repository = repository
        self.registry = registry
        self.view = DenormalizationView(repository, registry)
        self._on_tag_deleted = on_tag_deleted

    @classmethod
    def from_storage(
        cls,
        storage: Storage,
        *,
        notes_key: str = "NOTES",
        tags_key: str = "TAGS",
        tag_deletion: str = "dangling",
    ) -> Notebook:
        policy = TAG_DELETION_POLICIES.get(tag_deletion)
        if policy is None:
            raise ConfigError(f"Unknown tag deletion policy: {tag_deletion!r}")
        if not isinstance(notes_key, str) or not isinstance(tags_key, str):
            raise ConfigError("Storage keys must be strings")
        if notes_key == tags_key:
            raise ConfigError(f"Notes and tags cannot share the storage key {notes_key!r}")
        return cls(
            NoteRepository.open(storage, notes_key),
            TagRegistry.open(storage, tags_key),
            on_tag_deleted=policy,
        )

    @classmethod
    def open(cls, config: JotterConfig) -> Notebook:
        logger.debug("Opening notebook at %s", config.data_dir)
        for key in (config.storage.notes_key, config.storage.tags_key):
            try:
                validate_key(key)
            except ValueError as e:
                raise ConfigError(str(e)) from e
        return cls.from_storage(
            FileStorage(config.data_dir),
            notes_key=config.storage.notes_key,
            tags_key=config.storage.tags_key,
            tag_deletion=config.tag_deletion,
        )

    # ── Note commands ────────────────────────────────────────

    def create_note(self, title: str, body: str, tags: Iterable[Tag]) -> str:
        return self.repository.create(title, body, [tag.id for tag in tags])

    def update_note(self, note_id: str, title: str, body: str, tags: Iterable[Tag]) -> None:
        self.repository.update(note_id, title, body, [tag.id for tag in tags])

    def delete_note(self, note_id: str) -> None:
        self.repository.delete(note_id)

    # ── Tag commands ─────────────────────────────────────────

    def create_tag(self, label: str) -> Tag:
        return self.registry.create(label)

    def rename_tag(self, tag_id: str, label: str) -> None:
        self.registry.rename(tag_id, label)

    def delete_tag(self, tag_id: str) -> None:
        self.registry.delete(tag_id)
        self._on_tag_deleted(self.repository, tag_id)

    # ── Queries ──────────────────────────────────────────────

    def list_visible_notes(
        self, title_query: str = "", tag_query: Iterable[Tag] = ()
    ) -> list[DenormalizedNote]:
        return filter_notes(self.view.current(), title_query, tag_query)

    def get_note(self, note_id: str) -> DenormalizedNote | None:
        for note in self.view.current():
            if note.id == note_id:
                return note
        return None

    def list_tags(self) -> list[Tag]:
        return self.registry.list_tags()

    def note_count(self) -> int:
        return len(self.repository.list_notes())
