"""Note repository: the authoritative, persisted list of normalized notes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from jotter.ids import IdFactory, fresh_id, new_id
from jotter.models import NormalizedNote, decode_notes, encode_notes
from jotter.storage import PersistentStore, Storage

logger = logging.getLogger(__name__)

NOTES_KEY = "NOTES"


class NoteRepository:
    """Ordered notes, persisted under one key. Tags are referenced by id only."""

    def __init__(
        self, store: PersistentStore[list[NormalizedNote]], id_factory: IdFactory = new_id
    ) -> None:
        self.store = store
        self._new_id = id_factory

    @classmethod
    def open(
        cls, storage: Storage, key: str = NOTES_KEY, id_factory: IdFactory = new_id
    ) -> NoteRepository:
        store = PersistentStore(storage, key, list, encode=encode_notes, decode=decode_notes)
        return cls(store, id_factory)

    @property
    def version(self) -> int:
        return self.store.version

    def list_notes(self) -> list[NormalizedNote]:
        return list(self.store.get())

    def get(self, note_id: str) -> NormalizedNote | None:
        for note in self.store.get():
            if note.id == note_id:
                return note
        return None

    def create(self, title: str, body: str, tag_ids: Iterable[str]) -> str:
        notes = self.store.get()
        note = NormalizedNote(
            id=fresh_id(self._new_id, {n.id for n in notes}),
            title=title,
            body=body,
            tag_ids=tuple(tag_ids),
        )
        self.store.set([*notes, note])
        logger.info("Created note %s", note.id)
        return note.id

    def update(self, note_id: str, title: str, body: str, tag_ids: Iterable[str]) -> None:
        notes = self.store.get()
        if not any(n.id == note_id for n in notes):
            logger.debug("Note %s not found for update", note_id)
            return
        tag_ids = tuple(tag_ids)
        self.store.set(
            [
                replace(n, title=title, body=body, tag_ids=tag_ids) if n.id == note_id else n
                for n in notes
            ]
        )
        logger.info("Updated note %s", note_id)

    def delete(self, note_id: str) -> None:
        notes = self.store.get()
        if not any(n.id == note_id for n in notes):
            logger.debug("Note %s not found for deletion", note_id)
            return
        self.store.set([n for n in notes if n.id != note_id])
        logger.info("Deleted note %s", note_id)

    def strip_tag(self, tag_id: str) -> int:
        """Remove ``tag_id`` from every note's tag ids. Returns notes changed."""
        notes = self.store.get()
        changed = 0
        result = []
        for note in notes:
            if tag_id in note.tag_ids:
                note = replace(note, tag_ids=tuple(t for t in note.tag_ids if t != tag_id))
                changed += 1
            result.append(note)
        if changed:
            self.store.set(result)
        logger.info("Stripped tag %s from %d notes", tag_id, changed)
        return changed
