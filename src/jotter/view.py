"""Denormalized view: notes joined with their resolved tags."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from jotter.models import DenormalizedNote, NormalizedNote, Tag

if TYPE_CHECKING:
    from jotter.registry import TagRegistry
    from jotter.repository import NoteRepository

logger = logging.getLogger(__name__)


def join(notes: Sequence[NormalizedNote], tags: Sequence[Tag]) -> list[DenormalizedNote]:
    """Resolve each note's tag ids against ``tags``.

    Resolved tags follow registry order, not the note's ``tag_ids`` order.
    Ids with no matching tag (dangling references) are dropped.
    """
    result = []
    for note in notes:
        wanted = set(note.tag_ids)
        result.append(
            DenormalizedNote(
                id=note.id,
                title=note.title,
                body=note.body,
                tags=tuple(tag for tag in tags if tag.id in wanted),
            )
        )
    return result


class DenormalizationView:
    """Caches ``join`` over a repository and registry.

    Recomputes only when either backing store's version has moved since the
    last computation. Each call hands out a new list so callers cannot disturb the cache.
    """

    def __init__(self, repository: NoteRepository, registry: TagRegistry) -> None:
        self.repository = repository
        self.registry = registry
        self._cached: list[DenormalizedNote] | None = None
        self._cached_versions: tuple[int, int] | None = None
        self.computations = 0

    def current(self) -> list[DenormalizedNote]:
        versions = (self.repository.version, self.registry.version)
        if self._cached is None or versions != self._cached_versions:
            self._cached = join(self.repository.list_notes(), self.registry.list_tags())
            self._cached_versions = versions
            self.computations += 1
            logger.debug("Recomputed view: %d notes (versions %s)", len(self._cached), versions)
        return list(self._cached)
