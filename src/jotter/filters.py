"""Title and tag filtering over the denormalized view."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from jotter.models import DenormalizedNote, Tag


def title_matches(note: DenormalizedNote, title_query: str) -> bool:
    if not title_query:
        return True
    return title_query.casefold() in note.title.casefold()


def tags_match(note: DenormalizedNote, tag_ids: set[str]) -> bool:
    """True when every queried tag id is among the note's resolved tags."""
    if not tag_ids:
        return True
    return tag_ids <= {tag.id for tag in note.tags}


def filter_notes(
    view: Sequence[DenormalizedNote],
    title_query: str = "",
    tag_query: Iterable[Tag] = (),
) -> list[DenormalizedNote]:
    """Notes matching the title substring AND carrying all queried tags.

    An empty title query or an empty tag query matches everything. The
    relative order of ``view`` is kept.
    """
    tag_ids = {tag.id for tag in tag_query}
    return [
        note for note in view if title_matches(note, title_query) and tags_match(note, tag_ids)
    ]
