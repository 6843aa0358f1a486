"""Note and tag value types, and their JSON wire shapes.

Notes are stored normalized (tags referenced by id). The denormalized form
carries resolved ``Tag`` values and is never persisted.

Wire shapes (the durable layout, no schema version):
    TAGS  -> [{"id": str, "label": str}, ...]
    NOTES -> [{"id": str, "title": str, "markdown": str, "tagIds": [str]}, ...]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _require_str(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"field '{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Tag:
    """A reusable label. ``id`` is stable for the tag's whole life."""

    id: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label}

    @classmethod
    def from_dict(cls, data: dict) -> Tag:
        return cls(id=_require_str(data, "id"), label=_require_str(data, "label"))


@dataclass(frozen=True)
class NormalizedNote:
    """The durable form of a note."""

    id: str
    title: str
    body: str
    tag_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "markdown": self.body,
            "tagIds": list(self.tag_ids),
        }

    @classmethod
    def from_dict(cls, data: dict) -> NormalizedNote:
        tag_ids = data["tagIds"]
        if not isinstance(tag_ids, list) or not all(isinstance(t, str) for t in tag_ids):
            raise TypeError("field 'tagIds' must be a list of strings")
        return cls(
            id=_require_str(data, "id"),
            title=_require_str(data, "title"),
            body=_require_str(data, "markdown"),
            tag_ids=tuple(tag_ids),
        )


@dataclass(frozen=True)
class DenormalizedNote:
    """A note with its tag ids resolved against the registry."""

    id: str
    title: str
    body: str
    tags: tuple[Tag, ...] = field(default_factory=tuple)


def _require_unique_ids(items: list) -> None:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"duplicate id {item.id!r}")
        seen.add(item.id)


def encode_tags(tags: list[Tag]) -> list[dict]:
    return [tag.to_dict() for tag in tags]


def decode_tags(payload: Any) -> list[Tag]:
    if not isinstance(payload, list):
        raise TypeError(f"expected a JSON array, got {type(payload).__name__}")
    tags = [Tag.from_dict(item) for item in payload]
    _require_unique_ids(tags)
    return tags


def encode_notes(notes: list[NormalizedNote]) -> list[dict]:
    return [note.to_dict() for note in notes]


def decode_notes(payload: Any) -> list[NormalizedNote]:
    if not isinstance(payload, list):
        raise TypeError(f"expected a JSON array, got {type(payload).__name__}")
    notes = [NormalizedNote.from_dict(item) for item in payload]
    _require_unique_ids(notes)
    return notes
