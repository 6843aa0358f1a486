"""Jotter: tagged notes with a normalized, persisted data layer.

Layout of a data directory (FileStorage):
    ~/.jotter/data/
    ├── NOTES.json    # [{"id", "title", "markdown", "tagIds"}]
    └── TAGS.json     # [{"id", "label"}]
"""

from jotter.core import Notebook
from jotter.errors import ConfigError, CorruptPersistedStateError, JotterError
from jotter.models import DenormalizedNote, NormalizedNote, Tag

__all__ = [
    "Notebook",
    "Tag",
    "NormalizedNote",
    "DenormalizedNote",
    "JotterError",
    "ConfigError",
    "CorruptPersistedStateError",
]
