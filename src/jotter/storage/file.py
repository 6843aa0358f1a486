"""Directory-backed storage: one ``<KEY>.json`` file per key."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from jotter.errors import CorruptPersistedStateError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_key(key: str) -> None:
    """Raise ValueError unless ``key`` is usable as a file name stem."""
    if not isinstance(key, str) or not _KEY_RE.match(key) or key.startswith("."):
        raise ValueError(f"Invalid storage key: {key!r}")


class FileStorage:
    """Durable medium rooted at a data directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        validate_key(key)
        return self.root / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptPersistedStateError(key, f"not valid UTF-8: {e}") from e

    def write(self, key: str, payload: str) -> None:
        """Write via a temp file and rename so a crash never leaves half a payload."""
        path = self._path(key)
        tmp = path.with_name(f".{path.name}.tmp")
        with tmp.open("w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
        logger.debug("Wrote %s (%d bytes)", path, len(payload))
