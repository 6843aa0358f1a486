"""Configuration loading from environment variables and jotter.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from jotter.errors import ConfigError
from jotter.storage.file import validate_key

_DEFAULT_DATA_DIR = Path.home() / ".jotter" / "data"
_CONFIG_FILENAME = "jotter.toml"

TAG_DELETION_CHOICES = ("dangling", "cascade")


@dataclass
class StorageConfig:
    """Durable keys for the two persisted collections."""

    notes_key: str = "NOTES"
    tags_key: str = "TAGS"


@dataclass
class JotterConfig:
    """Top-level Jotter configuration."""

    data_dir: Path = _DEFAULT_DATA_DIR
    storage: StorageConfig = field(default_factory=StorageConfig)
    tag_deletion: str = "dangling"
    log_level: str = "WARNING"


def _read_toml(path: Path) -> dict:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e


def load_config(config_path: Path | None = None) -> JotterConfig:
    """Load configuration from environment variables and optional jotter.toml.

    Priority: environment variables > jotter.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = _read_toml(config_path)
    else:
        # Search current dir and ~/.jotter/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".jotter" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = _read_toml(candidate)
                break

    storage_data = file_data.get("storage", {})

    data_dir = os.getenv("JOTTER_DATA_DIR", file_data.get("data_dir"))
    tag_deletion = os.getenv("JOTTER_TAG_DELETION", file_data.get("tag_deletion", "dangling"))
    if tag_deletion not in TAG_DELETION_CHOICES:
        raise ConfigError(
            f"tag_deletion must be one of {TAG_DELETION_CHOICES}, got {tag_deletion!r}"
        )

    storage = StorageConfig(
        notes_key=storage_data.get("notes_key", "NOTES"),
        tags_key=storage_data.get("tags_key", "TAGS"),
    )
    for key in (storage.notes_key, storage.tags_key):
        try:
            validate_key(key)
        except ValueError as e:
            raise ConfigError(str(e)) from e
    if storage.notes_key == storage.tags_key:
        raise ConfigError(f"notes_key and tags_key must differ, both are {storage.notes_key!r}")

    return JotterConfig(
        data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
        storage=storage,
        tag_deletion=tag_deletion,
        log_level=os.getenv("JOTTER_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
