"""Identifier generation."""

from __future__ import annotations

import uuid
from typing import Callable, Container

IdFactory = Callable[[], str]


def new_id() -> str:
    return str(uuid.uuid4())


def fresh_id(factory: IdFactory, taken: Container[str]) -> str:
    """Draw ids from ``factory`` until one is not in ``taken``."""
    while True:
        candidate = factory()
        if candidate not in taken:
            return candidate
