"""Visibility flag and the capability shared by visibility-gated resources."""
from __future__ import annotations

from enum import Enum
from typing import Protocol


class Visibility(str, Enum):
    """Third-party read access marker on channels and posts."""

    PUBLIC = "public"
    PRIVATE = "private"


class VisibleResource(Protocol):
    """A resource that has a single owner and a visibility flag."""

    owner_id: str

    def is_owned_by(self, user_id: str | None) -> bool: ...

    @property
    def is_visible(self) -> bool: ...
