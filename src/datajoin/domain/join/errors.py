"""Errors raised by the data join."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Hashable


class KeySource(StrEnum):
    """Which input collection produced a duplicate key."""

    NEW = "new"
    OLD = "old"


class JoinError(Exception):
    """Base class for data join failures."""


class DuplicateKeyError(JoinError, ValueError):
    """Raised when two entries of one collection share a key."""

    def __init__(
        self,
        *,
        key: Hashable,
        first_index: int,
        second_index: int,
        source: KeySource = KeySource.NEW,
    ) -> None:
        self.key = key
        self.first_index = first_index
        self.second_index = second_index
        self.source = source
        super().__init__(
            f"Duplicate key {key!r} in {source.value} collection: "
            f"positions {first_index} and {second_index}"
        )


class BindingError(JoinError):
    """Raised when created elements do not line up with the entering partition."""
