"""Key function helpers."""

from __future__ import annotations

from operator import attrgetter, itemgetter
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Hashable, Mapping

    from .contracts import KeyFunction

# Passing ``key=by_index`` is equivalent to omitting the key function.
by_index = None


def by_field(name: str) -> KeyFunction[Mapping[str, Any], Hashable]:
    """Key mapping items by one field, e.g. ``by_field("id")``."""

    return itemgetter(name)


def by_fields(*names: str) -> KeyFunction[Mapping[str, Any], tuple[Hashable, ...]]:
    """Composite key over several mapping fields, always returned as a tuple."""

    if not names:
        raise ValueError("by_fields requires at least one field name")

    def key(item: Mapping[str, Any]) -> tuple[Hashable, ...]:
        return tuple(item[name] for name in names)

    return key


def by_attribute(name: str) -> KeyFunction[Any, Hashable]:
    """Key objects by a (possibly dotted) attribute path."""

    return attrgetter(name)
