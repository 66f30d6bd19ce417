"""Keyed data join.

Flow of one pass:
1) ``reconcile`` partitions the new data against the previous bound state
2) the caller creates elements for entering data, refreshes updating ones
   and disposes exiting ones (``join`` / ``DataJoin`` drive this)
3) ``next_bound`` yields the bound state handed to the next pass
"""

from __future__ import annotations

from .bind import DataJoin, JoinOutcome, join, next_bound
from .contracts import (
    BoundElement,
    Entering,
    JoinSummary,
    KeyFunction,
    KeyTransition,
    ReconciliationResult,
    Updating,
)
from .errors import BindingError, DuplicateKeyError, JoinError, KeySource
from .keys import by_attribute, by_field, by_fields, by_index
from .reconcile import reconcile

__all__ = [
    "BindingError",
    "BoundElement",
    "DataJoin",
    "DuplicateKeyError",
    "Entering",
    "JoinError",
    "JoinOutcome",
    "JoinSummary",
    "KeyFunction",
    "KeySource",
    "KeyTransition",
    "ReconciliationResult",
    "Updating",
    "by_attribute",
    "by_field",
    "by_fields",
    "by_index",
    "join",
    "next_bound",
    "reconcile",
]
