"""Keyed enter/update/exit reconciliation.

Given the bound collection of the previous pass and a new data collection,
``reconcile`` computes which keys enter, which update and which exit. It is a
pure function: it never creates or disposes element handles, it only moves
them between partitions. The caller keeps the bound state between passes (see
``datajoin.domain.join.bind``).

A key function must be deterministic for logically identical items across
passes; a key function that is not is a caller error and goes undetected.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .contracts import BoundElement, Entering, ReconciliationResult, Updating
from .errors import DuplicateKeyError, KeySource

if TYPE_CHECKING:
    from collections.abc import Hashable, Sequence

    from .contracts import KeyFunction


log = getLogger(__name__)


def reconcile[K: Hashable, E, T](
    old_bound: Sequence[BoundElement[K, E, T]],
    new_data: Sequence[T],
    key: KeyFunction[T, K] | None = None,
) -> ReconciliationResult[K, E, T]:
    """Partition ``new_data`` against ``old_bound`` by key.

    Without ``key`` the join is positional: the key of each datum is its index
    in ``new_data``, so resizing the collection shifts identities instead of
    tracking them.

    Raises ``DuplicateKeyError`` when either collection repeats a key. Errors
    raised by ``key`` propagate unchanged. Nothing is returned on failure.
    """

    old_index = _index_bound(old_bound)
    consumed = [False] * len(old_bound)
    seen_new: dict[K, int] = {}
    entering: list[Entering[K, T]] = []
    updating: list[Updating[K, E, T]] = []

    for position, datum in enumerate(new_data):
        datum_key = _key_for(datum, position, key)
        first = seen_new.get(datum_key)
        if first is not None:
            raise DuplicateKeyError(
                key=datum_key,
                first_index=first,
                second_index=position,
                source=KeySource.NEW,
            )
        seen_new[datum_key] = position

        old_position = old_index.get(datum_key)
        if old_position is None:
            entering.append(Entering(key=datum_key, datum=datum, index=position))
            continue
        consumed[old_position] = True
        updating.append(Updating(bound=old_bound[old_position], datum=datum, index=position))

    exiting = tuple(
        bound for bound, was_consumed in zip(old_bound, consumed, strict=True) if not was_consumed
    )

    result = ReconciliationResult(
        entering=tuple(entering),
        updating=tuple(updating),
        exiting=exiting,
    )
    log.debug(
        "Reconciled %s old against %s new: entering=%s, updating=%s, exiting=%s",
        len(old_bound),
        len(new_data),
        len(result.entering),
        len(result.updating),
        len(result.exiting),
    )
    return result


def _key_for[K: Hashable, T](datum: T, position: int, key: KeyFunction[T, K] | None) -> K:
    if key is None:
        return position  # pyright: ignore[reportReturnType]
    return key(datum)


def _index_bound[K: Hashable, E, T](old_bound: Sequence[BoundElement[K, E, T]]) -> dict[K, int]:
    index: dict[K, int] = {}
    for position, bound in enumerate(old_bound):
        first = index.get(bound.key)
        if first is not None:
            raise DuplicateKeyError(
                key=bound.key,
                first_index=first,
                second_index=position,
                source=KeySource.OLD,
            )
        index[bound.key] = position
    return index
