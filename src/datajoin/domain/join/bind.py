"""Caller-side binding on top of ``reconcile``.

``reconcile`` only classifies keys. The helpers here carry a result forward
into the bound collection of the next pass and drive the enter/update/exit
callbacks, each exactly once per entry, in the order exit, update, enter.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass, field
from logging import getLogger

from .contracts import BoundElement, KeyFunction, ReconciliationResult
from .errors import BindingError
from .reconcile import reconcile

type EnterCallback[K: Hashable, E, T] = Callable[[K, T], E]
type UpdateCallback[E, T] = Callable[[E, T], E | None]
type ExitCallback[E, T] = Callable[[E, T], object]


log = getLogger(__name__)


def next_bound[K: Hashable, E, T](
    result: ReconciliationResult[K, E, T],
    created: Sequence[E],
) -> tuple[BoundElement[K, E, T], ...]:
    """Return the bound collection for the next pass, in new-data order.

    ``created`` holds one element per entry of ``result.entering``, in the
    same order. Updating entries keep their element and take the new datum.
    Exiting entries are dropped.
    """

    if len(created) != len(result.entering):
        raise BindingError(
            f"Expected {len(result.entering)} created elements, got {len(created)}"
        )

    slots: list[BoundElement[K, E, T] | None] = [None] * (
        len(result.entering) + len(result.updating)
    )
    for item, element in zip(result.entering, created, strict=True):
        slots[item.index] = BoundElement(key=item.key, element=element, datum=item.datum)
    for pair in result.updating:
        slots[pair.index] = pair.bound.rebind(pair.datum)

    bound: list[BoundElement[K, E, T]] = []
    for position, slot in enumerate(slots):
        if slot is None:
            raise BindingError(f"No entry for position {position} in reconciliation result")
        bound.append(slot)
    return tuple(bound)


@dataclass(frozen=True, slots=True)
class JoinOutcome[K: Hashable, E, T]:
    bound: tuple[BoundElement[K, E, T], ...]
    result: ReconciliationResult[K, E, T]


def join[K: Hashable, E, T](
    old_bound: Sequence[BoundElement[K, E, T]],
    new_data: Sequence[T],
    *,
    enter: EnterCallback[K, E, T],
    update: UpdateCallback[E, T] | None = None,
    exit: ExitCallback[E, T] | None = None,  # noqa: A002
    key: KeyFunction[T, K] | None = None,
) -> JoinOutcome[K, E, T]:
    """Reconcile and apply the result through callbacks.

    ``exit(element, datum)`` runs once per exiting element with its last datum,
    ``update(element, datum)`` once per updating pair (a non-``None`` return
    replaces the element) and ``enter(key, datum)`` once per entering datum to
    create its element. Callback errors propagate; callbacks that already ran
    are not rolled back.
    """

    result = reconcile(old_bound, new_data, key)
    bound = _run_callbacks(result, enter=enter, update=update, exit=exit, exited=[])
    return JoinOutcome(bound=bound, result=result)


def _run_callbacks[K: Hashable, E, T](
    result: ReconciliationResult[K, E, T],
    *,
    enter: EnterCallback[K, E, T],
    update: UpdateCallback[E, T] | None,
    exit: ExitCallback[E, T] | None,  # noqa: A002
    exited: list[K],
) -> tuple[BoundElement[K, E, T], ...]:
    # ``exited`` collects keys whose elements are released, even if a later callback fails.
    for bound in result.exiting:
        if exit is not None:
            exit(bound.element, bound.datum)
        exited.append(bound.key)

    replacements: dict[int, E] = {}
    if update is not None:
        for pair in result.updating:
            replacement = update(pair.element, pair.datum)
            if replacement is not None:
                replacements[pair.index] = replacement

    created = [enter(item.key, item.datum) for item in result.entering]

    bound = next_bound(result, created)
    if replacements:
        bound = tuple(
            entry.rebind(entry.datum, element=replacements[position])
            if position in replacements
            else entry
            for position, entry in enumerate(bound)
        )
    return bound


@dataclass(slots=True)
class DataJoin[K: Hashable, E, T]:
    """Bound state of one rendered collection, carried from pass to pass.

    Each chart owns its own instance; there is no shared selection. Instances
    are not synchronized, so concurrent callers must serialize ``apply``.
    """

    enter: EnterCallback[K, E, T]
    update: UpdateCallback[E, T] | None = None
    exit: ExitCallback[E, T] | None = None
    key: KeyFunction[T, K] | None = None
    _bound: tuple[BoundElement[K, E, T], ...] = field(default=(), init=False, repr=False)

    @property
    def bound(self) -> tuple[BoundElement[K, E, T], ...]:
        return self._bound

    @property
    def keys(self) -> tuple[K, ...]:
        return tuple(entry.key for entry in self._bound)

    @property
    def elements(self) -> tuple[E, ...]:
        return tuple(entry.element for entry in self._bound)

    def __len__(self) -> int:
        return len(self._bound)

    def apply(self, data: Sequence[T]) -> ReconciliationResult[K, E, T]:
        """Join ``data`` against the current state and keep the new bound collection.

        If a callback raises, elements already passed to ``exit`` are removed
        from the state before the error propagates, so a retry never exits them
        twice. Everything else stays bound as before the call.
        """

        result = reconcile(self._bound, data, self.key)
        exited: list[K] = []
        try:
            bound = _run_callbacks(
                result,
                enter=self.enter,
                update=self.update,
                exit=self.exit,
                exited=exited,
            )
        except Exception:
            released = set(exited)
            self._bound = tuple(entry for entry in self._bound if entry.key not in released)
            log.debug("Join failed after releasing %s elements", len(released))
            raise

        self._bound = bound
        summary = result.summary()
        log.debug(
            "Applied join: entering=%s, updating=%s, exiting=%s, bound=%s",
            summary.entering,
            summary.updating,
            summary.exiting,
            len(self._bound),
        )
        return result

    def clear(self) -> ReconciliationResult[K, E, T]:
        """Exit every bound element."""

        return self.apply(())
