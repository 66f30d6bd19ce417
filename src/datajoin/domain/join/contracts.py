"""Data join contract types.

A join pass consumes the bound state of the previous pass plus a fresh data
collection and classifies every key as entering, updating or exiting. The
types here are plain frozen dataclasses; the element handle ``E`` is owned by
the caller and never inspected.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from enum import StrEnum

type KeyFunction[T, K: Hashable] = Callable[[T], K]


class KeyTransition(StrEnum):
    """Lifecycle transition a key undergoes during one pass."""

    ENTER = "enter"
    UPDATE = "update"
    EXIT = "exit"


@dataclass(frozen=True, slots=True)
class BoundElement[K: Hashable, E, T]:
    """Element handle attached to ``key`` and the datum it was last bound to."""

    key: K
    element: E
    datum: T

    def rebind(self, datum: T, *, element: E | None = None) -> BoundElement[K, E, T]:
        """Return a copy bound to ``datum``, optionally with a replacement element.

        ``element=None`` keeps the current element, so a ``None`` handle can
        never be swapped in through this method.
        """

        return BoundElement(
            key=self.key,
            element=self.element if element is None else element,
            datum=datum,
        )


@dataclass(frozen=True, slots=True)
class Entering[K: Hashable, T]:
    """New datum with no prior element; ``index`` is its position in the new data."""

    key: K
    datum: T
    index: int


@dataclass(frozen=True, slots=True)
class Updating[K: Hashable, E, T]:
    """Prior bound element matched to a new datum by key."""

    bound: BoundElement[K, E, T]
    datum: T
    index: int

    @property
    def key(self) -> K:
        return self.bound.key

    @property
    def element(self) -> E:
        return self.bound.element

    @property
    def previous(self) -> T:
        return self.bound.datum


@dataclass(frozen=True, slots=True)
class JoinSummary:
    entering: int = 0
    updating: int = 0
    exiting: int = 0


@dataclass(frozen=True, slots=True)
class ReconciliationResult[K: Hashable, E, T]:
    """Three-way partition produced by one reconciliation pass.

    ``entering`` and ``updating`` follow the order of the new data; ``exiting``
    follows the order of the previous bound collection.
    """

    entering: tuple[Entering[K, T], ...] = field(default=())
    updating: tuple[Updating[K, E, T], ...] = field(default=())
    exiting: tuple[BoundElement[K, E, T], ...] = field(default=())

    @property
    def entering_keys(self) -> tuple[K, ...]:
        return tuple(item.key for item in self.entering)

    @property
    def updating_keys(self) -> tuple[K, ...]:
        return tuple(pair.key for pair in self.updating)

    @property
    def exiting_keys(self) -> tuple[K, ...]:
        return tuple(bound.key for bound in self.exiting)

    @property
    def is_noop(self) -> bool:
        """True when no key entered or exited."""

        return not self.entering and not self.exiting

    def summary(self) -> JoinSummary:
        return JoinSummary(
            entering=len(self.entering),
            updating=len(self.updating),
            exiting=len(self.exiting),
        )

    def transitions(self) -> dict[K, KeyTransition]:
        """Map every key seen in this pass to the transition it undergoes."""

        transitions: dict[K, KeyTransition] = {}
        for bound in self.exiting:
            transitions[bound.key] = KeyTransition.EXIT
        for pair in self.updating:
            transitions[pair.key] = KeyTransition.UPDATE
        for item in self.entering:
            transitions[item.key] = KeyTransition.ENTER
        return transitions
