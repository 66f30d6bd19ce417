"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from datajoin.adapters.snapshots import load_snapshot
from datajoin.domain.join import BoundElement, by_field, reconcile

if TYPE_CHECKING:
    from collections.abc import Hashable
    from pathlib import Path

    from datajoin.adapters.snapshots import Record
    from datajoin.domain.join import JoinSummary, KeyFunction, ReconciliationResult

# Elements of a snapshot diff are the record positions in the old snapshot.
type SnapshotResult = ReconciliationResult[Hashable, int, Record]


log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SnapshotDiff:
    old_path: Path
    new_path: Path
    key_field: str | None
    result: SnapshotResult

    @property
    def summary(self) -> JoinSummary:
        return self.result.summary()


def bind_records(
    records: list[Record],
    key: KeyFunction[Record, Hashable] | None = None,
) -> tuple[BoundElement[Hashable, int, Record], ...]:
    """Bind records as if a previous pass had attached element ``i`` to record ``i``."""

    return tuple(
        BoundElement(
            key=position if key is None else key(record),
            element=position,
            datum=record,
        )
        for position, record in enumerate(records)
    )


def diff_snapshots(
    old_path: Path,
    new_path: Path,
    *,
    key_field: str | None = None,
) -> SnapshotDiff:
    """Reconcile two record snapshots by ``key_field`` (or by position when ``None``)."""

    log.info(
        "Starting snapshot diff: old=%s, new=%s, key=%s",
        old_path,
        new_path,
        key_field or "<index>",
    )
    old_snapshot = load_snapshot(old_path)
    new_snapshot = load_snapshot(new_path)

    key = by_field(key_field) if key_field else None
    result = reconcile(bind_records(old_snapshot.records, key), new_snapshot.records, key)

    diff = SnapshotDiff(
        old_path=old_path,
        new_path=new_path,
        key_field=key_field,
        result=result,
    )
    summary = diff.summary
    log.info(
        "Finished snapshot diff: entering=%s, updating=%s, exiting=%s",
        summary.entering,
        summary.updating,
        summary.exiting,
    )
    return diff
