from __future__ import annotations

from .loader import SnapshotError, load_snapshot
from .schema import Record, Snapshot

__all__ = [
    "Record",
    "Snapshot",
    "SnapshotError",
    "load_snapshot",
]
