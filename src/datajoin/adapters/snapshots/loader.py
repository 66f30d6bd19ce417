"""Read record snapshots from JSON and JSON Lines files."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .schema import Snapshot

if TYPE_CHECKING:
    from pathlib import Path

JSON_LINES_SUFFIXES = frozenset({".jsonl", ".ndjson"})

log = getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or does not hold records."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid snapshot {path}: {reason}")


def load_snapshot(path: Path) -> Snapshot:
    """Load ``path`` as a JSON array, a ``{"records": [...]}`` object or JSON Lines."""

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SnapshotError(path, str(exc)) from exc

    try:
        if path.suffix.lower() in JSON_LINES_SUFFIXES:
            payload: Any = {"records": _parse_json_lines(text)}
        else:
            payload = json.loads(text)
            if isinstance(payload, list):
                payload = {"records": payload}
        snapshot = Snapshot.model_validate(payload)
    except json.JSONDecodeError as exc:
        raise SnapshotError(path, f"malformed JSON ({exc})") from exc
    except ValidationError as exc:
        raise SnapshotError(path, f"{exc.error_count()} validation error(s)") from exc

    log.debug("Loaded %s records from %s", len(snapshot), path)
    return snapshot


def _parse_json_lines(text: str) -> list[Any]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]
