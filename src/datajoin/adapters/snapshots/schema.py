"""Pydantic models for record snapshot files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, JsonValue

type Record = dict[str, JsonValue]


class SnapshotBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class Snapshot(SnapshotBaseModel):
    records: list[dict[str, JsonValue]] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)
