"""Sync result contracts."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from pinsync.contracts.point import Point


class SyncState(StrEnum):
    IDLE = "idle"
    PULLING = "pulling"
    PUSHING = "pushing"


class PullOutcome(StrEnum):
    REMOTE = "remote"
    EMPTY = "empty"
    OFFLINE = "offline"


class PushOutcome(StrEnum):
    SAVED = "saved"
    SKIPPED = "skipped"
    FAILED = "failed"


class PullResult(BaseModel):
    points: list[Point] = Field(default_factory=list)
    outcome: PullOutcome
    message: str
    error: str | None = None

    @property
    def degraded(self) -> bool:
        return self.outcome is PullOutcome.OFFLINE


class PushResult(BaseModel):
    outcome: PushOutcome
    message: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is PushOutcome.SAVED
