"""Status reporting for sync operations.

The engine reports one short line per state change; consumers (the CLI's
Rich console, a web view's status bar) implement ``SyncObserver`` to show it.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class StatusLevel(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class SyncObserver(ABC):
    """Observer interface for sync status messages."""

    @abstractmethod
    def status(self, message: str, level: StatusLevel = StatusLevel.INFO) -> None:
        """A new status line replaces the previous one."""
        ...  # pragma: no cover


class NullSyncObserver(SyncObserver):
    """No-op implementation used when nobody displays status."""

    def status(self, message: str, level: StatusLevel = StatusLevel.INFO) -> None:
        pass


@dataclass(frozen=True)
class StatusMessage:
    text: str
    level: StatusLevel
    posted_at: float


class StatusBoard(SyncObserver):
    """Keeps the latest status and hides it once it goes stale.

    Errors stay visible longer than routine messages. Expiry is evaluated
    lazily on :attr:`current`, so no timer task is needed.
    """

    def __init__(
        self,
        *,
        info_seconds: float = 5.0,
        error_seconds: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._info_seconds = info_seconds
        self._error_seconds = error_seconds
        self._clock = clock
        self._latest: StatusMessage | None = None

    def status(self, message: str, level: StatusLevel = StatusLevel.INFO) -> None:
        self._latest = StatusMessage(text=message, level=level, posted_at=self._clock())

    @property
    def current(self) -> StatusMessage | None:
        latest = self._latest
        if latest is None:
            return None
        lifetime = self._error_seconds if latest.level is StatusLevel.ERROR else self._info_seconds
        if self._clock() - latest.posted_at >= lifetime:
            self._latest = None
            return None
        return latest
