"""Sync engine: pull, push, merge and auto-save."""

from pinsync.engine.engine import SyncEngine
from pinsync.engine.queue import PushQueue
from pinsync.engine.status import NullSyncObserver, StatusBoard, StatusLevel, StatusMessage, SyncObserver

__all__ = [
    "NullSyncObserver",
    "PushQueue",
    "StatusBoard",
    "StatusLevel",
    "StatusMessage",
    "SyncEngine",
    "SyncObserver",
]
