"""Contracts shared by every pinsync layer."""

from pinsync.contracts.cache import CacheSlot, LocalCache
from pinsync.contracts.config import PinSyncConfig
from pinsync.contracts.document import RemoteSnapshot, SyncDocument
from pinsync.contracts.events import ChangeEvent, ChangeKind, EventBus
from pinsync.contracts.exceptions import (
    AuthenticationError,
    ColorGroupValidationError,
    ConfigError,
    InvalidInputError,
    PermissionDeniedError,
    PinSyncError,
    PointNotFoundError,
    PointValidationError,
    RemoteStoreError,
    RevisionConflictError,
)
from pinsync.contracts.interaction import AutoConfirm, Confirmation, EditResult, Editor, Notifier, NullNotifier
from pinsync.contracts.point import DEFAULT_COLOR_GROUPS, DEFAULT_POINT_COLOR, Point, PointUpdate
from pinsync.contracts.remote import RemoteStore
from pinsync.contracts.sync import PullOutcome, PullResult, PushOutcome, PushResult, SyncState

__all__ = [
    "DEFAULT_COLOR_GROUPS",
    "DEFAULT_POINT_COLOR",
    "AuthenticationError",
    "AutoConfirm",
    "CacheSlot",
    "ChangeEvent",
    "ChangeKind",
    "ColorGroupValidationError",
    "ConfigError",
    "Confirmation",
    "EditResult",
    "Editor",
    "EventBus",
    "InvalidInputError",
    "LocalCache",
    "Notifier",
    "NullNotifier",
    "PermissionDeniedError",
    "PinSyncConfig",
    "PinSyncError",
    "Point",
    "PointNotFoundError",
    "PointUpdate",
    "PointValidationError",
    "PullOutcome",
    "PullResult",
    "PushOutcome",
    "PushResult",
    "RemoteSnapshot",
    "RemoteStore",
    "RemoteStoreError",
    "RevisionConflictError",
    "SyncDocument",
    "SyncState",
]
