"""Public API surface for pinsync."""

__version__ = "1.0.0"

from pinsync.auth import PermissionGate
from pinsync.cache import JsonFileCache, MemoryCache
from pinsync.contracts import (
    DEFAULT_COLOR_GROUPS,
    DEFAULT_POINT_COLOR,
    AuthenticationError,
    AutoConfirm,
    CacheSlot,
    ChangeEvent,
    ChangeKind,
    ColorGroupValidationError,
    ConfigError,
    Confirmation,
    EditResult,
    Editor,
    EventBus,
    InvalidInputError,
    LocalCache,
    Notifier,
    NullNotifier,
    PermissionDeniedError,
    PinSyncConfig,
    PinSyncError,
    Point,
    PointNotFoundError,
    PointUpdate,
    PointValidationError,
    PullOutcome,
    PullResult,
    PushOutcome,
    PushResult,
    RemoteSnapshot,
    RemoteStore,
    RemoteStoreError,
    RevisionConflictError,
    SyncDocument,
    SyncState,
)
from pinsync.engine import StatusBoard, StatusLevel, SyncEngine, SyncObserver
from pinsync.remote import GitHubContentStore
from pinsync.sdk import PinSync, load_config
from pinsync.store.filtering import ALL_GROUPS, HIDE_ALL, filter_points

__all__ = [
    "ALL_GROUPS",
    "DEFAULT_COLOR_GROUPS",
    "DEFAULT_POINT_COLOR",
    "HIDE_ALL",
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
    "GitHubContentStore",
    "InvalidInputError",
    "JsonFileCache",
    "LocalCache",
    "MemoryCache",
    "Notifier",
    "NullNotifier",
    "PermissionDeniedError",
    "PermissionGate",
    "PinSync",
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
    "StatusBoard",
    "StatusLevel",
    "SyncDocument",
    "SyncEngine",
    "SyncObserver",
    "SyncState",
    "__version__",
    "filter_points",
    "load_config",
]
