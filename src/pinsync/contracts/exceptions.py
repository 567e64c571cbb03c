"""Exception hierarchy for pinsync.

All pinsync exceptions inherit from :class:`PinSyncError`, making it easy
to catch any library error with a single ``except`` clause while still allowing
callers to handle specific failure modes.
"""

from __future__ import annotations


class PinSyncError(Exception):
    """Base exception for all pinsync errors."""


class ConfigError(PinSyncError):
    """Configuration loading or validation failure."""


class RemoteStoreError(PinSyncError):
    """Remote document read/write failure (network error or non-success status)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(RemoteStoreError):
    """The remote store rejected or was never given a credential."""


class RevisionConflictError(RemoteStoreError):
    """The conditional write lost against a newer remote revision."""


class PermissionDeniedError(PinSyncError):
    """A mutation was attempted while in read-only mode."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Read-only mode: cannot {action} without a credential")
        self.action = action


class InvalidInputError(PinSyncError):
    """User input was rejected before any local or remote write.

    Attributes:
        field: Name of the offending field.
        reason: Human-readable explanation suitable for display.
    """

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(reason)
        self.field = field
        self.reason = reason


class PointValidationError(InvalidInputError):
    """A point create/edit carried out-of-range or missing values."""


class ColorGroupValidationError(InvalidInputError):
    """A color group edit carried an invalid color or label."""


class PointNotFoundError(PinSyncError):
    """No point with the requested id exists."""

    def __init__(self, point_id: int) -> None:
        super().__init__(f"Point not found: {point_id}")
        self.point_id = point_id
