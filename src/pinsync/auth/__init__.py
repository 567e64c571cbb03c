"""Permission gating."""

from pinsync.auth.gate import PermissionGate

__all__ = ["PermissionGate"]
