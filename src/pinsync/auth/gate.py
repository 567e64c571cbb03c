"""Write capability derived from the stored bearer credential."""

from __future__ import annotations

import logging

from pinsync.contracts.cache import CacheSlot, LocalCache
from pinsync.contracts.events import ChangeEvent, ChangeKind, EventBus
from pinsync.contracts.exceptions import PermissionDeniedError

logger = logging.getLogger(__name__)


class PermissionGate:
    """Edit permission is exactly "a non-empty credential is stored"."""

    def __init__(self, cache: LocalCache, *, bus: EventBus | None = None) -> None:
        self._cache = cache
        self._bus = bus

    @property
    def credential(self) -> str | None:
        value = self._cache.get(CacheSlot.CREDENTIAL)
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value or None

    def has_edit_permission(self) -> bool:
        return self.credential is not None

    def is_read_only(self) -> bool:
        return not self.has_edit_permission()

    def require_edit(self, action: str) -> None:
        if self.is_read_only():
            logger.debug("Rejected %s in read-only mode", action)
            raise PermissionDeniedError(action)

    def set_credential(self, token: str | None) -> bool:
        """Store *token*, or remove the credential when it is empty.

        Returns whether edit permission is granted afterwards.
        """
        cleaned = (token or "").strip()
        if cleaned:
            stored = self._cache.set(CacheSlot.CREDENTIAL, cleaned)
        else:
            stored = self._cache.delete(CacheSlot.CREDENTIAL)
        if not stored:
            logger.error("Failed to persist credential change")
        if self._bus is not None:
            self._bus.publish(ChangeEvent(ChangeKind.PERMISSION_CHANGED))
        return self.has_edit_permission()

    def masked_credential(self) -> str:
        credential = self.credential
        if credential is None:
            return "None"
        return f"***{credential[-4:]}"
