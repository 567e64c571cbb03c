"""In-process local cache."""

from __future__ import annotations

import json
import logging
from typing import Any

from pinsync.contracts.cache import CacheSlot, LocalCache

logger = logging.getLogger(__name__)


class MemoryCache(LocalCache):
    """Keeps serialized slot values in a dict.

    Values are stored as JSON text so callers never alias cached state, and
    *quota_bytes* emulates a storage quota: a write that would exceed it is
    refused and reported as a failure.
    """

    def __init__(self, *, quota_bytes: int | None = None) -> None:
        self._slots: dict[CacheSlot, str] = {}
        self._quota_bytes = quota_bytes

    def get(self, slot: CacheSlot, default: Any = None) -> Any:
        raw = self._slots.get(slot)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, slot: CacheSlot, value: Any) -> bool:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as exc:
            logger.error("Error saving cache slot %s: %s", slot, exc)
            return False

        if self._quota_bytes is not None:
            used = sum(len(v) for key, v in self._slots.items() if key != slot)
            if used + len(raw) > self._quota_bytes:
                logger.error("Error saving cache slot %s: quota of %d bytes exceeded", slot, self._quota_bytes)
                return False

        self._slots[slot] = raw
        return True

    def delete(self, slot: CacheSlot) -> bool:
        self._slots.pop(slot, None)
        return True
