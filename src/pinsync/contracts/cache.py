"""Local cache contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any


class CacheSlot(StrEnum):
    SAVED_POINTS = "saved_points"
    COLOR_GROUPS = "color_groups"
    SEARCH_HISTORY = "search_history"
    COLLAPSE_STATES = "collapse_states"
    WIDGET_HEIGHT = "widget_height"
    CREDENTIAL = "credential"


class LocalCache(ABC):
    """Synchronous key/value persistence that survives process restarts.

    Implementations must never raise from ``get``/``set``/``delete``:
    failures are logged and reported through the return value.
    """

    @abstractmethod
    def get(self, slot: CacheSlot, default: Any = None) -> Any: ...  # pragma: no cover

    @abstractmethod
    def set(self, slot: CacheSlot, value: Any) -> bool: ...  # pragma: no cover

    @abstractmethod
    def delete(self, slot: CacheSlot) -> bool: ...  # pragma: no cover
