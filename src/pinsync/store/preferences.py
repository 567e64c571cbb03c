"""UI preferences kept in the local cache."""

from __future__ import annotations

from pinsync.contracts.cache import CacheSlot, LocalCache

MAX_SEARCH_HISTORY = 10
DEFAULT_WIDGET_HEIGHT = 350


class Preferences:
    def __init__(self, cache: LocalCache) -> None:
        self._cache = cache

    def search_history(self) -> list[str]:
        raw = self._cache.get(CacheSlot.SEARCH_HISTORY, [])
        if not isinstance(raw, list):
            return []
        return [entry for entry in raw if isinstance(entry, str)]

    def add_search(self, query: str) -> list[str]:
        """Record *query* most-recent-first, deduplicated case-insensitively."""
        trimmed = query.strip()
        if not trimmed:
            return self.search_history()
        history = [entry for entry in self.search_history() if entry.lower() != trimmed.lower()]
        history.insert(0, trimmed)
        history = history[:MAX_SEARCH_HISTORY]
        self._cache.set(CacheSlot.SEARCH_HISTORY, history)
        return history

    def clear_search_history(self) -> None:
        self._cache.set(CacheSlot.SEARCH_HISTORY, [])

    def collapse_states(self) -> dict[str, bool]:
        raw = self._cache.get(CacheSlot.COLLAPSE_STATES, {})
        if not isinstance(raw, dict):
            return {}
        return {str(key): bool(value) for key, value in raw.items()}

    def is_collapsed(self, component_id: str) -> bool:
        return self.collapse_states().get(component_id, False)

    def set_collapsed(self, component_id: str, collapsed: bool) -> None:
        states = self.collapse_states()
        states[component_id] = collapsed
        self._cache.set(CacheSlot.COLLAPSE_STATES, states)

    def toggle_collapsed(self, component_id: str) -> bool:
        collapsed = not self.is_collapsed(component_id)
        self.set_collapsed(component_id, collapsed)
        return collapsed

    def widget_height(self) -> int:
        raw = self._cache.get(CacheSlot.WIDGET_HEIGHT)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
            return DEFAULT_WIDGET_HEIGHT
        return raw

    def set_widget_height(self, height: int) -> bool:
        if height <= 0:
            raise ValueError("widget height must be a positive number of pixels")
        return self._cache.set(CacheSlot.WIDGET_HEIGHT, int(height))
