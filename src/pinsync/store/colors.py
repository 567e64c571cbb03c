"""Color group registry: marker color -> human label."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pinsync.auth.gate import PermissionGate
from pinsync.contracts.cache import CacheSlot, LocalCache
from pinsync.contracts.events import ChangeEvent, ChangeKind, EventBus
from pinsync.contracts.exceptions import ColorGroupValidationError
from pinsync.contracts.point import COLOR_PATTERN, DEFAULT_COLOR_GROUPS

logger = logging.getLogger(__name__)


class ColorGroupRegistry:
    """Whole-mapping persistence of color groups.

    The mapping is never versioned per entry: every edit rewrites it and
    publishes ``GROUPS_CHANGED`` so the engine saves it remotely.
    """

    def __init__(self, cache: LocalCache, gate: PermissionGate, *, bus: EventBus) -> None:
        self._cache = cache
        self._gate = gate
        self._bus = bus

    def groups(self) -> dict[str, str]:
        raw = self._cache.get(CacheSlot.COLOR_GROUPS)
        if not isinstance(raw, dict):
            return dict(DEFAULT_COLOR_GROUPS)
        return {str(color): str(label or "") for color, label in raw.items()}

    def label_for(self, color: str) -> str:
        return self.groups().get(_color_key(color), "")

    def contains(self, color: str) -> bool:
        return _color_key(color) in self.groups()

    def add(self, color: str, label: str) -> None:
        self._gate.require_edit("edit color groups")
        color = _normalize_color(color)
        label = label.strip()
        if not label:
            raise ColorGroupValidationError("label", "Please enter a group name.")

        groups = self.groups()
        groups[color] = label
        self._persist(groups)

    def remove(self, color: str) -> bool:
        self._gate.require_edit("edit color groups")
        color = _color_key(color)
        groups = self.groups()
        if color not in groups:
            return False
        del groups[color]
        self._persist(groups)
        return True

    def rename(self, color: str, label: str) -> bool:
        return bool(self.rename_many({color: label}))

    def rename_many(self, labels: Mapping[str, str]) -> list[str]:
        """Relabel existing colors in one write; blank labels keep the old name.

        Returns the colors whose label actually changed.
        """
        self._gate.require_edit("edit color groups")
        groups = self.groups()
        changed: list[str] = []
        for color, label in labels.items():
            color = _color_key(color)
            if color not in groups:
                continue
            new_label = label.strip() or groups[color]
            if new_label != groups[color]:
                groups[color] = new_label
                changed.append(color)
        if changed:
            self._persist(groups)
        return changed

    def replace_all(self, groups: Mapping[str, str]) -> bool:
        """Overwrite the mapping with pulled remote state (no save is triggered)."""
        return self._cache.set(CacheSlot.COLOR_GROUPS, {_color_key(color): label for color, label in groups.items()})

    def _persist(self, groups: dict[str, str]) -> None:
        if not self._cache.set(CacheSlot.COLOR_GROUPS, groups):
            logger.error("Failed to save %d color groups locally", len(groups))
        self._bus.publish(ChangeEvent(ChangeKind.GROUPS_CHANGED))


def _color_key(color: str) -> str:
    return color.strip().lower()


def _normalize_color(color: str) -> str:
    color = color.strip()
    if not COLOR_PATTERN.match(color):
        raise ColorGroupValidationError("color", f"Invalid color '{color}': expected #rrggbb.")
    return color.lower()
