"""Change notification between the stores and their observers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)


class ChangeKind(StrEnum):
    POINT_ADDED = "point_added"
    POINT_UPDATED = "point_updated"
    POINT_MOVED = "point_moved"
    POINT_REMOVED = "point_removed"
    POINTS_CLEARED = "points_cleared"
    POINTS_REPLACED = "points_replaced"
    GROUPS_CHANGED = "groups_changed"
    FILTER_CHANGED = "filter_changed"
    PERMISSION_CHANGED = "permission_changed"

    @property
    def is_user_mutation(self) -> bool:
        """True for edits that must be saved to the remote document."""
        return self in _USER_MUTATIONS


_USER_MUTATIONS = frozenset(
    {
        ChangeKind.POINT_ADDED,
        ChangeKind.POINT_UPDATED,
        ChangeKind.POINT_MOVED,
        ChangeKind.POINT_REMOVED,
        ChangeKind.POINTS_CLEARED,
        ChangeKind.GROUPS_CHANGED,
    }
)


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    point_id: int | None = None


Subscriber = Callable[[ChangeEvent], None]


class EventBus:
    """Synchronous fan-out of change events to subscribers."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def publish(self, event: ChangeEvent) -> None:
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                # A broken view must not stop the engine from hearing about the change.
                logger.exception("Subscriber failed handling %s", event.kind)
