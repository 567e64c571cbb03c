"""View store: the filter state a map or list view renders from."""

from __future__ import annotations

from collections.abc import Callable

from pinsync.contracts.events import ChangeEvent, ChangeKind, EventBus, Subscriber
from pinsync.contracts.point import Point
from pinsync.store.colors import ColorGroupRegistry
from pinsync.store.filtering import ALL_GROUPS, filter_points, group_filter_options
from pinsync.store.repository import PointRepository


class ViewState:
    """Owns the current text and group filter.

    Renderers subscribe and rebuild from :meth:`visible_points` whenever any
    change event arrives, instead of mutating markers on their own.
    """

    def __init__(self, repository: PointRepository, registry: ColorGroupRegistry, *, bus: EventBus) -> None:
        self._repository = repository
        self._registry = registry
        self._bus = bus
        self._text_query = ""
        self._group_filter = ALL_GROUPS

    @property
    def text_query(self) -> str:
        return self._text_query

    @property
    def group_filter(self) -> str:
        return self._group_filter

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        return self._bus.subscribe(subscriber)

    def set_text_query(self, query: str) -> None:
        if query == self._text_query:
            return
        self._text_query = query
        self._bus.publish(ChangeEvent(ChangeKind.FILTER_CHANGED))

    def set_group_filter(self, group_filter: str | None) -> None:
        # An empty selection in a dropdown means "all groups".
        value = group_filter or ALL_GROUPS
        if value == self._group_filter:
            return
        self._group_filter = value
        self._bus.publish(ChangeEvent(ChangeKind.FILTER_CHANGED))

    def clear_filters(self) -> None:
        changed = self._text_query != "" or self._group_filter != ALL_GROUPS
        self._text_query = ""
        self._group_filter = ALL_GROUPS
        if changed:
            self._bus.publish(ChangeEvent(ChangeKind.FILTER_CHANGED))

    def visible_points(self) -> list[Point]:
        return filter_points(self._repository.all(), self._text_query, self._group_filter, self._registry.groups())

    def group_options(self) -> list[str]:
        return group_filter_options(self._repository.all(), self._registry.groups())
