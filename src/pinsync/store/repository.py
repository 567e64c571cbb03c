"""Point repository backed by the local cache."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pinsync.auth.gate import PermissionGate
from pinsync.contracts.cache import CacheSlot, LocalCache
from pinsync.contracts.document import parse_points
from pinsync.contracts.events import ChangeEvent, ChangeKind, EventBus
from pinsync.contracts.point import DEFAULT_POINT_COLOR, Point, PointUpdate, epoch_millis, iso_timestamp
from pinsync.store.validation import validate_point_fields

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PointRepository:
    """CRUD over saved points.

    Every call reads and writes the cache synchronously; the cache is the
    only state. Mutators check edit permission before touching anything and
    publish a change event once the local write is done.
    """

    def __init__(
        self,
        cache: LocalCache,
        gate: PermissionGate,
        *,
        bus: EventBus,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cache = cache
        self._gate = gate
        self._bus = bus
        self._clock = clock

    def all(self) -> list[Point]:
        raw = self._cache.get(CacheSlot.SAVED_POINTS, [])
        if not isinstance(raw, list):
            logger.error("Cached points are not a list; ignoring them")
            return []
        points = parse_points(raw)
        logger.debug("Loaded %d points from cache", len(points))
        return points

    def get(self, point_id: int) -> Point | None:
        return next((point for point in self.all() if point.id == point_id), None)

    def create(
        self,
        lat: float,
        lng: float,
        name: str = "",
        color: str = DEFAULT_POINT_COLOR,
        notes: str = "",
    ) -> Point:
        self._gate.require_edit("add points")
        fields = validate_point_fields({"lat": lat, "lng": lng, "color": color, "notes": notes})

        now = self._clock()
        points = self.all()
        taken = {point.id for point in points}
        point_id = epoch_millis(now)
        while point_id in taken:
            point_id += 1

        point = Point(
            id=point_id,
            name=name.strip() or f"Point {point_id}",
            timestamp=iso_timestamp(now),
            **fields,
        )
        points.append(point)
        self._save(points)
        self._bus.publish(ChangeEvent(ChangeKind.POINT_ADDED, point.id))
        return point

    def update(self, point_id: int, fields: PointUpdate | Mapping[str, Any]) -> Point | None:
        """Replace the given fields of a point; ``None`` when the id is unknown.

        Raises:
            PermissionDeniedError: In read-only mode.
            PointValidationError: If any field is out of range; nothing is written.
        """
        self._gate.require_edit("edit points")
        changes = fields.changes() if isinstance(fields, PointUpdate) else dict(fields)
        cleaned = validate_point_fields(changes)
        return self._replace(point_id, cleaned, ChangeKind.POINT_UPDATED)

    def move(self, point_id: int, lat: float, lng: float) -> Point | None:
        self._gate.require_edit("move points")
        cleaned = validate_point_fields({"lat": lat, "lng": lng})
        return self._replace(point_id, cleaned, ChangeKind.POINT_MOVED)

    def remove(self, point_id: int) -> bool:
        self._gate.require_edit("remove points")
        points = self.all()
        remaining = [point for point in points if point.id != point_id]
        if len(remaining) == len(points):
            return False
        self._save(remaining)
        self._bus.publish(ChangeEvent(ChangeKind.POINT_REMOVED, point_id))
        return True

    def clear(self) -> int:
        self._gate.require_edit("remove points")
        removed = len(self.all())
        self._save([])
        self._bus.publish(ChangeEvent(ChangeKind.POINTS_CLEARED))
        return removed

    def replace_all(self, points: Iterable[Point]) -> bool:
        """Overwrite the cache with pulled remote state (no save is triggered)."""
        return self._save(list(points))

    def _replace(self, point_id: int, changes: dict[str, Any], kind: ChangeKind) -> Point | None:
        points = self.all()
        for index, point in enumerate(points):
            if point.id != point_id:
                continue
            updated = point.model_copy(update=changes)
            points[index] = updated
            self._save(points)
            self._bus.publish(ChangeEvent(kind, point_id))
            return updated
        return None

    def _save(self, points: list[Point]) -> bool:
        stored = self._cache.set(CacheSlot.SAVED_POINTS, [point.model_dump(mode="json") for point in points])
        if stored:
            logger.debug("Saved %d points to cache", len(points))
        else:
            logger.error("Failed to save %d points to cache", len(points))
        return stored
