"""Sync document contracts."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pinsync.contracts.point import DEFAULT_COLOR_GROUPS, Point

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = "1.0"


def _default_groups() -> dict[str, str]:
    return dict(DEFAULT_COLOR_GROUPS)


class SyncDocument(BaseModel):
    """The full shared state exchanged with the remote store.

    Attribute names are snake_case; the wire format uses the camelCase
    aliases, so always dump with ``by_alias=True``.
    """

    model_config = ConfigDict(populate_by_name=True)

    points: list[Point] = Field(default_factory=list)
    color_groups: dict[str, str] = Field(default_factory=_default_groups, alias="colorGroups")
    version: str = DOCUMENT_VERSION
    last_updated: str = Field(default="", alias="lastUpdated")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_payload(cls, payload: Any) -> SyncDocument:
        """Normalize any decoded remote body into a document.

        A bare list is the legacy format (points only). An object is the
        current format with missing fields defaulted. Anything else yields
        an empty document. Malformed point entries are dropped.
        """
        if isinstance(payload, list):
            return cls(points=parse_points(payload))
        if not isinstance(payload, dict):
            if payload is not None:
                logger.warning("Ignoring remote document of unexpected type %s", type(payload).__name__)
            return cls()

        raw_groups = payload.get("colorGroups")
        if isinstance(raw_groups, dict):
            groups = {str(color).lower(): str(label or "") for color, label in raw_groups.items()}
        else:
            groups = _default_groups()

        raw_points = payload.get("points")
        version = payload.get("version")
        last_updated = payload.get("lastUpdated")
        return cls(
            points=parse_points(raw_points if isinstance(raw_points, list) else []),
            color_groups=groups,
            version=version if isinstance(version, str) and version else DOCUMENT_VERSION,
            last_updated=last_updated if isinstance(last_updated, str) else "",
        )


class RemoteSnapshot(BaseModel):
    """A document as read from the remote store, tagged with its revision."""

    document: SyncDocument
    revision: str | None = None


def parse_points(entries: list[Any]) -> list[Point]:
    points: list[Point] = []
    seen: set[int] = set()
    for index, entry in enumerate(entries):
        try:
            point = Point.model_validate(entry)
        except ValidationError as exc:
            logger.warning("Dropping malformed point at index %d: %s", index, exc.errors()[0]["msg"])
            continue
        if point.id in seen:
            logger.warning("Dropping duplicate point id %d", point.id)
            continue
        seen.add(point.id)
        points.append(point)
    return points
