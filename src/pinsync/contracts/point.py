"""Point contracts."""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_POINT_COLOR = "#d62728"
COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

DEFAULT_COLOR_GROUPS: dict[str, str] = {
    "#d62728": "",
    "#2ca02c": "Golf Course",
    "#1f77b4": "",
    "#ff7f0e": "",
    "#9467bd": "",
    "#8c564b": "",
    "#e377c2": "",
    "#7f7f7f": "",
    "#bcbd22": "",
    "#17becf": "",
    "#aec7e8": "",
    "#ffbb78": "",
    "#98df8a": "",
    "#ff9896": "",
    "#c5b0d5": "",
    "#c49c94": "",
}

_EPOCH = datetime.min.replace(tzinfo=UTC)
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Point(BaseModel):
    """A user-placed, annotated geographic marker."""

    model_config = ConfigDict(extra="ignore")

    id: int
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    name: str = ""
    notes: str = ""
    color: str = Field(default=DEFAULT_POINT_COLOR, pattern=COLOR_PATTERN.pattern)
    timestamp: str = ""

    @field_validator("name", "notes", "timestamp", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("color", mode="before")
    @classmethod
    def _default_color(cls, value: Any) -> Any:
        # Points saved before colors existed carry no color at all.
        if not value:
            return DEFAULT_POINT_COLOR
        return value.lower() if isinstance(value, str) else value


class PointUpdate(BaseModel):
    """Partial field replacement for an existing point; ``id``/``timestamp`` are immutable."""

    model_config = ConfigDict(extra="forbid")

    lat: float | None = None
    lng: float | None = None
    name: str | None = None
    notes: str | None = None
    color: str | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def iso_timestamp(moment: datetime) -> str:
    """Render *moment* the way JavaScript's ``Date.toISOString`` does."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis(moment: datetime) -> int:
    return (moment - _UNIX_EPOCH) // timedelta(milliseconds=1)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; unparseable values sort before everything else."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
