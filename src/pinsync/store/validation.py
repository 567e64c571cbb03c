"""Field validation for point edits."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pinsync.contracts.exceptions import PointValidationError
from pinsync.contracts.point import COLOR_PATTERN

_EDITABLE_FIELDS = frozenset({"lat", "lng", "name", "notes", "color"})


def validate_point_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Return a cleaned copy of *fields* or raise :class:`PointValidationError`.

    Coordinates may arrive as text (straight from an input box) and are
    parsed here. Bounds are inclusive: latitude [-90, 90], longitude
    [-180, 180]. Names must be non-empty after trimming.
    """
    cleaned: dict[str, Any] = {}
    for key, value in fields.items():
        if key not in _EDITABLE_FIELDS:
            raise PointValidationError(key, f"Field '{key}' cannot be edited.")
        if value is None:
            continue
        cleaned[key] = value

    if "name" in cleaned:
        name = str(cleaned["name"]).strip()
        if not name:
            raise PointValidationError("name", "Please enter a name for the point.")
        cleaned["name"] = name

    if "notes" in cleaned:
        cleaned["notes"] = str(cleaned["notes"]).strip()

    if "lat" in cleaned:
        cleaned["lat"] = _coordinate(cleaned["lat"], "lat", "latitude", 90.0)
    if "lng" in cleaned:
        cleaned["lng"] = _coordinate(cleaned["lng"], "lng", "longitude", 180.0)

    if "color" in cleaned:
        color = str(cleaned["color"]).strip()
        if not COLOR_PATTERN.match(color):
            raise PointValidationError("color", "Please choose a color in #rrggbb form.")
        cleaned["color"] = color.lower()

    return cleaned


def _coordinate(value: Any, field: str, label: str, bound: float) -> float:
    reason = f"Please enter a valid {label} between {-bound:g} and {bound:g}."
    if isinstance(value, bool):
        raise PointValidationError(field, reason)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise PointValidationError(field, reason) from None
    if math.isnan(number) or number < -bound or number > bound:
        raise PointValidationError(field, reason)
    return number
