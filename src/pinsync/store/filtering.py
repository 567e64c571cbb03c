"""Text and group filtering over saved points."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pinsync.contracts.point import Point

ALL_GROUPS = "ALL_GROUPS"
HIDE_ALL = "HIDE_ALL"
UNGROUPED_LABEL = "(Ungrouped)"


def filter_points(
    points: Iterable[Point],
    text_query: str | None,
    group_filter: str | None,
    color_groups: Mapping[str, str],
) -> list[Point]:
    """Apply the group filter, then the text filter.

    *group_filter* is ``ALL_GROUPS`` (or ``None``), ``HIDE_ALL``, or a group
    label matched exactly against ``color_groups[point.color]``.
    """
    if group_filter == HIDE_ALL:
        return []

    filtered = list(points)
    if group_filter is not None and group_filter != ALL_GROUPS:
        filtered = [point for point in filtered if color_groups.get(point.color, "") == group_filter]

    query = (text_query or "").strip().lower()
    if query:
        filtered = [point for point in filtered if _matches(point, query)]
    return filtered


def group_filter_options(points: Iterable[Point], color_groups: Mapping[str, str]) -> list[str]:
    """Labels of the groups that at least one point uses, in registry order."""
    used_colors = {point.color for point in points}
    labels: list[str] = []
    for color, label in color_groups.items():
        if color in used_colors and label not in labels:
            labels.append(label)
    return labels


def display_group_label(label: str) -> str:
    return label or UNGROUPED_LABEL


def format_coordinate(value: float) -> str:
    """Match how a browser prints a number: ``40.0`` -> ``"40"``."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _matches(point: Point, query: str) -> bool:
    return (
        query in point.name.lower()
        or query in point.notes.lower()
        or query in format_coordinate(point.lat)
        or query in format_coordinate(point.lng)
    )
