"""Saved point commands."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table

from pinsync.cli.interaction import QuestionaryEditor
from pinsync.contracts.point import DEFAULT_POINT_COLOR, Point
from pinsync.sdk import PinSync
from pinsync.store.filtering import display_group_label, format_coordinate

_EDIT_FIELDS = ("name", "lat", "lng", "color", "notes")


def build_points_table(points: list[Point], color_groups: dict[str, str]) -> Table:
    table = Table(title=f"Saved points ({len(points)})")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Lat", justify="right")
    table.add_column("Lng", justify="right")
    table.add_column("Group")
    table.add_column("Notes", overflow="fold")
    for point in points:
        group = display_group_label(color_groups.get(point.color, ""))
        table.add_row(
            str(point.id),
            point.name,
            format_coordinate(point.lat),
            format_coordinate(point.lng),
            f"[{point.color}]●[/] {group}",
            point.notes,
        )
    return table


async def run_list(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    if not args.offline:
        await pins.load()
    if args.search:
        pins.record_search(args.search)
    points = pins.filter_points(args.search, args.group)
    console.print(build_points_table(points, pins.color_groups()))
    return 0


async def run_add(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    color = args.color or DEFAULT_POINT_COLOR
    point = pins.add_point(args.lat, args.lng, name=args.name, color=color, notes=args.notes)
    console.print(f"Added point {point.id} ({point.name})")
    return 0


async def run_edit(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    fields = {key: getattr(args, key) for key in _EDIT_FIELDS if getattr(args, key) is not None}
    if fields:
        point = pins.edit_point(args.id, **fields)
    else:
        edited = pins.edit_point_interactive(args.id, QuestionaryEditor())
        if edited is None:
            console.print("Aborted.")
            return 0
        point = edited
    console.print(f"Updated point {point.id} ({point.name})")
    return 0


async def run_move(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    point = pins.move_point(args.id, args.lat, args.lng)
    console.print(f"Moved point {point.id} to {format_coordinate(point.lat)}, {format_coordinate(point.lng)}")
    return 0


async def run_remove(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    if pins.remove_point(args.id):
        console.print(f"Removed point {args.id}")
    else:
        console.print("Aborted.")
    return 0


async def run_clear(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    removed = pins.clear_points()
    console.print(f"Removed {removed} point{'s' if removed != 1 else ''}")
    return 0


__all__ = ["build_points_table", "run_add", "run_clear", "run_edit", "run_list", "run_move", "run_remove"]
