"""Color group commands."""

from __future__ import annotations

import argparse
from collections import Counter

from rich.console import Console
from rich.table import Table

from pinsync.sdk import PinSync
from pinsync.store.filtering import display_group_label


async def run_list(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    usage = Counter(point.color for point in pins.points())
    table = Table(title="Color groups")
    table.add_column("Color")
    table.add_column("Label")
    table.add_column("Points", justify="right")
    for color, label in pins.color_groups().items():
        table.add_row(f"[{color}]●[/] {color}", display_group_label(label), str(usage.get(color, 0)))
    console.print(table)
    return 0


async def run_add(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    pins.add_color_group(args.color, args.label)
    console.print(f"Saved color group {args.color.strip().lower()}")
    return 0


async def run_remove(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    if pins.remove_color_group(args.color):
        console.print(f"Removed color group {args.color}")
    else:
        console.print(f"Color group {args.color} not removed")
    return 0


async def run_rename(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    if pins.rename_color_group(args.color, args.label):
        console.print(f"Renamed color group {args.color}")
    else:
        console.print("No changes")
    return 0


__all__ = ["run_add", "run_list", "run_remove", "run_rename"]
