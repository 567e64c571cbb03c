"""Search history commands."""

from __future__ import annotations

import argparse

from rich.console import Console

from pinsync.sdk import PinSync


async def run_list(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    history = pins.search_history()
    if not history:
        console.print("No recent searches")
        return 0
    for index, query in enumerate(history, start=1):
        console.print(f"{index:>2}. {query}", highlight=False)
    return 0


async def run_clear(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    if pins.clear_search_history():
        console.print("Search history cleared")
    else:
        console.print("Aborted.")
    return 0


__all__ = ["run_clear", "run_list"]
