"""Status, pull and push commands."""

from __future__ import annotations

import argparse

from rich.console import Console

from pinsync.contracts.sync import PullOutcome, PushOutcome
from pinsync.sdk import PinSync


def format_status(pins: PinSync, target: str) -> str:
    mode = "edit" if pins.gate.has_edit_permission() else "read-only"
    lines = [
        "",
        "pinsync - status",
        "",
        f"  Remote:      {target}",
        f"  Mode:        {mode}",
        f"  Credential:  {pins.gate.masked_credential()}",
        f"  Points:      {len(pins.points())} cached",
        f"  Groups:      {sum(1 for label in pins.color_groups().values() if label)} labelled",
        "",
    ]
    return "\n".join(lines)


async def run_status(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    console.print(format_status(pins, args.target), highlight=False)
    return 0


async def run_pull(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    result = await pins.pull()
    return 4 if result.outcome is PullOutcome.OFFLINE else 0


async def run_push(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    result = await pins.push()
    if result.outcome is PushOutcome.FAILED:
        return 4
    if result.outcome is PushOutcome.SKIPPED and pins.gate.is_read_only():
        return 5
    return 0


__all__ = ["format_status", "run_pull", "run_push", "run_status"]
