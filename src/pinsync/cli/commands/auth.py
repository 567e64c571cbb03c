"""Credential commands."""

from __future__ import annotations

import argparse
import os

from rich.console import Console

from pinsync.cli.interaction import prompt_credential
from pinsync.sdk import PinSync

TOKEN_ENV_VAR = "PINSYNC_TOKEN"


async def run_set(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    token = args.token
    if token is None:
        token = os.environ.get(TOKEN_ENV_VAR) or prompt_credential()
    if token is None:
        console.print("Aborted.")
        return 0
    if pins.setup_credential(token):
        console.print("Credential saved! You can now add, edit, and remove points.")
        console.print("Your changes will automatically sync to the remote repository.")
    else:
        console.print("Credential removed - read-only mode")
    return 0


async def run_clear(pins: PinSync, args: argparse.Namespace, console: Console) -> int:
    pins.setup_credential("")
    console.print("Credential removed - read-only mode")
    return 0


__all__ = ["TOKEN_ENV_VAR", "run_clear", "run_set"]
