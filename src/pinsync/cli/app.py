"""CLI app entrypoint, command dispatch and error mapping."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable

from rich.console import Console

from pinsync.cli.commands import auth as auth_command
from pinsync.cli.commands import groups as groups_command
from pinsync.cli.commands import history as history_command
from pinsync.cli.commands import points as points_command
from pinsync.cli.commands import sync as sync_command
from pinsync.cli.interaction import QuestionaryConfirmation, RichNotifier, RichStatusObserver
from pinsync.cli.parser import build_parser
from pinsync.contracts.exceptions import (
    ConfigError,
    InvalidInputError,
    PermissionDeniedError,
    PointNotFoundError,
    RemoteStoreError,
)
from pinsync.contracts.interaction import AutoConfirm
from pinsync.sdk import PinSync, load_config

Handler = Callable[[PinSync, argparse.Namespace, Console], Awaitable[int]]

COMMANDS: dict[tuple[str, str | None], Handler] = {
    ("status", None): sync_command.run_status,
    ("pull", None): sync_command.run_pull,
    ("push", None): sync_command.run_push,
    ("points", "list"): points_command.run_list,
    ("points", "add"): points_command.run_add,
    ("points", "edit"): points_command.run_edit,
    ("points", "move"): points_command.run_move,
    ("points", "remove"): points_command.run_remove,
    ("points", "clear"): points_command.run_clear,
    ("groups", "list"): groups_command.run_list,
    ("groups", "add"): groups_command.run_add,
    ("groups", "remove"): groups_command.run_remove,
    ("groups", "rename"): groups_command.run_rename,
    ("auth", "set"): auth_command.run_set,
    ("auth", "clear"): auth_command.run_clear,
    ("history", "list"): history_command.run_list,
    ("history", "clear"): history_command.run_clear,
}


def resolve_handler(args: argparse.Namespace) -> Handler:
    subcommand = getattr(args, f"{args.command}_command", None)
    return COMMANDS[(args.command, subcommand)]


async def run_command(args: argparse.Namespace, console: Console | None = None) -> int:
    console = console or Console()
    config = load_config(args.config)
    args.target = f"{config.owner}/{config.repo}:{config.path}"
    handler = resolve_handler(args)

    pins = PinSync.from_config(
        config,
        observer=RichStatusObserver(Console(stderr=True)),
        notifier=RichNotifier(console),
        confirmation=AutoConfirm() if args.yes else QuestionaryConfirmation(),
    )
    async with pins:
        return await handler(pins, args, console)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        return asyncio.run(run_command(args))
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except RemoteStoreError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except (InvalidInputError, PermissionDeniedError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except PointNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 6
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 2
    except Exception as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["COMMANDS", "main", "resolve_handler", "run_command"]
