"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("pinsync")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pinsync", description="Sync saved map points with a GitHub repository")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument("--config", default="./pinsync.json", help="Path to pinsync.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--yes", "-y", action="store_true", help="Answer yes to every confirmation")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show sync mode and cached state")
    subparsers.add_parser("pull", help="Replace cached points with the remote document")
    subparsers.add_parser("push", help="Save cached points and color groups to the remote document")

    points_parser = subparsers.add_parser("points", help="Saved point operations")
    points_sub = points_parser.add_subparsers(dest="points_command", required=True)

    list_parser = points_sub.add_parser("list", help="List saved points")
    list_parser.add_argument("--search", default=None, help="Case-insensitive text filter")
    list_parser.add_argument("--group", default=None, help="Group label, ALL_GROUPS or HIDE_ALL")
    list_parser.add_argument("--offline", action="store_true", help="Use cached points without pulling")

    add_parser = points_sub.add_parser("add", help="Add a point")
    add_parser.add_argument("lat", help="Latitude in [-90, 90]")
    add_parser.add_argument("lng", help="Longitude in [-180, 180]")
    add_parser.add_argument("--name", default="", help="Point name (default: 'Point <id>')")
    add_parser.add_argument("--color", default=None, help="Marker color as #rrggbb")
    add_parser.add_argument("--notes", default="", help="Free-form notes")

    edit_parser = points_sub.add_parser("edit", help="Edit a point (interactive when no field is given)")
    edit_parser.add_argument("id", type=int, help="Point id")
    edit_parser.add_argument("--name", default=None)
    edit_parser.add_argument("--lat", default=None)
    edit_parser.add_argument("--lng", default=None)
    edit_parser.add_argument("--color", default=None)
    edit_parser.add_argument("--notes", default=None)

    move_parser = points_sub.add_parser("move", help="Move a point to new coordinates")
    move_parser.add_argument("id", type=int, help="Point id")
    move_parser.add_argument("lat")
    move_parser.add_argument("lng")

    remove_parser = points_sub.add_parser("remove", help="Remove a point")
    remove_parser.add_argument("id", type=int, help="Point id")

    points_sub.add_parser("clear", help="Remove every saved point")

    groups_parser = subparsers.add_parser("groups", help="Color group operations")
    groups_sub = groups_parser.add_subparsers(dest="groups_command", required=True)
    groups_sub.add_parser("list", help="List color groups")
    group_add = groups_sub.add_parser("add", help="Add or relabel a color group")
    group_add.add_argument("color", help="Color as #rrggbb")
    group_add.add_argument("label", help="Group label")
    group_remove = groups_sub.add_parser("remove", help="Remove a color group")
    group_remove.add_argument("color")
    group_rename = groups_sub.add_parser("rename", help="Rename a color group (blank keeps the old label)")
    group_rename.add_argument("color")
    group_rename.add_argument("label")

    auth_parser = subparsers.add_parser("auth", help="Credential operations")
    auth_sub = auth_parser.add_subparsers(dest="auth_command", required=True)
    auth_set = auth_sub.add_parser("set", help="Store a write credential (prompts when omitted)")
    auth_set.add_argument("token", nargs="?", default=None)
    auth_sub.add_parser("clear", help="Remove the credential and switch to read-only mode")

    history_parser = subparsers.add_parser("history", help="Search history operations")
    history_sub = history_parser.add_subparsers(dest="history_command", required=True)
    history_sub.add_parser("list", help="Show recent searches")
    history_sub.add_parser("clear", help="Clear search history")

    return parser


__all__ = ["build_parser"]
