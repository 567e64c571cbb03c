"""Command-line interface for pinsync."""

from __future__ import annotations

from pinsync.cli.app import main as main
from pinsync.cli.app import run_command as run_command
from pinsync.cli.parser import build_parser as build_parser

__all__ = ["build_parser", "main", "run_command"]
