"""Terminal implementations of the interaction capabilities."""

from __future__ import annotations

from typing import Any, ClassVar

import questionary
from rich.console import Console

from pinsync.contracts.interaction import Confirmation, EditResult, Editor, Notifier
from pinsync.contracts.point import Point
from pinsync.engine.status import StatusLevel, SyncObserver
from pinsync.store.filtering import display_group_label


class QuestionaryConfirmation(Confirmation):
    def confirm(self, message: str) -> bool:
        # ask() returns None on Ctrl-C.
        return bool(questionary.confirm(message, default=False).ask())


class QuestionaryEditor(Editor):
    """Prompt for every editable field with the current value as default."""

    def edit(self, point: Point, color_groups: dict[str, str]) -> EditResult:
        name = questionary.text("Name:", default=point.name).ask()
        if name is None:
            return EditResult.cancel()
        lat = questionary.text("Latitude:", default=str(point.lat)).ask()
        if lat is None:
            return EditResult.cancel()
        lng = questionary.text("Longitude:", default=str(point.lng)).ask()
        if lng is None:
            return EditResult.cancel()
        notes = questionary.text("Notes:", default=point.notes).ask()
        if notes is None:
            return EditResult.cancel()

        choices = [
            questionary.Choice(f"{color} {display_group_label(label)}", value=color)
            for color, label in color_groups.items()
        ]
        if point.color not in color_groups:
            choices.insert(0, questionary.Choice(point.color, value=point.color))
        color = questionary.select("Color:", choices=choices, default=point.color).ask()
        if color is None:
            return EditResult.cancel()

        current: dict[str, Any] = {
            "name": point.name,
            "lat": str(point.lat),
            "lng": str(point.lng),
            "notes": point.notes,
            "color": point.color,
        }
        answers: dict[str, Any] = {"name": name, "lat": lat, "lng": lng, "notes": notes, "color": color}
        return EditResult(fields={key: value for key, value in answers.items() if value != current[key]})


class RichNotifier(Notifier):
    def __init__(self, console: Console) -> None:
        self._console = console

    def alert(self, message: str) -> None:
        self._console.print(f"[bold]{message}[/bold]")


class RichStatusObserver(SyncObserver):
    """Print each sync status line as it happens."""

    _STYLES: ClassVar[dict[StatusLevel, str]] = {
        StatusLevel.INFO: "dim",
        StatusLevel.SUCCESS: "green",
        StatusLevel.ERROR: "red",
    }

    def __init__(self, console: Console) -> None:
        self._console = console

    def status(self, message: str, level: StatusLevel = StatusLevel.INFO) -> None:
        self._console.print(message, style=self._STYLES[level])


def prompt_credential() -> str | None:
    return questionary.password("Personal access token (leave empty for read-only):").ask()
