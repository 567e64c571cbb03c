"""User interaction capabilities injected at the call sites that need a human.

These replace ambient prompt/confirm/alert dialogs: the SDK asks an
injected capability and acts on the structured answer.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pinsync.contracts.point import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditResult:
    """Outcome of an edit dialog: either cancelled or a set of changed fields."""

    cancelled: bool = False
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def cancel(cls) -> EditResult:
        return cls(cancelled=True)


class Confirmation(ABC):
    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Return True when the user accepts *message*."""


class Editor(ABC):
    @abstractmethod
    def edit(self, point: Point, color_groups: dict[str, str]) -> EditResult:
        """Present *point* for editing and return the requested changes."""


class Notifier(ABC):
    @abstractmethod
    def alert(self, message: str) -> None:
        """Surface a blocking message to the user."""


class AutoConfirm(Confirmation):
    """Confirmation that always answers with a fixed decision."""

    def __init__(self, answer: bool = True) -> None:
        self._answer = answer

    def confirm(self, message: str) -> bool:
        logger.debug("Auto-%s: %s", "confirmed" if self._answer else "declined", message)
        return self._answer


class NullNotifier(Notifier):
    """Notifier that only logs; used when nobody is watching."""

    def alert(self, message: str) -> None:
        logger.info("%s", message)
