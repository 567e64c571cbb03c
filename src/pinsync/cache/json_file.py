"""File-backed local cache, one JSON document per slot."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pinsync.contracts.cache import CacheSlot, LocalCache

logger = logging.getLogger(__name__)


class JsonFileCache(LocalCache):
    """Stores each slot as ``<directory>/<slot>.json``.

    Writes go through a temp file and ``os.replace`` so a crash never leaves
    a half-written slot behind. A corrupt slot only affects itself.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def get(self, slot: CacheSlot, default: Any = None) -> Any:
        path = self._path(slot)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return default
        except OSError as exc:
            logger.error("Error loading cache slot %s: %s", slot, exc)
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Corrupt cache slot %s (%s); using default", slot, exc)
            return default

    def set(self, slot: CacheSlot, value: Any) -> bool:
        try:
            payload = json.dumps(value, indent=2)
        except (TypeError, ValueError) as exc:
            logger.error("Error saving cache slot %s: %s", slot, exc)
            return False

        tmp_name: str | None = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{slot}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path(slot))
        except OSError as exc:
            logger.error("Error saving cache slot %s: %s", slot, exc)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False
        return True

    def delete(self, slot: CacheSlot) -> bool:
        try:
            self._path(slot).unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Error removing cache slot %s: %s", slot, exc)
            return False
        return True

    def _path(self, slot: CacheSlot) -> Path:
        return self._directory / f"{slot.value}.json"
