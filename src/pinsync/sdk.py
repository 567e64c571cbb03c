"""SDK composition root for pinsync."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from pinsync.auth.gate import PermissionGate
from pinsync.cache.json_file import JsonFileCache
from pinsync.contracts.cache import LocalCache
from pinsync.contracts.config import PinSyncConfig
from pinsync.contracts.events import EventBus
from pinsync.contracts.exceptions import ConfigError, PointNotFoundError
from pinsync.contracts.interaction import AutoConfirm, Confirmation, Editor, Notifier, NullNotifier
from pinsync.contracts.point import DEFAULT_POINT_COLOR, Point
from pinsync.contracts.remote import RemoteStore
from pinsync.contracts.sync import PullOutcome, PullResult, PushOutcome, PushResult
from pinsync.engine import StatusBoard, SyncEngine, SyncObserver
from pinsync.remote.github import GitHubContentStore
from pinsync.store.colors import ColorGroupRegistry
from pinsync.store.filtering import filter_points
from pinsync.store.preferences import Preferences
from pinsync.store.repository import PointRepository
from pinsync.store.view import ViewState

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> PinSyncConfig:
    """Load and validate config from JSON, resolving ``cache_dir`` against the config directory."""
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = PinSyncConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    cache_dir = parsed.cache_dir.expanduser()
    if not cache_dir.is_absolute():
        cache_dir = (config_dir / cache_dir).resolve()
    return parsed.model_copy(update={"cache_dir": cache_dir})


class PinSync:
    """pinsync SDK public API.

    Use as an async context manager so the remote client is opened and any
    queued auto-save is flushed before exit::

        async with PinSync.from_config(config) as pins:
            await pins.load()
            pins.add_point(40.7, -74.0, "Office")
    """

    def __init__(
        self,
        *,
        cache: LocalCache,
        remote: RemoteStore,
        bus: EventBus | None = None,
        gate: PermissionGate | None = None,
        pull_timeout: float = 5.0,
        observer: SyncObserver | None = None,
        notifier: Notifier | None = None,
        confirmation: Confirmation | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._bus = bus or EventBus()
        self._cache = cache
        self._remote = remote
        self._gate = gate or PermissionGate(cache, bus=self._bus)
        self._observer: SyncObserver = observer or StatusBoard()
        self._notifier: Notifier = notifier or NullNotifier()
        self._confirmation: Confirmation = confirmation or AutoConfirm()

        clock_kwargs: dict[str, Any] = {"clock": clock} if clock is not None else {}
        self._repository = PointRepository(cache, self._gate, bus=self._bus, **clock_kwargs)
        self._registry = ColorGroupRegistry(cache, self._gate, bus=self._bus)
        self._preferences = Preferences(cache)
        self._view = ViewState(self._repository, self._registry, bus=self._bus)
        self._engine = SyncEngine(
            remote,
            self._gate,
            self._repository,
            self._registry,
            bus=self._bus,
            pull_timeout=pull_timeout,
            observer=self._observer,
            notifier=self._notifier,
            **clock_kwargs,
        )

    @classmethod
    def from_config(
        cls,
        config: PinSyncConfig,
        *,
        observer: SyncObserver | None = None,
        notifier: Notifier | None = None,
        confirmation: Confirmation | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> PinSync:
        cache = JsonFileCache(config.cache_dir)
        bus = EventBus()
        gate = PermissionGate(cache, bus=bus)
        remote = GitHubContentStore(
            content_url=config.content_url,
            token_provider=lambda: gate.credential,
            branch=config.branch,
            timeout=config.http_timeout,
            max_retries=config.max_read_retries,
            transport=transport,
        )
        return cls(
            cache=cache,
            remote=remote,
            bus=bus,
            gate=gate,
            pull_timeout=config.pull_timeout,
            observer=observer
            or StatusBoard(info_seconds=config.status_info_seconds, error_seconds=config.status_error_seconds),
            notifier=notifier,
            confirmation=confirmation,
        )

    async def __aenter__(self) -> PinSync:
        await self._remote.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            await self._engine.flush()
        finally:
            self._engine.close()
            await self._remote.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def gate(self) -> PermissionGate:
        return self._gate

    @property
    def engine(self) -> SyncEngine:
        return self._engine

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def preferences(self) -> Preferences:
        return self._preferences

    @property
    def observer(self) -> SyncObserver:
        return self._observer

    def points(self) -> list[Point]:
        return self._repository.all()

    def get_point(self, point_id: int) -> Point:
        point = self._repository.get(point_id)
        if point is None:
            raise PointNotFoundError(point_id)
        return point

    def color_groups(self) -> dict[str, str]:
        return self._registry.groups()

    async def load(self) -> PullResult:
        """Startup pull: remote when reachable, cached points otherwise."""
        return await self._engine.pull()

    async def pull(self) -> PullResult:
        """Manual pull; the outcome is also surfaced through the notifier."""
        result = await self._engine.pull()
        if result.outcome is PullOutcome.REMOTE:
            self._notifier.alert(f"Successfully pulled {len(result.points)} points from remote!")
        elif result.outcome is PullOutcome.EMPTY:
            self._notifier.alert("No saved points found in the remote store.")
        else:
            self._notifier.alert(f"Failed to pull from remote: {result.error}")
        return result

    async def push(self) -> PushResult:
        """Manual push; failures are shown to the user."""
        if not self._repository.all():
            message = "No points to save"
            self._observer.status(message)
            return PushResult(outcome=PushOutcome.SKIPPED, message=message)
        return await self._engine.push(show_failure_to_user=True)

    def add_point(
        self,
        lat: float,
        lng: float,
        name: str = "",
        color: str = DEFAULT_POINT_COLOR,
        notes: str = "",
    ) -> Point:
        return self._repository.create(lat, lng, name=name, color=color, notes=notes)

    def edit_point(self, point_id: int, **fields: Any) -> Point:
        updated = self._repository.update(point_id, fields)
        if updated is None:
            raise PointNotFoundError(point_id)
        return updated

    def edit_point_interactive(self, point_id: int, editor: Editor) -> Point | None:
        """Run *editor* over a point; ``None`` when the user cancels."""
        self._gate.require_edit("edit points")
        point = self.get_point(point_id)
        result = editor.edit(point, self._registry.groups())
        if result.cancelled:
            logger.debug("Edit of point %d cancelled", point_id)
            return None
        if not result.fields:
            return point
        return self.edit_point(point_id, **result.fields)

    def move_point(self, point_id: int, lat: float, lng: float) -> Point:
        moved = self._repository.move(point_id, lat, lng)
        if moved is None:
            raise PointNotFoundError(point_id)
        return moved

    def remove_point(self, point_id: int, confirmation: Confirmation | None = None) -> bool:
        self._gate.require_edit("remove points")
        point = self.get_point(point_id)
        if not (confirmation or self._confirmation).confirm(f'Are you sure you want to delete "{point.name}"?'):
            return False
        return self._repository.remove(point_id)

    def clear_points(self, confirmation: Confirmation | None = None) -> int:
        self._gate.require_edit("remove points")
        if not self._repository.all():
            return 0
        if not (confirmation or self._confirmation).confirm("Are you sure you want to remove all saved points?"):
            return 0
        return self._repository.clear()

    def add_color_group(self, color: str, label: str) -> None:
        self._registry.add(color, label)

    def remove_color_group(self, color: str, confirmation: Confirmation | None = None) -> bool:
        self._gate.require_edit("edit color groups")
        if not self._registry.contains(color):
            return False
        if not (confirmation or self._confirmation).confirm("Remove this color group?"):
            return False
        return self._registry.remove(color)

    def rename_color_group(self, color: str, label: str) -> bool:
        return self._registry.rename(color, label)

    def rename_color_groups(self, labels: Mapping[str, str]) -> list[str]:
        return self._registry.rename_many(labels)

    def filter_points(self, text_query: str | None = None, group_filter: str | None = None) -> list[Point]:
        return filter_points(self._repository.all(), text_query, group_filter, self._registry.groups())

    def setup_credential(self, token: str | None) -> bool:
        """Store or remove the write credential; returns whether editing is now allowed."""
        granted = self._gate.set_credential(token)
        if granted:
            self._observer.status("Credential saved - you can now edit points")
        else:
            self._observer.status("Credential removed - switched to read-only mode")
        return granted

    def search_history(self) -> list[str]:
        return self._preferences.search_history()

    def record_search(self, query: str) -> list[str]:
        return self._preferences.add_search(query)

    def clear_search_history(self, confirmation: Confirmation | None = None) -> bool:
        if not (confirmation or self._confirmation).confirm("Clear all search history?"):
            return False
        self._preferences.clear_search_history()
        return True

    async def flush(self) -> None:
        await self._engine.flush()
