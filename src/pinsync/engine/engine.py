"""Pull, push, merge and auto-save between the local cache and the remote document."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime

from pinsync.auth.gate import PermissionGate
from pinsync.contracts.document import SyncDocument
from pinsync.contracts.events import ChangeEvent, ChangeKind, EventBus
from pinsync.contracts.exceptions import PinSyncError
from pinsync.contracts.interaction import Notifier, NullNotifier
from pinsync.contracts.point import Point, iso_timestamp, parse_timestamp
from pinsync.contracts.remote import RemoteStore
from pinsync.contracts.sync import PullOutcome, PullResult, PushOutcome, PushResult, SyncState
from pinsync.engine.queue import PushQueue
from pinsync.engine.status import NullSyncObserver, StatusLevel, SyncObserver
from pinsync.store.colors import ColorGroupRegistry
from pinsync.store.repository import PointRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SyncEngine:
    def __init__(
        self,
        remote: RemoteStore,
        gate: PermissionGate,
        repository: PointRepository,
        registry: ColorGroupRegistry,
        *,
        bus: EventBus,
        pull_timeout: float = 5.0,
        observer: SyncObserver | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._remote = remote
        self._gate = gate
        self._repository = repository
        self._registry = registry
        self._bus = bus
        self._pull_timeout = pull_timeout
        self._observer: SyncObserver = observer or NullSyncObserver()
        self._notifier: Notifier = notifier or NullNotifier()
        self._clock = clock
        self._pulls_in_flight = 0
        self._pushes_in_flight = 0
        self._queue = PushQueue(self._auto_push)
        self._unsubscribe = bus.subscribe(self._on_change)

    @property
    def state(self) -> SyncState:
        if self._pushes_in_flight:
            return SyncState.PUSHING
        if self._pulls_in_flight:
            return SyncState.PULLING
        return SyncState.IDLE

    @property
    def queue(self) -> PushQueue:
        return self._queue

    def close(self) -> None:
        """Stop reacting to change events."""
        self._unsubscribe()

    async def pull(self) -> PullResult:
        """Refresh the cache from the remote document, falling back to the cache.

        Never raises: a timeout or remote failure yields an ``OFFLINE`` result
        carrying whatever is cached.
        """
        self._pulls_in_flight += 1
        self._observer.status("Loading points from remote...")
        try:
            snapshot = await asyncio.wait_for(self._remote.read(), timeout=self._pull_timeout)
        except TimeoutError:
            logger.warning("Remote read timed out after %.1fs; using cached points", self._pull_timeout)
            return self._offline(f"timed out after {self._pull_timeout:g}s")
        except PinSyncError as exc:
            logger.warning("Remote read failed, using cached points: %s", exc)
            return self._offline(str(exc))
        except Exception as exc:
            logger.exception("Unexpected error reading remote document")
            return self._offline(str(exc) or type(exc).__name__)
        finally:
            self._pulls_in_flight -= 1

        if snapshot is None or not snapshot.document.points:
            cached = self._repository.all()
            message = "No points found in remote - click Pull to load"
            self._observer.status(message)
            return PullResult(points=cached, outcome=PullOutcome.EMPTY, message=message)

        document = snapshot.document
        points = document.points
        groups = document.color_groups
        if self._queue.busy:
            # Local edits not yet saved would otherwise be lost.
            logger.info("Local changes pending; merging them into the pulled points and groups")
            points = self.merge(self._repository.all(), points)
            groups = self.merge_groups(self._registry.groups(), groups)

        self._repository.replace_all(points)
        self._registry.replace_all(groups)
        self._bus.publish(ChangeEvent(ChangeKind.POINTS_REPLACED))

        message = f"Loaded {len(points)} points from remote"
        self._observer.status(message, StatusLevel.SUCCESS)
        return PullResult(points=points, outcome=PullOutcome.REMOTE, message=message)

    @staticmethod
    def merge(local: Iterable[Point], remote: Iterable[Point]) -> list[Point]:
        """Union by id with the remote copy winning, ordered oldest first."""
        merged = list(remote)
        remote_ids = {point.id for point in merged}
        merged.extend(point for point in local if point.id not in remote_ids)
        return sorted(merged, key=lambda point: parse_timestamp(point.timestamp))

    @staticmethod
    def merge_groups(local: Mapping[str, str], remote: Mapping[str, str]) -> dict[str, str]:
        """Remote labels win; colors only known locally are kept."""
        merged = dict(local)
        merged.update(remote)
        return merged

    async def push(self, show_failure_to_user: bool = False) -> PushResult:
        """Write the cached points and color groups as one remote document.

        Never raises. Read-only mode skips without touching the network.
        """
        if self._gate.is_read_only():
            message = "No credential - auto-save disabled"
            logger.info("Push skipped: no credential configured")
            self._observer.status(message)
            if show_failure_to_user:
                self._notifier.alert("A credential is required for saving. Please set up sync first.")
            return PushResult(outcome=PushOutcome.SKIPPED, message=message)

        document = SyncDocument(
            points=self._repository.all(),
            color_groups=self._registry.groups(),
            last_updated=iso_timestamp(self._clock()),
        )
        logger.info(
            "Saving %d points and %d color groups to remote",
            len(document.points),
            len(document.color_groups),
        )
        self._pushes_in_flight += 1
        self._observer.status("Saving to remote...")
        try:
            await self._remote.write(document)
        except PinSyncError as exc:
            logger.error("Save to remote failed: %s", exc)
            self._observer.status("Save failed", StatusLevel.ERROR)
            if show_failure_to_user:
                self._notifier.alert(f"Error saving to remote: {exc}")
            return PushResult(outcome=PushOutcome.FAILED, message="Save failed", error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error writing remote document")
            error = str(exc) or type(exc).__name__
            self._observer.status("Save failed", StatusLevel.ERROR)
            if show_failure_to_user:
                self._notifier.alert(f"Error saving to remote: {error}")
            return PushResult(outcome=PushOutcome.FAILED, message="Save failed", error=error)
        finally:
            self._pushes_in_flight -= 1

        message = f"Saved {len(document.points)} points + groups to remote"
        self._observer.status(message, StatusLevel.SUCCESS)
        return PushResult(outcome=PushOutcome.SAVED, message=message)

    def request_push(self) -> None:
        self._queue.request()

    async def flush(self) -> None:
        await self._queue.flush()

    def _on_change(self, event: ChangeEvent) -> None:
        if event.kind.is_user_mutation:
            self.request_push()

    async def _auto_push(self) -> None:
        await self.push()

    def _offline(self, error: str) -> PullResult:
        cached = self._repository.all()
        if cached:
            message = f"Using {len(cached)} cached points (offline)"
        else:
            message = "No points found - click Pull to load from remote"
        self._observer.status(message, StatusLevel.ERROR)
        return PullResult(points=cached, outcome=PullOutcome.OFFLINE, message=message, error=error)
