"""Shared test fixtures for pinsync tests."""

from __future__ import annotations

import pytest

from pinsync.auth.gate import PermissionGate
from pinsync.cache.memory import MemoryCache
from pinsync.contracts.cache import CacheSlot
from pinsync.contracts.events import ChangeEvent, EventBus
from pinsync.engine.engine import SyncEngine
from pinsync.engine.status import StatusBoard
from pinsync.store.colors import ColorGroupRegistry
from pinsync.store.repository import PointRepository
from tests.fakes.clock import SteppingClock
from tests.fakes.remote import FakeRemoteStore


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def events(bus: EventBus) -> list[ChangeEvent]:
    received: list[ChangeEvent] = []
    bus.subscribe(received.append)
    return received


@pytest.fixture
def gate(cache: MemoryCache, bus: EventBus) -> PermissionGate:
    """Gate with a credential stored (edit mode)."""
    cache.set(CacheSlot.CREDENTIAL, "ghp_testtoken1234")
    return PermissionGate(cache, bus=bus)


@pytest.fixture
def repository(cache: MemoryCache, gate: PermissionGate, bus: EventBus, clock: SteppingClock) -> PointRepository:
    return PointRepository(cache, gate, bus=bus, clock=clock)


@pytest.fixture
def registry(cache: MemoryCache, gate: PermissionGate, bus: EventBus) -> ColorGroupRegistry:
    return ColorGroupRegistry(cache, gate, bus=bus)


@pytest.fixture
def remote() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def status_board() -> StatusBoard:
    return StatusBoard()


@pytest.fixture
def engine(
    remote: FakeRemoteStore,
    gate: PermissionGate,
    repository: PointRepository,
    registry: ColorGroupRegistry,
    bus: EventBus,
    status_board: StatusBoard,
    clock: SteppingClock,
) -> SyncEngine:
    return SyncEngine(
        remote,
        gate,
        repository,
        registry,
        bus=bus,
        pull_timeout=0.2,
        observer=status_board,
        clock=clock,
    )
