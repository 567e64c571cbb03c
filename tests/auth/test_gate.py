import pytest

from pinsync.auth.gate import PermissionGate
from pinsync.cache.memory import MemoryCache
from pinsync.contracts.cache import CacheSlot
from pinsync.contracts.events import ChangeEvent, ChangeKind, EventBus
from pinsync.contracts.exceptions import PermissionDeniedError


def test_no_credential_means_read_only() -> None:
    gate = PermissionGate(MemoryCache())

    assert gate.credential is None
    assert gate.has_edit_permission() is False
    assert gate.is_read_only() is True
    assert gate.masked_credential() == "None"


def test_whitespace_credential_does_not_grant_permission() -> None:
    cache = MemoryCache()
    cache.set(CacheSlot.CREDENTIAL, "   ")

    assert PermissionGate(cache).is_read_only() is True


def test_require_edit_raises_in_read_only_mode() -> None:
    gate = PermissionGate(MemoryCache())

    with pytest.raises(PermissionDeniedError, match="add points"):
        gate.require_edit("add points")


def test_set_credential_trims_and_grants_permission(events: list[ChangeEvent], bus: EventBus) -> None:
    cache = MemoryCache()
    gate = PermissionGate(cache, bus=bus)

    assert gate.set_credential("  ghp_abcdef1234  ") is True

    assert cache.get(CacheSlot.CREDENTIAL) == "ghp_abcdef1234"
    assert gate.masked_credential() == "***1234"
    gate.require_edit("add points")
    assert events == [ChangeEvent(ChangeKind.PERMISSION_CHANGED)]


@pytest.mark.parametrize("token", ["", "   ", None])
def test_empty_credential_removes_the_slot(token: str | None) -> None:
    cache = MemoryCache()
    gate = PermissionGate(cache)
    gate.set_credential("ghp_abcdef1234")

    assert gate.set_credential(token) is False

    assert cache.get(CacheSlot.CREDENTIAL) is None
    assert gate.is_read_only() is True
