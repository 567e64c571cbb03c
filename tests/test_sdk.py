from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from pinsync.cache.memory import MemoryCache
from pinsync.contracts.config import PinSyncConfig
from pinsync.contracts.document import SyncDocument
from pinsync.contracts.exceptions import ConfigError, PermissionDeniedError, PointNotFoundError, RemoteStoreError
from pinsync.contracts.interaction import EditResult
from pinsync.contracts.sync import PullOutcome, PushOutcome
from pinsync.engine.status import StatusBoard
from pinsync.sdk import PinSync, load_config
from tests.fakes.clock import SteppingClock
from tests.fakes.interaction import RecordingNotifier, ScriptedConfirmation, ScriptedEditor
from tests.fakes.points import make_point
from tests.fakes.remote import FakeRemoteStore

TOKEN = "ghp_sdktoken9876"


def _make_pins(
    remote: FakeRemoteStore,
    *,
    cache: MemoryCache | None = None,
    notifier: RecordingNotifier | None = None,
    confirmation: ScriptedConfirmation | None = None,
    credential: str | None = TOKEN,
) -> PinSync:
    pins = PinSync(
        cache=cache or MemoryCache(),
        remote=remote,
        pull_timeout=0.2,
        notifier=notifier,
        confirmation=confirmation or ScriptedConfirmation(True),
        clock=SteppingClock(),
    )
    if credential:
        pins.setup_credential(credential)
    return pins


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


def test_load_config_resolves_cache_dir_against_config_dir(tmp_path: Path) -> None:
    config_path = tmp_path / "pinsync.json"
    config_path.write_text(json.dumps({"owner": "octo", "repo": "maps", "cache_dir": "state"}), encoding="utf-8")

    config = load_config(config_path)

    assert config.cache_dir == (tmp_path / "state").resolve()
    assert config.content_url == "https://api.github.com/repos/octo/maps/contents/saved-points.json"


def test_load_config_keeps_absolute_cache_dir(tmp_path: Path) -> None:
    cache_dir = tmp_path / "elsewhere"
    config_path = tmp_path / "pinsync.json"
    config_path.write_text(json.dumps({"owner": "octo", "repo": "maps", "cache_dir": str(cache_dir)}), encoding="utf-8")

    assert load_config(config_path).cache_dir == cache_dir


@pytest.mark.parametrize(
    ("content", "message"),
    [
        (None, "failed reading config file"),
        ("{not json", "invalid JSON in config file"),
        (json.dumps({"owner": "octo"}), "invalid config"),
        (json.dumps({"owner": "octo", "repo": "maps", "pull_timeout": 0}), "invalid config"),
    ],
)
def test_load_config_errors_become_config_error(tmp_path: Path, content: str | None, message: str) -> None:
    config_path = tmp_path / "pinsync.json"
    if content is not None:
        config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(config_path)


# ---------------------------------------------------------------------------
# lifecycle
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_context_manager_opens_remote_and_flushes_pending_saves() -> None:
    remote = FakeRemoteStore()
    pins = _make_pins(remote)

    async with pins:
        assert remote.entered is True
        pins.add_point(40.7, -74.0, "Office")

    assert remote.exited is True
    assert remote.write_calls == 1
    assert [point.name for point in remote.writes[0].points] == ["Office"]


@pytest.mark.asyncio
async def test_from_config_reads_through_github_store(tmp_path: Path) -> None:
    document = SyncDocument(points=[make_point(1, timestamp="2024-01-01T00:00:00.000Z")])
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=document.to_wire())

    config = PinSyncConfig(owner="octo", repo="maps", cache_dir=tmp_path / "cache")
    board = StatusBoard()

    async with PinSync.from_config(config, observer=board, transport=httpx.MockTransport(handler)) as pins:
        result = await pins.load()

    assert result.outcome is PullOutcome.REMOTE
    assert [point.id for point in pins.points()] == [1]
    assert seen[0].url.path == "/repos/octo/maps/contents/saved-points.json"
    assert "Authorization" not in seen[0].headers
    assert pins.observer is board


# ---------------------------------------------------------------------------
# pull / push
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_manual_pull_alerts_with_point_count() -> None:
    remote = FakeRemoteStore(SyncDocument(points=[make_point(1), make_point(2)]))
    notifier = RecordingNotifier()
    pins = _make_pins(remote, notifier=notifier)

    result = await pins.pull()

    assert result.outcome is PullOutcome.REMOTE
    assert notifier.alerts == ["Successfully pulled 2 points from remote!"]


@pytest.mark.asyncio
async def test_manual_pull_alerts_when_remote_is_empty() -> None:
    notifier = RecordingNotifier()
    pins = _make_pins(FakeRemoteStore(), notifier=notifier)

    await pins.pull()

    assert notifier.alerts == ["No saved points found in the remote store."]


@pytest.mark.asyncio
async def test_manual_pull_alerts_on_failure() -> None:
    remote = FakeRemoteStore()
    remote.read_error = RemoteStoreError("Remote read failed: 502", status_code=502)
    notifier = RecordingNotifier()
    pins = _make_pins(remote, notifier=notifier)

    result = await pins.pull()

    assert result.outcome is PullOutcome.OFFLINE
    assert notifier.alerts == ["Failed to pull from remote: Remote read failed: 502"]


@pytest.mark.asyncio
async def test_manual_push_with_no_points_is_skipped() -> None:
    remote = FakeRemoteStore()
    pins = _make_pins(remote)

    result = await pins.push()

    assert result.outcome is PushOutcome.SKIPPED
    assert result.message == "No points to save"
    assert remote.write_calls == 0


@pytest.mark.asyncio
async def test_manual_push_failure_alerts_user() -> None:
    remote = FakeRemoteStore()
    notifier = RecordingNotifier()
    pins = _make_pins(remote, notifier=notifier)
    pins.add_point(1.0, 2.0, "Somewhere")
    remote.write_error = RemoteStoreError("Remote write failed: 422", status_code=422)

    result = await pins.push()

    assert result.outcome is PushOutcome.FAILED
    assert notifier.alerts == ["Error saving to remote: Remote write failed: 422"]


# ---------------------------------------------------------------------------
# point edits
# ---------------------------------------------------------------------------


def test_add_point_defaults_name_from_id() -> None:
    pins = _make_pins(FakeRemoteStore())

    point = pins.add_point(40.0, -74.0)

    assert point.name == f"Point {point.id}"
    assert pins.get_point(point.id) == point


def test_read_only_mode_rejects_edits() -> None:
    pins = _make_pins(FakeRemoteStore(), credential=None)

    with pytest.raises(PermissionDeniedError):
        pins.add_point(40.0, -74.0)
    assert pins.points() == []


def test_edit_and_move_unknown_point_raise_not_found() -> None:
    pins = _make_pins(FakeRemoteStore())

    with pytest.raises(PointNotFoundError):
        pins.edit_point(404, name="missing")
    with pytest.raises(PointNotFoundError):
        pins.move_point(404, 1.0, 1.0)
    with pytest.raises(PointNotFoundError):
        pins.get_point(404)


def test_edit_point_updates_fields_and_keeps_identity() -> None:
    pins = _make_pins(FakeRemoteStore())
    point = pins.add_point(40.0, -74.0, "Office")

    edited = pins.edit_point(point.id, name="HQ", lat="41.5")

    assert (edited.id, edited.timestamp) == (point.id, point.timestamp)
    assert (edited.name, edited.lat, edited.lng) == ("HQ", 41.5, -74.0)


def test_interactive_edit_cancel_changes_nothing() -> None:
    pins = _make_pins(FakeRemoteStore())
    point = pins.add_point(40.0, -74.0, "Office")
    editor = ScriptedEditor(EditResult.cancel())

    assert pins.edit_point_interactive(point.id, editor) is None
    assert editor.edited == [point]
    assert pins.get_point(point.id) == point


def test_interactive_edit_applies_returned_fields() -> None:
    pins = _make_pins(FakeRemoteStore())
    point = pins.add_point(40.0, -74.0, "Office")

    edited = pins.edit_point_interactive(point.id, ScriptedEditor(EditResult(fields={"color": "#2CA02C"})))

    assert edited is not None
    assert edited.color == "#2ca02c"


def test_interactive_edit_with_no_changes_returns_point() -> None:
    pins = _make_pins(FakeRemoteStore())
    point = pins.add_point(40.0, -74.0, "Office")

    assert pins.edit_point_interactive(point.id, ScriptedEditor(EditResult())) == point


# ---------------------------------------------------------------------------
# confirmed removals
# ---------------------------------------------------------------------------


def test_remove_point_declined_keeps_point() -> None:
    confirmation = ScriptedConfirmation(False)
    pins = _make_pins(FakeRemoteStore(), confirmation=confirmation)
    point = pins.add_point(40.0, -74.0, "Office")

    assert pins.remove_point(point.id) is False
    assert confirmation.questions == ['Are you sure you want to delete "Office"?']
    assert pins.get_point(point.id) == point


def test_remove_point_with_explicit_confirmation() -> None:
    pins = _make_pins(FakeRemoteStore(), confirmation=ScriptedConfirmation(False))
    point = pins.add_point(40.0, -74.0, "Office")

    assert pins.remove_point(point.id, ScriptedConfirmation(True)) is True
    assert pins.points() == []


def test_clear_points_asks_only_when_there_is_something_to_clear() -> None:
    confirmation = ScriptedConfirmation(True)
    pins = _make_pins(FakeRemoteStore(), confirmation=confirmation)

    assert pins.clear_points() == 0
    assert confirmation.questions == []

    pins.add_point(1.0, 1.0)
    pins.add_point(2.0, 2.0)
    assert pins.clear_points() == 2
    assert confirmation.questions == ["Are you sure you want to remove all saved points?"]
    assert pins.points() == []


def test_remove_color_group_confirms_and_skips_unknown_colors() -> None:
    confirmation = ScriptedConfirmation(True)
    pins = _make_pins(FakeRemoteStore(), confirmation=confirmation)

    assert pins.remove_color_group("#000000") is False
    assert confirmation.questions == []

    assert pins.remove_color_group("#2ca02c") is True
    assert confirmation.questions == ["Remove this color group?"]
    assert "#2ca02c" not in pins.color_groups()


def test_remove_color_group_accepts_uppercase_spelling() -> None:
    pins = _make_pins(FakeRemoteStore(), confirmation=ScriptedConfirmation(True))
    pins.add_color_group("#ABCDEF", "Parks")

    assert pins.rename_color_group("#ABCDEF", "Fields") is True
    assert pins.remove_color_group("#ABCDEF") is True
    assert "#abcdef" not in pins.color_groups()


def test_clear_search_history_declined() -> None:
    pins = _make_pins(FakeRemoteStore(), confirmation=ScriptedConfirmation(False))
    pins.record_search("golf")

    assert pins.clear_search_history() is False
    assert pins.search_history() == ["golf"]


# ---------------------------------------------------------------------------
# credential and filtering
# ---------------------------------------------------------------------------


def test_setup_credential_switches_modes_and_reports_status() -> None:
    board = StatusBoard()
    pins = PinSync(cache=MemoryCache(), remote=FakeRemoteStore(), observer=board)

    assert pins.setup_credential("  ghp_new1234  ") is True
    assert pins.gate.credential == "ghp_new1234"
    assert board.current is not None
    assert board.current.text == "Credential saved - you can now edit points"

    assert pins.setup_credential("") is False
    assert pins.gate.is_read_only() is True
    assert board.current.text == "Credential removed - switched to read-only mode"


def test_filter_points_by_text_and_group() -> None:
    pins = _make_pins(FakeRemoteStore())
    golf = pins.add_point(36.5, -121.9, "Pebble Beach", color="#2ca02c")
    pins.add_point(40.0, -74.0, "Office")

    assert pins.filter_points("pebble") == [golf]
    assert pins.filter_points(group_filter="Golf Course") == [golf]
    assert pins.filter_points(group_filter="HIDE_ALL") == []
