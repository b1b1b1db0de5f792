"""Tests for the bridge HTTP client."""

from __future__ import annotations

import aiohttp
import pytest

from conftest import FakeResponse, FakeSession
from custom_components.comelit_sb.api import ComelitSbClient
from custom_components.comelit_sb.domain import (
    BlindAction,
    ClimaMode,
    DeviceCategory,
    DeviceIndex,
)
from custom_components.comelit_sb.errors import (
    BridgeConnectionError,
    CommandError,
    SessionExpiredError,
)

BASE = "http://bridge:80"
LOGIN = f"{BASE}/login.json"
ACTION = f"{BASE}/user/action.cgi"


def _desc(page: str) -> str:
    return f"{BASE}/user/icon_desc.json?type={page}"


def _status(page: str) -> str:
    return f"{BASE}/user/icon_status.json?type={page}"


def _index_routes() -> dict[str, object]:
    return {
        LOGIN: {"logged": 1, "domus": "abc"},
        _desc("light"): {"num": 2, "desc": ["Kitchen", "Hall"], "status": [0, 1]},
        _desc("clima"): {
            "num": 1,
            "desc": ["Living"],
            "status": [1],
            "val": [{"auto_man_umi": "2", "umidita": "55", "soglia_attiva_umi": "60"}],
        },
        _desc("shutter"): {"num": 0},
        _desc("other"): {"num": 0},
        _desc("supplier"): {"num": 0},
    }


@pytest.mark.asyncio
async def test_login_and_fetch_index() -> None:
    client = ComelitSbClient(FakeSession(_index_routes()), "bridge")

    assert await client.login() is True
    index = await client.fetch_index()

    assert client.logged_in is True
    assert index.counts() == {
        "light": 2,
        "thermostat": 1,
        "blind": 0,
        "outlet": 0,
        "supplier": 0,
    }
    assert index.get("light", "1").get("status") == "1"
    assert index.get("thermostat", "0").get("umidita") == "55"


@pytest.mark.asyncio
async def test_login_refused() -> None:
    client = ComelitSbClient(FakeSession({LOGIN: {"logged": 0}}), "bridge")

    assert await client.login() is False
    with pytest.raises(BridgeConnectionError):
        await client.fetch_index()


@pytest.mark.asyncio
async def test_login_unauthorised_raises_session_expired() -> None:
    session = FakeSession({LOGIN: FakeResponse(status=401, text="denied")})
    client = ComelitSbClient(session, "bridge")

    with pytest.raises(SessionExpiredError):
        await client.login()


@pytest.mark.asyncio
async def test_transport_failure_becomes_connection_error() -> None:
    session = FakeSession({LOGIN: aiohttp.ClientConnectionError("refused")})
    client = ComelitSbClient(session, "bridge")

    with pytest.raises(BridgeConnectionError):
        await client.login()


@pytest.mark.asyncio
async def test_fetch_index_with_logged_out_page() -> None:
    routes = _index_routes()
    routes[_desc("clima")] = {"logged": 0}
    client = ComelitSbClient(FakeSession(routes), "bridge")
    await client.login()

    with pytest.raises(BridgeConnectionError):
        await client.fetch_index()
    assert client.logged_in is False


@pytest.mark.asyncio
async def test_refresh_pushes_only_changed_records(make_record) -> None:
    index = DeviceIndex.from_records(
        [
            make_record("light", "0", status="0"),
            make_record("light", "1", status="1"),
        ]
    )
    session = FakeSession({_status("light"): {"status": [1, 1], "val": []}})
    client = ComelitSbClient(session, "bridge")
    updates: list[tuple[str, object]] = []
    client.set_update_callback(lambda identifier, record: updates.append((identifier, record)))

    await client.refresh(index)
    await client.refresh(index)

    assert [identifier for identifier, _ in updates] == ["0"]
    assert updates[0][1].get("status") == "1"
    assert index.get("light", "0").get("status") == "1"
    assert [call[1] for call in session.calls] == [_status("light"), _status("light")]


@pytest.mark.asyncio
async def test_refresh_detects_expired_session(make_record) -> None:
    index = DeviceIndex.from_records([make_record("blind", "0")])
    session = FakeSession({_status("shutter"): {"logged": 0, "status": []}})
    client = ComelitSbClient(session, "bridge")

    with pytest.raises(SessionExpiredError):
        await client.refresh(index)


@pytest.mark.asyncio
async def test_refresh_callback_errors_are_contained(make_record) -> None:
    index = DeviceIndex.from_records([make_record("light", "0", status="0")])
    session = FakeSession({_status("light"): {"status": [1]}})
    client = ComelitSbClient(session, "bridge")

    def _explode(identifier, record) -> None:
        raise RuntimeError("subscriber failed")

    client.set_update_callback(_explode)
    await client.refresh(index)

    assert index.get("light", "0").get("status") == "1"


@pytest.mark.asyncio
async def test_commands_send_expected_parameters() -> None:
    session = FakeSession({ACTION: {"ok": 1}})
    client = ComelitSbClient(session, "bridge")

    await client.toggle_device_status(DeviceCategory.OUTLET, "3", True)
    await client.set_brightness("1", 140)
    await client.move_blind("2", BlindAction.STOP)
    await client.set_humidity("12", 45)
    await client.switch_thermostat_mode("4", ClimaMode.AUTO)

    assert [call[2] for call in session.calls] == [
        {"type": "other", "num3": 1},
        {"type": "light", "num1": 1, "lum": 100},
        {"type": "shutter", "num2": 2},
        {"clima": "12", "act": "set_umi", "val": 45},
        {"clima": "4", "act": "mode", "val": "1"},
    ]


@pytest.mark.asyncio
async def test_command_failure_becomes_command_error() -> None:
    session = FakeSession({ACTION: FakeResponse(status=500, text="sid=secret")})
    client = ComelitSbClient(session, "bridge")

    with pytest.raises(CommandError) as info:
        await client.set_temperature("7", 215)

    assert info.value.device_id == "7"
    assert isinstance(info.value.__cause__, BridgeConnectionError)


@pytest.mark.asyncio
async def test_shutdown_closes_client() -> None:
    session = FakeSession(_index_routes())
    client = ComelitSbClient(session, "bridge")
    client.set_update_callback(lambda identifier, record: None)

    await client.shutdown()
    await client.shutdown()

    with pytest.raises(BridgeConnectionError):
        await client.login()
    assert session.calls == []
