"""Tests for the accessory registry."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from custom_components.comelit_sb.codecs import alarm_record
from custom_components.comelit_sb.codecs.models import AlarmPayload
from custom_components.comelit_sb.domain import (
    Active,
    ClimaOnOff,
    CurrentHumidifierState,
    DeviceCategory,
    DeviceIndex,
    DeviceKey,
    HumidifierPresentation,
    TargetHumidifierState,
)
from custom_components.comelit_sb.domain.intents import (
    SetActive,
    SetHumidityThreshold,
    SetOn,
)
from custom_components.comelit_sb.errors import CommandError, UnknownDeviceError
from custom_components.comelit_sb.registry import AccessoryRegistry


@pytest.fixture
def index(make_record) -> DeviceIndex:
    return DeviceIndex.from_records(
        [
            make_record("light", "12", status="0"),
            make_record(
                "thermostat",
                "12",
                auto_man_umi="2",
                umidita="55",
                soglia_attiva_umi="60",
            ),
            make_record("thermostat", "13", auto_man="1"),
            make_record("blind", "0", status="0", open_status="0"),
        ]
    )


def test_build_creates_one_entry_per_device(index, bridge_client) -> None:
    registry = AccessoryRegistry.build(index, bridge_client)

    kinds = [(str(entry.key), entry.kind) for entry in registry.all()]

    assert kinds == [
        ("light:12", "light"),
        ("thermostat:12", "thermostat"),
        ("thermostat:12", "dehumidifier"),
        ("thermostat:13", "thermostat"),
        ("blind:0", "blind"),
    ]
    assert len(registry) == 5
    assert DeviceKey("thermostat", "12") in registry
    assert registry.counts()["dehumidifier"] == 1


def test_unique_keys_differ_for_shared_device(index, bridge_client) -> None:
    registry = AccessoryRegistry.build(index, bridge_client)
    key = DeviceKey(DeviceCategory.THERMOSTAT, "12")

    assert registry.get(key).unique_key == "thermostat_12"
    assert registry.get(key, "dehumidifier").unique_key == "thermostat_12_dehumidifier"


def test_build_passes_blind_closing_time(index, bridge_client) -> None:
    registry = AccessoryRegistry.build(index, bridge_client, blind_closing_time=20)

    assert registry.get(DeviceKey("blind", "0")).translator.closing_time == 20


def test_alarm_entry_requires_enabled_flag_and_code(bridge_client, alarm_client) -> None:
    record = alarm_record(AlarmPayload())

    disabled = AccessoryRegistry.build(
        DeviceIndex(),
        bridge_client,
        alarm_enabled=False,
        alarm_code="1234",
        alarm_client=alarm_client,
        alarm_record=record,
    )
    no_code = AccessoryRegistry.build(
        DeviceIndex(),
        bridge_client,
        alarm_enabled=True,
        alarm_code=None,
        alarm_client=alarm_client,
        alarm_record=record,
    )
    enabled = AccessoryRegistry.build(
        DeviceIndex(),
        bridge_client,
        alarm_enabled=True,
        alarm_code="1234",
        alarm_client=alarm_client,
        alarm_record=record,
    )

    assert len(disabled) == 0
    assert len(no_code) == 0
    assert [entry.kind for entry in enabled.all()] == ["alarm"]


def test_dispatch_updates_every_entry_for_key(index, bridge_client, make_record) -> None:
    published: list[tuple[str, object]] = []
    registry = AccessoryRegistry.build(
        index,
        bridge_client,
        publisher=lambda entry: published.append((entry.unique_key, entry.presentation)),
    )
    record = make_record(
        "thermostat", "12", auto_man_umi="1", umidita="50", soglia_attiva_umi="60"
    )

    delivered = registry.dispatch("12", record)

    assert delivered == 2
    assert [key for key, _ in published] == ["thermostat_12", "thermostat_12_dehumidifier"]
    assert published[1][1].current_state is CurrentHumidifierState.IDLE
    assert registry.get(DeviceKey("light", "12")).record.payload == {"status": "0"}


def test_dispatch_same_record_twice_is_stable(index, bridge_client, make_record) -> None:
    published = []
    registry = AccessoryRegistry.build(
        index, bridge_client, publisher=lambda entry: published.append(entry.presentation)
    )
    record = make_record("blind", "0", status="1", open_status="0")

    registry.dispatch("0", record)
    registry.dispatch("0", record)

    assert published[0] == published[1]


def test_dispatch_unknown_identifier_changes_nothing(index, bridge_client, make_record) -> None:
    publisher = MagicMock()
    registry = AccessoryRegistry.build(index, bridge_client, publisher=publisher)
    before = [(entry.key, entry.record) for entry in registry.all()]

    delivered = registry.dispatch("99", make_record("light", "99", status="1"))

    assert delivered == 0
    publisher.assert_not_called()
    assert [(entry.key, entry.record) for entry in registry.all()] == before


def test_dispatch_isolates_failing_publisher(index, bridge_client, make_record) -> None:
    calls: list[str] = []

    def _publisher(entry) -> None:
        calls.append(entry.kind)
        if entry.kind == "thermostat":
            raise RuntimeError("boom")

    registry = AccessoryRegistry.build(index, bridge_client, publisher=_publisher)

    delivered = registry.dispatch(
        "12", make_record("thermostat", "12", auto_man_umi="2", umidita="40")
    )

    assert calls == ["thermostat", "dehumidifier"]
    assert delivered == 1


def test_get_unknown_key_raises(index, bridge_client) -> None:
    registry = AccessoryRegistry.build(index, bridge_client)

    with pytest.raises(UnknownDeviceError):
        registry.get(DeviceKey("outlet", "1"))
    with pytest.raises(KeyError):
        registry.get(DeviceKey("light", "12"), "dehumidifier")


def test_example_dehumidifier_presentation(index, bridge_client) -> None:
    registry = AccessoryRegistry.build(index, bridge_client)

    entry = registry.get(DeviceKey("thermostat", "12"), "dehumidifier")

    assert entry.presentation == HumidifierPresentation(
        current_humidity=55,
        humidifier_threshold=55,
        dehumidifier_threshold=60,
        current_state=CurrentHumidifierState.DEHUMIDIFYING,
        target_mode=TargetHumidifierState.DEHUMIDIFIER,
        active=Active.ACTIVE,
    )


@pytest.mark.asyncio
async def test_threshold_intent_sends_one_humidity_call(index, bridge_client) -> None:
    registry = AccessoryRegistry.build(index, bridge_client)
    entry = registry.get(DeviceKey("thermostat", "12"), "dehumidifier")

    await entry.async_apply(SetHumidityThreshold(45))

    bridge_client.set_humidity.assert_awaited_once_with("12", 45)
    bridge_client.switch_humidifier_mode.assert_not_awaited()


@pytest.mark.asyncio
async def test_inactive_intent_toggles_humidifier_off(index, bridge_client) -> None:
    registry = AccessoryRegistry.build(index, bridge_client)
    entry = registry.get(DeviceKey("thermostat", "12"), "dehumidifier")
    record_before = entry.record

    await entry.async_apply(SetActive(Active.INACTIVE))

    bridge_client.toggle_humidifier_status.assert_awaited_once_with(
        "12", ClimaOnOff.OFF_HUMI
    )
    bridge_client.switch_humidifier_mode.assert_not_awaited()
    assert entry.record is record_before


@pytest.mark.asyncio
async def test_command_errors_surface_unchanged(index, bridge_client) -> None:
    error = CommandError("rejected", device_id="12")
    bridge_client.toggle_device_status.side_effect = error
    registry = AccessoryRegistry.build(index, bridge_client)
    entry = registry.get(DeviceKey("light", "12"))

    with pytest.raises(CommandError) as info:
        await entry.async_apply(SetOn(True))

    assert info.value is error
    assert entry.presentation.on is False


def test_snapshot_lists_presentations(index, bridge_client) -> None:
    registry = AccessoryRegistry.build(index, bridge_client)

    snapshot = registry.snapshot()

    assert snapshot[0]["key"] == "light:12"
    assert snapshot[0]["presentation"] == {"on": False, "brightness": None}
    assert snapshot[2]["kind"] == "dehumidifier"
