"""Tests for light, blind, power and alarm translators."""

from __future__ import annotations

import pytest

from custom_components.comelit_sb.codecs import alarm_record
from custom_components.comelit_sb.codecs.models import (
    AlarmAreaPayload,
    AlarmPayload,
    AlarmZonePayload,
)
from custom_components.comelit_sb.domain import (
    AlarmState,
    ArmAlarm,
    BlindAction,
    DeviceCategory,
    DisarmAlarm,
    MoveBlind,
    PositionState,
    SetBrightness as SetBrightnessCommand,
    ToggleDeviceStatus,
)
from custom_components.comelit_sb.domain.commands import AlarmCommand, DeviceCommand
from custom_components.comelit_sb.domain.intents import (
    SetAlarmTarget,
    SetBrightness,
    SetOn,
    SetTargetPosition,
    StopBlind,
)
from custom_components.comelit_sb.translators import (
    AlarmTranslator,
    BlindTranslator,
    DehumidifierTranslator,
    LightbulbTranslator,
    OutletTranslator,
    PowerSupplierTranslator,
    ThermostatTranslator,
    create_translator,
)


def test_light_on_off_and_dimmer(make_record) -> None:
    translator = LightbulbTranslator()

    plain = translator.derive_state(make_record("light", "1", status="1"))
    dimmed = translator.derive_state(make_record("light", "2", status="0", brightness="40"))

    assert plain.on is True
    assert plain.brightness is None
    assert dimmed.on is False
    assert dimmed.brightness == 40


@pytest.mark.parametrize("raw", ["inf", "nan", "1e999", "dim"])
def test_light_non_finite_brightness_is_unknown(make_record, raw) -> None:
    state = LightbulbTranslator().derive_state(
        make_record("light", "2", status="1", brightness=raw)
    )

    assert state.on is True
    assert state.brightness is None


def test_light_commands(make_record) -> None:
    translator = LightbulbTranslator()
    record = make_record("light", "2", status="0")

    assert translator.build_command(record, SetOn(True)) == ToggleDeviceStatus(
        "2", DeviceCategory.LIGHT, True
    )
    assert translator.build_command(record, SetBrightness(150)) == (
        SetBrightnessCommand("2", 100)
    )


@pytest.mark.parametrize(
    ("status", "open_status", "position", "target", "movement"),
    [
        ("0", "1", 100, 100, PositionState.STOPPED),
        ("0", "0", 0, 0, PositionState.STOPPED),
        ("1", "0", 0, 100, PositionState.INCREASING),
        ("2", "1", 100, 0, PositionState.DECREASING),
    ],
)
def test_blind_states(make_record, status, open_status, position, target, movement) -> None:
    translator = BlindTranslator(closing_time=30)

    state = translator.derive_state(
        make_record("blind", "0", status=status, open_status=open_status)
    )

    assert state.position == position
    assert state.target_position == target
    assert state.position_state is movement


def test_blind_commands_follow_direction(make_record) -> None:
    translator = BlindTranslator()
    closed = make_record("blind", "5", status="0", open_status="0")
    opened = make_record("blind", "5", status="0", open_status="1")

    assert translator.build_command(closed, SetTargetPosition(60)) == MoveBlind(
        "5", BlindAction.OPEN
    )
    assert translator.build_command(opened, SetTargetPosition(20)) == MoveBlind(
        "5", BlindAction.CLOSE
    )
    assert translator.build_command(opened, SetTargetPosition(100)) == MoveBlind(
        "5", BlindAction.STOP
    )
    assert translator.build_command(opened, StopBlind()) == MoveBlind(
        "5", BlindAction.STOP
    )


def test_blind_travel_time_scales_with_distance() -> None:
    translator = BlindTranslator(closing_time=40)

    assert translator.travel_time(0, 100) == pytest.approx(40.0)
    assert translator.travel_time(100, 75) == pytest.approx(10.0)
    assert translator.travel_time(30, 30) == 0


def test_blind_rejects_non_positive_closing_time() -> None:
    with pytest.raises(ValueError):
        BlindTranslator(closing_time=0)


def test_outlet_in_use_follows_power(make_record) -> None:
    translator = OutletTranslator()

    busy = translator.derive_state(make_record("outlet", "1", status="1", instant_power="35.5"))
    idle = translator.derive_state(make_record("outlet", "1", status="1", instant_power="0"))
    unknown = translator.derive_state(make_record("outlet", "1", status="0"))

    assert busy.on is True
    assert busy.in_use is True
    assert busy.power == pytest.approx(35.5)
    assert idle.in_use is False
    assert unknown.power is None
    assert unknown.in_use is False
    assert translator.build_command(
        make_record("outlet", "1"), SetOn(False)
    ) == ToggleDeviceStatus("1", DeviceCategory.OUTLET, False)


def test_supplier_is_read_only(make_record) -> None:
    translator = PowerSupplierTranslator()
    record = make_record("supplier", "0", instant_power="1200")

    assert translator.derive_state(record).power == pytest.approx(1200.0)
    with pytest.raises(ValueError):
        translator.build_command(record, SetOn(True))


def _alarm(*areas: AlarmAreaPayload, zones: tuple[AlarmZonePayload, ...] = ()):
    return alarm_record(AlarmPayload(areas=list(areas), zones=list(zones)))


def test_alarm_state_precedence() -> None:
    translator = AlarmTranslator("1234")

    disarmed = _alarm(AlarmAreaPayload(index=0, name="House"))
    stay = _alarm(
        AlarmAreaPayload(index=0, name="House", partial=True),
        AlarmAreaPayload(index=1, name="Garage"),
    )
    away = _alarm(
        AlarmAreaPayload(index=0, name="House", armed=True),
        AlarmAreaPayload(index=1, name="Garage", armed=True),
    )
    triggered = _alarm(
        AlarmAreaPayload(index=0, name="House", armed=True, triggered=True),
    )

    assert translator.derive_state(disarmed).current_state is AlarmState.DISARMED
    assert translator.derive_state(stay).current_state is AlarmState.STAY_ARM
    assert translator.derive_state(away).current_state is AlarmState.AWAY_ARM
    state = translator.derive_state(triggered)
    assert state.current_state is AlarmState.ALARM_TRIGGERED
    assert state.target_state is AlarmState.AWAY_ARM


def test_alarm_zones_are_presented() -> None:
    translator = AlarmTranslator("1234")
    record = _alarm(
        zones=(
            AlarmZonePayload(index=0, name="Door", open=True),
            AlarmZonePayload(index=3, name="Window", excluded=True),
        )
    )

    zones = translator.derive_state(record).zones

    assert [(zone.index, zone.open, zone.excluded) for zone in zones] == [
        (0, True, False),
        (3, False, True),
    ]


def test_alarm_commands_carry_code() -> None:
    translator = AlarmTranslator("1234")
    record = _alarm()

    disarm = translator.build_command(record, SetAlarmTarget(AlarmState.DISARMED))
    away = translator.build_command(record, SetAlarmTarget(AlarmState.AWAY_ARM))
    night = translator.build_command(record, SetAlarmTarget(AlarmState.NIGHT_ARM))

    assert disarm == DisarmAlarm("vedo", "1234")
    assert away == ArmAlarm("vedo", "1234", total=True)
    assert night == ArmAlarm("vedo", "1234", total=False)
    assert "1234" not in repr(away)
    with pytest.raises(ValueError):
        translator.build_command(record, SetAlarmTarget(AlarmState.ALARM_TRIGGERED))


def test_alarm_requires_code() -> None:
    with pytest.raises(ValueError):
        AlarmTranslator("")


def test_create_translator_selects_by_category() -> None:
    assert isinstance(create_translator("light"), LightbulbTranslator)
    assert isinstance(create_translator("thermostat"), ThermostatTranslator)
    assert isinstance(
        create_translator("thermostat", kind="dehumidifier"), DehumidifierTranslator
    )
    blind = create_translator(DeviceCategory.BLIND, blind_closing_time=12)
    assert isinstance(blind, BlindTranslator)
    assert blind.closing_time == 12
    assert isinstance(create_translator("outlet"), OutletTranslator)
    assert isinstance(create_translator("supplier"), PowerSupplierTranslator)
    assert isinstance(create_translator("alarm", alarm_code="9"), AlarmTranslator)
    with pytest.raises(ValueError):
        create_translator("alarm")
    with pytest.raises(ValueError):
        create_translator("doorbell")


@pytest.mark.parametrize(
    ("factory", "args"),
    [(DeviceCommand, ("1",)), (AlarmCommand, ("vedo", "1234"))],
)
def test_command_bases_are_abstract(factory, args) -> None:
    with pytest.raises(TypeError):
        factory(*args)
