"""Translators for thermostats and their humidity controllers."""

from __future__ import annotations

from typing import Final

from ..codecs.models import ThermostatPayload, parse_float, parse_int
from ..domain.commands import (
    DeviceCommand,
    SetHumidity,
    SetTemperature,
    SwitchHumidifierMode,
    SwitchThermostatMode,
    SwitchThermostatSeason,
    ToggleHumidifierStatus,
    ToggleThermostatStatus,
)
from ..domain.ids import DeviceCategory
from ..domain.intents import (
    Intent,
    SetActive,
    SetHumidityThreshold,
    SetTargetHeatingCooling,
    SetTargetHumidifierMode,
    SetTargetTemperature,
)
from ..domain.presentation import (
    Active,
    CurrentHumidifierState,
    HeatingCoolingState,
    HumidifierPresentation,
    TargetHumidifierState,
    ThermostatPresentation,
)
from ..domain.records import (
    ClimaMode,
    ClimaOnOff,
    DeviceRecord,
    ObjectStatus,
    ThermoSeason,
)
from .base import StateTranslator, load_payload

HUMIDIFIER_OFF_MODES: Final = frozenset(
    {ClimaMode.OFF_AUTO.value, ClimaMode.OFF_MANUAL.value, ClimaMode.NONE.value}
)
THERMOSTAT_OFF_MODES: Final = frozenset(
    {ClimaMode.OFF_AUTO.value, ClimaMode.OFF_MANUAL.value}
)


def has_humidity_control(record: DeviceRecord) -> bool:
    """Return True when a thermostat record reports a humidity controller."""

    return (
        record.category is DeviceCategory.THERMOSTAT
        and record.get("auto_man_umi") is not None
    )


def _tenths(value: str | None) -> float | None:
    number = parse_float(value)
    if number is None:
        return None
    return number / 10


class DehumidifierTranslator(StateTranslator[HumidifierPresentation]):
    """Humidity control side of a thermostat."""

    category = DeviceCategory.THERMOSTAT
    kind = "dehumidifier"

    def supports(self, record: DeviceRecord) -> bool:
        """Only thermostats with a humidity controller qualify."""

        return has_humidity_control(record)

    def derive_state(self, record: DeviceRecord) -> HumidifierPresentation:
        """Resolve the four-way mode into a presentation, first match wins."""

        payload = load_payload(ThermostatPayload, record)
        mode = payload.auto_man_umi or ClimaMode.NONE.value
        humidity = parse_int(payload.umidita)
        threshold = parse_int(payload.soglia_attiva_umi)

        if mode in HUMIDIFIER_OFF_MODES:
            current = CurrentHumidifierState.INACTIVE
            target = TargetHumidifierState.DEHUMIDIFIER
            active = Active.INACTIVE
        elif mode == ClimaMode.AUTO.value:
            current = CurrentHumidifierState.IDLE
            target = TargetHumidifierState.HUMIDIFIER_OR_DEHUMIDIFIER
            active = Active.ACTIVE
        else:
            current = CurrentHumidifierState.DEHUMIDIFYING
            target = TargetHumidifierState.DEHUMIDIFIER
            active = Active.ACTIVE

        return HumidifierPresentation(
            current_humidity=humidity,
            humidifier_threshold=humidity,
            dehumidifier_threshold=threshold,
            current_state=current,
            target_mode=target,
            active=active,
        )

    def build_command(self, record: DeviceRecord, intent: Intent) -> DeviceCommand:
        """Map humidity intents to bridge calls.

        Humidify and dehumidify both select the manual machine mode since the
        bridge exposes a single manual mode for humidity control. Switching
        off goes through the status toggle, never through the target mode.
        """

        device_id = record.identifier
        if isinstance(intent, SetHumidityThreshold):
            return SetHumidity(device_id, int(intent.percent))
        if isinstance(intent, SetTargetHumidifierMode):
            if intent.mode is TargetHumidifierState.HUMIDIFIER_OR_DEHUMIDIFIER:
                return SwitchHumidifierMode(device_id, ClimaMode.AUTO)
            return SwitchHumidifierMode(device_id, ClimaMode.MANUAL)
        if isinstance(intent, SetActive):
            if intent.active is Active.ACTIVE:
                return SwitchHumidifierMode(device_id, ClimaMode.MANUAL)
            return ToggleHumidifierStatus(device_id, ClimaOnOff.OFF_HUMI)
        self._unsupported(intent)


class ThermostatTranslator(StateTranslator[ThermostatPresentation]):
    """Temperature control side of a thermostat."""

    category = DeviceCategory.THERMOSTAT
    kind = "thermostat"

    def derive_state(self, record: DeviceRecord) -> ThermostatPresentation:
        """Return temperatures in degrees and the heating/cooling states."""

        payload = load_payload(ThermostatPayload, record)
        mode = payload.auto_man or ClimaMode.NONE.value
        winter = payload.est_inv == ThermoSeason.WINTER.value
        is_off = mode in THERMOSTAT_OFF_MODES
        season_state = HeatingCoolingState.HEAT if winter else HeatingCoolingState.COOL

        if is_off:
            target = HeatingCoolingState.OFF
        elif mode == ClimaMode.AUTO.value:
            target = HeatingCoolingState.AUTO
        else:
            target = season_state

        if is_off or payload.status == ObjectStatus.OFF.value:
            current = HeatingCoolingState.OFF
        else:
            current = season_state

        return ThermostatPresentation(
            current_temperature=_tenths(payload.temperatura),
            target_temperature=_tenths(payload.soglia_attiva),
            current_state=current,
            target_state=target,
            winter=winter,
        )

    def build_command(self, record: DeviceRecord, intent: Intent) -> DeviceCommand:
        """Map thermostat intents to bridge calls."""

        device_id = record.identifier
        if isinstance(intent, SetTargetTemperature):
            return SetTemperature(device_id, int(round(intent.temperature * 10)))
        if isinstance(intent, SetTargetHeatingCooling):
            if intent.state is HeatingCoolingState.OFF:
                return ToggleThermostatStatus(device_id, ClimaOnOff.OFF_THERMO)
            if intent.state is HeatingCoolingState.AUTO:
                return SwitchThermostatMode(device_id, ClimaMode.AUTO)
            season = (
                ThermoSeason.WINTER
                if intent.state is HeatingCoolingState.HEAT
                else ThermoSeason.SUMMER
            )
            if self.derive_state(record).winter == (season is ThermoSeason.WINTER):
                return SwitchThermostatMode(device_id, ClimaMode.MANUAL)
            return SwitchThermostatSeason(device_id, season)
        self._unsupported(intent)
