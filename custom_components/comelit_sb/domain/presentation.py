"""Normalized presentation states published to the host framework."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class CurrentHumidifierState(IntEnum):
    """What the humidity controller is doing right now."""

    INACTIVE = 0
    IDLE = 1
    HUMIDIFYING = 2
    DEHUMIDIFYING = 3


class TargetHumidifierState(IntEnum):
    """Requested humidity control mode; there is no "off" member."""

    HUMIDIFIER_OR_DEHUMIDIFIER = 0
    HUMIDIFIER = 1
    DEHUMIDIFIER = 2


class Active(IntEnum):
    """Whether a device is switched on."""

    INACTIVE = 0
    ACTIVE = 1


class HeatingCoolingState(IntEnum):
    """Heating/cooling state of a thermostat."""

    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3


class PositionState(IntEnum):
    """Movement of a window covering."""

    DECREASING = 0
    INCREASING = 1
    STOPPED = 2


class AlarmState(IntEnum):
    """Security system state."""

    STAY_ARM = 0
    AWAY_ARM = 1
    NIGHT_ARM = 2
    DISARMED = 3
    ALARM_TRIGGERED = 4


@dataclass(frozen=True, slots=True)
class HumidifierPresentation:
    """Presentation of a humidity controller."""

    current_humidity: int | None
    humidifier_threshold: int | None
    dehumidifier_threshold: int | None
    current_state: CurrentHumidifierState
    target_mode: TargetHumidifierState
    active: Active


@dataclass(frozen=True, slots=True)
class ThermostatPresentation:
    """Presentation of a thermostat."""

    current_temperature: float | None
    target_temperature: float | None
    current_state: HeatingCoolingState
    target_state: HeatingCoolingState
    winter: bool


@dataclass(frozen=True, slots=True)
class LightPresentation:
    """Presentation of a light; brightness is ``None`` when not dimmable."""

    on: bool
    brightness: int | None = None


@dataclass(frozen=True, slots=True)
class BlindPresentation:
    """Presentation of a blind, positions are percentages open."""

    position: int
    target_position: int
    position_state: PositionState


@dataclass(frozen=True, slots=True)
class OutletPresentation:
    """Presentation of a switchable outlet."""

    on: bool
    in_use: bool
    power: float | None


@dataclass(frozen=True, slots=True)
class SupplierPresentation:
    """Presentation of a power supplier meter."""

    power: float | None


@dataclass(frozen=True, slots=True)
class ZonePresentation:
    """Status of one alarm zone."""

    index: int
    name: str
    open: bool
    excluded: bool


@dataclass(frozen=True, slots=True)
class AlarmPresentation:
    """Presentation of the alarm panel."""

    current_state: AlarmState
    target_state: AlarmState
    zones: tuple[ZonePresentation, ...] = ()


PresentationState = (
    HumidifierPresentation
    | ThermostatPresentation
    | LightPresentation
    | BlindPresentation
    | OutletPresentation
    | SupplierPresentation
    | AlarmPresentation
)
