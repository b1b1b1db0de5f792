"""User intents received from the host framework."""

from __future__ import annotations

from dataclasses import dataclass

from .presentation import Active, AlarmState, HeatingCoolingState, TargetHumidifierState


@dataclass(frozen=True, slots=True)
class Intent:
    """Base type for user intents."""


@dataclass(frozen=True, slots=True)
class SetActive(Intent):
    """Switch a humidity controller on or off."""

    active: Active


@dataclass(frozen=True, slots=True)
class SetTargetHumidifierMode(Intent):
    """Select the humidity control mode."""

    mode: TargetHumidifierState


@dataclass(frozen=True, slots=True)
class SetHumidityThreshold(Intent):
    """Set the humidity threshold in percent."""

    percent: float


@dataclass(frozen=True, slots=True)
class SetTargetHeatingCooling(Intent):
    """Select the thermostat heating/cooling mode."""

    state: HeatingCoolingState


@dataclass(frozen=True, slots=True)
class SetTargetTemperature(Intent):
    """Set the thermostat target temperature in degrees Celsius."""

    temperature: float


@dataclass(frozen=True, slots=True)
class SetOn(Intent):
    """Turn a light or outlet on or off."""

    on: bool


@dataclass(frozen=True, slots=True)
class SetBrightness(Intent):
    """Set the brightness of a dimmable light in percent."""

    percent: int


@dataclass(frozen=True, slots=True)
class SetTargetPosition(Intent):
    """Move a blind toward a position in percent open."""

    position: int


@dataclass(frozen=True, slots=True)
class StopBlind(Intent):
    """Stop a moving blind."""


@dataclass(frozen=True, slots=True)
class SetAlarmTarget(Intent):
    """Arm or disarm the alarm panel."""

    state: AlarmState
