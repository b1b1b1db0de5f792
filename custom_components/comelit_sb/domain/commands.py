"""Commands sent to the bridge, one type per bridge call."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .ids import DeviceCategory
from .records import BlindAction, ClimaMode, ClimaOnOff, ThermoSeason

if TYPE_CHECKING:
    from ..api import BridgeClient
    from ..vedo import AlarmClient


@dataclass(frozen=True, slots=True)
class DeviceCommand(ABC):
    """Base type for bridge commands."""

    device_id: str

    @abstractmethod
    async def async_send(self, client: BridgeClient) -> None:
        """Deliver the command through ``client``."""


@dataclass(frozen=True, slots=True)
class SetHumidity(DeviceCommand):
    """Set the humidity threshold of a humidity controller."""

    percent: int

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``set_humidity`` on the bridge."""

        await client.set_humidity(self.device_id, self.percent)


@dataclass(frozen=True, slots=True)
class SwitchHumidifierMode(DeviceCommand):
    """Switch the humidity controller mode."""

    mode: ClimaMode

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``switch_humidifier_mode`` on the bridge."""

        await client.switch_humidifier_mode(self.device_id, self.mode)


@dataclass(frozen=True, slots=True)
class ToggleHumidifierStatus(DeviceCommand):
    """Toggle the humidity controller on or off."""

    status: ClimaOnOff

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``toggle_humidifier_status`` on the bridge."""

        await client.toggle_humidifier_status(self.device_id, self.status)


@dataclass(frozen=True, slots=True)
class SetTemperature(DeviceCommand):
    """Set the thermostat target in tenths of a degree."""

    tenths: int

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``set_temperature`` on the bridge."""

        await client.set_temperature(self.device_id, self.tenths)


@dataclass(frozen=True, slots=True)
class SwitchThermostatMode(DeviceCommand):
    """Switch the thermostat mode."""

    mode: ClimaMode

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``switch_thermostat_mode`` on the bridge."""

        await client.switch_thermostat_mode(self.device_id, self.mode)


@dataclass(frozen=True, slots=True)
class ToggleThermostatStatus(DeviceCommand):
    """Toggle the thermostat on or off."""

    status: ClimaOnOff

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``toggle_thermostat_status`` on the bridge."""

        await client.toggle_thermostat_status(self.device_id, self.status)


@dataclass(frozen=True, slots=True)
class SwitchThermostatSeason(DeviceCommand):
    """Select the thermostat season."""

    season: ThermoSeason

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``switch_thermostat_season`` on the bridge."""

        await client.switch_thermostat_season(self.device_id, self.season)


@dataclass(frozen=True, slots=True)
class ToggleDeviceStatus(DeviceCommand):
    """Turn a light or outlet on or off."""

    category: DeviceCategory
    on: bool

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``toggle_device_status`` on the bridge."""

        await client.toggle_device_status(self.category, self.device_id, self.on)


@dataclass(frozen=True, slots=True)
class SetBrightness(DeviceCommand):
    """Set the brightness of a dimmable light."""

    percent: int

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``set_brightness`` on the bridge."""

        await client.set_brightness(self.device_id, self.percent)


@dataclass(frozen=True, slots=True)
class MoveBlind(DeviceCommand):
    """Open, close or stop a blind."""

    action: BlindAction

    async def async_send(self, client: BridgeClient) -> None:
        """Call ``move_blind`` on the bridge."""

        await client.move_blind(self.device_id, self.action)


@dataclass(frozen=True, slots=True)
class AlarmCommand(DeviceCommand):
    """Command envelope for the alarm panel, delivered by the alarm client."""

    code: str

    @abstractmethod
    async def async_send(self, client: AlarmClient) -> None:  # type: ignore[override]
        """Deliver the command through the alarm client."""

    def __repr__(self) -> str:
        """Hide the access code."""

        return f"{type(self).__name__}(device_id={self.device_id!r}, code='***')"


@dataclass(frozen=True, slots=True, repr=False)
class ArmAlarm(AlarmCommand):
    """Arm the alarm, either totally or partially."""

    total: bool = True

    async def async_send(self, client: AlarmClient) -> None:  # type: ignore[override]
        """Call ``arm`` on the alarm client."""

        await client.arm(self.code, total=self.total)


@dataclass(frozen=True, slots=True, repr=False)
class DisarmAlarm(AlarmCommand):
    """Disarm the alarm."""

    async def async_send(self, client: AlarmClient) -> None:  # type: ignore[override]
        """Call ``disarm`` on the alarm client."""

        await client.disarm(self.code)
