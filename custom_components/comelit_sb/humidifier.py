"""Humidifier platform for thermostats with humidity control."""

from __future__ import annotations

from typing import Any

from homeassistant.components.humidifier import (
    HumidifierDeviceClass,
    HumidifierEntity,
)
from homeassistant.components.humidifier.const import (
    MODE_AUTO,
    MODE_NORMAL,
    HumidifierAction,
    HumidifierEntityFeature,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .domain.intents import SetActive, SetHumidityThreshold, SetTargetHumidifierMode
from .domain.presentation import (
    Active,
    CurrentHumidifierState,
    HumidifierPresentation,
    TargetHumidifierState,
)
from .entity import ComelitAccessoryEntity, iter_accessories, require_runtime

HUMIDIFIER_ACTIONS: dict[CurrentHumidifierState, HumidifierAction] = {
    CurrentHumidifierState.INACTIVE: HumidifierAction.OFF,
    CurrentHumidifierState.IDLE: HumidifierAction.IDLE,
    CurrentHumidifierState.HUMIDIFYING: HumidifierAction.HUMIDIFYING,
    CurrentHumidifierState.DEHUMIDIFYING: HumidifierAction.DRYING,
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Create one dehumidifier per thermostat with humidity control."""

    runtime = require_runtime(hass, entry.entry_id)
    async_add_entities(
        ComelitDehumidifier(entry.entry_id, accessory)
        for accessory in iter_accessories(runtime, "dehumidifier")
    )


class ComelitDehumidifier(
    ComelitAccessoryEntity[HumidifierPresentation], HumidifierEntity
):
    """Humidity controller of a thermostat."""

    _attr_name = "Dehumidifier"
    _attr_device_class = HumidifierDeviceClass.DEHUMIDIFIER
    _attr_supported_features = HumidifierEntityFeature.MODES
    _attr_available_modes = [MODE_AUTO, MODE_NORMAL]
    _attr_min_humidity = 0
    _attr_max_humidity = 100

    @property
    def is_on(self) -> bool:
        return self.presentation.active is Active.ACTIVE

    @property
    def action(self) -> HumidifierAction:
        return HUMIDIFIER_ACTIONS[self.presentation.current_state]

    @property
    def current_humidity(self) -> int | None:
        return self.presentation.current_humidity

    @property
    def target_humidity(self) -> int | None:
        return self.presentation.dehumidifier_threshold

    @property
    def mode(self) -> str:
        if (
            self.presentation.target_mode
            is TargetHumidifierState.HUMIDIFIER_OR_DEHUMIDIFIER
        ):
            return MODE_AUTO
        return MODE_NORMAL

    async def async_turn_on(self, **kwargs: Any) -> None:
        await self.async_send_intent(SetActive(Active.ACTIVE))

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self.async_send_intent(SetActive(Active.INACTIVE))

    async def async_set_humidity(self, humidity: int) -> None:
        await self.async_send_intent(SetHumidityThreshold(float(humidity)))

    async def async_set_mode(self, mode: str) -> None:
        if mode == MODE_AUTO:
            target = TargetHumidifierState.HUMIDIFIER_OR_DEHUMIDIFIER
        elif mode == MODE_NORMAL:
            target = TargetHumidifierState.DEHUMIDIFIER
        else:
            raise HomeAssistantError(f"Unsupported mode: {mode}")
        await self.async_send_intent(SetTargetHumidifierMode(target))
