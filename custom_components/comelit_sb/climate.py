"""Climate platform for Comelit thermostats."""

from __future__ import annotations

from typing import Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .domain.intents import SetTargetHeatingCooling, SetTargetTemperature
from .domain.presentation import HeatingCoolingState, ThermostatPresentation
from .entity import ComelitAccessoryEntity, iter_accessories, require_runtime

HVAC_MODES: dict[HeatingCoolingState, HVACMode] = {
    HeatingCoolingState.OFF: HVACMode.OFF,
    HeatingCoolingState.HEAT: HVACMode.HEAT,
    HeatingCoolingState.COOL: HVACMode.COOL,
    HeatingCoolingState.AUTO: HVACMode.AUTO,
}
HVAC_STATES: dict[HVACMode, HeatingCoolingState] = {
    mode: state for state, mode in HVAC_MODES.items()
}
HVAC_ACTIONS: dict[HeatingCoolingState, HVACAction] = {
    HeatingCoolingState.OFF: HVACAction.OFF,
    HeatingCoolingState.HEAT: HVACAction.HEATING,
    HeatingCoolingState.COOL: HVACAction.COOLING,
    HeatingCoolingState.AUTO: HVACAction.IDLE,
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Create one climate entity per thermostat."""

    runtime = require_runtime(hass, entry.entry_id)
    async_add_entities(
        ComelitThermostat(entry.entry_id, accessory)
        for accessory in iter_accessories(runtime, "thermostat")
    )


class ComelitThermostat(ComelitAccessoryEntity[ThermostatPresentation], ClimateEntity):
    """Thermostat with season driven heating or cooling."""

    _attr_hvac_modes = list(HVAC_MODES.values())
    _attr_temperature_unit = UnitOfTemperature.CELSIUS
    _attr_target_temperature_step = 0.1
    _attr_min_temp = 5.0
    _attr_max_temp = 35.0
    _attr_supported_features = (
        ClimateEntityFeature.TARGET_TEMPERATURE
        | ClimateEntityFeature.TURN_ON
        | ClimateEntityFeature.TURN_OFF
    )

    @property
    def current_temperature(self) -> float | None:
        return self.presentation.current_temperature

    @property
    def target_temperature(self) -> float | None:
        return self.presentation.target_temperature

    @property
    def hvac_mode(self) -> HVACMode:
        return HVAC_MODES[self.presentation.target_state]

    @property
    def hvac_action(self) -> HVACAction:
        return HVAC_ACTIONS[self.presentation.current_state]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {"season": "winter" if self.presentation.winter else "summer"}

    async def async_set_temperature(self, **kwargs: Any) -> None:
        """Set the target temperature in degrees Celsius."""

        temperature = kwargs.get(ATTR_TEMPERATURE)
        if temperature is None:
            raise HomeAssistantError("A target temperature is required")
        await self.async_send_intent(SetTargetTemperature(float(temperature)))

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Switch the thermostat mode or season."""

        state = HVAC_STATES.get(HVACMode(hvac_mode))
        if state is None:
            raise HomeAssistantError(f"Unsupported HVAC mode: {hvac_mode}")
        await self.async_send_intent(SetTargetHeatingCooling(state))

    async def async_turn_on(self) -> None:
        await self.async_set_hvac_mode(
            HVACMode.HEAT if self.presentation.winter else HVACMode.COOL
        )

    async def async_turn_off(self) -> None:
        await self.async_set_hvac_mode(HVACMode.OFF)
