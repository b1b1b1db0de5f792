"""Alarm control panel platform for the Vedo alarm."""

from __future__ import annotations

from typing import Any

from homeassistant.components.alarm_control_panel import (
    AlarmControlPanelEntity,
    AlarmControlPanelEntityFeature,
    AlarmControlPanelState,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .domain.intents import SetAlarmTarget
from .domain.presentation import AlarmPresentation, AlarmState
from .entity import ComelitAccessoryEntity, iter_accessories, require_runtime

PANEL_STATES: dict[AlarmState, AlarmControlPanelState] = {
    AlarmState.STAY_ARM: AlarmControlPanelState.ARMED_HOME,
    AlarmState.AWAY_ARM: AlarmControlPanelState.ARMED_AWAY,
    AlarmState.NIGHT_ARM: AlarmControlPanelState.ARMED_NIGHT,
    AlarmState.DISARMED: AlarmControlPanelState.DISARMED,
    AlarmState.ALARM_TRIGGERED: AlarmControlPanelState.TRIGGERED,
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Create the alarm panel when the alarm accessory exists."""

    runtime = require_runtime(hass, entry.entry_id)
    async_add_entities(
        ComelitAlarmPanel(entry.entry_id, accessory)
        for accessory in iter_accessories(runtime, "alarm")
    )


class ComelitAlarmPanel(ComelitAccessoryEntity[AlarmPresentation], AlarmControlPanelEntity):
    """Vedo alarm; the configured access code is used for every request."""

    _attr_code_arm_required = False
    _attr_supported_features = (
        AlarmControlPanelEntityFeature.ARM_AWAY
        | AlarmControlPanelEntityFeature.ARM_HOME
        | AlarmControlPanelEntityFeature.ARM_NIGHT
    )

    @property
    def alarm_state(self) -> AlarmControlPanelState:
        return PANEL_STATES[self.presentation.current_state]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        zones = self.presentation.zones
        return {
            "open_zones": [zone.name for zone in zones if zone.open],
            "excluded_zones": [zone.name for zone in zones if zone.excluded],
        }

    async def async_alarm_disarm(self, code: str | None = None) -> None:
        await self.async_send_intent(SetAlarmTarget(AlarmState.DISARMED))

    async def async_alarm_arm_away(self, code: str | None = None) -> None:
        await self.async_send_intent(SetAlarmTarget(AlarmState.AWAY_ARM))

    async def async_alarm_arm_home(self, code: str | None = None) -> None:
        await self.async_send_intent(SetAlarmTarget(AlarmState.STAY_ARM))

    async def async_alarm_arm_night(self, code: str | None = None) -> None:
        await self.async_send_intent(SetAlarmTarget(AlarmState.NIGHT_ARM))
