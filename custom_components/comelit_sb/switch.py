"""Switch platform for Comelit outlets."""

from __future__ import annotations

from typing import Any

from homeassistant.components.switch import SwitchDeviceClass, SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .domain.intents import SetOn
from .domain.presentation import OutletPresentation
from .entity import ComelitAccessoryEntity, iter_accessories, require_runtime


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Create one switch per bridge outlet."""

    runtime = require_runtime(hass, entry.entry_id)
    async_add_entities(
        ComelitOutlet(entry.entry_id, accessory)
        for accessory in iter_accessories(runtime, "outlet")
    )


class ComelitOutlet(ComelitAccessoryEntity[OutletPresentation], SwitchEntity):
    """Switchable outlet."""

    _attr_device_class = SwitchDeviceClass.OUTLET

    @property
    def is_on(self) -> bool:
        return self.presentation.on

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        presentation = self.presentation
        return {"in_use": presentation.in_use, "power": presentation.power}

    async def async_turn_on(self, **kwargs: Any) -> None:
        await self.async_send_intent(SetOn(True))

    async def async_turn_off(self, **kwargs: Any) -> None:
        await self.async_send_intent(SetOn(False))
