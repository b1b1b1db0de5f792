"""Light platform for Comelit lights."""

from __future__ import annotations

from typing import Any

from homeassistant.components.light import ATTR_BRIGHTNESS, ColorMode, LightEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .domain.intents import SetBrightness, SetOn
from .domain.presentation import LightPresentation
from .entity import ComelitAccessoryEntity, iter_accessories, require_runtime


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Create one light entity per bridge light."""

    runtime = require_runtime(hass, entry.entry_id)
    async_add_entities(
        ComelitLight(entry.entry_id, accessory)
        for accessory in iter_accessories(runtime, "light")
    )


def _to_percent(brightness: int) -> int:
    return max(0, min(100, round(int(brightness) * 100 / 255)))


def _to_brightness(percent: int) -> int:
    return max(0, min(255, round(int(percent) * 255 / 100)))


class ComelitLight(ComelitAccessoryEntity[LightPresentation], LightEntity):
    """Bridge light, dimmable when the bridge reports a brightness."""

    @property
    def color_mode(self) -> ColorMode:
        if self.presentation.brightness is None:
            return ColorMode.ONOFF
        return ColorMode.BRIGHTNESS

    @property
    def supported_color_modes(self) -> set[ColorMode]:
        return {self.color_mode}

    @property
    def is_on(self) -> bool:
        return self.presentation.on

    @property
    def brightness(self) -> int | None:
        percent = self.presentation.brightness
        return None if percent is None else _to_brightness(percent)

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Turn the light on, optionally at a brightness."""

        if ATTR_BRIGHTNESS in kwargs and self.presentation.brightness is not None:
            await self.async_send_intent(
                SetBrightness(_to_percent(kwargs[ATTR_BRIGHTNESS]))
            )
            return
        await self.async_send_intent(SetOn(True))

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn the light off."""

        await self.async_send_intent(SetOn(False))
