"""Cover platform for Comelit blinds."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import logging
from typing import Any, cast

from homeassistant.components.cover import (
    ATTR_POSITION,
    CoverDeviceClass,
    CoverEntity,
    CoverEntityFeature,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.event import async_call_later

from .domain.intents import SetTargetPosition, StopBlind
from .domain.presentation import BlindPresentation, PositionState
from .domain.records import BlindAction
from .entity import ComelitAccessoryEntity, iter_accessories, require_runtime
from .errors import CommandError
from .translators import BlindTranslator

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Create one cover per bridge blind."""

    runtime = require_runtime(hass, entry.entry_id)
    async_add_entities(
        ComelitBlind(entry.entry_id, accessory)
        for accessory in iter_accessories(runtime, "blind")
    )


class ComelitBlind(ComelitAccessoryEntity[BlindPresentation], CoverEntity):
    """Blind that reaches intermediate positions by timing its travel."""

    _attr_device_class = CoverDeviceClass.SHUTTER
    _attr_supported_features = (
        CoverEntityFeature.OPEN
        | CoverEntityFeature.CLOSE
        | CoverEntityFeature.STOP
        | CoverEntityFeature.SET_POSITION
    )

    def __init__(self, entry_id, accessory) -> None:
        """Initialise the blind without a pending timed stop."""

        super().__init__(entry_id, accessory)
        self._cancel_stop: Callable[[], None] | None = None

    @property
    def current_cover_position(self) -> int:
        return self.presentation.position

    @property
    def is_opening(self) -> bool:
        return self.presentation.position_state is PositionState.INCREASING

    @property
    def is_closing(self) -> bool:
        return self.presentation.position_state is PositionState.DECREASING

    @property
    def is_closed(self) -> bool:
        presentation = self.presentation
        return (
            presentation.position == 0
            and presentation.position_state is PositionState.STOPPED
        )

    async def async_will_remove_from_hass(self) -> None:
        """Drop any pending timed stop."""

        self._clear_timed_stop()
        await super().async_will_remove_from_hass()

    def _clear_timed_stop(self) -> None:
        cancel = self._cancel_stop
        self._cancel_stop = None
        if cancel is not None:
            cancel()

    async def async_open_cover(self, **kwargs: Any) -> None:
        await self._async_move_to(100)

    async def async_close_cover(self, **kwargs: Any) -> None:
        await self._async_move_to(0)

    async def async_stop_cover(self, **kwargs: Any) -> None:
        self._clear_timed_stop()
        await self.async_send_intent(StopBlind())

    async def async_set_cover_position(self, **kwargs: Any) -> None:
        await self._async_move_to(int(kwargs[ATTR_POSITION]))

    async def _async_move_to(self, target: int) -> None:
        """Start moving toward ``target`` and schedule the stop if needed."""

        self._clear_timed_stop()
        current = self.presentation.position
        command = await self.async_send_intent(SetTargetPosition(target))
        if getattr(command, "action", BlindAction.STOP) is BlindAction.STOP:
            return
        if target in (0, 100):
            return
        translator = cast(BlindTranslator, self.accessory.translator)
        delay = translator.travel_time(current, target)
        _LOGGER.debug(
            "%s: stopping in %.1f s to reach %d%%", self.accessory.key, delay, target
        )
        self._cancel_stop = async_call_later(self.hass, delay, self._async_timed_stop)

    async def _async_timed_stop(self, _now: datetime) -> None:
        self._cancel_stop = None
        try:
            await self.accessory.async_apply(StopBlind())
        except CommandError:
            _LOGGER.warning("%s: timed stop failed", self.accessory.key, exc_info=True)
