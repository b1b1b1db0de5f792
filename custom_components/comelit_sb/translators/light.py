"""Translator for lights."""

from __future__ import annotations

from ..codecs.models import LightPayload
from ..domain.commands import (
    DeviceCommand,
    SetBrightness as SetBrightnessCommand,
    ToggleDeviceStatus,
)
from ..domain.ids import DeviceCategory
from ..domain.intents import Intent, SetBrightness, SetOn
from ..domain.presentation import LightPresentation
from ..domain.records import DeviceRecord, ObjectStatus
from .base import StateTranslator, clamp_percent, load_payload


class LightbulbTranslator(StateTranslator[LightPresentation]):
    """Lights, optionally dimmable."""

    category = DeviceCategory.LIGHT
    kind = "light"

    def derive_state(self, record: DeviceRecord) -> LightPresentation:
        """Return on/off and, for dimmers, the brightness percentage."""

        payload = load_payload(LightPayload, record)
        brightness = payload.brightness
        if brightness is not None:
            brightness = clamp_percent(brightness)
        return LightPresentation(
            on=payload.status == ObjectStatus.ON.value,
            brightness=brightness,
        )

    def build_command(self, record: DeviceRecord, intent: Intent) -> DeviceCommand:
        if isinstance(intent, SetOn):
            return ToggleDeviceStatus(record.identifier, self.category, intent.on)
        if isinstance(intent, SetBrightness):
            return SetBrightnessCommand(record.identifier, clamp_percent(intent.percent))
        self._unsupported(intent)
