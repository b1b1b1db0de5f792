"""Per-category state translators and the factory selecting them."""

from __future__ import annotations

from typing import Any

from ..const import DEFAULT_BLIND_CLOSING_TIME
from ..domain.ids import DeviceCategory, normalize_category
from .alarm import AlarmTranslator
from .base import StateTranslator, clamp_percent, load_payload
from .blind import BlindTranslator
from .climate import DehumidifierTranslator, ThermostatTranslator, has_humidity_control
from .light import LightbulbTranslator
from .power import OutletTranslator, PowerSupplierTranslator


def create_translator(
    category: DeviceCategory | str,
    *,
    kind: str | None = None,
    blind_closing_time: float = DEFAULT_BLIND_CLOSING_TIME,
    alarm_code: str | None = None,
) -> StateTranslator[Any]:
    """Return the translator for ``category``.

    Thermostats expose two sides; pass ``kind="dehumidifier"`` to get the
    humidity controller instead of the temperature control.
    """

    resolved = normalize_category(category)
    if resolved is DeviceCategory.LIGHT:
        return LightbulbTranslator()
    if resolved is DeviceCategory.THERMOSTAT:
        if kind == DehumidifierTranslator.kind:
            return DehumidifierTranslator()
        return ThermostatTranslator()
    if resolved is DeviceCategory.BLIND:
        return BlindTranslator(blind_closing_time)
    if resolved is DeviceCategory.OUTLET:
        return OutletTranslator()
    if resolved is DeviceCategory.SUPPLIER:
        return PowerSupplierTranslator()
    if resolved is DeviceCategory.ALARM:
        return AlarmTranslator(alarm_code or "")
    raise ValueError(f"No translator for category {resolved.value}")


__all__ = [
    "AlarmTranslator",
    "BlindTranslator",
    "DehumidifierTranslator",
    "LightbulbTranslator",
    "OutletTranslator",
    "PowerSupplierTranslator",
    "StateTranslator",
    "ThermostatTranslator",
    "clamp_percent",
    "create_translator",
    "has_humidity_control",
    "load_payload",
]
