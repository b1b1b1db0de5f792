"""Sensor platform exposing instant power readings."""

from __future__ import annotations

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfPower
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .domain.presentation import OutletPresentation, SupplierPresentation
from .entity import ComelitAccessoryEntity, iter_accessories, require_runtime


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Create power sensors for suppliers and outlets."""

    runtime = require_runtime(hass, entry.entry_id)
    entities: list[SensorEntity] = [
        ComelitSupplierPower(entry.entry_id, accessory)
        for accessory in iter_accessories(runtime, "supplier")
    ]
    entities.extend(
        ComelitOutletPower(entry.entry_id, accessory)
        for accessory in iter_accessories(runtime, "outlet")
    )
    async_add_entities(entities)


class _PowerSensor(SensorEntity):
    _attr_device_class = SensorDeviceClass.POWER
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfPower.WATT


class ComelitSupplierPower(
    ComelitAccessoryEntity[SupplierPresentation], _PowerSensor
):
    """Instant power drawn from a supplier meter."""

    @property
    def native_value(self) -> float | None:
        return self.presentation.power


class ComelitOutletPower(ComelitAccessoryEntity[OutletPresentation], _PowerSensor):
    """Instant power drawn through an outlet."""

    _attr_name = "Power"

    def __init__(self, entry_id, accessory) -> None:
        """Give the sensor its own unique id next to the outlet switch."""

        super().__init__(entry_id, accessory)
        self._attr_unique_id = f"{self._attr_unique_id}_power"

    @property
    def native_value(self) -> float | None:
        return self.presentation.power
