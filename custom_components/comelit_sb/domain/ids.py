"""Identifiers for domain objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DeviceCategory(str, Enum):
    """Device categories exposed by the bridge."""

    LIGHT = "light"
    THERMOSTAT = "thermostat"
    BLIND = "blind"
    OUTLET = "outlet"
    SUPPLIER = "supplier"
    ALARM = "alarm"


INDEX_CATEGORIES: tuple[DeviceCategory, ...] = (
    DeviceCategory.LIGHT,
    DeviceCategory.THERMOSTAT,
    DeviceCategory.BLIND,
    DeviceCategory.OUTLET,
    DeviceCategory.SUPPLIER,
)


def normalize_category(category: DeviceCategory | str) -> DeviceCategory:
    """Normalize assorted category inputs to ``DeviceCategory``."""

    try:
        return DeviceCategory(category)
    except ValueError as err:
        raise ValueError(f"Unknown device category: {category}") from err


@dataclass(frozen=True, slots=True)
class DeviceKey:
    """Identifier for a device made of its category and bridge identifier."""

    category: DeviceCategory
    identifier: str

    def __post_init__(self) -> None:
        """Normalise the category and identifier."""

        object.__setattr__(self, "category", normalize_category(self.category))
        identifier = str(self.identifier).strip()
        if not identifier:
            msg = "identifier must not be empty"
            raise ValueError(msg)
        object.__setattr__(self, "identifier", identifier)

    @property
    def unique_key(self) -> str:
        """Return a string form usable in unique ids and signal names."""

        return f"{self.category.value}_{self.identifier}"

    def __str__(self) -> str:
        """Render the key as ``category:identifier``."""

        return f"{self.category.value}:{self.identifier}"
