"""Device records and the device index snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any

from .ids import INDEX_CATEGORIES, DeviceCategory, DeviceKey, normalize_category


class ClimaMode(str, Enum):
    """Operating mode codes reported for thermostat and humidity control."""

    NONE = "0"
    AUTO = "1"
    MANUAL = "2"
    SEMI_AUTO = "3"
    SEMI_MAN = "4"
    OFF_AUTO = "5"
    OFF_MANUAL = "6"


class ClimaOnOff(IntEnum):
    """Arguments accepted by the thermostat and humidifier toggles."""

    OFF_THERMO = 0
    ON_THERMO = 1
    OFF_HUMI = 2
    ON_HUMI = 3
    OFF = 4
    ON = 5


class ThermoSeason(str, Enum):
    """Season selector of a thermostat."""

    SUMMER = "0"
    WINTER = "1"


class ObjectStatus(str, Enum):
    """On/off status of switchable objects."""

    OFF = "0"
    ON = "1"


class BlindStatus(str, Enum):
    """Movement status of a blind."""

    STOPPED = "0"
    OPENING = "1"
    CLOSING = "2"


class BlindAction(IntEnum):
    """Movement requests accepted by the bridge for blinds."""

    CLOSE = 0
    OPEN = 1
    STOP = 2


def _freeze(payload: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(payload or {}))


@dataclass(frozen=True, slots=True)
class DeviceRecord:
    """Snapshot of one bridge device."""

    identifier: str
    name: str
    category: DeviceCategory
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalise identifier and category and freeze the payload."""

        object.__setattr__(self, "identifier", str(self.identifier).strip())
        object.__setattr__(self, "category", normalize_category(self.category))
        object.__setattr__(self, "payload", _freeze(self.payload))

    @property
    def key(self) -> DeviceKey:
        """Return the category-scoped key of the record."""

        return DeviceKey(self.category, self.identifier)

    def get(self, name: str, default: Any = None) -> Any:
        """Return a payload field."""

        return self.payload.get(name, default)

    def merged(self, changes: Mapping[str, Any]) -> DeviceRecord:
        """Return a copy whose payload is updated with ``changes``."""

        payload = dict(self.payload)
        payload.update(changes)
        return DeviceRecord(self.identifier, self.name, self.category, payload)


@dataclass(slots=True)
class DeviceIndex:
    """All devices known to the bridge, partitioned by category."""

    lights: dict[str, DeviceRecord] = field(default_factory=dict)
    thermostats: dict[str, DeviceRecord] = field(default_factory=dict)
    blinds: dict[str, DeviceRecord] = field(default_factory=dict)
    outlets: dict[str, DeviceRecord] = field(default_factory=dict)
    suppliers: dict[str, DeviceRecord] = field(default_factory=dict)

    @classmethod
    def from_records(cls, records: Iterable[DeviceRecord]) -> DeviceIndex:
        """Build an index from records of any category."""

        index = cls()
        for record in records:
            index.mapping_for(record.category)[record.identifier] = record
        return index

    def mapping_for(self, category: DeviceCategory | str) -> dict[str, DeviceRecord]:
        """Return the mapping holding records of ``category``."""

        resolved = normalize_category(category)
        if resolved is DeviceCategory.LIGHT:
            return self.lights
        if resolved is DeviceCategory.THERMOSTAT:
            return self.thermostats
        if resolved is DeviceCategory.BLIND:
            return self.blinds
        if resolved is DeviceCategory.OUTLET:
            return self.outlets
        if resolved is DeviceCategory.SUPPLIER:
            return self.suppliers
        raise ValueError(f"Category {resolved.value} is not part of the device index")

    def records(self) -> Iterator[DeviceRecord]:
        """Yield every record in category order, then insertion order."""

        for category in INDEX_CATEGORIES:
            yield from self.mapping_for(category).values()

    def get(self, category: DeviceCategory | str, identifier: str) -> DeviceRecord | None:
        """Return the record for ``identifier`` within ``category``."""

        return self.mapping_for(category).get(str(identifier))

    def replace(self, record: DeviceRecord) -> bool:
        """Store ``record`` over a known identifier; unknown ones are ignored."""

        mapping = self.mapping_for(record.category)
        if record.identifier not in mapping:
            return False
        mapping[record.identifier] = record
        return True

    def counts(self) -> dict[str, int]:
        """Return the number of records per category."""

        return {
            category.value: len(self.mapping_for(category))
            for category in INDEX_CATEGORIES
        }

    def __len__(self) -> int:
        """Return the total number of records."""

        return sum(self.counts().values())
