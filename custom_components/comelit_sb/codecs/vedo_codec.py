"""Codec helpers for the Vedo alarm pages."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Final

from pydantic import BaseModel, ValidationError

from ..domain.ids import DeviceCategory
from ..domain.records import DeviceRecord
from .models import (
    AlarmAreaPayload,
    AlarmPayload,
    AlarmZonePayload,
    VedoAreaStatusPage,
    VedoDescPage,
    VedoZoneStatusPage,
)

_LOGGER = logging.getLogger(__name__)

ALARM_IDENTIFIER: Final = "vedo"
ALARM_NAME: Final = "Vedo alarm"

AREA_ARMED_PARTIAL: Final = 1
AREA_ARMED_TOTAL: Final = 2


def _validate(model: type[BaseModel], raw: Any, page: str) -> Any:
    try:
        return model.model_validate(dict(raw) if isinstance(raw, Mapping) else {})
    except ValidationError:
        _LOGGER.warning("Invalid Vedo %s page", page, exc_info=True)
        return model.model_construct()


def _flag(values: list[int], index: int) -> int:
    return values[index] if index < len(values) else 0


def is_session_rejected(raw: Any) -> bool:
    """Return True when a Vedo page reports a logged-out session."""

    return isinstance(raw, Mapping) and raw.get("logged") == 0


def decode_alarm(
    area_desc: Any,
    area_status: Any,
    zone_desc: Any,
    zone_status: Any,
) -> AlarmPayload:
    """Combine the four Vedo pages into one alarm payload."""

    areas_page: VedoDescPage = _validate(VedoDescPage, area_desc, "area description")
    area_stat: VedoAreaStatusPage = _validate(
        VedoAreaStatusPage, area_status, "area status"
    )
    zones_page: VedoDescPage = _validate(VedoDescPage, zone_desc, "zone description")
    zone_stat: VedoZoneStatusPage = _validate(
        VedoZoneStatusPage, zone_status, "zone status"
    )

    areas = []
    for index in range(areas_page.num or len(areas_page.description)):
        names = areas_page.description
        name = str(names[index]).strip() if index < len(names) else ""
        if not name:
            # Unnamed slots are unused areas.
            continue
        armed = _flag(area_stat.armed, index)
        areas.append(
            AlarmAreaPayload(
                index=index,
                name=name,
                armed=armed == AREA_ARMED_TOTAL,
                partial=armed == AREA_ARMED_PARTIAL,
                triggered=bool(_flag(area_stat.alarm, index)),
            )
        )

    zones = []
    for index in range(zones_page.num or len(zones_page.description)):
        names = zones_page.description
        name = str(names[index]).strip() if index < len(names) else ""
        if not name:
            continue
        zones.append(
            AlarmZonePayload(
                index=index,
                name=name,
                open=bool(_flag(zone_stat.open, index)),
                excluded=bool(_flag(zone_stat.excluded, index)),
            )
        )
    return AlarmPayload(areas=areas, zones=zones)


def alarm_record(payload: AlarmPayload) -> DeviceRecord:
    """Wrap an alarm payload in the record the registry consumes."""

    return DeviceRecord(
        identifier=ALARM_IDENTIFIER,
        name=ALARM_NAME,
        category=DeviceCategory.ALARM,
        payload=payload.model_dump(),
    )


__all__ = [
    "ALARM_IDENTIFIER",
    "ALARM_NAME",
    "alarm_record",
    "decode_alarm",
    "is_session_rejected",
]
