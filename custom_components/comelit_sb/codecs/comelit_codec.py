"""Codec helpers for Comelit Serial Bridge pages."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Final

from pydantic import ValidationError

from ..domain.ids import DeviceCategory
from ..domain.records import DeviceRecord
from .models import DescPage, StatusPage, normalise_code

_LOGGER = logging.getLogger(__name__)

# Bridge page names per device category.
CATEGORY_PAGES: Final[Mapping[DeviceCategory, str]] = {
    DeviceCategory.LIGHT: "light",
    DeviceCategory.THERMOSTAT: "clima",
    DeviceCategory.BLIND: "shutter",
    DeviceCategory.OUTLET: "other",
    DeviceCategory.SUPPLIER: "supplier",
}

_DEFAULT_NAMES: Final[Mapping[DeviceCategory, str]] = {
    DeviceCategory.LIGHT: "Light",
    DeviceCategory.THERMOSTAT: "Thermostat",
    DeviceCategory.BLIND: "Blind",
    DeviceCategory.OUTLET: "Outlet",
    DeviceCategory.SUPPLIER: "Supplier",
}


def _slot(values: list[Any], index: int) -> Any:
    return values[index] if index < len(values) else None


def payload_from_slot(category: DeviceCategory, status: Any, value: Any) -> dict[str, Any]:
    """Translate one page slot into vendor payload fields."""

    payload: dict[str, Any] = {}
    if category is DeviceCategory.THERMOSTAT:
        if status is not None:
            payload["status"] = normalise_code(status)
        if isinstance(value, Mapping):
            payload.update(value)
        return payload
    if category is DeviceCategory.SUPPLIER:
        if value is not None:
            payload["instant_power"] = value
        return payload

    if status is not None:
        payload["status"] = normalise_code(status)
    if value in (None, ""):
        return payload
    if category is DeviceCategory.LIGHT:
        payload["brightness"] = value
    elif category is DeviceCategory.BLIND:
        payload["open_status"] = normalise_code(value)
    elif category is DeviceCategory.OUTLET:
        payload["instant_power"] = value
    return payload


def decode_desc_page(category: DeviceCategory, raw: Any) -> list[DeviceRecord]:
    """Validate a description page and return its device records."""

    if not isinstance(raw, Mapping):
        _LOGGER.debug("Ignoring non-mapping %s description page", category.value)
        return []
    try:
        page = DescPage.model_validate(dict(raw))
    except ValidationError:
        _LOGGER.warning("Invalid %s description page", category.value, exc_info=True)
        return []

    count = page.num or len(page.desc)
    records: list[DeviceRecord] = []
    for index in range(count):
        name = str(_slot(page.desc, index) or "").strip()
        if not name:
            name = f"{_DEFAULT_NAMES[category]} {index}"
        records.append(
            DeviceRecord(
                identifier=str(index),
                name=name,
                category=category,
                payload=payload_from_slot(
                    category,
                    _slot(page.status, index),
                    _slot(page.val, index),
                ),
            )
        )
    return records


def decode_status_page(category: DeviceCategory, raw: Any) -> dict[str, dict[str, Any]]:
    """Validate a status page and return payload fields keyed by identifier."""

    if not isinstance(raw, Mapping):
        return {}
    try:
        page = StatusPage.model_validate(dict(raw))
    except ValidationError:
        _LOGGER.warning("Invalid %s status page", category.value, exc_info=True)
        return {}

    count = max(len(page.status), len(page.val))
    return {
        str(index): payload_from_slot(
            category, _slot(page.status, index), _slot(page.val, index)
        )
        for index in range(count)
    }


__all__ = [
    "CATEGORY_PAGES",
    "decode_desc_page",
    "decode_status_page",
    "payload_from_slot",
]
