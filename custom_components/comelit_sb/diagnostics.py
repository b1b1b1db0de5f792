"""Diagnostics support for the Comelit Serial Bridge integration."""

from __future__ import annotations

from collections.abc import Mapping
import logging
import platform
from typing import Any, Final

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_ALARM_CODE, DOMAIN
from .runtime import BridgeRuntime

_LOGGER = logging.getLogger(__name__)

SENSITIVE_FIELDS: Final = {CONF_ALARM_CODE, "code"}


def build_diagnostics(runtime: BridgeRuntime | None) -> dict[str, Any]:
    """Return the runtime section of the diagnostics payload."""

    if runtime is None:
        return {"loaded": False}

    keepalive = runtime.keepalive
    last_error = runtime.last_error
    return {
        "loaded": True,
        "config": {
            "host": runtime.config.host,
            "port": runtime.config.port,
            "refresh_rate": runtime.config.refresh_rate,
            "blind_closing_time": runtime.config.blind_closing_time,
            "alarm_enabled": runtime.config.alarm_enabled,
        },
        "device_index": runtime.index.counts(),
        "accessories": runtime.registry.snapshot(),
        "keepalive": {
            "state": keepalive.state.value if keepalive else None,
            "consecutive_failures": keepalive.failures if keepalive else 0,
        },
        "last_error": (
            f"{type(last_error).__name__}: {last_error}" if last_error else None
        ),
    }


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> Mapping[str, Any]:
    """Return a diagnostics payload for ``entry``."""

    domain_data = hass.data.get(DOMAIN)
    runtime = domain_data.get(entry.entry_id) if isinstance(domain_data, dict) else None
    diagnostics: dict[str, Any] = {
        "entry": {"data": dict(entry.data), "options": dict(entry.options)},
        "home_assistant": {
            "version": str(getattr(hass, "version", "unknown")),
            "python_version": platform.python_version(),
        },
        "runtime": build_diagnostics(runtime),
    }
    _LOGGER.debug("Diagnostics collected for %s", entry.entry_id)
    return async_redact_data(diagnostics, SENSITIVE_FIELDS)
