"""Home Assistant entry point for the Comelit Serial Bridge integration."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EVENT_HOMEASSISTANT_STOP, Platform
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers import aiohttp_client
from homeassistant.helpers.dispatcher import async_dispatcher_send

from .api import ComelitSbClient
from .config import BridgeConfig
from .const import DOMAIN, signal_accessory_update
from .registry import AccessoryEntry
from .runtime import BridgeRuntime
from .vedo import VedoClient

_LOGGER = logging.getLogger(__name__)

PLATFORMS = [
    Platform.ALARM_CONTROL_PANEL,
    Platform.CLIMATE,
    Platform.COVER,
    Platform.HUMIDIFIER,
    Platform.LIGHT,
    Platform.SENSOR,
    Platform.SWITCH,
]


def create_runtime(hass: HomeAssistant, entry: ConfigEntry) -> BridgeRuntime:
    """Build the clients and runtime for ``entry`` without touching the network."""

    config = BridgeConfig.from_entry(entry.data, entry.options)
    session = aiohttp_client.async_get_clientsession(hass)
    client = ComelitSbClient(session, config.host, config.port)
    alarm_client = None
    if config.alarm_enabled and config.alarm_code:
        alarm_client = VedoClient(session, config.alarm_host, config.alarm_code)

    @callback
    def _publish(accessory: AccessoryEntry) -> None:
        async_dispatcher_send(
            hass,
            signal_accessory_update(entry.entry_id, accessory.unique_key),
            accessory.presentation,
        )

    return BridgeRuntime(
        config,
        client,
        alarm_client=alarm_client,
        publisher=_publish,
        loop=hass.loop,
    )


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the Comelit bridge for a config entry.

    An unreachable bridge still yields a loaded entry, just without entities.
    """

    runtime = create_runtime(hass, entry)
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = runtime

    accessories = await runtime.async_bootstrap()
    if not accessories:
        _LOGGER.warning(
            "Comelit bridge %s: no accessories available (last error: %s)",
            runtime.config.host,
            runtime.last_error,
        )

    async def _async_handle_hass_stop(_event: Any) -> None:
        """Stop the keepalive when Home Assistant stops."""

        await runtime.async_shutdown()

    entry.async_on_unload(
        hass.bus.async_listen_once(EVENT_HOMEASSISTANT_STOP, _async_handle_hass_stop)
    )
    entry.async_on_unload(entry.add_update_listener(async_update_entry_options))

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    _LOGGER.info(
        "Comelit bridge %s set up with %d accessories",
        runtime.config.host,
        len(accessories),
    )
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""

    domain_data = hass.data.get(DOMAIN)
    runtime: BridgeRuntime | None = domain_data.get(entry.entry_id) if domain_data else None
    if runtime is None:
        return True

    await runtime.async_shutdown()
    ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if ok and domain_data is not None:
        domain_data.pop(entry.entry_id, None)
    return ok


async def async_update_entry_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry so new options take effect."""

    await hass.config_entries.async_reload(entry.entry_id)
