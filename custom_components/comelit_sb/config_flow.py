"""Config flow handlers for the Comelit Serial Bridge integration."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant import config_entries
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers import aiohttp_client
import voluptuous as vol

from .api import ComelitSbClient
from .config import (
    CLOSING_TIME_VALIDATOR,
    PORT_VALIDATOR,
    REFRESH_RATE_VALIDATOR,
    BridgeConfig,
)
from .const import (
    CONF_ALARM_ADDRESS,
    CONF_ALARM_CODE,
    CONF_BLIND_CLOSING_TIME,
    CONF_DISABLE_ALARM,
    CONF_HOST,
    CONF_PORT,
    CONF_REFRESH_RATE,
    DEFAULT_BLIND_CLOSING_TIME,
    DEFAULT_DISABLE_ALARM,
    DEFAULT_PORT,
    DEFAULT_REFRESH_RATE,
    DOMAIN,
)
from .errors import ComelitError

_LOGGER = logging.getLogger(__name__)


def _user_schema(defaults: dict[str, Any]) -> vol.Schema:
    """Build the bridge form schema with provided defaults."""

    return vol.Schema(
        {
            vol.Required(CONF_HOST, default=defaults.get(CONF_HOST, "")): str,
            vol.Optional(
                CONF_PORT, default=defaults.get(CONF_PORT, DEFAULT_PORT)
            ): PORT_VALIDATOR,
        }
    )


def _options_schema(current: BridgeConfig) -> vol.Schema:
    """Build the options form schema from the current settings."""

    return vol.Schema(
        {
            vol.Optional(CONF_REFRESH_RATE, default=current.refresh_rate): (
                REFRESH_RATE_VALIDATOR
            ),
            vol.Optional(CONF_BLIND_CLOSING_TIME, default=current.blind_closing_time): (
                CLOSING_TIME_VALIDATOR
            ),
            vol.Optional(CONF_DISABLE_ALARM, default=current.disable_alarm): bool,
            vol.Optional(
                CONF_ALARM_ADDRESS,
                description={"suggested_value": current.alarm_address},
            ): str,
            vol.Optional(
                CONF_ALARM_CODE,
                description={"suggested_value": current.alarm_code},
            ): str,
        }
    )


async def _validate_bridge(hass: HomeAssistant, host: str, port: int) -> bool:
    """Return True when the bridge accepts a session."""

    session = aiohttp_client.async_get_clientsession(hass)
    client = ComelitSbClient(session, host, port)
    try:
        return await client.login()
    finally:
        await client.shutdown()


class ComelitSbConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Set up a bridge by host and port."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> FlowResult:
        """Collect the bridge address and create the config entry."""

        if user_input is None:
            return self.async_show_form(step_id="user", data_schema=_user_schema({}))

        host = str(user_input[CONF_HOST]).strip()
        port = int(user_input.get(CONF_PORT, DEFAULT_PORT))

        errors: dict[str, str] = {}
        try:
            if not await _validate_bridge(self.hass, host, port):
                errors["base"] = "cannot_login"
        except ComelitError:
            errors["base"] = "cannot_connect"
        except Exception:
            _LOGGER.exception("Unexpected error during user step")
            errors["base"] = "unknown"

        if errors:
            return self.async_show_form(
                step_id="user",
                data_schema=_user_schema({CONF_HOST: host, CONF_PORT: port}),
                errors=errors,
            )

        await self.async_set_unique_id(f"{host}:{port}")
        self._abort_if_unique_id_configured()
        return self.async_create_entry(
            title=f"Comelit bridge ({host})",
            data={
                CONF_HOST: host,
                CONF_PORT: port,
                CONF_REFRESH_RATE: DEFAULT_REFRESH_RATE,
                CONF_BLIND_CLOSING_TIME: DEFAULT_BLIND_CLOSING_TIME,
                CONF_DISABLE_ALARM: DEFAULT_DISABLE_ALARM,
            },
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> ComelitSbOptionsFlow:
        """Return the options flow handler for this config entry."""

        return ComelitSbOptionsFlow(config_entry)


class ComelitSbOptionsFlow(config_entries.OptionsFlow):
    """Edit refresh rate, blind timing and alarm settings."""

    def __init__(self, entry: ConfigEntry) -> None:
        """Store the entry being configured."""

        self.entry = entry

    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> FlowResult:
        """Show or process the options form."""

        current = BridgeConfig.from_entry(self.entry.data, self.entry.options)
        errors: dict[str, str] = {}
        if user_input is not None:
            options = {
                CONF_REFRESH_RATE: user_input.get(CONF_REFRESH_RATE, current.refresh_rate),
                CONF_BLIND_CLOSING_TIME: user_input.get(
                    CONF_BLIND_CLOSING_TIME, current.blind_closing_time
                ),
                CONF_DISABLE_ALARM: bool(
                    user_input.get(CONF_DISABLE_ALARM, current.disable_alarm)
                ),
                CONF_ALARM_ADDRESS: (user_input.get(CONF_ALARM_ADDRESS) or "").strip(),
                CONF_ALARM_CODE: (user_input.get(CONF_ALARM_CODE) or "").strip(),
            }
            if not options[CONF_DISABLE_ALARM] and not options[CONF_ALARM_CODE]:
                errors[CONF_ALARM_CODE] = "alarm_code_required"
            else:
                return self.async_create_entry(title="", data=options)

        return self.async_show_form(
            step_id="init", data_schema=_options_schema(current), errors=errors
        )
