"""Validated configuration for a Comelit bridge entry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

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
    MAX_REFRESH_RATE,
    MIN_REFRESH_RATE,
)


def _optional_text(value: Any) -> str | None:
    """Return stripped text, mapping blanks to ``None``."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


PORT_VALIDATOR = vol.All(vol.Coerce(int), vol.Range(min=1, max=65535))
REFRESH_RATE_VALIDATOR = vol.All(
    vol.Coerce(int), vol.Range(min=MIN_REFRESH_RATE, max=MAX_REFRESH_RATE)
)
CLOSING_TIME_VALIDATOR = vol.All(vol.Coerce(int), vol.Range(min=1, max=600))

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): vol.All(str, vol.Strip, vol.Length(min=1)),
        vol.Optional(CONF_PORT, default=DEFAULT_PORT): PORT_VALIDATOR,
        vol.Optional(CONF_REFRESH_RATE, default=DEFAULT_REFRESH_RATE): (
            REFRESH_RATE_VALIDATOR
        ),
        vol.Optional(CONF_BLIND_CLOSING_TIME, default=DEFAULT_BLIND_CLOSING_TIME): (
            CLOSING_TIME_VALIDATOR
        ),
        vol.Optional(CONF_DISABLE_ALARM, default=DEFAULT_DISABLE_ALARM): vol.Boolean(),
        vol.Optional(CONF_ALARM_CODE, default=None): _optional_text,
        vol.Optional(CONF_ALARM_ADDRESS, default=None): _optional_text,
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True, slots=True)
class BridgeConfig:
    """Settings of one bridge entry after validation."""

    host: str
    port: int = DEFAULT_PORT
    refresh_rate: int = DEFAULT_REFRESH_RATE
    blind_closing_time: int = DEFAULT_BLIND_CLOSING_TIME
    disable_alarm: bool = DEFAULT_DISABLE_ALARM
    alarm_code: str | None = None
    alarm_address: str | None = None

    @classmethod
    def from_entry(
        cls,
        data: Mapping[str, Any],
        options: Mapping[str, Any] | None = None,
    ) -> BridgeConfig:
        """Merge entry ``options`` over ``data`` and validate the result.

        Raises ``vol.Invalid`` when a value is out of range.
        """

        merged = {**dict(data), **dict(options or {})}
        validated = CONFIG_SCHEMA(merged)
        return cls(
            host=validated[CONF_HOST],
            port=validated[CONF_PORT],
            refresh_rate=validated[CONF_REFRESH_RATE],
            blind_closing_time=validated[CONF_BLIND_CLOSING_TIME],
            disable_alarm=validated[CONF_DISABLE_ALARM],
            alarm_code=validated[CONF_ALARM_CODE],
            alarm_address=validated[CONF_ALARM_ADDRESS],
        )

    @property
    def alarm_enabled(self) -> bool:
        """Return True when the alarm integration is switched on."""

        return not self.disable_alarm

    @property
    def alarm_host(self) -> str:
        """Return the alarm address, defaulting to the bridge host."""

        return self.alarm_address or self.host
