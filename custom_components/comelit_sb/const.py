"""Constants for the Comelit Serial Bridge integration."""

from __future__ import annotations

from typing import Final

# Domain
DOMAIN: Final = "comelit_sb"
MANUFACTURER: Final = "Comelit"

# Config entry keys
CONF_HOST: Final = "host"
CONF_PORT: Final = "port"
CONF_REFRESH_RATE: Final = "refresh_rate"
CONF_BLIND_CLOSING_TIME: Final = "blind_closing_time"
CONF_DISABLE_ALARM: Final = "disable_alarm"
CONF_ALARM_CODE: Final = "alarm_code"
CONF_ALARM_ADDRESS: Final = "alarm_address"

# Defaults
DEFAULT_PORT: Final = 80
DEFAULT_ALARM_PORT: Final = 80
DEFAULT_REFRESH_RATE: Final = 5  # seconds between keepalive refreshes
MIN_REFRESH_RATE: Final = 1
MAX_REFRESH_RATE: Final = 3600
DEFAULT_BLIND_CLOSING_TIME: Final = 35  # seconds for a full blind travel
DEFAULT_DISABLE_ALARM: Final = True

# HTTP
HTTP_TIMEOUT: Final = 10  # seconds

# Bridge pages
LOGIN_PATH: Final = "/login.json"
DESC_PATH_FMT: Final = "/user/icon_desc.json?type={page}"
STATUS_PATH_FMT: Final = "/user/icon_status.json?type={page}"
ACTION_PATH: Final = "/user/action.cgi"

# Vedo alarm pages
VEDO_LOGIN_PATH: Final = "/login.cgi"
VEDO_AREA_DESC_PATH: Final = "/user/area_desc.json"
VEDO_AREA_STAT_PATH: Final = "/user/area_stat.json"
VEDO_ZONE_DESC_PATH: Final = "/user/zone_desc.json"
VEDO_ZONE_STAT_PATH: Final = "/user/zone_stat.json"
VEDO_ACTION_PATH: Final = "/action.cgi"
VEDO_ALL_AREAS: Final = 32


def signal_accessory_update(entry_id: str, unique_key: str) -> str:
    """Signal name for presentation updates addressed to one accessory."""

    return f"{DOMAIN}_{entry_id}_{unique_key}_update"
