"""Async HTTP client for the Comelit Serial Bridge."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
import logging
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from .codecs import CATEGORY_PAGES, decode_desc_page, decode_status_page
from .codecs.models import LoginResponse, StatusPage
from .const import (
    ACTION_PATH,
    DEFAULT_PORT,
    DESC_PATH_FMT,
    HTTP_TIMEOUT,
    LOGIN_PATH,
    STATUS_PATH_FMT,
)
from .domain.ids import INDEX_CATEGORIES, DeviceCategory
from .domain.records import (
    BlindAction,
    ClimaMode,
    ClimaOnOff,
    DeviceIndex,
    DeviceRecord,
    ThermoSeason,
)
from .errors import BridgeConnectionError, CommandError, SessionExpiredError
from .sanitize import redact_text

_LOGGER = logging.getLogger(__name__)

UpdateCallback = Callable[[str, DeviceRecord], None]

# Verbs understood by the clima action page.
_CLIMA_SET_TEMPERATURE = "set"
_CLIMA_SWITCH_MODE = "mode"
_CLIMA_TOGGLE = "onoff"
_CLIMA_SWITCH_SEASON = "season"
_HUMI_SET = "set_umi"
_HUMI_SWITCH_MODE = "mode_umi"


class BridgeClient(Protocol):
    """Operations the sync engine needs from a bridge client."""

    async def login(self) -> bool:
        """Open a session; return False when the bridge refuses it."""

    async def fetch_index(self) -> DeviceIndex:
        """Return a full snapshot of the devices known to the bridge."""

    async def refresh(self, index: DeviceIndex) -> None:
        """Poll current state and push changed records to the update callback."""

    async def shutdown(self) -> None:
        """Release the session."""

    def set_update_callback(self, callback: UpdateCallback | None) -> None:
        """Register the receiver of inbound updates."""

    async def set_humidity(self, device_id: str, percent: int) -> None: ...

    async def switch_humidifier_mode(self, device_id: str, mode: ClimaMode) -> None: ...

    async def toggle_humidifier_status(
        self, device_id: str, status: ClimaOnOff
    ) -> None: ...

    async def set_temperature(self, device_id: str, tenths: int) -> None: ...

    async def switch_thermostat_mode(self, device_id: str, mode: ClimaMode) -> None: ...

    async def toggle_thermostat_status(
        self, device_id: str, status: ClimaOnOff
    ) -> None: ...

    async def switch_thermostat_season(
        self, device_id: str, season: ThermoSeason
    ) -> None: ...

    async def toggle_device_status(
        self, category: DeviceCategory, device_id: str, on: bool
    ) -> None: ...

    async def set_brightness(self, device_id: str, percent: int) -> None: ...

    async def move_blind(self, device_id: str, action: BlindAction) -> None: ...


class ComelitSbClient:
    """Thin async client for the Comelit Serial Bridge (HA-safe).

    The bridge has no push channel: ``refresh`` polls the status pages and
    reports every record whose payload changed.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        host: str,
        port: int = DEFAULT_PORT,
        *,
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        """Initialise the client for the bridge at ``host``."""

        self._session = session
        self._host = host
        self._base_url = f"http://{host}:{int(port)}"
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._callback: UpdateCallback | None = None
        self._logged_in = False
        self._closed = False

    @property
    def base_url(self) -> str:
        """Return the bridge base URL."""

        return self._base_url

    @property
    def logged_in(self) -> bool:
        """Return True while a session is open."""

        return self._logged_in

    def set_update_callback(self, callback: UpdateCallback | None) -> None:
        """Register the receiver of inbound updates."""

        self._callback = callback

    async def _request(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        """GET ``path`` and return its JSON body.

        Transport failures and HTTP errors are raised as
        :class:`BridgeConnectionError`; 401/403 as :class:`SessionExpiredError`.
        """

        if self._closed:
            raise BridgeConnectionError("Client has been shut down")

        url = f"{self._base_url}{path}"
        _LOGGER.debug("HTTP GET %s", url)
        try:
            async with self._session.get(
                url, params=params, timeout=self._timeout
            ) as resp:
                if resp.status in (401, 403):
                    self._logged_in = False
                    raise SessionExpiredError(f"Bridge rejected session ({resp.status})")
                if resp.status >= 400:
                    body = await resp.text()
                    _LOGGER.error(
                        "HTTP error GET %s -> %s; body=%s",
                        url,
                        resp.status,
                        redact_text(body)[:200],
                    )
                    raise BridgeConnectionError(
                        f"Bridge returned HTTP {resp.status} for {path}"
                    )
                _LOGGER.debug("HTTP %s -> %s", url, resp.status)
                try:
                    return await resp.json(content_type=None)
                except ValueError:
                    text = await resp.text()
                    _LOGGER.debug("Non-JSON body from %s: %s", url, redact_text(text)[:200])
                    return text
        except (SessionExpiredError, BridgeConnectionError):
            raise
        except asyncio.CancelledError:
            raise
        except (aiohttp.ClientError, TimeoutError) as err:
            _LOGGER.debug(
                "Request GET %s failed (sanitized): %s", url, redact_text(str(err))
            )
            raise BridgeConnectionError(f"Bridge at {self._host} unreachable") from err

    async def login(self) -> bool:
        """Open a bridge session."""

        raw = await self._request(LOGIN_PATH)
        try:
            response = LoginResponse.model_validate(raw if isinstance(raw, dict) else {})
        except ValidationError:
            _LOGGER.warning("Unexpected login response from %s", self._host)
            return False
        self._logged_in = response.logged == 1
        if self._logged_in:
            _LOGGER.info("Logged in to Comelit bridge %s", self._host)
        else:
            _LOGGER.warning("Comelit bridge %s refused the session", self._host)
        return self._logged_in

    async def fetch_index(self) -> DeviceIndex:
        """Return all devices reported by the description pages."""

        if not self._logged_in:
            raise BridgeConnectionError("Not logged in to the bridge")

        records: list[DeviceRecord] = []
        for category in INDEX_CATEGORIES:
            raw = await self._request(
                DESC_PATH_FMT.format(page=CATEGORY_PAGES[category])
            )
            if isinstance(raw, dict) and raw.get("logged") == 0:
                self._logged_in = False
                raise BridgeConnectionError("Bridge session is not valid")
            records.extend(decode_desc_page(category, raw))
        index = DeviceIndex.from_records(records)
        _LOGGER.info("Bridge %s device index: %s", self._host, index.counts())
        return index

    async def refresh(self, index: DeviceIndex) -> None:
        """Poll status pages and push changed records through the callback."""

        for category in INDEX_CATEGORIES:
            known = index.mapping_for(category)
            if not known:
                continue
            raw = await self._request(
                STATUS_PATH_FMT.format(page=CATEGORY_PAGES[category])
            )
            if isinstance(raw, dict):
                try:
                    logged = StatusPage.model_validate(raw).logged
                except ValidationError:
                    logged = None
                if logged == 0:
                    self._logged_in = False
                    raise SessionExpiredError("Bridge session expired")
            for identifier, changes in decode_status_page(category, raw).items():
                current = known.get(identifier)
                if current is None:
                    continue
                updated = current.merged(changes)
                if updated.payload == current.payload:
                    continue
                index.replace(updated)
                self._notify(identifier, updated)

    def _notify(self, identifier: str, record: DeviceRecord) -> None:
        callback = self._callback
        if callback is None:
            return
        try:
            callback(identifier, record)
        except Exception:
            _LOGGER.exception("Update callback failed for %s", record.key)

    async def shutdown(self) -> None:
        """Forget the session; the shared aiohttp session stays open."""

        if self._closed:
            return
        self._closed = True
        self._logged_in = False
        self._callback = None
        _LOGGER.debug("Bridge client for %s shut down", self._host)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    async def _action(self, device_id: str, params: dict[str, Any]) -> None:
        """Send one action request; every failure becomes a CommandError."""

        try:
            await self._request(ACTION_PATH, params=params)
        except SessionExpiredError as err:
            raise CommandError(
                f"Session expired while sending command to {device_id}",
                device_id=device_id,
            ) from err
        except BridgeConnectionError as err:
            raise CommandError(
                f"Command to {device_id} failed: {err}", device_id=device_id
            ) from err

    async def _clima(self, device_id: str, verb: str, value: Any) -> None:
        await self._action(device_id, {"clima": device_id, "act": verb, "val": value})

    async def set_humidity(self, device_id: str, percent: int) -> None:
        await self._clima(device_id, _HUMI_SET, int(percent))

    async def switch_humidifier_mode(self, device_id: str, mode: ClimaMode) -> None:
        await self._clima(device_id, _HUMI_SWITCH_MODE, ClimaMode(mode).value)

    async def toggle_humidifier_status(
        self, device_id: str, status: ClimaOnOff
    ) -> None:
        await self._clima(device_id, _CLIMA_TOGGLE, int(status))

    async def set_temperature(self, device_id: str, tenths: int) -> None:
        await self._clima(device_id, _CLIMA_SET_TEMPERATURE, int(tenths))

    async def switch_thermostat_mode(self, device_id: str, mode: ClimaMode) -> None:
        await self._clima(device_id, _CLIMA_SWITCH_MODE, ClimaMode(mode).value)

    async def toggle_thermostat_status(
        self, device_id: str, status: ClimaOnOff
    ) -> None:
        await self._clima(device_id, _CLIMA_TOGGLE, int(status))

    async def switch_thermostat_season(
        self, device_id: str, season: ThermoSeason
    ) -> None:
        await self._clima(device_id, _CLIMA_SWITCH_SEASON, ThermoSeason(season).value)

    async def toggle_device_status(
        self, category: DeviceCategory, device_id: str, on: bool
    ) -> None:
        page = CATEGORY_PAGES[DeviceCategory(category)]
        await self._action(device_id, {"type": page, f"num{device_id}": int(bool(on))})

    async def set_brightness(self, device_id: str, percent: int) -> None:
        await self._action(
            device_id,
            {
                "type": CATEGORY_PAGES[DeviceCategory.LIGHT],
                f"num{device_id}": 1,
                "lum": max(0, min(100, int(percent))),
            },
        )

    async def move_blind(self, device_id: str, action: BlindAction) -> None:
        await self._action(
            device_id,
            {
                "type": CATEGORY_PAGES[DeviceCategory.BLIND],
                f"num{device_id}": int(action),
            },
        )


__all__ = ["BridgeClient", "ComelitSbClient", "UpdateCallback"]
