"""Async HTTP client for the Comelit Vedo alarm."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import logging
from typing import Any, Protocol

import aiohttp

from .codecs import alarm_record, decode_alarm, is_session_rejected
from .const import (
    DEFAULT_ALARM_PORT,
    HTTP_TIMEOUT,
    VEDO_ACTION_PATH,
    VEDO_ALL_AREAS,
    VEDO_AREA_DESC_PATH,
    VEDO_AREA_STAT_PATH,
    VEDO_LOGIN_PATH,
    VEDO_ZONE_DESC_PATH,
    VEDO_ZONE_STAT_PATH,
)
from .domain.records import DeviceRecord
from .errors import BridgeConnectionError, CommandError, SessionExpiredError
from .sanitize import mask_identifier, redact_text

_LOGGER = logging.getLogger(__name__)

_STATE_PAGES = (
    VEDO_AREA_DESC_PATH,
    VEDO_AREA_STAT_PATH,
    VEDO_ZONE_DESC_PATH,
    VEDO_ZONE_STAT_PATH,
)


class AlarmClient(Protocol):
    """Operations the sync engine needs from an alarm client."""

    async def fetch_state(self) -> DeviceRecord:
        """Return the alarm record with its areas and zones."""

    async def arm(self, code: str, *, total: bool = True) -> None:
        """Arm all areas, totally or partially."""

    async def disarm(self, code: str) -> None:
        """Disarm all areas."""

    async def shutdown(self) -> None:
        """Release the session."""


class VedoClient:
    """Thin async client for the Vedo alarm web interface."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        host: str,
        code: str,
        port: int = DEFAULT_ALARM_PORT,
        *,
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        """Initialise the client; ``code`` opens read sessions."""

        self._session = session
        self._host = host
        self._code = code
        self._base_url = f"http://{host}:{int(port)}"
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._logged_in = False
        self._lock = asyncio.Lock()
        self._closed = False

    def __repr__(self) -> str:
        return f"VedoClient(host={self._host!r}, code='***')"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform a request and return JSON, or text when the body is not JSON."""

        if self._closed:
            raise BridgeConnectionError("Alarm client has been shut down")

        url = f"{self._base_url}{path}"
        _LOGGER.debug("HTTP %s %s", method, url)
        try:
            async with self._session.request(
                method, url, params=params, data=data, timeout=self._timeout
            ) as resp:
                if resp.status in (401, 403):
                    self._logged_in = False
                    raise SessionExpiredError(f"Alarm rejected session ({resp.status})")
                if resp.status >= 400:
                    body = await resp.text()
                    _LOGGER.error(
                        "HTTP error %s %s -> %s; body=%s",
                        method,
                        url,
                        resp.status,
                        redact_text(body)[:200],
                    )
                    raise BridgeConnectionError(
                        f"Alarm returned HTTP {resp.status} for {path}"
                    )
                try:
                    return await resp.json(content_type=None)
                except ValueError:
                    return await resp.text()
        except (SessionExpiredError, BridgeConnectionError):
            raise
        except asyncio.CancelledError:
            raise
        except (aiohttp.ClientError, TimeoutError) as err:
            _LOGGER.debug(
                "Request %s %s failed (sanitized): %s", method, url, redact_text(str(err))
            )
            raise BridgeConnectionError(f"Alarm at {self._host} unreachable") from err

    async def _login(self, code: str) -> None:
        _LOGGER.debug("Vedo login on %s with code %s", self._host, mask_identifier(code))
        raw = await self._request("POST", VEDO_LOGIN_PATH, data={"code": code})
        if is_session_rejected(raw) or (isinstance(raw, str) and raw.strip() == "0"):
            self._logged_in = False
            raise SessionExpiredError("Alarm refused the access code")
        self._logged_in = True

    async def _ensure_session(self) -> None:
        if self._logged_in:
            return
        async with self._lock:
            if not self._logged_in:
                await self._login(self._code)
                _LOGGER.debug("Logged in to Vedo alarm %s", self._host)

    async def _read(self, path: str) -> Any:
        raw = await self._request("GET", path)
        if is_session_rejected(raw):
            self._logged_in = False
            raise SessionExpiredError("Alarm session expired")
        return raw

    async def _read_pages(self) -> list[Any]:
        return [await self._read(path) for path in _STATE_PAGES]

    async def fetch_state(self) -> DeviceRecord:
        """Read areas and zones and return them as one alarm record."""

        await self._ensure_session()
        try:
            pages = await self._read_pages()
        except SessionExpiredError:
            # One retry with a fresh session.
            await self._ensure_session()
            pages = await self._read_pages()
        return alarm_record(decode_alarm(*pages))

    async def _act(self, code: str, params: dict[str, Any]) -> None:
        try:
            await self._login(code)
            await self._request("GET", VEDO_ACTION_PATH, params=params)
        except (BridgeConnectionError, SessionExpiredError) as err:
            raise CommandError(f"Alarm command failed: {err}", device_id="vedo") from err

    async def arm(self, code: str, *, total: bool = True) -> None:
        """Arm every area; ``total`` False arms the partial profile."""

        mode = "tot" if total else "p1"
        _LOGGER.info("Arming Vedo alarm (%s)", "total" if total else "partial")
        await self._act(code, {"force": 1, "vedo": 1, mode: VEDO_ALL_AREAS})

    async def disarm(self, code: str) -> None:
        """Disarm every area."""

        _LOGGER.info("Disarming Vedo alarm")
        await self._act(code, {"force": 1, "vedo": 1, "dis": VEDO_ALL_AREAS})

    async def shutdown(self) -> None:
        """Forget the session; the shared aiohttp session stays open."""

        self._closed = True
        self._logged_in = False


__all__ = ["AlarmClient", "VedoClient"]
