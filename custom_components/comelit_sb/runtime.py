"""Session runtime tying the bridge client, registry and keepalive together."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging
from typing import TYPE_CHECKING

from .codecs import alarm_record
from .codecs.models import AlarmPayload
from .config import BridgeConfig
from .domain.records import DeviceIndex, DeviceRecord
from .keepalive import ErrorReporter, KeepaliveScheduler, log_error
from .registry import AccessoryEntry, AccessoryRegistry, Publisher

if TYPE_CHECKING:
    from .api import BridgeClient
    from .vedo import AlarmClient

_LOGGER = logging.getLogger(__name__)


class BridgeRuntime:
    """Own everything a bridge session needs, from login to shutdown."""

    def __init__(
        self,
        config: BridgeConfig,
        client: BridgeClient,
        *,
        alarm_client: AlarmClient | None = None,
        publisher: Publisher | None = None,
        reporter: ErrorReporter | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Store collaborators; nothing touches the network until bootstrap."""

        self.config = config
        self.client = client
        self.alarm_client = alarm_client
        self.index = DeviceIndex()
        self.registry = AccessoryRegistry(publisher)
        self._publisher = publisher
        self._external_reporter = reporter or log_error
        self._loop = loop
        self.keepalive: KeepaliveScheduler | None = None
        self.last_error: BaseException | None = None
        self._alarm_record: DeviceRecord | None = None
        self._shutdown = False

    def report(self, err: BaseException) -> None:
        """Record ``err`` and hand it to the configured error sink."""

        self.last_error = err
        self._external_reporter(err)

    async def async_bootstrap(self) -> list[AccessoryEntry]:
        """Log in, fetch the device index and build the accessories.

        Any failure while logging in or fetching yields an empty list; the
        error is reported and the session stays without keepalive.
        """

        try:
            if not await self.client.login():
                _LOGGER.warning("Bridge %s refused login", self.config.host)
                return []
            self.index = await self.client.fetch_index()
        except Exception as err:  # noqa: BLE001 - bootstrap never raises
            self.report(err)
            return []

        alarm = await self._async_fetch_alarm()
        self.registry = AccessoryRegistry.build(
            self.index,
            self.client,
            publisher=self._publisher,
            blind_closing_time=self.config.blind_closing_time,
            alarm_enabled=self.config.alarm_enabled,
            alarm_code=self.config.alarm_code,
            alarm_client=self.alarm_client,
            alarm_record=alarm,
        )
        self.client.set_update_callback(self.registry.dispatch)

        self.keepalive = KeepaliveScheduler(
            self.async_refresh,
            self.config.refresh_rate,
            loop=self._loop,
            reporter=self.report,
        )
        self.keepalive.start()
        return self.registry.all()

    async def _async_fetch_alarm(self) -> DeviceRecord | None:
        if (
            self.alarm_client is None
            or not self.config.alarm_enabled
            or not self.config.alarm_code
        ):
            return None
        try:
            self._alarm_record = await self.alarm_client.fetch_state()
        except Exception as err:  # noqa: BLE001 - alarm is optional
            self.report(err)
            _LOGGER.warning(
                "Alarm state unavailable at startup; polling continues on refresh"
            )
            self._alarm_record = alarm_record(AlarmPayload())
        return self._alarm_record

    async def async_refresh(self) -> None:
        """Keepalive callback: refresh the bridge, then poll the alarm."""

        await self.client.refresh(self.index)
        if self.alarm_client is None or self._alarm_record is None:
            return
        record = await self.alarm_client.fetch_state()
        if record.payload != self._alarm_record.payload:
            self._alarm_record = record
            self.registry.dispatch(record.identifier, record)

    def set_publisher(self, publisher: Publisher | None) -> None:
        """Route presentation updates to ``publisher``."""

        self._publisher = publisher
        self.registry.set_publisher(publisher)

    async def async_shutdown(self) -> None:
        """Stop the keepalive and release the clients; safe to call twice."""

        if self._shutdown:
            return
        self._shutdown = True
        if self.keepalive is not None:
            self.keepalive.shutdown()
        closers: list[Callable[[], object]] = [self.client.shutdown]
        if self.alarm_client is not None:
            closers.append(self.alarm_client.shutdown)
        for close in closers:
            try:
                result = close()
                if asyncio.iscoroutine(result):
                    await result
            except Exception:  # noqa: BLE001 - shutdown must finish
                _LOGGER.debug("Error while shutting down a client", exc_info=True)
        _LOGGER.info("Bridge runtime for %s shut down", self.config.host)
