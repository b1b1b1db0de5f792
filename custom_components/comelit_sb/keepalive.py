"""Self-rearming keepalive timer for the bridge session."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum
import logging

from .const import DEFAULT_REFRESH_RATE

_LOGGER = logging.getLogger(__name__)

ErrorReporter = Callable[[BaseException], None]


def log_error(err: BaseException) -> None:
    """Default error sink: log the failure with its traceback."""

    _LOGGER.error(
        "Keepalive refresh failed: %s", err, exc_info=(type(err), err, err.__traceback__)
    )


class KeepaliveState(str, Enum):
    """Lifecycle of the keepalive timer."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    RUNNING = "running"
    STOPPED = "stopped"


class KeepaliveScheduler:
    """Run ``refresh`` every ``interval`` seconds until shut down.

    The timer is rearmed only after a refresh settles, so refreshes never
    overlap. A failing refresh is reported and the loop carries on.
    """

    def __init__(
        self,
        refresh: Callable[[], Awaitable[None]],
        interval: float = DEFAULT_REFRESH_RATE,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        """Store the refresh coroutine factory and timing options."""

        if interval <= 0:
            raise ValueError("interval must be positive")
        self._refresh = refresh
        self._interval = float(interval)
        self._loop = loop
        self._reporter: ErrorReporter = reporter or log_error
        self._state = KeepaliveState.IDLE
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[None] | None = None
        self.failures = 0

    @property
    def state(self) -> KeepaliveState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def interval(self) -> float:
        """Return the delay between refreshes in seconds."""

        return self._interval

    def start(self) -> None:
        """Arm the first timer; only valid from the idle state."""

        if self._state is not KeepaliveState.IDLE:
            _LOGGER.debug("Keepalive already started (%s)", self._state.value)
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        _LOGGER.info("Keepalive started; refreshing every %.0f s", self._interval)
        self._arm()

    def _arm(self) -> None:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._state = KeepaliveState.SCHEDULED
        self._handle = self._loop.call_later(self._interval, self._on_timer)

    def _on_timer(self) -> None:
        """Timer callback: hand the refresh over to a tracked task."""

        self._handle = None
        if self._state is KeepaliveState.STOPPED:
            return
        loop = self._loop
        if loop is None:
            _LOGGER.debug("Keepalive timer fired without an event loop")
            return
        task = loop.create_task(self.async_tick())
        self._task = task

        def _finalise(finished: asyncio.Task[None]) -> None:
            if self._task is finished:
                self._task = None

        task.add_done_callback(_finalise)

    async def async_tick(self) -> None:
        """Run one refresh and rearm unless shut down meanwhile."""

        if self._state is KeepaliveState.STOPPED:
            return
        self._state = KeepaliveState.RUNNING
        try:
            await self._refresh()
        except asyncio.CancelledError:
            self._state = KeepaliveState.STOPPED
            raise
        except Exception as err:  # noqa: BLE001 - every failure is reported
            self.failures += 1
            try:
                self._reporter(err)
            except Exception:  # noqa: BLE001 - a broken sink must not stop the loop
                _LOGGER.exception("Keepalive error reporter failed")
        else:
            self.failures = 0
        if self._state is not KeepaliveState.STOPPED:
            self._arm()

    def shutdown(self) -> bool:
        """Stop the loop; return True when a pending timer was cancelled.

        An in-flight refresh is left to finish but will not rearm.
        """

        if self._state is KeepaliveState.STOPPED:
            return False
        self._state = KeepaliveState.STOPPED
        _LOGGER.info("Keepalive stopped")
        handle = self._handle
        self._handle = None
        if handle is None:
            return False
        handle.cancel()
        return True
