"""Exception taxonomy shared by the bridge client and the sync engine."""

from __future__ import annotations


class ComelitError(Exception):
    """Base class for Comelit bridge errors."""


class BridgeConnectionError(ComelitError, ConnectionError):
    """The bridge could not be reached or did not answer in time."""


class SessionExpiredError(ComelitError):
    """The bridge rejected the current session."""


class CommandError(ComelitError):
    """A single device command was rejected or could not be delivered."""

    def __init__(self, message: str, *, device_id: str | None = None) -> None:
        """Keep the target device identifier alongside the message."""

        super().__init__(message)
        self.device_id = device_id


class UnknownDeviceError(ComelitError, KeyError):
    """No accessory is registered for the requested device."""

    def __str__(self) -> str:
        """Render without the quoting ``KeyError`` applies."""

        return str(self.args[0]) if self.args else "unknown device"
