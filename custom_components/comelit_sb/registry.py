"""Accessory registry mapping bridge devices to their translators."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import asdict
import logging
from typing import Any

from .const import DEFAULT_BLIND_CLOSING_TIME
from .domain.commands import DeviceCommand
from .domain.ids import DeviceCategory, DeviceKey
from .domain.intents import Intent
from .domain.presentation import PresentationState
from .domain.records import DeviceIndex, DeviceRecord
from .errors import UnknownDeviceError
from .translators import (
    DehumidifierTranslator,
    StateTranslator,
    create_translator,
)

_LOGGER = logging.getLogger(__name__)

Publisher = Callable[["AccessoryEntry"], None]


class AccessoryEntry:
    """One accessory: a device key, its translator and the latest record."""

    def __init__(
        self,
        record: DeviceRecord,
        translator: StateTranslator[Any],
        client: Any,
    ) -> None:
        """Bind ``record`` to ``translator``; commands go through ``client``."""

        self.key = record.key
        self.translator = translator
        self.record = record
        self._client = client

    @property
    def kind(self) -> str:
        """Return the translator kind, e.g. ``"thermostat"`` or ``"dehumidifier"``."""

        return self.translator.kind

    @property
    def name(self) -> str:
        """Return the device name reported by the bridge."""

        return self.record.name

    @property
    def unique_key(self) -> str:
        """Return a key unique across all accessories of a bridge."""

        if self.kind == self.key.category.value:
            return self.key.unique_key
        return f"{self.key.unique_key}_{self.kind}"

    @property
    def presentation(self) -> PresentationState:
        """Return the presentation derived from the latest record."""

        return self.translator.derive_state(self.record)

    def update(self, record: DeviceRecord) -> None:
        """Store ``record`` as the latest state of this accessory."""

        self.record = record

    def build_command(self, intent: Intent) -> DeviceCommand:
        """Return the command ``intent`` maps to for the current record."""

        return self.translator.build_command(self.record, intent)

    async def async_apply(self, intent: Intent) -> DeviceCommand:
        """Send the command for ``intent``.

        Nothing is updated locally; the new state arrives with the next
        inbound update. Client errors propagate to the caller.
        """

        command = self.build_command(intent)
        _LOGGER.debug("%s (%s): sending %r", self.key, self.kind, command)
        await command.async_send(self._client)
        return command

    def __repr__(self) -> str:
        return f"AccessoryEntry(key={self.key!s}, kind={self.kind})"


def _noop_publisher(entry: AccessoryEntry) -> None:
    """Default publisher used until the host subscribes."""


class AccessoryRegistry:
    """Own the accessory entries of one bridge session."""

    def __init__(self, publisher: Publisher | None = None) -> None:
        """Initialise an empty registry."""

        self._entries: list[AccessoryEntry] = []
        self._by_key: dict[DeviceKey, list[AccessoryEntry]] = {}
        self._publisher: Publisher = publisher or _noop_publisher

    @classmethod
    def build(
        cls,
        index: DeviceIndex,
        client: Any,
        *,
        publisher: Publisher | None = None,
        blind_closing_time: float = DEFAULT_BLIND_CLOSING_TIME,
        alarm_enabled: bool = False,
        alarm_code: str | None = None,
        alarm_client: Any = None,
        alarm_record: DeviceRecord | None = None,
    ) -> AccessoryRegistry:
        """Create one entry per device in ``index`` and the optional alarm."""

        registry = cls(publisher)
        for record in index.records():
            try:
                translators = [
                    create_translator(
                        record.category, blind_closing_time=blind_closing_time
                    )
                ]
                if record.category is DeviceCategory.THERMOSTAT:
                    translators.append(
                        create_translator(
                            record.category, kind=DehumidifierTranslator.kind
                        )
                    )
                for translator in translators:
                    if translator.supports(record):
                        registry.add(AccessoryEntry(record, translator, client))
            except Exception:
                _LOGGER.exception("Skipping accessory for %s", record.key)

        if not alarm_enabled:
            _LOGGER.debug("Alarm integration disabled")
        elif not alarm_code:
            _LOGGER.info("Alarm integration enabled but no access code configured")
        elif alarm_client is None or alarm_record is None:
            _LOGGER.warning("Alarm state unavailable; alarm accessory omitted")
        else:
            registry.add(
                AccessoryEntry(
                    alarm_record,
                    create_translator(DeviceCategory.ALARM, alarm_code=alarm_code),
                    alarm_client,
                )
            )

        _LOGGER.info("Accessory registry built: %s", registry.counts())
        return registry

    def set_publisher(self, publisher: Publisher | None) -> None:
        """Replace the callable notified after each dispatched update."""

        self._publisher = publisher or _noop_publisher

    def add(self, entry: AccessoryEntry) -> None:
        """Register ``entry`` under its device key."""

        self._entries.append(entry)
        self._by_key.setdefault(entry.key, []).append(entry)

    def dispatch(self, identifier: str, record: DeviceRecord) -> int:
        """Deliver ``record`` to every entry registered for it.

        Returns the number of entries that accepted the update.
        """

        try:
            key = DeviceKey(record.category, identifier)
            entries = self.entries_for(key)
        except (UnknownDeviceError, ValueError) as err:
            _LOGGER.debug("Ignoring update: %s", err)
            return 0

        delivered = 0
        for entry in entries:
            try:
                entry.update(record)
                self._publisher(entry)
            except Exception:
                _LOGGER.exception("Failed to publish update for %r", entry)
                continue
            delivered += 1
        _LOGGER.debug("%s: update delivered to %d accessories", key, delivered)
        return delivered

    def entries_for(self, key: DeviceKey) -> tuple[AccessoryEntry, ...]:
        """Return every entry registered for ``key``."""

        entries = self._by_key.get(key)
        if not entries:
            raise UnknownDeviceError(f"No accessory registered for {key}")
        return tuple(entries)

    def get(self, key: DeviceKey, kind: str | None = None) -> AccessoryEntry:
        """Return the entry for ``key``, optionally selecting a translator kind."""

        for entry in self.entries_for(key):
            if kind is None or entry.kind == kind:
                return entry
        raise UnknownDeviceError(f"No {kind} accessory registered for {key}")

    def all(self) -> list[AccessoryEntry]:
        """Return every entry in insertion order."""

        return list(self._entries)

    def counts(self) -> dict[str, int]:
        """Return the number of entries per translator kind."""

        counts: dict[str, int] = {}
        for entry in self._entries:
            counts[entry.kind] = counts.get(entry.kind, 0) + 1
        return counts

    def snapshot(self) -> list[dict[str, Any]]:
        """Return presentations of all entries for diagnostics."""

        snapshot: list[dict[str, Any]] = []
        for entry in self._entries:
            item: dict[str, Any] = {
                "key": str(entry.key),
                "kind": entry.kind,
                "name": entry.name,
            }
            try:
                item["presentation"] = asdict(entry.presentation)
            except Exception as err:  # noqa: BLE001 - diagnostics only
                item["error"] = repr(err)
            snapshot.append(item)
        return snapshot

    def __iter__(self) -> Iterator[AccessoryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key
