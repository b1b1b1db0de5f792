"""Entity base shared across Comelit platforms."""

from __future__ import annotations

from collections.abc import Callable, Iterator
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.dispatcher import async_dispatcher_connect
from homeassistant.helpers.entity import Entity

from .const import DOMAIN, MANUFACTURER, signal_accessory_update
from .domain.commands import DeviceCommand
from .domain.intents import Intent
from .errors import CommandError

if TYPE_CHECKING:
    from .registry import AccessoryEntry
    from .runtime import BridgeRuntime

_LOGGER = logging.getLogger(__name__)

_StateT = TypeVar("_StateT")

MODEL_NAMES: dict[str, str] = {
    "light": "Light",
    "thermostat": "Thermostat",
    "blind": "Blind",
    "outlet": "Outlet",
    "supplier": "Power supplier",
    "alarm": "Vedo alarm",
}


def require_runtime(hass: HomeAssistant, entry_id: str) -> BridgeRuntime:
    """Return the runtime stored for ``entry_id``."""

    domain_data = hass.data.get(DOMAIN)
    if not isinstance(domain_data, dict) or entry_id not in domain_data:
        raise LookupError(f"Comelit runtime for {entry_id} is unavailable")
    return domain_data[entry_id]


def iter_accessories(runtime: BridgeRuntime, kind: str) -> Iterator[AccessoryEntry]:
    """Yield the accessories of ``runtime`` handled by a translator ``kind``."""

    for accessory in runtime.registry.all():
        if accessory.kind == kind:
            yield accessory


class DispatcherSubscriptionHelper:
    """Manage a dispatcher subscription tied to an entity lifecycle."""

    def __init__(self, owner: Entity) -> None:
        """Initialise the helper for the provided entity."""

        self._owner = owner
        self._unsub: Callable[[], None] | None = None

    def subscribe(
        self,
        hass: HomeAssistant,
        signal: str,
        handler: Callable[[Any], None],
    ) -> None:
        """Subscribe to ``signal`` and register clean-up on removal."""

        self.unsubscribe()
        self._unsub = async_dispatcher_connect(hass, signal, handler)
        self._owner.async_on_remove(self.unsubscribe)

    def unsubscribe(self) -> None:
        """Remove the dispatcher subscription if it exists."""

        unsubscribe = self._unsub
        if unsubscribe is None:
            return
        self._unsub = None
        unsubscribe()

    @property
    def is_connected(self) -> bool:
        """Return True when the dispatcher listener is active."""

        return self._unsub is not None


class ComelitAccessoryEntity(Entity, Generic[_StateT]):
    """Home Assistant entity backed by one accessory entry."""

    _attr_should_poll = False
    _attr_has_entity_name = True
    _attr_name = None

    def __init__(self, entry_id: str, accessory: AccessoryEntry) -> None:
        """Bind the entity to ``accessory`` of config entry ``entry_id``."""

        self._entry_id = entry_id
        self._accessory = accessory
        self._dispatcher = DispatcherSubscriptionHelper(self)
        key = accessory.key
        self._attr_unique_id = f"{entry_id}_{accessory.unique_key}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, f"{entry_id}_{key.unique_key}")},
            name=accessory.name,
            manufacturer=MANUFACTURER,
            model=MODEL_NAMES.get(key.category.value, key.category.value),
        )

    @property
    def accessory(self) -> AccessoryEntry:
        """Return the accessory entry behind this entity."""

        return self._accessory

    @property
    def presentation(self) -> _StateT:
        """Return the presentation derived from the latest record."""

        return self._accessory.presentation  # type: ignore[return-value]

    @property
    def signal(self) -> str:
        """Return the dispatcher signal carrying updates for this accessory."""

        return signal_accessory_update(self._entry_id, self._accessory.unique_key)

    async def async_added_to_hass(self) -> None:
        """Subscribe to presentation updates."""

        await super().async_added_to_hass()
        self._dispatcher.subscribe(self.hass, self.signal, self._handle_presentation)

    @callback
    def _handle_presentation(self, presentation: Any) -> None:
        """Write the new state published for this accessory."""

        _LOGGER.debug("%s: presentation %s", self._accessory.key, presentation)
        self.async_write_ha_state()

    async def async_send_intent(self, intent: Intent) -> DeviceCommand:
        """Apply ``intent`` through the accessory, mapping failures for HA."""

        try:
            return await self._accessory.async_apply(intent)
        except CommandError as err:
            raise HomeAssistantError(str(err)) from err
