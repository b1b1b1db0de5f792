"""Translators for outlets and power supplier meters."""

from __future__ import annotations

from ..codecs.models import OutletPayload, SupplierPayload
from ..domain.commands import DeviceCommand, ToggleDeviceStatus
from ..domain.ids import DeviceCategory
from ..domain.intents import Intent, SetOn
from ..domain.presentation import OutletPresentation, SupplierPresentation
from ..domain.records import DeviceRecord, ObjectStatus
from .base import StateTranslator, load_payload


class OutletTranslator(StateTranslator[OutletPresentation]):
    """Switchable outlets with an instant power reading."""

    category = DeviceCategory.OUTLET
    kind = "outlet"

    def derive_state(self, record: DeviceRecord) -> OutletPresentation:
        payload = load_payload(OutletPayload, record)
        power = payload.instant_power
        return OutletPresentation(
            on=payload.status == ObjectStatus.ON.value,
            in_use=power is not None and power > 0,
            power=power,
        )

    def build_command(self, record: DeviceRecord, intent: Intent) -> DeviceCommand:
        if isinstance(intent, SetOn):
            return ToggleDeviceStatus(record.identifier, self.category, intent.on)
        self._unsupported(intent)


class PowerSupplierTranslator(StateTranslator[SupplierPresentation]):
    """Read-only power meters."""

    category = DeviceCategory.SUPPLIER
    kind = "supplier"

    def derive_state(self, record: DeviceRecord) -> SupplierPresentation:
        payload = load_payload(SupplierPayload, record)
        return SupplierPresentation(power=payload.instant_power)

    def build_command(self, record: DeviceRecord, intent: Intent) -> DeviceCommand:
        """Suppliers accept no commands."""

        self._unsupported(intent)
