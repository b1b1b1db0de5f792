"""Translator for the Vedo alarm panel."""

from __future__ import annotations

from ..codecs.models import AlarmPayload
from ..domain.commands import ArmAlarm, DeviceCommand, DisarmAlarm
from ..domain.ids import DeviceCategory
from ..domain.intents import Intent, SetAlarmTarget
from ..domain.presentation import AlarmPresentation, AlarmState, ZonePresentation
from ..domain.records import DeviceRecord
from .base import StateTranslator, load_payload


class AlarmTranslator(StateTranslator[AlarmPresentation]):
    """Alarm areas folded into a single security system state."""

    category = DeviceCategory.ALARM
    kind = "alarm"

    def __init__(self, code: str) -> None:
        """Store the access code used for arm and disarm requests."""

        if not code:
            raise ValueError("An alarm access code is required")
        self._code = str(code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code='***')"

    def derive_state(self, record: DeviceRecord) -> AlarmPresentation:
        """Return the panel state; triggered wins over armed, armed over idle."""

        payload = load_payload(AlarmPayload, record)
        areas = payload.areas
        armed = [area for area in areas if area.armed or area.partial]

        if any(area.triggered for area in areas):
            current = AlarmState.ALARM_TRIGGERED
        elif areas and all(area.armed and not area.partial for area in areas):
            current = AlarmState.AWAY_ARM
        elif armed:
            current = AlarmState.STAY_ARM
        else:
            current = AlarmState.DISARMED

        if current is AlarmState.ALARM_TRIGGERED:
            target = AlarmState.AWAY_ARM if armed else AlarmState.DISARMED
        else:
            target = current

        zones = tuple(
            ZonePresentation(
                index=zone.index,
                name=zone.name,
                open=zone.open,
                excluded=zone.excluded,
            )
            for zone in payload.zones
        )
        return AlarmPresentation(current_state=current, target_state=target, zones=zones)

    def build_command(self, record: DeviceRecord, intent: Intent) -> DeviceCommand:
        if isinstance(intent, SetAlarmTarget):
            if intent.state is AlarmState.DISARMED:
                return DisarmAlarm(record.identifier, self._code)
            if intent.state is AlarmState.AWAY_ARM:
                return ArmAlarm(record.identifier, self._code, total=True)
            if intent.state in (AlarmState.STAY_ARM, AlarmState.NIGHT_ARM):
                return ArmAlarm(record.identifier, self._code, total=False)
        self._unsupported(intent)
