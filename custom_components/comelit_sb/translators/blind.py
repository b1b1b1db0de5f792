"""Translator for blinds."""

from __future__ import annotations

from ..codecs.models import BlindPayload
from ..const import DEFAULT_BLIND_CLOSING_TIME
from ..domain.commands import DeviceCommand, MoveBlind
from ..domain.ids import DeviceCategory
from ..domain.intents import Intent, SetTargetPosition, StopBlind
from ..domain.presentation import BlindPresentation, PositionState
from ..domain.records import BlindAction, BlindStatus, DeviceRecord, ObjectStatus
from .base import StateTranslator, clamp_percent, load_payload

FULLY_OPEN = 100
FULLY_CLOSED = 0


class BlindTranslator(StateTranslator[BlindPresentation]):
    """Blinds that only report fully open or fully closed.

    The bridge has no position feedback. Intermediate targets are reached by
    starting a movement and stopping it after ``travel_time`` seconds, which
    the caller schedules.
    """

    category = DeviceCategory.BLIND
    kind = "blind"

    def __init__(self, closing_time: float = DEFAULT_BLIND_CLOSING_TIME) -> None:
        """Store the time a full travel takes, in seconds."""

        if closing_time <= 0:
            raise ValueError("closing_time must be positive")
        self.closing_time = float(closing_time)

    def derive_state(self, record: DeviceRecord) -> BlindPresentation:
        """Return the last known position and the direction of travel."""

        payload = load_payload(BlindPayload, record)
        position = (
            FULLY_OPEN if payload.open_status == ObjectStatus.ON.value else FULLY_CLOSED
        )
        if payload.status == BlindStatus.OPENING.value:
            return BlindPresentation(position, FULLY_OPEN, PositionState.INCREASING)
        if payload.status == BlindStatus.CLOSING.value:
            return BlindPresentation(position, FULLY_CLOSED, PositionState.DECREASING)
        return BlindPresentation(position, position, PositionState.STOPPED)

    def build_command(self, record: DeviceRecord, intent: Intent) -> DeviceCommand:
        """Open, close or stop depending on where the target lies."""

        if isinstance(intent, StopBlind):
            return MoveBlind(record.identifier, BlindAction.STOP)
        if isinstance(intent, SetTargetPosition):
            current = self.derive_state(record).position
            target = clamp_percent(intent.position)
            if target > current:
                action = BlindAction.OPEN
            elif target < current:
                action = BlindAction.CLOSE
            else:
                action = BlindAction.STOP
            return MoveBlind(record.identifier, action)
        self._unsupported(intent)

    def travel_time(self, current: int, target: int) -> float:
        """Seconds needed to move from ``current`` to ``target`` percent."""

        delta = abs(clamp_percent(target) - clamp_percent(current))
        return self.closing_time * delta / 100
