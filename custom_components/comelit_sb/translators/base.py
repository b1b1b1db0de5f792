"""Common interface for per-category state translators."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any, ClassVar, Generic, NoReturn, TypeVar

from pydantic import BaseModel, ValidationError

from ..domain.commands import DeviceCommand
from ..domain.ids import DeviceCategory
from ..domain.intents import Intent
from ..domain.presentation import PresentationState
from ..domain.records import DeviceRecord

_LOGGER = logging.getLogger(__name__)

_StateT = TypeVar("_StateT", bound=PresentationState)
_ModelT = TypeVar("_ModelT", bound=BaseModel)


def load_payload(model: type[_ModelT], record: DeviceRecord) -> _ModelT:
    """Validate ``record`` payload with ``model``, falling back to defaults."""

    try:
        return model.model_validate(dict(record.payload))
    except ValidationError:
        _LOGGER.debug(
            "Invalid %s payload for %s; using defaults",
            record.category.value,
            record.key,
            exc_info=True,
        )
        return model.model_construct()


def clamp_percent(value: Any) -> int:
    """Return ``value`` rounded and clamped to 0..100."""

    return max(0, min(100, int(round(float(value)))))


class StateTranslator(ABC, Generic[_StateT]):
    """Translate raw device records to presentation states and commands.

    Translators are pure: every presentation is derived from the record
    passed in and nothing learnt from one record survives to the next.
    Construction-time options (closing time, access code) are the only
    state they carry.
    """

    category: ClassVar[DeviceCategory]
    kind: ClassVar[str]

    @abstractmethod
    def derive_state(self, record: DeviceRecord) -> _StateT:
        """Return the presentation state for ``record``."""

    @abstractmethod
    def build_command(self, record: DeviceRecord, intent: Intent) -> DeviceCommand:
        """Map a user intent to exactly one bridge command."""

    def supports(self, record: DeviceRecord) -> bool:
        """Return True when ``record`` can be represented by this translator."""

        return record.category is self.category

    def _unsupported(self, intent: Intent) -> NoReturn:
        raise ValueError(f"{type(self).__name__} cannot handle {intent!r}")
