"""Payload codecs for the Comelit Serial Bridge and the Vedo alarm."""

from .comelit_codec import (
    CATEGORY_PAGES,
    decode_desc_page,
    decode_status_page,
    payload_from_slot,
)
from .vedo_codec import (
    ALARM_IDENTIFIER,
    ALARM_NAME,
    alarm_record,
    decode_alarm,
    is_session_rejected,
)

__all__ = [
    "ALARM_IDENTIFIER",
    "ALARM_NAME",
    "CATEGORY_PAGES",
    "alarm_record",
    "decode_alarm",
    "decode_desc_page",
    "decode_status_page",
    "is_session_rejected",
    "payload_from_slot",
]
