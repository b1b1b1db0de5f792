"""Sanitisation helpers for log and diagnostics output."""

from __future__ import annotations

import re

_SESSION_QUERY_RE = re.compile(r"(?i)(sid|session|code|pin)=([^&\s]+)")
_COOKIE_RE = re.compile(r"(?i)(cookie:\s*)([^\s;]+)")


def redact_text(value: str | None) -> str:
    """Return ``value`` with session ids and access codes removed."""

    if not value:
        return ""
    redacted = _SESSION_QUERY_RE.sub(lambda match: f"{match.group(1)}=***", str(value))
    return _COOKIE_RE.sub(lambda match: f"{match.group(1)}***", redacted)


def mask_identifier(value: str | None) -> str:
    """Return a masked identifier suitable for log output."""

    if value is None:
        return ""
    trimmed = str(value).strip()
    if not trimmed:
        return ""
    if len(trimmed) <= 4:
        return "***"
    if len(trimmed) <= 8:
        return f"{trimmed[:2]}...{trimmed[-2:]}"
    return f"{trimmed[:6]}...{trimmed[-4:]}"
