"""Pydantic models for Comelit Serial Bridge payloads."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def normalise_code(value: Any) -> Any:
    """Render numeric vendor codes as the strings the bridge uses."""

    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


def parse_int(value: Any) -> int | None:
    """Return ``value`` as an integer the way the bridge strings are read."""

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = parse_float(value)
    return None if number is None else int(number)


def parse_float(value: Any) -> float | None:
    """Return ``value`` as a finite float when possible."""

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class LoginResponse(BaseModel):
    """Session status returned by the login page."""

    model_config = ConfigDict(extra="ignore")

    logged: int = 0
    domus: str | None = None


class DescPage(BaseModel):
    """Description page listing the devices of one category."""

    model_config = ConfigDict(extra="ignore")

    num: int = 0
    desc: list[Any] = []
    status: list[Any] = []
    val: list[Any] = []


class StatusPage(BaseModel):
    """Status page carrying the current state of one category."""

    model_config = ConfigDict(extra="ignore")

    logged: int | None = None
    status: list[Any] = []
    val: list[Any] = []


class LightPayload(BaseModel):
    """Light fields."""

    model_config = ConfigDict(extra="allow")

    status: str = "0"
    brightness: int | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalise_status(cls, value: Any) -> Any:
        return normalise_code(value) if value is not None else "0"

    @field_validator("brightness", mode="before")
    @classmethod
    def _coerce_brightness(cls, value: Any) -> Any:
        return parse_int(value)


class ThermostatPayload(BaseModel):
    """Thermostat and humidity controller fields (vendor names)."""

    model_config = ConfigDict(extra="allow")

    status: str | None = None
    temperatura: str | None = None
    soglia_attiva: str | None = None
    auto_man: str | None = None
    est_inv: str | None = None
    umidita: str | None = None
    soglia_attiva_umi: str | None = None
    auto_man_umi: str | None = None

    @field_validator(
        "status",
        "temperatura",
        "soglia_attiva",
        "auto_man",
        "est_inv",
        "umidita",
        "soglia_attiva_umi",
        "auto_man_umi",
        mode="before",
    )
    @classmethod
    def _normalise_codes(cls, value: Any) -> Any:
        return normalise_code(value)


class BlindPayload(BaseModel):
    """Blind fields."""

    model_config = ConfigDict(extra="allow")

    status: str = "0"
    open_status: str = "0"

    @field_validator("status", "open_status", mode="before")
    @classmethod
    def _normalise_codes(cls, value: Any) -> Any:
        return normalise_code(value) if value is not None else "0"


class OutletPayload(BaseModel):
    """Outlet fields."""

    model_config = ConfigDict(extra="allow")

    status: str = "0"
    instant_power: float | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalise_status(cls, value: Any) -> Any:
        return normalise_code(value) if value is not None else "0"

    @field_validator("instant_power", mode="before")
    @classmethod
    def _coerce_power(cls, value: Any) -> Any:
        return parse_float(value)


class SupplierPayload(BaseModel):
    """Power supplier fields."""

    model_config = ConfigDict(extra="allow")

    instant_power: float | None = None

    @field_validator("instant_power", mode="before")
    @classmethod
    def _coerce_power(cls, value: Any) -> Any:
        return parse_float(value)


class AlarmAreaPayload(BaseModel):
    """Status of one alarm area."""

    model_config = ConfigDict(extra="allow")

    index: int
    name: str = ""
    armed: bool = False
    partial: bool = False
    triggered: bool = False


class AlarmZonePayload(BaseModel):
    """Status of one alarm zone."""

    model_config = ConfigDict(extra="allow")

    index: int
    name: str = ""
    open: bool = False
    excluded: bool = False


class AlarmPayload(BaseModel):
    """Alarm panel fields assembled by the alarm client."""

    model_config = ConfigDict(extra="allow")

    areas: list[AlarmAreaPayload] = []
    zones: list[AlarmZonePayload] = []


class VedoDescPage(BaseModel):
    """Area or zone description page of the Vedo alarm."""

    model_config = ConfigDict(extra="ignore")

    logged: int | None = None
    num: int = 0
    description: list[Any] = []


class VedoAreaStatusPage(BaseModel):
    """Area status page; ``armed`` holds 0 (off), 1 (partial) or 2 (total)."""

    model_config = ConfigDict(extra="ignore")

    logged: int | None = None
    armed: list[int] = []
    alarm: list[int] = []

    @field_validator("armed", "alarm", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        return [parse_int(item) or 0 for item in value]


class VedoZoneStatusPage(BaseModel):
    """Zone status page with open and excluded flags."""

    model_config = ConfigDict(extra="ignore")

    logged: int | None = None
    open: list[int] = []
    excluded: list[int] = []

    @field_validator("open", "excluded", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = [part for part in value.split(",") if part.strip()]
        return [parse_int(item) or 0 for item in value]
