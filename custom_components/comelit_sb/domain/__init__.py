"""Domain-layer primitives for the Comelit Serial Bridge integration."""

from .commands import (
    AlarmCommand,
    ArmAlarm,
    DeviceCommand,
    DisarmAlarm,
    MoveBlind,
    SetBrightness,
    SetHumidity,
    SetTemperature,
    SwitchHumidifierMode,
    SwitchThermostatMode,
    SwitchThermostatSeason,
    ToggleDeviceStatus,
    ToggleHumidifierStatus,
    ToggleThermostatStatus,
)
from .ids import INDEX_CATEGORIES, DeviceCategory, DeviceKey, normalize_category
from .presentation import (
    Active,
    AlarmPresentation,
    AlarmState,
    BlindPresentation,
    CurrentHumidifierState,
    HeatingCoolingState,
    HumidifierPresentation,
    LightPresentation,
    OutletPresentation,
    PositionState,
    PresentationState,
    SupplierPresentation,
    TargetHumidifierState,
    ThermostatPresentation,
    ZonePresentation,
)
from .records import (
    BlindAction,
    BlindStatus,
    ClimaMode,
    ClimaOnOff,
    DeviceIndex,
    DeviceRecord,
    ObjectStatus,
    ThermoSeason,
)

__all__ = [
    "INDEX_CATEGORIES",
    "Active",
    "AlarmCommand",
    "AlarmPresentation",
    "AlarmState",
    "ArmAlarm",
    "BlindAction",
    "BlindPresentation",
    "BlindStatus",
    "ClimaMode",
    "ClimaOnOff",
    "CurrentHumidifierState",
    "DeviceCategory",
    "DeviceCommand",
    "DeviceIndex",
    "DeviceKey",
    "DeviceRecord",
    "DisarmAlarm",
    "HeatingCoolingState",
    "HumidifierPresentation",
    "LightPresentation",
    "MoveBlind",
    "ObjectStatus",
    "OutletPresentation",
    "PositionState",
    "PresentationState",
    "SetBrightness",
    "SetHumidity",
    "SetTemperature",
    "SupplierPresentation",
    "SwitchHumidifierMode",
    "SwitchThermostatMode",
    "SwitchThermostatSeason",
    "TargetHumidifierState",
    "ThermoSeason",
    "ThermostatPresentation",
    "ToggleDeviceStatus",
    "ToggleHumidifierStatus",
    "ToggleThermostatStatus",
    "ZonePresentation",
    "normalize_category",
]
