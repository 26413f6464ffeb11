# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Constants used by aiomiot."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Final

VERSION: Final = "2025.10.0"

DEFAULT_LOCALE: Final = "en"
DEFAULT_POLL_INTERVAL: Final = 15
DEFAULT_SERIALIZE_REQUESTS: Final = True
# Seconds until stateful mode/fan level switches are redrawn after a press.
BUTTON_RESET_TIMEOUT: Final = 0.5
INIT_DATETIME: Final = datetime.strptime("01.01.1970 00:00:00", "%d.%m.%Y %H:%M:%S")

DID_PREFIX: Final = "miio:"
RESULT_CODE_OK: Final = 0


class MiotCommand(StrEnum):
    """Enum with the MIoT protocol commands."""

    ACTION = "action"
    GET_PROPERTIES = "get_properties"
    INFO = "miIO.info"
    SET_PROPERTIES = "set_properties"


class ProtocolField(StrEnum):
    """Enum with the keys of MIoT request and response items."""

    AIID = "aiid"
    CODE = "code"
    DID = "did"
    IN = "in"
    PIID = "piid"
    SIID = "siid"
    VALUE = "value"


class PropertyFormat(StrEnum):
    """Enum with the MIoT property formats."""

    BOOL = "bool"
    FLOAT = "float"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    STRING = "string"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"


INTEGER_FORMATS: Final[frozenset[PropertyFormat]] = frozenset(
    {
        PropertyFormat.INT8,
        PropertyFormat.INT16,
        PropertyFormat.INT32,
        PropertyFormat.UINT8,
        PropertyFormat.UINT16,
        PropertyFormat.UINT32,
    }
)


class PropertyAccess(StrEnum):
    """Enum with the MIoT property access flags."""

    NOTIFY = "notify"
    READ = "read"
    WRITE = "write"


READ_ONLY: Final = frozenset({PropertyAccess.READ, PropertyAccess.NOTIFY})
READ_WRITE: Final = frozenset({PropertyAccess.READ, PropertyAccess.WRITE, PropertyAccess.NOTIFY})
WRITE_ONLY: Final = frozenset({PropertyAccess.WRITE})


class PropertyUnit(StrEnum):
    """Enum with the MIoT property units."""

    CELSIUS = "celsius"
    HOURS = "hours"
    MINUTES = "minutes"
    NONE = "none"
    PERCENTAGE = "percentage"
    SECONDS = "seconds"


class PropertyName(StrEnum):
    """Enum with the property names known to the device schemas."""

    BUZZER = "buzzer"
    CHILD_LOCK = "child_lock"
    FAN_LEVEL = "fan_level"
    HORIZONTAL_SWING = "horizontal_swing"
    LED = "led"
    LED_BRIGHTNESS = "led_brightness"
    MODE = "mode"
    POWER = "power"
    POWER_OFF_TIME = "power_off_time"
    RELATIVE_HUMIDITY = "relative_humidity"
    STATUS = "status"
    TARGET_HUMIDITY = "target_humidity"
    TEMPERATURE = "temperature"
    USE_TIME = "use_time"
    WATER_SHORTAGE_FAULT = "water_shortage_fault"


class Capability(StrEnum):
    """Enum with the static capability entries of a device model."""

    FAN_LEVELS = "fan_levels"
    LED_CONTROL_BRIGHTNESS = "led_control_brightness"
    POWER_OFF_TIMER_UNIT = "power_off_timer_unit"
    USE_TIME_UNIT = "use_time_unit"


class DeviceType(StrEnum):
    """Enum with the device types."""

    FAN = "fan"
    HUMIDIFIER = "humidifier"
    UNKNOWN = "unknown"


class DeviceState(StrEnum):
    """Enum with the connection states of a device."""

    BOUND_RECONNECTED = "bound_reconnected"
    BOUND_UNINITIALIZED = "bound_uninitialized"
    READY = "ready"
    UNBOUND = "unbound"


BOUND_STATES: Final[frozenset[DeviceState]] = frozenset(
    {DeviceState.BOUND_UNINITIALIZED, DeviceState.READY, DeviceState.BOUND_RECONNECTED}
)
