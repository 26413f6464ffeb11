# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Presentation primitives of an accessory.

An Accessory holds AccessoryServices, which hold Characteristics. A
characteristic has an optional getter the host calls to read the current
value, an optional setter the host calls on user input, and a cached value
pushed with update_value(). Hosts subscribe to a characteristic to be told
about pushed values.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import IntEnum, StrEnum
import inspect
import logging
from typing import Any, Final, TypeAlias

from slugify import slugify

from aiomiot import i18n
from aiomiot.exceptions import BaseMiotException

_LOGGER: Final = logging.getLogger(__name__)

CharacteristicGetter: TypeAlias = Callable[[], Any]
CharacteristicSetter: TypeAlias = Callable[[Any], Awaitable[None] | None]
CharacteristicHandler: TypeAlias = Callable[[Any], None]


class ServiceType(StrEnum):
    """Enum with the service types of the host platform."""

    FAN = "fan"
    HUMIDIFIER_DEHUMIDIFIER = "humidifier_dehumidifier"
    HUMIDITY_SENSOR = "humidity_sensor"
    LIGHTBULB = "lightbulb"
    SWITCH = "switch"
    TEMPERATURE_SENSOR = "temperature_sensor"


class CharacteristicType(StrEnum):
    """Enum with the characteristic types of the host platform."""

    ACTIVE = "active"
    BRIGHTNESS = "brightness"
    CURRENT_HUMIDIFIER_DEHUMIDIFIER_STATE = "current_humidifier_dehumidifier_state"
    CURRENT_RELATIVE_HUMIDITY = "current_relative_humidity"
    CURRENT_TEMPERATURE = "current_temperature"
    LOCK_PHYSICAL_CONTROLS = "lock_physical_controls"
    ON = "on"
    RELATIVE_HUMIDITY_HUMIDIFIER_THRESHOLD = "relative_humidity_humidifier_threshold"
    ROTATION_SPEED = "rotation_speed"
    STATUS_FAULT = "status_fault"
    STATUS_LOW_BATTERY = "status_low_battery"
    STATUS_TAMPERED = "status_tampered"
    SWING_MODE = "swing_mode"
    TARGET_HUMIDIFIER_DEHUMIDIFIER_STATE = "target_humidifier_dehumidifier_state"


class LockPhysicalControls(IntEnum):
    """Values of the LOCK_PHYSICAL_CONTROLS characteristic."""

    CONTROL_LOCK_DISABLED = 0
    CONTROL_LOCK_ENABLED = 1


class StatusFault(IntEnum):
    """Values of the STATUS_FAULT characteristic."""

    NO_FAULT = 0
    GENERAL_FAULT = 1


class ServiceUnavailableError(BaseMiotException):
    """Raised by characteristic setters when the device is not connected."""

    def __init__(self, *args: Any) -> None:
        """Init the ServiceUnavailableError."""
        super().__init__("ServiceUnavailableError", *args)


class Characteristic:
    """A single value of a service."""

    __slots__ = ("_getter", "_handlers", "_setter", "_type", "_value")

    def __init__(
        self,
        *,
        characteristic_type: CharacteristicType,
        getter: CharacteristicGetter | None = None,
        setter: CharacteristicSetter | None = None,
        value: Any = None,
    ) -> None:
        """Init the characteristic."""
        self._type: Final = characteristic_type
        self._getter: CharacteristicGetter | None = getter
        self._setter: CharacteristicSetter | None = setter
        self._value: Any = value
        self._handlers: Final[list[CharacteristicHandler]] = []

    @property
    def characteristic_type(self) -> CharacteristicType:
        """Return the type."""
        return self._type

    @property
    def value(self) -> Any:
        """Return the last pushed or read value."""
        return self._value

    def get(self) -> Any:
        """Read the value through the getter."""
        if self._getter is not None:
            self._value = self._getter()
        return self._value

    def on_get(self, getter: CharacteristicGetter) -> Characteristic:
        """Register the getter."""
        self._getter = getter
        return self

    def on_set(self, setter: CharacteristicSetter) -> Characteristic:
        """Register the setter."""
        self._setter = setter
        return self

    async def set(self, value: Any) -> None:
        """Handle a value written by the host."""
        if self._setter is None:
            self._value = value
            return
        result = self._setter(value)
        if inspect.isawaitable(result):
            await result
        self._value = value

    def subscribe(self, handler: CharacteristicHandler) -> Callable[[], None]:
        """Subscribe to pushed values and return a callable to unsubscribe."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def update_value(self, value: Any) -> None:
        """Push a value to the host."""
        self._value = value
        for handler in tuple(self._handlers):
            try:
                handler(value)
            except Exception:
                _LOGGER.exception("CHARACTERISTIC: Error in handler for %s", self._type)


class AccessoryService:
    """A group of characteristics presented as one control."""

    __slots__ = ("_characteristics", "_name", "_service_type", "_subtype")

    def __init__(self, *, service_type: ServiceType, name: str, subtype: str | None = None) -> None:
        """Init the service."""
        self._service_type: Final = service_type
        self._name: Final = name
        self._subtype: Final = slugify(subtype or name, separator="_")
        self._characteristics: Final[dict[CharacteristicType, Characteristic]] = {}

    @property
    def characteristics(self) -> tuple[Characteristic, ...]:
        """Return all characteristics."""
        return tuple(self._characteristics.values())

    @property
    def name(self) -> str:
        """Return the name."""
        return self._name

    @property
    def service_type(self) -> ServiceType:
        """Return the service type."""
        return self._service_type

    @property
    def subtype(self) -> str:
        """Return the subtype that tells services of one type apart."""
        return self._subtype

    def add_characteristic(self, characteristic_type: CharacteristicType) -> Characteristic:
        """Add a characteristic, or return the existing one."""
        return self.get_characteristic(characteristic_type)

    def get_characteristic(self, characteristic_type: CharacteristicType) -> Characteristic:
        """Return a characteristic, creating it on first access."""
        if (characteristic := self._characteristics.get(characteristic_type)) is None:
            characteristic = Characteristic(characteristic_type=characteristic_type)
            self._characteristics[characteristic_type] = characteristic
        return characteristic

    def has_characteristic(self, characteristic_type: CharacteristicType) -> bool:
        """Return if the characteristic exists."""
        return characteristic_type in self._characteristics

    def set_characteristic(self, characteristic_type: CharacteristicType, value: Any) -> AccessoryService:
        """Set a static characteristic value."""
        self.get_characteristic(characteristic_type).update_value(value)
        return self


class Accessory:
    """Container of the services the host presents for one device."""

    __slots__ = ("_name", "_services", "_uuid")

    def __init__(self, *, name: str, uuid: str) -> None:
        """Init the accessory."""
        self._name: Final = name
        self._uuid: Final = uuid
        self._services: Final[dict[tuple[ServiceType, str], AccessoryService]] = {}

    @property
    def name(self) -> str:
        """Return the name."""
        return self._name

    @property
    def services(self) -> tuple[AccessoryService, ...]:
        """Return all services."""
        return tuple(self._services.values())

    @property
    def uuid(self) -> str:
        """Return the uuid."""
        return self._uuid

    def add_service(self, service: AccessoryService) -> AccessoryService:
        """Add a service. A service with the same type and subtype is replaced."""
        key = (service.service_type, service.subtype)
        if key in self._services:
            _LOGGER.debug("ACCESSORY: Replacing service %s of %s", service.subtype, self._name)
        self._services[key] = service
        return service

    def get_service(self, *, service_type: ServiceType, subtype: str | None = None) -> AccessoryService | None:
        """Return a service by type and, optionally, subtype."""
        for (stype, ssubtype), service in self._services.items():
            if stype == service_type and (subtype is None or ssubtype == slugify(subtype, separator="_")):
                return service
        return None


def service_unavailable(*, name: str) -> ServiceUnavailableError:
    """Return the error raised by setters of a disconnected accessory."""
    return ServiceUnavailableError(i18n.tr("exception.accessory.service_unavailable", name=name))
