# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
MIoT property.

A property is addressed on the device by the pair (siid, piid). It caches the
last known value and knows how to build the protocol items to read or write
itself. It never talks to the device on its own.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
import logging
from typing import Any, Final

from aiomiot import i18n
from aiomiot.const import (
    INIT_DATETIME,
    INTEGER_FORMATS,
    PropertyAccess,
    PropertyFormat,
    ProtocolField,
)
from aiomiot.exceptions import ValidationException

_LOGGER: Final = logging.getLogger(__name__)

_ZERO_VALUES: Final[dict[PropertyFormat, Any]] = {
    PropertyFormat.BOOL: False,
    PropertyFormat.FLOAT: 0.0,
    PropertyFormat.STRING: "",
}


@dataclass(frozen=True, slots=True)
class ValueListEntry:
    """An allowed value of an enumerated property."""

    value: Any
    description: str = ""


class MiotProperty:
    """Typed descriptor and cached value of one device property."""

    __slots__ = (
        "_access",
        "_format",
        "_modified_at",
        "_name",
        "_piid",
        "_refreshed_at",
        "_siid",
        "_unit",
        "_value",
        "_value_list",
        "_value_range",
    )

    def __init__(
        self,
        *,
        name: str,
        siid: int,
        piid: int,
        format: PropertyFormat,  # noqa: A002
        access: Iterable[PropertyAccess],
        unit: str | None = None,
        value_range: Iterable[int | float] | None = None,
        value_list: Iterable[ValueListEntry] | None = None,
    ) -> None:
        """Initialize the property."""
        self._name: Final = name
        self._siid: Final = siid
        self._piid: Final = piid
        self._format: Final = PropertyFormat(format)
        self._access: Final = frozenset(PropertyAccess(a) for a in access)
        self._unit: Final = unit
        self._value_range: Final[tuple[int | float, ...]] = tuple(value_range) if value_range else ()
        self._value_list: Final[tuple[ValueListEntry, ...]] = tuple(value_list) if value_list else ()
        self._value: Any = _ZERO_VALUES.get(self._format, 0)
        self._modified_at: datetime = INIT_DATETIME
        self._refreshed_at: datetime = INIT_DATETIME

    def __repr__(self) -> str:
        """Return the representation."""
        return f"MiotProperty(name={self._name!r}, siid={self._siid}, piid={self._piid}, value={self._value!r})"

    @property
    def access(self) -> frozenset[PropertyAccess]:
        """Return the access flags."""
        return self._access

    @property
    def format(self) -> PropertyFormat:
        """Return the format."""
        return self._format

    @property
    def has_value_list(self) -> bool:
        """Return if the property declares enumerated values."""
        return len(self._value_list) > 0

    @property
    def has_value_range(self) -> bool:
        """Return if the property declares a numeric range."""
        return len(self._value_range) > 1

    @property
    def is_notifiable(self) -> bool:
        """Return if the device pushes changes of the property."""
        return PropertyAccess.NOTIFY in self._access

    @property
    def is_readable(self) -> bool:
        """Return if the property can be read."""
        return PropertyAccess.READ in self._access

    @property
    def is_writable(self) -> bool:
        """Return if the property can be written."""
        return PropertyAccess.WRITE in self._access

    @property
    def max(self) -> int | float | None:
        """Return the upper bound of the range."""
        return self._value_range[1] if self.has_value_range else None

    @property
    def min(self) -> int | float | None:
        """Return the lower bound of the range."""
        return self._value_range[0] if self.has_value_range else None

    @property
    def modified_at(self) -> datetime:
        """Return the last time the value changed."""
        return self._modified_at

    @property
    def name(self) -> str:
        """Return the name."""
        return self._name

    @property
    def piid(self) -> int:
        """Return the property id."""
        return self._piid

    @property
    def refreshed_at(self) -> datetime:
        """Return the last time a value was stored."""
        return self._refreshed_at

    @property
    def safe_value(self) -> Any:
        """Return the value, or 0 when there is none."""
        return 0 if self._value is None else self._value

    @property
    def siid(self) -> int:
        """Return the service id."""
        return self._siid

    @property
    def step(self) -> int | float | None:
        """Return the step of the range."""
        return self._value_range[2] if len(self._value_range) > 2 else None

    @property
    def unit(self) -> str | None:
        """Return the unit."""
        return self._unit

    @property
    def value(self) -> Any:
        """Return the cached value."""
        return self._value

    @property
    def value_list(self) -> tuple[ValueListEntry, ...]:
        """Return the enumerated values."""
        return self._value_list

    @property
    def value_range(self) -> tuple[int | float, ...]:
        """Return the range as (min, max) or (min, max, step)."""
        return self._value_range

    def convert_value(self, *, value: Any) -> Any:
        """Convert a raw wire value to the declared format."""
        try:
            if self._format == PropertyFormat.BOOL:
                if isinstance(value, str):
                    return value.lower() in ("true", "1", "on")
                return bool(value)
            if self._format in INTEGER_FORMATS:
                if isinstance(value, float) and not value.is_integer():
                    raise ValueError(value)
                return int(value)
            if self._format == PropertyFormat.FLOAT:
                return float(value)
            return str(value)
        except (OverflowError, TypeError, ValueError) as exc:
            raise ValidationException(
                i18n.tr(
                    "exception.property.conversion_failed",
                    value=value,
                    property=self._name,
                    format=self._format,
                )
            ) from exc

    def get_name_value(self) -> dict[str, Any]:
        """Return the name and the cached value."""
        return {"name": self._name, "value": self._value}

    def get_read_protocol_obj(self, *, did: str | None) -> dict[str, Any]:
        """Return the get_properties item for this property."""
        return {
            str(ProtocolField.DID): did,
            str(ProtocolField.SIID): self._siid,
            str(ProtocolField.PIID): self._piid,
        }

    def get_safe_value(self) -> Any:
        """Return the cached value, or 0 when there is none."""
        return self.safe_value

    def get_value(self) -> Any:
        """Return the cached value."""
        return self._value

    def get_write_protocol_obj(self, *, did: str | None, value: Any) -> dict[str, Any]:
        """Return the set_properties item for this property."""
        return {
            str(ProtocolField.DID): did,
            str(ProtocolField.SIID): self._siid,
            str(ProtocolField.PIID): self._piid,
            str(ProtocolField.VALUE): value,
        }

    def set_value(self, *, value: Any) -> None:
        """Overwrite the cached value. The caller is responsible for validation."""
        now = datetime.now()
        if value != self._value:
            self._modified_at = now
        self._refreshed_at = now
        self._value = value
