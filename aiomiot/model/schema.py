# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Device schema interface.

A device schema declares the properties and capabilities of a device model
and the model specific setup hooks. MiotDevice is constructed with a schema
instance instead of being subclassed per model.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from aiomiot.const import Capability, DeviceType, PropertyAccess, PropertyFormat, PropertyName
from aiomiot.model.property import ValueListEntry

if TYPE_CHECKING:
    from aiomiot.model.device import MiotDevice

__all__ = [
    "DeviceSchema",
    "PropertyDefinition",
]


@dataclass(frozen=True, kw_only=True, slots=True)
class PropertyDefinition:
    """Declaration of one property of a device model."""

    name: PropertyName
    siid: int
    piid: int
    format: PropertyFormat
    access: frozenset[PropertyAccess]
    unit: str | None = None
    value_range: tuple[int | float, ...] | None = None
    value_list: tuple[ValueListEntry, ...] | None = None


class DeviceSchema(ABC):
    """Base class for the schema of a device model."""

    device_type: ClassVar[DeviceType] = DeviceType.UNKNOWN
    models: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def property_definitions(self) -> tuple[PropertyDefinition, ...]:
        """Return the property declarations."""

    @abstractmethod
    def capabilities(self) -> Mapping[Capability, Any]:
        """Return the static capabilities."""

    async def device_specific_setup(self, *, device: MiotDevice) -> None:
        """Run model specific setup after the first transport attach."""

    async def initial_property_fetch_done(self, *, device: MiotDevice) -> None:
        """Run model specific actions after the initial property fetch."""
