# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Schema of the deerma humidifiers."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any, ClassVar, Final

from aiomiot.const import (
    READ_ONLY,
    READ_WRITE,
    Capability,
    DeviceType,
    PropertyFormat,
    PropertyName,
    PropertyUnit,
)
from aiomiot.model.devices.registry import DeviceRegistry
from aiomiot.model.property import ValueListEntry
from aiomiot.model.schema import DeviceSchema, PropertyDefinition

if TYPE_CHECKING:
    from aiomiot.model.device import MiotDevice

_LOGGER: Final = logging.getLogger(__name__)

_PROPERTY_DEFINITIONS: Final = (
    PropertyDefinition(name=PropertyName.POWER, siid=2, piid=1, format=PropertyFormat.BOOL, access=READ_WRITE),
    PropertyDefinition(
        name=PropertyName.STATUS,
        siid=2,
        piid=2,
        format=PropertyFormat.UINT8,
        access=READ_ONLY,
        value_list=(
            ValueListEntry(value=0, description="No Faults"),
            ValueListEntry(value=1, description="Insufficient Water"),
            ValueListEntry(value=2, description="Water Separation"),
        ),
    ),
    PropertyDefinition(
        name=PropertyName.MODE,
        siid=2,
        piid=5,
        format=PropertyFormat.UINT8,
        access=READ_WRITE,
        value_list=(
            ValueListEntry(value=1, description="Level1"),
            ValueListEntry(value=2, description="Level2"),
            ValueListEntry(value=3, description="Level3"),
            ValueListEntry(value=4, description="Humidity"),
        ),
    ),
    PropertyDefinition(
        name=PropertyName.TARGET_HUMIDITY,
        siid=2,
        piid=6,
        format=PropertyFormat.UINT8,
        access=READ_WRITE,
        unit=PropertyUnit.PERCENTAGE,
        value_range=(40, 70, 1),
    ),
    PropertyDefinition(
        name=PropertyName.RELATIVE_HUMIDITY,
        siid=3,
        piid=1,
        format=PropertyFormat.UINT8,
        access=READ_ONLY,
        unit=PropertyUnit.PERCENTAGE,
        value_range=(0, 100, 1),
    ),
    PropertyDefinition(
        name=PropertyName.TEMPERATURE,
        siid=3,
        piid=7,
        format=PropertyFormat.FLOAT,
        access=READ_ONLY,
        unit=PropertyUnit.CELSIUS,
        value_range=(-40, 125, 1),
    ),
    PropertyDefinition(name=PropertyName.BUZZER, siid=5, piid=1, format=PropertyFormat.BOOL, access=READ_WRITE),
    PropertyDefinition(name=PropertyName.LED, siid=6, piid=1, format=PropertyFormat.BOOL, access=READ_WRITE),
    PropertyDefinition(
        name=PropertyName.WATER_SHORTAGE_FAULT, siid=7, piid=1, format=PropertyFormat.BOOL, access=READ_ONLY
    ),
)


class HumidifierSchema(DeviceSchema):
    """Evaporative humidifier with modes and a target humidity."""

    device_type: ClassVar[DeviceType] = DeviceType.HUMIDIFIER
    models: ClassVar[tuple[str, ...]] = ("deerma.humidifier.jsq", "deerma.humidifier.jsq1")

    def property_definitions(self) -> tuple[PropertyDefinition, ...]:
        """Return the property declarations."""
        return _PROPERTY_DEFINITIONS

    def capabilities(self) -> Mapping[Capability, Any]:
        """Return the static capabilities."""
        return {}

    async def initial_property_fetch_done(self, *, device: MiotDevice) -> None:
        """Warn once if the water tank is empty."""
        if device.get_property_value(name=PropertyName.WATER_SHORTAGE_FAULT):
            _LOGGER.warning("Humidifier %s reports a water shortage", device.name)


DeviceRegistry.register(schema_class=HumidifierSchema)
