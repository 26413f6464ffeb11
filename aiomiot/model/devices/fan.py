# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Schema of the dmaker standing fans."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Final

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

_PROPERTY_DEFINITIONS: Final = (
    PropertyDefinition(name=PropertyName.POWER, siid=2, piid=1, format=PropertyFormat.BOOL, access=READ_WRITE),
    PropertyDefinition(
        name=PropertyName.FAN_LEVEL,
        siid=2,
        piid=2,
        format=PropertyFormat.UINT8,
        access=READ_WRITE,
        value_range=(1, 4, 1),
        value_list=(
            ValueListEntry(value=1, description="Level1"),
            ValueListEntry(value=2, description="Level2"),
            ValueListEntry(value=3, description="Level3"),
            ValueListEntry(value=4, description="Level4"),
        ),
    ),
    PropertyDefinition(
        name=PropertyName.MODE,
        siid=2,
        piid=4,
        format=PropertyFormat.UINT8,
        access=READ_WRITE,
        value_list=(
            ValueListEntry(value=0, description="Straight Wind"),
            ValueListEntry(value=1, description="Sleep"),
        ),
    ),
    PropertyDefinition(
        name=PropertyName.HORIZONTAL_SWING, siid=2, piid=5, format=PropertyFormat.BOOL, access=READ_WRITE
    ),
    PropertyDefinition(
        name=PropertyName.STATUS,
        siid=2,
        piid=7,
        format=PropertyFormat.UINT8,
        access=READ_ONLY,
        value_list=(
            ValueListEntry(value=0, description="Idle"),
            ValueListEntry(value=1, description="Busy"),
        ),
    ),
    PropertyDefinition(
        name=PropertyName.POWER_OFF_TIME,
        siid=2,
        piid=8,
        format=PropertyFormat.UINT16,
        access=READ_WRITE,
        unit=PropertyUnit.MINUTES,
        value_range=(0, 480, 1),
    ),
    PropertyDefinition(name=PropertyName.BUZZER, siid=2, piid=11, format=PropertyFormat.BOOL, access=READ_WRITE),
    PropertyDefinition(name=PropertyName.LED, siid=2, piid=12, format=PropertyFormat.BOOL, access=READ_WRITE),
    PropertyDefinition(name=PropertyName.CHILD_LOCK, siid=3, piid=1, format=PropertyFormat.BOOL, access=READ_WRITE),
)


class FanSchema(DeviceSchema):
    """Standing fan with fan levels, modes and a shutdown timer."""

    device_type: ClassVar[DeviceType] = DeviceType.FAN
    models: ClassVar[tuple[str, ...]] = ("dmaker.fan.p9", "dmaker.fan.p10", "dmaker.fan.p11")

    def property_definitions(self) -> tuple[PropertyDefinition, ...]:
        """Return the property declarations."""
        return _PROPERTY_DEFINITIONS

    def capabilities(self) -> Mapping[Capability, Any]:
        """Return the static capabilities."""
        return {Capability.POWER_OFF_TIMER_UNIT: PropertyUnit.MINUTES}


DeviceRegistry.register(schema_class=FanSchema)
