# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Fan accessory."""

from __future__ import annotations

import logging
import math
from typing import Any, ClassVar, Final

from aiomiot.accessory.base import BaseAccessory
from aiomiot.accessory.service import AccessoryService, CharacteristicType, ServiceType
from aiomiot.const import DeviceType

_LOGGER: Final = logging.getLogger(__name__)

_SWING_DISABLED: Final = 0
_SWING_ENABLED: Final = 1


class FanAccessory(BaseAccessory):
    """Presents a fan. Rotation speed maps onto the discrete fan levels."""

    accessory_type: ClassVar[DeviceType] = DeviceType.FAN

    fan_service: AccessoryService | None = None

    def setup_main_accessory_service(self) -> None:
        """Create the fan service."""
        service = AccessoryService(service_type=ServiceType.FAN, name=self.name, subtype="fanService")
        service.get_characteristic(CharacteristicType.ON).on_get(self.is_fan_on).on_set(self.set_fan_on)
        if self.device.supports_fan_levels():
            service.add_characteristic(CharacteristicType.ROTATION_SPEED).on_get(self.get_rotation_speed).on_set(
                self.set_rotation_speed
            )
        if self.device.supports_horizontal_swing():
            service.add_characteristic(CharacteristicType.SWING_MODE).on_get(self.get_swing_mode).on_set(
                self.set_swing_mode
            )
        self.add_child_lock_characteristic(service)
        self.fan_service = self.add_accessory_service(service)

    def setup_additional_accessory_services(self) -> None:
        """Create the optional services of a fan."""
        self.prepare_buzzer_control_service()
        self.prepare_led_control_service()
        self.prepare_shutdown_timer_service()
        self.prepare_mode_control_services()
        self.prepare_fan_level_control_services()
        self.prepare_temperature_service()

    def is_fan_on(self) -> bool:
        """Return the power state."""
        if self.is_device_connected():
            return self.device.is_power_on()
        return False

    async def set_fan_on(self, value: Any) -> None:
        """Switch the fan."""
        self._ensure_connected()
        await self.device.set_power_on(power=bool(value))

    def get_rotation_speed(self) -> int:
        """Return the active fan level as percentage."""
        if not self.is_device_connected() or not self.device.is_power_on():
            return 0
        levels = [level.value for level in self.device.fan_levels()]
        if (current := self.device.get_fan_level()) not in levels:
            return 0
        return round((levels.index(current) + 1) * 100 / len(levels))

    async def set_rotation_speed(self, value: Any) -> None:
        """Select the fan level closest above the percentage. 0 is left to the on characteristic."""
        self._ensure_connected()
        if not (levels := self.device.fan_levels()) or (percentage := float(value)) <= 0:
            return
        index = min(max(math.ceil(percentage * len(levels) / 100), 1), len(levels)) - 1
        _LOGGER.debug("Rotation speed %s%% of %s maps to fan level %s", percentage, self.name, levels[index].value)
        await self.device.turn_on_if_necessary()
        await self.device.set_fan_level(level=levels[index].value)

    def get_swing_mode(self) -> int:
        """Return the oscillation state."""
        if self.is_device_connected() and self.device.is_horizontal_swing_enabled():
            return _SWING_ENABLED
        return _SWING_DISABLED

    async def set_swing_mode(self, value: Any) -> None:
        """Switch oscillation."""
        self._ensure_connected()
        await self.device.set_horizontal_swing(enabled=value == _SWING_ENABLED)

    def update_device_status(self) -> None:
        """Push the current device values to all characteristics."""
        if (service := self.fan_service) is not None:
            service.get_characteristic(CharacteristicType.ON).update_value(self.is_fan_on())
            if service.has_characteristic(CharacteristicType.ROTATION_SPEED):
                service.get_characteristic(CharacteristicType.ROTATION_SPEED).update_value(self.get_rotation_speed())
            if service.has_characteristic(CharacteristicType.SWING_MODE):
                service.get_characteristic(CharacteristicType.SWING_MODE).update_value(self.get_swing_mode())
        super().update_device_status()
