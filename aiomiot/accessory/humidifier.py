# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Humidifier accessory."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, ClassVar

from aiomiot.accessory.base import BaseAccessory
from aiomiot.accessory.service import AccessoryService, CharacteristicType, ServiceType, StatusFault
from aiomiot.const import DeviceType, PropertyName


class HumidifierState(IntEnum):
    """Values of the CURRENT_HUMIDIFIER_DEHUMIDIFIER_STATE characteristic."""

    INACTIVE = 0
    IDLE = 1
    HUMIDIFYING = 2


class HumidifierActive(IntEnum):
    """Values of the ACTIVE characteristic."""

    INACTIVE = 0
    ACTIVE = 1


# The only TARGET_HUMIDIFIER_DEHUMIDIFIER_STATE a plain humidifier supports.
_TARGET_STATE_HUMIDIFIER = 1


class HumidifierAccessory(BaseAccessory):
    """Presents a humidifier."""

    accessory_type: ClassVar[DeviceType] = DeviceType.HUMIDIFIER

    humidifier_service: AccessoryService | None = None

    def setup_main_accessory_service(self) -> None:
        """Create the humidifier service."""
        service = AccessoryService(
            service_type=ServiceType.HUMIDIFIER_DEHUMIDIFIER, name=self.name, subtype="humidifierService"
        )
        service.get_characteristic(CharacteristicType.ACTIVE).on_get(self.get_active).on_set(self.set_active)
        service.get_characteristic(CharacteristicType.CURRENT_HUMIDIFIER_DEHUMIDIFIER_STATE).on_get(
            self.get_current_humidifier_state
        )
        service.set_characteristic(CharacteristicType.TARGET_HUMIDIFIER_DEHUMIDIFIER_STATE, _TARGET_STATE_HUMIDIFIER)
        service.get_characteristic(CharacteristicType.CURRENT_RELATIVE_HUMIDITY).on_get(
            self.get_current_relative_humidity
        )
        if self.device.supports_target_humidity():
            service.add_characteristic(CharacteristicType.RELATIVE_HUMIDITY_HUMIDIFIER_THRESHOLD).on_get(
                self.get_target_humidity
            ).on_set(self.set_target_humidity)
        if self.device.has_property(name=PropertyName.WATER_SHORTAGE_FAULT):
            service.add_characteristic(CharacteristicType.STATUS_FAULT).on_get(self.get_status_fault)
        self.add_child_lock_characteristic(service)
        self.humidifier_service = self.add_accessory_service(service)

    def setup_additional_accessory_services(self) -> None:
        """Create the optional services of a humidifier."""
        self.prepare_buzzer_control_service()
        self.prepare_led_control_service()
        self.prepare_shutdown_timer_service()
        self.prepare_mode_control_services()
        self.prepare_temperature_service()
        self.prepare_relative_humidity_service()

    def get_active(self) -> HumidifierActive:
        """Return the power state."""
        if self.is_device_connected() and self.device.is_power_on():
            return HumidifierActive.ACTIVE
        return HumidifierActive.INACTIVE

    async def set_active(self, value: Any) -> None:
        """Switch the humidifier."""
        self._ensure_connected()
        await self.device.set_power_on(power=value == HumidifierActive.ACTIVE)

    def get_current_humidifier_state(self) -> HumidifierState:
        """Return what the humidifier is doing."""
        if self.is_device_connected() and self.device.is_power_on():
            return HumidifierState.HUMIDIFYING
        return HumidifierState.INACTIVE

    def get_target_humidity(self) -> float:
        """Return the target humidity."""
        if self.is_device_connected():
            return self.device.get_target_humidity()
        return 0

    async def set_target_humidity(self, value: Any) -> None:
        """Set the target humidity."""
        self._ensure_connected()
        await self.device.set_target_humidity(humidity=float(value))

    def get_status_fault(self) -> StatusFault:
        """Return a fault while the water tank is empty."""
        if self.is_device_connected() and self.device.get_property_value(name=PropertyName.WATER_SHORTAGE_FAULT):
            return StatusFault.GENERAL_FAULT
        return StatusFault.NO_FAULT

    def update_device_status(self) -> None:
        """Push the current device values to all characteristics."""
        if (service := self.humidifier_service) is not None:
            service.get_characteristic(CharacteristicType.ACTIVE).update_value(self.get_active())
            service.get_characteristic(CharacteristicType.CURRENT_HUMIDIFIER_DEHUMIDIFIER_STATE).update_value(
                self.get_current_humidifier_state()
            )
            service.get_characteristic(CharacteristicType.CURRENT_RELATIVE_HUMIDITY).update_value(
                self.get_current_relative_humidity()
            )
            if service.has_characteristic(CharacteristicType.RELATIVE_HUMIDITY_HUMIDIFIER_THRESHOLD):
                service.get_characteristic(CharacteristicType.RELATIVE_HUMIDITY_HUMIDIFIER_THRESHOLD).update_value(
                    self.get_target_humidity()
                )
            if service.has_characteristic(CharacteristicType.STATUS_FAULT):
                service.get_characteristic(CharacteristicType.STATUS_FAULT).update_value(self.get_status_fault())
        super().update_device_status()
