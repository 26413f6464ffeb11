# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Base accessory adapter.

BaseAccessory binds one MiotDevice to one Accessory. It prepares the
optional services every device type shares and wires their characteristics
to the feature helpers of the device.

Getters return safe defaults while the device is disconnected. Setters raise
ServiceUnavailableError instead, which the host reports as a communication
failure. Mode and fan level switches behave like radio buttons: after a press
they are redrawn from the device state once the button reset timeout elapsed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Callable
import logging
from typing import TYPE_CHECKING, Any, ClassVar, Final

from aiomiot import i18n
from aiomiot.accessory.service import (
    Accessory,
    AccessoryService,
    Characteristic,
    CharacteristicGetter,
    CharacteristicSetter,
    CharacteristicType,
    LockPhysicalControls,
    ServiceType,
    StatusFault,
    service_unavailable,
)
from aiomiot.central.event_bus import PropertyUpdatedEvent
from aiomiot.config import AccessoryConfig
from aiomiot.const import DeviceType

if TYPE_CHECKING:
    from aiomiot.model.device import MiotDevice

_LOGGER: Final = logging.getLogger(__name__)


class BaseAccessory(ABC):
    """Adapter between a device and the services presented by the host."""

    accessory_type: ClassVar[DeviceType] = DeviceType.UNKNOWN

    def __init__(
        self,
        *,
        name: str,
        device: MiotDevice | None,
        uuid: str | None,
        config: AccessoryConfig | None = None,
    ) -> None:
        """Init the accessory. On missing mandatory information accessory stays None."""
        self._name: Final = name
        self._uuid: Final = uuid
        self._device: Final = device
        self._config: Final = config or AccessoryConfig()
        self._accessory: Accessory | None = None
        self._reset_handles: Final[dict[Callable[[], None], asyncio.TimerHandle]] = {}
        self._unsubscribe_callback: Callable[[], None] | None = None

        self.buzzer_service: AccessoryService | None = None
        self.led_service: AccessoryService | None = None
        self.led_brightness_service: AccessoryService | None = None
        self.shutdown_timer_service: AccessoryService | None = None
        self.mode_control_services: list[AccessoryService] = []
        self.fan_level_control_services: list[AccessoryService] = []
        self.temperature_service: AccessoryService | None = None
        self.relative_humidity_service: AccessoryService | None = None
        self.child_lock_characteristic: Characteristic | None = None

        if (reason := self._check_mandatory_information()) is not None:
            _LOGGER.error(reason)
            _LOGGER.error(i18n.tr("log.accessory.create_failed", name=name))
            return

        self._accessory = self.init_accessory()
        self.setup_main_accessory_service()
        self.setup_additional_accessory_services()
        self._unsubscribe_callback = self.device.event_bus.subscribe(
            event_type=PropertyUpdatedEvent,
            event_key=None,
            handler=self._on_property_updated,
        )

    def _check_mandatory_information(self) -> str | None:
        """Return the reason why the accessory cannot be created, if any."""
        if self._device is None:
            return i18n.tr("log.accessory.missing_device", name=self._name)
        if not self._uuid:
            return i18n.tr("log.accessory.missing_uuid", name=self._name)
        if self.accessory_type != self._device.device_type:
            return i18n.tr(
                "log.accessory.type_mismatch",
                accessory_type=self.accessory_type,
                device_type=self._device.device_type,
            )
        return None

    # -------------------------------------------------------------------------
    # Info
    # -------------------------------------------------------------------------

    @property
    def accessory(self) -> Accessory | None:
        """Return the accessory, None if creation failed."""
        return self._accessory

    @property
    def config(self) -> AccessoryConfig:
        """Return the presentation options."""
        return self._config

    @property
    def device(self) -> MiotDevice:
        """Return the device."""
        if self._device is None:
            raise RuntimeError(i18n.tr("log.accessory.missing_device", name=self._name))
        return self._device

    @property
    def is_valid(self) -> bool:
        """Return if the accessory was created."""
        return self._accessory is not None

    @property
    def name(self) -> str:
        """Return the name."""
        return self._name

    @property
    def uuid(self) -> str | None:
        """Return the uuid."""
        return self._uuid

    def is_device_connected(self) -> bool:
        """Return if the device has a transport."""
        return self._device is not None and self._device.is_connected

    def destroy(self) -> None:
        """Unsubscribe from the device and cancel pending switch resets."""
        if self._unsubscribe_callback is not None:
            self._unsubscribe_callback()
            self._unsubscribe_callback = None
        for handle in self._reset_handles.values():
            handle.cancel()
        self._reset_handles.clear()

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def init_accessory(self) -> Accessory:
        """Create the accessory container."""
        return Accessory(name=self._name, uuid=str(self._uuid))

    @abstractmethod
    def setup_main_accessory_service(self) -> None:
        """Create the main service of the device type."""

    def setup_additional_accessory_services(self) -> None:
        """Create the optional services. Subclasses pick what they need."""

    def add_accessory_service(self, service: AccessoryService) -> AccessoryService:
        """Add a service to the accessory."""
        if self._accessory is None:
            raise RuntimeError(i18n.tr("log.accessory.create_failed", name=self._name))
        return self._accessory.add_service(service)

    def prepare_buzzer_control_service(self) -> None:
        """Add the buzzer switch."""
        if self._config.buzzer_control and self.device.supports_buzzer_control():
            self.buzzer_service = self.create_stateful_switch(
                name="Buzzer", subtype="buzzerService", getter=self.is_buzzer_on, setter=self.set_buzzer_on
            )
            self.add_accessory_service(self.buzzer_service)

    def prepare_led_control_service(self) -> None:
        """Add the LED as lightbulb with brightness, or as plain switch."""
        if not self._config.led_control or not self.device.supports_led_control():
            return
        if self.device.supports_led_control_brightness():
            service = AccessoryService(service_type=ServiceType.LIGHTBULB, name="LED", subtype="ledBrightnessService")
            service.get_characteristic(CharacteristicType.ON).on_get(self.is_led_on).on_set(self.set_led_on)
            service.add_characteristic(CharacteristicType.BRIGHTNESS).on_get(self.get_led_brightness).on_set(
                self.set_led_brightness
            )
            self.led_brightness_service = self.add_accessory_service(service)
        else:
            self.led_service = self.create_stateful_switch(
                name="LED", subtype="ledService", getter=self.is_led_on, setter=self.set_led_on
            )
            self.add_accessory_service(self.led_service)

    def prepare_shutdown_timer_service(self) -> None:
        """Add the shutdown timer as lightbulb, brightness being the remaining time."""
        if not self._config.shutdown_timer or not self.device.supports_power_off_timer():
            return
        service = AccessoryService(
            service_type=ServiceType.LIGHTBULB, name="Shutdown timer", subtype="shutdownTimerService"
        )
        service.get_characteristic(CharacteristicType.ON).on_get(self.is_shutdown_timer_on).on_set(
            self.set_shutdown_timer_on
        )
        service.add_characteristic(CharacteristicType.BRIGHTNESS).on_get(self.get_shutdown_timer_brightness).on_set(
            self.set_shutdown_timer_brightness
        )
        self.shutdown_timer_service = self.add_accessory_service(service)

    def prepare_mode_control_services(self) -> None:
        """Add one switch per mode."""
        if not self._config.mode_control or not self.device.supports_modes():
            return
        for mode in self.device.modes():
            mode_value = mode.value
            switch = self.create_stateful_switch(
                name=f"Mode - {mode.description}",
                subtype=f"modeControlService{mode_value}",
                getter=lambda value=mode_value: self.is_mode_switch_on(mode=value),
                setter=lambda state, value=mode_value: self.set_mode_switch_on(state=state, mode=value),
            )
            self.add_accessory_service(switch)
            self.mode_control_services.append(switch)

    def prepare_fan_level_control_services(self) -> None:
        """Add one switch per fan level."""
        if not self._config.fan_level_control or not self.device.supports_fan_levels():
            return
        for fan_level in self.device.fan_levels():
            level_value = fan_level.value
            switch = self.create_stateful_switch(
                name=f"Fan Level - {fan_level.description}",
                subtype=f"fanLevelControlService{level_value}",
                getter=lambda value=level_value: self.is_fan_level_switch_on(level=value),
                setter=lambda state, value=level_value: self.set_fan_level_switch_on(state=state, level=value),
            )
            self.add_accessory_service(switch)
            self.fan_level_control_services.append(switch)

    def prepare_temperature_service(self) -> None:
        """Add the temperature sensor."""
        if self.device.supports_temperature_reporting():
            service = AccessoryService(
                service_type=ServiceType.TEMPERATURE_SENSOR, name="Temperature", subtype="temperatureService"
            )
            _set_sensor_status(service=service)
            service.get_characteristic(CharacteristicType.CURRENT_TEMPERATURE).on_get(self.get_current_temperature)
            self.temperature_service = self.add_accessory_service(service)

    def prepare_relative_humidity_service(self) -> None:
        """Add the humidity sensor."""
        if self.device.supports_relative_humidity_reporting():
            service = AccessoryService(
                service_type=ServiceType.HUMIDITY_SENSOR, name="Humidity", subtype="relativeHumidityService"
            )
            _set_sensor_status(service=service)
            service.get_characteristic(CharacteristicType.CURRENT_RELATIVE_HUMIDITY).on_get(
                self.get_current_relative_humidity
            )
            self.relative_humidity_service = self.add_accessory_service(service)

    def add_child_lock_characteristic(self, service: AccessoryService | None) -> None:
        """Add the child lock to a service."""
        if service is not None and self._config.child_lock_control and self.device.supports_child_lock():
            self.child_lock_characteristic = (
                service.add_characteristic(CharacteristicType.LOCK_PHYSICAL_CONTROLS)
                .on_get(self.get_lock_physical_controls_state)
                .on_set(self.set_lock_physical_controls_state)
            )

    # -------------------------------------------------------------------------
    # Getters and setters
    # -------------------------------------------------------------------------

    def _ensure_connected(self) -> None:
        """Raise ServiceUnavailableError if the device is not connected."""
        if not self.is_device_connected():
            raise service_unavailable(name=self._name)

    def is_buzzer_on(self) -> bool:
        """Return the buzzer state."""
        if self.is_device_connected():
            return self.device.is_buzzer_enabled()
        return False

    async def set_buzzer_on(self, value: Any) -> None:
        """Switch the buzzer."""
        self._ensure_connected()
        await self.device.set_buzzer_enabled(enabled=bool(value))

    def is_led_on(self) -> bool:
        """Return the LED state."""
        if self.is_device_connected():
            return self.device.is_led_enabled()
        return False

    async def set_led_on(self, value: Any) -> None:
        """Switch the LED."""
        self._ensure_connected()
        await self.device.set_led_enabled(enabled=bool(value))

    def get_led_brightness(self) -> int:
        """Return the LED brightness."""
        if self.is_device_connected():
            return self.device.get_led_value()
        return 0

    async def set_led_brightness(self, value: Any) -> None:
        """Set the LED brightness."""
        self._ensure_connected()
        await self.device.set_led_value(value=int(value))

    def is_shutdown_timer_on(self) -> bool:
        """Return if the shutdown timer runs."""
        if self.is_device_connected():
            return self.device.is_shutdown_timer_enabled()
        return False

    async def set_shutdown_timer_on(self, value: Any) -> None:
        """Disable the shutdown timer. Enabling happens through the brightness."""
        self._ensure_connected()
        if not value:
            await self.device.set_shutdown_timer(value=0)

    def get_shutdown_timer_brightness(self) -> int:
        """Return the remaining shutdown time, capped to the brightness range."""
        if self.is_device_connected():
            return min(self.device.get_shutdown_timer(), 100)
        return 0

    async def set_shutdown_timer_brightness(self, value: Any) -> None:
        """Set the shutdown timer."""
        self._ensure_connected()
        await self.device.set_shutdown_timer(value=int(value))

    def is_mode_switch_on(self, *, mode: Any) -> bool:
        """Return if the mode is active."""
        if self.is_device_connected() and self.device.is_power_on():
            return bool(self.device.get_mode() == mode)
        return False

    async def set_mode_switch_on(self, *, state: Any, mode: Any) -> None:
        """Activate a mode. Switching off a mode switch only redraws the switches."""
        self._ensure_connected()
        if state:
            await self.device.turn_on_if_necessary()
            await self.device.set_mode(mode=mode)
        self._schedule_switch_reset(callback=self.update_mode_switches)

    def is_fan_level_switch_on(self, *, level: Any) -> bool:
        """Return if the fan level is active."""
        if self.is_device_connected() and self.device.is_power_on():
            return bool(self.device.get_fan_level() == level)
        return False

    async def set_fan_level_switch_on(self, *, state: Any, level: Any) -> None:
        """Activate a fan level. Switching off a level switch only redraws the switches."""
        self._ensure_connected()
        if state:
            await self.device.turn_on_if_necessary()
            await self.device.set_fan_level(level=level)
        self._schedule_switch_reset(callback=self.update_fan_level_switches)

    def get_current_temperature(self) -> float:
        """Return the temperature."""
        if self.is_device_connected():
            return self.device.get_temperature()
        return 0

    def get_current_relative_humidity(self) -> float:
        """Return the relative humidity."""
        if self.is_device_connected():
            return self.device.get_relative_humidity()
        return 0

    def get_lock_physical_controls_state(self) -> LockPhysicalControls:
        """Return the child lock state."""
        if self.is_device_connected() and self.device.is_child_lock_active():
            return LockPhysicalControls.CONTROL_LOCK_ENABLED
        return LockPhysicalControls.CONTROL_LOCK_DISABLED

    async def set_lock_physical_controls_state(self, value: Any) -> None:
        """Switch the child lock."""
        self._ensure_connected()
        await self.device.set_child_lock(active=value == LockPhysicalControls.CONTROL_LOCK_ENABLED)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def update_device_status(self) -> None:
        """Push the current device values to all characteristics."""
        if self.buzzer_service is not None:
            self.buzzer_service.get_characteristic(CharacteristicType.ON).update_value(self.is_buzzer_on())
        if self.led_service is not None:
            self.led_service.get_characteristic(CharacteristicType.ON).update_value(self.is_led_on())
        if self.led_brightness_service is not None:
            self.led_brightness_service.get_characteristic(CharacteristicType.ON).update_value(self.is_led_on())
            self.led_brightness_service.get_characteristic(CharacteristicType.BRIGHTNESS).update_value(
                self.get_led_brightness()
            )
        if self.shutdown_timer_service is not None:
            self.shutdown_timer_service.get_characteristic(CharacteristicType.ON).update_value(
                self.is_shutdown_timer_on()
            )
            self.shutdown_timer_service.get_characteristic(CharacteristicType.BRIGHTNESS).update_value(
                self.get_shutdown_timer_brightness()
            )
        if self.temperature_service is not None:
            self.temperature_service.get_characteristic(CharacteristicType.CURRENT_TEMPERATURE).update_value(
                self.get_current_temperature()
            )
        if self.relative_humidity_service is not None:
            self.relative_humidity_service.get_characteristic(
                CharacteristicType.CURRENT_RELATIVE_HUMIDITY
            ).update_value(self.get_current_relative_humidity())
        self.update_mode_switches()
        self.update_fan_level_switches()

        if self.child_lock_characteristic is not None:
            self.child_lock_characteristic.update_value(self.get_lock_physical_controls_state())

    def update_mode_switches(self) -> None:
        """Redraw the mode switches from the device state."""
        if not self.mode_control_services:
            return
        current_mode = self.device.get_mode()
        power = self.is_device_connected() and self.device.is_power_on()
        for switch, mode in zip(self.mode_control_services, self.device.modes(), strict=False):
            switch.get_characteristic(CharacteristicType.ON).update_value(power and current_mode == mode.value)

    def update_fan_level_switches(self) -> None:
        """Redraw the fan level switches from the device state."""
        if not self.fan_level_control_services:
            return
        current_level = self.device.get_fan_level()
        power = self.is_device_connected() and self.device.is_power_on()
        for switch, fan_level in zip(self.fan_level_control_services, self.device.fan_levels(), strict=False):
            switch.get_characteristic(CharacteristicType.ON).update_value(power and current_level == fan_level.value)

    def _on_property_updated(self, event: PropertyUpdatedEvent) -> None:
        """Refresh the characteristics when a property of the device changed."""
        if self._device is not None and event.device_name == self._device.name:
            self.update_device_status()

    def _schedule_switch_reset(self, *, callback: Callable[[], None]) -> None:
        """Run callback once the button reset timeout elapsed. A pending reset of the same callback is replaced."""
        if (pending := self._reset_handles.pop(callback, None)) is not None:
            pending.cancel()
        self._reset_handles[callback] = asyncio.get_running_loop().call_later(
            self._config.button_reset_timeout, callback
        )

    # -------------------------------------------------------------------------
    # Switch helpers
    # -------------------------------------------------------------------------

    def create_stateful_switch(
        self,
        *,
        name: str,
        subtype: str,
        getter: CharacteristicGetter,
        setter: CharacteristicSetter,
    ) -> AccessoryService:
        """Return a switch reflecting a device state."""
        switch = AccessoryService(service_type=ServiceType.SWITCH, name=name, subtype=subtype)
        switch.get_characteristic(CharacteristicType.ON).on_get(getter).on_set(setter)
        return switch


def _set_sensor_status(*, service: AccessoryService) -> None:
    """Set the static status characteristics of a sensor service."""
    service.set_characteristic(CharacteristicType.STATUS_FAULT, StatusFault.NO_FAULT).set_characteristic(
        CharacteristicType.STATUS_TAMPERED, 0
    ).set_characteristic(CharacteristicType.STATUS_LOW_BATTERY, 0)
