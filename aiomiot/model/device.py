# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
MIoT device.

MiotDevice owns the property and capability registries of one appliance,
the transport handle and the binding lifecycle. It encodes reads and writes
through MiotProperty, talks to the transport and publishes
PropertyUpdatedEvent on its event bus.

Lifecycle
---------
The registries are filled from the device schema at construction, before any
transport exists. The first update_transport() runs the one-time setup
(device info, device id resolution, schema hook, initial property fetch).
Later attaches only restore connectivity. disconnect_and_destroy() destroys
and drops the transport; every operation targeting the transport then raises
DeviceNotConnectedException.

Error policy
------------
- Connectivity and lookup errors raise before any transport call.
- Single writes, single reads and commands log transport failures at debug
  and return without touching the cache.
- The batch read raises TransportException when the call itself fails. Slots
  with a non-zero code are skipped.
- Out of range values are clamped.

Ordering
--------
Concurrent operations are not ordered against each other. A poll that
completes after a write can overwrite the optimistic value of that write with
the older device value; the next poll corrects it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from datetime import datetime
import logging
from typing import Any, Final

import voluptuous as vol

from aiomiot import i18n
from aiomiot.central.event_bus import EventBus, PropertyUpdatedEvent
from aiomiot.config import DeviceConfig
from aiomiot.const import (
    DEFAULT_SERIALIZE_REQUESTS,
    RESULT_CODE_OK,
    Capability,
    DeviceState,
    DeviceType,
    MiotCommand,
    PropertyAccess,
    PropertyFormat,
    PropertyName,
    PropertyUnit,
    ProtocolField,
)
from aiomiot.exceptions import (
    BaseMiotException,
    DeviceNotConnectedException,
    PropertyAccessException,
    PropertyNotFoundException,
    TransportException,
    ValidationException,
)
from aiomiot.interfaces import TransportProtocol
from aiomiot.model.property import MiotProperty, ValueListEntry
from aiomiot.model.schema import DeviceSchema
from aiomiot.model.state_machine import DeviceStateMachine
from aiomiot.schemas import PROPERTY_DEFINITION_SCHEMA, RESPONSE_ITEM_SCHEMA
from aiomiot.support import clamp_value, extract_exc_args, normalize_device_id, to_json

_LOGGER: Final = logging.getLogger(__name__)

_MINUTES_PER_UNIT: Final[dict[str, float]] = {
    PropertyUnit.HOURS: 60.0,
    PropertyUnit.MINUTES: 1.0,
    PropertyUnit.SECONDS: 1 / 60,
}


class MiotDevice:
    """A MIoT appliance reachable through a transport."""

    __slots__ = (
        "_capabilities",
        "_device_id",
        "_device_info",
        "_event_bus",
        "_model",
        "_name",
        "_properties",
        "_request_lock",
        "_schema",
        "_state_machine",
        "_transport",
    )

    def __init__(
        self,
        *,
        schema: DeviceSchema,
        name: str,
        model: str | None = None,
        device_id: str | None = None,
        event_bus: EventBus | None = None,
        serialize_requests: bool = DEFAULT_SERIALIZE_REQUESTS,
    ) -> None:
        """Initialize the device and register the schema declarations."""
        self._schema: Final = schema
        self._name: Final = name
        self._model: str | None = model
        self._device_id: str | None = normalize_device_id(raw_id=device_id)
        self._event_bus: Final = event_bus or EventBus(enable_event_logging=_LOGGER.isEnabledFor(logging.DEBUG))
        self._state_machine: Final = DeviceStateMachine(device_name=name, event_bus=self._event_bus)
        self._request_lock: Final[asyncio.Lock | None] = asyncio.Lock() if serialize_requests else None
        self._transport: TransportProtocol | None = None
        self._device_info: dict[str, Any] = {}
        self._capabilities: Final[dict[Capability, Any]] = {}
        self._properties: Final[dict[str, MiotProperty]] = {}

        if not self._model:
            _LOGGER.error(i18n.tr("log.device.missing_model", name=name))

        self._init_device()

    @classmethod
    def from_config(cls, *, config: DeviceConfig, schema: DeviceSchema, event_bus: EventBus | None = None) -> MiotDevice:
        """Create a device from a validated configuration."""
        i18n.set_locale(locale=config.locale)
        return cls(
            schema=schema,
            name=config.name,
            model=config.model,
            device_id=config.device_id,
            event_bus=event_bus,
            serialize_requests=config.serialize_requests,
        )

    # -------------------------------------------------------------------------
    # Init
    # -------------------------------------------------------------------------

    def _init_device(self) -> None:
        """Register the properties and capabilities declared by the schema."""
        _LOGGER.info("Initializing device properties of %s", self._name)
        for definition in self._schema.property_definitions():
            self.add_property(
                name=definition.name,
                siid=definition.siid,
                piid=definition.piid,
                format=definition.format,
                access=definition.access,
                unit=definition.unit,
                value_range=definition.value_range,
                value_list=definition.value_list,
            )
        _LOGGER.debug("Device properties: %s", to_json(data=[repr(p) for p in self._properties.values()]))

        _LOGGER.info("Initializing device capabilities of %s", self._name)
        for capability, value in self._schema.capabilities().items():
            self.add_capability(name=capability, value=value)
        _LOGGER.debug("Device capabilities: %s", to_json(data=self._capabilities))

    # -------------------------------------------------------------------------
    # Info
    # -------------------------------------------------------------------------

    @property
    def capabilities(self) -> Mapping[Capability, Any]:
        """Return all capabilities."""
        return self._capabilities

    @property
    def device_id(self) -> str | None:
        """Return the protocol device id."""
        return self._device_id

    @property
    def device_info(self) -> Mapping[str, Any]:
        """Return the info reported by the device during setup."""
        return self._device_info

    @property
    def device_type(self) -> DeviceType:
        """Return the device type of the schema."""
        return self._schema.device_type

    @property
    def event_bus(self) -> EventBus:
        """Return the event bus of the device."""
        return self._event_bus

    @property
    def is_connected(self) -> bool:
        """Return if a transport is bound."""
        return self._state_machine.is_bound

    @property
    def is_ready(self) -> bool:
        """Return if the device is bound and set up."""
        return self._state_machine.is_ready

    @property
    def model(self) -> str | None:
        """Return the model, preferring the one reported by the transport."""
        if self._transport is not None and (model := self._transport.model):
            return model
        return self._model

    @property
    def name(self) -> str:
        """Return the name."""
        return self._name

    @property
    def properties(self) -> Mapping[str, MiotProperty]:
        """Return all properties."""
        return self._properties

    @property
    def state(self) -> DeviceState:
        """Return the connection state."""
        return self._state_machine.state

    def get_all_prop_name_values(self) -> list[dict[str, Any]]:
        """Return name and value of all readable properties."""
        return [prop.get_name_value() for prop in self._properties.values() if prop.is_readable]

    def get_all_readable_properties(self) -> dict[str, MiotProperty]:
        """Return the readable properties in registry order."""
        return {name: prop for name, prop in self._properties.items() if prop.is_readable}

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def add_capability(self, *, name: Capability, value: Any) -> None:
        """Add a capability."""
        self._capabilities[name] = value

    def add_property(
        self,
        *,
        name: str | None,
        siid: int | None,
        piid: int | None,
        format: PropertyFormat,  # noqa: A002
        access: Iterable[PropertyAccess],
        unit: str | None = None,
        value_range: Iterable[int | float] | None = None,
        value_list: Iterable[ValueListEntry | Mapping[str, Any]] | None = None,
    ) -> MiotProperty | None:
        """Validate a property declaration and register it. Malformed declarations are skipped."""
        if not name:
            _LOGGER.warning(i18n.tr("log.device.add_property.missing_name", device=self._name))
            return None
        if not siid or not piid:
            _LOGGER.warning(i18n.tr("log.device.add_property.missing_ids", device=self._name, property=name))
            return None
        try:
            validated = PROPERTY_DEFINITION_SCHEMA(
                {
                    "name": name,
                    "siid": siid,
                    "piid": piid,
                    "format": format,
                    "access": list(access),
                    "unit": unit,
                    "value_range": list(value_range) if value_range is not None else None,
                    "value_list": [_value_list_entry_to_dict(entry=entry) for entry in value_list]
                    if value_list is not None
                    else None,
                }
            )
        except vol.Invalid as err:
            _LOGGER.warning(
                i18n.tr("log.device.add_property.invalid", device=self._name, property=name, reason=str(err))
            )
            return None

        prop = MiotProperty(
            name=str(validated["name"]),
            siid=validated["siid"],
            piid=validated["piid"],
            format=validated["format"],
            access=validated["access"],
            unit=validated["unit"],
            value_range=validated["value_range"],
            value_list=[ValueListEntry(value=e["value"], description=e["description"]) for e in validated["value_list"]]
            if validated["value_list"]
            else None,
        )
        self._properties[prop.name] = prop
        return prop

    def get_capability(self, *, name: Capability) -> Any:
        """Return the value of a capability or None."""
        return self._capabilities.get(name)

    def has_capability(self, *, name: Capability) -> bool:
        """Return if the device declares the capability."""
        return name in self._capabilities

    def has_property(self, *, name: str) -> bool:
        """Return if the property is registered."""
        return name in self._properties

    # -------------------------------------------------------------------------
    # Property helpers
    # -------------------------------------------------------------------------

    def get_property(self, *, name: str) -> MiotProperty | None:
        """Return the property or None. Logs a warning when it is missing."""
        if (prop := self._properties.get(name)) is not None:
            return prop
        _LOGGER.warning(i18n.tr("log.device.property_not_found", device=self._name, property=name))
        return None

    def get_property_value(self, *, name: str) -> Any:
        """Return the cached value of a property or None."""
        if (prop := self.get_property(name=name)) is not None:
            return prop.value
        return None

    def get_property_value_list(self, *, name: str) -> tuple[ValueListEntry, ...]:
        """Return the enumerated values of a property or an empty tuple."""
        if (prop := self._properties.get(name)) is not None and prop.has_value_list:
            return prop.value_list
        return ()

    def get_property_value_range(self, *, name: str) -> tuple[int | float, ...]:
        """Return the range of a property or an empty tuple."""
        if (prop := self._properties.get(name)) is not None and prop.has_value_range:
            return prop.value_range
        return ()

    def get_safe_property_value(self, *, name: str) -> Any:
        """Return the cached value of a property, or 0 when there is none."""
        if (prop := self.get_property(name=name)) is not None:
            return prop.safe_value
        return 0

    async def set_property_value(self, *, name: str, value: Any) -> bool:
        """
        Clamp the value into the property range and write it when it differs from the cache.

        Returns True when a write was sent and acknowledged.
        """
        if (prop := self.get_property(name=name)) is None:
            return False
        if prop.has_value_range:
            clamped = clamp_value(value=value, value_range=prop.value_range)
            if clamped != value:
                _LOGGER.debug(
                    "Trying to set %s property with an out of range value: %s. Adjusting value to: %s",
                    prop.name,
                    value,
                    clamped,
                )
                value = clamped
        if prop.value == value:
            _LOGGER.debug(
                "Property %s seems to have already the value: %s. Set not needed! Skipping...", prop.name, value
            )
            return False
        return await self.set_property(prop=prop, value=value)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def update_transport(self, *, transport: TransportProtocol) -> None:
        """
        Bind a transport.

        The first attach runs the one-time setup. Later attaches replace the
        transport and skip the setup.
        """
        old_transport = self._transport
        self._transport = transport
        if old_transport is not None and old_transport is not transport:
            old_transport.destroy()

        if self._state_machine.state == DeviceState.BOUND_UNINITIALIZED:
            _LOGGER.debug("Replaced transport of %s during setup", self._name)
            return

        target = self._state_machine.attach_target()
        self._state_machine.transition_to(target=target)
        if target == DeviceState.BOUND_RECONNECTED:
            _LOGGER.info("Reconnected to device %s!", self._name)
            return

        await self._setup_device()
        if self._state_machine.state == DeviceState.BOUND_UNINITIALIZED:
            self._state_machine.transition_to(target=DeviceState.READY)
            _LOGGER.info("Device setup finished! Device %s ready, you can now control your device!", self._name)

    def disconnect_and_destroy(self) -> None:
        """Destroy and drop the transport."""
        if self._transport is not None:
            self._transport.destroy()
        self._transport = None
        if self._state_machine.is_bound:
            self._state_machine.transition_to(target=DeviceState.UNBOUND)

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    async def _setup_device(self) -> None:
        """Run the one-time setup after the first attach."""
        _LOGGER.info("Setting up device %s!", self._name)
        await self._fetch_device_info()

        if not self._device_id and self._transport is not None:
            self._device_id = normalize_device_id(raw_id=self._transport.id)
            _LOGGER.info("No did configured. Got did: %s from device %s!", self._device_id, self._name)

        if not self._device_id:
            # Local control works without a did, only warn.
            _LOGGER.warning(i18n.tr("log.device.missing_did", name=self._name))

        _LOGGER.info("Doing device specific setup of %s", self._name)
        try:
            await self._schema.device_specific_setup(device=self)
        except BaseMiotException as bme:
            _LOGGER.warning("Device specific setup of %s failed: %s", self._name, extract_exc_args(exc=bme))

        await self._do_initial_properties_fetch()

    async def _fetch_device_info(self) -> None:
        """Fetch the device info. Failures are not fatal."""
        if self._device_info or (transport := self._transport) is None:
            return
        _LOGGER.debug("Fetching device info of %s", self._name)
        try:
            info = await self._call(transport=transport, command=MiotCommand.INFO, params=[])
        except BaseMiotException as bme:
            _LOGGER.debug("Could not retrieve device info of %s: %s", self._name, extract_exc_args(exc=bme))
            return
        if isinstance(info, Mapping):
            self._device_info = dict(info)
            _LOGGER.debug("Got device info: %s", to_json(data=self._device_info))

    async def _do_initial_properties_fetch(self) -> None:
        """Fetch all properties once. Failures are logged and swallowed."""
        _LOGGER.info("Doing initial properties fetch of %s", self._name)
        try:
            await self.request_all_properties()
        except BaseMiotException as bme:
            _LOGGER.debug("Error on initial property request of %s! %s", self._name, extract_exc_args(exc=bme))
            return
        _LOGGER.debug("Got initial device properties: %s", to_json(data=self.get_all_prop_name_values()))
        await self._got_initial_properties_from_device()

    async def _got_initial_properties_from_device(self) -> None:
        """Handle the first successful property fetch."""
        if self.supports_use_time_reporting():
            _LOGGER.info("Device %s total use time: %s minutes.", self._name, self.get_use_time())
        try:
            await self._schema.initial_property_fetch_done(device=self)
        except BaseMiotException as bme:
            _LOGGER.warning("Initial property hook of %s failed: %s", self._name, extract_exc_args(exc=bme))

    # -------------------------------------------------------------------------
    # Protocol
    # -------------------------------------------------------------------------

    async def poll_properties(self) -> dict[str, Any]:
        """Poll all readable properties. Called by the host poll loop."""
        if not self.is_connected:
            raise DeviceNotConnectedException(i18n.tr("exception.device.not_connected.poll", name=self._name))
        return await self.request_all_properties()

    async def request_all_properties(self) -> dict[str, Any]:
        """
        Read all readable properties with one batched request.

        Response slot i belongs to readable property i in registry order.
        Returns the values of the slots that succeeded.
        """
        transport = self._require_transport(
            message=i18n.tr("exception.device.not_connected.request_all", name=self._name)
        )
        readable_props = tuple(self.get_all_readable_properties().values())
        if not readable_props:
            return {}
        request = [prop.get_read_protocol_obj(did=self._device_id) for prop in readable_props]
        _LOGGER.debug("Request all properties of %s! RAW: %s", self._name, to_json(data=request))
        result = await self._call(transport=transport, command=MiotCommand.GET_PROPERTIES, params=request)
        if not isinstance(result, list):
            raise TransportException(
                i18n.tr("exception.device.malformed_response", name=self._name, response=to_json(data=result))
            )
        if len(result) != len(readable_props):
            _LOGGER.debug(
                "Response of %s has %i slots for %i requested properties", self._name, len(result), len(readable_props)
            )

        values: dict[str, Any] = {}
        for prop, item in zip(readable_props, result, strict=False):
            old_value = prop.value
            if self._update_property_value_from_device(values=values, prop=prop, item=item) and (
                old_value != prop.value
            ):
                self._publish_property_updated(prop=prop)
        return values

    async def request_property(self, *, prop: MiotProperty | None) -> dict[str, Any]:
        """Read a single property and publish the result."""
        if prop is None:
            raise PropertyNotFoundException(i18n.tr("exception.device.missing_property.read"))
        transport = self._require_transport(
            message=i18n.tr("exception.device.not_connected.request_property", property=prop.name)
        )
        if not prop.is_readable:
            raise PropertyAccessException(i18n.tr("exception.device.property_not_readable", property=prop.name))

        request = prop.get_read_protocol_obj(did=self._device_id)
        _LOGGER.debug("Request %s property! RAW: %s", prop.name, to_json(data=request))
        try:
            result = await self._call(transport=transport, command=MiotCommand.GET_PROPERTIES, params=[request])
        except BaseMiotException as bme:
            _LOGGER.debug("Error while requesting property %s! %s", prop.name, extract_exc_args(exc=bme))
            return {}

        values: dict[str, Any] = {}
        if isinstance(result, list) and result:
            if self._update_property_value_from_device(values=values, prop=prop, item=result[0]):
                self._publish_property_updated(prop=prop)
        _LOGGER.debug("Successfully requested property %s! Result: %s", prop.name, to_json(data=result))
        return values

    async def send_command(self, *, prop: MiotProperty | None, value: Any) -> None:
        """Invoke a command property. Neither the cache nor listeners are touched."""
        if prop is None:
            raise PropertyNotFoundException(i18n.tr("exception.device.missing_property.command"))
        transport = self._require_transport(
            message=i18n.tr("exception.device.not_connected.send_command", property=prop.name, value=value)
        )
        request = prop.get_write_protocol_obj(did=self._device_id, value=value)
        _LOGGER.debug("Send command! RAW: %s", to_json(data=request))
        try:
            result = await self._call(transport=transport, command=MiotCommand.SET_PROPERTIES, params=[request])
        except BaseMiotException as bme:
            _LOGGER.debug(
                "Error while executing command %s with value %s! %s", prop.name, value, extract_exc_args(exc=bme)
            )
            return
        _LOGGER.debug(
            "Successfully send command %s with value %s! Result: %s", prop.name, value, to_json(data=result)
        )

    async def set_property(self, *, prop: MiotProperty | None, value: Any) -> bool:
        """
        Write a single property.

        On success the cache is updated without waiting for a poll and one
        PropertyUpdatedEvent is published. Transport failures are logged and
        leave the cache untouched.
        """
        if prop is None:
            raise PropertyNotFoundException(i18n.tr("exception.device.missing_property.set"))
        transport = self._require_transport(
            message=i18n.tr("exception.device.not_connected.set_property", property=prop.name, value=value)
        )
        if not prop.is_writable:
            raise PropertyAccessException(i18n.tr("exception.device.property_not_writable", property=prop.name))

        request = prop.get_write_protocol_obj(did=self._device_id, value=value)
        _LOGGER.debug("Set %s property request! RAW: %s", prop.name, to_json(data=request))
        try:
            result = await self._call(transport=transport, command=MiotCommand.SET_PROPERTIES, params=[request])
        except BaseMiotException as bme:
            _LOGGER.debug(
                "Error while setting property %s to value %s! %s", prop.name, value, extract_exc_args(exc=bme)
            )
            return False
        if not _is_result_ok(result=result):
            _LOGGER.debug(
                "Device rejected property %s with value %s! Result: %s", prop.name, value, to_json(data=result)
            )
            return False

        _LOGGER.debug(
            "Successfully set property %s to value %s! Result: %s", prop.name, value, to_json(data=result)
        )
        prop.set_value(value=value)
        self._publish_property_updated(prop=prop)
        return True

    async def execute_action(self, *, siid: int, aiid: int, params: Iterable[Any] = ()) -> Any:
        """Invoke a MIoT action and return its result, or None when it failed."""
        transport = self._require_transport(
            message=i18n.tr("exception.device.not_connected.action", siid=siid, aiid=aiid)
        )
        request = {
            str(ProtocolField.DID): self._device_id,
            str(ProtocolField.SIID): siid,
            str(ProtocolField.AIID): aiid,
            str(ProtocolField.IN): list(params),
        }
        _LOGGER.debug("Execute action! RAW: %s", to_json(data=request))
        try:
            result = await self._call(transport=transport, command=MiotCommand.ACTION, params=request)
        except BaseMiotException as bme:
            _LOGGER.debug("Error while executing action %s.%s! %s", siid, aiid, extract_exc_args(exc=bme))
            return None
        _LOGGER.debug("Successfully executed action %s.%s! Result: %s", siid, aiid, to_json(data=result))
        return result

    def _publish_property_updated(self, *, prop: MiotProperty) -> None:
        """Publish a PropertyUpdatedEvent."""
        self._event_bus.publish_sync(
            event=PropertyUpdatedEvent(
                timestamp=datetime.now(),
                device_id=self._device_id,
                device_name=self._name,
                property=prop,
            )
        )

    def _require_transport(self, *, message: str) -> TransportProtocol:
        """Return the bound transport or raise DeviceNotConnectedException."""
        if (transport := self._transport) is None or not self.is_connected:
            raise DeviceNotConnectedException(message)
        return transport

    async def _call(self, *, transport: TransportProtocol, command: MiotCommand, params: Any) -> Any:
        """Call the transport and convert its failures to TransportException."""
        try:
            if self._request_lock is None:
                return await transport.call(str(command), params)
            async with self._request_lock:
                return await transport.call(str(command), params)
        except BaseMiotException:
            raise
        except Exception as exc:
            raise TransportException(
                i18n.tr(
                    "exception.device.transport_failed",
                    command=command,
                    name=self._name,
                    reason=extract_exc_args(exc=exc),
                )
            ) from exc

    def _update_property_value_from_device(self, *, values: dict[str, Any], prop: MiotProperty, item: Any) -> bool:
        """Store the value of one response slot. Returns True if the slot succeeded."""
        try:
            slot = RESPONSE_ITEM_SCHEMA(item)
        except vol.Invalid:
            _LOGGER.debug("Malformed response slot for property %s. Response object: %s", prop.name, to_json(data=item))
            return False
        raw_value = slot.get(str(ProtocolField.VALUE))
        if slot[str(ProtocolField.CODE)] != RESULT_CODE_OK or raw_value is None:
            _LOGGER.debug(
                "Error while parsing response from device for property %s. Response object: %s",
                prop.name,
                to_json(data=item),
            )
            return False
        try:
            value = prop.convert_value(value=raw_value)
        except ValidationException as vex:
            _LOGGER.debug("Skipping property %s: %s", prop.name, extract_exc_args(exc=vex))
            return False
        prop.set_value(value=value)
        values[prop.name] = value
        return True

    # -------------------------------------------------------------------------
    # Features
    # -------------------------------------------------------------------------

    def supports_buzzer_control(self) -> bool:
        """Return if the buzzer can be switched."""
        return self.has_property(name=PropertyName.BUZZER)

    def supports_child_lock(self) -> bool:
        """Return if the child lock can be switched."""
        return self.has_property(name=PropertyName.CHILD_LOCK)

    def supports_fan_levels(self) -> bool:
        """Return if discrete fan levels can be selected."""
        return self.has_property(name=PropertyName.FAN_LEVEL) and len(self.fan_levels()) > 0

    def supports_horizontal_swing(self) -> bool:
        """Return if horizontal oscillation can be switched."""
        return self.has_property(name=PropertyName.HORIZONTAL_SWING)

    def supports_led_control(self) -> bool:
        """Return if the indicator light can be controlled."""
        return self.has_property(name=PropertyName.LED) or self.has_property(name=PropertyName.LED_BRIGHTNESS)

    def supports_led_control_brightness(self) -> bool:
        """Return if the indicator light brightness can be controlled."""
        return self.has_property(name=PropertyName.LED_BRIGHTNESS) or bool(
            self.get_capability(name=Capability.LED_CONTROL_BRIGHTNESS)
        )

    def supports_modes(self) -> bool:
        """Return if the device has selectable modes."""
        return len(self.modes()) > 0

    def supports_power_control(self) -> bool:
        """Return if the device can be switched on and off."""
        return self.has_property(name=PropertyName.POWER)

    def supports_power_off_timer(self) -> bool:
        """Return if a shutdown timer is available."""
        return self.has_property(name=PropertyName.POWER_OFF_TIME)

    def supports_relative_humidity_reporting(self) -> bool:
        """Return if the device reports the relative humidity."""
        return self.has_property(name=PropertyName.RELATIVE_HUMIDITY)

    def supports_target_humidity(self) -> bool:
        """Return if a target humidity can be set."""
        return self.has_property(name=PropertyName.TARGET_HUMIDITY)

    def supports_temperature_reporting(self) -> bool:
        """Return if the device reports the temperature."""
        return self.has_property(name=PropertyName.TEMPERATURE)

    def supports_use_time_reporting(self) -> bool:
        """Return if the device reports its total use time."""
        return self.has_property(name=PropertyName.USE_TIME)

    def fan_levels(self) -> tuple[ValueListEntry, ...]:
        """Return the selectable fan levels."""
        if levels := self.get_capability(name=Capability.FAN_LEVELS):
            return tuple(levels)
        if value_list := self.get_property_value_list(name=PropertyName.FAN_LEVEL):
            return value_list
        if value_range := self.get_property_value_range(name=PropertyName.FAN_LEVEL):
            step = value_range[2] if len(value_range) > 2 else 1
            return tuple(
                ValueListEntry(value=level, description=f"Level {level}")
                for level in range(int(value_range[0]), int(value_range[1]) + 1, int(step))
            )
        return ()

    def modes(self) -> tuple[ValueListEntry, ...]:
        """Return the selectable modes."""
        return self.get_property_value_list(name=PropertyName.MODE)

    def is_power_on(self) -> bool:
        """Return if the device is on."""
        return bool(self.get_property_value(name=PropertyName.POWER))

    def get_mode(self) -> Any:
        """Return the current mode."""
        return self.get_property_value(name=PropertyName.MODE)

    def get_fan_level(self) -> Any:
        """Return the current fan level."""
        return self.get_property_value(name=PropertyName.FAN_LEVEL)

    def is_horizontal_swing_enabled(self) -> bool:
        """Return if horizontal oscillation is on."""
        return bool(self.get_property_value(name=PropertyName.HORIZONTAL_SWING))

    def is_buzzer_enabled(self) -> bool:
        """Return if the buzzer is on."""
        return bool(self.get_property_value(name=PropertyName.BUZZER))

    def is_led_enabled(self) -> bool:
        """Return if the indicator light is on."""
        if self.has_property(name=PropertyName.LED):
            return bool(self.get_property_value(name=PropertyName.LED))
        return self.get_led_value() > 0

    def get_led_value(self) -> int:
        """Return the indicator light brightness."""
        if self.has_property(name=PropertyName.LED_BRIGHTNESS):
            return int(self.get_safe_property_value(name=PropertyName.LED_BRIGHTNESS))
        if self.has_property(name=PropertyName.LED):
            return 100 if self.get_property_value(name=PropertyName.LED) else 0
        return 0

    def is_child_lock_active(self) -> bool:
        """Return if the child lock is on."""
        return bool(self.get_property_value(name=PropertyName.CHILD_LOCK))

    def get_temperature(self) -> float:
        """Return the temperature."""
        return float(self.get_safe_property_value(name=PropertyName.TEMPERATURE))

    def get_relative_humidity(self) -> float:
        """Return the relative humidity."""
        return float(self.get_safe_property_value(name=PropertyName.RELATIVE_HUMIDITY))

    def get_target_humidity(self) -> float:
        """Return the target humidity."""
        return float(self.get_safe_property_value(name=PropertyName.TARGET_HUMIDITY))

    def get_shutdown_timer(self) -> int:
        """Return the remaining time of the shutdown timer in minutes."""
        return round(
            self.get_safe_property_value(name=PropertyName.POWER_OFF_TIME)
            * self._minutes_per_unit(capability=Capability.POWER_OFF_TIMER_UNIT)
        )

    def is_shutdown_timer_enabled(self) -> bool:
        """Return if the shutdown timer is running."""
        return self.get_shutdown_timer() > 0

    def get_use_time(self) -> int:
        """Return the total use time in minutes."""
        return round(
            self.get_safe_property_value(name=PropertyName.USE_TIME)
            * self._minutes_per_unit(capability=Capability.USE_TIME_UNIT)
        )

    async def set_power_on(self, *, power: bool) -> bool:
        """Switch the device on or off."""
        return await self.set_property_value(name=PropertyName.POWER, value=power)

    async def turn_on_if_necessary(self) -> None:
        """Switch the device on if it is off."""
        if not self.is_power_on():
            await self.set_power_on(power=True)

    async def set_mode(self, *, mode: Any) -> bool:
        """Select a mode."""
        return await self.set_property_value(name=PropertyName.MODE, value=mode)

    async def set_fan_level(self, *, level: Any) -> bool:
        """Select a fan level."""
        return await self.set_property_value(name=PropertyName.FAN_LEVEL, value=level)

    async def set_horizontal_swing(self, *, enabled: bool) -> bool:
        """Switch horizontal oscillation."""
        return await self.set_property_value(name=PropertyName.HORIZONTAL_SWING, value=enabled)

    async def set_buzzer_enabled(self, *, enabled: bool) -> bool:
        """Switch the buzzer."""
        return await self.set_property_value(name=PropertyName.BUZZER, value=enabled)

    async def set_led_enabled(self, *, enabled: bool) -> bool:
        """Switch the indicator light."""
        if self.has_property(name=PropertyName.LED):
            return await self.set_property_value(name=PropertyName.LED, value=enabled)
        return await self.set_led_value(value=100 if enabled else 0)

    async def set_led_value(self, *, value: int) -> bool:
        """Set the indicator light brightness."""
        return await self.set_property_value(name=PropertyName.LED_BRIGHTNESS, value=value)

    async def set_child_lock(self, *, active: bool) -> bool:
        """Switch the child lock."""
        return await self.set_property_value(name=PropertyName.CHILD_LOCK, value=active)

    async def set_target_humidity(self, *, humidity: float) -> bool:
        """Set the target humidity."""
        return await self.set_property_value(name=PropertyName.TARGET_HUMIDITY, value=int(humidity))

    async def set_shutdown_timer(self, *, value: int) -> bool:
        """Set the shutdown timer in minutes. 0 disables it."""
        device_value = round(value / self._minutes_per_unit(capability=Capability.POWER_OFF_TIMER_UNIT))
        return await self.set_property_value(name=PropertyName.POWER_OFF_TIME, value=device_value)

    def _minutes_per_unit(self, *, capability: Capability) -> float:
        """Return the minutes of one step of the unit declared by a capability. Minutes by default."""
        unit = self.get_capability(name=capability) or PropertyUnit.MINUTES
        return _MINUTES_PER_UNIT.get(unit, 1.0)


def _is_result_ok(*, result: Any) -> bool:
    """Return False if the first result item carries a non-zero code."""
    if isinstance(result, list) and result and isinstance(first := result[0], Mapping):
        return first.get(str(ProtocolField.CODE), RESULT_CODE_OK) == RESULT_CODE_OK
    return True


def _value_list_entry_to_dict(*, entry: ValueListEntry | Mapping[str, Any]) -> dict[str, Any]:
    """Return a value list entry as mapping for schema validation."""
    if isinstance(entry, ValueListEntry):
        return {"value": entry.value, "description": entry.description}
    return dict(entry)
