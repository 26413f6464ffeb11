# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Tests for aiomiot.model.device."""

from __future__ import annotations

import logging

import pytest

from aiomiot import i18n
from aiomiot.central.event_bus import DeviceStateChangedEvent, EventBus, PropertyUpdatedEvent
from aiomiot.config import DeviceConfig
from aiomiot.const import (
    READ_WRITE,
    Capability,
    DeviceState,
    MiotCommand,
    PropertyAccess,
    PropertyFormat,
    PropertyName,
    PropertyUnit,
)
from aiomiot.exceptions import (
    DeviceNotConnectedException,
    PropertyAccessException,
    PropertyNotFoundException,
    TransportException,
)
from aiomiot.model.device import MiotDevice
from aiomiot.model.property import ValueListEntry

from tests.helper import TEST_DID, TEST_MODEL, TEST_NAME, TEST_TOKEN, FakeTransport, FanTestSchema

# pylint: disable=protected-access


class TestAddProperty:
    """Test property registration."""

    def test_add_property_invalid_format_is_skipped(self, device: MiotDevice, caplog: pytest.LogCaptureFixture) -> None:
        """A declaration with an unknown format is logged and skipped."""
        with caplog.at_level(logging.WARNING):
            result = device.add_property(
                name=PropertyName.LED, siid=6, piid=1, format="complex", access=[PropertyAccess.READ]
            )

        assert result is None
        assert device.has_property(name=PropertyName.LED) is False
        assert any("led" in rec.getMessage() for rec in caplog.records)

    def test_add_property_unknown_name_is_skipped(self, device: MiotDevice) -> None:
        """Property names are restricted to PropertyName."""
        result = device.add_property(
            name="fancy_feature", siid=9, piid=1, format=PropertyFormat.BOOL, access=[PropertyAccess.READ]
        )

        assert result is None
        assert device.has_property(name="fancy_feature") is False

    def test_add_property_valid(self, device: MiotDevice) -> None:
        """A valid declaration is registered with its metadata."""
        prop = device.add_property(
            name=PropertyName.LED_BRIGHTNESS,
            siid=6,
            piid=1,
            format=PropertyFormat.UINT8,
            access=READ_WRITE,
            unit=PropertyUnit.PERCENTAGE,
            value_range=[0, 100, 1],
        )

        assert prop is not None
        assert device.has_property(name=PropertyName.LED_BRIGHTNESS) is True
        assert device.get_property(name=PropertyName.LED_BRIGHTNESS) is prop
        assert prop.value_range == (0, 100, 1)
        assert prop.unit == PropertyUnit.PERCENTAGE

    def test_add_property_value_list_from_mappings(self, device: MiotDevice) -> None:
        """Value lists may be given as mappings."""
        prop = device.add_property(
            name=PropertyName.STATUS,
            siid=2,
            piid=7,
            format=PropertyFormat.UINT8,
            access=[PropertyAccess.READ],
            value_list=[{"value": 0, "description": "Idle"}, {"value": 1}],
        )

        assert prop is not None
        assert prop.value_list == (ValueListEntry(value=0, description="Idle"), ValueListEntry(value=1))

    @pytest.mark.parametrize(
        ("siid", "piid"),
        [
            (None, 1),
            (2, None),
            (0, 1),
            (None, None),
        ],
    )
    def test_add_property_without_ids_is_skipped(self, device: MiotDevice, siid: int | None, piid: int | None) -> None:
        """A declaration without siid or piid never registers the property."""
        result = device.add_property(
            name=PropertyName.LED, siid=siid, piid=piid, format=PropertyFormat.BOOL, access=READ_WRITE
        )

        assert result is None
        assert device.has_property(name=PropertyName.LED) is False

    def test_add_property_without_name_is_skipped(self, device: MiotDevice) -> None:
        """A declaration without name is skipped."""
        count = len(device.properties)
        assert device.add_property(name=None, siid=6, piid=1, format=PropertyFormat.BOOL, access=READ_WRITE) is None
        assert len(device.properties) == count

    def test_schema_declarations_are_registered(self, device: MiotDevice) -> None:
        """The schema fills the registries at construction."""
        assert len(device.properties) == 7
        assert device.has_property(name=PropertyName.POWER) is True
        assert device.capabilities == {}
        assert device.state == DeviceState.UNBOUND
        assert device.is_connected is False


class TestDisconnectedDevice:
    """Test that operations on an unbound device raise before any transport call."""

    @pytest.mark.asyncio
    async def test_execute_action_raises(self, device: MiotDevice) -> None:
        """execute_action needs a transport."""
        with pytest.raises(DeviceNotConnectedException):
            await device.execute_action(siid=2, aiid=1)

    @pytest.mark.asyncio
    async def test_poll_properties_raises_immediately(self, device: MiotDevice, transport: FakeTransport) -> None:
        """Polling a device without transport never calls the transport."""
        with pytest.raises(DeviceNotConnectedException):
            await device.poll_properties()

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_request_all_properties_after_disconnect(
        self, bound_device: MiotDevice, transport: FakeTransport
    ) -> None:
        """After disconnect_and_destroy the batch read raises without a call."""
        bound_device.disconnect_and_destroy()

        with pytest.raises(DeviceNotConnectedException):
            await bound_device.request_all_properties()

        assert transport.destroyed is True
        assert transport.calls == []
        assert bound_device.state == DeviceState.UNBOUND

    @pytest.mark.asyncio
    async def test_request_property_raises(self, device: MiotDevice) -> None:
        """request_property needs a transport."""
        with pytest.raises(DeviceNotConnectedException):
            await device.request_property(prop=device.get_property(name=PropertyName.POWER))

    @pytest.mark.asyncio
    async def test_send_command_raises(self, device: MiotDevice) -> None:
        """send_command needs a transport."""
        with pytest.raises(DeviceNotConnectedException):
            await device.send_command(prop=device.get_property(name=PropertyName.POWER), value=True)

    @pytest.mark.asyncio
    async def test_set_property_raises(self, device: MiotDevice) -> None:
        """set_property needs a transport."""
        with pytest.raises(DeviceNotConnectedException):
            await device.set_property(prop=device.get_property(name=PropertyName.POWER), value=True)

        assert device.get_property_value(name=PropertyName.POWER) is False


class TestSetPropertyValue:
    """Test clamping and idempotent writes."""

    @pytest.mark.asyncio
    async def test_set_above_max_writes_max(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A value above the range is clamped to max."""
        assert await bound_device.set_property_value(name=PropertyName.FAN_LEVEL, value=5) is True

        assert transport.calls_of(command=MiotCommand.SET_PROPERTIES) == [
            [{"did": TEST_DID, "siid": 2, "piid": 2, "value": 3}]
        ]
        assert bound_device.get_property_value(name=PropertyName.FAN_LEVEL) == 3

    @pytest.mark.asyncio
    async def test_set_below_min_writes_min(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A value below the range is clamped to min."""
        await bound_device.set_property_value(name=PropertyName.FAN_LEVEL, value=-7)

        assert transport.calls_of(command=MiotCommand.SET_PROPERTIES) == [
            [{"did": TEST_DID, "siid": 2, "piid": 2, "value": 1}]
        ]

    @pytest.mark.asyncio
    async def test_set_cached_value_is_skipped(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """Writing the cached value issues no call."""
        assert bound_device.get_property_value(name=PropertyName.FAN_LEVEL) == 2

        assert await bound_device.set_property_value(name=PropertyName.FAN_LEVEL, value=2) is False
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_set_clamped_to_cached_value_is_skipped(
        self, bound_device: MiotDevice, transport: FakeTransport
    ) -> None:
        """A value clamped onto the cached value issues no call."""
        await bound_device.set_property_value(name=PropertyName.FAN_LEVEL, value=3)
        transport.calls.clear()

        await bound_device.set_property_value(name=PropertyName.FAN_LEVEL, value=10)

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_set_same_value_twice_writes_once(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """Redundant writes are skipped."""
        await bound_device.set_property_value(name=PropertyName.MODE, value=0)
        await bound_device.set_property_value(name=PropertyName.MODE, value=0)

        assert len(transport.calls_of(command=MiotCommand.SET_PROPERTIES)) == 1

    @pytest.mark.asyncio
    async def test_set_unknown_property(
        self, bound_device: MiotDevice, transport: FakeTransport, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An unknown property logs a warning and is a no-op."""
        with caplog.at_level(logging.WARNING):
            assert await bound_device.set_property_value(name=PropertyName.LED, value=True) is False

        assert transport.calls == []
        assert any("was not found" in rec.getMessage() for rec in caplog.records)


class TestSetProperty:
    """Test single property writes."""

    @pytest.mark.asyncio
    async def test_failed_write_keeps_cache(
        self,
        bound_device: MiotDevice,
        property_events: list[PropertyUpdatedEvent],
        transport: FakeTransport,
    ) -> None:
        """A transport failure leaves the cache unchanged and publishes nothing."""
        transport.fail_commands.add(MiotCommand.SET_PROPERTIES)
        prop = bound_device.get_property(name=PropertyName.POWER)

        assert await bound_device.set_property(prop=prop, value=False) is False

        assert prop.value is True
        assert property_events == []

    @pytest.mark.asyncio
    async def test_rejected_write_keeps_cache(
        self,
        bound_device: MiotDevice,
        property_events: list[PropertyUpdatedEvent],
        transport: FakeTransport,
    ) -> None:
        """A non-zero result code counts as failure."""
        transport.set_codes[(2, 2)] = -4004
        prop = bound_device.get_property(name=PropertyName.FAN_LEVEL)

        assert await bound_device.set_property(prop=prop, value=3) is False

        assert prop.value == 2
        assert property_events == []

    @pytest.mark.asyncio
    async def test_set_missing_property(self, bound_device: MiotDevice) -> None:
        """A None property raises."""
        with pytest.raises(PropertyNotFoundException):
            await bound_device.set_property(prop=None, value=True)

    @pytest.mark.asyncio
    async def test_set_not_writable(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """Writing a read-only property raises before the call."""
        with pytest.raises(PropertyAccessException):
            await bound_device.set_property(prop=bound_device.get_property(name=PropertyName.TEMPERATURE), value=30)

        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_set_power(
        self,
        bound_device: MiotDevice,
        property_events: list[PropertyUpdatedEvent],
        transport: FakeTransport,
    ) -> None:
        """A successful write updates the cache before any poll and notifies once."""
        transport.device_values[(2, 1)] = False
        await bound_device.request_all_properties()
        property_events.clear()
        transport.calls.clear()

        prop = bound_device.get_property(name=PropertyName.POWER)
        assert await bound_device.set_property(prop=prop, value=True) is True

        assert transport.calls == [
            (MiotCommand.SET_PROPERTIES, [{"did": TEST_DID, "siid": 2, "piid": 1, "value": True}])
        ]
        assert prop.value is True
        assert len(property_events) == 1
        assert property_events[0].property is prop
        assert property_events[0].device_id == TEST_DID
        assert property_events[0].device_name == TEST_NAME

    @pytest.mark.asyncio
    async def test_set_write_only_property(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A write-only property is written and cached."""
        await bound_device.set_buzzer_enabled(enabled=True)

        assert transport.calls_of(command=MiotCommand.SET_PROPERTIES) == [
            [{"did": TEST_DID, "siid": 4, "piid": 1, "value": True}]
        ]
        assert bound_device.is_buzzer_enabled() is True


class TestRequestAllProperties:
    """Test the batched read."""

    @pytest.mark.asyncio
    async def test_changed_values_notify(
        self,
        bound_device: MiotDevice,
        property_events: list[PropertyUpdatedEvent],
        transport: FakeTransport,
    ) -> None:
        """Only properties whose value changed are published."""
        await bound_device.request_all_properties()
        assert property_events == []

        transport.device_values[(2, 1)] = False
        await bound_device.request_all_properties()

        assert [event.property.name for event in property_events] == [PropertyName.POWER]

    @pytest.mark.asyncio
    async def test_error_slot_keeps_cache(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A slot with non-zero code leaves its property unchanged."""
        del transport.device_values[(3, 1)]
        transport.device_values[(2, 2)] = 3

        values = await bound_device.request_all_properties()

        assert PropertyName.TEMPERATURE not in values
        assert bound_device.get_temperature() == 21.5
        assert values[PropertyName.FAN_LEVEL] == 3

    @pytest.mark.asyncio
    async def test_malformed_response_raises(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A response that is not a list raises TransportException."""
        transport.responder = lambda command, params: {"unexpected": True}

        with pytest.raises(TransportException):
            await bound_device.request_all_properties()

    @pytest.mark.asyncio
    async def test_positional_mapping(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """Slot i belongs to readable property i in registry order."""
        transport.responder = lambda command, params: [
            {"code": 0, "value": 0},
            {"code": 0, "value": 1},
            {"code": 0, "value": 0},
            {"code": 0, "value": 19},
            {"code": 0, "value": 60},
            {"code": 0, "value": 1},
        ]

        values = await bound_device.request_all_properties()

        request = transport.calls_of(command=MiotCommand.GET_PROPERTIES)[0]
        assert [(item["siid"], item["piid"]) for item in request] == [(2, 1), (2, 2), (2, 3), (3, 1), (2, 8), (5, 1)]
        assert values == {
            PropertyName.POWER: False,
            PropertyName.FAN_LEVEL: 1,
            PropertyName.MODE: 0,
            PropertyName.TEMPERATURE: 19.0,
            PropertyName.POWER_OFF_TIME: 60,
            PropertyName.CHILD_LOCK: True,
        }
        assert isinstance(bound_device.get_temperature(), float)

    @pytest.mark.asyncio
    async def test_short_response_keeps_tail(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """Properties without a response slot keep their value."""
        transport.responder = lambda command, params: [{"code": 0, "value": False}]

        values = await bound_device.request_all_properties()

        assert values == {PropertyName.POWER: False}
        assert bound_device.get_fan_level() == 2

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A failing batch call raises TransportException."""
        transport.fail_commands.add(MiotCommand.GET_PROPERTIES)

        with pytest.raises(TransportException):
            await bound_device.request_all_properties()

        assert bound_device.is_power_on() is True

    @pytest.mark.asyncio
    async def test_unconvertible_slot_is_skipped(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A value that cannot be converted to the format is skipped."""
        transport.device_values[(2, 2)] = "fast"

        values = await bound_device.request_all_properties()

        assert PropertyName.FAN_LEVEL not in values
        assert bound_device.get_fan_level() == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [float("inf"), 2.7])
    async def test_non_integral_slot_is_skipped(
        self, bound_device: MiotDevice, transport: FakeTransport, raw: float
    ) -> None:
        """Infinite or fractional values of an integer property skip only their slot."""
        transport.device_values[(2, 2)] = raw
        transport.device_values[(2, 1)] = False

        values = await bound_device.request_all_properties()

        assert PropertyName.FAN_LEVEL not in values
        assert values[PropertyName.POWER] is False
        assert bound_device.get_fan_level() == 2


class TestSingleCalls:
    """Test request_property, send_command and execute_action."""

    @pytest.mark.asyncio
    async def test_execute_action(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """An action is sent with its input arguments."""
        result = await bound_device.execute_action(siid=2, aiid=1, params=[5])

        assert transport.calls == [(MiotCommand.ACTION, {"did": TEST_DID, "siid": 2, "aiid": 1, "in": [5]})]
        assert result == {"code": 0, "out": []}

    @pytest.mark.asyncio
    async def test_execute_action_failure(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A failing action returns None."""
        transport.fail_commands.add(MiotCommand.ACTION)

        assert await bound_device.execute_action(siid=2, aiid=1) is None

    @pytest.mark.asyncio
    async def test_request_property(
        self,
        bound_device: MiotDevice,
        property_events: list[PropertyUpdatedEvent],
        transport: FakeTransport,
    ) -> None:
        """A single read updates the cache and notifies."""
        transport.device_values[(2, 3)] = 0

        values = await bound_device.request_property(prop=bound_device.get_property(name=PropertyName.MODE))

        assert values == {PropertyName.MODE: 0}
        assert transport.calls == [(MiotCommand.GET_PROPERTIES, [{"did": TEST_DID, "siid": 2, "piid": 3}])]
        assert len(property_events) == 1

    @pytest.mark.asyncio
    async def test_request_property_failure(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A transport failure of a single read returns an empty result."""
        transport.fail_commands.add(MiotCommand.GET_PROPERTIES)

        assert await bound_device.request_property(prop=bound_device.get_property(name=PropertyName.MODE)) == {}

    @pytest.mark.asyncio
    async def test_request_property_guards(self, bound_device: MiotDevice) -> None:
        """Missing or unreadable properties raise."""
        with pytest.raises(PropertyNotFoundException):
            await bound_device.request_property(prop=None)
        with pytest.raises(PropertyAccessException):
            await bound_device.request_property(prop=bound_device.get_property(name=PropertyName.BUZZER))

    @pytest.mark.asyncio
    async def test_send_command(
        self,
        bound_device: MiotDevice,
        property_events: list[PropertyUpdatedEvent],
        transport: FakeTransport,
    ) -> None:
        """A command is written without touching the cache."""
        prop = bound_device.get_property(name=PropertyName.FAN_LEVEL)

        await bound_device.send_command(prop=prop, value=3)

        assert transport.calls == [
            (MiotCommand.SET_PROPERTIES, [{"did": TEST_DID, "siid": 2, "piid": 2, "value": 3}])
        ]
        assert prop.value == 2
        assert property_events == []

    @pytest.mark.asyncio
    async def test_send_command_failure_is_absorbed(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """A failing command is logged only."""
        transport.fail_commands.add(MiotCommand.SET_PROPERTIES)

        await bound_device.send_command(prop=bound_device.get_property(name=PropertyName.FAN_LEVEL), value=3)

        with pytest.raises(PropertyNotFoundException):
            await bound_device.send_command(prop=None, value=3)


class TestLifecycle:
    """Test transport binding and setup."""

    @pytest.mark.asyncio
    async def test_infinite_slot_during_setup(
        self, device: MiotDevice, schema: FanTestSchema, transport: FakeTransport
    ) -> None:
        """An infinite integer slot in the initial fetch does not block READY."""
        transport.device_values[(2, 2)] = float("inf")

        await device.update_transport(transport=transport)

        assert device.state == DeviceState.READY
        assert schema.fetch_done_calls == 1
        assert device.is_power_on() is True

    @pytest.mark.asyncio
    async def test_attach_while_ready_replaces_transport(
        self, bound_device: MiotDevice, transport: FakeTransport
    ) -> None:
        """A new transport while bound destroys the old one without a new setup."""
        new_transport = FakeTransport()

        await bound_device.update_transport(transport=new_transport)

        assert transport.destroyed is True
        assert new_transport.destroyed is False
        assert bound_device.state == DeviceState.BOUND_RECONNECTED
        assert new_transport.calls == []

    @pytest.mark.asyncio
    async def test_did_from_transport(self, schema: FanTestSchema, transport: FakeTransport) -> None:
        """Without a configured did the transport id is used, without prefix."""
        device = MiotDevice(schema=schema, name=TEST_NAME, model=TEST_MODEL)

        await device.update_transport(transport=transport)

        assert device.device_id == TEST_DID

    @pytest.mark.asyncio
    async def test_first_attach_runs_setup(
        self, device: MiotDevice, schema: FanTestSchema, transport: FakeTransport
    ) -> None:
        """The first attach fetches info, runs the hooks and the initial fetch."""
        await device.update_transport(transport=transport)

        assert device.state == DeviceState.READY
        assert device.is_ready is True
        assert [command for command, _ in transport.calls] == [MiotCommand.INFO, MiotCommand.GET_PROPERTIES]
        assert device.device_info == {"model": TEST_MODEL, "fw_ver": "1.0.0"}
        assert schema.setup_calls == 1
        assert schema.fetch_done_calls == 1
        assert device.is_power_on() is True

    @pytest.mark.asyncio
    async def test_initial_fetch_failure_is_swallowed(
        self, device: MiotDevice, schema: FanTestSchema, transport: FakeTransport
    ) -> None:
        """A failing initial fetch still leads to READY."""
        transport.fail_commands.update({MiotCommand.INFO, MiotCommand.GET_PROPERTIES})

        await device.update_transport(transport=transport)

        assert device.state == DeviceState.READY
        assert schema.fetch_done_calls == 0
        assert device.device_info == {}

    @pytest.mark.asyncio
    async def test_missing_did_warns(self, schema: FanTestSchema, caplog: pytest.LogCaptureFixture) -> None:
        """A missing did is not fatal."""
        device = MiotDevice(schema=schema, name=TEST_NAME, model=TEST_MODEL)

        with caplog.at_level(logging.WARNING):
            await device.update_transport(transport=FakeTransport(did=None))

        assert device.device_id is None
        assert device.state == DeviceState.READY
        assert any("Could not find did" in rec.getMessage() for rec in caplog.records)

    def test_missing_model_logs_error(self, schema: FanTestSchema, caplog: pytest.LogCaptureFixture) -> None:
        """A device without model logs an error."""
        with caplog.at_level(logging.ERROR):
            MiotDevice(schema=schema, name=TEST_NAME)

        assert any("Missing model information" in rec.getMessage() for rec in caplog.records)

    @pytest.mark.asyncio
    async def test_model_prefers_transport(self, schema: FanTestSchema) -> None:
        """The transport model wins over the configured model."""
        device = MiotDevice(schema=schema, name=TEST_NAME, model="configured.model")
        assert device.model == "configured.model"

        await device.update_transport(transport=FakeTransport(model="reported.model"))

        assert device.model == "reported.model"

    @pytest.mark.asyncio
    async def test_reconnect_skips_setup(
        self, bound_device: MiotDevice, schema: FanTestSchema, transport: FakeTransport
    ) -> None:
        """A reattach after disconnect restores connectivity only."""
        bound_device.disconnect_and_destroy()
        new_transport = FakeTransport()

        await bound_device.update_transport(transport=new_transport)

        assert bound_device.state == DeviceState.BOUND_RECONNECTED
        assert bound_device.is_connected is True
        assert schema.setup_calls == 1
        assert new_transport.calls == []

        await bound_device.poll_properties()
        assert len(new_transport.calls_of(command=MiotCommand.GET_PROPERTIES)) == 1

    @pytest.mark.asyncio
    async def test_state_events(self, device: MiotDevice, event_bus: EventBus, transport: FakeTransport) -> None:
        """Each transition is published."""
        events: list[DeviceStateChangedEvent] = []
        event_bus.subscribe(event_type=DeviceStateChangedEvent, event_key=TEST_NAME, handler=events.append)

        await device.update_transport(transport=transport)
        device.disconnect_and_destroy()

        assert [(event.old_state, event.new_state) for event in events] == [
            (DeviceState.UNBOUND, DeviceState.BOUND_UNINITIALIZED),
            (DeviceState.BOUND_UNINITIALIZED, DeviceState.READY),
            (DeviceState.READY, DeviceState.UNBOUND),
        ]

    def test_from_config_applies_locale(self, schema: FanTestSchema) -> None:
        """from_config uses the configured identity and locale."""
        config = DeviceConfig.from_dict(
            data={"name": "Kitchen", "model": TEST_MODEL, "token": TEST_TOKEN, "device_id": 42, "locale": "de"}
        )

        device = MiotDevice.from_config(config=config, schema=schema)

        assert device.name == "Kitchen"
        assert device.device_id == "42"
        assert i18n.get_locale() == "de"

    @pytest.mark.asyncio
    async def test_unserialized_requests(self, schema: FanTestSchema, transport: FakeTransport) -> None:
        """Devices work without the request lock."""
        device = MiotDevice(
            schema=schema, name=TEST_NAME, model=TEST_MODEL, device_id=TEST_DID, serialize_requests=False
        )

        await device.update_transport(transport=transport)

        assert device.get_fan_level() == 2


class TestFeatureHelpers:
    """Test the helpers used by accessories."""

    def test_fan_levels_from_capability(self, event_bus: EventBus) -> None:
        """The FAN_LEVELS capability overrides the property metadata."""
        levels = (ValueListEntry(value=1, description="Low"), ValueListEntry(value=3, description="High"))
        device = MiotDevice(
            schema=FanTestSchema(capabilities={Capability.FAN_LEVELS: levels}),
            name=TEST_NAME,
            model=TEST_MODEL,
            event_bus=event_bus,
        )

        assert device.fan_levels() == levels

    def test_fan_levels_from_range(self, device: MiotDevice) -> None:
        """Without value list the fan levels are derived from the range."""
        assert [level.value for level in device.fan_levels()] == [1, 2, 3]
        assert device.supports_fan_levels() is True

    def test_feature_support(self, device: MiotDevice) -> None:
        """supports_* reflect the registered properties."""
        assert device.supports_power_control() is True
        assert device.supports_modes() is True
        assert device.supports_buzzer_control() is True
        assert device.supports_child_lock() is True
        assert device.supports_power_off_timer() is True
        assert device.supports_temperature_reporting() is True
        assert device.supports_led_control() is False
        assert device.supports_relative_humidity_reporting() is False
        assert device.supports_use_time_reporting() is False
        assert device.get_led_value() == 0
        assert device.is_led_enabled() is False

    @pytest.mark.asyncio
    async def test_set_shutdown_timer_is_clamped(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """The shutdown timer is clamped into its range."""
        await bound_device.set_shutdown_timer(value=1000)

        assert bound_device.get_shutdown_timer() == 480
        assert bound_device.is_shutdown_timer_enabled() is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("unit", "minutes", "device_value"),
        [
            (PropertyUnit.HOURS, 120, 2),
            (PropertyUnit.SECONDS, 2, 120),
            (PropertyUnit.MINUTES, 45, 45),
        ],
    )
    async def test_shutdown_timer_unit(
        self,
        event_bus: EventBus,
        transport: FakeTransport,
        unit: PropertyUnit,
        minutes: int,
        device_value: int,
    ) -> None:
        """The shutdown timer is exchanged in minutes and written in the unit of the device."""
        device = MiotDevice(
            schema=FanTestSchema(capabilities={Capability.POWER_OFF_TIMER_UNIT: unit}),
            name=TEST_NAME,
            model=TEST_MODEL,
            device_id=TEST_DID,
            event_bus=event_bus,
        )
        await device.update_transport(transport=transport)

        assert await device.set_shutdown_timer(value=minutes) is True

        assert transport.device_values[(2, 8)] == device_value
        assert device.get_shutdown_timer() == minutes

    @pytest.mark.asyncio
    async def test_turn_on_if_necessary(self, bound_device: MiotDevice, transport: FakeTransport) -> None:
        """Power is only written when the device is off."""
        await bound_device.turn_on_if_necessary()
        assert transport.calls == []

        await bound_device.set_power_on(power=False)
        await bound_device.turn_on_if_necessary()

        assert [params[0]["value"] for params in transport.calls_of(command=MiotCommand.SET_PROPERTIES)] == [
            False,
            True,
        ]
