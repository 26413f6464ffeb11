# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Test support for aiomiot."""

from __future__ import annotations

from collections.abc import Generator
import logging
from unittest.mock import patch

import pytest

from aiomiot import i18n
from aiomiot.central.event_bus import EventBus, PropertyUpdatedEvent
from aiomiot.model.device import MiotDevice

from tests.helper import TEST_DID, TEST_MODEL, TEST_NAME, FakeTransport, FanTestSchema

logging.basicConfig(level=logging.INFO)

# pylint: disable=protected-access, redefined-outer-name


@pytest.fixture(autouse=True)
def teardown() -> Generator[None]:
    """Clean up."""
    yield
    patch.stopall()
    i18n.set_locale(locale="en")


@pytest.fixture
def event_bus() -> EventBus:
    """Return an event bus."""
    return EventBus()


@pytest.fixture
def schema() -> FanTestSchema:
    """Return the test schema."""
    return FanTestSchema()


@pytest.fixture
def transport() -> FakeTransport:
    """Return a transport answering from its device values."""
    fake = FakeTransport()
    fake.device_values.update({(2, 1): True, (2, 2): 2, (2, 3): 1, (3, 1): 21.5, (2, 8): 0, (5, 1): False})
    return fake


@pytest.fixture
def device(schema: FanTestSchema, event_bus: EventBus) -> MiotDevice:
    """Return an unbound device."""
    return MiotDevice(schema=schema, name=TEST_NAME, model=TEST_MODEL, device_id=TEST_DID, event_bus=event_bus)


@pytest.fixture
async def bound_device(device: MiotDevice, transport: FakeTransport) -> MiotDevice:
    """Return a device that finished its first setup."""
    await device.update_transport(transport=transport)
    transport.calls.clear()
    return device


@pytest.fixture
def property_events(event_bus: EventBus) -> list[PropertyUpdatedEvent]:
    """Collect the PropertyUpdatedEvents of the bus."""
    events: list[PropertyUpdatedEvent] = []
    event_bus.subscribe(event_type=PropertyUpdatedEvent, event_key=None, handler=events.append)
    return events
