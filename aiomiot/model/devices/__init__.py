# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Concrete device schemas.

Importing this package registers every shipped schema with the
DeviceRegistry. create_device() builds a MiotDevice for a configured model.
"""

from __future__ import annotations

import logging
from typing import Final

from aiomiot import i18n
from aiomiot.central.event_bus import EventBus
from aiomiot.config import DeviceConfig
from aiomiot.exceptions import UnsupportedDeviceException
from aiomiot.model.device import MiotDevice
from aiomiot.model.devices.fan import FanSchema
from aiomiot.model.devices.humidifier import HumidifierSchema
from aiomiot.model.devices.registry import DeviceRegistry

__all__ = [
    "DeviceRegistry",
    "FanSchema",
    "HumidifierSchema",
    "create_device",
]

_LOGGER: Final = logging.getLogger(__name__)


def create_device(*, config: DeviceConfig, event_bus: EventBus | None = None) -> MiotDevice:
    """Create a device for the configured model."""
    if (schema_class := DeviceRegistry.get_schema_class(model=config.model)) is None:
        raise UnsupportedDeviceException(
            i18n.tr("exception.registry.unsupported_model", model=config.model, name=config.name)
        )
    _LOGGER.debug("CREATE_DEVICE: Using %s for %s (%s)", schema_class.__name__, config.name, config.model)
    return MiotDevice.from_config(config=config, schema=schema_class(), event_bus=event_bus)
