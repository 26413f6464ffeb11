# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Accessory adapters.

Each adapter binds one device to the services the host presents for it.

- BaseAccessory: shared optional services (buzzer, LED, shutdown timer, ...)
- FanAccessory, HumidifierAccessory: device type specific main services
"""

from __future__ import annotations

from aiomiot.accessory.base import BaseAccessory
from aiomiot.accessory.fan import FanAccessory
from aiomiot.accessory.humidifier import HumidifierAccessory
from aiomiot.accessory.service import (
    Accessory,
    AccessoryService,
    Characteristic,
    CharacteristicType,
    ServiceType,
    ServiceUnavailableError,
)

__all__ = [
    "Accessory",
    "AccessoryService",
    "BaseAccessory",
    "Characteristic",
    "CharacteristicType",
    "FanAccessory",
    "HumidifierAccessory",
    "ServiceType",
    "ServiceUnavailableError",
]
