# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Configuration for devices and accessories.

Raw configuration mappings (as loaded by the host platform) are validated
with the voluptuous schemas in aiomiot.schemas and turned into frozen
dataclasses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from aiomiot import i18n
from aiomiot.const import BUTTON_RESET_TIMEOUT, DEFAULT_LOCALE, DEFAULT_POLL_INTERVAL, DEFAULT_SERIALIZE_REQUESTS
from aiomiot.exceptions import MiotConfigException
from aiomiot.schemas import ACCESSORY_CONFIG_SCHEMA, DEVICE_CONFIG_SCHEMA

__all__ = [
    "AccessoryConfig",
    "DeviceConfig",
]


@dataclass(frozen=True, kw_only=True, slots=True)
class DeviceConfig:
    """Configuration of a single device."""

    name: str
    model: str
    host: str | None = None
    token: str | None = None
    device_id: str | None = None
    poll_interval: int = DEFAULT_POLL_INTERVAL
    serialize_requests: bool = DEFAULT_SERIALIZE_REQUESTS
    locale: str = DEFAULT_LOCALE

    @classmethod
    def from_dict(cls, *, data: Mapping[str, Any]) -> DeviceConfig:
        """Validate a raw mapping and create the config."""
        return cls(**_validate(schema=DEVICE_CONFIG_SCHEMA, data=data))


@dataclass(frozen=True, kw_only=True, slots=True)
class AccessoryConfig:
    """Presentation options of an accessory."""

    button_reset_timeout: float = BUTTON_RESET_TIMEOUT
    buzzer_control: bool = True
    led_control: bool = True
    child_lock_control: bool = True
    mode_control: bool = True
    fan_level_control: bool = True
    shutdown_timer: bool = True

    @classmethod
    def from_dict(cls, *, data: Mapping[str, Any]) -> AccessoryConfig:
        """Validate a raw mapping and create the config."""
        return cls(**_validate(schema=ACCESSORY_CONFIG_SCHEMA, data=data))


def _validate(*, schema: vol.Schema, data: Mapping[str, Any]) -> dict[str, Any]:
    """Run a schema and translate voluptuous errors."""
    try:
        return dict(schema(dict(data)))
    except vol.Invalid as err:
        raise MiotConfigException(i18n.tr("exception.config.invalid", reason=str(err))) from err
