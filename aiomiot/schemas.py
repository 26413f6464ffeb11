# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Validation schemas for aiomiot.

This module contains voluptuous schemas used for validating property
declarations, protocol responses and configuration input.
"""

from __future__ import annotations

import voluptuous as vol

from aiomiot.const import (
    BUTTON_RESET_TIMEOUT,
    DEFAULT_LOCALE,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_SERIALIZE_REQUESTS,
    PropertyAccess,
    PropertyFormat,
    PropertyName,
    ProtocolField,
)

_positive_id = vol.All(int, vol.Range(min=1))
_number = vol.Any(int, float)

VALUE_LIST_ENTRY_SCHEMA = vol.Schema(
    {
        vol.Required("value"): vol.Any(int, str, bool),
        vol.Optional("description", default=""): str,
    }
)

PROPERTY_DEFINITION_SCHEMA = vol.Schema(
    {
        vol.Required("name"): vol.Coerce(PropertyName),
        vol.Required("siid"): _positive_id,
        vol.Required("piid"): _positive_id,
        vol.Required("format"): vol.Coerce(PropertyFormat),
        vol.Required("access"): vol.All([vol.Coerce(PropertyAccess)], vol.Length(min=1)),
        vol.Optional("unit", default=None): vol.Any(None, str),
        vol.Optional("value_range", default=None): vol.Any(None, vol.All([_number], vol.Length(min=2, max=3))),
        vol.Optional("value_list", default=None): vol.Any(None, [VALUE_LIST_ENTRY_SCHEMA]),
    }
)

RESPONSE_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(str(ProtocolField.CODE)): int,
        vol.Optional(str(ProtocolField.VALUE)): object,
    },
    extra=vol.ALLOW_EXTRA,
)

_token = vol.All(str, vol.Match(r"^[0-9a-fA-F]{32}$"))

DEVICE_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required("name"): vol.All(str, vol.Length(min=1)),
        vol.Required("model"): vol.All(str, vol.Length(min=1)),
        vol.Optional("host", default=None): vol.Any(None, str),
        vol.Optional("token", default=None): vol.Any(None, _token),
        vol.Optional("device_id", default=None): vol.Any(None, vol.All(vol.Coerce(str), vol.Length(min=1))),
        vol.Optional("poll_interval", default=DEFAULT_POLL_INTERVAL): vol.All(vol.Coerce(int), vol.Range(min=1)),
        vol.Optional("serialize_requests", default=DEFAULT_SERIALIZE_REQUESTS): bool,
        vol.Optional("locale", default=DEFAULT_LOCALE): str,
    }
)

ACCESSORY_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional("button_reset_timeout", default=BUTTON_RESET_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0)
        ),
        vol.Optional("buzzer_control", default=True): bool,
        vol.Optional("led_control", default=True): bool,
        vol.Optional("child_lock_control", default=True): bool,
        vol.Optional("mode_control", default=True): bool,
        vol.Optional("fan_level_control", default=True): bool,
        vol.Optional("shutdown_timer", default=True): bool,
    },
    extra=vol.REMOVE_EXTRA,
)
