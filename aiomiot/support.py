# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Helper functions used within aiomiot."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any, Final

import orjson

from aiomiot.const import DID_PREFIX

_LOGGER: Final = logging.getLogger(__name__)


def to_json(*, data: Any) -> str:
    """Render protocol payloads for log output."""
    try:
        return orjson.dumps(data, default=str, option=orjson.OPT_NON_STR_KEYS).decode(encoding="utf-8")
    except TypeError:
        return repr(data)


def normalize_device_id(*, raw_id: Any) -> str | None:
    """Return the device id without the transport prefix."""
    if raw_id is None:
        return None
    did = str(raw_id)
    if did.startswith(DID_PREFIX):
        did = did[len(DID_PREFIX) :]
    return did or None


def extract_exc_args(*, exc: Exception) -> tuple[Any, ...] | Any:
    """Return the first arg, if there is only one arg."""
    if exc.args:
        return exc.args[0] if len(exc.args) == 1 else exc.args
    return exc


def clamp_value(*, value: Any, value_range: Sequence[Any]) -> Any:
    """Clamp a numeric value into the first two entries of value_range."""
    if len(value_range) < 2 or isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    low, high = value_range[0], value_range[1]
    if value > high:
        return high
    if value < low:
        return low
    return value
