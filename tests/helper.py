# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""Helpers for tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any, Final

from aiomiot.const import (
    READ_ONLY,
    READ_WRITE,
    WRITE_ONLY,
    Capability,
    DeviceType,
    MiotCommand,
    PropertyFormat,
    PropertyName,
    ProtocolField,
)
from aiomiot.model.property import ValueListEntry
from aiomiot.model.schema import DeviceSchema, PropertyDefinition

_LOGGER = logging.getLogger(__name__)

TEST_DID: Final = "123456789"
TEST_MODEL: Final = "test.fan.v1"
TEST_NAME: Final = "Test Fan"
TEST_TOKEN: Final = "0123456789abcdef0123456789abcdef"


class FakeTransport:
    """Transport double recording every call."""

    def __init__(
        self,
        *,
        did: str | None = f"miio:{TEST_DID}",
        model: str | None = TEST_MODEL,
        responder: Callable[[str, Any], Any] | None = None,
    ) -> None:
        """Init the transport."""
        self._did = did
        self._model = model
        self.responder = responder
        self.calls: list[tuple[str, Any]] = []
        self.destroyed = False
        self.device_values: dict[tuple[int, int], Any] = {}
        self.fail_commands: set[str] = set()
        self.set_codes: dict[tuple[int, int], int] = {}

    @property
    def id(self) -> str | None:
        """Return the device id."""
        return self._did

    @property
    def model(self) -> str | None:
        """Return the model."""
        return self._model

    async def call(self, command: str, params: Any) -> Any:
        """Record the call and answer from device_values."""
        self.calls.append((command, params))
        if command in self.fail_commands:
            raise OSError(f"{command} timed out")
        if self.responder is not None:
            return self.responder(command, params)
        if command == MiotCommand.INFO:
            return {"model": self._model, "fw_ver": "1.0.0"}
        if command == MiotCommand.GET_PROPERTIES:
            return [self._read_item(item=item) for item in params]
        if command == MiotCommand.SET_PROPERTIES:
            return [self._write_item(item=item) for item in params]
        if command == MiotCommand.ACTION:
            return {"code": 0, "out": []}
        return None

    def destroy(self) -> None:
        """Mark the transport as destroyed."""
        self.destroyed = True

    def calls_of(self, *, command: str) -> list[Any]:
        """Return the params of all calls of a command."""
        return [params for cmd, params in self.calls if cmd == command]

    def _read_item(self, *, item: Mapping[str, Any]) -> dict[str, Any]:
        key = (item[ProtocolField.SIID], item[ProtocolField.PIID])
        if key not in self.device_values:
            return {"did": item[ProtocolField.DID], "siid": key[0], "piid": key[1], "code": -4003}
        return {
            "did": item[ProtocolField.DID],
            "siid": key[0],
            "piid": key[1],
            "code": 0,
            "value": self.device_values[key],
        }

    def _write_item(self, *, item: Mapping[str, Any]) -> dict[str, Any]:
        key = (item[ProtocolField.SIID], item[ProtocolField.PIID])
        if (code := self.set_codes.get(key, 0)) == 0:
            self.device_values[key] = item[ProtocolField.VALUE]
        return {"did": item[ProtocolField.DID], "siid": key[0], "piid": key[1], "code": code}


class FanTestSchema(DeviceSchema):
    """Small fan schema for tests."""

    device_type = DeviceType.FAN
    models = (TEST_MODEL,)

    def __init__(self, *, capabilities: Mapping[Capability, Any] | None = None) -> None:
        """Init the schema."""
        self._capabilities = dict(capabilities or {})
        self.setup_calls = 0
        self.fetch_done_calls = 0

    def property_definitions(self) -> tuple[PropertyDefinition, ...]:
        """Return the property declarations."""
        return (
            PropertyDefinition(
                name=PropertyName.POWER, siid=2, piid=1, format=PropertyFormat.BOOL, access=READ_WRITE
            ),
            PropertyDefinition(
                name=PropertyName.FAN_LEVEL,
                siid=2,
                piid=2,
                format=PropertyFormat.UINT8,
                access=READ_WRITE,
                value_range=(1, 3, 1),
            ),
            PropertyDefinition(
                name=PropertyName.MODE,
                siid=2,
                piid=3,
                format=PropertyFormat.UINT8,
                access=READ_WRITE,
                value_list=(
                    ValueListEntry(value=0, description="Straight Wind"),
                    ValueListEntry(value=1, description="Sleep"),
                ),
            ),
            PropertyDefinition(
                name=PropertyName.TEMPERATURE,
                siid=3,
                piid=1,
                format=PropertyFormat.FLOAT,
                access=READ_ONLY,
                value_range=(-40, 125, 1),
            ),
            PropertyDefinition(
                name=PropertyName.POWER_OFF_TIME,
                siid=2,
                piid=8,
                format=PropertyFormat.UINT16,
                access=READ_WRITE,
                value_range=(0, 480, 1),
            ),
            PropertyDefinition(
                name=PropertyName.BUZZER, siid=4, piid=1, format=PropertyFormat.BOOL, access=WRITE_ONLY
            ),
            PropertyDefinition(
                name=PropertyName.CHILD_LOCK, siid=5, piid=1, format=PropertyFormat.BOOL, access=READ_WRITE
            ),
        )

    def capabilities(self) -> Mapping[Capability, Any]:
        """Return the static capabilities."""
        return self._capabilities

    async def device_specific_setup(self, *, device: Any) -> None:
        """Count the calls."""
        self.setup_calls += 1

    async def initial_property_fetch_done(self, *, device: Any) -> None:
        """Count the calls."""
        self.fetch_done_calls += 1
