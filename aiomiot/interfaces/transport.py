# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Transport protocol interface.

The device depends on this protocol only. It is implemented by
aiomiot.client.miio.MiioTransport and by test doubles.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Protocol for the live connection to a physical device.

    call() resolves to the ordered result list of the command. For
    get_properties/set_properties that is one {code, value?} item per
    request item, in request order.
    """

    __slots__ = ()

    @property
    def id(self) -> str | None:
        """Return the device id reported by the connection, e.g. 'miio:123456'."""

    @property
    def model(self) -> str | None:
        """Return the model reported by the connection."""

    @abstractmethod
    async def call(self, command: str, params: Any) -> Any:
        """Send a command and return its result."""

    @abstractmethod
    def destroy(self) -> None:
        """Close the connection."""
