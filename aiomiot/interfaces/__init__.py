"""
Protocol interfaces for reducing coupling to concrete transports.

- aiomiot.interfaces.transport: the transport a device talks through
"""

from __future__ import annotations

from aiomiot.interfaces.transport import TransportProtocol

__all__ = ["TransportProtocol"]
