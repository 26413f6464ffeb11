# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Transport implementations.

- MiioTransport: local connection through python-miio (optional extra "miio")

Every transport implements aiomiot.interfaces.TransportProtocol and is handed
to MiotDevice.update_transport().
"""

from __future__ import annotations

from aiomiot.client.miio import MiioTransport, create_transport

__all__ = ["MiioTransport", "create_transport"]
