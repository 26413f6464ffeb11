# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
aiomiot: async adapter for MIoT appliances.

Overview
--------
aiomiot exposes MIoT devices (fans, humidifiers, ...) reachable through a
miIO transport as accessories of a home automation host. It keeps a typed
property cache per device, translates between the siid/piid protocol
envelope and domain values, and survives reconnects.

Quick start
-----------
    from aiomiot.accessory import FanAccessory
    from aiomiot.central.scheduler import PollingScheduler
    from aiomiot.client import create_transport
    from aiomiot.config import DeviceConfig
    from aiomiot.model.devices import create_device

    config = DeviceConfig.from_dict(data={"name": "Fan", "model": "dmaker.fan.p9", "host": "...", "token": "..."})
    device = create_device(config=config)
    accessory = FanAccessory(name=config.name, device=device, uuid="...")
    await device.update_transport(transport=create_transport(config=config))
    await PollingScheduler(device=device, accessory=accessory, poll_interval=config.poll_interval).start()

"""

from __future__ import annotations

from typing import Final

from aiomiot.const import VERSION

__version__: Final = VERSION

