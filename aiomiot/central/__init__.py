# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Central services shared by devices and accessories.

- aiomiot.central.event_bus: typed events and their dispatch
- aiomiot.central.scheduler: the periodic poll loop
"""
