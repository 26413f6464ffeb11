# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Device model of aiomiot.

- property: typed, addressable device properties
- state_machine: the transport binding lifecycle
- schema: the declaration interface of a device model
- device: MiotDevice, the protocol layer between transport and accessory
- devices: concrete schemas and the model registry
"""
