# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Device registry for device schemas.

Maps device model strings to the DeviceSchema implementation that declares
their properties. Schema modules register themselves at import time.

Example usage:
    from aiomiot.model.devices.registry import DeviceRegistry

    DeviceRegistry.register(schema_class=FanSchema)
    schema_class = DeviceRegistry.get_schema_class(model="dmaker.fan.p9")
"""

from __future__ import annotations

from typing import ClassVar

from aiomiot.model.schema import DeviceSchema

__all__ = ["DeviceRegistry"]


def _normalize_model(*, model: str) -> str:
    """Return the lookup key of a model."""
    return model.strip().lower()


class DeviceRegistry:
    """Central registry for device schemas."""

    _schemas: ClassVar[dict[str, type[DeviceSchema]]] = {}

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._schemas.clear()

    @classmethod
    def get_models(cls) -> tuple[str, ...]:
        """Return all registered models."""
        return tuple(sorted(cls._schemas))

    @classmethod
    def get_schema_class(cls, *, model: str) -> type[DeviceSchema] | None:
        """Return the schema class registered for a model."""
        return cls._schemas.get(_normalize_model(model=model))

    @classmethod
    def is_supported(cls, *, model: str) -> bool:
        """Check if a schema is registered for the model."""
        return _normalize_model(model=model) in cls._schemas

    @classmethod
    def register(cls, *, schema_class: type[DeviceSchema], models: tuple[str, ...] | None = None) -> None:
        """Register a schema class for its models, or for the given models."""
        for model in models or schema_class.models:
            cls._schemas[_normalize_model(model=model)] = schema_class
