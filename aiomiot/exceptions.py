# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Exceptions used by aiomiot.

Every exception derives from BaseMiotException, which carries a `name`
attribute. When an exception wraps another exception, the name becomes the
class name of the wrapped one.
"""

from __future__ import annotations

from typing import Any


class BaseMiotException(Exception):
    """aiomiot base exception."""

    def __init__(self, name: str, *args: Any) -> None:
        """Init the BaseMiotException."""
        if args and isinstance(args[0], BaseException):
            self.name = args[0].__class__.__name__
            args = _reduce_args(args=args[0].args)
        else:
            self.name = name
        super().__init__(*args)


class MiotException(BaseMiotException):
    """aiomiot exception."""

    def __init__(self, *args: Any) -> None:
        """Init the MiotException."""
        super().__init__("MiotException", *args)


class MiotConfigException(BaseMiotException):
    """aiomiot configuration exception."""

    def __init__(self, *args: Any) -> None:
        """Init the MiotConfigException."""
        super().__init__("MiotConfigException", *args)


class DeviceNotConnectedException(BaseMiotException):
    """Raised when an operation needs a bound transport but the device has none."""

    def __init__(self, *args: Any) -> None:
        """Init the DeviceNotConnectedException."""
        super().__init__("DeviceNotConnectedException", *args)


class PropertyNotFoundException(BaseMiotException):
    """Raised when a property is missing."""

    def __init__(self, *args: Any) -> None:
        """Init the PropertyNotFoundException."""
        super().__init__("PropertyNotFoundException", *args)


class PropertyAccessException(BaseMiotException):
    """Raised when a property is read or written against its access flags."""

    def __init__(self, *args: Any) -> None:
        """Init the PropertyAccessException."""
        super().__init__("PropertyAccessException", *args)


class TransportException(BaseMiotException):
    """Raised when the transport call fails or returns a malformed response."""

    def __init__(self, *args: Any) -> None:
        """Init the TransportException."""
        super().__init__("TransportException", *args)


class ValidationException(BaseMiotException):
    """Raised when a value cannot be converted to the property format."""

    def __init__(self, *args: Any) -> None:
        """Init the ValidationException."""
        super().__init__("ValidationException", *args)


class UnsupportedDeviceException(BaseMiotException):
    """Raised when no schema is registered for a device model."""

    def __init__(self, *args: Any) -> None:
        """Init the UnsupportedDeviceException."""
        super().__init__("UnsupportedDeviceException", *args)


def _reduce_args(*, args: tuple[Any, ...]) -> tuple[Any, ...] | Any:
    """Return the first arg, if there is only one arg."""
    return (args[0],) if len(args) == 1 else args
