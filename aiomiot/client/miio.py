# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Transport over python-miio.

python-miio ships a synchronous client. MiioTransport runs every call in a
worker thread and serializes the calls of one device, since the underlying
socket and message id counter are not safe for concurrent use.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
import logging
from typing import Any, Final

from aiomiot import i18n
from aiomiot.config import DeviceConfig
from aiomiot.const import DID_PREFIX, MiotCommand
from aiomiot.exceptions import MiotConfigException, TransportException
from aiomiot.support import extract_exc_args

_LOGGER: Final = logging.getLogger(__name__)


class MiioTransport:
    """Live connection to a device through python-miio."""

    __slots__ = (
        "_destroyed",
        "_device",
        "_did",
        "_host",
        "_lock",
        "_model",
        "_timeout",
        "_token",
    )

    def __init__(
        self,
        *,
        host: str,
        token: str,
        timeout: int | None = None,
        device: Any | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
        ----
            host: IP address or host name of the device
            token: 32 hex chars device token
            timeout: Optional socket timeout in seconds
            device: Already created python-miio device, mainly for tests

        """
        self._host: Final = host
        self._token: Final = token
        self._timeout: Final = timeout
        self._device: Any | None = device
        self._destroyed: bool = False
        self._lock: Final = asyncio.Lock()
        self._did: str | None = None
        self._model: str | None = None

    @property
    def host(self) -> str:
        """Return the host."""
        return self._host

    @property
    def id(self) -> str | None:
        """Return the device id reported by miIO.info, prefixed like the miio cloud ids."""
        return f"{DID_PREFIX}{self._did}" if self._did else None

    @property
    def model(self) -> str | None:
        """Return the model reported by miIO.info."""
        return self._model

    async def call(self, command: str, params: Any) -> Any:
        """Send a command and return its result."""
        async with self._lock:
            if self._destroyed:
                raise TransportException(i18n.tr("exception.client.miio.destroyed", command=command, host=self._host))
            device = self._get_device()
            try:
                result = await asyncio.to_thread(device.send, command, params)
            except Exception as exc:
                raise TransportException(
                    i18n.tr(
                        "exception.client.miio.call_failed",
                        command=command,
                        host=self._host,
                        reason=extract_exc_args(exc=exc),
                    )
                ) from exc
        if command == MiotCommand.INFO and isinstance(result, Mapping):
            self._remember_info(info=result)
        return result

    def destroy(self) -> None:
        """Drop the python-miio device. Later calls fail."""
        self._destroyed = True
        if self._device is not None:
            _LOGGER.debug("MIIO_TRANSPORT: Destroying connection to %s", self._host)
        self._device = None

    def _get_device(self) -> Any:
        """Return the python-miio device, creating it on first use."""
        if self._device is None:
            from miio import Device  # noqa: PLC0415  # pylint: disable=import-outside-toplevel

            self._device = Device(ip=self._host, token=self._token, timeout=self._timeout)
        return self._device

    def _remember_info(self, *, info: Mapping[str, Any]) -> None:
        """Keep the identity fields of a miIO.info result."""
        if did := info.get("did"):
            self._did = str(did)
        if model := info.get("model"):
            self._model = str(model)


def create_transport(*, config: DeviceConfig) -> MiioTransport:
    """Create a transport for a configured device."""
    if not config.host or not config.token:
        raise MiotConfigException(i18n.tr("exception.client.miio.missing_credentials", name=config.name))
    return MiioTransport(host=config.host, token=config.token)
