# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Polling scheduler for a device.

The scheduler is the host poll loop: every poll interval it requests all
readable properties of a device and pushes the result to the accessory.
It never reconnects on its own; a disconnected device is skipped until the
host attaches a new transport.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
import logging
from typing import TYPE_CHECKING, Final

from aiomiot.const import DEFAULT_POLL_INTERVAL
from aiomiot.exceptions import BaseMiotException, DeviceNotConnectedException
from aiomiot.support import extract_exc_args

if TYPE_CHECKING:
    from aiomiot.accessory.base import BaseAccessory
    from aiomiot.model.device import MiotDevice

_LOGGER: Final = logging.getLogger(__name__)

# Upper bound of the sleep between two checks of the job list.
_SCHEDULER_LOOP_SLEEP: Final = 1.0


class SchedulerJob:
    """A periodically executed coroutine."""

    __slots__ = ("_next_run", "_run_interval", "_task")

    def __init__(
        self,
        *,
        task: Callable[[], Awaitable[None]],
        run_interval: float,
        next_run: datetime | None = None,
    ) -> None:
        """Init the job."""
        self._task: Final = task
        self._run_interval: Final = run_interval
        self._next_run: datetime = next_run or datetime.now()

    @property
    def next_run(self) -> datetime:
        """Return the next scheduled run."""
        return self._next_run

    @property
    def ready(self) -> bool:
        """Return if the job is due."""
        return self._next_run <= datetime.now()

    @property
    def run_interval(self) -> float:
        """Return the run interval in seconds."""
        return self._run_interval

    async def run(self) -> None:
        """Run the task."""
        await self._task()

    def schedule_next_execution(self) -> None:
        """Advance next_run by the run interval."""
        self._next_run += timedelta(seconds=self._run_interval)


class PollingScheduler:
    """Poll a device periodically."""

    __slots__ = (
        "_accessory",
        "_active",
        "_device",
        "_poll_job",
        "_scheduler_task",
    )

    def __init__(
        self,
        *,
        device: MiotDevice,
        accessory: BaseAccessory | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Init the scheduler."""
        self._device: Final = device
        self._accessory: Final = accessory
        self._poll_job: Final = SchedulerJob(task=self._poll_device, run_interval=poll_interval)
        self._active: bool = False
        self._scheduler_task: asyncio.Task[None] | None = None

    @property
    def is_active(self) -> bool:
        """Return if the scheduler is running."""
        return self._active

    @property
    def poll_job(self) -> SchedulerJob:
        """Return the poll job."""
        return self._poll_job

    async def start(self) -> None:
        """Start the poll loop."""
        if self._active:
            _LOGGER.warning("POLLING_SCHEDULER: Scheduler for %s is already running", self._device.name)
            return
        self._active = True
        self._scheduler_task = asyncio.create_task(self._run_scheduler_loop())
        _LOGGER.debug(
            "POLLING_SCHEDULER: Started polling %s every %ss", self._device.name, self._poll_job.run_interval
        )

    async def stop(self) -> None:
        """Stop the poll loop and wait for it to finish."""
        self._active = False
        if (task := self._scheduler_task) is None:
            return
        self._scheduler_task = None
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        _LOGGER.debug("POLLING_SCHEDULER: Stopped polling %s", self._device.name)

    async def _run_scheduler_loop(self) -> None:
        """Run due jobs until stopped."""
        sleep = min(_SCHEDULER_LOOP_SLEEP, self._poll_job.run_interval)
        while self._active:
            if self._poll_job.ready:
                await self._poll_job.run()
                self._poll_job.schedule_next_execution()
            await asyncio.sleep(sleep)

    async def _poll_device(self) -> None:
        """Poll all properties and refresh the accessory."""
        try:
            await self._device.poll_properties()
        except DeviceNotConnectedException:
            _LOGGER.debug("POLLING_SCHEDULER: Device %s not connected, skipping poll", self._device.name)
            return
        except BaseMiotException as bme:
            _LOGGER.debug("POLLING_SCHEDULER: Poll of %s failed: %s", self._device.name, extract_exc_args(exc=bme))
            return
        if self._accessory is not None:
            self._accessory.update_device_status()
