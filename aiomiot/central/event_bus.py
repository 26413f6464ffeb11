# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Typed event bus for device notifications.

Events are frozen dataclasses. Subscribers register for an event type and
optionally for an event key (e.g. a property name); a key of None receives
every event of that type.

publish_sync() dispatches synchronously in the caller's context, which is
what the device uses, so presentation handlers run before the write/read
coroutine returns. publish() awaits async handlers concurrently.

Example:
-------
    def on_update(event: PropertyUpdatedEvent) -> None:
        print(event.property.name, event.property.value)

    unsubscribe = device.event_bus.subscribe(
        event_type=PropertyUpdatedEvent, event_key=None, handler=on_update
    )

"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
import inspect
import logging
from typing import TYPE_CHECKING, Any, Final, TypeAlias

from aiomiot.const import DeviceState

if TYPE_CHECKING:
    from aiomiot.model.property import MiotProperty

_LOGGER: Final = logging.getLogger(__name__)

EventHandler: TypeAlias = Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class MiotEvent:
    """Base class for all events."""

    timestamp: datetime

    @property
    def key(self) -> Any:
        """Return the key used to route the event."""
        return None


@dataclass(frozen=True, slots=True)
class PropertyUpdatedEvent(MiotEvent):
    """A property received a server confirmed value."""

    device_id: str | None
    device_name: str
    property: MiotProperty

    @property
    def key(self) -> Any:
        """Return the property name."""
        return self.property.name


@dataclass(frozen=True, slots=True)
class DeviceStateChangedEvent(MiotEvent):
    """The connection state of a device changed."""

    device_name: str
    old_state: DeviceState
    new_state: DeviceState

    @property
    def key(self) -> Any:
        """Return the device name."""
        return self.device_name


class EventBus:
    """Dispatch events to subscribed handlers."""

    __slots__ = (
        "_enable_event_logging",
        "_event_stats",
        "_pending_tasks",
        "_subscriptions",
    )

    def __init__(self, *, enable_event_logging: bool = False) -> None:
        """Initialize the event bus."""
        self._enable_event_logging: Final = enable_event_logging
        self._subscriptions: Final[dict[type[MiotEvent], dict[Any, list[EventHandler]]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._event_stats: Final[dict[str, int]] = {}
        self._pending_tasks: Final[set[asyncio.Future[None]]] = set()

    def clear_subscriptions(self, *, event_type: type[MiotEvent] | None = None) -> None:
        """Clear the subscriptions of one event type or of all types."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def get_event_stats(self) -> dict[str, int]:
        """Return how many events of each type were published."""
        return dict(self._event_stats)

    def get_subscription_count(self, *, event_type: type[MiotEvent]) -> int:
        """Return the number of handlers subscribed to an event type."""
        if (by_key := self._subscriptions.get(event_type)) is None:
            return 0
        return sum(len(handlers) for handlers in by_key.values())

    async def publish(self, *, event: MiotEvent) -> None:
        """Publish an event and await all handlers concurrently."""
        if not (handlers := self._collect_handlers(event=event)):
            return
        await asyncio.gather(*(self._call_async(handler=handler, event=event) for handler in handlers))

    def publish_sync(self, *, event: MiotEvent) -> None:
        """
        Publish an event synchronously.

        Coroutine handlers are scheduled on the running loop. Their tasks are
        kept until done and their errors are logged.
        """
        for handler in self._collect_handlers(event=event):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    task = asyncio.ensure_future(self._await_result(handler=handler, event=event, result=result))
                    self._pending_tasks.add(task)
                    task.add_done_callback(self._pending_tasks.discard)
            except Exception:
                _LOGGER.exception("EVENT_BUS: Error in handler %s for %s", handler, type(event).__name__)

    def subscribe(
        self,
        *,
        event_type: type[MiotEvent],
        event_key: Any,
        handler: EventHandler,
    ) -> Callable[[], None]:
        """Subscribe a handler and return a callable to unsubscribe it."""
        handlers = self._subscriptions[event_type][event_key]
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def _collect_handlers(self, *, event: MiotEvent) -> list[EventHandler]:
        """Return the handlers for the event's type and key."""
        event_name = type(event).__name__
        self._event_stats[event_name] = self._event_stats.get(event_name, 0) + 1
        if self._enable_event_logging:
            _LOGGER.debug("EVENT_BUS: Publishing %s", event)
        if (by_key := self._subscriptions.get(type(event))) is None:
            return []
        handlers = list(by_key.get(None, ()))
        if event.key is not None:
            handlers.extend(by_key.get(event.key, ()))
        return handlers

    async def _await_result(self, *, handler: EventHandler, event: MiotEvent, result: Awaitable[Any]) -> None:
        """Await the result of a handler called by publish_sync."""
        try:
            await result
        except Exception:
            _LOGGER.exception("EVENT_BUS: Error in handler %s for %s", handler, type(event).__name__)

    async def _call_async(self, *, handler: EventHandler, event: MiotEvent) -> None:
        """Call one handler and isolate its exceptions."""
        try:
            result = handler(event)
            if inspect.isawaitable(result):
                await result
        except Exception:
            _LOGGER.exception("EVENT_BUS: Error in handler %s for %s", handler, type(event).__name__)
