# SPDX-License-Identifier: MIT
# Copyright (c) 2021-2025
"""
Device state machine for the transport binding lifecycle.

UNBOUND -> BOUND_UNINITIALIZED -> READY -> UNBOUND -> BOUND_RECONNECTED -> ...

The state machine ensures:
- Only valid state transitions occur
- State changes are logged for debugging
- Invalid transitions raise exceptions for early error detection
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Final

from aiomiot.central.event_bus import DeviceStateChangedEvent, EventBus
from aiomiot.const import BOUND_STATES, DeviceState

_LOGGER: Final = logging.getLogger(__name__)

# Define valid state transitions
_VALID_TRANSITIONS: Final[dict[DeviceState, frozenset[DeviceState]]] = {
    DeviceState.UNBOUND: frozenset(
        {
            DeviceState.BOUND_UNINITIALIZED,  # First attach, runs setup
            DeviceState.BOUND_RECONNECTED,  # Attach after setup completed once
        }
    ),
    DeviceState.BOUND_UNINITIALIZED: frozenset({DeviceState.READY, DeviceState.UNBOUND}),
    DeviceState.READY: frozenset(
        {
            DeviceState.UNBOUND,
            DeviceState.BOUND_RECONNECTED,  # Transport replaced while bound
        }
    ),
    DeviceState.BOUND_RECONNECTED: frozenset(
        {
            DeviceState.UNBOUND,
            DeviceState.BOUND_RECONNECTED,
        }
    ),
}


class InvalidStateTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, *, current: DeviceState, target: DeviceState, device_name: str) -> None:
        """Initialize the error."""
        self.current = current
        self.target = target
        self.device_name = device_name
        super().__init__(f"Invalid state transition from {current.value} to {target.value} for device {device_name}")


class DeviceStateMachine:
    """
    State machine for the device connection lifecycle.

    Thread Safety
    -------------
    This class is NOT thread-safe. All calls should happen from the same
    event loop/thread.

    Example:
    -------
        sm = DeviceStateMachine(device_name="Living room fan")

        sm.transition_to(target=DeviceState.BOUND_UNINITIALIZED)
        sm.transition_to(target=DeviceState.READY)
        sm.transition_to(target=DeviceState.UNBOUND)
        sm.transition_to(target=DeviceState.BOUND_RECONNECTED)

    """

    __slots__ = (
        "_device_name",
        "_event_bus",
        "_setup_done",
        "_state",
    )

    def __init__(self, *, device_name: str, event_bus: EventBus | None = None) -> None:
        """
        Initialize the state machine.

        Args:
        ----
            device_name: Device name for logging
            event_bus: Optional event bus to publish DeviceStateChangedEvent

        """
        self._device_name: Final = device_name
        self._event_bus: Final = event_bus
        self._state: DeviceState = DeviceState.UNBOUND
        self._setup_done: bool = False

    @property
    def is_bound(self) -> bool:
        """Return True if a transport is bound."""
        return self._state in BOUND_STATES

    @property
    def is_ready(self) -> bool:
        """Return True if the device completed setup and is bound."""
        return self._state in (DeviceState.READY, DeviceState.BOUND_RECONNECTED)

    @property
    def setup_done(self) -> bool:
        """Return True once the device has been READY at least once."""
        return self._setup_done

    @property
    def state(self) -> DeviceState:
        """Return the current state."""
        return self._state

    def attach_target(self) -> DeviceState:
        """Return the state a transport attach leads to."""
        return DeviceState.BOUND_RECONNECTED if self._setup_done else DeviceState.BOUND_UNINITIALIZED

    def can_transition_to(self, *, target: DeviceState) -> bool:
        """
        Check if transition to target state is valid.

        Args:
        ----
            target: Target state to check

        Returns:
        -------
            True if transition is valid, False otherwise

        """
        if target == DeviceState.BOUND_RECONNECTED and not self._setup_done:
            return False
        return target in _VALID_TRANSITIONS.get(self._state, frozenset())

    def transition_to(self, *, target: DeviceState) -> None:
        """
        Transition to a new state.

        Args:
        ----
            target: Target state to transition to

        Raises:
        ------
            InvalidStateTransitionError: If transition is not valid

        """
        if not self.can_transition_to(target=target):
            raise InvalidStateTransitionError(
                current=self._state,
                target=target,
                device_name=self._device_name,
            )

        old_state = self._state
        self._state = target
        if target == DeviceState.READY:
            self._setup_done = True

        _LOGGER.debug(
            "STATE_MACHINE: %s: %s -> %s",
            self._device_name,
            old_state.value,
            target.value,
        )

        if self._event_bus is not None:
            self._event_bus.publish_sync(
                event=DeviceStateChangedEvent(
                    timestamp=datetime.now(),
                    device_name=self._device_name,
                    old_state=old_state,
                    new_state=target,
                )
            )
