"""Define the externally-settable flags polled while a trajectory goal executes."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod


class ControlSignals(ABC):
    """An interface for the cancellation and shutdown flags polled once per tick."""

    def spin_once(self) -> None:
        """Give pending external callbacks a chance to update the flags before they're polled."""

    @abstractmethod
    def cancel_requested(self) -> bool:
        """Check whether the goal's issuer has requested cancellation."""
        ...

    @abstractmethod
    def shutdown_requested(self) -> bool:
        """Check whether the surrounding process is shutting down."""
        ...


class GoalSignals(ControlSignals):
    """Thread-safe control signals that can be set from any thread."""

    def __init__(self) -> None:
        """Initialize the signals with neither flag set."""
        self._cancel = threading.Event()
        self._shutdown = threading.Event()

    def request_cancel(self) -> None:
        """Request cancellation of the goal."""
        self._cancel.set()

    def request_shutdown(self) -> None:
        """Signal that the surrounding process is shutting down."""
        self._shutdown.set()

    def cancel_requested(self) -> bool:
        """Check whether cancellation has been requested."""
        return self._cancel.is_set()

    def shutdown_requested(self) -> bool:
        """Check whether shutdown has been signaled."""
        return self._shutdown.is_set()
