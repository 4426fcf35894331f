"""Define a timer used to run polling loops at a fixed frequency."""

from __future__ import annotations

import time
from typing import Callable, Protocol


class Rate(Protocol):
    """Anything that suspends the caller until the next loop iteration (e.g., `rospy.Rate`)."""

    def sleep(self) -> None:
        """Suspend until the start of the next loop iteration."""
        ...


class LoopRate:
    """Sleep for whatever remains of a fixed loop period since the previous iteration."""

    def __init__(
        self,
        loop_hz: float,
        clock: Callable[[], float] = time.monotonic,
        sleeper: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the rate with its frequency and (optionally) its timing functions.

        :param loop_hz: Frequency (Hz) of the loop
        :param clock: Function returning the current time (seconds)
        :param sleeper: Function that suspends the caller for a duration (seconds)
        """
        if loop_hz <= 0:
            raise ValueError(f"Loop frequency must be positive, got {loop_hz} Hz")

        self.period_s = 1.0 / loop_hz
        self._clock = clock
        self._sleeper = sleeper
        self._last_time_s = self._clock()

    def remaining_s(self) -> float:
        """Compute the duration (seconds) left in the current loop period."""
        return max(0.0, self._last_time_s + self.period_s - self._clock())

    def sleep(self) -> None:
        """Sleep until the end of the current loop period.

        If the loop has fallen more than a full period behind, the schedule restarts from now
        rather than running several iterations back-to-back to catch up.
        """
        now_s = self._clock()
        deadline_s = self._last_time_s + self.period_s

        if now_s > deadline_s + self.period_s:
            self._last_time_s = now_s
            return

        if deadline_s > now_s:
            self._sleeper(deadline_s - now_s)
        self._last_time_s = deadline_s
