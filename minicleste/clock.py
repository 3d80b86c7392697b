"""Frame clock that measures the time between frames and can be paused."""

from __future__ import annotations

import time
from typing import Callable


class Clock:
    """Measures frame intervals and total running time, excluding pauses."""

    def __init__(self, now: Callable[[], float] = time.monotonic) -> None:
        self._now = now
        self.delta_time = 0.0
        self.reset()

    def reset(self) -> None:
        """Restart the clock from the current moment, unpaused."""
        self._start = self._now()
        self._last = self._start
        self._pause_point = self._start
        self._pause_duration = 0.0
        self._paused = False

    def update(self) -> None:
        """Record the time elapsed since the previous update; zero while paused."""
        if self._paused:
            self.delta_time = 0.0
            return
        now = self._now()
        self.delta_time = now - self._last
        self._last = now

    def total_time(self) -> float:
        """Seconds since the last reset, not counting time spent paused."""
        end = self._pause_point if self._paused else self._now()
        return end - self._start - self._pause_duration

    def pause(self) -> None:
        """Stop the clock; does nothing if it is already paused."""
        if not self._paused:
            self._paused = True
            self._pause_point = self._now()

    def resume(self) -> None:
        """Restart a paused clock; does nothing if it is running."""
        if self._paused:
            self._paused = False
            now = self._now()
            self._pause_duration += now - self._pause_point
            self._last = now

    @property
    def is_paused(self) -> bool:
        return self._paused