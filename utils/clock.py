# utils/clock.py
"""
Time sources for duration-based commands.

Every time read in the command core goes through a `Clock`, so a control
loop running on real hardware can use the process monotonic clock while
tests and simulations drive a `ManualClock` step by step.
"""
import logging
import time
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Clock(ABC):
    """Source of non-decreasing timestamps, in seconds."""

    @abstractmethod
    def now(self) -> float:
        """Return the current time in seconds. Only differences are meaningful."""
        pass


class MonotonicClock(Clock):
    """Reads `time.monotonic()`; immune to wall-clock adjustments."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock(Clock):
    """
    Clock that only moves when told to.

    Used for simulated loops and deterministic tests of timer commands.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """Move the clock forward by `seconds` and return the new time."""
        if seconds < 0:
            raise ValueError(f"Cannot advance clock by a negative amount ({seconds}s)")
        self._now += seconds
        return self._now

    def set(self, value: float):
        """Jump to an absolute time; it may not be earlier than the current time."""
        if value < self._now:
            raise ValueError(
                f"Clock cannot move backwards (now={self._now}, requested={value})")
        self._now = float(value)


DEFAULT_CLOCK: Clock = MonotonicClock()
