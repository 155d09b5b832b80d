# commands/wait.py
import logging
import math
from typing import Optional

from utils.clock import Clock, DEFAULT_CLOCK
from .base import Command

logger = logging.getLogger(__name__)


class WaitCommand(Command):
    """Finishes once a fixed duration has elapsed since it was initialized."""

    def __init__(self, seconds: float, clock: Optional[Clock] = None):
        if not math.isfinite(seconds) or seconds < 0:
            raise ValueError(f"WaitCommand duration must be >= 0 (got {seconds})")
        self.duration_s = float(seconds)
        self.clock = clock or DEFAULT_CLOCK
        self._start: Optional[float] = None

    @property
    def name(self) -> str:
        return f"WaitCommand({self.duration_s:g}s)"

    def init(self):
        self._start = self.clock.now()

    def update(self):
        pass

    def elapsed(self) -> float:
        """Seconds since `init()`, or 0.0 if not started."""
        if self._start is None:
            return 0.0
        return self.clock.now() - self._start

    def is_finished(self) -> bool:
        if self._start is None:
            return False
        return self.elapsed() >= self.duration_s
