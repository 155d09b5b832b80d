# scheduling/loop.py
"""
Fixed-period control loop that drives a CommandMachine.

This is the embedding side of the scheduler: it calls `machine.update()`
once per period and sleeps away whatever is left of the period. The
machine itself never blocks or sleeps.
"""
import logging
import math
import threading
import time
from typing import Callable, Optional

from config.loader import CONFIG
from utils.clock import Clock, DEFAULT_CLOCK
from .machine import CommandMachine

logger = logging.getLogger(__name__)


class ControlLoop:
    """Runs one scheduling cycle per period until stopped."""

    def __init__(self, machine: CommandMachine, period_s: Optional[float] = None,
                 clock: Optional[Clock] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 overrun_warn_s: Optional[float] = None):
        loop_cfg = CONFIG.get('loop', {})
        self.machine = machine
        self.period_s = float(period_s if period_s is not None else loop_cfg.get('period_s', 0.02))
        if not math.isfinite(self.period_s) or self.period_s <= 0:
            raise ValueError(f"Loop period must be a positive number (got {self.period_s})")
        self.overrun_warn_s = float(
            overrun_warn_s if overrun_warn_s is not None else loop_cfg.get('overrun_warn_s', 0.005))
        if not math.isfinite(self.overrun_warn_s) or self.overrun_warn_s < 0:
            raise ValueError(f"Overrun threshold must be a number >= 0 (got {self.overrun_warn_s})")
        self.clock = clock or DEFAULT_CLOCK
        self._sleep = sleep
        self._stop_event = threading.Event()
        self.overruns = 0

    def stop(self):
        """
        Ask `run()` to return after the cycle in progress.

        The request is sticky: calling this before `run()` makes `run()` return
        without running a cycle, and a stopped loop stays stopped.
        """
        self._stop_event.set()

    def is_stopped(self) -> bool:
        return self._stop_event.is_set()

    def step(self) -> float:
        """Run one cycle and return how long it took, in seconds."""
        start = self.clock.now()
        self.machine.update()
        return self.clock.now() - start

    def run(self, max_cycles: Optional[int] = None,
            until: Optional[Callable[[], bool]] = None) -> int:
        """
        Drive the machine at the configured period.

        Args:
            max_cycles: Stop after this many cycles (None runs until stopped).
            until: Optional predicate checked after each cycle; True stops the loop.

        Returns:
            Number of cycles run.
        """
        cycles = 0
        logger.info(f"Control loop started (period {self.period_s * 1000:.1f} ms)")
        while not self._stop_event.is_set():
            if max_cycles is not None and cycles >= max_cycles:
                break
            try:
                elapsed = self.step()
            except Exception:
                logger.error(f"  Command cycle {self.machine.cycle_count} failed; stopping loop.",
                             exc_info=True)
                raise
            cycles += 1

            remaining = self.period_s - elapsed
            if remaining > 0:
                self._sleep(remaining)
            elif -remaining > self.overrun_warn_s:
                self.overruns += 1
                logger.warning(f"  Cycle {self.machine.cycle_count} overran period by "
                               f"{-remaining * 1000:.1f} ms")

            if until is not None and until():
                break
        logger.info(f"Control loop stopped after {cycles} cycles.")
        return cycles
