"""Smoke test for the demo routine, driven on a simulated clock."""

import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from main import build_routine
from scheduling.loop import ControlLoop
from scheduling.machine import CommandMachine
from utils.clock import ManualClock

STEP = 1 / 64


class TestDemoRoutine(unittest.TestCase):

    def test_routine_runs_to_completion_in_order(self):
        clock = ManualClock()
        messages = []
        machine = CommandMachine()
        routine = build_routine(log=messages.append, clock=clock)
        machine.schedule(routine)

        loop = ControlLoop(machine, period_s=STEP, clock=clock, sleep=clock.advance)
        cycles = loop.run(max_cycles=1000, until=lambda: not machine.is_scheduled(routine))

        self.assertLess(cycles, 1000)
        self.assertFalse(machine.is_scheduled(routine))
        self.assertEqual(messages, [
            "Routine: driving forward",
            "Routine: intake on",
            "Routine: lift raised",
            "Routine: intake off",
            "Routine: complete",
        ])
        # Waits of 0.5 s, then the 0.3 s intake branch, then 0.2 s.
        self.assertGreaterEqual(clock.now(), 1.0)
        self.assertLess(clock.now(), 1.25)


if __name__ == '__main__':
    unittest.main()
