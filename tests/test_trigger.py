"""Tests for rising-edge detection in Trigger."""

import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fakes import RecordingCommand
from scheduling.trigger import Trigger


def sampler(values):
    """Condition callable that returns the given values one per call."""
    it = iter(values)
    return lambda: next(it)


class TestTrigger(unittest.TestCase):

    def setUp(self):
        self.command = RecordingCommand('target')

    def test_fires_on_rising_edges_only(self):
        samples = [False, False, True, True, True, False, True]
        trigger = Trigger(sampler(samples), self.command)

        fired_at = [i + 1 for i in range(len(samples)) if trigger.check() is not None]
        self.assertEqual(fired_at, [3, 7])

    def test_returns_target_command(self):
        trigger = Trigger(lambda: True, self.command)
        self.assertIs(trigger.check(), self.command)
        self.assertIsNone(trigger.check())
        self.assertTrue(trigger.last_state)

    def test_last_state_starts_false(self):
        trigger = Trigger(lambda: False, self.command)
        self.assertFalse(trigger.last_state)
        self.assertIsNone(trigger.check())
        self.assertFalse(trigger.last_state)

    def test_truthy_values_are_coerced(self):
        trigger = Trigger(sampler([0, 1, 2, None, 'pressed']), self.command)
        results = [trigger.check() is not None for _ in range(5)]
        self.assertEqual(results, [False, True, False, False, True])

    def test_condition_errors_propagate_without_changing_state(self):
        def broken():
            raise IOError("gamepad disconnected")

        trigger = Trigger(broken, self.command)
        with self.assertRaises(IOError):
            trigger.check()
        self.assertFalse(trigger.last_state)

    def test_check_does_not_touch_the_command(self):
        trigger = Trigger(lambda: True, self.command)
        trigger.check()
        self.assertEqual(self.command.init_count, 0)
        self.assertEqual(self.command.update_count, 0)

    def test_rejects_bad_arguments(self):
        with self.assertRaises(TypeError):
            Trigger(True, self.command)
        with self.assertRaises(TypeError):
            Trigger(lambda: True, "not a command")


if __name__ == '__main__':
    unittest.main()
