"""Instrumented test doubles for the command scheduler tests."""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from commands.base import Command  # noqa: E402
from commands.wait import WaitCommand  # noqa: E402


class RecordingCommand(Command):
    """
    Command that logs its lifecycle calls and finishes after N updates.

    `finish_after=None` never finishes; `finish_after=0` is finished as soon
    as it has been initialized.
    """

    def __init__(self, label, finish_after=1, events=None, on_update=None):
        self.label = label
        self.finish_after = finish_after
        self.events = events if events is not None else []
        self.on_update = on_update
        self.init_count = 0
        self.update_count = 0
        self.cancel_count = 0
        self.is_finished_calls = 0
        self.updates_after_finish = 0
        self._updates = 0

    @property
    def name(self):
        return self.label

    def _done(self):
        return self.finish_after is not None and self._updates >= self.finish_after

    def init(self):
        self.init_count += 1
        self._updates = 0
        self.events.append((self.label, 'init'))

    def update(self):
        if self._done():
            self.updates_after_finish += 1
        self.update_count += 1
        self._updates += 1
        self.events.append((self.label, 'update'))
        if self.on_update is not None:
            self.on_update()

    def is_finished(self):
        self.is_finished_calls += 1
        return self._done()

    def cancel(self):
        self.cancel_count += 1
        self.events.append((self.label, 'cancel'))


class CountingWait(WaitCommand):
    """WaitCommand that counts updates, including any received after it finished."""

    def __init__(self, seconds, clock=None):
        super().__init__(seconds, clock=clock)
        self.update_count = 0
        self.updates_after_finish = 0

    def update(self):
        if self.is_finished():
            self.updates_after_finish += 1
        self.update_count += 1
        super().update()
