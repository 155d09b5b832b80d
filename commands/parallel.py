# commands/parallel.py
import logging
from typing import List

from .base import Command, CommandCompositionError, ensure_command

logger = logging.getLogger(__name__)


class ParallelCommand(Command):
    """
    Advances every unfinished child once per cycle.

    Children are dropped from tracking as soon as they report finished and
    are never updated again; the group finishes when the slowest child does.
    """

    def __init__(self, *commands: Command):
        self._children: List[Command] = []
        self._running: List[Command] = []
        self._started = False
        for cmd in commands:
            self.add(cmd)

    def add(self, command: Command) -> "ParallelCommand":
        """Add a child to run alongside the others. Only valid before initialization."""
        ensure_command(command)
        if self._started:
            raise CommandCompositionError(
                f"Cannot add {command.name} to {self.name} after it was initialized")
        self._children.append(command)
        self._running.append(command)
        return self

    @property
    def commands(self):
        """Every child ever added, in insertion order."""
        return tuple(self._children)

    @property
    def running(self):
        """Children still being tracked."""
        return tuple(self._running)

    def init(self):
        self._started = True
        self._running = list(self._children)
        for cmd in self._running:
            cmd.init()

    def update(self):
        still_running = []
        for cmd in self._running:
            if cmd.is_finished():
                logger.debug(f"  {self.name}: {cmd.name} finished")
            else:
                still_running.append(cmd)
        self._running = still_running

        for cmd in self._running:
            if not cmd.is_finished():
                cmd.update()

    def is_finished(self) -> bool:
        return all(cmd.is_finished() for cmd in self._running)

    def cancel(self):
        for cmd in self._running:
            if not cmd.is_finished():
                logger.debug(f"  {self.name}: cancelling {cmd.name}")
                cmd.cancel()
        self._running = []
