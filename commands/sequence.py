# commands/sequence.py
import logging
from typing import List

from .base import Command, CommandCompositionError, ensure_command

logger = logging.getLogger(__name__)


class CommandSequence(Command):
    """
    Runs child commands one at a time, in the order they were added.

    Only the current child is initialized and updated; the next child is
    initialized in the same cycle the current one reports finished, and
    receives its first update on the following cycle.
    """

    def __init__(self, *commands: Command):
        self._commands: List[Command] = []
        self._index = 0
        self._started = False
        for cmd in commands:
            self.add(cmd)

    def add(self, command: Command) -> "CommandSequence":
        """Append a child. Only valid before the sequence is initialized."""
        ensure_command(command)
        if self._started:
            raise CommandCompositionError(
                f"Cannot add {command.name} to {self.name} after it was initialized")
        self._commands.append(command)
        return self

    @property
    def commands(self):
        return tuple(self._commands)

    @property
    def index(self) -> int:
        """Position of the current child; equals len(commands) once finished."""
        return self._index

    def current(self):
        """Return the child being run, or None when the sequence is finished."""
        if self._index >= len(self._commands):
            return None
        return self._commands[self._index]

    def init(self):
        self._started = True
        self._index = 0
        if self._commands:
            self._commands[0].init()

    def update(self):
        if self._index >= len(self._commands):
            return

        current = self._commands[self._index]
        current.update()

        if current.is_finished():
            self._index += 1
            logger.debug(f"  {self.name}: {current.name} finished "
                         f"({self._index}/{len(self._commands)})")
            if self._index < len(self._commands):
                self._commands[self._index].init()

    def is_finished(self) -> bool:
        return self._index >= len(self._commands)

    def cancel(self):
        current = self.current()
        if current is not None:
            logger.debug(f"  {self.name}: cancelling {current.name}")
            current.cancel()
        self._index = len(self._commands)
