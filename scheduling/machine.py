# scheduling/machine.py
"""
The top-level command scheduler.

`CommandMachine.update()` is called once per control-loop cycle. Each cycle
advances every active command (insertion order), retires the ones that
finished, then evaluates triggers and schedules the targets of any that
fired. Nothing is caught here: an exception from a command or a trigger
condition aborts the cycle and leaves the active list as it was at that
point.
"""
import logging
from dataclasses import dataclass
from typing import List, Set, Tuple

from commands.base import Command, ensure_command
from .trigger import Trigger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MachineSnapshot:
    """Immutable view of the scheduler for logging and inspection."""
    cycle_count: int
    active_commands: Tuple[str, ...]
    trigger_count: int


class CommandMachine:
    """Holds the active commands and registered triggers; runs one cycle per `update()`."""

    def __init__(self):
        self._active: List[Command] = []
        self._triggers: List[Trigger] = []
        self._cancelled: Set[int] = set()
        self.cycle_count = 0

    @property
    def active_commands(self) -> Tuple[Command, ...]:
        return tuple(self._active)

    @property
    def triggers(self) -> Tuple[Trigger, ...]:
        return tuple(self._triggers)

    def is_scheduled(self, command: Command) -> bool:
        return any(cmd is command for cmd in self._active)

    def add_trigger(self, trigger: Trigger):
        """Register a trigger; triggers are evaluated in the order they were added."""
        if not isinstance(trigger, Trigger):
            raise TypeError(f"Expected a Trigger, got {type(trigger).__name__}")
        self._triggers.append(trigger)

    def schedule(self, command: Command):
        """
        Initialize `command` and add it to the active list.

        The first `update()` happens on a later call to `CommandMachine.update()`,
        even when this is called from inside a running cycle.
        """
        ensure_command(command)
        if self.is_scheduled(command):
            # Kept as-is: the instance is re-initialized and tracked twice.
            logger.warning(f"  {command.name} scheduled while already active; "
                           "it will be updated once per active entry.")
        command.init()
        self._active.append(command)
        logger.debug(f"  Scheduled {command.name} (active: {len(self._active)})")

    def update(self):
        """Run one scheduling cycle."""
        self.cycle_count += 1
        self._cancelled.clear()

        for command in list(self._active):
            # Cancelled by an earlier command during this cycle.
            if id(command) in self._cancelled:
                continue
            command.update()
            if command.is_finished():
                self._retire(command)
        self._cancelled.clear()

        for trigger in self._triggers:
            triggered = trigger.check()
            if triggered is not None:
                logger.info(f"Trigger fired: scheduling {triggered.name} "
                            f"(cycle {self.cycle_count})")
                self.schedule(triggered)

    def _retire(self, command: Command):
        for i, cmd in enumerate(self._active):
            if cmd is command:
                del self._active[i]
                logger.debug(f"  Retired {command.name} (cycle {self.cycle_count})")
                return

    def cancel(self, command: Command) -> bool:
        """
        Drop `command` from the active list without waiting for it to finish.

        Every active entry of the instance is removed and its `cancel()` hook
        runs once.

        Returns:
            True if the command was active, False otherwise.
        """
        if not self.is_scheduled(command):
            return False
        self._active = [cmd for cmd in self._active if cmd is not command]
        self._cancelled.add(id(command))
        logger.info(f"Cancelled {command.name} (cycle {self.cycle_count})")
        command.cancel()
        return True

    def cancel_all(self):
        """Cancel every active command, in scheduling order."""
        for command in list(self._active):
            self.cancel(command)

    def get_snapshot(self) -> MachineSnapshot:
        return MachineSnapshot(
            cycle_count=self.cycle_count,
            active_commands=tuple(cmd.name for cmd in self._active),
            trigger_count=len(self._triggers),
        )
