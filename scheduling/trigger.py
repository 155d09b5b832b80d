# scheduling/trigger.py
import logging
from typing import Callable, Optional

from commands.base import Command, ensure_command

logger = logging.getLogger(__name__)


class Trigger:
    """
    Binds a boolean condition to a command and fires on its rising edge.

    A condition that stays True fires once; it has to read False at least
    once before it can fire again. The target command is referenced, not
    owned, and may be shared with other triggers.
    """

    def __init__(self, condition: Callable[[], bool], command: Command):
        if not callable(condition):
            raise TypeError(
                f"Trigger condition must be callable, got {type(condition).__name__}")
        self.condition = condition
        self.command = ensure_command(command)
        self.last_state = False

    def check(self) -> Optional[Command]:
        """
        Sample the condition once.

        Returns:
            The target command if the condition just went from False to True,
            otherwise None.
        """
        current = bool(self.condition())

        if current and not self.last_state:
            self.last_state = True
            return self.command

        self.last_state = current
        return None

    def __repr__(self):
        return f"<Trigger -> {self.command.name} last_state={self.last_state}>"
