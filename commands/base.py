# commands/base.py

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """Base class for command misuse errors."""
    pass


class CommandCompositionError(CommandError):
    """Raised when a composite command is modified after it has been initialized."""
    pass


class Command(ABC):
    """
    Base class for every schedulable unit of behavior.

    Lifecycle, as driven by a CommandMachine or an enclosing composite:
      1. `init()` once when scheduled,
      2. `update()` once per cycle,
      3. `is_finished()` checked after each update; the owner retires the
         command once it reports True.
    """

    @property
    def name(self) -> str:
        """Label used in logs and snapshots."""
        return self.__class__.__name__

    @abstractmethod
    def init(self):
        """Establish initial state (record a start time, reset an index, ...)."""
        pass

    @abstractmethod
    def update(self):
        """Advance one step. Called once per cycle while not finished."""
        pass

    @abstractmethod
    def is_finished(self) -> bool:
        """
        Report completion without side effects.

        Returns:
            True once the command has completed, and from then on until the next
            `init()`. Commands that run until replaced always return False.
        """
        pass

    def cancel(self):
        """Called when an owner drops this command before it finished. No-op by default."""
        pass

    def __repr__(self):
        return f"<{self.name}>"


def ensure_command(obj) -> "Command":
    """Raise TypeError unless `obj` implements the Command contract."""
    if not isinstance(obj, Command):
        raise TypeError(f"Expected a Command, got {type(obj).__name__}")
    return obj
