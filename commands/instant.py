# commands/instant.py
import logging
from typing import Callable, Optional

from .base import Command

logger = logging.getLogger(__name__)


class InstantCommand(Command):
    """Runs a callable once, on its first update, then reports finished."""

    def __init__(self, action: Callable[[], None], name: Optional[str] = None):
        if not callable(action):
            raise TypeError(f"InstantCommand action must be callable, got {type(action).__name__}")
        self.action = action
        self._label = name
        self._done = False

    @property
    def name(self) -> str:
        return self._label or super().name

    def init(self):
        self._done = False

    def update(self):
        if self._done:
            return
        self.action()
        self._done = True

    def is_finished(self) -> bool:
        return self._done
