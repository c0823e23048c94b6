"""Bounded linear undo/redo journal of executed commands."""

import logging

from commands import Command
from events import Emitter, HistoryChanged

log = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 100


class CommandHistory:
    """Owns the undo and redo stacks.

    Executing a new command discards everything on the redo stack, so the
    history never branches. When the undo stack outgrows ``max_history_size``
    the oldest entries are dropped and can no longer be undone.
    """

    def __init__(self, max_history_size: int = DEFAULT_MAX_HISTORY):
        self.undo_stack: list[Command] = []
        self.redo_stack: list[Command] = []
        self.max_history_size = max(1, max_history_size)
        self.events = Emitter()

    def _notify(self):
        self.events.emit(HistoryChanged(self.can_undo(), self.can_redo()))

    def _trim(self) -> bool:
        excess = len(self.undo_stack) - self.max_history_size
        if excess <= 0:
            return False
        del self.undo_stack[:excess]
        return True

    def execute_command(self, command: Command):
        command.execute()
        self.undo_stack.append(command)
        self.redo_stack.clear()
        self._trim()
        self._notify()
        log.debug("Executed: %s", command.describe())

    def undo(self) -> Command | None:
        if not self.undo_stack:
            log.debug("Nothing to undo")
            return None
        command = self.undo_stack.pop()
        command.undo()
        self.redo_stack.append(command)
        self._notify()
        log.debug("Undid: %s", command.describe())
        return command

    def redo(self) -> Command | None:
        if not self.redo_stack:
            log.debug("Nothing to redo")
            return None
        command = self.redo_stack.pop()
        command.execute()
        self.undo_stack.append(command)
        self._notify()
        log.debug("Redid: %s", command.describe())
        return command

    def can_undo(self) -> bool:
        return len(self.undo_stack) > 0

    def can_redo(self) -> bool:
        return len(self.redo_stack) > 0

    @property
    def undo_size(self) -> int:
        return len(self.undo_stack)

    @property
    def redo_size(self) -> int:
        return len(self.redo_stack)

    def peek_undo(self) -> str | None:
        return self.undo_stack[-1].describe() if self.undo_stack else None

    def peek_redo(self) -> str | None:
        return self.redo_stack[-1].describe() if self.redo_stack else None

    def clear(self):
        self.undo_stack.clear()
        self.redo_stack.clear()
        self._notify()
        log.debug("History cleared")

    def set_max_history_size(self, size: int):
        self.max_history_size = max(1, size)
        if self._trim():
            self._notify()
