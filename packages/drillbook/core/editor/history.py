"""Undo/redo stack for editor commands."""

from __future__ import annotations

from collections import deque
import logging

from drillbook.core.editor.commands.base import EditorCommand
from drillbook.core.events import EventBus, Handler, HistoryEvent, Subscription

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 100


class CommandHistory:
    """Executes commands and keeps them for undo/redo.

    A new ``execute`` clears the redo stack. When the undo stack reaches
    ``max_history`` entries the oldest ones are silently dropped.

    Not reentrant: ``execute`` must not be called while an ``undo`` or
    ``redo`` is in flight (e.g. from a change handler).

    Example:
        >>> history = CommandHistory(max_history=50)
        >>> history.execute(MoveFormationCommand(store, f.id, 16.0))
        >>> history.undo()
        >>> history.can_redo
        True
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY, events: EventBus | None = None) -> None:
        if max_history < 1:
            raise ValueError(f"max_history must be at least 1, got {max_history}")
        self.max_history = max_history
        self.events = events or EventBus()
        self._undo: deque[EditorCommand] = deque(maxlen=max_history)
        self._redo: list[EditorCommand] = []
        self._busy = False

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_count(self) -> int:
        return len(self._undo)

    @property
    def redo_count(self) -> int:
        return len(self._redo)

    @property
    def undo_description(self) -> str | None:
        """Description of the command ``undo`` would revert next."""
        return self._undo[-1].description if self._undo else None

    @property
    def redo_description(self) -> str | None:
        return self._redo[-1].description if self._redo else None

    def subscribe(self, handler: Handler) -> Subscription:
        """Call ``handler()`` after every execute/undo/redo/clear."""
        return self.events.subscribe(HistoryEvent.CHANGED, handler)

    def execute(self, command: EditorCommand) -> None:
        """Apply ``command`` and record it; invalidates any redo entries.

        Raises:
            RuntimeError: If called while an undo or redo is running
        """
        if self._busy:
            raise RuntimeError("CommandHistory.execute called during undo/redo")

        self._busy = True
        try:
            command.do()
        finally:
            self._busy = False

        self._undo.append(command)
        self._redo.clear()
        logger.debug("Executed %r (undo=%d)", command, len(self._undo))
        self.events.emit(HistoryEvent.CHANGED)

    def undo(self) -> None:
        """Revert the most recent command. No-op when there is nothing to undo."""
        if not self._undo:
            return

        command = self._undo.pop()
        self._busy = True
        try:
            command.undo()
        finally:
            self._busy = False

        self._redo.append(command)
        logger.debug("Undid %r", command)
        self.events.emit(HistoryEvent.CHANGED)

    def redo(self) -> None:
        """Re-apply the most recently undone command. No-op when empty."""
        if not self._redo:
            return

        command = self._redo.pop()
        self._busy = True
        try:
            command.do()
        finally:
            self._busy = False

        self._undo.append(command)
        logger.debug("Redid %r", command)
        self.events.emit(HistoryEvent.CHANGED)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self.events.emit(HistoryEvent.CHANGED)
