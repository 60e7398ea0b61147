"""Base contract for reversible editor commands.

A command captures, when it is constructed, value copies of whatever
prior state it needs to undo itself. ``do`` may be called again after
``undo`` (redo) and must reproduce the same post-state.

Commands are expected not to raise. There is no automatic rollback: if
``do`` fails part-way, the command itself is responsible for leaving the
chart consistent.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from drillbook.core.drill.store import FormationStore


class EditorCommand(ABC):
    """A unit of user edit work with do/undo."""

    def __init__(self, store: FormationStore) -> None:
        self._store = store

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable label shown in undo/redo menus."""

    @abstractmethod
    def do(self) -> None:
        """Apply the edit."""

    @abstractmethod
    def undo(self) -> None:
        """Revert the edit using the state captured at construction."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"
