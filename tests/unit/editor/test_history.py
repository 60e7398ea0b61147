"""Tests for CommandHistory undo/redo semantics."""

from __future__ import annotations

import pytest

from drillbook.core.drill.store import FormationStore
from drillbook.core.editor.commands import EditorCommand, MoveFormationCommand, MoveMemberCommand
from drillbook.core.editor.history import CommandHistory


class RecordingCommand(EditorCommand):
    """Command that logs do/undo calls to a shared list."""

    def __init__(self, store: FormationStore, name: str, log: list[str]) -> None:
        super().__init__(store)
        self.name = name
        self.log = log

    @property
    def description(self) -> str:
        return self.name

    def do(self) -> None:
        self.log.append(f"do:{self.name}")

    def undo(self) -> None:
        self.log.append(f"undo:{self.name}")


@pytest.fixture
def history() -> CommandHistory:
    return CommandHistory()


class TestExecuteUndoRedo:
    """Core stack behaviour."""

    def test_execute_then_undo_restores_state(self, store: FormationStore, two_sets, history):
        a, _ = two_sets
        before = store.active_chart.model_dump(exclude={"last_modified_date"})

        history.execute(MoveMemberCommand(store, a.id, "m1", (70.0, 10.0), 180.0))
        after = store.active_chart.model_dump(exclude={"last_modified_date"})
        history.undo()

        assert store.active_chart.model_dump(exclude={"last_modified_date"}) == before

        history.redo()
        assert store.active_chart.model_dump(exclude={"last_modified_date"}) == after

    def test_execute_after_undo_clears_redo(self, store: FormationStore, history):
        log: list[str] = []
        history.execute(RecordingCommand(store, "a", log))
        history.undo()
        assert history.can_redo

        history.execute(RecordingCommand(store, "b", log))

        assert not history.can_redo
        assert history.redo_count == 0
        history.redo()
        assert log == ["do:a", "undo:a", "do:b"]

    def test_undo_redo_on_empty_stacks_are_noops(self, history):
        history.undo()
        history.redo()

        assert history.undo_count == 0
        assert history.redo_count == 0

    def test_undo_order_is_lifo(self, store: FormationStore, history):
        log: list[str] = []
        for name in "abc":
            history.execute(RecordingCommand(store, name, log))
        log.clear()

        history.undo()
        history.undo()
        history.redo()

        assert log == ["undo:c", "undo:b", "do:b"]
        assert history.undo_description == "b"
        assert history.redo_description == "c"

    def test_capacity_drops_oldest(self, store: FormationStore):
        history = CommandHistory(max_history=3)
        log: list[str] = []
        for i in range(5):
            history.execute(RecordingCommand(store, str(i), log))

        assert history.undo_count == 3
        for _ in range(5):
            history.undo()
        assert [e for e in log if e.startswith("undo")] == ["undo:4", "undo:3", "undo:2"]

    def test_default_capacity_is_100(self, history):
        assert history.max_history == 100

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            CommandHistory(max_history=0)

    def test_clear(self, store: FormationStore, history):
        history.execute(RecordingCommand(store, "a", []))
        history.undo()
        history.execute(RecordingCommand(store, "b", []))

        history.clear()

        assert not history.can_undo
        assert not history.can_redo
        assert history.undo_description is None


class TestNotifications:
    """History-changed subscription."""

    def test_changed_fires_on_every_transition(self, store: FormationStore, history):
        calls: list[int] = []
        history.subscribe(lambda: calls.append(history.undo_count))

        history.execute(RecordingCommand(store, "a", []))
        history.undo()
        history.redo()
        history.undo()  # one entry, still a transition
        history.undo()  # empty: no-op, no event

        assert calls == [1, 0, 1, 0]

    def test_cancelled_subscription_stops_events(self, store: FormationStore, history):
        calls: list[str] = []
        sub = history.subscribe(lambda: calls.append("x"))
        sub.cancel()

        history.execute(RecordingCommand(store, "a", []))

        assert calls == []

    def test_execute_during_undo_is_rejected(self, store: FormationStore, two_sets, history):
        a, _ = two_sets

        class ReentrantUndo(RecordingCommand):
            def undo(self) -> None:
                history.execute(MoveFormationCommand(store, a.id, 32.0))

        history.execute(ReentrantUndo(store, "r", []))

        with pytest.raises(RuntimeError):
            history.undo()
