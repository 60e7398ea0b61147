"""Commands that move or resize formation blocks on the timeline."""

from __future__ import annotations

from drillbook.core.drill.store import FormationStore
from drillbook.core.editor.commands.base import EditorCommand


class MoveFormationCommand(EditorCommand):
    """Shift a formation to a new start beat (duration unchanged)."""

    def __init__(self, store: FormationStore, formation_id: str, new_start_beat: float) -> None:
        super().__init__(store)
        self.formation_id = formation_id
        self.new_start_beat = float(new_start_beat)

        formation = store.get_formation(formation_id)
        self.old_start_beat = formation.start_beat if formation is not None else None
        self.old_index = store.active_chart.index_of(formation_id) if formation is not None else -1

    @property
    def description(self) -> str:
        return f"Move formation to beat {self.new_start_beat:.1f}"

    def do(self) -> None:
        self._store.update_formation(self.formation_id, start_beat=self.new_start_beat)

    def undo(self) -> None:
        if self.old_start_beat is None:
            return
        self._store.update_formation(self.formation_id, start_beat=self.old_start_beat)
        # the stable re-sort puts a formation after peers sharing its beat
        self._store.reorder_formation(self.formation_id, self.old_index)


class ResizeFormationCommand(EditorCommand):
    """Change a formation's start and hold length together (edge drag)."""

    def __init__(
        self,
        store: FormationStore,
        formation_id: str,
        new_start_beat: float,
        new_duration_beats: float,
    ) -> None:
        super().__init__(store)
        self.formation_id = formation_id
        self.new_start_beat = float(new_start_beat)
        self.new_duration_beats = float(new_duration_beats)

        formation = store.get_formation(formation_id)
        self.old_start_beat = formation.start_beat if formation is not None else None
        self.old_index = store.active_chart.index_of(formation_id) if formation is not None else -1
        self.old_duration_beats = formation.duration_beats if formation is not None else None

    @property
    def description(self) -> str:
        return f"Resize formation to {self.new_duration_beats:.1f} beats"

    def do(self) -> None:
        self._store.update_formation(
            self.formation_id,
            start_beat=self.new_start_beat,
            duration_beats=self.new_duration_beats,
        )

    def undo(self) -> None:
        if self.old_start_beat is None:
            return
        self._store.update_formation(
            self.formation_id,
            start_beat=self.old_start_beat,
            duration_beats=self.old_duration_beats,
        )
        self._store.reorder_formation(self.formation_id, self.old_index)
