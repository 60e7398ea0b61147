"""Commands that place, move, and remove members within a formation."""

from __future__ import annotations

from drillbook.core.drill.models import MemberPosition
from drillbook.core.drill.store import FormationStore
from drillbook.core.editor.commands.base import EditorCommand


class _MemberCommand(EditorCommand):
    """Shared capture/restore of a member's prior spot in one formation."""

    def __init__(self, store: FormationStore, formation_id: str, member_id: str) -> None:
        super().__init__(store)
        self.formation_id = formation_id
        self.member_id = member_id

        self._previous: MemberPosition | None = None
        self._previous_index: int | None = None
        formation = store.get_formation(formation_id)
        if formation is not None:
            for i, pos in enumerate(formation.positions):
                if pos.member_id == member_id:
                    self._previous = pos.model_copy()
                    self._previous_index = i
                    break

    @property
    def previous_position(self) -> MemberPosition | None:
        """Copy of the member's position before this command, if they had one."""
        return self._previous

    def _restore_previous(self) -> None:
        if self._previous is None:
            self._store.remove_member_from_formation(self.formation_id, self.member_id)
            return
        self._store.set_member_position(
            self.formation_id,
            self.member_id,
            self._previous.field_position,
            self._previous.facing_angle,
            index=self._previous_index,
        )


class MoveMemberCommand(_MemberCommand):
    """Drag a member to a new spot (and facing) in a formation."""

    def __init__(
        self,
        store: FormationStore,
        formation_id: str,
        member_id: str,
        new_position: tuple[float, float],
        new_facing: float,
    ) -> None:
        super().__init__(store, formation_id, member_id)
        self.new_position = (float(new_position[0]), float(new_position[1]))
        self.new_facing = float(new_facing)

    @property
    def description(self) -> str:
        return f"Move member {self.member_id}"

    def do(self) -> None:
        self._store.set_member_position(
            self.formation_id, self.member_id, self.new_position, self.new_facing
        )

    def undo(self) -> None:
        self._restore_previous()


class PlaceMemberCommand(_MemberCommand):
    """Drop a member onto the field for a formation.

    Undo removes the member again, unless they already had a spot before
    the placement, in which case that spot is restored.
    """

    def __init__(
        self,
        store: FormationStore,
        formation_id: str,
        member_id: str,
        position: tuple[float, float],
        facing: float,
    ) -> None:
        super().__init__(store, formation_id, member_id)
        self.position = (float(position[0]), float(position[1]))
        self.facing = float(facing)

    @property
    def description(self) -> str:
        return f"Place member {self.member_id}"

    def do(self) -> None:
        self._store.set_member_position(
            self.formation_id, self.member_id, self.position, self.facing
        )

    def undo(self) -> None:
        self._restore_previous()


class RemoveMemberCommand(_MemberCommand):
    """Take a member out of a formation; undo puts them back where they were."""

    @property
    def description(self) -> str:
        return f"Remove member {self.member_id}"

    def do(self) -> None:
        self._store.remove_member_from_formation(self.formation_id, self.member_id)

    def undo(self) -> None:
        if self._previous is not None:
            self._restore_previous()
