"""Commands that edit audio marker regions on SFX tracks."""

from __future__ import annotations

from drillbook.core.drill.models import AudioRegion
from drillbook.core.drill.store import FormationStore
from drillbook.core.editor.commands.base import EditorCommand


def _find_region(store: FormationStore, track_id: str, region_id: str) -> tuple[AudioRegion, int] | None:
    chart = store.active_chart
    if chart is None:
        return None
    track = chart.audio_timeline.get_track(track_id)
    if track is None:
        return None
    for i, region in enumerate(track.regions):
        if region.id == region_id:
            return region, i
    return None


class AddAudioRegionCommand(EditorCommand):
    """Drop a new sound-effect region onto a track."""

    def __init__(self, store: FormationStore, track_id: str, region: AudioRegion) -> None:
        super().__init__(store)
        self.track_id = track_id
        self.region = region.model_copy(deep=True)

    @property
    def description(self) -> str:
        return f"Add audio region '{self.region.label}'"

    def do(self) -> None:
        self._store.add_audio_region(self.track_id, self.region)

    def undo(self) -> None:
        self._store.remove_audio_region(self.track_id, self.region.id)


class RemoveAudioRegionCommand(EditorCommand):
    """Delete a region; undo re-inserts it at its original index."""

    def __init__(self, store: FormationStore, track_id: str, region_id: str) -> None:
        super().__init__(store)
        self.track_id = track_id
        self.region_id = region_id

        found = _find_region(store, track_id, region_id)
        self._saved: AudioRegion | None = found[0].model_copy(deep=True) if found else None
        self._saved_index: int | None = found[1] if found else None

    @property
    def description(self) -> str:
        label = self._saved.label if self._saved is not None else self.region_id
        return f"Remove audio region '{label}'"

    def do(self) -> None:
        self._store.remove_audio_region(self.track_id, self.region_id)

    def undo(self) -> None:
        if self._saved is not None:
            self._store.add_audio_region(self.track_id, self._saved, index=self._saved_index)


class MoveAudioRegionCommand(EditorCommand):
    """Slide a region to a new start beat."""

    def __init__(
        self, store: FormationStore, track_id: str, region_id: str, new_start_beat: float
    ) -> None:
        super().__init__(store)
        self.track_id = track_id
        self.region_id = region_id
        self.new_start_beat = float(new_start_beat)

        found = _find_region(store, track_id, region_id)
        self.old_start_beat = found[0].start_beat if found else None

    @property
    def description(self) -> str:
        return f"Move audio region to beat {self.new_start_beat:.1f}"

    def do(self) -> None:
        self._store.update_audio_region(
            self.track_id, self.region_id, start_beat=self.new_start_beat
        )

    def undo(self) -> None:
        if self.old_start_beat is not None:
            self._store.update_audio_region(
                self.track_id, self.region_id, start_beat=self.old_start_beat
            )


class ResizeAudioRegionCommand(EditorCommand):
    """Change a region's start and length together."""

    def __init__(
        self,
        store: FormationStore,
        track_id: str,
        region_id: str,
        new_start_beat: float,
        new_duration_beats: float,
    ) -> None:
        super().__init__(store)
        self.track_id = track_id
        self.region_id = region_id
        self.new_start_beat = float(new_start_beat)
        self.new_duration_beats = float(new_duration_beats)

        found = _find_region(store, track_id, region_id)
        self.old_start_beat = found[0].start_beat if found else None
        self.old_duration_beats = found[0].duration_beats if found else None

    @property
    def description(self) -> str:
        return f"Resize audio region to {self.new_duration_beats:.1f} beats"

    def do(self) -> None:
        self._store.update_audio_region(
            self.track_id,
            self.region_id,
            start_beat=self.new_start_beat,
            duration_beats=self.new_duration_beats,
        )

    def undo(self) -> None:
        if self.old_start_beat is None:
            return
        self._store.update_audio_region(
            self.track_id,
            self.region_id,
            start_beat=self.old_start_beat,
            duration_beats=self.old_duration_beats,
        )
