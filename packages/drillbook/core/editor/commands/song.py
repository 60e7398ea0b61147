"""Command that swaps the song a chart is written for."""

from __future__ import annotations

from drillbook.core.drill.store import FormationStore
from drillbook.core.editor.commands.base import EditorCommand


class ChangeSongCommand(EditorCommand):
    """Point the chart at another song.

    The new song is placed from beat 0 to ``song_end_beat`` at full
    volume; undo restores the previous song id, placement, and volume.
    """

    def __init__(self, store: FormationStore, new_song_id: str, song_end_beat: float = 0.0) -> None:
        super().__init__(store)
        self.new_song_id = new_song_id
        self.song_end_beat = float(song_end_beat)

        chart = store.active_chart
        audio = chart.audio_timeline if chart is not None else None
        self.old_song_id = chart.song_id if chart is not None else ""
        self.old_start_beat = audio.song_start_beat if audio is not None else 0.0
        self.old_end_beat = audio.song_end_beat if audio is not None else 0.0
        self.old_volume = audio.song_volume if audio is not None else 1.0

    @property
    def description(self) -> str:
        return "Change song"

    def do(self) -> None:
        self._store.set_song(self.new_song_id, 0.0, self.song_end_beat, 1.0)

    def undo(self) -> None:
        self._store.set_song(self.old_song_id, self.old_start_beat, self.old_end_beat, self.old_volume)
