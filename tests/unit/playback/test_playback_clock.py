"""Tests for the tempo-following playback clock."""

from __future__ import annotations

import pytest

from drillbook.core.catalog.models import SongData, TempoChange
from drillbook.core.playback import PlaybackClock, TempoClock


@pytest.fixture
def song() -> SongData:
    return SongData(
        id="fight",
        bpm=120,
        total_beats=64,
        beats_per_measure=4,
        tempo_changes=[TempoChange(at_beat=32, new_bpm=60)],
    )


class TestTempoClock:
    def test_satisfies_protocol(self):
        assert isinstance(TempoClock(), PlaybackClock)

    def test_rejects_non_positive_bpm(self):
        with pytest.raises(ValueError):
            TempoClock(bpm=0)

    def test_tick_only_while_playing(self):
        clock = TempoClock(bpm=120)

        assert clock.tick(1.0) == 0.0
        clock.play()
        assert clock.tick(1.5) == pytest.approx(3.0)
        clock.pause()
        assert clock.tick(10.0) == pytest.approx(3.0)

    def test_unbounded_without_song(self):
        clock = TempoClock(bpm=60)
        clock.play()
        clock.tick(600.0)

        assert clock.current_beat == pytest.approx(600.0)
        assert not clock.is_finished
        assert clock.progress == 0.0

    def test_follows_tempo_map(self, song: SongData):
        clock = TempoClock(song)
        clock.seek(32)
        clock.play()

        assert clock.current_bpm == 60
        clock.tick(2.0)
        assert clock.current_beat == pytest.approx(34.0)

    def test_finishes_at_song_end(self, song: SongData):
        clock = TempoClock(song)
        clock.seek(60)
        clock.play()

        clock.tick(30.0)

        assert clock.current_beat == 64
        assert clock.is_finished
        assert not clock.is_playing
        assert clock.progress == 1.0

    def test_play_after_finish_restarts(self, song: SongData):
        clock = TempoClock(song)
        clock.seek(64)
        clock.play()
        clock.tick(1.0)

        clock.play()

        assert clock.current_beat == 0.0
        assert clock.is_playing

    def test_seek_is_clamped(self, song: SongData):
        clock = TempoClock(song)

        clock.seek(-4)
        assert clock.current_beat == 0.0
        clock.seek(1000)
        assert clock.current_beat == 64

    def test_measure_and_stop(self, song: SongData):
        clock = TempoClock(song)
        clock.seek(9)

        assert clock.current_measure == 2

        clock.stop()
        assert clock.current_beat == 0.0
        assert not clock.is_playing
