"""Playback clock: turns elapsed time into a beat position.

The clock does not read wall time; whoever drives playback calls
``tick(seconds)`` with the frame delta and feeds ``current_beat`` into
``FormationStore.get_interpolated_positions``.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from drillbook.core.catalog.models import SongData

logger = logging.getLogger(__name__)


@runtime_checkable
class PlaybackClock(Protocol):
    """Supplies a monotonically advancing beat while playing."""

    @property
    def current_beat(self) -> float: ...

    @property
    def current_bpm(self) -> float: ...

    def seek(self, beat: float) -> None: ...


class TempoClock:
    """Beat clock that follows a song's tempo map.

    Args:
        song: Song whose tempo changes and length drive the clock. Without
            one the clock runs at ``bpm`` forever.
        bpm: Tempo used when no song is given

    Example:
        >>> clock = TempoClock(bpm=120)
        >>> clock.play()
        >>> clock.tick(1.5)
        >>> clock.current_beat
        3.0
    """

    def __init__(self, song: SongData | None = None, bpm: float = 120.0) -> None:
        if bpm <= 0:
            raise ValueError(f"bpm must be positive, got {bpm}")
        self._song = song
        self._base_bpm = song.bpm if song is not None else float(bpm)
        self._beat = 0.0
        self._playing = False
        self._finished = False

    @property
    def current_beat(self) -> float:
        return self._beat

    @property
    def current_bpm(self) -> float:
        if self._song is not None:
            return self._song.bpm_at_beat(self._beat)
        return self._base_bpm

    @property
    def current_measure(self) -> int:
        per_measure = self._song.beats_per_measure if self._song is not None else 4
        return int(self._beat // per_measure)

    @property
    def total_beats(self) -> float:
        """Song length in beats (0 when unbounded)."""
        return self._song.total_beats if self._song is not None else 0.0

    @property
    def progress(self) -> float:
        """Fraction of the song played, in [0, 1] (0 when unbounded)."""
        total = self.total_beats
        return self._beat / total if total > 0 else 0.0

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_finished(self) -> bool:
        return self._finished

    def play(self) -> None:
        if self._finished:
            self._beat = 0.0
            self._finished = False
        self._playing = True

    def pause(self) -> None:
        self._playing = False

    def stop(self) -> None:
        self._playing = False
        self._finished = False
        self._beat = 0.0

    def seek(self, beat: float) -> None:
        """Jump to ``beat``, clamped to the song length when there is one."""
        beat = max(0.0, float(beat))
        if self.total_beats > 0:
            beat = min(beat, self.total_beats)
        self._beat = beat
        self._finished = False

    def tick(self, seconds: float) -> float:
        """Advance by ``seconds`` of playback time if playing.

        The tempo is sampled at the current beat, so a tempo ramp is
        followed piecewise at frame resolution.

        Returns:
            The new current beat
        """
        if not self._playing or seconds <= 0:
            return self._beat

        self._beat += seconds * self.current_bpm / 60.0

        total = self.total_beats
        if total > 0 and self._beat >= total:
            self._beat = total
            self._playing = False
            self._finished = True
            logger.debug("Playback reached end of song at beat %.2f", total)

        return self._beat
