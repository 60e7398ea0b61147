"""Song metadata resolved from the content catalog."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TempoChange(BaseModel):
    """A tempo change at ``at_beat``, ramped over ``transition_beats`` (0 = instant)."""

    model_config = ConfigDict(extra="ignore")

    at_beat: float = Field(ge=0.0)
    new_bpm: float = Field(gt=0.0)
    transition_beats: float = Field(default=0.0, ge=0.0)


class SongData(BaseModel):
    """Read-only description of a song a chart can be written for.

    Example:
        >>> song = SongData(id="fight", title="Fight Song", bpm=120,
        ...                 tempo_changes=[TempoChange(at_beat=64, new_bpm=140, transition_beats=4)])
        >>> song.bpm_at_beat(66)
        130.0
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    composer: str = ""
    arranger: str = ""
    bpm: float = Field(default=120.0, gt=0.0)
    beats_per_measure: int = Field(default=4, ge=1, description="Time signature numerator")
    beat_unit: int = Field(default=4, ge=1, description="Time signature denominator")
    total_beats: float = Field(default=0.0, ge=0.0)
    duration_seconds: float = Field(default=0.0, ge=0.0)
    difficulty: int = Field(default=1, ge=1, le=10)
    tempo_changes: list[TempoChange] = Field(default_factory=list)

    @property
    def total_measures(self) -> float:
        return self.total_beats / self.beats_per_measure

    def bpm_at_beat(self, beat: float) -> float:
        """Tempo in effect at ``beat``.

        Changes are applied in list order. Inside a change's transition
        the tempo ramps linearly from the previous value to ``new_bpm``.
        """
        current = self.bpm
        for change in self.tempo_changes:
            if beat >= change.at_beat + change.transition_beats:
                current = change.new_bpm
            elif beat >= change.at_beat:
                progress = (beat - change.at_beat) / change.transition_beats
                current = current + (change.new_bpm - current) * progress
                break
        return current
