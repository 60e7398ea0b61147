"""Timeline data model for drill charts.

A Chart is an ordered sequence of Formations (ascending ``start_beat``);
each Formation holds one MemberPosition per member. These are plain
pydantic models: all mutation of a live chart goes through
``FormationStore`` so that ordering, clamping, and change notifications
stay consistent.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from drillbook.core.drill.field import FIELD_LENGTH_YARDS, FIELD_WIDTH_YARDS
from drillbook.core.roster.models import InstrumentFamily


def new_id() -> str:
    """Generate a new random identifier."""
    return str(uuid4())


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string."""
    return datetime.now(UTC).isoformat()


class TransitionType(str, Enum):
    """How members travel into a formation."""

    SNAP = "snap"
    LINEAR_MARCH = "linear_march"
    CURVED_MARCH = "curved_march"
    SCATTER = "scatter"
    CUSTOM = "custom"


class MemberPosition(BaseModel):
    """Where one member stands in a formation.

    Attributes:
        member_id: Back-reference to a roster member (no ownership).
        field_x: Yards from the left end zone, 0-100.
        field_y: Yards from the home sideline, 0-53.33.
        facing_angle: Degrees, 0 = toward the home side.
    """

    model_config = ConfigDict(extra="ignore")

    member_id: str
    field_x: float = Field(default=0.0, ge=0.0, le=FIELD_LENGTH_YARDS)
    field_y: float = Field(default=0.0, ge=0.0, le=FIELD_WIDTH_YARDS)
    facing_angle: float = 0.0

    @property
    def field_position(self) -> tuple[float, float]:
        return (self.field_x, self.field_y)


class Formation(BaseModel):
    """A named arrangement of members held at a point on the timeline.

    The formation is reached at ``start_beat`` and held for
    ``duration_beats``; the gap up to the next formation's start is the
    transition window.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    label: str = ""
    start_beat: float = 0.0
    duration_beats: float = Field(default=0.0, ge=0.0)
    transition_in: TransitionType = TransitionType.LINEAR_MARCH
    positions: list[MemberPosition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_unique_members(self) -> Formation:
        seen: set[str] = set()
        for pos in self.positions:
            if pos.member_id in seen:
                raise ValueError(
                    f"Formation {self.id!r}: duplicate position for member {pos.member_id!r}"
                )
            seen.add(pos.member_id)
        return self

    @property
    def hold_end_beat(self) -> float:
        """Beat at which the hold ends and the transition onward begins."""
        return self.start_beat + self.duration_beats

    @property
    def member_ids(self) -> list[str]:
        return [p.member_id for p in self.positions]

    def get_position(self, member_id: str) -> MemberPosition | None:
        return next((p for p in self.positions if p.member_id == member_id), None)


class AudioRegion(BaseModel):
    """A sound-effect marker placed on an SFX track."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    sfx_id: str = ""
    label: str = ""
    start_beat: float = 0.0
    duration_beats: float = Field(default=4.0, ge=0.0)
    volume: float = Field(default=1.0, ge=0.0)
    fade_in_beats: float = Field(default=0.0, ge=0.0)
    fade_out_beats: float = Field(default=0.0, ge=0.0)


class AudioTrack(BaseModel):
    """An SFX lane holding audio regions."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    label: str = ""
    volume: float = Field(default=1.0, ge=0.0)
    is_muted: bool = False
    regions: list[AudioRegion] = Field(default_factory=list)

    def get_region(self, region_id: str) -> AudioRegion | None:
        return next((r for r in self.regions if r.id == region_id), None)


class AudioTimeline(BaseModel):
    """Song placement plus SFX tracks for a chart."""

    model_config = ConfigDict(extra="ignore")

    song_id: str = ""
    song_start_beat: float = 0.0
    song_end_beat: float = 0.0
    song_volume: float = Field(default=1.0, ge=0.0)
    sfx_tracks: list[AudioTrack] = Field(default_factory=list)

    def get_track(self, track_id: str) -> AudioTrack | None:
        return next((t for t in self.sfx_tracks if t.id == track_id), None)


class Chart(BaseModel):
    """A complete drill chart for one song.

    Invariant: ``formations`` are sorted ascending by ``start_beat`` and
    formation ids are unique within the chart.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    name: str = ""
    description: str = ""
    song_id: str = ""
    total_duration_beats: float = Field(default=0.0, ge=0.0)
    formations: list[Formation] = Field(default_factory=list)
    audio_timeline: AudioTimeline = Field(default_factory=AudioTimeline)
    created_date: str = Field(default_factory=utc_now_iso)
    last_modified_date: str = Field(default_factory=utc_now_iso)

    @model_validator(mode="after")
    def _validate_unique_formations(self) -> Chart:
        ids = [f.id for f in self.formations]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Chart {self.id!r}: formation ids must be unique")
        return self

    @property
    def formation_count(self) -> int:
        return len(self.formations)

    def get_formation(self, formation_id: str) -> Formation | None:
        return next((f for f in self.formations if f.id == formation_id), None)

    def index_of(self, formation_id: str) -> int:
        """Index of a formation, or -1 if absent."""
        for i, formation in enumerate(self.formations):
            if formation.id == formation_id:
                return i
        return -1

    def get_formation_index_at_beat(self, beat: float) -> int:
        """Index of the last formation starting at or before ``beat``.

        Returns 0 when ``beat`` precedes every formation (or there are none).
        """
        for i in range(len(self.formations) - 1, -1, -1):
            if beat >= self.formations[i].start_beat:
                return i
        return 0

    def get_formation_at_beat(self, beat: float) -> Formation | None:
        """Formation in effect at ``beat``; the first formation if ``beat`` precedes all."""
        if not self.formations:
            return None
        return self.formations[self.get_formation_index_at_beat(beat)]

    def touch(self) -> None:
        """Stamp the last-modified time."""
        self.last_modified_date = utc_now_iso()


class TemplateSlot(BaseModel):
    """One spot in a reusable formation template."""

    model_config = ConfigDict(extra="ignore")

    slot_index: int = Field(ge=0)
    field_x: float = 0.0
    field_y: float = 0.0
    facing_angle: float = 0.0
    preferred_family: InstrumentFamily = Field(
        default=InstrumentFamily.BRASS,
        description="Suggested section for this slot (not required)",
    )


class FormationTemplate(BaseModel):
    """A reusable set of slots that can be stamped onto a formation."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    name: str = ""
    description: str = ""
    author_id: str = ""
    slots: list[TemplateSlot] = Field(default_factory=list)

    @property
    def slot_count(self) -> int:
        return len(self.slots)


class ChartSummary(BaseModel):
    """Lightweight listing entry for a stored chart."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    song_id: str = ""
    formation_count: int = 0
    last_modified: str = ""

    @classmethod
    def from_chart(cls, chart: Chart) -> ChartSummary:
        return cls(
            id=chart.id,
            name=chart.name,
            song_id=chart.song_id,
            formation_count=chart.formation_count,
            last_modified=chart.last_modified_date,
        )
