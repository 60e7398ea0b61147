"""Band roster models.

The roster is read-only from the point of view of the editing core; the
scoring engine consults member skill ratings (0-1) when grading a run.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InstrumentType(str, Enum):
    """Instrument (or guard equipment) assigned to a member."""

    # Brass
    TRUMPET = "trumpet"
    TROMBONE = "trombone"
    FRENCH_HORN = "french_horn"
    TUBA = "tuba"
    SOUSAPHONE = "sousaphone"
    BARITONE = "baritone"
    MELLOPHONE = "mellophone"
    # Woodwind
    FLUTE = "flute"
    PICCOLO = "piccolo"
    CLARINET = "clarinet"
    SAXOPHONE = "saxophone"
    # Battery percussion
    SNARE_DRUM = "snare_drum"
    BASS_DRUM = "bass_drum"
    TENOR_DRUMS = "tenor_drums"
    CYMBALS = "cymbals"
    # Front ensemble / pit
    XYLOPHONE = "xylophone"
    MARIMBA = "marimba"
    VIBRAPHONE = "vibraphone"
    TIMPANI = "timpani"
    # Color guard
    FLAG = "flag"
    RIFLE = "rifle"
    SABER = "saber"
    # Leadership
    DRUM_MAJOR = "drum_major"


class InstrumentFamily(str, Enum):
    """Section grouping used for template slot preferences."""

    BRASS = "brass"
    WOODWIND = "woodwind"
    BATTERY_PERCUSSION = "battery_percussion"
    FRONT_ENSEMBLE = "front_ensemble"
    COLOR_GUARD = "color_guard"
    LEADERSHIP = "leadership"


class MemberStatus(str, Enum):
    """Availability of a member. Only ACTIVE members perform."""

    ACTIVE = "active"
    INJURED = "injured"
    BENCHED = "benched"
    GRADUATED = "graduated"


class SkillType(str, Enum):
    MUSICIANSHIP = "musicianship"
    MARCHING = "marching"
    STAMINA = "stamina"
    SHOWMANSHIP = "showmanship"


_FAMILY_BY_INSTRUMENT: dict[InstrumentType, InstrumentFamily] = {
    InstrumentType.TRUMPET: InstrumentFamily.BRASS,
    InstrumentType.TROMBONE: InstrumentFamily.BRASS,
    InstrumentType.FRENCH_HORN: InstrumentFamily.BRASS,
    InstrumentType.TUBA: InstrumentFamily.BRASS,
    InstrumentType.SOUSAPHONE: InstrumentFamily.BRASS,
    InstrumentType.BARITONE: InstrumentFamily.BRASS,
    InstrumentType.MELLOPHONE: InstrumentFamily.BRASS,
    InstrumentType.FLUTE: InstrumentFamily.WOODWIND,
    InstrumentType.PICCOLO: InstrumentFamily.WOODWIND,
    InstrumentType.CLARINET: InstrumentFamily.WOODWIND,
    InstrumentType.SAXOPHONE: InstrumentFamily.WOODWIND,
    InstrumentType.SNARE_DRUM: InstrumentFamily.BATTERY_PERCUSSION,
    InstrumentType.BASS_DRUM: InstrumentFamily.BATTERY_PERCUSSION,
    InstrumentType.TENOR_DRUMS: InstrumentFamily.BATTERY_PERCUSSION,
    InstrumentType.CYMBALS: InstrumentFamily.BATTERY_PERCUSSION,
    InstrumentType.XYLOPHONE: InstrumentFamily.FRONT_ENSEMBLE,
    InstrumentType.MARIMBA: InstrumentFamily.FRONT_ENSEMBLE,
    InstrumentType.VIBRAPHONE: InstrumentFamily.FRONT_ENSEMBLE,
    InstrumentType.TIMPANI: InstrumentFamily.FRONT_ENSEMBLE,
    InstrumentType.FLAG: InstrumentFamily.COLOR_GUARD,
    InstrumentType.RIFLE: InstrumentFamily.COLOR_GUARD,
    InstrumentType.SABER: InstrumentFamily.COLOR_GUARD,
    InstrumentType.DRUM_MAJOR: InstrumentFamily.LEADERSHIP,
}


def family_of(instrument: InstrumentType) -> InstrumentFamily:
    """Map an instrument to its section family.

    Example:
        >>> family_of(InstrumentType.MELLOPHONE)
        <InstrumentFamily.BRASS: 'brass'>
    """
    return _FAMILY_BY_INSTRUMENT.get(instrument, InstrumentFamily.BRASS)


class BandMember(BaseModel):
    """A single band member with skill ratings in [0, 1].

    Example:
        >>> member = BandMember(id="m1", first_name="Ada", last_name="King",
        ...                     instrument=InstrumentType.TRUMPET, musicianship=0.8)
        >>> member.family
        <InstrumentFamily.BRASS: 'brass'>
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Stable member identifier")
    first_name: str = ""
    last_name: str = ""
    instrument: InstrumentType = InstrumentType.TRUMPET
    year_in_school: int = Field(default=1, ge=1, le=4, description="1 = freshman, 4 = senior")
    status: MemberStatus = MemberStatus.ACTIVE

    musicianship: float = Field(default=0.5, ge=0.0, le=1.0)
    marching: float = Field(default=0.5, ge=0.0, le=1.0)
    stamina: float = Field(default=0.5, ge=0.0, le=1.0)
    showmanship: float = Field(default=0.5, ge=0.0, le=1.0)

    experience: int = Field(default=0, ge=0)
    morale: int = Field(default=50, ge=0, le=100)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def family(self) -> InstrumentFamily:
        return family_of(self.instrument)

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    @property
    def overall_rating(self) -> float:
        """Unweighted mean of the four skills."""
        return (self.musicianship + self.marching + self.stamina + self.showmanship) / 4.0

    def get_skill(self, skill: SkillType) -> float:
        return float(getattr(self, skill.value))

    def set_skill(self, skill: SkillType, value: float) -> None:
        """Set a skill rating, clamped to [0, 1]."""
        setattr(self, skill.value, max(0.0, min(1.0, float(value))))


class Roster(BaseModel):
    """Collection of band members for one school."""

    model_config = ConfigDict(extra="ignore")

    school_id: str = ""
    members: list[BandMember] = Field(default_factory=list)
    budget: int = 0
    reputation: int = Field(default=50, ge=0, le=100)

    @property
    def active_members(self) -> list[BandMember]:
        return [m for m in self.members if m.is_active]

    def average_skill(self, skill: SkillType, default: float = 0.5) -> float:
        """Mean rating of ``skill`` over active members.

        Args:
            skill: Skill to average
            default: Value returned when there are no active members

        Returns:
            Average rating in [0, 1]
        """
        active = self.active_members
        if not active:
            return default
        return sum(m.get_skill(skill) for m in active) / len(active)
