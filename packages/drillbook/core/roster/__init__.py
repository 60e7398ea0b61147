"""Band roster: members, instruments, and skill ratings."""

from drillbook.core.roster.models import (
    BandMember,
    InstrumentFamily,
    InstrumentType,
    MemberStatus,
    Roster,
    SkillType,
    family_of,
)

__all__ = [
    "BandMember",
    "InstrumentFamily",
    "InstrumentType",
    "MemberStatus",
    "Roster",
    "SkillType",
    "family_of",
]
