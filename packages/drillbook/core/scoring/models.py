"""Scoring data: per-beat performance frames in, a graded ShowScore out."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from drillbook.core.utils.math import distance

# Lower bound of each grade, highest first.
GRADE_LADDER: tuple[tuple[float, str], ...] = (
    (97.0, "A+"),
    (93.0, "A"),
    (90.0, "A-"),
    (87.0, "B+"),
    (83.0, "B"),
    (80.0, "B-"),
    (77.0, "C+"),
    (73.0, "C"),
    (70.0, "C-"),
    (67.0, "D+"),
    (63.0, "D"),
    (60.0, "D-"),
)


def calculate_grade(score: float) -> str:
    """Letter grade for a 0-100 score.

    Example:
        >>> calculate_grade(97)
        'A+'
        >>> calculate_grade(59.9)
        'F'
    """
    for floor, grade in GRADE_LADDER:
        if score >= floor:
            return grade
    return "F"


class MemberPerformanceSnapshot(BaseModel):
    """One member's execution at one sampled beat."""

    member_id: str
    actual_x: float = 0.0
    actual_y: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0
    position_error: float = Field(default=0.0, ge=0.0, description="Yards from target spot")
    facing_error: float = Field(default=0.0, ge=0.0, description="Degrees off target facing")
    playing_quality: float = Field(default=0.5, ge=0.0, le=1.0)

    @classmethod
    def from_positions(
        cls,
        member_id: str,
        actual: tuple[float, float],
        target: tuple[float, float],
        facing_error: float = 0.0,
        playing_quality: float = 0.5,
    ) -> MemberPerformanceSnapshot:
        """Build a snapshot, deriving ``position_error`` from the two spots."""
        return cls(
            member_id=member_id,
            actual_x=actual[0],
            actual_y=actual[1],
            target_x=target[0],
            target_y=target[1],
            position_error=distance(actual[0], actual[1], target[0], target[1]),
            facing_error=abs(facing_error),
            playing_quality=playing_quality,
        )


class ScoringFrame(BaseModel):
    """All member snapshots sampled at one beat."""

    beat: float
    member_snapshots: list[MemberPerformanceSnapshot] = Field(default_factory=list)


class ScoringNote(BaseModel):
    """A notable moment; negative impact is a deduction."""

    model_config = ConfigDict(frozen=True)

    at_beat: float
    category: str = Field(description="Formation, Music, or Showmanship")
    description: str
    impact: float = 0.0


class ShowScore(BaseModel):
    """Final result of one evaluation. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    overall_score: float = Field(default=0.0, ge=0.0, le=100.0)
    formation_score: float = Field(default=0.0, ge=0.0, le=100.0)
    music_score: float = Field(default=0.0, ge=0.0, le=100.0)
    showmanship_score: float = Field(default=0.0, ge=0.0, le=100.0)
    difficulty_bonus: float = Field(default=0.0, ge=0.0)
    grade: str = "F"
    notes: tuple[ScoringNote, ...] = ()
