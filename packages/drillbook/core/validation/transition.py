"""March feasibility between consecutive formations.

Pure functions: nothing here reads or mutates store state. Cheap enough
to run after every edit for live feedback.
"""

from __future__ import annotations

from enum import Enum
import logging
import math

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from drillbook.core.drill.models import Chart, Formation

logger = logging.getLogger(__name__)

# Max member speed (yards/second) for each bucket; upper bounds are inclusive.
NORMAL_SPEED_LIMIT = 2.5
FAST_SPEED_LIMIT = 4.0
HARD_SPEED_LIMIT = 5.0


class TransitionSeverity(str, Enum):
    NORMAL = "normal"
    FAST = "fast"
    HARD = "hard"
    IMPOSSIBLE = "impossible"


_LABELS = {
    TransitionSeverity.NORMAL: "Normal",
    TransitionSeverity.FAST: "Fast",
    TransitionSeverity.HARD: "Hard",
    TransitionSeverity.IMPOSSIBLE: "Impossible",
}


class TransitionResult(BaseModel):
    """Outcome of checking one formation-to-formation march."""

    model_config = ConfigDict(frozen=True)

    max_speed: float = Field(description="Fastest member speed in yards/second (inf when no time)")
    average_speed: float = Field(default=0.0, description="Mean speed over shared members")
    fastest_member_id: str | None = Field(default=None, description="Member with max_speed")
    gap_beats: float = Field(default=0.0, ge=0.0)
    gap_seconds: float = Field(default=0.0, ge=0.0)
    severity: TransitionSeverity

    @property
    def is_feasible(self) -> bool:
        return self.severity is not TransitionSeverity.IMPOSSIBLE


def get_severity(max_speed: float) -> TransitionSeverity:
    """Bucket a max speed; each threshold belongs to the safer bucket."""
    if max_speed <= NORMAL_SPEED_LIMIT:
        return TransitionSeverity.NORMAL
    if max_speed <= FAST_SPEED_LIMIT:
        return TransitionSeverity.FAST
    if max_speed <= HARD_SPEED_LIMIT:
        return TransitionSeverity.HARD
    return TransitionSeverity.IMPOSSIBLE


def severity_label(severity: TransitionSeverity) -> str:
    return _LABELS[severity]


def validate_transition(from_formation: Formation, to_formation: Formation, bpm: float) -> TransitionResult:
    """Check whether members can march from one set to the next in time.

    Only members present in both formations are measured. With no time to
    move (overlapping sets, zero gap, or a non-positive BPM) the result is
    Impossible with an infinite max speed.

    Args:
        from_formation: Earlier formation
        to_formation: Following formation
        bpm: Tempo used to convert the beat gap to seconds

    Returns:
        TransitionResult with speeds, gap, and severity

    Example:
        >>> result = validate_transition(opener, set2, bpm=120)
        >>> result.severity
        <TransitionSeverity.NORMAL: 'normal'>
    """
    gap_beats = max(0.0, to_formation.start_beat - from_formation.hold_end_beat)
    gap_seconds = gap_beats * 60.0 / bpm if bpm > 0 else 0.0

    if gap_seconds <= 0:
        if bpm <= 0:
            logger.warning("validate_transition called with non-positive BPM %.2f", bpm)
        return TransitionResult(
            max_speed=math.inf,
            gap_beats=gap_beats,
            gap_seconds=0.0,
            severity=TransitionSeverity.IMPOSSIBLE,
        )

    targets = {p.member_id: p for p in to_formation.positions}
    member_ids: list[str] = []
    starts: list[tuple[float, float]] = []
    ends: list[tuple[float, float]] = []
    for pos in from_formation.positions:
        target = targets.get(pos.member_id)
        if target is None:
            continue
        member_ids.append(pos.member_id)
        starts.append(pos.field_position)
        ends.append(target.field_position)

    if not member_ids:
        return TransitionResult(
            max_speed=0.0,
            gap_beats=gap_beats,
            gap_seconds=gap_seconds,
            severity=TransitionSeverity.NORMAL,
        )

    distances = np.linalg.norm(np.asarray(ends) - np.asarray(starts), axis=1)
    speeds = distances / gap_seconds
    fastest = int(np.argmax(speeds))
    max_speed = float(speeds[fastest])

    return TransitionResult(
        max_speed=max_speed,
        average_speed=float(np.mean(speeds)),
        fastest_member_id=member_ids[fastest] if max_speed > 0 else None,
        gap_beats=gap_beats,
        gap_seconds=gap_seconds,
        severity=get_severity(max_speed),
    )


def validate_chart(chart: Chart, bpm: float) -> list[TransitionResult]:
    """Validate every adjacent formation pair, in timeline order."""
    formations = chart.formations
    return [validate_transition(a, b, bpm) for a, b in zip(formations, formations[1:])]
