"""Performance scoring."""

from drillbook.core.scoring.engine import EvaluationState, ScoringEngine
from drillbook.core.scoring.models import (
    GRADE_LADDER,
    MemberPerformanceSnapshot,
    ScoringFrame,
    ScoringNote,
    ShowScore,
    calculate_grade,
)

__all__ = [
    "GRADE_LADDER",
    "EvaluationState",
    "MemberPerformanceSnapshot",
    "ScoringEngine",
    "ScoringFrame",
    "ScoringNote",
    "ShowScore",
    "calculate_grade",
]
