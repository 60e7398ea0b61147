"""Transition feasibility checks."""

from drillbook.core.validation.transition import (
    FAST_SPEED_LIMIT,
    HARD_SPEED_LIMIT,
    NORMAL_SPEED_LIMIT,
    TransitionResult,
    TransitionSeverity,
    get_severity,
    severity_label,
    validate_chart,
    validate_transition,
)

__all__ = [
    "FAST_SPEED_LIMIT",
    "HARD_SPEED_LIMIT",
    "NORMAL_SPEED_LIMIT",
    "TransitionResult",
    "TransitionSeverity",
    "get_severity",
    "severity_label",
    "validate_chart",
    "validate_transition",
]
