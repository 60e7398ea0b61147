"""Drill chart timeline: models, field geometry, and the formation store."""

from drillbook.core.drill.models import (
    AudioRegion,
    AudioTimeline,
    AudioTrack,
    Chart,
    ChartSummary,
    Formation,
    FormationTemplate,
    MemberPosition,
    TemplateSlot,
    TransitionType,
)
from drillbook.core.drill.store import FormationStore, interpolate_formations
from drillbook.core.drill.templates import create_template_mapping

__all__ = [
    "AudioRegion",
    "AudioTimeline",
    "AudioTrack",
    "Chart",
    "ChartSummary",
    "Formation",
    "FormationStore",
    "FormationTemplate",
    "MemberPosition",
    "TemplateSlot",
    "TransitionType",
    "create_template_mapping",
    "interpolate_formations",
]
