"""Automatic slot-to-member mapping for formation templates."""

from __future__ import annotations

from collections import Counter, defaultdict
import logging

from drillbook.core.drill.models import FormationTemplate, TemplateSlot
from drillbook.core.roster.models import BandMember, InstrumentFamily

logger = logging.getLogger(__name__)


def create_template_mapping(
    template: FormationTemplate,
    active_members: list[BandMember],
) -> dict[int, str]:
    """Assign roster members to template slots.

    Pass 1 honours each slot's preferred family, handling the families
    with the fewest available members first; within a family the highest
    overall rating wins. Pass 2 fills the remaining slots, in
    slot-index order, with the best-rated unassigned members.

    Args:
        template: Template whose slots need members
        active_members: Candidates (callers pass the roster's active members)

    Returns:
        slot_index -> member_id for every slot that could be filled

    Example:
        >>> mapping = create_template_mapping(template, roster.active_members)
        >>> store.apply_template(formation.id, template, mapping)
    """
    mapping: dict[int, str] = {}
    assigned: set[str] = set()

    available_per_family = Counter(m.family for m in active_members)
    slots_by_family: dict[InstrumentFamily, list[TemplateSlot]] = defaultdict(list)
    for slot in template.slots:
        slots_by_family[slot.preferred_family].append(slot)

    # sorted() is stable, so equally rare families keep first-seen order
    for family in sorted(slots_by_family, key=lambda fam: available_per_family[fam]):
        for slot in slots_by_family[family]:
            best = _best_member(
                m for m in active_members if m.id not in assigned and m.family == family
            )
            if best is not None:
                mapping[slot.slot_index] = best.id
                assigned.add(best.id)

    remaining = sorted(
        (m for m in active_members if m.id not in assigned),
        key=lambda m: m.overall_rating,
        reverse=True,
    )
    unmapped_slots = sorted(
        (s for s in template.slots if s.slot_index not in mapping),
        key=lambda s: s.slot_index,
    )
    for slot, member in zip(unmapped_slots, remaining):
        mapping[slot.slot_index] = member.id

    logger.debug(
        "Mapped %d/%d slots of template %s", len(mapping), template.slot_count, template.id
    )
    return mapping


def _best_member(candidates) -> BandMember | None:
    best: BandMember | None = None
    for member in candidates:
        if best is None or member.overall_rating > best.overall_rating:
            best = member
    return best
