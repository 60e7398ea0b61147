"""Tests for automatic template slot mapping."""

from __future__ import annotations

from drillbook.core.drill.models import FormationTemplate, TemplateSlot
from drillbook.core.drill.templates import create_template_mapping
from drillbook.core.roster.models import InstrumentFamily, InstrumentType


def _template(*families: InstrumentFamily) -> FormationTemplate:
    return FormationTemplate(
        name="t",
        slots=[
            TemplateSlot(slot_index=i, field_x=10.0 * i, field_y=20.0, preferred_family=fam)
            for i, fam in enumerate(families)
        ],
    )


def test_preferred_family_gets_best_rated_member(member_factory):
    members = [
        member_factory("weak", instrument=InstrumentType.FLUTE, musicianship=0.2),
        member_factory("strong", instrument=InstrumentType.FLUTE, musicianship=0.9),
        member_factory("horn", instrument=InstrumentType.TRUMPET),
    ]
    template = _template(InstrumentFamily.WOODWIND, InstrumentFamily.BRASS)

    mapping = create_template_mapping(template, members)

    assert mapping == {0: "strong", 1: "horn"}


def test_leftover_slots_filled_by_rating(member_factory):
    members = [
        member_factory("snare", instrument=InstrumentType.SNARE_DRUM, marching=0.1),
        member_factory("flag", instrument=InstrumentType.FLAG, marching=0.9),
    ]
    template = _template(InstrumentFamily.BRASS, InstrumentFamily.BRASS)

    mapping = create_template_mapping(template, members)

    # no brass players: best overall rating takes the lowest slot index
    assert mapping == {0: "flag", 1: "snare"}


def test_more_slots_than_members(member_factory):
    members = [member_factory("only")]
    template = _template(InstrumentFamily.BRASS, InstrumentFamily.BRASS, InstrumentFamily.BRASS)

    mapping = create_template_mapping(template, members)

    assert mapping == {0: "only"}


def test_each_member_used_once(member_factory):
    members = [member_factory(f"t{i}") for i in range(5)]
    template = _template(*[InstrumentFamily.BRASS] * 3)

    mapping = create_template_mapping(template, members)

    assert len(mapping) == 3
    assert len(set(mapping.values())) == 3


def test_rarest_family_resolved_first(member_factory):
    members = [
        member_factory("b1", instrument=InstrumentType.TRUMPET, showmanship=0.9),
        member_factory("b2", instrument=InstrumentType.TRUMPET),
        member_factory("dm", instrument=InstrumentType.DRUM_MAJOR),
    ]
    template = _template(InstrumentFamily.BRASS, InstrumentFamily.LEADERSHIP)

    mapping = create_template_mapping(template, members)

    assert mapping[1] == "dm"
    assert mapping[0] == "b1"
