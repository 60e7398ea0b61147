"""Tests for beat-indexed interpolation of member positions."""

from __future__ import annotations

import pytest

from drillbook.core.drill.models import Formation, MemberPosition
from drillbook.core.drill.store import FormationStore, interpolate_formations


def _by_member(positions: list[MemberPosition]) -> dict[str, MemberPosition]:
    return {p.member_id: p for p in positions}


class TestHoldsAndBoundaries:
    """Identity behaviour outside transition windows."""

    def test_empty_before_first_formation(self, store: FormationStore):
        f = store.add_formation(4, 4, "late")
        store.set_member_position(f.id, "m1", (10.0, 10.0), 0.0)

        assert store.get_interpolated_positions(2.0) == []

    def test_empty_without_chart_or_formations(self, store: FormationStore):
        assert store.get_interpolated_positions(0.0) == []
        assert FormationStore().get_interpolated_positions(0.0) == []

    def test_identity_at_start_beat(self, store: FormationStore, two_sets):
        a, b = two_sets

        assert store.get_interpolated_positions(a.start_beat) == a.positions
        assert store.get_interpolated_positions(b.start_beat) == b.positions

    @pytest.mark.parametrize("beat", [0.0, 1.0, 2.5, 3.999, 4.0])
    def test_hold_window_is_bit_identical(self, store: FormationStore, two_sets, beat):
        a, _ = two_sets
        store.set_member_position(a.id, "m2", (12.345678, 31.415926), 33.3)

        result = store.get_interpolated_positions(beat)

        assert [p.model_dump() for p in result] == [p.model_dump() for p in a.positions]

    def test_last_formation_held_forever(self, store: FormationStore, two_sets):
        _, b = two_sets

        assert store.get_interpolated_positions(1000.0) == b.positions

    def test_returns_copies(self, store: FormationStore, two_sets):
        a, _ = two_sets

        result = store.get_interpolated_positions(1.0)
        result[0].field_x = 99.0

        assert a.get_position("m1").field_x == 40.0

    def test_zero_length_window_jumps_to_next(self, store: FormationStore):
        a = store.add_formation(0, 8, "A")
        b = store.add_formation(8, 4, "B")
        store.set_member_position(a.id, "m1", (10.0, 10.0), 0.0)
        store.set_member_position(b.id, "m1", (90.0, 10.0), 0.0)

        assert store.get_interpolated_positions(8.0)[0].field_x == 90.0

    def test_overlapping_hold_yields_next_positions(self, store: FormationStore):
        a = store.add_formation(0, 12, "A")
        b = store.add_formation(8, 4, "B")
        store.set_member_position(a.id, "m1", (10.0, 10.0), 0.0)
        store.set_member_position(b.id, "m1", (90.0, 10.0), 0.0)

        # beat 9 belongs to B, which has started
        assert store.get_interpolated_positions(9.0)[0].field_x == 90.0


class TestTransitionWindow:
    """Smooth-step interpolation between holds."""

    def test_midpoint_lands_halfway(self, store: FormationStore, two_sets):
        result = store.get_interpolated_positions(6.0)

        assert result[0].field_x == pytest.approx(50.0, abs=0.1)
        assert result[0].field_y == pytest.approx(26.67)

    def test_easing_is_smoothstep(self, store: FormationStore, two_sets):
        # t = 0.25 -> t' = 0.25^2 * (3 - 0.5) = 0.15625
        result = store.get_interpolated_positions(5.0)

        assert result[0].field_x == pytest.approx(40.0 + 20.0 * 0.15625)

    def test_motion_is_monotonic(self, store: FormationStore, two_sets):
        xs = [store.get_interpolated_positions(4.0 + i * 0.25)[0].field_x for i in range(17)]

        assert xs == sorted(xs)
        assert xs[0] == pytest.approx(40.0)
        assert xs[-1] == pytest.approx(60.0)

    def test_facing_takes_shortest_arc(self, store: FormationStore, two_sets):
        a, b = two_sets
        store.set_member_position(a.id, "m1", (40.0, 26.67), 350.0)
        store.set_member_position(b.id, "m1", (60.0, 26.67), 10.0)

        facing = store.get_interpolated_positions(6.0)[0].facing_angle

        assert facing % 360.0 == pytest.approx(0.0, abs=1e-9)

    def test_members_on_one_side_pass_through(self, store: FormationStore, two_sets):
        a, b = two_sets
        store.set_member_position(a.id, "leaving", (5.0, 5.0), 0.0)
        store.set_member_position(b.id, "entering", (95.0, 50.0), 180.0)

        result = _by_member(store.get_interpolated_positions(6.0))

        assert set(result) == {"m1", "leaving", "entering"}
        assert result["leaving"].field_position == (5.0, 5.0)
        assert result["entering"].field_position == (95.0, 50.0)


class TestInterpolateFormations:
    """Direct tests of the blend helper."""

    def test_endpoints(self):
        a = Formation(positions=[MemberPosition(member_id="m", field_x=0.0, field_y=0.0)])
        b = Formation(positions=[MemberPosition(member_id="m", field_x=10.0, field_y=20.0)])

        assert interpolate_formations(a, b, 0.0)[0].field_position == (0.0, 0.0)
        assert interpolate_formations(a, b, 1.0)[0].field_position == (10.0, 20.0)

    def test_start_members_first_then_new_members(self):
        a = Formation(positions=[MemberPosition(member_id="x"), MemberPosition(member_id="y")])
        b = Formation(positions=[MemberPosition(member_id="z"), MemberPosition(member_id="x")])

        assert [p.member_id for p in interpolate_formations(a, b, 0.5)] == ["x", "y", "z"]
