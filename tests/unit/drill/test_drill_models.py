"""Tests for chart models and field geometry helpers."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from drillbook.core.drill.field import (
    STEP_SIZE_YARDS,
    clamp_to_field,
    describe_field_position,
    snap_to_grid,
    snap_to_yard_lines,
    yard_line_label,
)
from drillbook.core.drill.models import (
    Chart,
    ChartSummary,
    Formation,
    MemberPosition,
)


class TestModels:
    """Validation and query helpers on the timeline models."""

    def test_member_position_rejects_off_field(self):
        with pytest.raises(ValidationError):
            MemberPosition(member_id="m1", field_x=101.0, field_y=10.0)

    def test_formation_rejects_negative_duration(self):
        with pytest.raises(ValidationError):
            Formation(label="A", duration_beats=-1.0)

    def test_formation_rejects_duplicate_members(self):
        with pytest.raises(ValidationError):
            Formation(
                positions=[MemberPosition(member_id="m1"), MemberPosition(member_id="m1")]
            )

    def test_hold_end_beat(self):
        assert Formation(start_beat=8.0, duration_beats=4.0).hold_end_beat == 12.0

    def test_get_formation_at_beat(self):
        chart = Chart(
            formations=[
                Formation(label="A", start_beat=4.0),
                Formation(label="B", start_beat=12.0),
            ]
        )

        assert chart.get_formation_at_beat(12.0).label == "B"
        assert chart.get_formation_at_beat(11.9).label == "A"
        # before the first formation the first one is reported
        assert chart.get_formation_at_beat(0.0).label == "A"
        assert chart.get_formation_index_at_beat(0.0) == 0

    def test_get_formation_at_beat_empty_chart(self):
        assert Chart().get_formation_at_beat(4.0) is None

    def test_summary_from_chart(self):
        chart = Chart(name="Show", song_id="s1", formations=[Formation(), Formation()])

        summary = ChartSummary.from_chart(chart)

        assert summary.id == chart.id
        assert summary.formation_count == 2
        assert summary.last_modified == chart.last_modified_date

    def test_touch_updates_modified_date(self):
        chart = Chart(last_modified_date="2000-01-01T00:00:00+00:00")
        chart.touch()
        assert chart.last_modified_date > "2000-01-01T00:00:00+00:00"


class TestFieldHelpers:
    """Field geometry helpers."""

    def test_clamp_to_field(self):
        assert clamp_to_field(120.0, -4.0) == (100.0, 0.0)
        assert clamp_to_field(50.0, 60.0) == (50.0, 53.33)

    def test_snap_to_grid_uses_step_size(self):
        x, y = snap_to_grid(10.3, 20.1)
        assert x == pytest.approx(10.0)
        assert y == pytest.approx(20.0)
        assert STEP_SIZE_YARDS == 0.625

    def test_snap_to_grid_rejects_non_positive(self):
        with pytest.raises(ValueError):
            snap_to_grid(1.0, 1.0, grid_size=0)

    def test_snap_to_yard_lines(self):
        assert snap_to_yard_lines(47.6, 13.0) == (50.0, 13.0)

    @pytest.mark.parametrize(("x", "label"), [(0.0, "0"), (35.0, "35"), (50.0, "50"), (65.0, "35")])
    def test_yard_line_label(self, x, label):
        assert yard_line_label(x) == label

    def test_describe_field_position(self):
        assert describe_field_position(40.0, 26.0) == "own 40, between hashes"
        assert describe_field_position(70.0, 5.0) == "opp 30, home side"
        assert describe_field_position(50.0, 50.0) == "own 50, visitor side"
