"""Tests for math utility functions."""

from __future__ import annotations

import pytest

from drillbook.core.utils.math import (
    clamp,
    clamp01,
    distance,
    lerp,
    lerp_angle,
    safe_mean,
    smoothstep,
)


def test_clamp_within_range():
    """Test clamping values within range."""
    assert clamp(5, 0, 10) == 5
    assert clamp(0, 0, 10) == 0
    assert clamp(10, 0, 10) == 10


def test_clamp_outside_range():
    """Test clamping values outside range."""
    assert clamp(-5, 0, 10) == 0
    assert clamp(15.5, 0.0, 10.0) == 10.0


def test_clamp01():
    assert clamp01(-0.1) == 0.0
    assert clamp01(0.25) == 0.25
    assert clamp01(3) == 1.0


def test_lerp():
    """Test linear interpolation endpoints and midpoint."""
    assert lerp(0, 10, 0.0) == 0.0
    assert lerp(0, 10, 1.0) == 10.0
    assert lerp(40, 60, 0.5) == 50.0


class TestLerpAngle:
    """Shortest-arc angle interpolation."""

    def test_across_zero(self):
        assert lerp_angle(350.0, 10.0, 0.5) == pytest.approx(360.0)

    def test_backwards_across_zero(self):
        assert lerp_angle(10.0, 350.0, 0.5) == pytest.approx(0.0)

    def test_plain_arc(self):
        assert lerp_angle(0.0, 90.0, 0.5) == pytest.approx(45.0)

    def test_half_turn_goes_positive(self):
        assert lerp_angle(0.0, 180.0, 1.0) == pytest.approx(180.0)


class TestSmoothstep:
    """Hermite ease."""

    @pytest.mark.parametrize(("t", "expected"), [(0.0, 0.0), (0.25, 0.15625), (0.5, 0.5), (1.0, 1.0)])
    def test_values(self, t, expected):
        assert smoothstep(t) == pytest.approx(expected)

    def test_input_is_clamped(self):
        assert smoothstep(-1.0) == 0.0
        assert smoothstep(2.0) == 1.0


def test_distance():
    assert distance(0.0, 0.0, 3.0, 4.0) == pytest.approx(5.0)


def test_safe_mean():
    assert safe_mean([]) == 0.0
    assert safe_mean([], default=0.5) == 0.5
    assert safe_mean([1.0, 2.0, 6.0]) == pytest.approx(3.0)
