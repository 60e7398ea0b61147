"""Math utilities for field geometry and easing."""

from __future__ import annotations

import math
from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def clamp01(value: float) -> float:
    """Clamp value to the unit interval."""
    return clamp(float(value), 0.0, 1.0)


def lerp(a: Number, b: Number, t: float) -> float:
    """Linear interpolation between a and b.

    Args:
        a: Start value
        b: End value
        t: Interpolation factor [0, 1]

    Returns:
        Interpolated value
    """
    return float(a) + (float(b) - float(a)) * t


def lerp_angle(a: float, b: float, t: float) -> float:
    """Interpolate between two angles in degrees along the shortest arc.

    The result is not wrapped, so interpolating 350 -> 10 at t=0.5
    yields 360.0 rather than 0.0.

    Args:
        a: Start angle (degrees)
        b: End angle (degrees)
        t: Interpolation factor [0, 1]

    Returns:
        Interpolated angle (degrees)

    Example:
        >>> lerp_angle(350.0, 10.0, 0.5)
        360.0
    """
    delta = (float(b) - float(a)) % 360.0
    if delta > 180.0:
        delta -= 360.0
    return float(a) + delta * t


def smoothstep(t: float) -> float:
    """Hermite smooth-step ease: v(t) = t²(3 - 2t).

    Input is clamped to [0, 1] first.
    """
    t = clamp01(t)
    return t * t * (3.0 - 2.0 * t)


def distance(x0: float, y0: float, x1: float, y1: float) -> float:
    """Euclidean distance between two field points."""
    return math.hypot(x1 - x0, y1 - y0)


def safe_mean(values: list[float], default: float = 0.0) -> float:
    """Arithmetic mean that returns ``default`` for an empty sequence."""
    if not values:
        return default
    return float(np.mean(np.asarray(values, dtype=float)))
