"""Shared utilities for Drillbook."""

from drillbook.core.utils.json import read_json, write_text_atomic
from drillbook.core.utils.math import clamp, clamp01, lerp, lerp_angle, smoothstep

__all__ = [
    "clamp",
    "clamp01",
    "lerp",
    "lerp_angle",
    "read_json",
    "smoothstep",
    "write_text_atomic",
]
