"""Football field geometry in yards.

Field coordinates: X = 0-100 (end zone to end zone), Y = 0-53.33
(home sideline to visitor sideline).
"""

from __future__ import annotations

from drillbook.core.utils.math import clamp

FIELD_LENGTH_YARDS = 100.0
FIELD_WIDTH_YARDS = 53.33

# Standard 8-to-5 marching step (22.5 inches)
STEP_SIZE_YARDS = 0.625

# College hash marks, measured from the home sideline
HOME_HASH_YARDS = 17.78
VISITOR_HASH_YARDS = 35.56


def clamp_to_field(x: float, y: float) -> tuple[float, float]:
    """Clamp a point to the playable field rectangle.

    Example:
        >>> clamp_to_field(120.0, -4.0)
        (100.0, 0.0)
    """
    return (
        clamp(float(x), 0.0, FIELD_LENGTH_YARDS),
        clamp(float(y), 0.0, FIELD_WIDTH_YARDS),
    )


def snap_to_grid(x: float, y: float, grid_size: float = STEP_SIZE_YARDS) -> tuple[float, float]:
    """Snap a point to the nearest multiple of ``grid_size`` on both axes."""
    if grid_size <= 0:
        raise ValueError(f"grid_size must be > 0, got {grid_size}")
    return (round(x / grid_size) * grid_size, round(y / grid_size) * grid_size)


def snap_to_yard_lines(x: float, y: float) -> tuple[float, float]:
    """Snap X to the nearest 5-yard line; Y is left unchanged."""
    return (round(x / 5.0) * 5.0, y)


def yard_line_label(x: float) -> str:
    """Return the yard line number printed on the field nearest to ``x``.

    Example:
        >>> yard_line_label(65.0)
        '35'
    """
    yard_line = x if x <= 50.0 else FIELD_LENGTH_YARDS - x
    return str(int(round(yard_line)))


def describe_field_position(x: float, y: float) -> str:
    """Describe a point the way drill writers call it out.

    Example:
        >>> describe_field_position(40.0, 26.0)
        'own 40, between hashes'
    """
    side = "own" if x <= 50.0 else "opp"

    if y < HOME_HASH_YARDS:
        hash_ref = "home side"
    elif y > VISITOR_HASH_YARDS:
        hash_ref = "visitor side"
    else:
        hash_ref = "between hashes"

    return f"{side} {yard_line_label(x)}, {hash_ref}"
