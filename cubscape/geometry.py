"""Angle classification and small geometric helpers."""

from __future__ import annotations

import math

TWO_PI = 2 * math.pi
HALF_PI = math.pi / 2
THREE_HALF_PI = 3 * math.pi / 2


def is_north(angle: float) -> bool:
    """True when the angle points upwards on the map (between pi and 2pi)."""
    return math.pi < angle < TWO_PI


def is_south(angle: float) -> bool:
    """True when the angle points downwards on the map (between 0 and pi)."""
    return 0 < angle < math.pi


def is_east(angle: float) -> bool:
    """True when the angle points right on the map."""
    return angle > THREE_HALF_PI or angle < HALF_PI


def is_west(angle: float) -> bool:
    """True when the angle points left on the map."""
    return HALF_PI < angle < THREE_HALF_PI


def get_distance(px: float, py: float, rx: float, ry: float) -> float:
    """Euclidean distance between (px, py) and (rx, ry)."""
    return math.hypot(rx - px, ry - py)


def protect_angle(angle: float) -> float:
    """Bring an angle that left [0, 2pi] by at most one turn back into it."""
    if angle < 0:
        return angle + TWO_PI
    if angle > TWO_PI:
        return angle - TWO_PI
    return angle