"""Colour packing and mixing."""

from __future__ import annotations

from typing import Sequence

RGB = tuple[int, int, int]


def rgb_to_uint(rgb: Sequence[int]) -> int:
    """Pack an (r, g, b) triple into a 0xRRGGBB integer."""
    red, green, blue = rgb
    return red << 16 | green << 8 | blue


def rgb_mix_colors(c_one: Sequence[int], c_two: Sequence[int]) -> RGB:
    """Return the channel-wise integer average of two colours."""
    red, green, blue = ((a + b) // 2 for a, b in zip(c_one, c_two))
    return (red, green, blue)