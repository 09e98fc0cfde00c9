"""Tunable constants of the engine."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Screen size, world scale, speeds, minimap and sprite parameters."""

    width: int = 1280
    height: int = 720
    scale: int = 64
    fov: float = 60.0
    texture_size: int = 64
    move_speed: float = 3.0
    rotate_speed: float = 0.05
    player_size: int = 8
    security_distance: int = 4
    frame_time: int = 1
    minimap_radius: int = 90
    minimap_border: int = 6
    minimap_center: int = 110
    minimap_player_size: int = 8
    door_open_distance: float = 96.0
    door_close_distance: float = 128.0
    small_heart: int = 32
    big_heart: int = 40
    heart_gap: int = 40
    heart_first_part: int = 8
    heart_second_part: int = 16
    hearts: int = 3
    title: str = "cubscape"
    door_texture: str = "textures/door.xpm"
    small_heart_image: str = "textures/small_heart.xpm"
    big_heart_image: str = "textures/big_heart.xpm"

    def __post_init__(self) -> None:
        positive = (
            "width",
            "height",
            "scale",
            "texture_size",
            "move_speed",
            "rotate_speed",
            "frame_time",
            "minimap_radius",
            "door_open_distance",
            "door_close_distance",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if not 0 < self.fov < 180:
            raise ValueError("fov must be between 0 and 180 degrees")
        if not 0 < self.heart_first_part < self.heart_second_part:
            raise ValueError("heart animation parts must be increasing and positive")
        if self.hearts < 0:
            raise ValueError("hearts cannot be negative")

    @property
    def rad_value(self) -> float:
        """Field of view in radians."""
        return math.pi / 180 * self.fov

    @property
    def pi2(self) -> float:
        return math.pi / 2

    @property
    def pi3(self) -> float:
        return 3 * math.pi / 2

    @property
    def minimap_square(self) -> int:
        """Side of one map cell on the minimap (half a world cell)."""
        return self.scale // 2