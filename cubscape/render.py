"""Drawing a frame: background, textured wall columns, minimap and hearts."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from cubscape.doors import DoorState
from cubscape.framebuffer import FrameBuffer, Texture, load_texture, load_wall_textures
from cubscape.geometry import protect_angle
from cubscape.header import SceneHeader
from cubscape.mapgrid import (
    DOOR_CLOSED_CHAR,
    DOOR_OPEN_CHAR,
    FLOOR_CHAR,
    WALL_CHAR,
    GameMap,
    Player,
)
from cubscape.raycast import Face, Raycaster, RayHit
from cubscape.scene import Scene
from cubscape.settings import Settings

WHITE = 0xFFFFFF
BORDER_COLOR = 0xF2D2BD
PLAYER_COLOR = 0xFF5FA2


def is_on_minimap(
    x: int, y: int, radius: int, settings: Settings | None = None
) -> bool:
    """True when (x, y) lies strictly inside the minimap disc of ``radius``."""
    settings = settings or Settings()
    dx = x - settings.minimap_center
    dy = y - settings.minimap_center
    return dx * dx + dy * dy < radius * radius


def _disc(
    top: int, left: int, height: int, width: int, radius: int, settings: Settings
) -> np.ndarray:
    centre = settings.minimap_center
    ys = np.arange(top, top + height, dtype=np.int64)[:, None] - centre
    xs = np.arange(left, left + width, dtype=np.int64)[None, :] - centre
    return xs * xs + ys * ys < radius * radius


def _blit(
    frame: FrameBuffer, top: int, left: int, values: np.ndarray, mask: np.ndarray
) -> None:
    """Copy ``values`` where ``mask`` is true, clipped to the frame."""
    height, width = values.shape
    y0, x0 = max(top, 0), max(left, 0)
    y1, x1 = min(top + height, frame.height), min(left + width, frame.width)
    if y0 >= y1 or x0 >= x1:
        return
    region = (slice(y0 - top, y1 - top), slice(x0 - left, x1 - left))
    chosen = mask[region]
    target = frame.pixels[y0:y1, x0:x1]
    target[chosen] = values[region][chosen]


def draw_wall_column(
    frame: FrameBuffer,
    hit: RayHit,
    player_angle: float,
    textures: Sequence[Texture],
    settings: Settings | None = None,
    bonus: bool = False,
    door_texture: Texture | None = None,
) -> None:
    """Draw the textured wall slice of one ray in its screen column.

    The distance is corrected for the fish-eye effect. In bonus mode the
    pixels covered by the minimap are left alone. A ray that never met a
    wall draws nothing.
    """
    settings = settings or Settings()
    if hit.is_door:
        if door_texture is None:
            raise ValueError("a door hit needs a door texture")
        texture = door_texture
    else:
        texture = textures[hit.face]
    distance = hit.distance * math.cos(protect_angle(player_angle - hit.angle))
    if not math.isfinite(distance) or distance <= 0:
        return
    column = hit.column
    if not 0 <= column < frame.width:
        return
    half_width = settings.width // 2
    height_l = settings.scale / distance * (half_width / math.tan(settings.rad_value / 2))
    start_y = settings.height // 2 - height_l / 2
    line_length = abs(height_l)
    if start_y < 0:
        first = -start_y if bonus else float(math.ceil(-start_y))
    else:
        first = 0.0
    count = min(max(0, math.ceil(line_length - first)), settings.height + 2)
    offsets = first + np.arange(count, dtype=np.float64)
    offsets = offsets[offsets < line_length]
    rows_f = start_y + offsets
    beyond = np.flatnonzero(rows_f + 1 > settings.height)
    if beyond.size:
        offsets = offsets[: beyond[0] + 1]
        rows_f = rows_f[: beyond[0] + 1]
    rows = np.trunc(rows_f).astype(np.int64)
    size = settings.texture_size
    tex_x = min(max(int(hit.wall_hit * size), 0), texture.width - 1)
    tex_y = np.clip((offsets / line_length * size).astype(np.int64), 0, texture.height - 1)
    keep = (rows >= 0) & (rows < frame.height)
    if bonus:
        radius = settings.minimap_radius + settings.minimap_border
        centre = settings.minimap_center
        keep &= (rows - centre) ** 2 + (column - centre) ** 2 >= radius * radius
    frame.pixels[rows[keep], column] = texture.pixels[tex_y[keep], tex_x]


@dataclass(frozen=True)
class MinimapColors:
    """Colours of the minimap: wall and floor squares, border ring and player."""

    wall: int
    floor: int
    border: int = BORDER_COLOR
    player: int = PLAYER_COLOR


def draw_minimap(
    frame: FrameBuffer,
    game_map: GameMap,
    player: Player,
    door: DoorState | None,
    colors: MinimapColors,
    settings: Settings | None = None,
) -> None:
    """Draw the round minimap, centred on the player, in the top-left corner."""
    settings = settings or Settings()
    door = door or DoorState()
    outer = settings.minimap_radius + settings.minimap_border
    _blit(
        frame,
        0,
        0,
        np.full(frame.pixels.shape, colors.border & 0xFFFFFFFF, dtype=np.uint32),
        _disc(0, 0, frame.height, frame.width, outer, settings),
    )
    square = settings.minimap_square
    centre = settings.minimap_center
    palette = {
        WALL_CHAR: colors.wall,
        FLOOR_CHAR: colors.floor,
        DOOR_CLOSED_CHAR: door.closed_color,
        DOOR_OPEN_CHAR: door.open_color,
    }
    for y, row in enumerate(game_map.rows):
        for x, char in enumerate(row[: game_map.max_x]):
            color = palette.get(char)
            if color is None:
                continue
            left = int(x * square - (player.pos_x - 2) / 2 + centre)
            top = int(y * square - (player.pos_y - 2) / 2 + centre)
            values = np.full((square, square), color & 0xFFFFFFFF, dtype=np.uint32)
            mask = _disc(top, left, square, square, settings.minimap_radius, settings)
            _blit(frame, top, left, values, mask)
    size = settings.minimap_player_size
    corner = centre - size // 2
    _blit(
        frame,
        corner,
        corner,
        np.full((size, size), colors.player & 0xFFFFFFFF, dtype=np.uint32),
        np.ones((size, size), dtype=bool),
    )


@dataclass
class HeartAnimation:
    """Beating hearts in the top-right corner: small for a while, then big."""

    small: Texture
    big: Texture
    settings: Settings = field(default_factory=Settings)
    frame: int = 0
    size: int = -1

    def __post_init__(self) -> None:
        if self.size < 0:
            self.size = self.settings.small_heart

    @classmethod
    def load(cls, settings: Settings | None = None) -> HeartAnimation:
        """Load the small and big heart images named by the settings."""
        settings = settings or Settings()
        return cls(
            small=load_texture(settings.small_heart_image),
            big=load_texture(settings.big_heart_image),
            settings=settings,
        )

    @property
    def image(self) -> Texture:
        """Image of the current animation frame."""
        return self.small if self.frame < self.settings.heart_first_part else self.big

    def advance(self) -> None:
        """Move to the next frame; the cycle restarts after the second part."""
        self.frame += 1
        if self.frame >= self.settings.heart_first_part:
            self.size = self.settings.big_heart
        if self.frame == self.settings.heart_second_part:
            self.frame = 0
            self.size = self.settings.small_heart

    def draw(
        self,
        frame: FrameBuffer,
        settings: Settings | None = None,
        count: int | None = None,
    ) -> None:
        """Draw ``count`` hearts from right to left; white pixels are skipped."""
        settings = settings or self.settings
        count = settings.hearts if count is None else count
        pixels = self.image.pixels[: self.size, : self.size]
        mask = pixels != WHITE
        top = settings.heart_gap - self.size // 2
        for index in range(count):
            gap = settings.heart_gap + index * settings.big_heart
            left = settings.width - self.size // 2 - gap
            _blit(frame, top, left, pixels, mask)


@dataclass
class TextureSet:
    """Wall textures in north, south, east, west order, plus bonus images."""

    walls: list[Texture]
    door: Texture | None = None
    hearts: HeartAnimation | None = None

    @classmethod
    def load(
        cls, header: SceneHeader, settings: Settings | None = None, bonus: bool = False
    ) -> TextureSet:
        """Load the wall textures of a scene, and the door and hearts in bonus."""
        settings = settings or Settings()
        walls = load_wall_textures(header.wall_paths, settings.texture_size)
        if not bonus:
            return cls(walls=walls)
        door = load_texture(settings.door_texture, settings.texture_size)
        return cls(walls=walls, door=door, hearts=HeartAnimation.load(settings))


class Renderer:
    """Draws whole frames of a scene."""

    def __init__(
        self,
        scene: Scene,
        settings: Settings | None,
        textures: TextureSet,
        bonus: bool | None = None,
    ) -> None:
        self.scene = scene
        self.settings = settings or Settings()
        self.textures = textures
        self.bonus = scene.bonus if bonus is None else bonus
        self.raycaster = Raycaster(self.settings, scene.game_map, self.bonus)
        self.colors = MinimapColors(wall=scene.ceiling_color, floor=scene.floor_color)

    def render(
        self, frame: FrameBuffer, player: Player, door: DoorState | None = None
    ) -> list[RayHit]:
        """Draw one frame and return the rays that were cast for it."""
        settings = self.settings
        skip = None
        if self.bonus:
            radius = settings.minimap_radius + settings.minimap_border
            skip = _disc(0, 0, frame.height, frame.width, radius, settings)
        frame.fill_background(self.scene.ceiling_color, self.scene.floor_color, skip)
        if self.bonus:
            draw_minimap(frame, self.scene.game_map, player, door, self.colors, settings)
        hits = self.raycaster.cast(player, door)
        for hit in hits:
            draw_wall_column(
                frame,
                hit,
                player.angle,
                self.textures.walls,
                settings,
                self.bonus,
                self.textures.door,
            )
        if self.bonus and self.textures.hearts is not None:
            self.textures.hearts.draw(frame, settings)
            self.textures.hearts.advance()
        return hits


__all__ = [
    "Face",
    "HeartAnimation",
    "MinimapColors",
    "Renderer",
    "TextureSet",
    "draw_minimap",
    "draw_wall_column",
    "is_on_minimap",
]