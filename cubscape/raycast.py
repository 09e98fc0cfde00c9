"""Casting one ray per screen column against the map grid."""

from __future__ import annotations

import dataclasses
import enum
import math
from dataclasses import dataclass

from cubscape.doors import DoorState, Orientation, blocks_ray
from cubscape.geometry import TWO_PI, get_distance, protect_angle
from cubscape.mapgrid import Cell, GameMap, Player
from cubscape.settings import Settings

# Nudge used so that an intersection on a grid line falls into the square
# the ray is entering when it travels towards smaller coordinates.
_EPSILON = 0.0001


class Face(enum.IntEnum):
    """Texture to draw for a hit; the wall values index the wall textures."""

    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3
    DOOR = 4


@dataclass(frozen=True)
class RayHit:
    """Where a ray stopped and how its column should be textured."""

    distance: float
    hit_x: float
    hit_y: float
    orientation: Orientation
    face: Face
    wall_hit: float
    angle: float
    column: int

    @property
    def is_door(self) -> bool:
        return self.face is Face.DOOR


def _grid_index(value: float, scale: int) -> int:
    """Truncate to an integer, then divide by the scale towards zero."""
    whole = math.trunc(value)
    quotient = abs(whole) // scale
    return quotient if whole >= 0 else -quotient


def _texture_offset(coordinate: float, scale: int) -> float:
    fraction = math.fmod(coordinate, scale) / scale
    return fraction - math.floor(fraction)


class Raycaster:
    """Casts the rays of a frame through a map, with or without doors."""

    def __init__(
        self,
        settings: Settings | None,
        game_map: GameMap,
        bonus: bool | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.game_map = game_map
        self.bonus = game_map.bonus if bonus is None else bonus

    def _hit(
        self,
        px: float,
        py: float,
        x: float,
        y: float,
        distance: float,
        orientation: Orientation,
        face: Face,
        angle: float,
        column: int,
    ) -> RayHit:
        along = x if orientation is Orientation.HORIZONTAL else y
        return RayHit(
            distance=distance,
            hit_x=x,
            hit_y=y,
            orientation=orientation,
            face=face,
            wall_hit=_texture_offset(along, self.settings.scale),
            angle=angle,
            column=column,
        )

    def _march(
        self,
        px: float,
        py: float,
        x: float,
        y: float,
        step: tuple[float, float],
        limit: int,
        orientation: Orientation,
        face: Face,
        angle: float,
        column: int,
        door: DoorState | None,
    ) -> RayHit:
        game_map = self.game_map
        scale = self.settings.scale
        size = game_map.max_x * game_map.max_y
        centre = column == self.settings.width // 2
        xo, yo = step
        for _ in range(limit):
            map_x = _grid_index(x, scale)
            map_y = _grid_index(y, scale)
            position = max(map_y * game_map.max_x + map_x, 0)
            cell = game_map.grid[position] if position < size else None
            if self.bonus and door is not None:
                if cell == Cell.DOOR_OPEN:
                    door.note_open(
                        orientation, map_x, map_y, get_distance(px, py, x, y), centre
                    )
                if cell is not None and blocks_ray(cell):
                    if cell == Cell.DOOR_CLOSED:
                        door.note_closed(orientation, map_x, map_y, centre)
                        face = Face.DOOR
                    break
            elif cell == Cell.WALL:
                break
            x += xo
            y += yo
        distance = get_distance(px, py, x, y)
        return self._hit(px, py, x, y, distance, orientation, face, angle, column)

    def _door(self, door: DoorState | None) -> DoorState | None:
        if self.bonus and door is None:
            return DoorState()
        return door

    def horizontal(
        self,
        px: float,
        py: float,
        angle: float,
        column: int,
        door: DoorState | None = None,
    ) -> RayHit:
        """Follow a ray across horizontal grid lines until it meets a wall.

        A ray parallel to those lines never crosses one; its distance is
        infinite.
        """
        scale = self.settings.scale
        orientation = Orientation.HORIZONTAL
        face = Face.SOUTH if math.pi < angle < TWO_PI else Face.NORTH
        if angle == 0 or angle == math.pi:
            return self._hit(px, py, px, py, math.inf, orientation, face, angle, column)
        arc_tan = -1 / math.tan(angle)
        edge = _grid_index(py, scale) * scale
        if angle > math.pi:
            hy = edge - _EPSILON
            yo = -scale
        else:
            hy = edge + scale
            yo = scale
        hx = (py - hy) * arc_tan + px
        xo = -yo * arc_tan
        return self._march(
            px, py, hx, hy, (xo, yo), self.game_map.max_y,
            orientation, face, angle, column, self._door(door),
        )

    def vertical(
        self,
        px: float,
        py: float,
        angle: float,
        column: int,
        door: DoorState | None = None,
    ) -> RayHit:
        """Follow a ray across vertical grid lines until it meets a wall.

        A ray parallel to those lines never crosses one; its distance is
        infinite.
        """
        settings = self.settings
        scale = settings.scale
        orientation = Orientation.VERTICAL
        westward = settings.pi2 < angle < settings.pi3
        face = Face.EAST if westward else Face.WEST
        if angle == settings.pi2 or angle == settings.pi3:
            return self._hit(px, py, px, py, math.inf, orientation, face, angle, column)
        tangent = -math.tan(angle)
        edge = _grid_index(px, scale) * scale
        if westward:
            vx = edge - _EPSILON
            xo = -scale
        else:
            vx = edge + scale
            xo = scale
        vy = (px - vx) * tangent + py
        yo = -xo * tangent
        return self._march(
            px, py, vx, vy, (xo, yo), self.game_map.max_x,
            orientation, face, angle, column, self._door(door),
        )

    def _choose(
        self,
        horizontal: RayHit,
        vertical: RayHit,
        previous: RayHit | None,
        door: DoorState | None,
    ) -> RayHit:
        if vertical.distance > horizontal.distance:
            chosen = horizontal
        elif vertical.distance < horizontal.distance:
            chosen = vertical
        elif previous is not None:
            return dataclasses.replace(
                previous, angle=horizontal.angle, column=horizontal.column
            )
        else:
            chosen = horizontal
        if self.bonus and door is not None:
            door.accept_closed(chosen.orientation, chosen.distance, self.settings)
            door.accept_open(chosen.orientation, self.settings)
        return chosen

    def cast(self, player: Player, door: DoorState | None = None) -> list[RayHit]:
        """Cast one ray per screen column, left to right across the view."""
        settings = self.settings
        door = self._door(door)
        if self.bonus and door is not None:
            door.reset_can_took()
        half = settings.player_size // 2
        px = player.pos_x + half
        py = player.pos_y + half
        step = settings.rad_value / settings.width
        angle = protect_angle(player.angle - settings.rad_value / 2)
        hits: list[RayHit] = []
        previous: RayHit | None = None
        for column in range(settings.width):
            horizontal = self.horizontal(px, py, angle, column, door)
            vertical = self.vertical(px, py, angle, column, door)
            previous = self._choose(horizontal, vertical, previous, door)
            hits.append(previous)
            if self.bonus and door is not None:
                door.reset_is_door()
            angle = protect_angle(angle + step)
        return hits