"""The map part of a scene: reading, validation and the integer grid."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Iterable

from cubscape.errors import MapError
from cubscape.settings import Settings
from cubscape.textlines import WHITESPACE, convert_tab_in_space, is_white_space_line

WALL_CHAR = "1"
FLOOR_CHAR = "0"
VOID_CHAR = " "
DOOR_CLOSED_CHAR = "D"
DOOR_OPEN_CHAR = "O"
PLAYER_CHARS = "NSEW"

_SPAWN_ANGLES = {
    "N": 3 * math.pi / 2,
    "S": math.pi / 2,
    "E": 0.0,
    "W": math.pi,
}
_CLEAR_PLAYER = str.maketrans({c: FLOOR_CHAR for c in PLAYER_CHARS})


class Cell(enum.IntEnum):
    """Content of one square of the integer grid."""

    UNKNOWN = -1
    EMPTY = 0
    WALL = 1
    VOID = 2
    DOOR_CLOSED = 3
    DOOR_OPEN = 4


@dataclass
class Player:
    """Position (top-left of the player square, world units) and heading."""

    pos_x: float
    pos_y: float
    angle: float
    d_x: float
    d_y: float


@dataclass
class GameMap:
    """Validated map rows together with their integer grid."""

    rows: list[str]
    grid: list[Cell]
    max_x: int
    max_y: int
    player: Player
    bonus: bool = field(default=False)

    def in_bounds(self, x: int, y: int) -> bool:
        """True when (x, y) lies inside the grid."""
        return 0 <= x < self.max_x and 0 <= y < self.max_y

    def char_at(self, x: int, y: int) -> str:
        """Character of a row at (x, y), or '' outside the rows."""
        if not 0 <= y < len(self.rows):
            return ""
        row = self.rows[y]
        return row[x] if 0 <= x < len(row) else ""

    def cell_at(self, x: int, y: int) -> Cell:
        """Grid cell at (x, y); squares outside the grid are void."""
        if not self.in_bounds(x, y):
            return Cell.VOID
        return self.grid[y * self.max_x + x]

    def set_door(self, x: int, y: int, is_open: bool) -> None:
        """Mark the square at (x, y) as an open or a closed door."""
        if not self.in_bounds(x, y) or x >= len(self.rows[y]):
            raise IndexError(f"no map square at ({x}, {y})")
        char = DOOR_OPEN_CHAR if is_open else DOOR_CLOSED_CHAR
        row = self.rows[y]
        self.rows[y] = row[:x] + char + row[x + 1:]
        self.grid[y * self.max_x + x] = Cell.DOOR_OPEN if is_open else Cell.DOOR_CLOSED


def is_player(c: str) -> bool:
    """True for a player spawn character (N, S, E or W)."""
    return len(c) == 1 and c in PLAYER_CHARS


def read_map_lines(lines: Iterable[str]) -> list[str]:
    """Collect the map rows: blank lines may only come before or after them."""
    rows: list[str] = []
    ended = False
    for line in lines:
        if is_white_space_line(line):
            if rows:
                ended = True
            continue
        if ended:
            raise MapError("empty line inside the map")
        rows.append(convert_tab_in_space(line.rstrip("\n")))
    if not rows:
        raise MapError("no map found")
    return rows


def _check_chars(rows: list[str], bonus: bool) -> None:
    allowed = set(FLOOR_CHAR + WALL_CHAR + VOID_CHAR + PLAYER_CHARS)
    if bonus:
        allowed.add(DOOR_CLOSED_CHAR)
    for row in rows:
        bad = next((c for c in row if c not in allowed), None)
        if bad is not None:
            raise MapError(f"invalid character {bad!r} in the map")


def _spawns(rows: list[str]) -> list[tuple[int, int, str]]:
    return [
        (x, y, c)
        for y, row in enumerate(rows)
        for x, c in enumerate(row)
        if is_player(c)
    ]


def find_player(rows: list[str], settings: Settings | None = None) -> Player:
    """Locate the single spawn point and build the player standing on it."""
    settings = settings or Settings()
    spawns = _spawns(rows)
    if len(spawns) != 1:
        raise MapError("the map needs exactly one player")
    x, y, c = spawns[0]
    offset = settings.scale // 2 - settings.player_size // 2
    angle = _SPAWN_ANGLES[c]
    return Player(
        pos_x=float(x * settings.scale + offset),
        pos_y=float(y * settings.scale + offset),
        angle=angle,
        d_x=math.cos(angle) * settings.move_speed,
        d_y=math.sin(angle) * settings.move_speed,
    )


def _is_border_line(row: str) -> bool:
    return WALL_CHAR in row and all(c == WALL_CHAR or c in WHITESPACE for c in row)


def check_first_last_line(rows: list[str]) -> None:
    """The map needs two rows or more, the first and last made of walls only."""
    if len(rows) < 2:
        raise MapError("the map is too small")
    if not (_is_border_line(rows[0]) and _is_border_line(rows[-1])):
        raise MapError("the map is not closed by walls")


def _is_open(rows: list[str], x: int, y: int) -> bool:
    if not 0 <= y < len(rows) or not 0 <= x < len(rows[y]):
        return True
    return rows[y][x] == VOID_CHAR


def check_surrounded(rows: list[str], bonus: bool = False) -> None:
    """Every walkable square of the inner rows must be closed in."""
    for y, row in enumerate(rows[1:-1], start=1):
        for x, c in enumerate(row):
            walkable = (
                c == FLOOR_CHAR
                or is_player(c)
                or (bonus and c == DOOR_CLOSED_CHAR)
            )
            if not walkable:
                continue
            neighbours = ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1))
            if any(_is_open(rows, nx, ny) for nx, ny in neighbours):
                raise MapError("the map is not closed by walls")


def validate_map(rows: list[str], bonus: bool = False) -> None:
    """Run every map check in order, raising MapError on the first failure."""
    _check_chars(rows, bonus)
    if len(_spawns(rows)) != 1:
        raise MapError("the map needs exactly one player")
    check_first_last_line(rows)
    check_surrounded(rows, bonus)


def _cell_of(c: str, bonus: bool) -> Cell:
    if c == "\n":
        return Cell.VOID
    if is_player(c) or c == FLOOR_CHAR:
        return Cell.EMPTY
    if c == VOID_CHAR:
        return Cell.VOID
    if c == WALL_CHAR:
        return Cell.WALL
    if bonus:
        return Cell.DOOR_CLOSED if c == DOOR_CLOSED_CHAR else Cell.UNKNOWN
    return Cell.VOID


def to_int_grid(
    rows: list[str], max_x: int, max_y: int, bonus: bool = False
) -> list[Cell]:
    """Flatten rows into a max_x * max_y grid, row after row."""
    grid: list[Cell] = []
    for y in range(max_y):
        row = rows[y][:max_x] if y < len(rows) else ""
        grid.extend(_cell_of(c, bonus) for c in row)
        grid.extend([Cell.VOID] * (max_x - len(row)))
    return grid


def build_map(
    lines: Iterable[str], bonus: bool = False, settings: Settings | None = None
) -> GameMap:
    """Read, validate and convert the map lines of a scene."""
    rows = read_map_lines(lines)
    validate_map(rows, bonus)
    player = find_player(rows, settings)
    rows = [row.translate(_CLEAR_PLAYER) for row in rows]
    max_x = max((row.rfind(WALL_CHAR) + 1 for row in rows), default=0)
    max_y = len(rows)
    grid = to_int_grid(rows, max_x, max_y, bonus)
    return GameMap(
        rows=rows, grid=grid, max_x=max_x, max_y=max_y, player=player, bonus=bonus
    )