"""Keyboard state, player movement and door interaction."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from cubscape.doors import DoorState
from cubscape.geometry import is_east, is_north, is_south, is_west, protect_angle
from cubscape.mapgrid import (
    DOOR_CLOSED_CHAR,
    DOOR_OPEN_CHAR,
    WALL_CHAR,
    GameMap,
    Player,
)
from cubscape.settings import Settings


class Action(enum.Enum):
    """What a key asks the game to do."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    INTERACT = "interact"
    QUIT = "quit"


_BINDINGS = {
    "escape": Action.QUIT,
    "z": Action.UP,
    "w": Action.UP,
    "s": Action.DOWN,
    "left": Action.ROTATE_LEFT,
    "right": Action.ROTATE_RIGHT,
    "q": Action.LEFT,
    "a": Action.LEFT,
    "d": Action.RIGHT,
    "e": Action.INTERACT,
}
_MOVES = (Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT)


@dataclass
class KeyState:
    """The set of actions whose keys are currently held down.

    Keys are named as in the windowing layer ("w", "left", "escape", ...).
    The interact key is only bound in bonus mode, and it stays set until the
    door it asks for has been handled rather than until the key is released.
    """

    bonus: bool = False
    held: set[Action] = field(default_factory=set)

    def _action(self, key: str) -> Action | None:
        action = _BINDINGS.get(key.lower())
        if action is Action.INTERACT and not self.bonus:
            return None
        return action

    def press(self, key: str) -> Action | None:
        """Record a key press and return the action it is bound to."""
        action = self._action(key)
        if action is not None and action is not Action.QUIT:
            self.held.add(action)
        return action

    def release(self, key: str) -> Action | None:
        """Record a key release and return the action it is bound to."""
        action = self._action(key)
        if action is not None and action not in (Action.QUIT, Action.INTERACT):
            self.held.discard(action)
        return action


def _cell(value: float, scale: int) -> int:
    """Truncate a coordinate, then divide by the scale towards zero."""
    whole = math.trunc(value)
    quotient = abs(whole) // scale
    return quotient if whole >= 0 else -quotient


def _is_passable(game_map: GameMap, x: int, y: int) -> bool:
    if x < 0 or y < 0:
        return False
    char = game_map.char_at(x, y)
    return bool(char) and char not in (WALL_CHAR, DOOR_CLOSED_CHAR)


def _can_move(game_map: GameMap, player: Player, x: int, y: int, scale: int) -> bool:
    return (
        _is_passable(game_map, math.trunc(player.pos_x / scale), y)
        and _is_passable(game_map, x, math.trunc(player.pos_y / scale))
        and _is_passable(game_map, x, y)
    )


def can_move(game_map: GameMap, player: Player, x: int, y: int) -> bool:
    """True when the player may step into map square (x, y) in bonus mode.

    The square itself, and the squares reached by moving along only one
    axis, must not be walls or closed doors. Positions use the default scale.
    """
    return _can_move(game_map, player, x, y, Settings().scale)


def _margins(direction: Action, angle: float, reach: int) -> tuple[int, int]:
    """Extra distance, per axis, kept between the player and what it walks into."""
    add_x = add_y = 0
    if direction in (Action.UP, Action.DOWN):
        if is_north(angle):
            add_y = -reach
        if is_south(angle):
            add_y = reach
        if is_west(angle):
            add_x = -reach
        if is_east(angle):
            add_x = reach
    elif direction is Action.LEFT:
        if is_north(angle):
            add_x = -reach
        if is_south(angle):
            add_x = reach
        if is_west(angle):
            add_y = reach
        if is_east(angle):
            add_y = -reach
    else:
        if is_north(angle):
            add_x = reach
        if is_south(angle):
            add_x = -reach
        if is_west(angle):
            add_y = -reach
        if is_east(angle):
            add_y = reach
    return add_x, add_y


def move_player(
    player: Player,
    direction: Action,
    game_map: GameMap,
    settings: Settings | None = None,
    bonus: bool = False,
) -> bool:
    """Step the player forwards, backwards or sideways; return True if it moved.

    Without bonus the step is refused only when it would leave the grid;
    with bonus, walls and closed doors block it too.
    """
    if direction not in _MOVES:
        raise ValueError(f"{direction!r} is not a movement")
    settings = settings or Settings()
    scale = settings.scale
    speed = settings.move_speed
    reach = settings.player_size // 2 + settings.security_distance
    add_x, add_y = _margins(direction, player.angle, reach)
    sin_step = math.sin(player.angle) * speed
    cos_step = math.cos(player.angle) * speed
    if direction is Action.UP:
        dx, dy = player.d_x, player.d_y
        probe_x = player.pos_x + add_x + dx
        probe_y = player.pos_y + add_y + dy
    elif direction is Action.DOWN:
        dx, dy = -player.d_x, -player.d_y
        probe_x = player.pos_x - add_x + dx
        probe_y = player.pos_y - add_y + dy
    elif direction is Action.LEFT:
        dx, dy = sin_step, -cos_step
        probe_x = player.pos_x + add_x + dx
        probe_y = player.pos_y + add_y + dy
    else:
        dx, dy = -sin_step, cos_step
        probe_x = player.pos_x + add_x + dx
        probe_y = player.pos_y + add_y + dy
    future_x = math.floor(probe_x / scale)
    future_y = math.floor(probe_y / scale)
    if bonus:
        allowed = _can_move(game_map, player, future_x, future_y, scale)
    else:
        allowed = game_map.in_bounds(future_x, future_y)
    if allowed:
        player.pos_x += dx
        player.pos_y += dy
    return allowed


def rotate_player(player: Player, delta: float, settings: Settings | None = None) -> None:
    """Turn the player by ``delta`` radians and refresh its step vector."""
    settings = settings or Settings()
    player.angle = protect_angle(player.angle + delta)
    player.d_x = math.cos(player.angle) * settings.move_speed
    player.d_y = math.sin(player.angle) * settings.move_speed


def toggle_door(
    game_map: GameMap,
    door: DoorState,
    player: Player,
    settings: Settings | None = None,
) -> bool:
    """Open the closed door in reach, or else close the open one in reach.

    An open door cannot be closed while the player stands in it. Returns
    True when the map changed.
    """
    settings = settings or Settings()
    closed_x, closed_y = door.closed_target
    open_x, open_y = door.open_target
    if door.can_open and game_map.in_bounds(closed_x, closed_y):
        door.can_open = False
        if game_map.char_at(closed_x, closed_y) == DOOR_CLOSED_CHAR:
            game_map.set_door(closed_x, closed_y, True)
            return True
        return False
    if door.can_close and game_map.in_bounds(open_x, open_y):
        half = settings.player_size // 2
        cell_x = _cell(player.pos_x + half, settings.scale)
        cell_y = _cell(player.pos_y + half, settings.scale)
        if (cell_x, cell_y) == (open_x, open_y):
            return False
        door.can_close = False
        if game_map.char_at(open_x, open_y) == DOOR_OPEN_CHAR:
            game_map.set_door(open_x, open_y, False)
            return True
    return False


def apply_keys(
    keys: KeyState,
    player: Player,
    game_map: GameMap,
    door: DoorState | None = None,
    settings: Settings | None = None,
    bonus: bool = False,
) -> None:
    """Carry out every held action once, as done on each rendered frame."""
    settings = settings or Settings()
    for direction in _MOVES:
        if direction in keys.held:
            move_player(player, direction, game_map, settings, bonus)
    if Action.ROTATE_LEFT in keys.held:
        rotate_player(player, -settings.rotate_speed, settings)
    if Action.ROTATE_RIGHT in keys.held:
        rotate_player(player, settings.rotate_speed, settings)
    if bonus and Action.INTERACT in keys.held:
        keys.held.discard(Action.INTERACT)
        if door is not None:
            toggle_door(game_map, door, player, settings)