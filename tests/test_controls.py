import math

import pytest

from cubscape.controls import (
    Action,
    KeyState,
    apply_keys,
    can_move,
    move_player,
    rotate_player,
    toggle_door,
)
from cubscape.doors import DoorState
from cubscape.mapgrid import Cell, build_map
from cubscape.settings import Settings

ROOM = [
    "111111\n",
    "100001\n",
    "100001\n",
    "100001\n",
    "10N001\n",
    "100001\n",
    "111111\n",
]

DOOR_ROOM = [
    "1111111\n",
    "1000001\n",
    "10N0D01\n",
    "1000001\n",
    "1111111\n",
]


def room(bonus=False):
    return build_map(ROOM, bonus=bonus)


def door_room():
    return build_map(DOOR_ROOM, bonus=True)


def test_press_and_release_movement_keys():
    keys = KeyState()
    assert keys.press("w") is Action.UP
    assert keys.press("Z") is Action.UP
    assert Action.UP in keys.held
    assert keys.release("w") is Action.UP
    assert Action.UP not in keys.held


@pytest.mark.parametrize(
    "key, action",
    [
        ("s", Action.DOWN),
        ("q", Action.LEFT),
        ("a", Action.LEFT),
        ("d", Action.RIGHT),
        ("left", Action.ROTATE_LEFT),
        ("right", Action.ROTATE_RIGHT),
    ],
)
def test_bindings(key, action):
    keys = KeyState()
    assert keys.press(key) is action
    assert keys.held == {action}


def test_escape_asks_to_quit_without_holding():
    keys = KeyState()
    assert keys.press("escape") is Action.QUIT
    assert keys.held == set()


def test_interact_only_in_bonus_and_survives_release():
    plain = KeyState()
    assert plain.press("e") is None
    assert plain.held == set()
    bonus = KeyState(bonus=True)
    assert bonus.press("e") is Action.INTERACT
    bonus.release("e")
    assert Action.INTERACT in bonus.held


def test_unknown_key_is_ignored():
    keys = KeyState()
    assert keys.press("x") is None
    assert keys.held == set()


def test_rotate_keeps_angle_in_range_and_updates_step():
    settings = Settings()
    player = room().player
    start = player.angle
    rotate_player(player, 3.0, settings)
    assert 0 <= player.angle <= 2 * math.pi
    assert player.d_x == pytest.approx(math.cos(player.angle) * settings.move_speed)
    assert player.d_y == pytest.approx(math.sin(player.angle) * settings.move_speed)
    rotate_player(player, -3.0, settings)
    assert player.angle == pytest.approx(start)


def test_move_up_follows_step_vector():
    player = room().player
    game_map = room()
    x, y = player.pos_x, player.pos_y
    assert move_player(player, Action.UP, game_map, Settings(), True)
    assert player.pos_x == pytest.approx(x + player.d_x)
    assert player.pos_y == pytest.approx(y + player.d_y)
    assert player.pos_y < y


def test_down_undoes_up():
    game_map = room()
    player = game_map.player
    x, y = player.pos_x, player.pos_y
    move_player(player, Action.UP, game_map, Settings(), True)
    move_player(player, Action.DOWN, game_map, Settings(), True)
    assert player.pos_x == pytest.approx(x)
    assert player.pos_y == pytest.approx(y)


def test_left_then_right_returns_and_left_goes_west_when_facing_north():
    game_map = room()
    player = game_map.player
    x, y = player.pos_x, player.pos_y
    move_player(player, Action.LEFT, game_map, Settings(), True)
    assert player.pos_x < x
    move_player(player, Action.RIGHT, game_map, Settings(), True)
    assert player.pos_x == pytest.approx(x)
    assert player.pos_y == pytest.approx(y)


def test_bonus_walls_stop_the_player():
    game_map = room(bonus=True)
    player = game_map.player
    settings = Settings()
    for _ in range(200):
        move_player(player, Action.UP, game_map, settings, True)
        cell = game_map.char_at(int(player.pos_x // 64), int(player.pos_y // 64))
        assert cell != "1"
    assert move_player(player, Action.UP, game_map, settings, True) is False


def test_plain_mode_only_stops_at_grid_edge():
    settings = Settings()
    plain_map = room()
    plain = plain_map.player
    bonus_map = room(bonus=True)
    walled = bonus_map.player
    for _ in range(200):
        move_player(plain, Action.UP, plain_map, settings, False)
        move_player(walled, Action.UP, bonus_map, settings, True)
    assert plain.pos_y >= 0
    assert plain.pos_y < walled.pos_y


def test_move_rejects_non_movement():
    game_map = room()
    with pytest.raises(ValueError):
        move_player(game_map.player, Action.ROTATE_LEFT, game_map)


def test_can_move():
    game_map = room()
    player = game_map.player
    assert can_move(game_map, player, 2, 3) is True
    assert can_move(game_map, player, 2, 0) is False
    assert can_move(game_map, player, -1, 4) is False


def test_can_move_blocked_by_closed_door():
    game_map = door_room()
    assert can_move(game_map, game_map.player, 4, 2) is False
    game_map.set_door(4, 2, True)
    player = game_map.player
    player.pos_x = 3 * 64 + 28
    assert can_move(game_map, player, 4, 2) is True


def test_toggle_door_opens_and_closes():
    game_map = door_room()
    door = DoorState()
    door.can_open = True
    door.closed_target = (4, 2)
    assert toggle_door(game_map, door, game_map.player) is True
    assert game_map.char_at(4, 2) == "O"
    assert game_map.cell_at(4, 2) == Cell.DOOR_OPEN
    assert door.can_open is False
    door.can_close = True
    door.open_target = (4, 2)
    assert toggle_door(game_map, door, game_map.player) is True
    assert game_map.char_at(4, 2) == "D"
    assert game_map.cell_at(4, 2) == Cell.DOOR_CLOSED
    assert door.can_close is False


def test_toggle_door_refuses_to_close_on_player():
    game_map = door_room()
    game_map.set_door(4, 2, True)
    player = game_map.player
    player.pos_x = 4 * 64 + 28
    door = DoorState()
    door.can_close = True
    door.open_target = (4, 2)
    assert toggle_door(game_map, door, player) is False
    assert game_map.char_at(4, 2) == "O"
    assert door.can_close is True


def test_toggle_door_outside_map_does_nothing():
    game_map = door_room()
    door = DoorState()
    door.can_open = True
    door.closed_target = (99, 99)
    assert toggle_door(game_map, door, game_map.player) is False
    assert game_map.char_at(4, 2) == "D"


def test_apply_keys_moves_and_consumes_interact():
    game_map = door_room()
    player = game_map.player
    keys = KeyState(bonus=True)
    keys.press("w")
    keys.press("e")
    door = DoorState()
    door.can_open = True
    door.closed_target = (4, 2)
    y = player.pos_y
    apply_keys(keys, player, game_map, door, Settings(), True)
    assert player.pos_y < y
    assert Action.INTERACT not in keys.held
    assert Action.UP in keys.held
    assert game_map.char_at(4, 2) == "O"


def test_apply_keys_rotation_cancels_out():
    game_map = room()
    player = game_map.player
    start = player.angle
    keys = KeyState()
    keys.press("left")
    keys.press("right")
    apply_keys(keys, player, game_map)
    assert player.angle == pytest.approx(start)


def test_apply_keys_ignores_interact_without_bonus():
    game_map = door_room()
    keys = KeyState(bonus=True)
    keys.press("e")
    door = DoorState()
    door.can_open = True
    door.closed_target = (4, 2)
    apply_keys(keys, game_map.player, game_map, door, Settings(), False)
    assert game_map.char_at(4, 2) == "D"
    assert Action.INTERACT in keys.held