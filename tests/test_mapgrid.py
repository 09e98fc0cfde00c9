import math

import pytest

from cubscape.errors import MapError
from cubscape.mapgrid import (
    Cell,
    build_map,
    check_first_last_line,
    check_surrounded,
    find_player,
    is_player,
    read_map_lines,
    to_int_grid,
    validate_map,
)
from cubscape.settings import Settings

CLOSED = ["11111", "10N01", "11111"]


@pytest.mark.parametrize("c", ["N", "S", "E", "W"])
def test_is_player_true(c):
    assert is_player(c) is True


@pytest.mark.parametrize("c", ["0", "1", " ", "", "n", "NS"])
def test_is_player_false(c):
    assert is_player(c) is False


def test_read_map_lines_skips_blank_around_map():
    rows = read_map_lines(["\n", "  \n", "111\n", "1N1\n", "111\n", "\n"])
    assert rows == ["111", "1N1", "111"]


def test_read_map_lines_converts_tabs():
    assert read_map_lines(["1\t1\n"]) == ["1    1"]


def test_read_map_lines_blank_inside_raises():
    with pytest.raises(MapError):
        read_map_lines(["111\n", "\n", "111\n"])


@pytest.mark.parametrize("lines", [[], ["\n", "   \n"]])
def test_read_map_lines_no_map(lines):
    with pytest.raises(MapError):
        read_map_lines(lines)


@pytest.mark.parametrize(
    "c, angle",
    [("N", 3 * math.pi / 2), ("S", math.pi / 2), ("E", 0.0), ("W", math.pi)],
)
def test_find_player_angle_and_direction(c, angle):
    settings = Settings()
    player = find_player(["111", f"1{c}1", "111"], settings)
    assert player.angle == pytest.approx(angle)
    assert player.d_x == pytest.approx(math.cos(angle) * settings.move_speed)
    assert player.d_y == pytest.approx(math.sin(angle) * settings.move_speed)


def test_find_player_centred_in_cell():
    settings = Settings()
    player = find_player(["1111", "10E1", "1111"], settings)
    centre_x = player.pos_x + settings.player_size / 2
    centre_y = player.pos_y + settings.player_size / 2
    assert centre_x // settings.scale == 2
    assert centre_y // settings.scale == 1
    assert centre_x % settings.scale == settings.scale / 2


@pytest.mark.parametrize("rows", [["111", "101", "111"], ["1111", "1NS1", "1111"]])
def test_find_player_count_error(rows):
    with pytest.raises(MapError):
        find_player(rows)


def test_check_first_last_line_too_small():
    with pytest.raises(MapError):
        check_first_last_line(["111"])


@pytest.mark.parametrize(
    "rows", [["101", "111"], ["111", "1 0"], ["   ", "111"]]
)
def test_check_first_last_line_not_walls(rows):
    with pytest.raises(MapError):
        check_first_last_line(rows)


def test_check_first_last_line_accepts_spaces():
    assert check_first_last_line([" 111 ", "111"]) is None


def test_check_surrounded_hole():
    with pytest.raises(MapError):
        check_surrounded(["1111", "10 1", "1111"])


def test_check_surrounded_open_edge():
    with pytest.raises(MapError):
        check_surrounded(["111", "110", "111"])


def test_check_surrounded_door_only_checked_in_bonus():
    rows = ["1111", "1D 1", "1111"]
    assert check_surrounded(rows, bonus=False) is None
    with pytest.raises(MapError):
        check_surrounded(rows, bonus=True)


def test_validate_map_door_only_in_bonus():
    rows = ["11111", "1NDO1", "11111"]
    with pytest.raises(MapError):
        validate_map(["11111", "1ND01", "11111"], bonus=False)
    assert validate_map(["11111", "1ND01", "11111"], bonus=True) is None
    with pytest.raises(MapError):
        validate_map(rows, bonus=True)


def test_validate_map_invalid_char():
    with pytest.raises(MapError):
        validate_map(["111", "1X1", "1N1", "111"])


def test_to_int_grid_pads_short_rows():
    grid = to_int_grid(["111", "1 0", "11"], 3, 3)
    assert grid == [1, 1, 1, 1, 2, 0, 1, 1, 2]


def test_to_int_grid_unknown_chars():
    assert to_int_grid(["DX"], 2, 1, bonus=True) == [Cell.DOOR_CLOSED, Cell.UNKNOWN]
    assert to_int_grid(["DX"], 2, 1, bonus=False) == [Cell.VOID, Cell.VOID]


def test_build_map_dimensions_and_player_cleared():
    game_map = build_map([row + "\n" for row in CLOSED])
    assert game_map.max_x == 5
    assert game_map.max_y == 3
    assert game_map.rows[1] == "10001"
    assert len(game_map.grid) == game_map.max_x * game_map.max_y
    assert game_map.cell_at(2, 1) == Cell.EMPTY
    assert game_map.char_at(2, 1) == "0"


def test_build_map_max_x_ignores_trailing_floor():
    game_map = build_map(["111", "1N1", "111  "])
    assert game_map.max_x == 3


def test_game_map_outside_queries():
    game_map = build_map(CLOSED)
    assert game_map.char_at(10, 1) == ""
    assert game_map.char_at(0, -1) == ""
    assert game_map.cell_at(-1, 0) == Cell.VOID
    assert game_map.in_bounds(4, 2) is True
    assert game_map.in_bounds(5, 2) is False


def test_game_map_set_door_round_trip():
    game_map = build_map(["11111", "1ND01", "11111"], bonus=True)
    assert game_map.cell_at(2, 1) == Cell.DOOR_CLOSED
    game_map.set_door(2, 1, True)
    assert game_map.char_at(2, 1) == "O"
    assert game_map.cell_at(2, 1) == Cell.DOOR_OPEN
    game_map.set_door(2, 1, False)
    assert game_map.char_at(2, 1) == "D"
    assert game_map.cell_at(2, 1) == Cell.DOOR_CLOSED


def test_game_map_set_door_outside():
    game_map = build_map(CLOSED, bonus=True)
    with pytest.raises(IndexError):
        game_map.set_door(9, 9, True)