import pytest

from treasurenet.game import (
    CLEAR_SCREEN,
    EVENT,
    FOUND,
    GRID_SIZE,
    INSTRUCTIONS,
    PLAYER,
    UNFOUND,
    WALL,
    Direction,
    Grid,
    Position,
    initialize_player,
    print_grid,
)


@pytest.fixture
def board():
    pos = initialize_player()
    return Grid(pos), pos


def test_initial_player_position():
    assert initialize_player() == Position(1, 1)


def test_grid_borders_are_walls(board):
    grid, _ = board
    last = GRID_SIZE - 1
    for i in range(GRID_SIZE):
        assert grid[0, i] == WALL
        assert grid[last, i] == WALL
        assert grid[i, 0] == WALL
        assert grid[i, last] == WALL


def test_grid_interior_unfound_except_player(board):
    grid, pos = board
    for x in range(1, GRID_SIZE - 1):
        for y in range(1, GRID_SIZE - 1):
            expected = PLAYER if (x, y) == (pos.x, pos.y) else UNFOUND
            assert grid[x, y] == expected


def test_move_down_updates_position_and_marks_found(board):
    grid, pos = board
    assert grid.move_player(pos, Direction.DOWN) is False
    assert pos == Position(2, 1)
    assert grid[2, 1] == PLAYER
    assert grid[1, 1] == FOUND


def test_move_right_accepts_char_code(board):
    grid, pos = board
    grid.move_player(pos, "3")
    assert pos == Position(1, 2)
    assert grid[1, 2] == PLAYER


def test_move_into_wall_is_blocked(board):
    grid, pos = board
    grid.move_player(pos, Direction.UP)
    grid.move_player(pos, Direction.LEFT)
    assert pos == Position(1, 1)
    assert grid[1, 1] == PLAYER


def test_treasure_is_announced_and_player_stays(board, capsys):
    grid, pos = board
    grid[2, 1] = EVENT
    assert grid.move_player(pos, Direction.DOWN) is True
    assert pos == Position(1, 1)
    assert grid[2, 1] == EVENT
    assert "Found a treasure!" in capsys.readouterr().out


def test_unknown_direction_is_ignored(board):
    grid, pos = board
    before = grid.render()
    assert grid.move_player(pos, "9") is False
    assert pos == Position(1, 1)
    assert grid.render() == before


def test_round_trip_returns_to_start(board):
    grid, pos = board
    for step in (Direction.DOWN, Direction.RIGHT, Direction.UP, Direction.LEFT):
        grid.move_player(pos, step)
    assert pos == Position(1, 1)
    assert grid[1, 1] == PLAYER
    assert grid[2, 2] == FOUND


def test_render_layout(board):
    grid, _ = board
    lines = grid.render().splitlines()
    assert len(lines) == GRID_SIZE
    assert lines[0] == "# " * GRID_SIZE
    assert lines[1].startswith(f"{WALL} {PLAYER} {UNFOUND} ")
    assert all(len(line) == 2 * GRID_SIZE for line in lines)


def test_print_grid_output(board, capsys):
    grid, _ = board
    print_grid(grid)
    out = capsys.readouterr().out
    assert out == CLEAR_SCREEN + INSTRUCTIONS + grid.render()
    assert "q to quit" in out