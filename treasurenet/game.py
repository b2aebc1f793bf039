"""Treasure-hunt board: the walled grid and the player's moves."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GRID_SIZE = 10  # includes the surrounding walls
PLAYER = "O"
WALL = "#"
FOUND = " "
UNFOUND = "."
EVENT = "@"

CLEAR_SCREEN = "\033[2J\033[H"
INSTRUCTIONS = "\nq to quit    w up    a left    s down    d right\n\n"


@dataclass
class Position:
    """A cell on the grid: ``x`` is the row, ``y`` the column."""

    x: int
    y: int


class Direction(str, Enum):
    """Movement codes shared by the client and the server."""

    UP = "0"
    DOWN = "1"
    LEFT = "2"
    RIGHT = "3"

    @property
    def delta(self) -> tuple[int, int]:
        """Row and column offsets for one step in this direction."""
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class Grid:
    """A square board surrounded by walls, with the player placed on it."""

    def __init__(self, player_pos: Position) -> None:
        last = GRID_SIZE - 1
        self._cells = [
            [
                WALL if row in (0, last) or col in (0, last) else UNFOUND
                for col in range(GRID_SIZE)
            ]
            for row in range(GRID_SIZE)
        ]
        self[player_pos.x, player_pos.y] = PLAYER

    def __getitem__(self, key: tuple[int, int]) -> str:
        x, y = key
        return self._cells[x][y]

    def __setitem__(self, key: tuple[int, int], value: str) -> None:
        x, y = key
        self._cells[x][y] = value

    def render(self) -> str:
        """Return the board as text, one line per row, cells followed by a space."""
        return "".join(
            "".join(f"{cell} " for cell in row) + "\n" for row in self._cells
        )

    def move_player(self, player_pos: Position, direction: Direction | str) -> bool:
        """Move the player one step, updating ``player_pos`` in place.

        Walls block the move. Stepping onto a treasure announces it and leaves
        the player where they were. Unknown direction codes are ignored.
        Returns True when a treasure was found.
        """
        try:
            step = Direction(direction)
        except ValueError:
            return False

        dx, dy = step.delta
        new_x, new_y = player_pos.x + dx, player_pos.y + dy
        target = self[new_x, new_y]
        if target == WALL:
            return False
        if target == EVENT:
            print("Found a treasure!")
            return True

        self[player_pos.x, player_pos.y] = FOUND
        self[new_x, new_y] = PLAYER
        player_pos.x = new_x
        player_pos.y = new_y
        return False


def initialize_player() -> Position:
    """Return the starting position, just inside the top-left corner."""
    return Position(1, 1)


def print_grid(grid: Grid) -> None:
    """Clear the terminal and draw the controls and the board."""
    print(CLEAR_SCREEN + INSTRUCTIONS + grid.render(), end="")