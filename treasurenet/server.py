"""Game server: keeps the authoritative board and applies the moves it receives."""

from __future__ import annotations

import argparse
import random
import sys

from treasurenet.game import GRID_SIZE, EVENT, Direction, Grid, Position, initialize_player
from treasurenet.protocol import (
    DEFAULT_PORT,
    KermitHeader,
    ProtocolError,
    binary_to_int,
)
from treasurenet.rawsocket import RawSocket, RawSocketError

TREASURE_COUNT = 8

# Numeric message types mapped to the moves they request.
_MOVES = {
    11: ("Move Up", Direction.UP),
    12: ("Move Down", Direction.DOWN),
    13: ("Move Left", Direction.LEFT),
    10: ("Move Right", Direction.RIGHT),
}


def initialize_server_grid(
    player_pos: Position, rng: random.Random | None = None
) -> Grid:
    """Build the board and scatter the treasures inside the walls.

    Treasures may share a cell, so fewer than eight may be visible.
    """
    rng = rng if rng is not None else random.Random()
    grid = Grid(player_pos)
    for _ in range(TREASURE_COUNT):
        x = rng.randrange(GRID_SIZE - 2) + 1
        y = rng.randrange(GRID_SIZE - 2) + 1
        grid[x, y] = EVENT
    return grid


def process_message(
    header: KermitHeader, grid: Grid, player_pos: Position
) -> Direction | None:
    """Apply the move a frame requests; return the direction, or None if unknown."""
    msg_type = binary_to_int(header.msg_type)
    move = _MOVES.get(msg_type)
    if move is None:
        print(f"Unknown message type: {msg_type}")
        return None
    label, direction = move
    print(label)
    grid.move_player(player_pos, direction)
    return direction


def listen_server(sock: RawSocket) -> None:
    """Receive frames forever, applying each to a fresh board."""
    player_pos = initialize_player()
    grid = initialize_server_grid(player_pos)

    print("Server waiting for packets on loopback...")
    while True:
        buffer, _sender = sock.receive()
        try:
            header = KermitHeader.from_bytes(buffer)
        except ProtocolError as exc:
            print(exc, file=sys.stderr)
            continue
        process_message(header, grid, player_pos)
        print(header.describe())


def serve(interface: str, port: int) -> None:
    """Open a packet socket on ``interface`` and serve until interrupted."""
    with RawSocket() as sock:
        sock.bind(interface, port)
        listen_server(sock)


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point for the server."""
    parser = argparse.ArgumentParser(
        prog="treasurenet-server", description="Run the treasure-hunt server."
    )
    parser.add_argument("--interface", default="lo", help="network interface to use")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port number")
    args = parser.parse_args(argv)

    try:
        serve(args.interface, args.port)
    except RawSocketError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())