"""Game client: reads keys, sends moves to the server and draws the board."""

from __future__ import annotations

import argparse
import sys

from treasurenet.game import Direction, Grid, Position, initialize_player, print_grid
from treasurenet.protocol import DEFAULT_PORT, KermitHeader, MessageType, create_header
from treasurenet.rawsocket import ETH_ALEN, RawSocket, RawSocketError

DEFAULT_SERVER_MAC = bytes(ETH_ALEN)
QUIT_KEY = "q"


def getch() -> str:
    """Read one key from the terminal without echo or line buffering.

    Returns an empty string at end of input.
    """
    import termios

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    new = list(old)
    new[3] = old[3] & ~(termios.ICANON | termios.ECHO)
    termios.tcsetattr(fd, termios.TCSANOW, new)
    try:
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, old)


def move(
    sock: RawSocket,
    interface: str,
    server_mac: bytes,
    direction: MessageType | bytes | str,
) -> KermitHeader:
    """Send a move frame of the given type and wait for one reply."""
    header = create_header("0000000", "00000", direction, None)
    sock.send(interface, server_mac, header.to_bytes())
    sock.receive()
    return header


def _move(
    grid: Grid,
    pos: Position,
    sock: RawSocket,
    interface: str,
    server_mac: bytes,
    msg_type: MessageType,
    direction: Direction,
) -> KermitHeader:
    header = move(sock, interface, server_mac, msg_type)
    grid.move_player(pos, direction)
    print_grid(grid)
    return header


def move_left(grid, pos, sock, interface, server_mac) -> KermitHeader:
    """Ask the server to move left, then move on the local board."""
    return _move(grid, pos, sock, interface, server_mac, MessageType.LEFT, Direction.LEFT)


def move_right(grid, pos, sock, interface, server_mac) -> KermitHeader:
    """Ask the server to move right, then move on the local board."""
    return _move(grid, pos, sock, interface, server_mac, MessageType.RIGHT, Direction.RIGHT)


def move_up(grid, pos, sock, interface, server_mac) -> KermitHeader:
    """Ask the server to move up, then move on the local board."""
    return _move(grid, pos, sock, interface, server_mac, MessageType.UP, Direction.UP)


def move_down(grid, pos, sock, interface, server_mac) -> KermitHeader:
    """Ask the server to move down, then move on the local board."""
    return _move(grid, pos, sock, interface, server_mac, MessageType.DOWN, Direction.DOWN)


_KEY_BINDINGS = {
    "w": move_up,
    "a": move_left,
    "s": move_down,
    "d": move_right,
}


def run_client(interface: str, server_mac: bytes, port: int) -> None:
    """Play interactively until 'q' is pressed or input ends."""
    with RawSocket() as sock:
        sock.bind(interface, port)

        player_pos = initialize_player()
        grid = Grid(player_pos)
        print_grid(grid)

        key = getch()
        while key not in (QUIT_KEY, ""):
            key = getch()
            action = _KEY_BINDINGS.get(key)
            if action is not None:
                action(grid, player_pos, sock, interface, server_mac)


def _parse_mac(text: str) -> bytes:
    try:
        value = bytes.fromhex(text.replace(":", "").replace("-", ""))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid MAC address: {text!r}") from exc
    if len(value) != ETH_ALEN:
        raise argparse.ArgumentTypeError(f"invalid MAC address: {text!r}")
    return value


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point for the client."""
    parser = argparse.ArgumentParser(
        prog="treasurenet-client", description="Play the treasure hunt."
    )
    parser.add_argument("--interface", default="lo", help="network interface to use")
    parser.add_argument(
        "--mac",
        type=_parse_mac,
        default=DEFAULT_SERVER_MAC,
        help="server MAC address, e.g. 00:00:00:00:00:00",
    )
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port number")
    args = parser.parse_args(argv)

    try:
        run_client(args.interface, args.mac, args.port)
    except RawSocketError as exc:
        print(exc, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())