# treasurenet

A small treasure-hunt game for the terminal. The server keeps a 10×10 walled
grid with eight treasures scattered inside it; the client moves a player
around its own copy of the grid. Every move is sent to the server as a
Kermit-style frame over a raw Ethernet (`AF_PACKET`) socket, and the server
applies it to its board.

## Requirements

- Linux. Raw packet sockets exist only there, and the client reads keys
  through `termios`.
- Permission to open raw sockets: run as root or with the `CAP_NET_RAW`
  capability.

## Installing

```
pip install .
```

## Playing

Start the server in one terminal:

```
treasurenet-server
```

Start the client in another:

```
treasurenet-client
```

Both commands accept:

| Option        | Default | Meaning                                          |
|---------------|---------|--------------------------------------------------|
| `--interface` | `lo`    | network interface to use                         |
| `--port`      | `8080`  | accepted for completeness; unused at link layer  |

The client also takes `--mac`, the server's MAC address written as hex bytes
separated by `:` or `-` (default `00:00:00:00:00:00`).

Controls in the client (the first key pressed only starts the game):

| Key | Action     |
|-----|------------|
| `w` | move up    |
| `a` | move left  |
| `s` | move down  |
| `d` | move right |
| `q` | quit       |

On the grid, `#` is a wall, `.` is a cell not yet visited, a blank is a
visited cell and `O` is the player. After sending a move the client waits
for one frame before redrawing. The server prints the move it applied
("Move Up", "Move Right", …), "Found a treasure!" when the player would step
onto a treasure (`@`; the player then stays put), and a dump of every field
of each frame it receives. Frames with a bad start sequence are reported on
standard error and skipped. Stop either side with Ctrl-C.

## Using the pieces

The board and the frame format work without the network:

```python
from treasurenet.game import Grid, Direction, initialize_player
from treasurenet.protocol import KermitHeader, MessageType, create_header

pos = initialize_player()
grid = Grid(pos)
grid.move_player(pos, Direction.RIGHT)
print(grid.render())

header = create_header(b"0000000", b"00000", MessageType.RIGHT, None)
frame = header.to_bytes()
assert KermitHeader.from_bytes(frame).msg_type == header.msg_type
print(header.describe())
```

`treasurenet.server.initialize_server_grid(pos, rng)` builds a board with
treasures from a `random.Random`, and
`treasurenet.server.process_message(header, grid, pos)` applies one frame to
it, returning the `Direction` moved or `None` for an unknown type.

Malformed frames and header fields raise
`treasurenet.protocol.ProtocolError`. Failures to create or use the socket
raise `treasurenet.rawsocket.RawSocketError`.

## What it does not do

- The server never replies to the client or tells it where treasures are;
  the client's board never shows them.
- The checksum field is always sent as zero bytes and is not verified.
- Each server run starts a fresh board; nothing is saved.

## Running the tests

```
pip install ".[test]"
pytest
```