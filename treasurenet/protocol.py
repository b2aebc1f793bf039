"""Kermit-style frame layout used between the client and the server."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

DEFAULT_PORT = 8080
START = b"01111110"

START_SIZE = 8
SIZE_SIZE = 7
SEQUENCE_SIZE = 5
TYPE_SIZE = 4
CHECKSUM_SIZE = 8
HEADER_SIZE = START_SIZE + SIZE_SIZE + SEQUENCE_SIZE + TYPE_SIZE + CHECKSUM_SIZE

MAX_DATA_SIZE = 1024

# Error codes carried in ERROR frames.
PERMISSION_DENIED = b"0000"
NO_SPACE = b"0001"

_UINT_MASK = 0xFFFFFFFF
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class MessageType(Enum):
    """Four-character message type codes."""

    ACK = b"0000"
    NAK = b"0001"
    OK_ACK = b"0010"
    SIZE = b"0100"
    DATA = b"0101"
    TEXT_ACK_NAME = b"0110"
    VIDEO_ACK_NAME = b"0111"
    IMAGE_ACK_NAME = b"1000"
    END = b"1001"
    RIGHT = b"1010"
    UP = b"1011"
    DOWN = b"1100"
    LEFT = b"1101"
    ERROR = b"1111"


class ProtocolError(ValueError):
    """Raised for malformed frames or header fields."""


def _to_bytes(value: bytes | bytearray | str) -> bytes:
    if isinstance(value, str):
        return value.encode("latin-1")
    return bytes(value)


def _leading_decimal(field: bytes) -> int:
    """Read the leading decimal number of a field, 0 if there is none."""
    match = _LEADING_INT.match(field.decode("latin-1"))
    return int(match.group(1)) if match else 0


def binary_to_int(binary: bytes | str) -> int:
    """Interpret a string of '0'/'1' characters as an unsigned 32-bit number."""
    value = 0
    for char in _to_bytes(binary):
        value = ((value << 1) | ((char - 0x30) & _UINT_MASK)) & _UINT_MASK
    return value


_FIELDS = (
    ("start", START_SIZE),
    ("size", SIZE_SIZE),
    ("sequence", SEQUENCE_SIZE),
    ("msg_type", TYPE_SIZE),
    ("checksum", CHECKSUM_SIZE),
)


@dataclass
class KermitHeader:
    """One frame: fixed-width text fields followed by an optional payload."""

    start: bytes
    size: bytes
    sequence: bytes
    msg_type: bytes
    checksum: bytes
    data: bytes | None = None

    def __post_init__(self) -> None:
        for name, width in _FIELDS:
            value = _to_bytes(getattr(self, name))
            if len(value) != width:
                raise ProtocolError(
                    f"{name} field must be {width} bytes, got {len(value)}"
                )
            setattr(self, name, value)
        if self.data is not None:
            self.data = bytes(self.data)

    @property
    def payload_length(self) -> int:
        """Number of payload bytes sent on the wire: the size field, read as decimal, times 8."""
        return _leading_decimal(self.size) * 8

    def encoded_size(self) -> int:
        """Length of the frame produced by :meth:`to_bytes`."""
        if self.data is None:
            return HEADER_SIZE
        return HEADER_SIZE + self.payload_length

    def to_bytes(self) -> bytes:
        """Serialise the frame for sending."""
        frame = self.start + self.size + self.sequence + self.msg_type + self.checksum
        if self.data is None:
            return frame
        length = self.payload_length
        if len(self.data) < length:
            raise ProtocolError(
                f"payload holds {len(self.data)} bytes, size field requires {length}"
            )
        return frame + self.data[:length]

    @classmethod
    def from_bytes(cls, buffer: bytes | bytearray) -> KermitHeader:
        """Parse a received frame; the payload length is the size field read as binary."""
        buffer = bytes(buffer)
        if buffer[:START_SIZE] != START:
            raise ProtocolError("Invalid start sequence")
        if len(buffer) < HEADER_SIZE:
            raise ProtocolError(
                f"frame holds {len(buffer)} bytes, header needs {HEADER_SIZE}"
            )

        fields = {}
        offset = 0
        for name, width in _FIELDS:
            fields[name] = buffer[offset:offset + width]
            offset += width

        data_size = binary_to_int(fields["size"])
        data = None
        if data_size > 0:
            data = buffer[offset:offset + data_size]
            if len(data) < data_size:
                raise ProtocolError(
                    f"frame declares {data_size} payload bytes, {len(data)} present"
                )
        return cls(data=data, **fields)

    def describe(self) -> str:
        """Human-readable dump of every field."""

        def text(field: bytes) -> str:
            return field.split(b"\0", 1)[0].decode("latin-1")

        lines = [
            f"Start: {text(self.start)}",
            f"Size: {text(self.size)}",
            f"Sequence: {text(self.sequence)}",
            f"Type: {text(self.msg_type)}",
            f"Checksum: {text(self.checksum)}",
        ]
        if self.data is None:
            lines.append("Data: NULL")
        else:
            shown = self.data[:binary_to_int(self.size)]
            lines.append("Data: " + "".join(f"{byte:02x} " for byte in shown))
        return "\n".join(lines)


def create_header(
    size: bytes | str,
    sequence: bytes | str,
    type_: MessageType | bytes | str,
    data: bytes | None,
) -> KermitHeader:
    """Build a frame with the standard start marker and a zeroed checksum.

    When ``data`` is given, exactly as many bytes as the size field demands
    are kept; too little data is an error.
    """
    if isinstance(type_, MessageType):
        type_ = type_.value
    size = _to_bytes(size)
    payload = None
    if data is not None:
        length = _leading_decimal(size) * 8
        payload = bytes(data)
        if len(payload) < length:
            raise ProtocolError(
                f"payload holds {len(payload)} bytes, size field requires {length}"
            )
        payload = payload[:length]
    return KermitHeader(
        start=START,
        size=size,
        sequence=sequence,
        msg_type=type_,
        checksum=bytes(CHECKSUM_SIZE),
        data=payload,
    )