"""Link-layer packet socket for exchanging frames on a network interface."""

from __future__ import annotations

import socket
import struct

ETH_P_ALL = 0x0003
ETH_ALEN = 6
AF_PACKET = getattr(socket, "AF_PACKET", 17)
SOL_PACKET = 263
PACKET_ADD_MEMBERSHIP = 1
PACKET_MR_PROMISC = 1
RECEIVE_BUFFER_SIZE = 4096


class RawSocketError(OSError):
    """Raised when the packet socket cannot be created or used."""


def _mac_bytes(mac: bytes | bytearray) -> bytes:
    value = bytes(mac)
    if len(value) != ETH_ALEN:
        raise ValueError(f"MAC address must be {ETH_ALEN} bytes, got {len(value)}")
    return value


def _address(interface: str, dest_mac: bytes | bytearray) -> tuple:
    return (interface, ETH_P_ALL, 0, 0, _mac_bytes(dest_mac))


class RawSocket:
    """A raw packet socket receiving every protocol."""

    def __init__(self) -> None:
        try:
            self._sock = socket.socket(AF_PACKET, socket.SOCK_RAW, socket.htons(ETH_P_ALL))
        except OSError as exc:
            raise RawSocketError("Error creating socket") from exc

    def bind(self, interface: str, port: int) -> None:
        """Bind to ``interface`` and switch it to promiscuous mode.

        ``port`` has no meaning at the link layer and is not used.
        """
        try:
            ifindex = socket.if_nametoindex(interface)
        except OSError as exc:
            raise RawSocketError(f"Unknown interface {interface!r}") from exc
        try:
            self._sock.bind((interface, ETH_P_ALL))
        except OSError as exc:
            raise RawSocketError("Error binding socket to interface") from exc

        membership = struct.pack("iHH8s", ifindex, PACKET_MR_PROMISC, 0, b"")
        try:
            self._sock.setsockopt(SOL_PACKET, PACKET_ADD_MEMBERSHIP, membership)
        except OSError as exc:
            raise RawSocketError("Error setting setsockopt") from exc

    def connect(self, interface: str, dest_mac: bytes | bytearray) -> None:
        """Fix the peer the socket talks to."""
        address = _address(interface, dest_mac)
        try:
            self._sock.connect(address)
        except OSError as exc:
            raise RawSocketError(f"connect() failed: {exc.strerror} (errno={exc.errno})") from exc

    def send(self, interface: str, dest_mac: bytes | bytearray, message: bytes) -> int:
        """Send ``message`` to ``dest_mac`` through ``interface``; return the bytes sent."""
        address = _address(interface, dest_mac)
        try:
            sent = self._sock.sendto(bytes(message), address)
        except OSError as exc:
            raise RawSocketError(f"sendto failed: {exc}") from exc
        print(f"Sent {sent} bytes")
        return sent

    def receive(self) -> tuple[bytes, tuple]:
        """Wait for one frame and return it with the sender's address."""
        try:
            data, sender = self._sock.recvfrom(RECEIVE_BUFFER_SIZE)
        except OSError as exc:
            raise RawSocketError(f"recvfrom failed: {exc}") from exc
        print(f"Received {len(data)} bytes")
        return data, sender

    def close(self) -> None:
        """Release the socket."""
        self._sock.close()

    def __enter__(self) -> RawSocket:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()