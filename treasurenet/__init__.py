"""Treasure-hunt grid game whose moves travel as frames over raw Ethernet sockets."""

__version__ = "0.1.0"
__all__ = ["game", "protocol", "rawsocket", "server", "client"]