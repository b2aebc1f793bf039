import socket
import struct
from unittest import mock

import pytest

from treasurenet.rawsocket import (
    AF_PACKET,
    ETH_P_ALL,
    PACKET_ADD_MEMBERSHIP,
    PACKET_MR_PROMISC,
    RECEIVE_BUFFER_SIZE,
    SOL_PACKET,
    RawSocket,
    RawSocketError,
)

MAC = bytes(6)


@pytest.fixture
def fake_sock():
    with mock.patch("socket.socket") as factory:
        yield factory, factory.return_value


def test_creation_uses_packet_family(fake_sock):
    factory, sock = fake_sock
    sock.sendto.return_value = 4
    raw = RawSocket()
    assert factory.call_args == mock.call(AF_PACKET, socket.SOCK_RAW, socket.htons(ETH_P_ALL))
    assert raw.send("lo", MAC, b"ping") == 4


def test_creation_failure_raises():
    with mock.patch("socket.socket", side_effect=PermissionError(1, "denied")):
        with pytest.raises(RawSocketError):
            RawSocket()


def test_bind_sets_promiscuous_membership(fake_sock):
    _, sock = fake_sock
    sock.recvfrom.return_value = (b"frame", ("lo", ETH_P_ALL, 0, 0, MAC))
    raw = RawSocket()
    with mock.patch("socket.if_nametoindex", return_value=1):
        raw.bind("lo", 8080)
    assert sock.bind.call_args == mock.call(("lo", ETH_P_ALL))
    level, option, payload = sock.setsockopt.call_args.args
    assert (level, option) == (SOL_PACKET, PACKET_ADD_MEMBERSHIP)
    assert struct.unpack("iHH8s", payload) == (1, PACKET_MR_PROMISC, 0, bytes(8))
    data, _ = raw.receive()
    assert data == b"frame"


def test_bind_failure_raises(fake_sock):
    _, sock = fake_sock
    sock.bind.side_effect = OSError(19, "No such device")
    with mock.patch("socket.if_nametoindex", return_value=1):
        with pytest.raises(RawSocketError, match="binding"):
            RawSocket().bind("lo", 8080)


def test_setsockopt_failure_raises(fake_sock):
    _, sock = fake_sock
    sock.setsockopt.side_effect = OSError(1, "denied")
    with mock.patch("socket.if_nametoindex", return_value=1):
        with pytest.raises(RawSocketError, match="setsockopt"):
            RawSocket().bind("lo", 8080)


def test_unknown_interface_raises(fake_sock):
    with mock.patch("socket.if_nametoindex", side_effect=OSError(19, "No such device")):
        with pytest.raises(RawSocketError):
            RawSocket().bind("nope0", 8080)


def test_send_returns_count_and_addresses_peer(fake_sock, capsys):
    _, sock = fake_sock
    sock.sendto.return_value = 32
    assert RawSocket().send("lo", MAC, b"x" * 32) == 32
    assert sock.sendto.call_args == mock.call(b"x" * 32, ("lo", ETH_P_ALL, 0, 0, MAC))
    assert "Sent 32 bytes" in capsys.readouterr().out


def test_send_failure_raises(fake_sock):
    _, sock = fake_sock
    sock.sendto.side_effect = OSError(100, "Network is down")
    with pytest.raises(RawSocketError):
        RawSocket().send("lo", MAC, b"frame")


def test_send_rejects_bad_mac(fake_sock):
    with pytest.raises(ValueError):
        RawSocket().send("lo", b"\x00\x01", b"frame")


def test_receive_returns_frame(fake_sock, capsys):
    _, sock = fake_sock
    sock.recvfrom.return_value = (b"hello", ("lo", ETH_P_ALL, 0, 0, MAC))
    data, sender = RawSocket().receive()
    assert data == b"hello"
    assert sender[0] == "lo"
    assert sock.recvfrom.call_args == mock.call(RECEIVE_BUFFER_SIZE)
    assert "Received 5 bytes" in capsys.readouterr().out


def test_receive_failure_raises(fake_sock):
    _, sock = fake_sock
    sock.recvfrom.side_effect = OSError(4, "Interrupted")
    with pytest.raises(RawSocketError):
        RawSocket().receive()


def test_connect_failure_raises(fake_sock):
    _, sock = fake_sock
    sock.connect.side_effect = OSError(95, "Operation not supported")
    with pytest.raises(RawSocketError, match="connect"):
        RawSocket().connect("lo", MAC)


def test_context_manager_closes(fake_sock):
    _, sock = fake_sock
    sock.sendto.return_value = 3
    with RawSocket() as raw:
        assert raw.send("lo", MAC, b"abc") == 3
        assert sock.close.call_count == 0
    assert sock.close.call_count == 1