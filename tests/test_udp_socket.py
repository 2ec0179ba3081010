from __future__ import annotations

import socket
import time

import pytest

from transport.udp_socket import IPFamily, bind_listening, send_datagram
from utils.exceptions import AddressResolutionError, BindError, ErrorCode


def test_family_from_name() -> None:
    assert IPFamily.from_name("ipv4") is IPFamily.IPV4
    assert IPFamily.from_name(" IPv6 ") is IPFamily.IPV6
    assert IPFamily.IPV4 == socket.AF_INET
    with pytest.raises(ValueError):
        IPFamily.from_name("ipx")


def test_loopback_per_family() -> None:
    assert IPFamily.IPV4.loopback == "127.0.0.1"
    assert IPFamily.IPV6.loopback == "::1"


def test_bind_assigns_port_and_close_is_idempotent() -> None:
    listener = bind_listening(0, IPFamily.IPV4)
    assert listener.is_open
    assert listener.port > 0
    assert listener.family is IPFamily.IPV4

    listener.close()
    listener.close()
    assert not listener.is_open


def test_second_bind_on_same_port_fails() -> None:
    listener = bind_listening(0, IPFamily.IPV4)
    try:
        with pytest.raises(BindError) as exc_info:
            bind_listening(listener.port, IPFamily.IPV4)
        assert exc_info.value.code == ErrorCode.BIND_FAILED
    finally:
        listener.close()


def test_send_and_receive_over_loopback() -> None:
    listener = bind_listening(0, IPFamily.IPV4, poll_interval=2.0)
    try:
        sent = send_datagram("127.0.0.1", listener.port, IPFamily.IPV4, b"payload")
        assert sent == 7

        address, port, data = listener.receive_datagram()
        assert address == "127.0.0.1"
        assert port > 0
        assert data == b"payload"
    finally:
        listener.close()


def test_receive_is_truncated_to_max_message_size() -> None:
    listener = bind_listening(0, IPFamily.IPV4, max_message_size=4, poll_interval=2.0)
    try:
        send_datagram("127.0.0.1", listener.port, IPFamily.IPV4, b"abcdefgh")
        _, _, data = listener.receive_datagram()
        assert data == b"abcd"
    finally:
        listener.close()


def test_receive_returns_none_when_poll_interval_elapses() -> None:
    listener = bind_listening(0, IPFamily.IPV4, poll_interval=0.05)
    try:
        assert listener.receive_datagram() is None
    finally:
        listener.close()


def test_interrupt_unblocks_receive() -> None:
    listener = bind_listening(0, IPFamily.IPV4, poll_interval=0.5)
    try:
        listener.interrupt()
        started = time.monotonic()
        result = listener.receive_datagram()
        assert result is None or result[2] == b""
        assert time.monotonic() - started < 2.0
    finally:
        listener.close()


def test_send_to_unresolvable_host() -> None:
    with pytest.raises(AddressResolutionError) as exc_info:
        send_datagram("nonexistent.invalid", 9, IPFamily.IPV4, b"x")
    assert exc_info.value.code == ErrorCode.ADDRESS_RESOLUTION_FAILED
