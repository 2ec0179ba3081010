"""UDP socket transport: listening socket lifecycle and one-shot sends."""

from enum import IntEnum
from typing import Optional, Tuple
import socket

from protocol.constants import DEFAULT_MAX_MESSAGE_SIZE, RECEIVE_POLL_INTERVAL
from utils.logging import get_logger
from utils.exceptions import (
    AddressResolutionError,
    BindError,
    ReceiveError,
    SendError,
    SocketCreateError,
    TransportError,
)

logger = get_logger(__name__)


class IPFamily(IntEnum):
    """IP family used for resolving, binding and sending."""

    IPV4 = socket.AF_INET
    IPV6 = socket.AF_INET6

    @property
    def loopback(self) -> str:
        """Loopback address literal for this family."""
        return "127.0.0.1" if self is IPFamily.IPV4 else "::1"

    @classmethod
    def from_name(cls, name: str) -> 'IPFamily':
        """
        Parse a family name such as "ipv4" or "IPv6".

        Raises:
            ValueError: If the name is not a known family
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown IP family '{name}', expected ipv4 or ipv6") from None


class ListeningSocket:
    """
    Bound datagram socket owned by a node.

    Receives block for at most ``poll_interval`` seconds so the caller can
    re-check its own stop condition; ``None`` disables the timeout.
    """

    def __init__(
        self,
        sock: socket.socket,
        family: IPFamily,
        max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE,
        poll_interval: Optional[float] = RECEIVE_POLL_INTERVAL,
    ):
        self._sock = sock
        self._family = family
        self._max_message_size = max_message_size
        self._port: int = sock.getsockname()[1]
        self._sock.settimeout(poll_interval)

    @property
    def port(self) -> int:
        """Local port the socket was bound to."""
        return self._port

    @property
    def family(self) -> IPFamily:
        return self._family

    @property
    def is_open(self) -> bool:
        return self._sock.fileno() != -1

    def receive_datagram(self) -> Optional[Tuple[str, int, bytes]]:
        """
        Receive a single datagram.

        Returns:
            ``(address, port, data)``; ``data`` is empty when the socket was
            interrupted. ``None`` when the poll interval elapsed without data.

        Raises:
            ReceiveError: If the socket reports a transport-level error
        """
        try:
            data, addr = self._sock.recvfrom(self._max_message_size)
        except socket.timeout:
            return None
        except OSError as e:
            raise ReceiveError(f"recvfrom on port {self._port} failed: {e}") from e

        # A shut down socket returns an empty read with no sender
        if not addr:
            return "", 0, data
        return addr[0], addr[1], data

    def interrupt(self) -> None:
        """Wake up a thread blocked in receive_datagram."""
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Unconnected datagram sockets report ENOTCONN but still wake readers
            pass

    def close(self) -> None:
        """Close the socket. Safe to call more than once."""
        if self.is_open:
            logger.debug(f"Closing listening socket on port {self._port}")
        self._sock.close()


def bind_listening(
    port: int,
    family: IPFamily,
    max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE,
    poll_interval: Optional[float] = RECEIVE_POLL_INTERVAL,
) -> ListeningSocket:
    """
    Bind a datagram socket to the wildcard address of the given port.

    Every resolved candidate is tried in order and the first one that both
    creates and binds is used.

    Args:
        port: Local port (0 lets the OS pick one)
        family: IP family to resolve and bind
        max_message_size: Largest datagram accepted by receive_datagram
        poll_interval: Receive timeout in seconds

    Returns:
        Open ListeningSocket

    Raises:
        AddressResolutionError: If the wildcard address cannot be resolved
        SocketCreateError: If the last candidate failed at socket creation
        BindError: If the last candidate failed at bind
    """
    try:
        candidates = socket.getaddrinfo(
            None, port, family, socket.SOCK_DGRAM, 0, socket.AI_PASSIVE
        )
    except socket.gaierror as e:
        raise AddressResolutionError(f"getaddrinfo for port {port} failed: {e}") from e

    last_error: Optional[TransportError] = None
    for af, socktype, proto, _, sockaddr in candidates:
        try:
            sock = socket.socket(af, socktype, proto)
        except OSError as e:
            last_error = SocketCreateError(f"socket() for {sockaddr} failed: {e}")
            continue

        try:
            sock.bind(sockaddr)
        except OSError as e:
            sock.close()
            last_error = BindError(f"bind() to {sockaddr} failed: {e}")
            continue

        listening = ListeningSocket(sock, family, max_message_size, poll_interval)
        logger.info(f"Listening on port {listening.port}...")
        return listening

    raise last_error or SocketCreateError(f"No usable address for port {port}")


def send_datagram(host: str, port: int, family: IPFamily, data: bytes) -> int:
    """
    Send a single datagram through a short-lived socket.

    The sending socket is closed whether or not the send succeeds.

    Args:
        host: Destination hostname or address literal
        port: Destination port
        family: IP family used to resolve the destination
        data: Datagram payload

    Returns:
        Number of bytes sent

    Raises:
        AddressResolutionError: If the destination cannot be resolved
        SocketCreateError: If no resolved candidate yields a socket
        SendError: If the send itself fails
    """
    try:
        candidates = socket.getaddrinfo(host, port, family, socket.SOCK_DGRAM)
    except (socket.gaierror, UnicodeError) as e:
        raise AddressResolutionError(f"getaddrinfo for {host}:{port} failed: {e}") from e

    for af, socktype, proto, _, sockaddr in candidates:
        try:
            sock = socket.socket(af, socktype, proto)
        except OSError:
            continue
        break
    else:
        raise SocketCreateError(f"Failed to create socket for {host}:{port}")

    with sock:
        try:
            sent = sock.sendto(data, sockaddr)
        except OSError as e:
            raise SendError(f"sendto {host}:{port} failed: {e}") from e

    logger.debug(f"Sent {sent} bytes to {host}:{port}")
    return sent
