"""Transport module for raw datagram send and receive."""

from transport.udp_socket import (
    IPFamily,
    ListeningSocket,
    bind_listening,
    send_datagram,
)

__all__ = [
    'IPFamily',
    'ListeningSocket',
    'bind_listening',
    'send_datagram',
]
