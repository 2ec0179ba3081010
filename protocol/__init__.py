"""Protocol module for the wire format, checksum and message definitions."""

from protocol.constants import (
    DEFAULT_MAX_MESSAGE_SIZE,
    DEFAULT_MAX_QUEUE_SIZE,
    KEY_CHECKSUM,
    KEY_JOIN_THREAD,
    KEY_MESSAGE,
    KEY_TIME,
)
from protocol.checksum import compute_checksum, verify_checksum
from protocol.encoding import encode_message, decode_message
from protocol.messages import WireMessage, ReceivedDatagram

__all__ = [
    'DEFAULT_MAX_MESSAGE_SIZE',
    'DEFAULT_MAX_QUEUE_SIZE',
    'KEY_CHECKSUM',
    'KEY_JOIN_THREAD',
    'KEY_MESSAGE',
    'KEY_TIME',
    'compute_checksum',
    'verify_checksum',
    'encode_message',
    'decode_message',
    'WireMessage',
    'ReceivedDatagram',
]
