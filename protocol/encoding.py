"""Message encoding and decoding functions."""

from time import time

from protocol.checksum import compute_checksum
from protocol.messages import WireMessage


def encode_message(payload: str, join_thread: bool = False) -> bytes:
    """
    Encode a payload into a wire frame stamped with the current time.

    Args:
        payload: Message text
        join_thread: Ask the receiver to terminate its receive loop

    Returns:
        Frame bytes ready for a single datagram
    """
    wire = WireMessage(
        timestamp=int(time()),
        message=payload,
        checksum=compute_checksum(payload),
        join_thread=join_thread,
    )
    return wire.serialize()


def decode_message(data: bytes) -> WireMessage:
    """
    Decode a wire frame.

    Raises the field-specific DecodeError subclass on failure; the
    checksum is not verified.
    """
    return WireMessage.parse(data)
