"""Single-byte XOR checksum over message payloads.

This is a weak, fast integrity check, not a cryptographic one: two bit
flips in the same position of different bytes cancel out and go undetected.
"""

from functools import reduce
from operator import xor

from protocol.constants import CHECKSUM_MASK, WIRE_ENCODING


def compute_checksum(payload: str) -> int:
    """
    Compute the XOR-fold of every byte of the encoded payload.

    Args:
        payload: Message text

    Returns:
        Checksum in range 0..255 (0 for an empty payload)
    """
    return reduce(xor, payload.encode(WIRE_ENCODING), 0) & CHECKSUM_MASK


def verify_checksum(payload: str, claimed: int) -> bool:
    """Return True if claimed matches the payload's checksum."""
    return compute_checksum(payload) == claimed
