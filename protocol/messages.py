"""Message structure definitions."""

from dataclasses import dataclass
import json

from protocol.checksum import verify_checksum
from protocol.constants import (
    JSON_SEPARATORS,
    KEY_CHECKSUM,
    KEY_JOIN_THREAD,
    KEY_MESSAGE,
    KEY_TIME,
    WIRE_ENCODING,
)
from utils.exceptions import (
    MalformedFrameError,
    MissingChecksumError,
    MissingPayloadError,
    MissingTimestampError,
)


def _is_unsigned(value) -> bool:
    # bool is an int subclass; JSON true/false must not pass as a number
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class WireMessage:
    """Serialized frame: send time, payload, checksum and join flag."""

    timestamp: int
    message: str
    checksum: int
    join_thread: bool = False

    @classmethod
    def parse(cls, data: bytes) -> 'WireMessage':
        """
        Parse a frame from raw datagram bytes.

        The checksum is taken as received; it is not verified here.

        Args:
            data: Raw bytes of a single datagram

        Returns:
            Parsed WireMessage instance

        Raises:
            MalformedFrameError: If data is not a UTF-8 JSON object
            MissingTimestampError: If the Time field is absent
            MissingPayloadError: If the Msg field is absent
            MissingChecksumError: If the CRC field is absent
        """
        try:
            document = json.loads(data.decode(WIRE_ENCODING))
        except ValueError as e:
            raise MalformedFrameError(f"Cannot parse {len(data)} byte frame: {e}") from e

        if not isinstance(document, dict):
            raise MalformedFrameError(
                f"Frame is a JSON {type(document).__name__}, expected an object"
            )

        timestamp = document.get(KEY_TIME)
        if not _is_unsigned(timestamp):
            raise MissingTimestampError(f"Frame has no unsigned '{KEY_TIME}' field")

        message = document.get(KEY_MESSAGE)
        if not isinstance(message, str):
            raise MissingPayloadError(f"Frame has no string '{KEY_MESSAGE}' field")

        checksum = document.get(KEY_CHECKSUM)
        if not _is_unsigned(checksum):
            raise MissingChecksumError(f"Frame has no unsigned '{KEY_CHECKSUM}' field")

        return cls(
            timestamp=timestamp,
            message=message,
            checksum=checksum,
            join_thread=document.get(KEY_JOIN_THREAD) is True,
        )

    def serialize(self) -> bytes:
        """
        Serialize the frame to bytes.

        The join flag is written only when it is set.

        Returns:
            Compact UTF-8 JSON bytes
        """
        document = {
            KEY_TIME: self.timestamp,
            KEY_MESSAGE: self.message,
            KEY_CHECKSUM: self.checksum,
        }
        if self.join_thread:
            document[KEY_JOIN_THREAD] = True
        return json.dumps(
            document, separators=JSON_SEPARATORS, ensure_ascii=False
        ).encode(WIRE_ENCODING)


@dataclass(frozen=True)
class ReceivedDatagram:
    """A decoded inbound message together with its sender."""

    src_port: int
    src_address: str
    timestamp: int
    message: str
    checksum: int
    join_thread: bool = False

    @classmethod
    def from_wire(cls, wire: WireMessage, address: str, port: int) -> 'ReceivedDatagram':
        """Attach sender information to a parsed frame."""
        return cls(
            src_port=port,
            src_address=address,
            timestamp=wire.timestamp,
            message=wire.message,
            checksum=wire.checksum,
            join_thread=wire.join_thread,
        )

    @property
    def checksum_valid(self) -> bool:
        return verify_checksum(self.message, self.checksum)

    def describe(self) -> str:
        """Multi-line human-readable dump of the datagram."""
        return "\n".join([
            f"Source Port: {self.src_port}",
            f"Source IP Address: {self.src_address}",
            f"Time Stamp: {self.timestamp}",
            f"Message: {self.message}",
            f"CRC Checksum: {self.checksum}",
            f"Join Thread: {'true' if self.join_thread else 'false'}",
            "CRC checksum valid" if self.checksum_valid else "CRC checksum invalid",
        ])
