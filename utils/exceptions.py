"""Error codes and exception classes for the datagram node."""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Result codes reported by node operations."""

    SUCCESS = 0
    SOCKET_CREATE_FAILED = -1
    BIND_FAILED = -2
    RECEIVE_FAILED = -3
    SEND_FAILED = -4
    ADDRESS_RESOLUTION_FAILED = -5
    MISSING_TIMESTAMP = -6
    MISSING_PAYLOAD = -7
    MISSING_CHECKSUM = -8
    MALFORMED_FRAME = -9


_DESCRIPTIONS = {
    ErrorCode.SUCCESS: "Success!",
    ErrorCode.SOCKET_CREATE_FAILED: "Socket creation failed",
    ErrorCode.BIND_FAILED: "Bind failed",
    ErrorCode.RECEIVE_FAILED: "Recvfrom function failed",
    ErrorCode.SEND_FAILED: "Sendto function failed",
    ErrorCode.ADDRESS_RESOLUTION_FAILED: "Getaddrinfo function failed",
    ErrorCode.MISSING_TIMESTAMP: "Parsing time from buffer (to JSON) failed",
    ErrorCode.MISSING_PAYLOAD: "Parsing message from buffer (to JSON) failed",
    ErrorCode.MISSING_CHECKSUM: "Parsing CRC from buffer (to JSON) failed",
    ErrorCode.MALFORMED_FRAME: "Buffer is not a JSON object",
}


def describe_error(code: int) -> str:
    """
    Return a human-readable description for an error code.

    Args:
        code: ErrorCode member or its integer value

    Returns:
        Static description, or "Invalid error code" for unknown values
    """
    try:
        return _DESCRIPTIONS[ErrorCode(code)]
    except ValueError:
        return "Invalid error code"


class UDPNodeError(Exception):
    """Base exception class for all node errors."""

    code: ErrorCode = ErrorCode.SUCCESS

    def describe(self) -> str:
        """Static description of this error's code."""
        return describe_error(self.code)


class ConfigurationError(UDPNodeError):
    """Exception raised when configuration is invalid or missing."""
    pass


class TransportError(UDPNodeError):
    """Base class for socket-level failures."""
    pass


class AddressResolutionError(TransportError):
    """Exception raised when getaddrinfo cannot resolve an address."""
    code = ErrorCode.ADDRESS_RESOLUTION_FAILED


class SocketCreateError(TransportError):
    """Exception raised when no resolved candidate yields a usable socket."""
    code = ErrorCode.SOCKET_CREATE_FAILED


class BindError(TransportError):
    """Exception raised when the listening socket cannot be bound."""
    code = ErrorCode.BIND_FAILED


class SendError(TransportError):
    """Exception raised when sending a datagram fails."""
    code = ErrorCode.SEND_FAILED


class ReceiveError(TransportError):
    """Exception raised when receiving from the listening socket fails."""
    code = ErrorCode.RECEIVE_FAILED


class DecodeError(UDPNodeError):
    """Base class for wire-format decode failures."""
    code = ErrorCode.MALFORMED_FRAME


class MalformedFrameError(DecodeError):
    """Exception raised when a buffer is not a UTF-8 JSON object."""
    code = ErrorCode.MALFORMED_FRAME


class MissingTimestampError(DecodeError):
    """Exception raised when the Time field is absent."""
    code = ErrorCode.MISSING_TIMESTAMP


class MissingPayloadError(DecodeError):
    """Exception raised when the Msg field is absent."""
    code = ErrorCode.MISSING_PAYLOAD


class MissingChecksumError(DecodeError):
    """Exception raised when the CRC field is absent."""
    code = ErrorCode.MISSING_CHECKSUM
