"""Utility modules for logging and error handling."""

from utils.logging import setup_logging, get_logger
from utils.exceptions import (
    ErrorCode,
    describe_error,
    UDPNodeError,
    ConfigurationError,
    TransportError,
    AddressResolutionError,
    SocketCreateError,
    BindError,
    SendError,
    ReceiveError,
    DecodeError,
    MalformedFrameError,
    MissingTimestampError,
    MissingPayloadError,
    MissingChecksumError,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'ErrorCode',
    'describe_error',
    'UDPNodeError',
    'ConfigurationError',
    'TransportError',
    'AddressResolutionError',
    'SocketCreateError',
    'BindError',
    'SendError',
    'ReceiveError',
    'DecodeError',
    'MalformedFrameError',
    'MissingTimestampError',
    'MissingPayloadError',
    'MissingChecksumError',
]
