"""Configuration management for datagram nodes and the example programs."""

from dataclasses import dataclass
from typing import Optional
import os
from pathlib import Path

from dotenv import load_dotenv

from protocol.constants import (
    DEFAULT_MAX_MESSAGE_SIZE,
    DEFAULT_MAX_QUEUE_SIZE,
    RECEIVE_POLL_INTERVAL,
)
from transport.udp_socket import IPFamily
from utils.exceptions import ConfigurationError


# Load .env file from project root
# This is called at module import time to ensure env vars are available
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path, override=False)


def _validate_port(name: str, port: int, allow_zero: bool = False) -> None:
    lowest = 0 if allow_zero else 1
    if not isinstance(port, int) or port < lowest or port > 65535:
        raise ValueError(f"{name} must be between {lowest} and 65535")


def _get_int(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be a valid integer, got: {value}")


def _get_float(name: str, default: str) -> float:
    value = os.getenv(name, default)
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a valid number, got: {value}")


def _get_bool(name: str, default: str = "false") -> bool:
    value = os.getenv(name, default).strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"{name} must be a boolean, got: {value}")


@dataclass
class NodeConfig:
    """Configuration for a datagram node."""

    port: int
    family: IPFamily = IPFamily.IPV6
    max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE
    max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE
    debug: bool = False
    poll_interval: float = RECEIVE_POLL_INTERVAL

    def validate(self) -> None:
        """Validate node configuration parameters."""
        _validate_port("Node port", self.port, allow_zero=True)
        if not isinstance(self.family, IPFamily):
            raise ValueError("Node IP family must be ipv4 or ipv6")
        if self.max_message_size < 1:
            raise ValueError("Maximum message size must be positive")
        if self.max_queue_size < 1:
            raise ValueError("Maximum queue size must be positive")
        if self.poll_interval <= 0:
            raise ValueError("Poll interval must be positive")


@dataclass
class TransmitterConfig:
    """Configuration for the example transmitter."""

    peer_host: str
    peer_port: int
    peer_family: IPFamily = IPFamily.IPV6
    send_interval: float = 0.0

    def validate(self) -> None:
        """Validate transmitter configuration parameters."""
        if not self.peer_host:
            raise ValueError("Peer host is required")
        _validate_port("Peer port", self.peer_port)
        if self.send_interval < 0:
            raise ValueError("Send interval cannot be negative")


@dataclass
class ReceiverConfig:
    """Configuration for the example receiver."""

    listen_duration: float = 10.0
    drain_interval: float = 0.1

    def validate(self) -> None:
        """Validate receiver configuration parameters."""
        if self.listen_duration <= 0:
            raise ValueError("Receive duration must be positive")
        if self.drain_interval < 0:
            raise ValueError("Drain interval cannot be negative")


class Config:
    """Main configuration loader and manager."""

    def __init__(self):
        """Initialize configuration manager."""
        self.node: Optional[NodeConfig] = None
        self.transmitter: Optional[TransmitterConfig] = None
        self.receiver: Optional[ReceiverConfig] = None

    def load_node_config(self) -> NodeConfig:
        """
        Load node configuration from environment variables.

        Environment variables:
            NODE_PORT: Local listening port (required)
            NODE_IP_FAMILY: ipv4 or ipv6 (default: ipv6)
            NODE_MAX_MESSAGE_SIZE: Largest datagram in bytes (default: 1024)
            NODE_MAX_QUEUE_SIZE: Receive queue depth (default: 100)
            NODE_DEBUG: Per-datagram debug logging (default: false)
            NODE_POLL_INTERVAL: Receive poll interval in seconds (default: 0.5)

        Returns:
            Validated NodeConfig instance

        Raises:
            ConfigurationError: If NODE_PORT is missing
            ValueError: If configuration is invalid
        """
        if not os.getenv('NODE_PORT'):
            raise ConfigurationError(
                "NODE_PORT environment variable is required. "
                "Example: NODE_PORT=3490"
            )

        config = NodeConfig(
            port=_get_int('NODE_PORT', '0'),
            family=IPFamily.from_name(os.getenv('NODE_IP_FAMILY', 'ipv6')),
            max_message_size=_get_int('NODE_MAX_MESSAGE_SIZE', str(DEFAULT_MAX_MESSAGE_SIZE)),
            max_queue_size=_get_int('NODE_MAX_QUEUE_SIZE', str(DEFAULT_MAX_QUEUE_SIZE)),
            debug=_get_bool('NODE_DEBUG'),
            poll_interval=_get_float('NODE_POLL_INTERVAL', str(RECEIVE_POLL_INTERVAL)),
        )
        config.validate()
        self.node = config
        return config

    def load_transmitter_config(self) -> TransmitterConfig:
        """
        Load transmitter configuration from environment variables.

        Environment variables:
            PEER_PORT: Destination port (required)
            PEER_HOST: Destination host (default: ::1)
            PEER_IP_FAMILY: ipv4 or ipv6 (default: ipv6)
            SEND_INTERVAL: Pause between messages in seconds (default: 0)

        Returns:
            Validated TransmitterConfig instance

        Raises:
            ConfigurationError: If PEER_PORT is missing
            ValueError: If configuration is invalid
        """
        if not os.getenv('PEER_PORT'):
            raise ConfigurationError(
                "PEER_PORT environment variable is required. "
                "Example: PEER_PORT=3490"
            )

        config = TransmitterConfig(
            peer_host=os.getenv('PEER_HOST', '::1'),
            peer_port=_get_int('PEER_PORT', '0'),
            peer_family=IPFamily.from_name(os.getenv('PEER_IP_FAMILY', 'ipv6')),
            send_interval=_get_float('SEND_INTERVAL', '0'),
        )
        config.validate()
        self.transmitter = config
        return config

    def load_receiver_config(self) -> ReceiverConfig:
        """
        Load receiver configuration from environment variables.

        Environment variables:
            RECEIVE_DURATION: Seconds to listen before draining (default: 10)
            DRAIN_INTERVAL: Pause between printed datagrams (default: 0.1)

        Returns:
            Validated ReceiverConfig instance

        Raises:
            ValueError: If configuration is invalid
        """
        config = ReceiverConfig(
            listen_duration=_get_float('RECEIVE_DURATION', '10'),
            drain_interval=_get_float('DRAIN_INTERVAL', '0.1'),
        )
        config.validate()
        self.receiver = config
        return config
