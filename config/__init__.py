"""Configuration module for managing node settings."""

from config.settings import (
    NodeConfig,
    TransmitterConfig,
    ReceiverConfig,
    Config,
)

__all__ = [
    'NodeConfig',
    'TransmitterConfig',
    'ReceiverConfig',
    'Config',
]
