from __future__ import annotations

import pytest

from config.settings import Config, NodeConfig, ReceiverConfig, TransmitterConfig
from transport.udp_socket import IPFamily
from utils.exceptions import ConfigurationError

NODE_VARS = (
    "NODE_PORT",
    "NODE_IP_FAMILY",
    "NODE_MAX_MESSAGE_SIZE",
    "NODE_MAX_QUEUE_SIZE",
    "NODE_DEBUG",
    "NODE_POLL_INTERVAL",
    "PEER_HOST",
    "PEER_PORT",
    "PEER_IP_FAMILY",
    "SEND_INTERVAL",
    "RECEIVE_DURATION",
    "DRAIN_INTERVAL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in NODE_VARS:
        monkeypatch.delenv(name, raising=False)


def test_node_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NODE_PORT", "3490")
    config = Config().load_node_config()

    assert config == NodeConfig(port=3490)
    assert config.family is IPFamily.IPV6
    assert config.max_message_size == 1024
    assert config.max_queue_size == 100
    assert config.debug is False


def test_node_config_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NODE_PORT", "5590")
    monkeypatch.setenv("NODE_IP_FAMILY", "ipv4")
    monkeypatch.setenv("NODE_MAX_QUEUE_SIZE", "5")
    monkeypatch.setenv("NODE_DEBUG", "true")

    loader = Config()
    config = loader.load_node_config()

    assert config.family is IPFamily.IPV4
    assert config.max_queue_size == 5
    assert config.debug is True
    assert loader.node is config


def test_node_port_is_required() -> None:
    with pytest.raises(ConfigurationError):
        Config().load_node_config()


@pytest.mark.parametrize(
    "name, value",
    [
        ("NODE_PORT", "abc"),
        ("NODE_PORT", "70000"),
        ("NODE_IP_FAMILY", "ipx"),
        ("NODE_MAX_QUEUE_SIZE", "0"),
        ("NODE_DEBUG", "maybe"),
    ],
)
def test_invalid_node_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv("NODE_PORT", "3490")
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        Config().load_node_config()


def test_transmitter_config(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ConfigurationError):
        Config().load_transmitter_config()

    monkeypatch.setenv("PEER_PORT", "3490")
    config = Config().load_transmitter_config()
    assert config == TransmitterConfig(peer_host="::1", peer_port=3490)


def test_receiver_config(monkeypatch: pytest.MonkeyPatch) -> None:
    assert Config().load_receiver_config() == ReceiverConfig()

    monkeypatch.setenv("RECEIVE_DURATION", "0")
    with pytest.raises(ValueError):
        Config().load_receiver_config()
