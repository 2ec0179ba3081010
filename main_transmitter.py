#!/usr/bin/env python3
"""
Main entry point for the example transmitter.

Sends each command-line argument (or a built-in list of quotes) as one
datagram to the configured peer. Configuration is loaded from
environment variables.
"""

import sys
import os
import time

from config.settings import Config
from node.udp_node import UDPNode
from utils.logging import setup_logging, get_logger
from utils.exceptions import ConfigurationError, ErrorCode, TransportError

logger = get_logger(__name__)

DEFAULT_MESSAGES = [
    'Attitude is the "little thing" that makes a big difference',
    "Life is too short to spend another day at war with yourself",
    "The best time to plant a tree was 20 years ago. The second best time is now",
    "Be happy for this moment. This moment is your life",
    "A good laugh and a long sleep are the two best cures for anything",
    "Today is a good day to try",
    "The only person you are destined to become is the person you decide to be",
]


class TransmitterApplication:
    """Main application class for the transmitter."""

    def __init__(self, messages):
        """
        Initialize application.

        Args:
            messages: Payloads to send, in order
        """
        self.config = Config()
        self.messages = list(messages)
        self.node: UDPNode = None

    def run(self) -> int:
        """
        Run the transmitter application.

        Returns:
            Number of messages that failed to send
        """
        try:
            logger.info("Loading configuration...")
            node_config = self.config.load_node_config()
            tx_config = self.config.load_transmitter_config()

            logger.info(
                f"Configuration loaded: "
                f"peer={tx_config.peer_host}:{tx_config.peer_port}, "
                f"family={tx_config.peer_family.name}"
            )

            self.node = UDPNode.from_config(node_config)

            failures = 0
            for message in self.messages:
                rv = self.node.send(
                    tx_config.peer_port,
                    tx_config.peer_family,
                    tx_config.peer_host,
                    message,
                )
                if rv != ErrorCode.SUCCESS:
                    logger.error(f"Failed to send message: {self.node.describe_error(rv)}")
                    failures += 1
                if tx_config.send_interval:
                    time.sleep(tx_config.send_interval)

            logger.info(f"Sent {len(self.messages) - failures}/{len(self.messages)} message(s)")
            return failures

        except TransportError as e:
            logger.error(f"Cannot bind listening socket: {e.describe()}: {e}")
            sys.exit(1)
        except ConfigurationError as e:
            logger.error(f"Configuration error: {e}")
            logger.error(
                "Please check your environment variables. "
                "See .env.example for required configuration."
            )
            sys.exit(1)
        except ValueError as e:
            logger.error(f"Configuration validation error: {e}")
            sys.exit(1)
        finally:
            if self.node:
                self.node.close()


def main():
    """Main entry point."""
    log_level = os.getenv('LOG_LEVEL', 'INFO')
    setup_logging(log_level)

    logger.info("Starting transmitter application...")

    app = TransmitterApplication(sys.argv[1:] or DEFAULT_MESSAGES)
    failures = app.run()
    sys.exit(1 if failures else 0)


if __name__ == '__main__':
    main()
