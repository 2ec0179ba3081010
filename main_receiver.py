#!/usr/bin/env python3
"""
Main entry point for the example receiver.

Binds a node, receives datagrams in the background for a configured
duration, then prints and removes everything that was queued.
Configuration is loaded from environment variables.
"""

import signal
import sys
import os
import threading
import time

from config.settings import Config
from node.udp_node import UDPNode
from utils.logging import setup_logging, get_logger
from utils.exceptions import ConfigurationError, TransportError

logger = get_logger(__name__)


class ReceiverApplication:
    """Main application class for the receiver."""

    def __init__(self):
        """Initialize application."""
        self.config = Config()
        self.node: UDPNode = None
        self.shutdown_event = threading.Event()

    def run(self) -> None:
        """
        Run the receiver application.

        Loads configuration, binds the node, receives until the listen
        duration elapses or a shutdown signal arrives, then drains the queue.
        """
        try:
            logger.info("Loading configuration...")
            node_config = self.config.load_node_config()
            receiver_config = self.config.load_receiver_config()

            logger.info(
                f"Configuration loaded: "
                f"port={node_config.port}, family={node_config.family.name}, "
                f"queue_size={node_config.max_queue_size}"
            )

            self.node = UDPNode.from_config(node_config)
            self.node.start_receiving()

            logger.info(f"Receiving for {receiver_config.listen_duration}s, press Ctrl+C to stop early")
            self.shutdown_event.wait(receiver_config.listen_duration)

            self.drain(receiver_config.drain_interval)

            self.node.stop_receiving()
            logger.info("Receiver stopped successfully")

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

    def drain(self, interval: float) -> None:
        """Print and remove every queued datagram."""
        available = self.node.queue_depth()
        logger.info(f"{available} datagram(s) available")
        for _ in range(available):
            print(self.node.pop_datagram().describe())
            print()
            time.sleep(interval)

    def handle_shutdown(self, signum, frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        logger.info(f"Received signal {signum}")
        self.shutdown_event.set()


def main():
    """Main entry point."""
    log_level = os.getenv('LOG_LEVEL', 'INFO')
    setup_logging(log_level)

    logger.info("Starting receiver application...")

    app = ReceiverApplication()

    for sig in (signal.SIGTERM, signal.SIGINT):
        signal.signal(sig, app.handle_shutdown)

    app.run()


if __name__ == '__main__':
    main()
