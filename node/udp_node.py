"""Datagram node: sending, the background receive loop and its queue."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional
import threading

from config.settings import NodeConfig
from node.receive_queue import ReceiveQueue
from protocol.constants import (
    DEFAULT_MAX_MESSAGE_SIZE,
    DEFAULT_MAX_QUEUE_SIZE,
    JOIN_TIMEOUT,
    RECEIVE_POLL_INTERVAL,
    WAKEUP_MESSAGE,
)
from protocol.encoding import encode_message, decode_message
from protocol.messages import ReceivedDatagram
from transport.udp_socket import IPFamily, bind_listening, send_datagram
from utils.logging import get_logger
from utils.exceptions import (
    DecodeError,
    ErrorCode,
    ReceiveError,
    TransportError,
    UDPNodeError,
    describe_error,
)

logger = get_logger(__name__)


class NodeState(Enum):
    """State of the receive subsystem."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass
class ReceiveStats:
    """Counters kept by the receive loop."""

    received: int = 0
    queued: int = 0
    dropped_invalid: int = 0
    dropped_join: int = 0
    dropped_full: int = 0


class UDPNode:
    """
    Single addressable datagram endpoint.

    The node owns one listening socket for its whole life and, while
    receiving, one background thread that decodes, validates and queues
    incoming datagrams. Sends use a short-lived socket per call.

    Construction raises the bind error if the listening socket cannot be
    created; callers must treat that as a startup failure.
    """

    def __init__(
        self,
        port: int,
        family: IPFamily = IPFamily.IPV6,
        max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
        debug: bool = False,
        poll_interval: Optional[float] = RECEIVE_POLL_INTERVAL,
    ):
        """
        Bind the listening socket and prepare the receive queue.

        Args:
            port: Local port to listen on (0 lets the OS pick one)
            family: IP family for the listening socket
            max_message_size: Largest datagram accepted, in bytes
            max_queue_size: Maximum number of queued datagrams
            debug: Emit per-datagram inspection logs for this node
            poll_interval: Seconds between stop checks while idle in receive

        Raises:
            ValueError: If a size limit is not positive
            AddressResolutionError: If the wildcard address cannot be resolved
            SocketCreateError: If no socket could be created
            BindError: If the socket could not be bound
        """
        if max_message_size < 1:
            raise ValueError(f"Message size must be positive, got {max_message_size}")

        self._family: IPFamily = family
        self._max_message_size: int = max_message_size
        self._debug: bool = debug
        self._queue = ReceiveQueue(max_queue_size)
        self._stats = ReceiveStats()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lifecycle_lock = threading.Lock()

        self._listener = bind_listening(port, family, max_message_size, poll_interval)
        self._log = get_logger(f"{__name__}.{self._listener.port}", debug=debug)

        self._log.debug(
            f"Node initialized: family={family.name}, "
            f"max_message_size={max_message_size}, max_queue_size={max_queue_size}"
        )

    @classmethod
    def from_config(cls, config: NodeConfig) -> 'UDPNode':
        """Construct a node from a validated NodeConfig."""
        return cls(
            port=config.port,
            family=config.family,
            max_message_size=config.max_message_size,
            max_queue_size=config.max_queue_size,
            debug=config.debug,
            poll_interval=config.poll_interval,
        )

    @property
    def port(self) -> int:
        """Port the listening socket is bound to."""
        return self._listener.port

    @property
    def family(self) -> IPFamily:
        return self._family

    @property
    def state(self) -> NodeState:
        thread = self._thread
        if thread is not None and thread.is_alive():
            return NodeState.RUNNING
        return NodeState.IDLE

    @property
    def is_receiving(self) -> bool:
        return self.state is NodeState.RUNNING

    @property
    def is_listening(self) -> bool:
        """True until the listening socket has been closed."""
        return self._listener.is_open

    @property
    def stats(self) -> ReceiveStats:
        """Snapshot of the receive loop counters."""
        return replace(self._stats)

    def send(
        self,
        dest_port: int,
        family: IPFamily,
        host: str,
        payload: str,
        request_join: bool = False,
    ) -> ErrorCode:
        """
        Encode a payload and send it as a single datagram.

        Args:
            dest_port: Destination port
            family: IP family used to resolve the destination
            host: Destination hostname or address literal
            payload: Message text
            request_join: Set the join flag on the frame

        Returns:
            ErrorCode.SUCCESS, or the code of the transport failure
        """
        data = encode_message(payload, join_thread=request_join)
        try:
            sent = send_datagram(host, dest_port, family, data)
        except TransportError as e:
            self._log.error(f"tx: {e.describe()}: {e}")
            return e.code

        self._log.debug(f"tx: sent {sent} bytes to {host}:{dest_port}")
        return ErrorCode.SUCCESS

    def start_receiving(self) -> bool:
        """
        Start the receive loop in a background thread.

        Returns:
            True if a new loop was started, False if one is already running
            or the listening socket is closed
        """
        with self._lifecycle_lock:
            if self.is_receiving:
                self._log.warning("Receive loop is already running")
                return False
            if not self._listener.is_open:
                self._log.error("Listening socket is closed, cannot start receive loop")
                return False

            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._receive_loop,
                name=f"udp-rx-{self.port}",
                daemon=True,
            )
            self._thread.start()
            self._log.info("Receive loop started")
            return True

    def stop_receiving(self, timeout: float = JOIN_TIMEOUT) -> None:
        """
        Stop the receive loop, join its thread and close the listening socket.

        The stop request is followed by a self-addressed wake-up datagram
        and by interrupting the listening socket, so the loop exits even if
        the datagram is lost. Safe to call when idle and more than once.

        Args:
            timeout: Seconds to wait for the receive thread to finish
        """
        with self._lifecycle_lock:
            self._stop_event.set()

            thread = self._thread
            if thread is not None and thread.is_alive():
                self._wake_receiver()
                self._listener.interrupt()
                thread.join(timeout)
                if thread.is_alive():
                    self._log.error(f"Receive thread did not exit within {timeout}s")
                else:
                    self._thread = None
            else:
                self._thread = None

            if self._listener.is_open:
                self._log.info("Closing listening socket")
            self._listener.close()

    def close(self) -> None:
        """Release the node's thread and socket."""
        self.stop_receiving()

    def __enter__(self) -> 'UDPNode':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def is_data_available(self) -> bool:
        return not self._queue.is_empty()

    def queue_depth(self) -> int:
        return self._queue.size()

    def pop_datagram(self) -> ReceivedDatagram:
        """
        Remove and return the oldest received datagram.

        Raises:
            IndexError: If no datagram is queued; check is_data_available first
        """
        return self._queue.pop()

    @staticmethod
    def describe_error(code: int) -> str:
        return describe_error(code)

    def _wake_receiver(self) -> None:
        rv = self.send(
            self.port,
            self._family,
            self._family.loopback,
            WAKEUP_MESSAGE,
            request_join=True,
        )
        if rv != ErrorCode.SUCCESS:
            self._log.warning(f"Wake-up datagram not sent: {describe_error(rv)}")

    def _receive_loop(self) -> None:
        """
        Read, decode, validate and enqueue datagrams until stopped.

        A transport error or an undecodable datagram ends the loop; the
        node stays usable for sending.
        """
        error: Optional[UDPNodeError] = None

        while not self._stop_event.is_set():
            self._log.debug("rxloop: In loop")

            try:
                received = self._listener.receive_datagram()
            except ReceiveError as e:
                if not self._stop_event.is_set():
                    error = e
                break

            if received is None:
                continue
            address, port, data = received
            if not data:
                continue

            self._log.debug(
                f"Got datagram from: {address}:{port}, "
                f"{len(data)} bytes, contents: {data!r}"
            )

            try:
                wire = decode_message(data)
            except DecodeError as e:
                error = e
                break

            self._handle_datagram(ReceivedDatagram.from_wire(wire, address, port))

        if error is not None:
            self._log.error(f"rxloop: {error.describe()}: {error}")
        self._log.debug("rxloop: Exiting recv thread...")

    def _handle_datagram(self, datagram: ReceivedDatagram) -> None:
        self._stats.received += 1

        if not datagram.checksum_valid:
            self._stats.dropped_invalid += 1
            self._log.warning(
                f"rxloop: CRC checksum invalid from {datagram.src_address}:"
                f"{datagram.src_port}. Discarding..."
            )
            return

        if datagram.join_thread:
            self._stats.dropped_join += 1
            self._log.debug("rxloop: Join request received. Discarding...")
            return

        if not self._queue.push(datagram):
            self._stats.dropped_full += 1
            self._log.warning(
                "rxloop: Datagram receive queue is full. Discarding incoming datagram..."
            )
            return

        self._stats.queued += 1
