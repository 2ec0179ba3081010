"""Bounded thread-safe FIFO of received datagrams."""

from collections import deque
from typing import Deque
import threading

from protocol.constants import DEFAULT_MAX_QUEUE_SIZE
from protocol.messages import ReceivedDatagram


class ReceiveQueue:
    """
    FIFO shared between the receive thread and its consumers.

    Every operation holds a single lock for its own duration and never
    waits for space or data. When full, the newest datagram is dropped.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_QUEUE_SIZE):
        if max_size < 1:
            raise ValueError(f"Queue size must be positive, got {max_size}")
        self._max_size = max_size
        self._items: Deque[ReceivedDatagram] = deque()
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    def push(self, datagram: ReceivedDatagram) -> bool:
        """
        Append a datagram if there is room.

        Returns:
            True if stored, False if the queue was full and it was dropped
        """
        with self._lock:
            if len(self._items) >= self._max_size:
                return False
            self._items.append(datagram)
            return True

    def pop(self) -> ReceivedDatagram:
        """
        Remove and return the oldest datagram.

        Raises:
            IndexError: If the queue is empty
        """
        with self._lock:
            return self._items.popleft()

    def size(self) -> int:
        with self._lock:
            return len(self._items)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        return self.size()
