from __future__ import annotations

import threading

import pytest

from node.receive_queue import ReceiveQueue
from protocol.messages import ReceivedDatagram


def _datagram(i: int) -> ReceivedDatagram:
    return ReceivedDatagram(
        src_port=1000 + i,
        src_address="127.0.0.1",
        timestamp=i,
        message=f"msg-{i}",
        checksum=0,
    )


def test_pop_returns_items_in_push_order() -> None:
    q = ReceiveQueue(max_size=5)
    for i in range(5):
        assert q.push(_datagram(i))

    assert q.size() == 5
    assert [q.pop().message for _ in range(5)] == [f"msg-{i}" for i in range(5)]
    assert q.is_empty()


def test_push_beyond_capacity_drops_newest() -> None:
    q = ReceiveQueue(max_size=3)
    results = [q.push(_datagram(i)) for i in range(4)]

    assert results == [True, True, True, False]
    assert len(q) == 3
    assert [q.pop().timestamp for _ in range(3)] == [0, 1, 2]


def test_pop_on_empty_queue_fails_fast() -> None:
    q = ReceiveQueue(max_size=1)
    with pytest.raises(IndexError):
        q.pop()


def test_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        ReceiveQueue(max_size=0)


def test_concurrent_pushes_never_exceed_bound() -> None:
    q = ReceiveQueue(max_size=50)
    accepted = []
    lock = threading.Lock()

    def producer(offset: int) -> None:
        count = sum(1 for i in range(40) if q.push(_datagram(offset + i)))
        with lock:
            accepted.append(count)

    threads = [threading.Thread(target=producer, args=(n * 100,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(accepted) == 50
    assert q.size() == 50
