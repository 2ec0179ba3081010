"""Node module: receive queue and the datagram node."""

from node.receive_queue import ReceiveQueue
from node.udp_node import UDPNode, NodeState, ReceiveStats

__all__ = [
    'ReceiveQueue',
    'UDPNode',
    'NodeState',
    'ReceiveStats',
]
