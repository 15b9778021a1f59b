"""
feed — Lane arrival transport
==============================

Carries "a vehicle arrived on lane N" events from outside producers into
the simulation: a TCP listener decodes the small ASCII protocol into a
lock-protected FIFO that the world drains one id per tick.

Modules
-------
arrival_queue
    :class:`ArrivalQueue` thread-safe FIFO.
listener
    :class:`ArrivalListener` socket server thread.
generator
    :class:`TrafficGenerator` random producer client.
metrics
    :class:`FeedMetrics` counter snapshot.
utils
    Lane id codec and random lane selection.
"""

from .metrics import FeedMetrics
from .arrival_queue import ArrivalQueue
from .listener import ArrivalListener
from .generator import TrafficGenerator
from .utils import decode_lane, encode_lane, random_lane

__all__ = [
    "FeedMetrics",
    "ArrivalQueue",
    "ArrivalListener",
    "TrafficGenerator",
    "decode_lane",
    "encode_lane",
    "random_lane",
]
