"""
ArrivalQueue: Thread-safe FIFO of lane ids between the listener and the world.

Intended usage:
    - The listener thread (or the HTTP surface, or a demo producer) calls ``put``
    - The simulation tick calls ``try_get`` once per tick and never blocks
"""

import logging
import threading
from collections import deque
from typing import Deque, List, Optional

from .metrics import FeedMetrics

log = logging.getLogger("feed")


class ArrivalQueue:
    """
    Unbounded FIFO of lane arrivals guarded by a single lock.

    Attributes:
        metrics (FeedMetrics): Shared counters for the whole feed.
    """

    def __init__(self, metrics: Optional[FeedMetrics] = None):
        """
        Initialize an empty queue.

        Args:
            metrics (FeedMetrics, optional): Counter set to update; a new one
                is created when omitted.
        """
        self._items: Deque[int] = deque()
        self._lock = threading.Lock()
        self.metrics = metrics or FeedMetrics()

    def put(self, lane_id: int) -> int:
        """
        Append a lane id at the tail.

        Args:
            lane_id (int): Lane identifier; validity is the world's concern.

        Returns:
            int: Queue length after the append.
        """
        with self._lock:
            self._items.append(lane_id)
            self.metrics.enqueued += 1
            size = len(self._items)
        log.debug("enqueue lane=%s depth=%d", lane_id, size)
        return size

    def try_get(self) -> Optional[int]:
        """
        Pop the head without blocking.

        Returns:
            Optional[int]: The oldest lane id, or None if the queue is empty.
        """
        with self._lock:
            if not self._items:
                return None
            self.metrics.dequeued += 1
            return self._items.popleft()

    def peek_all(self) -> List[int]:
        """
        Return a copy of the pending ids, head first.

        Returns:
            List[int]: Pending lane ids.
        """
        with self._lock:
            return list(self._items)

    def clear(self) -> int:
        """
        Discard every pending id.

        Returns:
            int: Number of ids discarded.
        """
        with self._lock:
            dropped = len(self._items)
            self._items.clear()
        if dropped:
            log.info("queue_cleared dropped=%d", dropped)
        return dropped

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
