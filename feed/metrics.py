"""
FeedMetrics: Tracks simple statistics for the arrival feed.
"""


class FeedMetrics:
    """
    Tracks metrics for lane arrivals flowing from the network into the world.

    Attributes:
        received (int): Stream reads handed to the decoder.
        malformed (int): Reads that did not decode to an integer.
        enqueued (int): Lane ids put on the arrival queue.
        dequeued (int): Lane ids taken off the queue by the world.
        connections (int): Producer connections accepted.
        disconnects (int): Producer connections lost or closed.
    """

    def __init__(self):
        """Initialize all counters to zero."""
        self.received = 0
        self.malformed = 0
        self.enqueued = 0
        self.dequeued = 0
        self.connections = 0
        self.disconnects = 0

    def reset(self):
        """Zero every counter."""
        self.received = self.malformed = 0
        self.enqueued = self.dequeued = 0
        self.connections = self.disconnects = 0

    def report(self) -> dict:
        """
        Return a snapshot of current metrics.

        Returns:
            dict: Dictionary with one entry per counter.
        """
        return {
            "received": self.received,
            "malformed": self.malformed,
            "enqueued": self.enqueued,
            "dequeued": self.dequeued,
            "connections": self.connections,
            "disconnects": self.disconnects,
        }
