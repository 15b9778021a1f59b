"""
TrafficGenerator: TCP producer of random lane arrivals.

Connects to an ArrivalListener and sends one ASCII lane id per interval,
the same wire format the listener decodes.

Run standalone::

    python -m feed.generator --host 127.0.0.1 --port 5000 --interval 1.0
"""

import argparse
import logging
import random
import socket
import time
from typing import Optional, Sequence

from .utils import encode_lane, random_lane

log = logging.getLogger("generator")

ALL_LANES: Sequence[int] = tuple(range(1, 13))


class TrafficGenerator:
    """
    Sends random lane ids to a listener at a fixed interval.

    Attributes:
        host (str): Listener host.
        port (int): Listener port.
        interval_s (float): Seconds between two sends.
        lanes (Sequence[int]): Lane ids to draw from. Defaults to every lane
            id; the simulation ignores the ones that are not spawn lanes.
        sent (int): Ids sent so far.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 5000,
        interval_s: float = 1.0,
        lanes: Optional[Sequence[int]] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize a generator; no connection is made until :meth:`connect`.

        Args:
            host (str): Listener host.
            port (int): Listener port.
            interval_s (float): Seconds between sends.
            lanes (Sequence[int], optional): Lane ids to draw from.
            seed (int, optional): Seed for reproducible sequences.
        """
        self.host = host
        self.port = port
        self.interval_s = interval_s
        self.lanes = tuple(lanes) if lanes else ALL_LANES
        self.sent = 0
        self._rng = random.Random(seed)
        self._sock: Optional[socket.socket] = None

    def connect(self, timeout_s: float = 5.0):
        """
        Open the TCP connection.

        Raises:
            OSError: If the listener is unreachable.
        """
        self._sock = socket.create_connection((self.host, self.port), timeout=timeout_s)
        log.info("connected host=%s port=%d", self.host, self.port)

    def close(self):
        """Close the connection if open."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def send_lane(self, lane_id: Optional[int] = None) -> int:
        """
        Send one lane id, drawn at random if omitted.

        Returns:
            int: The lane id sent.

        Raises:
            RuntimeError: If :meth:`connect` has not been called.
        """
        if self._sock is None:
            raise RuntimeError("TrafficGenerator is not connected")
        lane = lane_id if lane_id is not None else random_lane(self.lanes, self._rng)
        self._sock.sendall(encode_lane(lane))
        self.sent += 1
        log.info("sent lane=%d", lane)
        return lane

    def run(self, count: Optional[int] = None):
        """
        Send ids until *count* is reached, the peer goes away or Ctrl-C.

        Args:
            count (int, optional): Number of ids to send; unlimited if omitted.
        """
        if self._sock is None:
            self.connect()
        try:
            while count is None or self.sent < count:
                try:
                    self.send_lane()
                except OSError as exc:
                    log.error("send_failed err=%s", exc)
                    break
                time.sleep(self.interval_s)
        except KeyboardInterrupt:
            log.info("generator interrupted")
        finally:
            self.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    from config import FEED_HOST, FEED_PORT, GENERATOR_INTERVAL_S

    parser = argparse.ArgumentParser(description="Send random lane arrivals to the junction simulator.")
    parser.add_argument("--host", default=FEED_HOST)
    parser.add_argument("--port", type=int, default=FEED_PORT)
    parser.add_argument("--interval", type=float, default=GENERATOR_INTERVAL_S, help="seconds between arrivals")
    parser.add_argument("--count", type=int, default=None, help="stop after N arrivals")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--source-only", action="store_true",
                        help="only send lanes that spawn vehicles")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    lanes = None
    if args.source_only:
        from sim.topology import SOURCE_LANES
        lanes = SOURCE_LANES

    generator = TrafficGenerator(args.host, args.port, args.interval, lanes, args.seed)
    try:
        generator.connect()
    except OSError as exc:
        log.error("connection_failed host=%s port=%d err=%s", args.host, args.port, exc)
        return 1
    generator.run(args.count)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
