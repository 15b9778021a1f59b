"""
ArrivalListener: TCP endpoint that feeds lane arrivals into an ArrivalQueue.

Supports:
    - One producer connection at a time, re-accepted after a disconnect
    - ASCII decimal lane ids, one id per stream read (no framing)
    - Malformed reads counted and logged, never raised

Intended usage:
    - ``main`` starts one listener next to the SimBridge
    - A producer such as ``python -m feed.generator`` connects and sends ids

Limitation:
    - Reads are not framed. Two ids coalesced into one read decode as one
      wrong integer, and an id split across reads decodes as two. Producers
      are expected to send one id per interval.
"""

import logging
import socket
import threading
from typing import Optional, Tuple

from .arrival_queue import ArrivalQueue
from .utils import decode_lane

log = logging.getLogger("feed")


class ArrivalListener:
    """
    Background socket server decoding lane ids into an ArrivalQueue.

    Attributes:
        queue (ArrivalQueue): Destination of decoded lane ids.
        host (str): Interface to bind.
        port (int): TCP port to bind (0 picks a free port).
        buffer_size (int): Maximum bytes per ``recv`` call.
    """

    def __init__(
        self,
        queue: ArrivalQueue,
        host: str = "127.0.0.1",
        port: int = 5000,
        buffer_size: int = 100,
        poll_interval_s: float = 0.5,
    ):
        """
        Initialize a listener; nothing is bound until :meth:`start`.

        Args:
            queue (ArrivalQueue): Queue to put decoded lane ids on.
            host (str): Interface to bind.
            port (int): TCP port; 0 lets the OS choose.
            buffer_size (int): Maximum bytes per read.
            poll_interval_s (float): Socket timeout used to notice :meth:`stop`.
        """
        self.queue = queue
        self.host = host
        self.port = port
        self.buffer_size = buffer_size
        self._poll_interval_s = poll_interval_s
        self._server: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None
        self._running = threading.Event()
        self._bound = threading.Event()

    @property
    def address(self) -> Optional[Tuple[str, int]]:
        """
        Bound (host, port), or None before binding or after a bind failure.
        """
        if self._server is None:
            return None
        return self._server.getsockname()[:2]

    @property
    def is_running(self) -> bool:
        return self._running.is_set()

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self, wait_s: float = 2.0) -> bool:
        """
        Bind and start the accept loop on a daemon thread.

        Args:
            wait_s (float): Seconds to wait for the bind to complete.

        Returns:
            bool: True if the socket is bound and listening.
        """
        if self._running.is_set():
            return self._server is not None
        self._running.set()
        self._bound.clear()
        self._thread = threading.Thread(
            target=self._serve, daemon=True, name="ArrivalListener"
        )
        self._thread.start()
        self._bound.wait(timeout=wait_s)
        return self._server is not None

    def stop(self):
        """Stop accepting and close the server socket."""
        self._running.clear()
        if self._thread:
            self._thread.join(timeout=2.0)
            self._thread = None
        log.info("listener_stopped")

    # ── Accept / receive loop ─────────────────────────────────────────────────

    def _bind(self) -> Optional[socket.socket]:
        server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            server.bind((self.host, self.port))
            server.listen(3)
        except OSError as exc:
            server.close()
            log.error("listener_bind_failed host=%s port=%s err=%s", self.host, self.port, exc)
            return None
        server.settimeout(self._poll_interval_s)
        return server

    def _serve(self):
        server = self._bind()
        self._server = server
        self._bound.set()
        if server is None:
            self._running.clear()
            return

        host, port = self.address or (self.host, self.port)
        log.info("listener_ready host=%s port=%d", host, port)
        try:
            while self._running.is_set():
                try:
                    conn, peer = server.accept()
                except socket.timeout:
                    continue
                except OSError as exc:
                    log.error("accept_failed err=%s", exc)
                    break
                self.queue.metrics.connections += 1
                log.info("producer_connected peer=%s:%s", *peer[:2])
                with conn:
                    self._receive(conn)
                self.queue.metrics.disconnects += 1
                log.info("producer_disconnected peer=%s:%s", *peer[:2])
        finally:
            server.close()
            self._server = None

    def _receive(self, conn: socket.socket):
        conn.settimeout(self._poll_interval_s)
        while self._running.is_set():
            try:
                data = conn.recv(self.buffer_size)
            except socket.timeout:
                continue
            except OSError as exc:
                log.warning("recv_failed err=%s", exc)
                return
            if not data:
                return
            self.handle_chunk(data)

    def handle_chunk(self, data: bytes) -> Optional[int]:
        """
        Decode one read and enqueue the lane id it carries.

        Args:
            data (bytes): Raw bytes of one read.

        Returns:
            Optional[int]: The enqueued lane id, or None for a malformed read.
        """
        self.queue.metrics.received += 1
        lane_id = decode_lane(data)
        if lane_id is None:
            self.queue.metrics.malformed += 1
            log.warning("malformed_arrival payload=%r", data[:32])
            return None
        self.queue.put(lane_id)
        log.debug("arrival lane=%d", lane_id)
        return lane_id
