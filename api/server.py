"""
api/server.py
=============
FastAPI application over a :class:`~sim.sim_bridge.SimBridge`.

Endpoints::

    GET  /snapshot   full per-tick snapshot (signal, queues, vehicles, feed)
    GET  /phase      controller state only
    GET  /metrics    arrival feed counters and queue depths
    POST /arrivals   {"lane": 5}  ->  {"queued": 1}

Start it next to the simulation with ``python main.py --api`` or embed it::

    app = create_app(bridge)
    uvicorn.run(app, host="127.0.0.1", port=8000)

.. note::

   Out-of-range lane ids are accepted and queued like any wire arrival;
   the simulation ignores them when they reach the head of the queue.
"""

import logging
import threading
from typing import Any, Dict

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

from sim.sim_bridge import SimBridge

log = logging.getLogger("api")

# ── Pydantic schemas ─────────────────────────────────────────────────────────


class ArrivalRequest(BaseModel):
    """One vehicle arriving on a lane."""
    lane: int


class ArrivalResponse(BaseModel):
    """Arrival queue depth after the enqueue."""
    queued: int


# ── FastAPI application ──────────────────────────────────────────────────────


def create_app(bridge: SimBridge) -> FastAPI:
    """Build the application bound to *bridge*."""
    app = FastAPI(
        title="Junction Simulator API",
        description="Read the adaptive four-road junction and inject arrivals.",
        version="1.0",
    )

    @app.get("/snapshot")
    def get_snapshot() -> Dict[str, Any]:
        """Latest published snapshot."""
        return bridge.get_snapshot().as_dict()

    @app.get("/phase")
    def get_phase() -> Dict[str, Any]:
        """Signal and controller state of the latest snapshot."""
        snap = bridge.get_snapshot()
        return {
            "tick": snap.tick,
            "signal": snap.signal,
            "current_phase": snap.current_phase,
            "target_phase": snap.target_phase,
            "clearing": snap.clearing,
            "priority_road": snap.priority_road,
        }

    @app.get("/metrics")
    def get_metrics() -> Dict[str, Any]:
        """Feed counters, queue depths and vehicle count."""
        snap = bridge.get_snapshot()
        return {
            "tick": snap.tick,
            "vehicles": len(snap.vehicles),
            "queue_depths": dict(snap.queue_depths),
            "pending_arrivals": len(bridge.arrivals),
            "feed": bridge.arrivals.metrics.report(),
            "paused": bridge.is_paused(),
        }

    @app.post("/arrivals", response_model=ArrivalResponse)
    def post_arrival(arrival: ArrivalRequest) -> ArrivalResponse:
        """Queue one arrival exactly like the TCP listener would."""
        queued = bridge.enqueue_arrival(arrival.lane)
        log.info("api_arrival lane=%d queued=%d", arrival.lane, queued)
        return ArrivalResponse(queued=queued)

    return app


# ── Server helpers ───────────────────────────────────────────────────────────


def run_server(bridge: SimBridge, host: str = "127.0.0.1", port: int = 8000) -> None:
    """Serve the API in the calling thread (blocks)."""
    log.info("api_listening host=%s port=%d", host, port)
    uvicorn.run(create_app(bridge), host=host, port=port, log_level="warning")


def start_server_thread(
    bridge: SimBridge, host: str = "127.0.0.1", port: int = 8000
) -> threading.Thread:
    """Serve the API on a daemon thread and return it."""
    thread = threading.Thread(
        target=run_server, args=(bridge, host, port), daemon=True, name="ApiServer"
    )
    thread.start()
    return thread


if __name__ == "__main__":
    _bridge = SimBridge()
    _bridge.start()
    print("Starting junction API on http://127.0.0.1:8000 …")
    run_server(_bridge)
