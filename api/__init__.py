"""
api — HTTP surface
==================

Optional FastAPI application exposing the running simulation to external
tooling.  It is not required to run the Pygame view.

Modules
-------
server
    :func:`create_app` factory and :func:`run_server` helper.
"""

from .server import create_app, run_server

__all__ = ["create_app", "run_server"]
