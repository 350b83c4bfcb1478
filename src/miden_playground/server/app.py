"""WSGI entry point for the playground HTTP API.

Serve with any WSGI server, e.g. ``gunicorn miden_playground.server.app:app``.
Logging follows ``MIDEN_LOG_LEVEL`` and the engine follows ``MIDEN_ENGINE`` and
``MIDEN_BINARY``, as with ``miden-playground serve``.
"""
from __future__ import annotations

from ..config import configure_logging
from . import create_app

configure_logging()
app = create_app()


__all__ = ["app"]
