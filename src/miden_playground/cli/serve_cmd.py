"""miden-playground serve - Run the HTTP API.

Usage:
    miden-playground serve                  # 0.0.0.0:$PORT (default 3001)
    miden-playground serve --port 8080
"""
from __future__ import annotations

import click

from ..config import resolve_port
from ..server import create_app


@click.command("serve")
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", default=None, help="Listen port (defaults to $PORT, then 3001)")
def serve_command(host: str, port: str | None) -> None:
    """Serve /health, /api/examples, /api/execute and /api/prove."""
    listen_port = resolve_port(port)
    app = create_app()
    click.echo(f"Miden VM API server starting on http://{host}:{listen_port}")
    app.run(host=host, port=listen_port, threaded=True)
