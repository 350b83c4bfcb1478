"""Flask application factory for the playground HTTP API."""
from __future__ import annotations

import os
from typing import Any, Iterable

from flask import Flask, make_response, request

from ..config import DEFAULT_BINARY, engine_from_settings
from ..engine import DEFAULT_ENGINE, Engine
from .errors import register_error_handlers
from .routes import api_bp

SERVICE_NAME = "miden-vm-api"
SERVICE_VERSION = "0.1.0"


def create_app(config: dict[str, Any] | None = None, engine: Engine | None = None) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)

    app.config.setdefault("MIDEN_ENGINE", os.environ.get("MIDEN_ENGINE", DEFAULT_ENGINE))
    app.config.setdefault("MIDEN_BINARY", os.environ.get("MIDEN_BINARY", DEFAULT_BINARY))
    app.config.setdefault("CORS_ALLOW_ORIGINS", os.environ.get("CORS_ALLOW_ORIGINS", "*"))
    app.config.setdefault("CORS_ALLOW_HEADERS", "*")
    app.config.setdefault("CORS_ALLOW_METHODS", "GET,POST,OPTIONS")

    if config:
        app.config.update(config)

    app.json.sort_keys = False  # type: ignore[attr-defined]

    if engine is None:
        engine = engine_from_settings(
            {"MIDEN_ENGINE": app.config["MIDEN_ENGINE"], "MIDEN_BINARY": app.config["MIDEN_BINARY"]}
        )
    app.extensions["engine"] = engine

    app.register_blueprint(api_bp, url_prefix="/api")

    _configure_cors(app)

    @app.get("/health")
    def _health() -> tuple[dict[str, str], int]:
        return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}, 200

    register_error_handlers(app)

    return app


__all__ = ["create_app"]


def _configure_cors(app: Flask) -> None:
    origins = _parse_origins(app.config.get("CORS_ALLOW_ORIGINS"))
    if not origins:
        return
    allow_headers = app.config.get("CORS_ALLOW_HEADERS", "*")
    allow_methods = app.config.get("CORS_ALLOW_METHODS", "GET,POST,OPTIONS")

    def _allowed(origin: str | None) -> bool:
        if not origin:
            return False
        return "*" in origins or origin in origins

    def _request_headers() -> str:
        if allow_headers != "*":
            return allow_headers
        return request.headers.get("Access-Control-Request-Headers") or "*"

    @app.after_request
    def _add_headers(response):  # type: ignore[override]
        origin = request.headers.get("Origin")
        if "*" in origins:
            response.headers["Access-Control-Allow-Origin"] = "*"
        elif _allowed(origin):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Headers"] = _request_headers()
        response.headers["Access-Control-Allow-Methods"] = allow_methods
        return response

    @app.before_request
    def _handle_preflight():  # type: ignore[override]
        if request.method != "OPTIONS":
            return None
        return make_response("", 204)


def _parse_origins(value: Any) -> list[str] | None:
    if not value:
        return None
    if isinstance(value, str):
        parts = [part.strip() for part in value.split(",") if part.strip()]
        return parts or ["*"]
    if isinstance(value, Iterable):  # type: ignore[arg-type]
        parts = [str(item).strip() for item in value if str(item).strip()]
        return parts or ["*"]
    return ["*"]
