"""Environment-driven settings shared by the CLI and the HTTP server."""
from __future__ import annotations

import logging
import os
from typing import Any

from .engine import DEFAULT_ENGINE, Engine, load_engine
from .engine.miden_cli import DEFAULT_BINARY

DEFAULT_PORT = 3001
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def resolve_port(value: Any = None) -> int:
    """Return a valid TCP port from ``value`` or ``PORT``, else the default."""
    if value is None:
        port = _int_env("PORT", DEFAULT_PORT)
    else:
        try:
            port = int(value)
        except (TypeError, ValueError):
            return DEFAULT_PORT
    if not 0 <= port <= 65535:
        return DEFAULT_PORT
    return port


def engine_settings() -> dict[str, str]:
    return {
        "MIDEN_ENGINE": os.environ.get("MIDEN_ENGINE", DEFAULT_ENGINE),
        "MIDEN_BINARY": os.environ.get("MIDEN_BINARY", DEFAULT_BINARY),
    }


def engine_from_settings(settings: dict[str, Any] | None = None) -> Engine:
    settings = settings or engine_settings()
    name = settings.get("MIDEN_ENGINE") or DEFAULT_ENGINE
    options: dict[str, Any] = {}
    if name == "miden-cli":
        options["binary"] = settings.get("MIDEN_BINARY") or DEFAULT_BINARY
    return load_engine(name, **options)


def configure_logging(level: str | None = None) -> None:
    name = (level or os.environ.get("MIDEN_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO), format=LOG_FORMAT)


__all__ = [
    "DEFAULT_PORT",
    "configure_logging",
    "engine_from_settings",
    "engine_settings",
    "resolve_port",
]
