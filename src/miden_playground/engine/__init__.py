"""Engine backends and registry."""
from __future__ import annotations

from typing import Any

from .base import (
    Artifact,
    Assembler,
    CompileError,
    ConfigurationError,
    Engine,
    EngineError,
    ExecutionError,
    ProofOutput,
    ProvingError,
    Trace,
)
from .miden_cli import MidenCliEngine

ENGINES = {
    MidenCliEngine.name: MidenCliEngine,
}

DEFAULT_ENGINE = MidenCliEngine.name


def load_engine(name: str | None = None, **options: Any) -> Engine:
    """Instantiate the engine registered under ``name``."""
    key = name or DEFAULT_ENGINE
    try:
        engine_cls = ENGINES[key]
    except KeyError:
        raise ValueError(f"unknown engine {key!r}; available: {', '.join(sorted(ENGINES))}") from None
    return engine_cls(**options)


__all__ = [
    "DEFAULT_ENGINE",
    "ENGINES",
    "Artifact",
    "Assembler",
    "CompileError",
    "ConfigurationError",
    "Engine",
    "EngineError",
    "ExecutionError",
    "MidenCliEngine",
    "ProofOutput",
    "ProvingError",
    "Trace",
    "load_engine",
]
