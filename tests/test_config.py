from __future__ import annotations

import pytest

from miden_playground.config import DEFAULT_PORT, engine_from_settings, resolve_port
from miden_playground.engine import MidenCliEngine, load_engine


def test_port_defaults_to_3001(monkeypatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    assert resolve_port() == DEFAULT_PORT == 3001


@pytest.mark.parametrize("value", ["abc", "", "70000", "-1", "30.5"])
def test_invalid_port_falls_back_silently(monkeypatch, value: str) -> None:
    monkeypatch.setenv("PORT", value)
    assert resolve_port() == 3001


def test_port_from_environment_and_explicit_value(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    assert resolve_port() == 8080
    assert resolve_port("9090") == 9090
    assert resolve_port("nope") == 3001


def test_engine_from_settings() -> None:
    engine = engine_from_settings({"MIDEN_ENGINE": "miden-cli", "MIDEN_BINARY": "/opt/miden/bin/miden"})
    assert isinstance(engine, MidenCliEngine)
    assert engine.binary == "/opt/miden/bin/miden"


def test_unknown_engine_name() -> None:
    with pytest.raises(ValueError, match="unknown engine"):
        load_engine("wasm")
