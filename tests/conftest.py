"""Pytest configuration and fixtures for the playground tests."""
from __future__ import annotations

import hashlib
import sys
from pathlib import Path
from typing import Sequence

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))

from miden_playground.engine import (  # noqa: E402
    Artifact,
    Assembler,
    CompileError,
    ConfigurationError,
    Engine,
    ExecutionError,
    ProofOutput,
    ProvingError,
    Trace,
)

KNOWN_OPS = {"add", "mul", "swap", "drop", "dup", "u32mod"}


def _tokens(source: str) -> list[str]:
    lines = [line.split("#", 1)[0] for line in source.splitlines()]
    return " ".join(lines).split()


class ScriptedAssembler(Assembler):
    def __init__(self, engine: "ScriptedEngine") -> None:
        self.engine = engine

    def compile(self, source: str) -> Artifact:
        self.engine.calls.append(("compile", source))
        tokens = _tokens(source)
        if len(tokens) < 2 or tokens[0] != "begin" or tokens[-1] != "end":
            raise CompileError("expected program wrapped in begin ... end")
        for token in tokens[1:-1]:
            if token.startswith("push."):
                if not all(part.isdigit() for part in token.split(".")[1:]):
                    raise CompileError(f"invalid push immediate in '{token}'")
            elif token not in KNOWN_OPS:
                raise CompileError(f"unknown instruction '{token}'")
        return Artifact(source=source, program_hash=hashlib.sha256(source.encode()).hexdigest())


class ScriptedEngine(Engine):
    """Tiny stand-in for the Miden VM covering a handful of instructions.

    Inputs are pushed in the order received, so the last one ends on top.
    """

    name = "scripted"

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []
        self.configure_error: Exception | None = None
        self.prove_error: Exception | None = None
        self.execute_error: Exception | None = None

    def configure(self, *, debug: bool = True, with_stdlib: bool = True) -> Assembler:
        self.calls.append(("configure", (debug, with_stdlib)))
        if self.configure_error is not None:
            raise self.configure_error
        return ScriptedAssembler(self)

    def _run(self, artifact: Artifact, inputs: Sequence[int]) -> tuple[list[int], int]:
        stack = list(inputs)

        def pop() -> int:
            return stack.pop() if stack else 0

        ops = _tokens(artifact.source)[1:-1]
        for op in ops:
            if op.startswith("push."):
                stack.extend(int(part) for part in op.split(".")[1:])
            elif op == "add":
                b, a = pop(), pop()
                stack.append(a + b)
            elif op == "mul":
                b, a = pop(), pop()
                stack.append(a * b)
            elif op == "swap":
                b, a = pop(), pop()
                stack.extend([b, a])
            elif op == "drop":
                pop()
            elif op == "dup":
                top = pop()
                stack.extend([top, top])
            elif op == "u32mod":
                b, a = pop(), pop()
                if b == 0:
                    raise ExecutionError("division by zero")
                stack.append(a % b)
        outputs = list(reversed(stack)) + [0] * max(0, 16 - len(stack))
        trace_length = max(64, 1 << len(ops).bit_length())
        return outputs, trace_length

    def execute(self, artifact: Artifact, inputs: Sequence[int]) -> Trace:
        self.calls.append(("execute", list(inputs)))
        if self.execute_error is not None:
            raise self.execute_error
        outputs, trace_length = self._run(artifact, inputs)
        return Trace(stack_outputs=tuple(outputs), trace_length=trace_length)

    def prove(self, artifact: Artifact, inputs: Sequence[int]) -> ProofOutput:
        self.calls.append(("prove", list(inputs)))
        if self.prove_error is not None:
            raise self.prove_error
        try:
            outputs, _ = self._run(artifact, inputs)
        except ExecutionError as exc:
            raise ProvingError(str(exc)) from exc
        return ProofOutput(
            stack_outputs=tuple(outputs),
            proof_bytes=b"proof:" + artifact.identity_hash().encode()[:8],
        )


@pytest.fixture
def engine() -> ScriptedEngine:
    return ScriptedEngine()


@pytest.fixture
def broken_engine() -> ScriptedEngine:
    scripted = ScriptedEngine()
    scripted.configure_error = ConfigurationError("standard library unavailable")
    return scripted


@pytest.fixture
def default_engine(monkeypatch, engine: ScriptedEngine) -> ScriptedEngine:
    """Route calls made without an explicit engine to the scripted one."""
    monkeypatch.setattr("miden_playground.pipeline.engine_from_settings", lambda settings=None: engine)
    return engine
