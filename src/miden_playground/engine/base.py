"""Abstractions for plugging a Miden VM engine into the request pipeline."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence


class EngineError(Exception):
    """Base class for failures reported by an engine."""


class ConfigurationError(EngineError):
    """The engine's assembler could not be built."""


class CompileError(EngineError):
    """Program source failed to assemble."""


class ExecutionError(EngineError):
    """A compiled program faulted while running."""


class ProvingError(EngineError):
    """The proof system failed to produce a proof."""


@dataclass(frozen=True)
class Artifact:
    """Compiled, content-addressed representation of a program."""

    source: str
    program_hash: str
    debug: bool = True
    with_stdlib: bool = True

    def identity_hash(self) -> str:
        return self.program_hash


@dataclass(frozen=True)
class Trace:
    """Summary of an execution: final stack (top first) and trace length."""

    stack_outputs: tuple[int, ...]
    trace_length: int


@dataclass(frozen=True)
class ProofOutput:
    """Outputs of a proving run together with the serialized proof."""

    stack_outputs: tuple[int, ...]
    proof_bytes: bytes = field(repr=False)


class Assembler(ABC):
    """Compiler configured by :meth:`Engine.configure`."""

    @abstractmethod
    def compile(self, source: str) -> Artifact:
        """Assemble ``source`` or raise :class:`CompileError`."""


class Engine(ABC):
    """Interface for the external assembler/executor/prover."""

    name: str = "unknown"

    @abstractmethod
    def configure(self, *, debug: bool = True, with_stdlib: bool = True) -> Assembler:
        """Build an assembler, raising :class:`ConfigurationError` on failure."""

    @abstractmethod
    def execute(self, artifact: Artifact, inputs: Sequence[int]) -> Trace:
        """Run ``artifact`` with ``inputs`` in engine push order."""

    @abstractmethod
    def prove(self, artifact: Artifact, inputs: Sequence[int]) -> ProofOutput:
        """Run and prove ``artifact`` with ``inputs`` in engine push order."""


__all__ = [
    "Artifact",
    "Assembler",
    "CompileError",
    "ConfigurationError",
    "Engine",
    "EngineError",
    "ExecutionError",
    "ProofOutput",
    "ProvingError",
    "Trace",
]
