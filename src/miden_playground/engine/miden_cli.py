"""Engine backed by the ``miden`` command line tool.

Every operation runs in its own temporary directory:

- compile: ``miden compile -a program.masm`` and parse the printed program hash
- execute: ``miden run -a program.masm -i program.inputs -o program.outputs``
- prove:   ``miden prove -a program.masm -i program.inputs -o program.outputs -p program.proof``

The tool always links the standard library. Inputs are written to the
``operand_stack`` field of the inputs file in the order the engine pushes them.
"""
from __future__ import annotations

import json
import os
import re
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

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

DEFAULT_BINARY = "miden"

_HASH_RE = re.compile(r"program hash is (?:0x)?([0-9a-f]{64})", re.IGNORECASE)
_ANY_HASH_RE = re.compile(r"\b(?:0x)?([0-9a-f]{64})\b", re.IGNORECASE)
_CYCLES_RE = re.compile(r"VM cycles:\s*(\d+)(?:\s+extended to\s+(\d+)\s+steps)?")


@dataclass
class CommandResult:
    """Outcome of one invocation of the miden binary."""

    command: list[str]
    returncode: int
    stdout: str
    stderr: str

    def ok(self) -> bool:
        return self.returncode == 0

    def error_text(self) -> str:
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"{self.command[0]} exited with status {self.returncode}"


def _run(cmd: list[str], cwd: Path) -> CommandResult:
    proc = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        cwd=str(cwd),
        env=dict(os.environ),
    )
    return CommandResult(command=cmd, returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


def _parse_program_hash(output: str) -> str | None:
    match = _HASH_RE.search(output) or _ANY_HASH_RE.search(output)
    return match.group(1).lower() if match else None


def _parse_trace_length(output: str) -> int | None:
    match = _CYCLES_RE.search(output)
    if not match:
        return None
    return int(match.group(2) or match.group(1))


def _parse_stack(path: Path) -> tuple[int, ...]:
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise EngineError(f"unreadable outputs file {path.name}: {exc}") from exc
    stack = data.get("stack") if isinstance(data, dict) else data
    if not isinstance(stack, list):
        raise EngineError(f"outputs file {path.name} has no stack")
    return tuple(int(value) for value in stack)


class MidenCliAssembler(Assembler):
    def __init__(self, binary: str, *, debug: bool, with_stdlib: bool) -> None:
        self.binary = binary
        self.debug = debug
        self.with_stdlib = with_stdlib

    def compile(self, source: str) -> Artifact:
        with tempfile.TemporaryDirectory(prefix="miden-compile-") as tmp:
            workdir = Path(tmp)
            program = workdir / "program.masm"
            program.write_text(source, encoding="utf-8")
            result = _run([self.binary, "compile", "-a", str(program)], workdir)
        if not result.ok():
            raise CompileError(result.error_text())
        program_hash = _parse_program_hash(result.stdout + "\n" + result.stderr)
        if program_hash is None:
            raise CompileError("compiler did not report a program hash")
        return Artifact(
            source=source,
            program_hash=program_hash,
            debug=self.debug,
            with_stdlib=self.with_stdlib,
        )


class MidenCliEngine(Engine):
    name = "miden-cli"

    def __init__(self, binary: str | None = None) -> None:
        self.binary = binary or DEFAULT_BINARY

    def resolve_binary(self) -> str:
        path = shutil.which(self.binary)
        if path is None:
            raise ConfigurationError(f"miden executable not found: {self.binary}")
        return path

    def configure(self, *, debug: bool = True, with_stdlib: bool = True) -> Assembler:
        if not with_stdlib:
            raise ConfigurationError("the miden CLI always links the standard library")
        return MidenCliAssembler(self.resolve_binary(), debug=debug, with_stdlib=with_stdlib)

    def _prepare(self, workdir: Path, artifact: Artifact, inputs: Sequence[int]) -> tuple[Path, Path, Path]:
        program = workdir / "program.masm"
        program.write_text(artifact.source, encoding="utf-8")
        inputs_path = workdir / "program.inputs"
        inputs_path.write_text(json.dumps({"operand_stack": [str(value) for value in inputs]}))
        return program, inputs_path, workdir / "program.outputs"

    def execute(self, artifact: Artifact, inputs: Sequence[int]) -> Trace:
        binary = self.resolve_binary()
        with tempfile.TemporaryDirectory(prefix="miden-run-") as tmp:
            workdir = Path(tmp)
            program, inputs_path, outputs_path = self._prepare(workdir, artifact, inputs)
            result = _run(
                [binary, "run", "-a", str(program), "-i", str(inputs_path), "-o", str(outputs_path)],
                workdir,
            )
            if not result.ok():
                raise ExecutionError(result.error_text())
            stack = _parse_stack(outputs_path)
        trace_length = _parse_trace_length(result.stdout + "\n" + result.stderr)
        if trace_length is None:
            raise ExecutionError("executor did not report a cycle count")
        return Trace(stack_outputs=stack, trace_length=trace_length)

    def prove(self, artifact: Artifact, inputs: Sequence[int]) -> ProofOutput:
        binary = self.resolve_binary()
        with tempfile.TemporaryDirectory(prefix="miden-prove-") as tmp:
            workdir = Path(tmp)
            program, inputs_path, outputs_path = self._prepare(workdir, artifact, inputs)
            proof_path = workdir / "program.proof"
            result = _run(
                [
                    binary,
                    "prove",
                    "-a",
                    str(program),
                    "-i",
                    str(inputs_path),
                    "-o",
                    str(outputs_path),
                    "-p",
                    str(proof_path),
                ],
                workdir,
            )
            if not result.ok():
                raise ProvingError(result.error_text())
            if not proof_path.exists():
                raise ProvingError("prover did not write a proof file")
            stack = _parse_stack(outputs_path)
            proof_bytes = proof_path.read_bytes()
        return ProofOutput(stack_outputs=stack, proof_bytes=proof_bytes)


__all__ = ["CommandResult", "DEFAULT_BINARY", "MidenCliAssembler", "MidenCliEngine"]
