"""Request-to-result pipeline for execute and prove requests.

Both flows share three stages (configure, inputs, compile) and then diverge:
execution returns a trace summary, proving returns a serialized proof. Every
invocation is self-contained; nothing is cached or shared between requests.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, TypeVar, Union

from .config import engine_from_settings
from .engine import Artifact, Engine, EngineError
from .inputs import InputDecodeError, decode_stack_inputs
from .results import (
    ExecutionResult,
    Failure,
    Outcome,
    ProofResult,
    Stage,
    Success,
    encode_execution,
    encode_proof,
)
from .timing import StageTimer, StageTiming

LOGGER = logging.getLogger(__name__)

MAX_STACK_OUTPUTS = 16
U32_MAX = (1 << 32) - 1

T = TypeVar("T")

_STAGE_PREFIX = {
    Stage.CONFIGURE: "Failed to configure assembler",
    Stage.COMPILE: "Assembly error",
    Stage.EXECUTE: "Execution error",
    Stage.PROVE: "Proving error",
}


def _format_stack(values: Sequence[int]) -> tuple[str, ...]:
    return tuple(str(int(value)) for value in list(values)[:MAX_STACK_OUTPUTS])


class Pipeline:
    """Runs one request through the engine and classifies the outcome."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def _fail(self, stage: Stage, message: str, timer: StageTimer, *, compiled: bool) -> Failure:
        timing = StageTiming(
            compilation_ms=timer.elapsed_ms("compile") if compiled else None,
            total_ms=timer.total_ms(),
        )
        LOGGER.info("%s failed at %s stage: %s", self.engine.name, stage.value, message)
        return Failure(stage=stage, message=message, timing=timing)

    def _call(self, stage: Stage, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except EngineError as exc:
            raise _StageError(stage, f"{_STAGE_PREFIX[stage]}: {exc}") from exc
        except Exception as exc:
            LOGGER.exception("unexpected %s error from engine %s", stage.value, self.engine.name)
            raise _StageError(stage, f"{_STAGE_PREFIX[stage]}: {exc}") from exc

    def _prepare(
        self, source: str, inputs_json: Optional[str], timer: StageTimer
    ) -> Union[Failure, tuple[Artifact, list[int]]]:
        try:
            assembler = self._call(Stage.CONFIGURE, lambda: self.engine.configure(debug=True, with_stdlib=True))
        except _StageError as err:
            return self._fail(err.stage, err.message, timer, compiled=False)

        try:
            inputs = decode_stack_inputs(inputs_json)
        except InputDecodeError as exc:
            return self._fail(Stage.INPUTS, str(exc), timer, compiled=False)

        try:
            with timer.stage("compile"):
                artifact = self._call(Stage.COMPILE, lambda: assembler.compile(source))
        except _StageError as err:
            return self._fail(err.stage, err.message, timer, compiled=True)
        LOGGER.debug("compiled %s in %.3f ms", artifact.identity_hash(), timer.elapsed_ms("compile"))
        return artifact, inputs

    def _run_stage(self, stage: Stage, timer: StageTimer, fn: Callable[[], T]) -> Union[Failure, T]:
        try:
            with timer.stage(stage.value):
                return self._call(stage, fn)
        except _StageError as err:
            LOGGER.debug("%s stage ran %.3f ms before failing", stage.value, timer.elapsed_ms(stage.value))
            return self._fail(err.stage, err.message, timer, compiled=True)

    def execute(self, source: str, inputs_json: Optional[str] = None) -> Outcome:
        timer = StageTimer()
        prepared = self._prepare(source, inputs_json, timer)
        if isinstance(prepared, Failure):
            return prepared
        artifact, inputs = prepared

        trace = self._run_stage(Stage.EXECUTE, timer, lambda: self.engine.execute(artifact, inputs))
        if isinstance(trace, Failure):
            return trace
        if not 0 <= trace.trace_length <= U32_MAX:
            return self._fail(
                Stage.EXECUTE,
                f"{_STAGE_PREFIX[Stage.EXECUTE]}: trace length {trace.trace_length} exceeds u32",
                timer,
                compiled=True,
            )

        timing = StageTiming(
            compilation_ms=timer.elapsed_ms("compile"),
            run_ms=timer.elapsed_ms(Stage.EXECUTE.value),
            total_ms=timer.total_ms(),
        )
        return Success(
            stack_outputs=_format_stack(trace.stack_outputs),
            program_hash=artifact.identity_hash(),
            cycles=trace.trace_length,
            timing=timing,
        )

    def prove(self, source: str, inputs_json: Optional[str] = None) -> Outcome:
        timer = StageTimer()
        prepared = self._prepare(source, inputs_json, timer)
        if isinstance(prepared, Failure):
            return prepared
        artifact, inputs = prepared

        proof = self._run_stage(Stage.PROVE, timer, lambda: self.engine.prove(artifact, inputs))
        if isinstance(proof, Failure):
            return proof

        timing = StageTiming(
            compilation_ms=timer.elapsed_ms("compile"),
            run_ms=timer.elapsed_ms(Stage.PROVE.value),
            total_ms=timer.total_ms(),
        )
        LOGGER.debug("proved %s: %d proof bytes", artifact.identity_hash(), len(proof.proof_bytes))
        return Success(
            stack_outputs=_format_stack(proof.stack_outputs),
            program_hash=artifact.identity_hash(),
            proof_bytes=bytes(proof.proof_bytes),
            timing=timing,
        )


class _StageError(Exception):
    def __init__(self, stage: Stage, message: str) -> None:
        super().__init__(message)
        self.stage = stage
        self.message = message


def resolve_engine(engine: Optional[Engine]) -> Engine:
    if engine is not None:
        return engine
    return engine_from_settings()


def execute_program(source: str, inputs_json: Optional[str] = None, engine: Optional[Engine] = None) -> ExecutionResult:
    """Compile and execute ``source``; shared entry point of both front ends."""
    return encode_execution(Pipeline(resolve_engine(engine)).execute(source, inputs_json))


def generate_proof(source: str, inputs_json: Optional[str] = None, engine: Optional[Engine] = None) -> ProofResult:
    """Compile and prove ``source``; shared entry point of both front ends."""
    return encode_proof(Pipeline(resolve_engine(engine)).prove(source, inputs_json))


__all__ = ["MAX_STACK_OUTPUTS", "Pipeline", "execute_program", "generate_proof"]
