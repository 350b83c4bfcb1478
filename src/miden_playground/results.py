"""Pipeline outcomes and the public result records served to callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union

from pydantic import BaseModel, model_validator

from .timing import StageTiming


class Stage(str, Enum):
    CONFIGURE = "configure"
    INPUTS = "inputs"
    COMPILE = "compile"
    EXECUTE = "execute"
    PROVE = "prove"


@dataclass(frozen=True)
class Success:
    stack_outputs: tuple[str, ...]
    program_hash: str
    timing: StageTiming
    cycles: Optional[int] = None
    proof_bytes: Optional[bytes] = field(default=None, repr=False)


@dataclass(frozen=True)
class Failure:
    stage: Stage
    message: str
    timing: StageTiming


Outcome = Union[Success, Failure]


class _ResultBase(BaseModel):
    success: bool
    error: Optional[str] = None
    compilation_time_ms: Optional[float] = None
    total_time_ms: Optional[float] = None

    payload_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _check_consistency(self):  # type: ignore[override]
        present = [name for name in self.payload_fields if getattr(self, name) is not None]
        if self.success:
            missing = sorted(set(self.payload_fields) - set(present))
            if missing:
                raise ValueError(f"successful result missing {', '.join(missing)}")
            if self.error is not None:
                raise ValueError("successful result cannot carry an error")
        else:
            if present:
                raise ValueError(f"failed result cannot carry {', '.join(present)}")
            if not self.error:
                raise ValueError("failed result requires an error message")
        return self


class ExecutionResult(_ResultBase):
    """Wire record returned for execute requests."""

    stack_outputs: Optional[List[str]] = None
    program_hash: Optional[str] = None
    cycles: Optional[int] = None
    execution_time_ms: Optional[float] = None

    payload_fields: ClassVar[tuple[str, ...]] = ("stack_outputs", "program_hash", "cycles")


class ProofResult(_ResultBase):
    """Wire record returned for prove requests."""

    proof_bytes: Optional[List[int]] = None
    program_hash: Optional[str] = None
    stack_outputs: Optional[List[str]] = None
    proving_time_ms: Optional[float] = None

    payload_fields: ClassVar[tuple[str, ...]] = ("proof_bytes", "program_hash", "stack_outputs")


# Field order of the serialized records.
EXECUTION_FIELDS = (
    "success",
    "stack_outputs",
    "program_hash",
    "cycles",
    "error",
    "compilation_time_ms",
    "execution_time_ms",
    "total_time_ms",
)
PROOF_FIELDS = (
    "success",
    "proof_bytes",
    "program_hash",
    "stack_outputs",
    "error",
    "compilation_time_ms",
    "proving_time_ms",
    "total_time_ms",
)


def encode_execution(outcome: Outcome) -> ExecutionResult:
    timing = outcome.timing
    if isinstance(outcome, Failure):
        return ExecutionResult(
            success=False,
            error=outcome.message,
            compilation_time_ms=timing.compilation_ms,
            execution_time_ms=None,
            total_time_ms=timing.total_ms,
        )
    if outcome.cycles is None:
        raise ValueError("execution outcome has no cycle count")
    return ExecutionResult(
        success=True,
        stack_outputs=list(outcome.stack_outputs),
        program_hash=outcome.program_hash,
        cycles=outcome.cycles,
        compilation_time_ms=timing.compilation_ms,
        execution_time_ms=timing.run_ms,
        total_time_ms=timing.total_ms,
    )


def encode_proof(outcome: Outcome) -> ProofResult:
    timing = outcome.timing
    if isinstance(outcome, Failure):
        return ProofResult(
            success=False,
            error=outcome.message,
            compilation_time_ms=timing.compilation_ms,
            proving_time_ms=None,
            total_time_ms=timing.total_ms,
        )
    if outcome.proof_bytes is None:
        raise ValueError("proof outcome has no proof bytes")
    return ProofResult(
        success=True,
        proof_bytes=list(outcome.proof_bytes),
        program_hash=outcome.program_hash,
        stack_outputs=list(outcome.stack_outputs),
        compilation_time_ms=timing.compilation_ms,
        proving_time_ms=timing.run_ms,
        total_time_ms=timing.total_ms,
    )


def to_wire(result: Union[ExecutionResult, ProofResult]) -> dict:
    """Serialize a result with every field present, absent values as null."""
    fields = EXECUTION_FIELDS if isinstance(result, ExecutionResult) else PROOF_FIELDS
    data = result.model_dump()
    return {name: data[name] for name in fields}


__all__ = [
    "ExecutionResult",
    "Failure",
    "Outcome",
    "ProofResult",
    "Stage",
    "Success",
    "encode_execution",
    "encode_proof",
    "to_wire",
]
