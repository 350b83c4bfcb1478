"""Miden VM playground - execute and prove Miden assembly programs.

Public API:
    from miden_playground import execute_program, generate_proof

    result = execute_program("begin push.3 push.5 add end")
    result.stack_outputs[0]  # "8"

Submodules:
    inputs    - stack input decoding
    timing    - stage timing
    pipeline  - execute and prove flows
    results   - outcomes and wire records
    engine    - engine interface and the miden CLI backend
    commands  - desktop command dispatcher
    server    - Flask HTTP API
    cli       - command line entry point
"""
from __future__ import annotations

__version__ = "0.1.0"

from miden_playground.inputs import InputDecodeError, decode_stack_inputs
from miden_playground.pipeline import Pipeline, execute_program, generate_proof
from miden_playground.results import ExecutionResult, Failure, ProofResult, Stage, Success
from miden_playground.timing import StageTimer, StageTiming


__all__ = [
    "__version__",
    "ExecutionResult",
    "Failure",
    "InputDecodeError",
    "Pipeline",
    "ProofResult",
    "Stage",
    "StageTimer",
    "StageTiming",
    "Success",
    "decode_stack_inputs",
    "execute_program",
    "generate_proof",
]
