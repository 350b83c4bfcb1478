"""Named commands invoked by the desktop UI.

Each command returns a string; results are JSON encoded. Failures that are not
pipeline outcomes (unknown command, bad arguments, a failing smoke test) raise
:class:`CommandError`.
"""
from __future__ import annotations

import inspect
import json
import re
from typing import Any, Callable, Dict, Optional

from .engine import Engine
from .examples import example_programs
from .pipeline import Pipeline, execute_program, generate_proof, resolve_engine
from .results import Failure, to_wire

SMOKE_TEST_PROGRAM = "begin push.8 push.5 add swap drop end"


class CommandError(Exception):
    """Raised when a desktop command cannot produce a result."""


def _inputs_text(inputs_json: Any) -> Optional[str]:
    if inputs_json is None or isinstance(inputs_json, str):
        return inputs_json
    return json.dumps(inputs_json)


def greet(name: str) -> str:
    return f"Hello, {name}! Welcome to Miden VM Playground!"


def instantiate(engine: Optional[Engine] = None) -> str:
    """Run a fixed program and return the value left on top of the stack."""
    outcome = Pipeline(resolve_engine(engine)).execute(SMOKE_TEST_PROGRAM)
    if isinstance(outcome, Failure):
        raise CommandError(outcome.message)
    if not outcome.stack_outputs:
        raise CommandError("smoke test produced an empty stack")
    return outcome.stack_outputs[0]


def exec_program(program: str, engine: Optional[Engine] = None) -> str:
    return exec_program_with_inputs(program, None, engine=engine)


def exec_program_with_inputs(program: str, inputs_json: Optional[str] = None, engine: Optional[Engine] = None) -> str:
    return json.dumps(to_wire(execute_program(program, _inputs_text(inputs_json), engine=engine)))


def generate_proof_with_inputs(program: str, inputs_json: Optional[str] = None, engine: Optional[Engine] = None) -> str:
    return json.dumps(to_wire(generate_proof(program, _inputs_text(inputs_json), engine=engine)))


def get_example_programs() -> str:
    return json.dumps(example_programs())


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


COMMANDS: Dict[str, Callable[..., str]] = {
    "greet": greet,
    "instantiate": instantiate,
    "exec_program": exec_program,
    "exec_program_with_inputs": exec_program_with_inputs,
    "generate_proof_with_inputs": generate_proof_with_inputs,
    "get_example_programs": get_example_programs,
}


def invoke(name: str, args: Optional[Dict[str, Any]] = None, engine: Optional[Engine] = None) -> str:
    """Dispatch ``name`` with keyword ``args``.

    Argument names may be given in camelCase (``inputsJson``), the way the
    embedded UI sends them.
    """
    try:
        handler = COMMANDS[name]
    except KeyError:
        raise CommandError(f"unknown command: {name}") from None
    kwargs = {_snake_case(key): value for key, value in (args or {}).items()}
    kwargs.pop("engine", None)
    signature = inspect.signature(handler)
    if "engine" in signature.parameters:
        kwargs["engine"] = engine
    try:
        signature.bind(**kwargs)
    except TypeError as exc:
        raise CommandError(f"invalid arguments for {name}: {exc}") from exc
    return handler(**kwargs)


__all__ = [
    "COMMANDS",
    "CommandError",
    "exec_program",
    "exec_program_with_inputs",
    "generate_proof_with_inputs",
    "get_example_programs",
    "greet",
    "instantiate",
    "invoke",
]
