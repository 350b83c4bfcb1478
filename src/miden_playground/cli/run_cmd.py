"""Desktop commands exposed on the command line.

Usage:
    miden-playground exec program.masm --inputs '{"operand_stack": ["7", "5"]}'
    miden-playground prove program.masm --proof-out program.proof
    miden-playground invoke exec_program_with_inputs --args '{"program": "begin add end", "inputsJson": null}'
"""
from __future__ import annotations

import json
from pathlib import Path

import click

from .. import commands
from ..commands import CommandError


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def _read_program(path: str) -> str:
    with click.open_file(path, "r", encoding="utf-8") as fh:
        return fh.read()


def _emit_result(payload: str) -> None:
    click.echo(payload)
    if not json.loads(payload).get("success"):
        raise SystemExit(1)


@click.command("greet")
@click.argument("name")
def greet_command(name: str) -> None:
    """Print a greeting."""
    click.echo(commands.greet(name))


@click.command("instantiate")
def instantiate_command() -> None:
    """Smoke-test the engine with a fixed program."""
    try:
        click.echo(commands.instantiate())
    except CommandError as exc:
        _fail(str(exc))


@click.command("exec")
@click.argument("program_file", type=click.Path(allow_dash=True))
@click.option("--inputs", "inputs_json", default=None, help='Stack inputs, e.g. {"operand_stack": ["10"]}')
def exec_command(program_file: str, inputs_json: str | None) -> None:
    """Compile and execute PROGRAM_FILE ('-' for stdin); prints an ExecutionResult."""
    program = _read_program(program_file)
    _emit_result(commands.exec_program_with_inputs(program, inputs_json))


@click.command("prove")
@click.argument("program_file", type=click.Path(allow_dash=True))
@click.option("--inputs", "inputs_json", default=None, help='Stack inputs, e.g. {"operand_stack": ["10"]}')
@click.option("--proof-out", type=click.Path(dir_okay=False), default=None, help="Also write the raw proof bytes here")
def prove_command(program_file: str, inputs_json: str | None, proof_out: str | None) -> None:
    """Compile, execute and prove PROGRAM_FILE; prints a ProofResult."""
    program = _read_program(program_file)
    payload = commands.generate_proof_with_inputs(program, inputs_json)
    result = json.loads(payload)
    if proof_out and result.get("success"):
        Path(proof_out).write_bytes(bytes(result["proof_bytes"]))
    _emit_result(payload)


@click.command("invoke")
@click.argument("name", type=click.Choice(sorted(commands.COMMANDS)))
@click.option("--args", "args_json", default=None, help="Command arguments as a JSON object")
def invoke_command(name: str, args_json: str | None) -> None:
    """Invoke a desktop command by NAME, as the embedded UI does."""
    try:
        args = json.loads(args_json) if args_json else {}
    except json.JSONDecodeError as exc:
        _fail(f"--args is not valid JSON: {exc}")
        return
    if not isinstance(args, dict):
        _fail("--args must be a JSON object")
        return
    try:
        click.echo(commands.invoke(name, args))
    except CommandError as exc:
        _fail(str(exc))
