"""miden-playground CLI.

Commands:
    serve        - Run the HTTP API
    exec         - Execute a program and print an ExecutionResult
    prove        - Prove a program and print a ProofResult
    examples     - List the example programs
    greet        - Print a greeting
    instantiate  - Smoke-test the engine
    invoke       - Call a desktop command by name
"""
from __future__ import annotations

import click

from ..config import configure_logging
from .examples_cmd import examples_command
from .run_cmd import (
    exec_command,
    greet_command,
    instantiate_command,
    invoke_command,
    prove_command,
)
from .serve_cmd import serve_command


@click.group()
@click.version_option(version="0.1.0", prog_name="miden-playground")
@click.option("--log-level", default=None, help="Logging level (defaults to $MIDEN_LOG_LEVEL, then INFO)")
def cli(log_level: str | None) -> None:
    """Miden VM playground - execute and prove Miden assembly programs.

    \b
    Quick start:
      miden-playground examples
      miden-playground exec program.masm --inputs '{"operand_stack": ["7", "5"]}'
      miden-playground serve --port 3001
    """
    configure_logging(log_level)


cli.add_command(serve_command, name="serve")
cli.add_command(exec_command, name="exec")
cli.add_command(prove_command, name="prove")
cli.add_command(examples_command, name="examples")
cli.add_command(greet_command, name="greet")
cli.add_command(instantiate_command, name="instantiate")
cli.add_command(invoke_command, name="invoke")


def main() -> None:
    cli()


__all__ = ["cli", "main"]
