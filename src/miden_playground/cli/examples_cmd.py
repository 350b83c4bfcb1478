"""miden-playground examples - List the sample programs."""
from __future__ import annotations

import click

from ..commands import get_example_programs
from ..examples import EXAMPLE_PROGRAMS


def _print_rich_examples(show_source: bool) -> None:
    from rich.box import ROUNDED
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title="EXAMPLE PROGRAMS", box=ROUNDED, border_style="cyan", header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Name", style="white")
    table.add_column("Source" if show_source else "First line")
    for idx, (name, source) in enumerate(EXAMPLE_PROGRAMS, start=1):
        table.add_row(str(idx), name, source if show_source else source.splitlines()[0])
    console.print(table)


@click.command("examples")
@click.option("--json", "output_json", is_flag=True, help="Output the catalog as JSON")
@click.option("--source", "show_source", is_flag=True, help="Show full program source")
def examples_command(output_json: bool, show_source: bool) -> None:
    """List the example programs served by both front ends."""
    if output_json:
        click.echo(get_example_programs())
        return
    _print_rich_examples(show_source)
