"""
CLI: ``rwmap config`` — show effective configuration.
"""

from __future__ import annotations

import typer
from rich.table import Table

from rwmap.cli.utils import console, fail, load_settings
from rwmap.core.errors import RwmapError

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show the settings a run would use (environment and .env applied)."""
    try:
        settings = load_settings(reload=True)
    except RwmapError as e:
        fail(e)

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump().items()):
            typer.echo(f"RWMAP_{key.upper()}={value}")
        return

    table = Table()
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    table.add_row("effective workers", str(settings.resolve_workers()))
    console.print(table)
