"""
CLI utility helpers — settings overrides, error reporting, output formatting.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rwmap.core.errors import ConfigError, RwmapError
from rwmap.core.settings import RwmapSettings, get_settings
from rwmap.execution.sharded import RunSummary

console = Console()
err_console = Console(stderr=True)


def load_settings(*, reload: bool = False, **overrides: Any) -> RwmapSettings:
    """Environment/.env settings with CLI options (non-None) applied on top.

    Raises:
        ConfigError: an environment variable or option fails validation
    """
    try:
        settings = get_settings(_force_reload=reload)
        update = {k: v for k, v in overrides.items() if v is not None}
        if not update:
            return settings
        return RwmapSettings.model_validate({**settings.model_dump(), **update})
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        problems = "; ".join(f"{f}: {err['msg']}" for f, err in zip(fields, e.errors()))
        raise ConfigError(f"Invalid configuration: {problems}", cause=e).with_context(fields=fields)


def fail(error: RwmapError) -> NoReturn:
    """Print a fatal error and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {escape(error.message)}")
    context = error.context.to_dict()
    if context:
        err_console.print(f"  context: {escape(json.dumps(context, default=str))}")
    raise typer.Exit(code=1)


def output_summary(summary: RunSummary, *, as_json: bool = False) -> None:
    """Render a run summary to the terminal."""
    if as_json:
        console.print_json(json.dumps(summary.to_dict(), default=str))
        return

    table = Table(title=f"rewrite map run {summary.run_id}")
    table.add_column("Shard", justify="right")
    table.add_column("File")
    table.add_column("Names", justify="right")
    table.add_column("Lines", justify="right")
    for s in summary.shards:
        table.add_row(str(s.shard), str(s.path), str(s.names), str(s.lines))
    console.print(table)
    console.print(
        f"[bold green]Done[/bold green]: {summary.total_names} names, "
        f"{summary.total_lines} lines in {summary.duration_ms / 1000:.1f}s"
    )
