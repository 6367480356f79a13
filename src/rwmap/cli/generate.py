"""
CLI: ``rwmap generate`` and ``rwmap aliases``.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from rwmap.cli.utils import console, fail, load_settings, output_summary
from rwmap.core.errors import RwmapError
from rwmap.framework.logging import configure_logging, log_step, new_run_id, set_context


def generate(
    index: Path | None = typer.Option(None, "--index", "-i", help="Index artifact generated by the manpage indexer"),  # noqa: UP007
    concurrency: int | None = typer.Option(  # noqa: UP007
        None, "--concurrency", "-c", help="Number of output files to create in parallel (default: CPU count)"
    ),
    output_dir: Path | None = typer.Option(  # noqa: UP007
        None, "--output-dir", "-o", help="Directory for output.<n> files (default: working directory)"
    ),
    queue_size: int | None = typer.Option(None, "--queue-size", help="Work queue bound"),  # noqa: UP007
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),  # noqa: UP007
    log_format: str | None = typer.Option(None, "--log-format", help="console or json"),  # noqa: UP007
    as_json: bool = typer.Option(False, "--json", help="Print the run summary as JSON"),
) -> None:
    """Write every URL alias of every manpage into sharded rewrite-map files.

    Example::

        rwmap generate --index /srv/man/auxserver.json --output-dir /srv/man/rwmap
        LC_ALL=C sort /srv/man/rwmap/output.* > /srv/man/rwmap.txt
    """
    from rwmap.execution.sharded import ShardedWriter
    from rwmap.index.loader import load_index

    try:
        settings = load_settings(
            index_path=index,
            concurrency=concurrency,
            output_dir=output_dir,
            queue_size=queue_size,
            log_level=log_level,
            log_format=log_format,
        )
    except RwmapError as e:
        fail(e)

    configure_logging(level=settings.log_level, format=settings.log_format, force=True)
    run_id = new_run_id()
    set_context(run_id=run_id)

    try:
        with log_step("rwmap.generate", index_path=str(settings.index_path)):
            idx = load_index(settings.index_path)
            writer = ShardedWriter(
                idx,
                output_dir=settings.output_dir,
                workers=settings.resolve_workers(),
                queue_size=settings.queue_size,
                suffix=settings.serving_suffix,
                run_id=run_id,
            )
            summary = writer.run()
    except RwmapError as e:
        fail(e)

    output_summary(summary, as_json=as_json)


def aliases(
    name: str = typer.Argument(..., help="Manpage name (case-insensitive)"),
    index: Path | None = typer.Option(None, "--index", "-i", help="Index artifact"),  # noqa: UP007
    as_json: bool = typer.Option(False, "--json", help="Print a JSON object instead of map lines"),
) -> None:
    """Print the rewrite-map lines generated for a single manpage name."""
    from rwmap.index.loader import load_index
    from rwmap.rewrite.printer import format_line, resolve_name

    try:
        settings = load_settings(index_path=index)
    except RwmapError as e:
        fail(e)
    configure_logging(level="WARNING", format=settings.log_format, force=True)

    try:
        idx = load_index(settings.index_path)
        key = name.lower()
        if key not in idx.entries:
            console.print(f"[yellow]No manpage named {name!r} in {settings.index_path}[/yellow]")
            raise typer.Exit(code=1)
        pairs = resolve_name(idx, key, settings.serving_suffix)
    except RwmapError as e:
        fail(e)

    if as_json:
        typer.echo(json.dumps(dict(pairs), indent=2))
        return
    for alias_key, target in pairs:
        typer.echo(format_line(alias_key, target), nl=False)
