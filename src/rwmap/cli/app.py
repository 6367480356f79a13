"""
Root Typer application for the rwmap CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from rwmap.cli.config import app as config_app
from rwmap.cli.generate import aliases, generate

app = Typer(
    name="rwmap",
    help="rwmap — build the manpage URL rewrite map from a manpage index.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("manpage-rwmap")
        except PackageNotFoundError:
            from rwmap import __version__ as v
        typer.echo(f"rwmap {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """rwmap CLI — generate and inspect manpage rewrite maps."""


# ── Commands ─────────────────────────────────────────────────────────────

app.command("generate")(generate)
app.command("aliases")(aliases)
app.add_typer(config_app, name="config", help="Configuration inspection.")
