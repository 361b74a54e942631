"""CLI app definition and command registration."""

from __future__ import annotations

import typer

from gitversion_core import __version__

from .util import configure_logging, console

app = typer.Typer(
    help="gitversion: derive a project version from git describe",
    no_args_is_help=True,
)


def _version_callback(value: bool):
    if value:
        console.print(f"gitversion {__version__}")
        raise typer.Exit()


@app.callback()
def _init(
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", help="Show the tool version and exit.", callback=_version_callback, is_eager=True
    ),
):
    configure_logging("debug" if verbose else "warning")


# Subcommands are registered in commands/*.py
from .commands import config_cmd  # noqa: E402
from .commands import version as version_cmd  # noqa: E402
from .commands.doctor import doctor as doctor_fn  # noqa: E402

version_cmd.register(app)
app.add_typer(config_cmd.app, name="config", help="Configuration inspection and scaffolding")
app.command(name="doctor")(doctor_fn)


def main():
    app()
