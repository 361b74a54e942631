from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from gitversion_core import GitVersionError
from gitversion_core.config import CONFIG_FILENAME, write_default_config

from ..util import console, fail, load_effective_config

app = typer.Typer(help="Configuration inspection and scaffolding")


@app.command("show")
def config_show(
    path: Path = typer.Option(
        Path("."), "--path", exists=True, file_okay=False, help="Directory to resolve config from"
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Explicit config file"),
):
    """Print the effective config as JSON."""
    effective = load_effective_config(path, config)
    typer.echo(json.dumps(effective.model_dump(), indent=2))


@app.command("init")
def config_init(
    path: Path = typer.Option(Path("."), "--path", help="Directory to write the config into"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
):
    """Write a default .gitversion.toml."""
    try:
        written = write_default_config(path / CONFIG_FILENAME, force=force)
    except GitVersionError as exc:
        fail(exc)
    console.print(f"[green]Wrote {written}[/green]")
