"""
version.py - Print the resolved version and its breakdown.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from gitversion_core import GitVersionError, VersionDetails

from ..util import build_resolver, console, fail

PATH_OPTION = typer.Option(
    Path("."), "--path", exists=True, file_okay=False, help="Directory inside the repository"
)
CONFIG_OPTION = typer.Option(None, "--config", help="Explicit config file")


def print_version(
    path: Path = PATH_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Print the project's git-derived version to standard out."""
    resolver = build_resolver(path, config)
    try:
        version = resolver.git_version()
    except GitVersionError as exc:
        fail(exc)
    typer.echo(version)


def _format_details_plain(details: Optional[VersionDetails]) -> None:
    if details is None:
        console.print("[yellow]No version details available (no describable tag or commit).[/yellow]")
        return
    table = Table(title="Version Details", show_header=True)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Tag", details.tag_name)
    table.add_row("Commits since tag", str(details.commit_count))
    table.add_row("Hash", details.git_hash)
    console.print(table)


def show_details(
    path: Path = PATH_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    format: str = typer.Option("plain", "--format", "-f", help="Output format: plain, json"),
) -> None:
    """Show tag name, commit distance and HEAD hash."""
    if format not in ("plain", "json"):
        raise typer.BadParameter(f"Unknown format: {format}", param_hint="--format")
    resolver = build_resolver(path, config)
    try:
        details = resolver.version_details()
    except GitVersionError as exc:
        fail(exc)

    if format == "json":
        typer.echo(json.dumps(details.to_dict() if details else None, indent=2))
    else:
        _format_details_plain(details)


def register(app: typer.Typer) -> None:
    app.command(name="version")(print_version)
    app.command(name="details")(show_details)
