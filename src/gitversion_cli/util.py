from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from gitversion_core import GitVersionError, VersionResolver
from gitversion_core.config import GitVersionConfig, load_config

console = Console()
err_console = Console(stderr=True)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(verbosity: str = "warning") -> None:
    logging.basicConfig(
        level=_LEVELS.get(verbosity, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def fail(exc: GitVersionError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {exc}")
    raise typer.Exit(1)


def load_effective_config(path: Path, config_path: Optional[Path] = None) -> GitVersionConfig:
    try:
        config = load_config(path, config_path)
    except GitVersionError as exc:
        fail(exc)
    if logging.getLogger().level > _LEVELS[config.log.verbosity]:
        configure_logging(config.log.verbosity)
    return config


def build_resolver(path: Path, config_path: Optional[Path] = None) -> VersionResolver:
    config = load_effective_config(path, config_path)
    return VersionResolver.for_directory(path, config=config)
