"""Exception hierarchy for git version resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class GitVersionError(Exception):
    """Base class for all gitversion errors."""


class RepositoryNotFoundError(GitVersionError):
    """No repository marker exists in the start directory or any ancestor."""

    def __init__(self, start_dir: Path, marker: str = ".git") -> None:
        self.start_dir = start_dir
        self.marker = marker
        if not Path(start_dir).is_dir():
            message = f"Start directory does not exist: {start_dir}"
        else:
            message = f"Cannot find '{marker}' directory (searched upward from {start_dir})"
        super().__init__(message)


class ConfigError(GitVersionError):
    """Configuration file is unreadable or invalid."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class GitAccessError(GitVersionError):
    """A git query failed. Always absorbed by the repository state cache."""


class DescribeParseError(GitVersionError, ValueError):
    """Describe output passed to the parser is outside its contract."""
