"""Locate the repository root above a starting directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .errors import RepositoryNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MARKER = ".git"


def find_repo_root(start_dir: Path, marker: str = DEFAULT_MARKER) -> Optional[Path]:
    """Walk from start_dir towards the filesystem root looking for `marker`.

    The marker may be a directory (regular clone) or a file (worktree,
    submodule). Returns the directory containing it, or None (also when
    start_dir is not an existing directory).
    """
    current = Path(start_dir).resolve()
    if not current.is_dir():
        return None
    while True:
        if (current / marker).exists():
            return current
        if current.parent == current:
            return None
        current = current.parent


def locate_repo_root(start_dir: Path, marker: str = DEFAULT_MARKER) -> Path:
    """Like find_repo_root, but a missing repository is fatal."""
    root = find_repo_root(start_dir, marker)
    if root is None:
        raise RepositoryNotFoundError(Path(start_dir), marker)
    logger.debug("Repository root for %s is %s", start_dir, root)
    return root
