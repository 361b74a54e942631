"""Git access backed by the git command line."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Optional

from ..errors import GitAccessError
from .base import DescribeHint

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")

# stderr fragments git emits when HEAD simply has no describable tag
_NO_MATCH_MARKERS = (
    "no names found",
    "tags can describe",
    "cannot describe",
)


class GitAdapter:
    """Git access for a single repository root."""

    def __init__(self, repo_root: Path, git_executable: str = "git") -> None:
        self.repo_root = Path(repo_root)
        self.git_executable = git_executable

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        cmd: List[str] = [self.git_executable, "-C", str(self.repo_root), *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                # ref names are arbitrary bytes; never fail on decoding
                errors="replace",
                check=False,
            )
        except FileNotFoundError as exc:
            raise GitAccessError(f"git executable not found: {self.git_executable}") from exc

    def _check_output(self, *args: str) -> str:
        result = self._run(*args)
        if result.returncode != 0:
            raise GitAccessError(
                f"git {' '.join(args)} failed ({result.returncode}): {result.stderr.strip()}"
            )
        return result.stdout.strip()

    def describe(self, hint: Optional[DescribeHint] = None) -> Optional[str]:
        """Describe HEAD relative to the nearest tag."""
        args = ["describe", *(hint or DescribeHint()).to_args()]
        result = self._run(*args)
        if result.returncode != 0:
            stderr = result.stderr.strip()
            if any(marker in stderr.lower() for marker in _NO_MATCH_MARKERS):
                logger.debug("No tag describes HEAD in %s", self.repo_root)
                return None
            raise GitAccessError(f"git describe failed ({result.returncode}): {stderr}")
        return result.stdout.strip() or None

    def is_clean(self) -> bool:
        """Check if the working tree matches HEAD (untracked files count as changes)."""
        return self._check_output("status", "--porcelain") == ""

    def resolve_head(self) -> str:
        """Return HEAD's full object id."""
        object_id = self._check_output("rev-parse", "--verify", "HEAD")
        if not _HEX_RE.match(object_id):
            raise GitAccessError(f"Unexpected object id for HEAD: {object_id!r}")
        return object_id

    def abbreviate(self, object_id: str, length: int) -> str:
        if length <= 0:
            raise GitAccessError(f"Abbreviation length must be positive, got {length}")
        if not _HEX_RE.match(object_id or ""):
            raise GitAccessError(f"Not an object id: {object_id!r}")
        return object_id[:length]
