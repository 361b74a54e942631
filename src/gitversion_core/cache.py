"""Per-invocation memoization of repository state."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar

from .config import GitVersionConfig
from .errors import GitAccessError
from .locator import locate_repo_root
from .models import UNSPECIFIED_VERSION, VERSION_ABBR_LENGTH, DescribeResult
from .vcs.base import GitAccess, QueryResult
from .vcs.git_adapter import GitAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")

GitFactory = Callable[[Path, GitVersionConfig], GitAccess]


def default_git_factory(repo_root: Path, config: GitVersionConfig) -> GitAccess:
    return GitAdapter(repo_root, git_executable=config.git_executable)


class ComputeOnce(Generic[T]):
    """Lazy cell: the first caller computes, everyone else gets the stored value.

    A compute that raises leaves the cell empty.
    """

    _UNSET = object()

    def __init__(self, compute: Callable[[], T]) -> None:
        self._compute = compute
        self._value: object = self._UNSET
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._value is not self._UNSET

    def get(self) -> T:
        if self._value is self._UNSET:
            with self._lock:
                if self._value is self._UNSET:
                    self._value = self._compute()
        return self._value  # type: ignore[return-value]


@dataclass(frozen=True)
class RepositoryHandle:
    """An opened repository rooted at a resolved directory."""

    root: Path
    git: GitAccess


def query(fn: Callable[[], T], what: str) -> QueryResult[T]:
    """Run one git query, converting access failures into a degraded result."""
    try:
        return QueryResult.ok(fn())
    except (GitAccessError, OSError) as exc:
        logger.info("Could not %s: %s", what, exc)
        return QueryResult.degraded(str(exc))


class RepoStateCache:
    """Repository state for one resolution context, each fact queried at most once."""

    def __init__(
        self,
        start_dir: Path,
        config: Optional[GitVersionConfig] = None,
        git_factory: Optional[GitFactory] = None,
    ) -> None:
        self.start_dir = Path(start_dir)
        self.config = config or GitVersionConfig()
        self._git_factory = git_factory or default_git_factory
        self._handle = ComputeOnce(self._open_repository)
        self._describe = ComputeOnce(self._compute_describe)
        self._head_hash = ComputeOnce(self._compute_head_hash)

    def _open_repository(self) -> RepositoryHandle:
        root = locate_repo_root(self.start_dir, self.config.marker)
        return RepositoryHandle(root=root, git=self._git_factory(root, self.config))

    def _compute_describe(self) -> DescribeResult:
        git = self.repository_handle().git
        description = query(lambda: git.describe(self.config.describe.to_hint()), "describe HEAD")
        if description.is_degraded or not description.value:
            return DescribeResult(description=UNSPECIFIED_VERSION)

        # A failed status check must not cost us the description
        clean = query(git.is_clean, "check working tree status")
        result = DescribeResult(description=description.value, is_clean=clean.value_or(True))
        logger.debug("Resolved description %r (clean=%s)", result.description, result.is_clean)
        return result

    def _compute_head_hash(self) -> str:
        git = self.repository_handle().git
        head = query(
            lambda: git.abbreviate(git.resolve_head(), VERSION_ABBR_LENGTH),
            "resolve HEAD",
        )
        return head.value_or(UNSPECIFIED_VERSION)

    def repository_handle(self) -> RepositoryHandle:
        """Return the repository handle. Raises RepositoryNotFoundError when there is no repository."""
        return self._handle.get()

    def describe_and_cleanliness(self) -> DescribeResult:
        return self._describe.get()

    def head_hash_abbrev(self) -> str:
        return self._head_hash.get()
