"""Public version queries: gitVersion and versionDetails."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from .cache import GitFactory, RepoStateCache
from .config import GitVersionConfig, load_config
from .describe import parse_description
from .models import DIRTY_SUFFIX, UNSPECIFIED_VERSION, VersionDetails

logger = logging.getLogger(__name__)


class VersionResolver:
    """Answers version queries for one resolution context.

    Git failures never escape; they show up as UNSPECIFIED_VERSION. The only
    error that propagates is RepositoryNotFoundError.
    """

    def __init__(self, cache: RepoStateCache) -> None:
        self.cache = cache

    @classmethod
    def for_directory(
        cls,
        start_dir: Path,
        config: Optional[GitVersionConfig] = None,
        git_factory: Optional[GitFactory] = None,
    ) -> "VersionResolver":
        return cls(RepoStateCache(start_dir, config=config, git_factory=git_factory))

    def git_version(self) -> str:
        """Describe output, plus ".dirty" for a modified tree."""
        result = self.cache.describe_and_cleanliness()
        if not result.resolved:
            return UNSPECIFIED_VERSION
        return result.description + ("" if result.is_clean else DIRTY_SUFFIX)

    def version_details(self) -> Optional[VersionDetails]:
        """Tag, commit distance and HEAD hash, or None when there is no version."""
        version = self.git_version()
        if version == UNSPECIFIED_VERSION:
            return None
        return parse_description(version, self.cache.head_hash_abbrev())


_resolvers: Dict[Path, VersionResolver] = {}
_resolvers_lock = threading.Lock()


def get_resolver(start_dir: Path, config: Optional[GitVersionConfig] = None) -> VersionResolver:
    """Return the process-wide resolver for start_dir, creating it on first use.

    `config` only applies when the resolver is first created; without it the
    project config for start_dir is loaded (see config.load_config).
    """
    key = Path(start_dir).resolve()
    with _resolvers_lock:
        resolver = _resolvers.get(key)
        if resolver is None:
            logger.debug("Creating resolver for %s", key)
            if config is None:
                config = load_config(key)
            resolver = VersionResolver.for_directory(key, config=config)
            _resolvers[key] = resolver
        return resolver


def reset_resolvers() -> None:
    """Forget all cached resolvers. The next query re-reads the repository."""
    with _resolvers_lock:
        _resolvers.clear()


def git_version(start_dir: Optional[Path] = None) -> str:
    return get_resolver(start_dir or Path.cwd()).git_version()


def version_details(start_dir: Optional[Path] = None) -> Optional[VersionDetails]:
    return get_resolver(start_dir or Path.cwd()).version_details()
