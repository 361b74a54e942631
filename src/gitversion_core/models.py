"""Value types shared across the resolver."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

# Same token a build tool reports when no version was ever set
UNSPECIFIED_VERSION = "unspecified"
DIRTY_SUFFIX = ".dirty"
VERSION_ABBR_LENGTH = 10


@dataclass(frozen=True)
class DescribeResult:
    """Describe output and working-tree cleanliness from one snapshot."""

    description: str  # describe output or UNSPECIFIED_VERSION
    is_clean: bool = True

    @property
    def resolved(self) -> bool:
        return self.description != UNSPECIFIED_VERSION


@dataclass(frozen=True)
class VersionDetails:
    """Structured breakdown of a version string."""

    tag_name: str
    commit_count: int
    git_hash: str

    def __post_init__(self) -> None:
        if self.commit_count < 0:
            raise ValueError("commit_count must be non-negative")

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON shape used by the CLI (camelCase keys)."""
        data = asdict(self)
        return {
            "tagName": data["tag_name"],
            "commitCount": data["commit_count"],
            "gitHash": data["git_hash"],
        }
