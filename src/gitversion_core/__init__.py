"""Derive a project version from git history."""

from .errors import (
    ConfigError,
    DescribeParseError,
    GitAccessError,
    GitVersionError,
    RepositoryNotFoundError,
)
from .models import DIRTY_SUFFIX, UNSPECIFIED_VERSION, VERSION_ABBR_LENGTH, DescribeResult, VersionDetails
from .resolver import VersionResolver, get_resolver, git_version, reset_resolvers, version_details

__all__ = [
    "ConfigError",
    "DIRTY_SUFFIX",
    "DescribeParseError",
    "DescribeResult",
    "GitAccessError",
    "GitVersionError",
    "RepositoryNotFoundError",
    "UNSPECIFIED_VERSION",
    "VERSION_ABBR_LENGTH",
    "VersionDetails",
    "VersionResolver",
    "get_resolver",
    "git_version",
    "reset_resolvers",
    "version_details",
]

__version__ = "0.1.0"
