"""Parse git describe output into version details."""

from __future__ import annotations

import re
from typing import Optional

from .errors import DescribeParseError
from .models import DIRTY_SUFFIX, UNSPECIFIED_VERSION, VersionDetails

# TAG-N-gHASH. The greedy tag group makes the rightmost "-N-g<hex>" the
# delimiter, so tags may contain hyphens (and hyphen-digit runs). One optional
# marker character may sit between "g" and the hex digits.
DESCRIBE_SUFFIX_RE = re.compile(r"(?P<tag>.+)-(?P<count>[0-9]+)-g.?(?P<hash>[0-9a-fA-F]{3,})")


def match_description(description: str) -> Optional[re.Match]:
    """Return the TAG-N-gHASH match, or None for a bare tag."""
    return DESCRIBE_SUFFIX_RE.search(description)


def strip_dirty(description: str) -> str:
    if description.endswith(DIRTY_SUFFIX):
        return description[: -len(DIRTY_SUFFIX)]
    return description


def parse_description(description: str, head_hash: str) -> VersionDetails:
    """Break a (possibly dirty-suffixed) describe string into its parts.

    The returned git_hash is always `head_hash`, never the hash embedded in
    the description, since the two may be abbreviated differently.

    >>> parse_description("v1.2.0-2-gc1234567", "c1234567ab")
    VersionDetails(tag_name='v1.2.0', commit_count=2, git_hash='c1234567ab')
    >>> parse_description("release-7.dirty", "0123456789")
    VersionDetails(tag_name='release-7', commit_count=0, git_hash='0123456789')
    """
    if not description or description == UNSPECIFIED_VERSION:
        raise DescribeParseError(f"Cannot parse describe output {description!r}")

    match = match_description(description)
    if match is None:
        return VersionDetails(tag_name=strip_dirty(description), commit_count=0, git_hash=head_hash)

    return VersionDetails(
        tag_name=match.group("tag"),
        commit_count=int(match.group("count")),
        git_hash=head_hash,
    )
