"""Git access abstraction and query result types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DescribeHint:
    """Options forwarded to the describe primitive."""

    long: bool = False  # always emit TAG-N-gHASH, even at a tag
    always: bool = False  # fall back to an abbreviated hash when no tag matches
    tags: bool = False  # consider lightweight tags, not only annotated ones
    match: Optional[str] = None  # glob restricting candidate tags

    def to_args(self) -> List[str]:
        args: List[str] = []
        if self.tags:
            args.append("--tags")
        if self.long:
            args.append("--long")
        if self.always:
            args.append("--always")
        if self.match:
            args.extend(["--match", self.match])
        return args


class GitAccess(Protocol):
    """Primitives the resolver needs from a repository."""

    def describe(self, hint: Optional[DescribeHint] = None) -> Optional[str]:
        """Describe HEAD. Returns None when no tag can describe it."""
        ...

    def is_clean(self) -> bool:
        """Check whether the working tree has no modifications."""
        ...

    def resolve_head(self) -> str:
        """Return the full object id HEAD points at."""
        ...

    def abbreviate(self, object_id: str, length: int) -> str:
        """Shorten an object id to `length` hex characters."""
        ...


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Outcome of one git query: a value, or the reason it degraded."""

    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "QueryResult[T]":
        return cls(value=value)

    @classmethod
    def degraded(cls, reason: str) -> "QueryResult[T]":
        return cls(error=reason)

    @property
    def is_degraded(self) -> bool:
        return self.error is not None

    def value_or(self, default: T) -> T:
        if self.is_degraded or self.value is None:
            return default
        return self.value
