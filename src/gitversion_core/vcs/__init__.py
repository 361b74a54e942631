from .base import DescribeHint, GitAccess, QueryResult
from .git_adapter import GitAdapter

__all__ = [
    "DescribeHint",
    "GitAccess",
    "GitAdapter",
    "QueryResult",
]
