"""Git-related services for worktreectl."""

from .inspector import GitStateInspector, parse_worktree_porcelain
from .operations import GitOperations

__all__ = [
    "GitOperations",
    "GitStateInspector",
    "parse_worktree_porcelain",
]
