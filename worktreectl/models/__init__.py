"""Data models for worktreectl."""

from .request import ResolvedNames, WorktreeRequest
from .worktree import BranchOutcome, RemoveResult, WorktreeInfo

__all__ = [
    "BranchOutcome",
    "RemoveResult",
    "ResolvedNames",
    "WorktreeInfo",
    "WorktreeRequest",
]
