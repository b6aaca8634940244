"""Worktree data models."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass
class WorktreeInfo:
    """Information about a git worktree."""

    path: str
    branch_name: str  # Empty when detached
    commit_sha: str
    is_main: bool  # Is this the main working tree?
    is_orphaned: bool  # Directory missing?
    is_locked: bool = False
    is_prunable: bool = False

    @property
    def is_detached(self) -> bool:
        return not self.branch_name

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "orphaned" if self.is_orphaned else "active"
        main_marker = " (main)" if self.is_main else ""
        branch = self.branch_name or "(detached)"
        return f"{branch} @ {self.path}{main_marker} [{status}]"


class BranchOutcome(Enum):
    """What happened to the branch after a worktree was removed."""
    KEPT = "kept"
    DELETED = "deleted"
    SKIPPED_UNKNOWN = "skipped-unknown"  # Worktree was detached or branch couldn't be read
    SKIPPED_MISSING = "skipped-missing"  # Branch was already gone


@dataclass
class RemoveResult:
    """Outcome of a remove operation."""
    path: Path
    branch: Optional[str]
    branch_outcome: BranchOutcome
