"""Shared constants for worktreectl."""

from dataclasses import dataclass
from typing import List


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str
    width: int = 0  # 0 means auto-width


COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("path", "Path", 30),
    ColumnDefinition("branch", "Branch", 20),
    ColumnDefinition("head", "HEAD", 8),
    ColumnDefinition("notes", "Notes", 12),
]


class WorktreeStyleType:
    """Style types for worktree rows."""

    MAIN = "main"
    ACTIVE = "active"
    DETACHED = "detached"
    ORPHANED = "orphaned"


# Rich color names
WORKTREE_COLORS = {
    WorktreeStyleType.MAIN: "cyan",
    WorktreeStyleType.ACTIVE: None,  # Default color
    WorktreeStyleType.DETACHED: "yellow",
    WorktreeStyleType.ORPHANED: "red",
}
