"""Display service for worktree listings"""
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from worktreectl.constants import COLUMNS, WORKTREE_COLORS, WorktreeStyleType
from worktreectl.models.worktree import WorktreeInfo

console = Console()


def get_worktree_style_type(worktree: WorktreeInfo) -> str:
    if worktree.is_orphaned or worktree.is_prunable:
        return WorktreeStyleType.ORPHANED
    if worktree.is_main:
        return WorktreeStyleType.MAIN
    if worktree.is_detached:
        return WorktreeStyleType.DETACHED
    return WorktreeStyleType.ACTIVE


def format_worktree_notes(worktree: WorktreeInfo) -> str:
    notes = []
    if worktree.is_main:
        notes.append("main")
    if worktree.is_locked:
        notes.append("locked")
    if worktree.is_orphaned:
        notes.append("[ORPHANED]")
    elif worktree.is_prunable:
        notes.append("prunable")
    return ", ".join(notes)


def build_row_cells(worktree: WorktreeInfo) -> Dict[str, Text]:
    """Cell values for one row, keyed by column key."""
    return {
        "path": Text(worktree.path),
        "branch": Text(worktree.branch_name or "(detached)"),
        "head": Text(worktree.commit_sha[:8]),
        "notes": Text(format_worktree_notes(worktree)),
    }


class DisplayService:
    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def display_worktree_table(self, worktrees: List[WorktreeInfo]) -> None:
        """Display a table of worktrees."""
        if not worktrees:
            self.console.print("[yellow]No worktrees found[/yellow]")
            return

        table = Table()
        for col in COLUMNS:
            table.add_column(col.label, min_width=col.width or None, overflow="fold")

        for worktree in worktrees:
            cells = build_row_cells(worktree)
            table.add_row(
                *(cells[col.key] for col in COLUMNS),
                style=WORKTREE_COLORS.get(get_worktree_style_type(worktree)),
            )

        self.console.print(table)
