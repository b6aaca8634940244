"""Request and name models for worktree lifecycle operations."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from worktreectl.config import WorktreeConfig


@dataclass(frozen=True)
class WorktreeRequest:
    """A single create or remove invocation, immutable once parsed."""

    task_name: str
    dir_prefix: str
    branch_prefix: str
    root_path: Optional[str] = None
    base_ref: Optional[str] = None
    explicit_branch: Optional[str] = None
    use_existing_branch: bool = False
    auto_change_directory: bool = True
    fetch_first: bool = False

    # Remove options
    force: bool = False
    delete_branch: bool = False
    delete_branch_force: bool = False

    @property
    def wants_branch_deletion(self) -> bool:
        return self.delete_branch or self.delete_branch_force

    @classmethod
    def from_config(cls, config: WorktreeConfig, task_name: str, **options) -> "WorktreeRequest":
        """Build a request whose prefixes and root come from the layered config."""
        return cls(
            task_name=task_name,
            dir_prefix=config.dir_prefix,
            branch_prefix=config.branch_prefix,
            root_path=config.root,
            **options,
        )


@dataclass(frozen=True)
class ResolvedNames:
    """Names derived deterministically from a request."""

    directory_suffix: str
    branch_name: str
    full_path: Path
