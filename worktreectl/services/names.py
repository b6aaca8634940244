"""Name resolution for worktree directories and branches.

Turns a free-form task name into a directory suffix that is safe on any
filesystem and a branch name that git accepts. Both create and remove go
through ``build_worktree_path`` so they always agree on the location.
"""

import re
from pathlib import Path
from typing import Callable, Optional, Union

from worktreectl.exceptions import EmptyNameError, InvalidBranchNameError
from worktreectl.models.request import ResolvedNames

_DIR_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")
_MULTI_UNDERSCORE = re.compile(r"_{2,}")


def sanitize_dir_suffix(task_name: str) -> str:
    """Return a directory-safe version of ``task_name``.

    Every character outside ``[A-Za-z0-9._-]`` becomes ``_``, runs of
    ``_`` collapse to one and leading/trailing ``_`` are trimmed.

    Raises:
        EmptyNameError: If nothing is left after sanitizing
    """
    suffix = _DIR_UNSAFE.sub("_", task_name)
    suffix = _MULTI_UNDERSCORE.sub("_", suffix).strip("_")
    if not suffix:
        raise EmptyNameError(task_name)
    return suffix


def build_branch_name(task_name: str, branch_prefix: str, explicit_branch: Optional[str] = None) -> str:
    """Explicit branch wins, otherwise prefix + the task name verbatim."""
    if explicit_branch:
        return explicit_branch
    return f"{branch_prefix}{task_name}"


def build_worktree_path(root: Union[str, Path], dir_prefix: str, task_name: str) -> Path:
    """Full path of the worktree directory for ``task_name`` under ``root``."""
    return Path(root) / f"{dir_prefix}{sanitize_dir_suffix(task_name)}"


def resolve_names(
    task_name: str,
    dir_prefix: str,
    branch_prefix: str,
    root: Union[str, Path],
    validate_branch: Callable[[str], bool],
    explicit_branch: Optional[str] = None,
) -> ResolvedNames:
    """Resolve the directory suffix, branch name and full path for a task.

    Args:
        task_name: User supplied task name
        dir_prefix: Prefix for the worktree directory
        branch_prefix: Prefix for generated branch names
        root: Directory the worktree lives under
        validate_branch: Branch name check, normally git's own
            ``check-ref-format --branch``
        explicit_branch: Branch name overriding the generated one

    Raises:
        EmptyNameError: If the task name has no usable characters
        InvalidBranchNameError: If git rejects the branch name
    """
    suffix = sanitize_dir_suffix(task_name)
    branch = build_branch_name(task_name, branch_prefix, explicit_branch)
    if not validate_branch(branch):
        raise InvalidBranchNameError(branch)

    return ResolvedNames(
        directory_suffix=suffix,
        branch_name=branch,
        full_path=build_worktree_path(root, dir_prefix, task_name),
    )
