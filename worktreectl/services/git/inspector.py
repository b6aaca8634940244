"""Read-only repository queries for worktreectl."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

import git

from worktreectl.exceptions import BaseRefNotFoundError, NotInRepositoryError
from worktreectl.logging_config import get_logger
from worktreectl.models.worktree import WorktreeInfo

logger = get_logger(__name__)

# Probe order for the default base: (ref to check, name to branch from)
DEFAULT_BASE_CANDIDATES = (
    ("refs/heads/main", "main"),
    ("refs/heads/master", "master"),
    ("refs/remotes/origin/main", "origin/main"),
    ("refs/remotes/origin/master", "origin/master"),
)
FALLBACK_BASE = "HEAD"


def _normalize(path: Union[str, Path]) -> str:
    """Canonical form used to compare paths reported by git with our own."""
    return os.path.normcase(os.path.realpath(str(path)))


def _build_worktree_info(entry: Dict[str, Any], is_main: bool) -> WorktreeInfo:
    path = entry["path"]
    return WorktreeInfo(
        path=path,
        branch_name=entry.get("branch", ""),
        commit_sha=entry.get("HEAD", ""),
        is_main=is_main,
        is_orphaned=not os.path.exists(path),
        is_locked=entry.get("locked", False),
        is_prunable=entry.get("prunable", False),
    )


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse ``git worktree list --porcelain`` output.

    Format (blank line between worktrees)::

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name    (or "detached")
        locked [reason]
        prunable [reason]

    The first entry is always the main working tree.
    """
    worktrees: List[WorktreeInfo] = []
    current: Dict[str, Any] = {}

    for line in output.split("\n") + [""]:
        if not line.strip():
            # Empty line marks end of worktree entry
            if current.get("path"):
                worktrees.append(_build_worktree_info(current, is_main=not worktrees))
            current = {}
            continue

        if line.startswith("worktree "):
            current["path"] = line[len("worktree "):]
        elif line.startswith("HEAD "):
            current["HEAD"] = line[len("HEAD "):]
        elif line.startswith("branch "):
            branch_ref = line[len("branch "):]
            if branch_ref.startswith("refs/heads/"):
                current["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current["branch"] = ""
        elif line == "detached":
            current["branch"] = ""
        elif line == "locked" or line.startswith("locked "):
            current["locked"] = True
        elif line == "prunable" or line.startswith("prunable "):
            current["prunable"] = True

    return worktrees


class GitStateInspector:
    """Answers questions about the current repository state.

    Nothing is cached: other actors may change the repository between any
    two calls, so every query goes back to git.
    """

    def __init__(self, repo_path: Union[str, Path]):
        """Initialize the inspector.

        Args:
            repo_path: Any directory inside the repository (usually the cwd)
        """
        self.repo_path = str(repo_path)

    def _get_repo(self) -> git.Repo:
        """Open the repository containing ``repo_path``.

        Raises:
            NotInRepositoryError: If ``repo_path`` is not inside a repository
        """
        try:
            return git.Repo(self.repo_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise NotInRepositoryError(self.repo_path) from e

    def is_inside_repository(self) -> bool:
        """True if ``repo_path`` is inside a git working tree."""
        try:
            result = git.Git(self.repo_path).rev_parse("--is-inside-work-tree")
        except (git.exc.GitError, OSError) as e:
            logger.debug(f"Not inside a work tree at {self.repo_path}: {e}")
            return False
        return result.strip() == "true"

    def repository_top_level(self) -> Path:
        """Top-level directory of the current working tree."""
        try:
            top = git.Git(self.repo_path).rev_parse("--show-toplevel")
        except (git.exc.GitError, OSError) as e:
            raise NotInRepositoryError(self.repo_path) from e
        return Path(top.strip())

    def default_worktree_root(self) -> Path:
        """``<parent of top level>/.worktrees/<repository name>``."""
        top = self.repository_top_level()
        return top.parent / ".worktrees" / top.name

    def _ref_exists(self, full_ref: str) -> bool:
        try:
            self._get_repo().git.show_ref("--verify", "--quiet", full_ref)
            return True
        except git.exc.GitCommandError:
            return False

    def is_commit(self, ref: str) -> bool:
        """True if ``ref`` resolves to a commit."""
        try:
            self._get_repo().git.rev_parse("--verify", "--quiet", f"{ref}^{{commit}}")
            return True
        except git.exc.GitCommandError:
            return False

    def resolve_base_ref(self, explicit: Optional[str] = None) -> str:
        """Pick the ref a new branch starts from.

        An explicit ref only has to resolve to a commit. Otherwise the first
        existing of main, master, origin/main, origin/master is used, falling
        back to HEAD.

        Raises:
            BaseRefNotFoundError: If the chosen ref is not a commit
        """
        if explicit:
            ref = explicit
        else:
            ref = FALLBACK_BASE
            for full_ref, name in DEFAULT_BASE_CANDIDATES:
                if self._ref_exists(full_ref):
                    ref = name
                    break
            logger.debug(f"Default base ref resolved to {ref}")

        if not self.is_commit(ref):
            raise BaseRefNotFoundError(ref)
        return ref

    def is_valid_branch_name(self, name: str) -> bool:
        """Ask git whether ``name`` is an acceptable branch name."""
        if not name:
            return False
        try:
            git.Git(self.repo_path).check_ref_format("--branch", name)
            return True
        except git.exc.GitCommandError as e:
            logger.debug(f"git rejected branch name {name!r}: {e}")
            return False

    def local_branches(self) -> Set[str]:
        """Names of all local branches."""
        return {head.name for head in self._get_repo().heads}

    def branch_exists_locally(self, name: str) -> bool:
        return self._ref_exists(f"refs/heads/{name}")

    def list_worktrees(self) -> List[WorktreeInfo]:
        """Live worktree list, main working tree first."""
        output = self._get_repo().git.worktree("list", "--porcelain")
        worktrees = parse_worktree_porcelain(output)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def worktree_branches(self) -> Dict[Path, str]:
        """Mapping of worktree path to the branch checked out there."""
        return {
            Path(wt.path): wt.branch_name
            for wt in self.list_worktrees()
            if wt.branch_name
        }

    def branch_worktree_path(self, name: str) -> Optional[Path]:
        """Path of the worktree that has ``name`` checked out, if any."""
        for path, branch in self.worktree_branches().items():
            if branch == name:
                return path
        return None

    def worktree_branch(self, path: Union[str, Path]) -> Optional[str]:
        """Branch checked out in the worktree at ``path``, if any."""
        wanted = _normalize(path)
        for wt_path, branch in self.worktree_branches().items():
            if _normalize(wt_path) == wanted:
                return branch
        return None

    def working_tree_is_dirty(self) -> bool:
        """True if tracked files have staged or unstaged changes."""
        return self._get_repo().is_dirty(index=True, working_tree=True, untracked_files=False)
