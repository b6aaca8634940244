"""Worktree lifecycle controller for worktreectl.

Create and remove are short linear protocols: every precondition is
checked against fresh repository state, then exactly one mutating git
call is made. Nothing is rolled back when a later step fails.

There is no locking between invocations. Two actors creating the same
path or branch at the same moment can both pass the checks; git then
rejects the loser and that failure is reported as an ExternalToolError.
"""

import os
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import git

from worktreectl.exceptions import (
    BranchAlreadyExistsError,
    BranchDeletionRefusedError,
    BranchInUseError,
    BranchNotFoundError,
    EmptyNameError,
    ExternalToolError,
    NotInRepositoryError,
    PathExistsError,
    PathNotFoundError,
)
from worktreectl.logging_config import get_logger
from worktreectl.models.request import ResolvedNames, WorktreeRequest
from worktreectl.models.worktree import BranchOutcome, RemoveResult, WorktreeInfo
from worktreectl.services.git import GitOperations, GitStateInspector
from worktreectl.services.names import build_worktree_path, resolve_names
from worktreectl.services.reporter import Reporter

logger = get_logger(__name__)

SHELL_INIT_TIP = 'Tip: run eval "$(worktreectl shell-init)" to auto-cd into new worktrees'


def _path_taken(path: Path) -> bool:
    # A dangling symlink still occupies the name
    return path.exists() or path.is_symlink()


def _is_within(location: Union[str, Path], directory: Path) -> bool:
    location = Path(os.path.realpath(str(location)))
    directory = Path(os.path.realpath(str(directory)))
    return location == directory or directory in location.parents


class WorktreeController:
    """Creates and removes worktrees without letting actors collide."""

    def __init__(
        self,
        repo_path: Union[str, Path],
        reporter: Optional[Reporter] = None,
        inspector: Optional[GitStateInspector] = None,
        operations: Optional[GitOperations] = None,
        can_mutate_caller_context: bool = False,
        navigator: Optional[Callable[[Path], None]] = None,
    ):
        """Initialize the controller.

        Args:
            repo_path: Directory the caller is working in
            reporter: Output for info/warning lines and the path payload
            inspector: Read-only repository queries
            operations: Mutating git calls
            can_mutate_caller_context: True when the caller's working
                directory can be changed from here (in-process use, or the
                shell integration)
            navigator: How to move the caller into a new worktree;
                defaults to ``os.chdir``
        """
        self.repo_path = str(repo_path)
        self.reporter = reporter or Reporter()
        self.inspector = inspector or GitStateInspector(self.repo_path)
        self.operations = operations or GitOperations(self.repo_path)
        self.can_mutate_caller_context = can_mutate_caller_context
        self.navigator = navigator or os.chdir

    def _require_repository(self) -> None:
        if not self.inspector.is_inside_repository():
            raise NotInRepositoryError(self.repo_path)

    def resolve_root(self, request: WorktreeRequest) -> Path:
        """Absolute worktree root: configured root, else the repository default."""
        if request.root_path:
            root = Path(request.root_path).expanduser()
        else:
            root = self.inspector.default_worktree_root()
        return root.resolve()

    def create(self, request: WorktreeRequest) -> Path:
        """Create a worktree for ``request`` and return its path.

        Raises:
            NotInRepositoryError: Not inside a repository
            EmptyNameError, InvalidBranchNameError: Unusable names
            BaseRefNotFoundError: Base ref is not a commit
            PathExistsError, BranchAlreadyExistsError, BranchInUseError:
                The worktree would collide with existing state
            BranchNotFoundError: Existing-branch mode without that branch
            ExternalToolError: fetch or worktree add failed
        """
        self._require_repository()
        if not request.task_name:
            raise EmptyNameError(request.task_name)

        root = self.resolve_root(request)
        names = resolve_names(
            request.task_name,
            dir_prefix=request.dir_prefix,
            branch_prefix=request.branch_prefix,
            root=root,
            validate_branch=self.inspector.is_valid_branch_name,
            explicit_branch=request.explicit_branch,
        )

        if request.fetch_first:
            self.reporter.info("Fetching latest refs (git fetch --prune)...")
            self.operations.fetch_prune()

        base_ref = self._resolve_base(request)
        self._report_plan(request, root, names, base_ref)
        self._check_collisions(names, request.use_existing_branch)

        self._add_worktree(root, names, base_ref)
        return self._report_created(names.full_path, request)

    def _resolve_base(self, request: WorktreeRequest) -> Optional[str]:
        if request.use_existing_branch:
            if request.base_ref:
                self.reporter.warn("--from is ignored when --use-existing-branch is set.")
            return None

        base_ref = self.inspector.resolve_base_ref(request.base_ref)
        if base_ref == "HEAD" and self.inspector.working_tree_is_dirty():
            self.reporter.warn(
                "Working tree has uncommitted changes; base is HEAD. New branch will start "
                "from current HEAD commit (not uncommitted changes)."
            )
        return base_ref

    def _report_plan(self, request: WorktreeRequest, root: Path, names: ResolvedNames,
                     base_ref: Optional[str]) -> None:
        self.reporter.info(f"Repo:   {self.inspector.repository_top_level()}")
        self.reporter.info(f"Root:   {root}")
        self.reporter.info(f"Name:   {request.task_name}")
        self.reporter.info(f"Path:   {names.full_path}")
        self.reporter.info(f"Branch: {names.branch_name}")
        self.reporter.info(f"Base:   {base_ref or '(existing branch)'}")

    def _check_collisions(self, names: ResolvedNames, use_existing_branch: bool) -> None:
        """Fail before any mutation if the worktree would clash with current state."""
        if _path_taken(names.full_path):
            raise PathExistsError(names.full_path)

        branch = names.branch_name
        exists = self.inspector.branch_exists_locally(branch)
        if use_existing_branch and not exists:
            raise BranchNotFoundError(branch)
        if not use_existing_branch and exists:
            raise BranchAlreadyExistsError(branch)

        if exists:
            in_use_at = self.inspector.branch_worktree_path(branch)
            if in_use_at is not None:
                raise BranchInUseError(branch, in_use_at)

    def _add_worktree(self, root: Path, names: ResolvedNames, base_ref: Optional[str]) -> None:
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExternalToolError("create_root", target=str(root), message=str(e)) from e

        if base_ref is None:
            self.reporter.info("Creating worktree using existing branch...")
            self.operations.add_worktree_existing_branch(names.full_path, names.branch_name)
        else:
            self.reporter.info("Creating worktree and new branch...")
            self.operations.add_worktree_new_branch(names.full_path, names.branch_name, base_ref)

    def _report_created(self, path: Path, request: WorktreeRequest) -> Path:
        self.reporter.info(f"Worktree created: {path}")
        if self.can_mutate_caller_context and request.auto_change_directory:
            self.navigator(path)
            self.reporter.info(f"Now in: {path}")
        else:
            self.reporter.payload(path)
            if not self.can_mutate_caller_context:
                self.reporter.info(SHELL_INIT_TIP)
        return path

    def remove(self, request: WorktreeRequest) -> RemoveResult:
        """Remove the worktree for ``request``, optionally deleting its branch.

        Worktree removal and branch deletion are separate outcomes: when
        the branch step is refused, the worktree is already gone.

        Raises:
            NotInRepositoryError: Not inside a repository
            EmptyNameError: Unusable task name
            PathNotFoundError: No worktree directory at the resolved path
            ExternalToolError: worktree remove (or a forced branch delete) failed
            BranchDeletionRefusedError: Branch is still checked out elsewhere
                or has unmerged work
        """
        self._require_repository()
        root = self.resolve_root(request)
        path = build_worktree_path(root, request.dir_prefix, request.task_name)
        if not _path_taken(path):
            raise PathNotFoundError(path)

        branch = self._lookup_branch(path)
        inspector, operations = self._branch_stage_services(path)

        self.reporter.info(f"Removing worktree: {path}")
        self.operations.remove_worktree(path, force=request.force)
        self.reporter.info("Worktree removed.")

        if not request.wants_branch_deletion:
            self.reporter.info("Branch kept (default). Use --delete-branch if you want branch deletion.")
            return RemoveResult(path=path, branch=branch, branch_outcome=BranchOutcome.KEPT)

        outcome = self._delete_branch(
            path, branch, inspector, operations, force=request.delete_branch_force
        )
        return RemoveResult(path=path, branch=branch, branch_outcome=outcome)

    def _lookup_branch(self, path: Path) -> Optional[str]:
        try:
            return self.inspector.worktree_branch(path)
        except git.exc.GitCommandError as e:
            logger.debug(f"Could not read worktree list for {path}: {e}")
            return None

    def _branch_stage_services(self, path: Path) -> Tuple[GitStateInspector, GitOperations]:
        """Services for the branch step that still work once ``path`` is gone.

        When the caller sits inside the worktree being removed, later git
        calls are anchored on the main working tree instead.
        """
        if not _is_within(self.repo_path, path):
            return self.inspector, self.operations

        main_path = self.inspector.list_worktrees()[0].path
        logger.debug(f"{self.repo_path} is inside {path}; branch step runs from {main_path}")
        return GitStateInspector(main_path), GitOperations(main_path)

    def _delete_branch(self, path: Path, branch: Optional[str], inspector: GitStateInspector,
                       operations: GitOperations, force: bool) -> BranchOutcome:
        if branch is None:
            self.reporter.warn(f"Could not determine branch for {path}; skipping branch deletion.")
            return BranchOutcome.SKIPPED_UNKNOWN

        if not inspector.branch_exists_locally(branch):
            self.reporter.warn(f"Branch '{branch}' no longer exists locally; skipping branch deletion.")
            return BranchOutcome.SKIPPED_MISSING

        in_use_at = inspector.branch_worktree_path(branch)
        if in_use_at is not None:
            raise BranchDeletionRefusedError(
                branch, f"it is checked out in another worktree: {in_use_at}"
            )

        self.reporter.info(f"Deleting branch: {branch}")
        try:
            operations.delete_branch(branch, force=force)
        except ExternalToolError as e:
            if force:
                raise
            raise BranchDeletionRefusedError(
                branch,
                f"safe delete failed (likely unmerged): {e.message}. "
                "Re-run with --delete-branch-force if you really want to",
            ) from e

        self.reporter.info(f"Branch deleted: {branch}")
        return BranchOutcome.DELETED

    def list_worktrees(self) -> List[WorktreeInfo]:
        """All worktrees of the repository, main working tree first."""
        self._require_repository()
        return self.inspector.list_worktrees()
