"""Mutating git operations for worktreectl"""

from pathlib import Path
from typing import Optional, Union

import git

from worktreectl.exceptions import ExternalToolError
from worktreectl.logging_config import get_logger

logger = get_logger(__name__)


def _command_error_message(error: git.exc.GitCommandError, command: str) -> str:
    """Render a GitCommandError the way git reported it."""
    stderr = (error.stderr if error.stderr else str(error)).strip()
    # GitPython wraps stderr as "\n  stderr: '...'" in some versions
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip().strip("'")
    status = error.status if error.status is not None else "unknown"

    if stderr:
        return f"{command} failed (exit {status}): {stderr}"
    return f"{command} failed with exit code {status}"


class GitOperations:
    """The git calls that change repository state.

    Each method issues exactly one git command. Failures are raised as
    ExternalToolError with git's own message; nothing is retried.
    """

    def __init__(self, repo_path: Union[str, Path]):
        """Initialize the service.

        Args:
            repo_path: Any directory inside the repository
        """
        self.repo_path = str(repo_path)

    def _get_repo(self) -> git.Repo:
        """Get a fresh git.Repo instance for each operation."""
        return git.Repo(self.repo_path, search_parent_directories=True)

    def _run(self, operation: str, subcommand: str, *args: str, target: Optional[str] = None,
             hint: Optional[str] = None) -> str:
        repo = self._get_repo()
        command = f"git {subcommand} {args[0]}" if subcommand == "worktree" else f"git {subcommand}"
        logger.debug(f"Running git {subcommand} {' '.join(args)}")
        try:
            return getattr(repo.git, subcommand)(*args)
        except git.exc.GitCommandError as e:
            message = _command_error_message(e, command)
            logger.debug(f"{operation} failed: {message}")
            raise ExternalToolError(operation, target=target, message=message, hint=hint) from e

    def fetch_prune(self) -> None:
        """Fetch the default remote and prune deleted remote-tracking refs."""
        self._run("fetch", "fetch", "--prune")
        logger.info("Fetched latest refs")

    def add_worktree_new_branch(self, path: Union[str, Path], branch: str, base_ref: str) -> None:
        """Create ``branch`` from ``base_ref`` and check it out at ``path``."""
        self._run(
            "add_worktree", "worktree",
            "add", "-b", branch, str(path), base_ref,
            target=str(path),
        )
        logger.info(f"Added worktree at {path} on new branch {branch} from {base_ref}")

    def add_worktree_existing_branch(self, path: Union[str, Path], branch: str) -> None:
        """Check out the existing ``branch`` at ``path``."""
        self._run(
            "add_worktree", "worktree",
            "add", str(path), branch,
            target=str(path),
        )
        logger.info(f"Added worktree at {path} on existing branch {branch}")

    def remove_worktree(self, path: Union[str, Path], force: bool = False) -> None:
        """Remove the worktree at ``path``.

        A non-forced failure usually means uncommitted changes; the error
        suggests --force instead of retrying with it.
        """
        args = ["remove"]
        if force:
            args.append("--force")
        args.append(str(path))

        hint = None if force else "re-run with --force to discard uncommitted changes"
        self._run("remove_worktree", "worktree", *args, target=str(path), hint=hint)
        logger.info(f"Removed worktree at {path}")

    def delete_branch(self, branch: str, force: bool = False) -> None:
        """Delete a local branch, ``-D`` when forced, ``-d`` otherwise."""
        self._run("delete_branch", "branch", "-D" if force else "-d", branch, target=branch)
        logger.info(f"Deleted branch {branch}")
