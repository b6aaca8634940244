"""Custom exceptions for worktreectl"""

from pathlib import Path
from typing import Optional, Union


class WorktreeCtlError(Exception):
    """Base exception for all worktreectl errors."""
    pass


class RepositoryEnvironmentError(WorktreeCtlError):
    """The process is not running somewhere worktreectl can operate."""
    pass


class NotInRepositoryError(RepositoryEnvironmentError):
    """Exception raised when the working directory is not inside a Git repository."""

    def __init__(self, location: Optional[Union[str, Path]] = None):
        self.location = location
        message = "Not inside a Git repository"
        if location:
            message += f": {location}"
        super().__init__(message)


class InputError(WorktreeCtlError):
    """Exception raised for unusable user input."""
    pass


class EmptyNameError(InputError):
    """Exception raised when a task name sanitizes to nothing."""

    def __init__(self, name: str):
        self.name = name
        if name:
            message = f"Name '{name}' becomes empty after sanitizing for directory use"
        else:
            message = "A non-empty task name is required"
        super().__init__(message)


class InvalidBranchNameError(InputError):
    """Exception raised when git rejects a branch name."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Invalid branch name: '{branch}'")


class RefError(WorktreeCtlError):
    """Exception raised for refs that do not resolve."""
    pass


class BaseRefNotFoundError(RefError):
    """Exception raised when the base ref is missing or not a commit."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"Base ref '{ref}' not found (or not a commit)")


class CollisionError(WorktreeCtlError):
    """Exception raised when a create would clash with existing state."""
    pass


class PathExistsError(CollisionError):
    """Exception raised when the worktree path is already taken."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Path already exists: {path}")


class BranchAlreadyExistsError(CollisionError):
    """Exception raised when a new branch would overwrite an existing one."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"Local branch '{branch}' already exists. "
            "Use --use-existing-branch, or pick another --branch"
        )


class BranchInUseError(CollisionError):
    """Exception raised when a branch is already checked out in another worktree."""

    def __init__(self, branch: str, path: Union[str, Path]):
        self.branch = branch
        self.path = Path(path)
        super().__init__(
            f"Branch '{branch}' is already checked out in worktree {path}. "
            "Choose another branch or remove the other worktree first"
        )


class NotFoundError(WorktreeCtlError):
    """Exception raised when something that must exist does not."""
    pass


class BranchNotFoundError(NotFoundError):
    """Exception raised when a branch is not found."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"Branch '{branch}' does not exist locally; cannot use existing branch"
        )


class PathNotFoundError(NotFoundError):
    """Exception raised when a worktree path is missing on removal."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Worktree path not found: {path}")


class ExternalToolError(WorktreeCtlError):
    """Exception raised when a git call itself fails."""

    def __init__(
        self,
        operation: str,
        target: Optional[str] = None,
        message: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.operation = operation
        self.target = target
        self.message = message
        self.hint = hint

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"
        if hint:
            error_msg += f" ({hint})"

        super().__init__(error_msg)


class PolicyRefusalError(WorktreeCtlError):
    """Exception raised when worktreectl declines an otherwise possible action."""
    pass


class BranchDeletionRefusedError(PolicyRefusalError):
    """Exception raised when a branch cannot be safely deleted."""

    def __init__(self, branch: str, reason: str):
        self.branch = branch
        self.reason = reason
        super().__init__(f"Refusing to delete branch '{branch}': {reason}")
