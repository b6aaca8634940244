"""Configuration handling for worktreectl"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from worktreectl.exceptions import InputError

DIR_PREFIX_DEFAULT = "worktree_"
BRANCH_PREFIX_DEFAULT = "agent/"
ROOT_ENV_VAR = "WORKTREE_ROOT"


@dataclass
class WorktreeConfig:
    """Per-invocation configuration for worktreectl with validation.

    Built once from layered sources (explicit flag > environment >
    computed default) and passed down explicitly. ``root`` stays ``None``
    when neither a flag nor the environment supplies one; the controller
    then derives the default from the repository location.
    """

    dir_prefix: str = DIR_PREFIX_DEFAULT
    branch_prefix: str = BRANCH_PREFIX_DEFAULT
    root: Optional[str] = None

    # Execution modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_prefix("dir_prefix", self.dir_prefix)
        self._validate_prefix("branch_prefix", self.branch_prefix)
        self._validate_root()

    @staticmethod
    def _validate_prefix(field_name: str, value: str):
        """Validate a prefix is a non-empty string."""
        if not isinstance(value, str) or not value:
            raise InputError(f"{field_name} requires a non-empty value")

    def _validate_root(self):
        """Normalise an empty root to 'not configured'."""
        if self.root is not None and not self.root.strip():
            self.root = None

    @classmethod
    def from_sources(
        cls,
        dir_prefix: Optional[str] = None,
        branch_prefix: Optional[str] = None,
        root: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        verbose: bool = False,
        debug: bool = False,
    ) -> "WorktreeConfig":
        """Create a config, letting explicit values win over the environment.

        Args:
            dir_prefix: Directory prefix from the command line, if given
            branch_prefix: Branch prefix from the command line, if given
            root: Worktree root from the command line, if given
            environ: Environment mapping (defaults to ``os.environ``)
            verbose: Verbose output flag
            debug: Debug output flag
        """
        env = os.environ if environ is None else environ
        if root is None:
            root = env.get(ROOT_ENV_VAR) or None

        return cls(
            dir_prefix=DIR_PREFIX_DEFAULT if dir_prefix is None else dir_prefix,
            branch_prefix=BRANCH_PREFIX_DEFAULT if branch_prefix is None else branch_prefix,
            root=root,
            verbose=verbose,
            debug=debug,
        )

    def to_dict(self) -> dict:
        """Convert config to dictionary for debug output."""
        return {
            "dir_prefix": self.dir_prefix,
            "branch_prefix": self.branch_prefix,
            "root": self.root,
            "verbose": self.verbose,
            "debug": self.debug,
        }
