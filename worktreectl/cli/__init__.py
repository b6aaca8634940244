"""Command-line interface for worktreectl.

This package provides the CLI entry points and argument parsing.
"""

from .main import create_worktree_main, main

__all__ = ["create_worktree_main", "main"]
