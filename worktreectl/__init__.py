"""
worktreectl - safe Git worktree helper for multi-agent workflows
"""

from .__version__ import __version__
from .config import WorktreeConfig
from .core import WorktreeController

__all__ = ["WorktreeConfig", "WorktreeController", "__version__"]
