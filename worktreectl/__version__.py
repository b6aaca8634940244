"""Version information for worktreectl."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("worktreectl")
except PackageNotFoundError:
    # Running from a source checkout without an install
    __version__ = "0.0.0+unknown"
