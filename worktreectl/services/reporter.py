"""User-facing output for worktreectl.

Info lines go to stdout, warnings and errors to stderr, each with a fixed
leading tag. When a calling script captures a created path from stdout,
info lines can be routed to stderr so the path is the only payload.
"""

from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.text import Text

INFO_TAG = "Info: "
WARN_TAG = "Warn: "
ERROR_TAG = "Error:"


class Reporter:
    """Prints tagged messages and the path payload."""

    def __init__(
        self,
        stdout: Optional[Console] = None,
        stderr: Optional[Console] = None,
        info_to_stderr: bool = False,
    ):
        self.stdout = stdout or Console(highlight=False)
        self.stderr = stderr or Console(stderr=True, highlight=False)
        self.info_to_stderr = info_to_stderr

    def _emit(self, console: Console, tag: str, style: str, message: str) -> None:
        console.print(Text.assemble((tag, style), " ", message), soft_wrap=True)

    def info(self, message: str) -> None:
        console = self.stderr if self.info_to_stderr else self.stdout
        self._emit(console, INFO_TAG, "green", message)

    def warn(self, message: str) -> None:
        self._emit(self.stderr, WARN_TAG, "yellow", message)

    def error(self, message: str) -> None:
        self._emit(self.stderr, ERROR_TAG, "red", message)

    def payload(self, path: Union[str, Path]) -> None:
        """Print ``path`` alone on stdout, untagged and unwrapped."""
        self.stdout.print(Text(str(path)), soft_wrap=True)
