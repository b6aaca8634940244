"""Shell integration for worktreectl.

A child process cannot change its parent shell's directory, so the shell
function runs the CLI with a hidden ``--cd-file`` and does the ``cd``
itself once the command succeeds.
"""

import shlex
import sys
from importlib import resources
from pathlib import Path
from typing import Union


def render_shell_init(function_name: str = "worktreectl") -> str:
    """Shell function source wrapping this interpreter's worktreectl."""
    exe = f"{shlex.quote(sys.executable)} -m worktreectl"
    with resources.files("worktreectl.shell").joinpath("worktreectl.sh").open("r", encoding="utf-8") as f:
        tpl = f.read()
    return tpl.replace("__NAME__", function_name).replace("__EXE__", exe)


def write_cd_target(cd_file: Union[str, Path], path: Union[str, Path]) -> None:
    """Record where the shell function should cd once the command exits."""
    Path(cd_file).write_text(str(path), encoding="utf-8")
