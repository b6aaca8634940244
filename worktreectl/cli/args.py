"""Command-line argument parsing for worktreectl."""

import argparse
import re

from worktreectl.__version__ import __version__
from worktreectl.config import BRANCH_PREFIX_DEFAULT, DIR_PREFIX_DEFAULT, ROOT_ENV_VAR

_SHELL_FUNCTION_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


def non_empty(value: str) -> str:
    """argparse type rejecting empty option values."""
    if not value:
        raise argparse.ArgumentTypeError("requires a non-empty value")
    return value


def shell_function_name(value: str) -> str:
    if not _SHELL_FUNCTION_NAME.match(value):
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid shell function name")
    return value


def _add_root_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        type=non_empty,
        metavar="PATH",
        help=f"Root directory to place worktrees (default: ${ROOT_ENV_VAR}, else ../.worktrees/<repo>)",
    )


def _add_dir_prefix_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dir-prefix",
        type=non_empty,
        metavar="PREFIX",
        help=f"Directory prefix (default: {DIR_PREFIX_DEFAULT})",
    )


def add_create_arguments(parser: argparse.ArgumentParser) -> None:
    """Options of the create command, shared with the create-worktree wrapper."""
    parser.add_argument("name", help="Task name; sanitized for the directory, verbatim in the branch")
    parser.add_argument(
        "--from",
        dest="base_ref",
        type=non_empty,
        metavar="REF",
        help="Base ref to branch from (default: main/master/origin/*/HEAD auto-detect)",
    )
    parser.add_argument(
        "--branch",
        type=non_empty,
        metavar="NAME",
        help=f"Branch name to create/use (default: {BRANCH_PREFIX_DEFAULT}<name>)",
    )
    _add_dir_prefix_option(parser)
    parser.add_argument(
        "--branch-prefix",
        type=non_empty,
        metavar="PREFIX",
        help=f"Branch prefix (default: {BRANCH_PREFIX_DEFAULT})",
    )
    _add_root_option(parser)
    parser.add_argument(
        "--use-existing-branch",
        action="store_true",
        help="Use an existing local branch instead of creating a new one",
    )
    parser.add_argument(
        "--no-cd",
        action="store_true",
        help="Do not cd into the worktree even when the shell integration is active",
    )
    parser.add_argument("--fetch", action="store_true", help="Run 'git fetch --prune' before creating")


def add_global_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"worktreectl {__version__}")
    # Set by the shell integration; the target directory is written here
    parser.add_argument("--cd-file", help=argparse.SUPPRESS)


def build_parser() -> argparse.ArgumentParser:
    """Build the worktreectl argument parser."""
    parser = argparse.ArgumentParser(
        prog="worktreectl",
        description="Safe Git worktree helper for multi-agent workflows",
        epilog='Shell integration (auto-cd on create): eval "$(worktreectl shell-init)"',
    )
    add_global_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    create = subparsers.add_parser(
        "create", help="Create a new worktree (and usually a new branch)"
    )
    add_create_arguments(create)

    remove = subparsers.add_parser("remove", help="Remove a worktree (keeps branch by default)")
    remove.add_argument("name", help="Task name used when the worktree was created")
    _add_root_option(remove)
    _add_dir_prefix_option(remove)
    remove.add_argument(
        "--force", action="store_true", help="Force removal even with uncommitted changes"
    )
    remove.add_argument(
        "--delete-branch",
        action="store_true",
        help="ALSO delete the local branch after removal (explicit opt-in)",
    )
    remove.add_argument(
        "--delete-branch-force",
        action="store_true",
        help="Force delete the branch (-D). Use only when you are sure",
    )

    subparsers.add_parser("list", help="List worktrees")
    subparsers.add_parser("help", help="Show this help")

    shell_init = subparsers.add_parser(
        "shell-init", help="Print a shell function that can cd into new worktrees"
    )
    shell_init.add_argument(
        "--name",
        type=shell_function_name,
        default="worktreectl",
        help="Name of the shell function (default: worktreectl)",
    )

    return parser


def build_create_worktree_parser() -> argparse.ArgumentParser:
    """Parser for the backward-compatible create-worktree entry point."""
    parser = argparse.ArgumentParser(
        prog="create-worktree",
        description="Create a worktree (same as 'worktreectl create')",
    )
    add_global_arguments(parser)
    add_create_arguments(parser)
    return parser
