"""Command-line interface for worktreectl"""

import os
import sys
from functools import partial

import git
from rich.console import Console

from worktreectl.cli.args import build_create_worktree_parser, build_parser
from worktreectl.config import WorktreeConfig
from worktreectl.core import WorktreeController
from worktreectl.exceptions import WorktreeCtlError
from worktreectl.logging_config import get_logger, setup_logging
from worktreectl.models.request import WorktreeRequest
from worktreectl.services.display_service import DisplayService
from worktreectl.services.reporter import Reporter
from worktreectl.shell import render_shell_init, write_cd_target

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

logger = get_logger(__name__)


def _create(controller: WorktreeController, config: WorktreeConfig, args) -> None:
    request = WorktreeRequest.from_config(
        config,
        task_name=args.name,
        base_ref=args.base_ref,
        explicit_branch=args.branch,
        use_existing_branch=args.use_existing_branch,
        auto_change_directory=not args.no_cd,
        fetch_first=args.fetch,
    )
    controller.create(request)


def _remove(controller: WorktreeController, config: WorktreeConfig, args) -> None:
    request = WorktreeRequest.from_config(
        config,
        task_name=args.name,
        force=args.force,
        delete_branch=args.delete_branch,
        delete_branch_force=args.delete_branch_force,
    )
    controller.remove(request)


def run(args, parser) -> int:
    """Execute an already parsed command line."""
    setup_logging(verbose=args.verbose, debug=args.debug)

    command = args.command or "help"
    if command == "help":
        parser.print_help()
        return EXIT_OK
    if command == "shell-init":
        sys.stdout.write(render_shell_init(args.name))
        return EXIT_OK

    # Report-by-value create: keep stdout for the path alone
    reports_by_value = command == "create" and (args.cd_file is None or args.no_cd)
    reporter = Reporter(info_to_stderr=reports_by_value)

    try:
        config = WorktreeConfig.from_sources(
            dir_prefix=getattr(args, "dir_prefix", None),
            branch_prefix=getattr(args, "branch_prefix", None),
            root=getattr(args, "root", None),
            verbose=args.verbose,
            debug=args.debug,
        )
        if args.debug:
            logger.debug(f"Configuration: {config.to_dict()}")

        navigator = partial(write_cd_target, args.cd_file) if args.cd_file else None
        controller = WorktreeController(
            os.getcwd(),
            reporter=reporter,
            can_mutate_caller_context=args.cd_file is not None,
            navigator=navigator,
        )

        if command == "create":
            _create(controller, config, args)
        elif command == "remove":
            _remove(controller, config, args)
        elif command == "list":
            DisplayService().display_worktree_table(controller.list_worktrees())

        return EXIT_OK
    except KeyboardInterrupt:
        reporter.warn("Operation cancelled by user")
        return EXIT_INTERRUPTED
    except (WorktreeCtlError, git.exc.GitError) as e:
        reporter.error(str(e).strip())
        if args.debug:
            Console(stderr=True).print_exception()
        return EXIT_FAILURE


def main(argv=None) -> int:
    """Main entry point for worktreectl."""
    parser = build_parser()
    return run(parser.parse_args(argv), parser)


def create_worktree_main(argv=None) -> int:
    """Backward-compatible ``create-worktree <name> [options]`` entry point."""
    parser = build_create_worktree_parser()
    args = parser.parse_args(argv)
    args.command = "create"
    return run(args, parser)


if __name__ == "__main__":
    sys.exit(main())
