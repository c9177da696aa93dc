"""Command-line interface for git-worktree-cli"""

import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_worktree_cli.cli.args import parse_args
from git_worktree_cli.config import Config
from git_worktree_cli.constants import EXIT_CANCELLED, EXIT_ERROR, EXIT_OK, EXIT_SOFTWARE
from git_worktree_cli.core import WorkspaceManager
from git_worktree_cli.exceptions import DirtyWorkspaceError, GitWorktreeCliError, OperationCancelled
from git_worktree_cli.utils.logging import get_logger, setup_logging

# stdout is reserved for the directive the shell evaluates
console = Console(stderr=True)
logger = get_logger(__name__)


def build_config(parsed_args) -> Config:
    options = {
        "remote_name": parsed_args.remote,
        "verbose": parsed_args.verbose,
        "debug": parsed_args.debug,
    }
    if parsed_args.command == "add-from-pr":
        options["pr_state"] = parsed_args.state
        options["pr_kind"] = parsed_args.kind
        options["selection_mode"] = parsed_args.select
    return Config(**options)


def run_command(manager: WorkspaceManager, parsed_args) -> None:
    if parsed_args.command == "add":
        print(manager.add(parsed_args.name).directive)
    elif parsed_args.command == "change-branch":
        print(manager.change(
            branch=parsed_args.branch,
            worktree=parsed_args.worktree,
            query=parsed_args.query,
        ))
    elif parsed_args.command == "add-from-pr":
        report = manager.add_from_pull_requests()
        if not report.added:
            console.print("[blue]ℹ No new workspaces were added[/blue]")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)
    logger.debug(f"Running {parsed_args.command} in {parsed_args.path}")

    try:
        config = build_config(parsed_args)
        if parsed_args.debug:
            console.print("[yellow]Configuration:[/yellow]")
            for key, value in config.to_dict().items():
                if key == "github_token" and value:
                    value = "***"
                console.print(f"  {key}: {value}")

        manager = WorkspaceManager(parsed_args.path, config)
        try:
            run_command(manager, parsed_args)
        finally:
            manager.close()
        return EXIT_OK
    except (KeyboardInterrupt, OperationCancelled):
        console.print("[yellow]Operation cancelled by user[/yellow]")
        return EXIT_CANCELLED
    except DirtyWorkspaceError as e:
        console.print(f"[yellow]⚠ {escape(str(e))}. Commit or stash them before switching branches.[/yellow]", soft_wrap=True)
        return EXIT_SOFTWARE
    except (GitWorktreeCliError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        if parsed_args.debug:
            console.print_exception()
        return EXIT_ERROR


def main_entry() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
