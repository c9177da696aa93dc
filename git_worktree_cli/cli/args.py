"""Command-line argument parsing for git-worktree-cli."""

import argparse
from typing import List, Optional

from git_worktree_cli.__version__ import __version__
from git_worktree_cli.constants import DEFAULT_REMOTE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-worktree-cli",
        description="Switch between and create branches or worktrees, including ones for open pull requests",
        epilog="Prints a shell directive (cd ... / git checkout ...) for your shell to evaluate. "
        "Set WORKTREE_CLI_GITHUB_TOKEN or GITHUB_TOKEN for authenticated GitHub access.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--debug", action="store_true", help="Show debug information and write a log file")
    parser.add_argument("--version", action="version", version=f"git-worktree-cli {__version__}")
    parser.add_argument(
        "--remote",
        default=DEFAULT_REMOTE,
        help=f"Remote to fetch from and read the GitHub repository from (default: {DEFAULT_REMOTE})",
    )
    parser.add_argument(
        "-C",
        dest="path",
        default=".",
        metavar="PATH",
        help="Run as if started in PATH",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Create a branch or worktree unless it exists")
    add_parser.add_argument("name", help="Branch name; slashes become underscores in worktree names")

    change_parser = subparsers.add_parser(
        "change-branch", aliases=["cb"], help="Switch to an existing branch or worktree"
    )
    change_parser.add_argument("branch", nargs="?", help="Local branch to switch to")
    change_parser.add_argument("-w", "--worktree", help="Worktree to switch to (bare/worktree repositories)")
    change_parser.add_argument("-q", "--query", help="Pre-filled picker query")

    pr_parser = subparsers.add_parser(
        "add-from-pr", aliases=["pr"], help="Create workspaces for pull requests of the origin repository"
    )
    pr_parser.add_argument(
        "--state",
        choices=["open", "closed", "all"],
        default="open",
        help="Pull request state to list (default: open)",
    )
    pr_parser.add_argument(
        "--kind",
        choices=["draft", "open", "all"],
        default="all",
        help="Only drafts, only ready-for-review, or both (default: all)",
    )
    pr_parser.add_argument(
        "--select",
        choices=["all", "single", "multiple"],
        default="all",
        help="Take every pull request, or pick one or several interactively (default: all)",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    if args.command == "cb":
        args.command = "change-branch"
    elif args.command == "pr":
        args.command = "add-from-pr"
    return args
