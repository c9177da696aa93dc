"""Formatting utilities for git-worktree-cli.

- directives: the shell lines handed back to the invoking shell
- labels: picker item labels
- notices: rich markup for the pull request report
"""

from .directives import cd_directive, checkout_directive
from .labels import branch_label, pull_request_label, worktree_label
from .notices import format_pr_notice, format_batch_failures

__all__ = [
    "cd_directive",
    "checkout_directive",
    "branch_label",
    "pull_request_label",
    "worktree_label",
    "format_pr_notice",
    "format_batch_failures",
]
