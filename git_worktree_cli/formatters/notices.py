"""Rich markup for the pull request batch report."""

from typing import List

from rich.markup import escape

from git_worktree_cli.models.pull_request import PullRequestCandidate
from git_worktree_cli.models.workspace import AddResult, MaterializeResult


def format_pr_notice(pr: PullRequestCandidate, result: AddResult) -> str:
    """
    Format the notice printed for a newly added pull request workspace.

    Args:
        pr: The pull request the workspace was created for
        result: Outcome of the creation

    Returns:
        Multi-line string with Rich markup
    """
    draft = " [dim](draft)[/dim]" if pr.is_draft else ""
    return (
        f"[green]Added workspace for PR #{pr.number}[/green]{draft}\n"
        f"  branch: {escape(pr.head_ref)}\n"
        f"  url:    [link={pr.url}]{escape(pr.url)}[/link]\n"
        f"  goto:   [bold]{escape(result.directive)}[/bold]"
    )


def format_batch_failures(failures: List[MaterializeResult]) -> str:
    """One line per failed pull request task."""
    lines = [f"Failed to add {len(failures)} pull request workspace(s):"]
    for failure in failures:
        pr = failure.pull_request
        lines.append(f"  PR #{pr.number} ({pr.head_ref}): {failure.error}")
    return "\n".join(lines)
