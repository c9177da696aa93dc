"""Labels shown for picker items."""

from typing import Optional

from git_worktree_cli.constants import BRANCH_ICON, DETACHED_LABEL
from git_worktree_cli.models.branch import BranchInfo
from git_worktree_cli.models.pull_request import PullRequestCandidate


def worktree_label(worktree_name: str, branch_name: Optional[str]) -> str:
    """
    Label a worktree with the branch checked out in it.

    Args:
        worktree_name: Directory name of the worktree
        branch_name: Checked-out branch, None when it cannot be resolved

    Returns:
        The bare name when it equals the branch, else ``name -> <icon>branch``
    """
    if branch_name is None:
        return f"{worktree_name} {DETACHED_LABEL}"
    if worktree_name == branch_name:
        return worktree_name
    return f"{worktree_name} -> {BRANCH_ICON}{branch_name}"


def branch_label(branch: BranchInfo) -> str:
    return branch.name


def pull_request_label(pr: PullRequestCandidate) -> str:
    return pr.head_ref
