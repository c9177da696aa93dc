"""Git-related services for git-worktree-cli."""

from .operations import GitOperations
from .branches import BranchRegistry
from .worktrees import WorktreeRegistry, normalize_workspace_name
from .topology import classify, open_repository, repo_root

__all__ = [
    "GitOperations",
    "BranchRegistry",
    "WorktreeRegistry",
    "normalize_workspace_name",
    "classify",
    "open_repository",
    "repo_root",
]
