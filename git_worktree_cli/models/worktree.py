"""Worktree data models."""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class WorktreeInfo:
    """One entry of `git worktree list --porcelain`."""

    path: str
    branch_name: str
    commit_sha: str
    is_main: bool  # Is this the main working tree (or the bare hub)?
    is_orphaned: bool  # Directory missing?
    is_bare: bool = False

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "orphaned" if self.is_orphaned else "active"
        main_marker = " (main)" if self.is_main else ""
        branch = self.branch_name or "(detached)"
        return f"{branch} @ {self.path}{main_marker} [{status}]"


@dataclass(frozen=True)
class WorktreeRecord:
    """A linked worktree, ranked by the tip commit of its checked-out branch.

    last_commit_time is None for a worktree whose branch cannot be resolved
    (detached HEAD, deleted branch).
    """

    name: str
    path: str
    last_commit_time: Optional[int]

    @property
    def is_ranked(self) -> bool:
        return self.last_commit_time is not None


# worktree name -> checked-out branch (None when unresolved), enumeration order
WorktreeBranchMap = Dict[str, Optional[str]]
