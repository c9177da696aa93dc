"""Data models for git-worktree-cli."""

from .branch import BranchInfo, BranchKind
from .worktree import WorktreeInfo, WorktreeRecord, WorktreeBranchMap
from .pull_request import PRKind, PRState, PullRequestCandidate, RepoInfo
from .workspace import (
    AddOutcome,
    AddResult,
    BatchReport,
    MaterializeResult,
    RepoTopology,
    SelectionMode,
    SelectionResult,
    TerminalKey,
)

__all__ = [
    "BranchInfo",
    "BranchKind",
    "WorktreeInfo",
    "WorktreeRecord",
    "WorktreeBranchMap",
    "PRKind",
    "PRState",
    "PullRequestCandidate",
    "RepoInfo",
    "AddOutcome",
    "AddResult",
    "BatchReport",
    "MaterializeResult",
    "RepoTopology",
    "SelectionMode",
    "SelectionResult",
    "TerminalKey",
]
