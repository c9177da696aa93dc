"""Workspace resolution models"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from git_worktree_cli.models.pull_request import PullRequestCandidate

T = TypeVar("T")


class RepoTopology(Enum):
    """Shape of the repository the command runs in."""
    BARE = "bare"
    WORKTREE = "worktree"
    REGULAR = "regular"

    @property
    def uses_worktrees(self) -> bool:
        """Bare hubs and linked worktrees navigate by worktree, regular checkouts by branch."""
        return self is not RepoTopology.REGULAR


class AddOutcome(Enum):
    """Whether a requested workspace had to be created."""
    EXISTED = "existed"
    ADDED = "added"


@dataclass(frozen=True)
class AddResult:
    """Outcome of a create request: the shell directive and what happened."""
    directive: str
    outcome: AddOutcome
    name: str

    @property
    def added(self) -> bool:
        return self.outcome is AddOutcome.ADDED


class SelectionMode(Enum):
    """How pull requests are picked before materializing them."""
    ALL = "all"
    SINGLE = "single"
    MULTIPLE = "multiple"


class TerminalKey(Enum):
    """Key that ended a picker session."""
    ACCEPT = "accept"
    ABORT = "abort"


@dataclass
class SelectionResult(Generic[T]):
    """What the picker returned."""
    selected_items: List[T]
    terminal_key: TerminalKey

    @property
    def aborted(self) -> bool:
        return self.terminal_key is TerminalKey.ABORT


@dataclass
class MaterializeResult:
    """Result of one concurrent pull request task."""
    pull_request: PullRequestCandidate
    result: Optional[AddResult] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchReport:
    """All task results of a pull request batch."""
    results: List[MaterializeResult] = field(default_factory=list)

    @property
    def added(self) -> List[MaterializeResult]:
        return [r for r in self.results if r.ok and r.result is not None and r.result.added]

    @property
    def existed(self) -> List[MaterializeResult]:
        return [r for r in self.results if r.ok and r.result is not None and not r.result.added]

    @property
    def failures(self) -> List[MaterializeResult]:
        return [r for r in self.results if not r.ok]
