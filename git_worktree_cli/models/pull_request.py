"""Pull request models"""
from enum import Enum
from dataclasses import dataclass


class PRState(Enum):
    """State filter sent to the code-review API."""
    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class PRKind(Enum):
    """Client-side draft filter."""
    DRAFT = "draft"
    OPEN = "open"
    ALL = "all"

    def matches(self, is_draft: bool) -> bool:
        if self is PRKind.ALL:
            return True
        if self is PRKind.DRAFT:
            return is_draft
        return not is_draft


@dataclass(frozen=True)
class PullRequestCandidate:
    """A pull request as far as workspace creation cares."""
    number: int
    head_ref: str
    url: str
    is_draft: bool = False

    def __str__(self) -> str:
        return self.head_ref


@dataclass(frozen=True)
class RepoInfo:
    """Owner and name of a hosted repository."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
