"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass


class BranchKind(Enum):
    """Which ref namespace a branch lives in."""
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class BranchInfo:
    """A branch and the commit it pointed at when it was read."""
    name: str
    head: str
