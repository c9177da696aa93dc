"""Interactive UI for git-worktree-cli."""

from .fuzzy_selector import FuzzyPickerApp, FuzzySelector
from .selection import require_selection

__all__ = ["FuzzyPickerApp", "FuzzySelector", "require_selection"]
