"""Turning picker results into selections or errors."""

from typing import List, Optional, TypeVar

from git_worktree_cli.exceptions import NothingSelectedError, OperationCancelled
from git_worktree_cli.models.workspace import SelectionResult, TerminalKey

T = TypeVar("T")


def require_selection(result: Optional[SelectionResult[T]], hint: str) -> List[T]:
    """
    Unwrap a picker result.

    Args:
        result: What the picker returned; None means there was nothing to pick from
        hint: What was being picked, used in error messages

    Returns:
        The selected items, never empty

    Raises:
        OperationCancelled: The user aborted the picker
        NothingSelectedError: Nothing to pick from, or accepted without a selection
    """
    if result is None:
        raise NothingSelectedError(hint, f"Nothing to select: no {hint.lower()} candidates")
    if result.terminal_key is TerminalKey.ABORT:
        raise OperationCancelled(hint)
    if not result.selected_items:
        raise NothingSelectedError(hint)
    return result.selected_items
