"""Custom exceptions for git-worktree-cli"""

from typing import Optional


class GitWorktreeCliError(Exception):
    """Base exception for all recoverable git-worktree-cli errors."""
    pass


class GitOperationError(GitWorktreeCliError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, target: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.target = target
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if target:
            error_msg += f" for '{target}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class FetchError(GitOperationError):
    """Exception raised when remote refs could not be synchronized."""

    def __init__(self, remote: str, message: Optional[str] = None):
        self.remote = remote
        super().__init__("fetch", remote, message)


class GitHubAPIError(GitWorktreeCliError):
    """Exception raised for errors in GitHub API operations."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        error_msg = f"GitHub API operation '{operation}' failed"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ResolutionError(GitWorktreeCliError):
    """A name or selection could not be resolved to a workspace."""
    pass


class NotFoundError(ResolutionError):
    """Exception raised when a branch or worktree is not found."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind.capitalize()} '{name}' not found")


class NothingSelectedError(ResolutionError):
    """Exception raised when there was nothing to pick, or nothing was picked."""

    def __init__(self, hint: str, message: Optional[str] = None):
        self.hint = hint
        super().__init__(message or f"No {hint.lower()} selected")


class InvalidWorkspaceNameError(GitWorktreeCliError):
    """Exception raised when a worktree name cannot be used as a directory."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid worktree name '{name}': {reason}")


class DirtyWorkspaceError(GitWorktreeCliError):
    """Exception raised when uncommitted changes block a branch switch."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Working tree at '{path}' has uncommitted changes")


class OperationCancelled(Exception):
    """The user aborted an interactive selection.

    Not a GitWorktreeCliError: cancellation is an outcome, not a fault.
    """

    def __init__(self, hint: Optional[str] = None):
        self.hint = hint
        message = "User chose to abort current operation"
        if hint:
            message += f" ({hint.lower()})"
        super().__init__(message)
