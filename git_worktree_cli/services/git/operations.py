"""Git operations service"""

import os
import git
from threading import Lock
from typing import Dict, Optional

from git_worktree_cli.constants import DEFAULT_REMOTE
from git_worktree_cli.exceptions import FetchError, GitOperationError
from git_worktree_cli.utils.logging import get_logger

logger = get_logger(__name__)

# One fetch at a time per repository: concurrent fetches race on ref locks
_fetch_locks: Dict[str, Lock] = {}
_fetch_locks_guard = Lock()


def _fetch_lock(common_dir: str) -> Lock:
    key = os.path.realpath(common_dir)
    with _fetch_locks_guard:
        return _fetch_locks.setdefault(key, Lock())


def describe_git_error(e: git.exc.GitCommandError) -> str:
    """Build a one-line description of a failed git command."""
    stderr = (e.stderr if hasattr(e, "stderr") and e.stderr else str(e)).strip()
    status = e.status if hasattr(e, "status") else "unknown"

    if stderr:
        return f"exit {status}: {stderr}"
    return f"exit code {status}"


class GitOperations:
    """Repository-wide git operations: remote sync and working tree state."""

    def __init__(self, repo_path: str, remote_name: str = DEFAULT_REMOTE):
        """Initialize the service.

        Args:
            repo_path: Path to the git repository (string path, not repo object)
            remote_name: Remote to synchronize with
        """
        self.repo_path = repo_path
        self.remote_name = remote_name

    def _get_repo(self):
        """Get a thread-safe git.Repo instance.

        Creates a new repo instance for each call to ensure thread safety.
        GitPython repos are lightweight - they don't clone, just open the existing repo.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    @property
    def fetch_refspec(self) -> str:
        return f"+refs/heads/*:refs/remotes/{self.remote_name}/*"

    def fetch_all(self) -> None:
        """Fetch every branch of the remote into its remote-tracking namespace.

        Authentication is whatever the git executable is set up with
        (SSH agent, credential helpers, GIT_SSH_COMMAND).

        Raises:
            FetchError: If the remote is missing or the fetch fails
        """
        repo = self._get_repo()
        try:
            remote = repo.remote(self.remote_name)
        except ValueError:
            raise FetchError(self.remote_name, "remote is not configured")

        try:
            with _fetch_lock(repo.common_dir):
                remote.fetch(self.fetch_refspec)
            logger.debug(f"Fetched {self.fetch_refspec} from {self.remote_name}")
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error(e)
            logger.error(f"Failed to fetch from {self.remote_name}: {error_msg}")
            raise FetchError(self.remote_name, error_msg)

    def is_branch_clear(self) -> bool:
        """Check that no tracked file is modified or staged.

        Untracked files do not count.
        """
        repo = self._get_repo()
        try:
            dirty = repo.is_dirty(index=True, working_tree=True, untracked_files=False)
        except git.exc.GitCommandError as e:
            raise GitOperationError("status", self.repo_path, describe_git_error(e))

        if dirty:
            for item in repo.index.diff(None):
                logger.debug(f"Modified: {item.a_path}")
            try:
                for item in repo.index.diff("HEAD"):
                    logger.debug(f"Staged: {item.a_path}")
            except git.exc.BadName:
                pass  # no commits yet
        return not dirty

    def head_commit(self) -> Optional[str]:
        """Hex sha of HEAD, or None for a repository without commits."""
        repo = self._get_repo()
        try:
            return repo.head.commit.hexsha
        except ValueError:
            return None

    def remote_url(self) -> str:
        """URL of the configured remote.

        Raises:
            GitOperationError: If the remote is not configured
        """
        repo = self._get_repo()
        try:
            return repo.remote(self.remote_name).url
        except ValueError:
            raise GitOperationError("remote", self.remote_name, "remote is not configured")
