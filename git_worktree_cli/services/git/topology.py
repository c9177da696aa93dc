"""Repository topology detection."""

import os
from pathlib import Path

import git

from git_worktree_cli.exceptions import GitOperationError
from git_worktree_cli.models.workspace import RepoTopology
from git_worktree_cli.utils.logging import get_logger

logger = get_logger(__name__)


def open_repository(path: str) -> git.Repo:
    """Open the repository containing ``path``.

    Raises:
        GitOperationError: If no repository can be opened there
    """
    try:
        return git.Repo(path, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise GitOperationError("open", str(path), f"not a git repository ({e.__class__.__name__})")


def is_linked_worktree(repo: git.Repo) -> bool:
    """True when ``repo`` is a linked worktree rather than a main checkout or bare hub."""
    return Path(repo.git_dir).resolve() != Path(repo.common_dir).resolve()


def classify(repo: git.Repo) -> RepoTopology:
    """Tell bare hubs, linked worktrees and regular checkouts apart."""
    # A worktree of a bare hub shares the hub's core.bare, so check the link first
    if is_linked_worktree(repo):
        topology = RepoTopology.WORKTREE
    elif repo.bare:
        topology = RepoTopology.BARE
    else:
        topology = RepoTopology.REGULAR
    logger.debug(f"Repository {repo.git_dir} classified as {topology.value}")
    return topology


def repo_root(repo: git.Repo) -> str:
    """Directory new worktrees are created in.

    This is the parent of the shared git directory, so a bare hub at
    ``/proj/.bare`` and any of its worktrees ``/proj/<name>`` all resolve to
    ``/proj``.
    """
    return os.path.dirname(str(Path(repo.common_dir).resolve()))
