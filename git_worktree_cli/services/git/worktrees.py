"""Worktree registry service for git-worktree-cli."""

import git
import os
from typing import Optional, Dict, Any, List, Tuple

from git_worktree_cli.constants import (
    DEFAULT_REMOTE,
    WORKTREE_NAME_REPLACEMENT,
    WORKTREE_NAME_SEPARATOR,
)
from git_worktree_cli.exceptions import GitOperationError, InvalidWorkspaceNameError, NotFoundError
from git_worktree_cli.models.worktree import WorktreeBranchMap, WorktreeInfo, WorktreeRecord
from git_worktree_cli.services.git.branches import BranchRegistry
from git_worktree_cli.services.git.operations import describe_git_error
from git_worktree_cli.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_workspace_name(name: str) -> str:
    """Turn a branch name into a flat worktree directory name."""
    return name.replace(WORKTREE_NAME_SEPARATOR, WORKTREE_NAME_REPLACEMENT)


def validate_worktree_name(name: str) -> str:
    """Normalize ``name`` and reject what cannot be a single directory.

    Raises:
        InvalidWorkspaceNameError: For empty names, ``.``/``..`` and names that
            still contain a path separator after normalization
    """
    normalized = normalize_workspace_name(name.strip())
    if not normalized:
        raise InvalidWorkspaceNameError(name, "name is empty")
    if normalized in (".", ".."):
        raise InvalidWorkspaceNameError(name, "name is a relative path")
    for separator in (os.sep, os.altsep, "\\"):
        if separator and separator in normalized:
            raise InvalidWorkspaceNameError(name, f"name contains path separator '{separator}'")
    return normalized


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse the output of ``git worktree list --porcelain``.

    Format::

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name
        (blank line between worktrees)
    """
    worktree_list: List[WorktreeInfo] = []
    current_worktree: Dict[str, Any] = {}

    def flush():
        path = current_worktree.get("path", "")
        if path:  # Only add if we have a path
            worktree_list.append(
                WorktreeInfo(
                    path=path,
                    branch_name=current_worktree.get("branch", ""),
                    commit_sha=current_worktree.get("HEAD", ""),
                    is_main=current_worktree.get("is_main", False),
                    is_orphaned=not os.path.exists(path),
                    is_bare=current_worktree.get("bare", False),
                )
            )

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            # Empty line marks end of worktree entry
            if current_worktree:
                flush()
                current_worktree = {}
            continue

        if line.startswith("worktree "):
            current_worktree["path"] = line.split(" ", 1)[1]
            # First worktree in list is always the main one
            current_worktree["is_main"] = not worktree_list
        elif line.startswith("HEAD "):
            current_worktree["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current_worktree["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current_worktree["branch"] = ""
        elif line == "bare":
            current_worktree["bare"] = True
        elif line.startswith("detached"):
            current_worktree["branch"] = ""

    # Handle last entry if no trailing blank line
    if current_worktree:
        flush()

    return worktree_list


class WorktreeRegistry:
    """Service for enumerating and resolving linked worktrees."""

    def __init__(self, repo_path: str, remote_name: str = DEFAULT_REMOTE):
        """Initialize the worktree registry.

        Args:
            repo_path: Path to the git repository (bare hub or any of its worktrees)
            remote_name: Remote name, passed on to the branch registry
        """
        self.repo_path = repo_path
        self.branches = BranchRegistry(repo_path, remote_name)

    def _get_repo(self):
        """Get a thread-safe git.Repo instance.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    def get_worktree_info(self) -> List[WorktreeInfo]:
        """Linked worktrees in the order git lists them (main worktree excluded).

        Raises:
            GitOperationError: If ``git worktree list`` fails
        """
        repo = self._get_repo()
        try:
            output = repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree list", self.repo_path, describe_git_error(e))

        worktrees = [wt for wt in parse_worktree_porcelain(output) if not wt.is_main]
        logger.debug(f"Found {len(worktrees)} linked worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    @staticmethod
    def worktree_name(info: WorktreeInfo) -> str:
        return os.path.basename(os.path.normpath(info.path))

    def _find(self, name: str) -> Optional[WorktreeInfo]:
        target = normalize_workspace_name(name)
        for info in self.get_worktree_info():
            if self.worktree_name(info) == target:
                return info
        return None

    def branch_of(self, worktree_name: str) -> str:
        """Branch checked out in a worktree, read from the worktree itself.

        Raises:
            NotFoundError: If the worktree is unknown, its directory is
                missing, or its HEAD is detached
        """
        info = self._find(worktree_name)
        if info is None:
            raise NotFoundError("worktree", worktree_name)
        return self._read_branch(info)

    def _read_branch(self, info: WorktreeInfo) -> str:
        worktree_name = self.worktree_name(info)
        if info.is_orphaned:
            raise NotFoundError("worktree directory", info.path)

        try:
            worktree_repo = git.Repo(info.path)
            if worktree_repo.head.is_detached:
                raise NotFoundError("branch of worktree", worktree_name)
            return worktree_repo.active_branch.name
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError, TypeError, ValueError) as e:
            logger.debug(f"Could not read HEAD of worktree {worktree_name}: {e}")
            raise NotFoundError("branch of worktree", worktree_name)

    def _branch_or_none(self, info: WorktreeInfo) -> Optional[str]:
        try:
            return self._read_branch(info)
        except NotFoundError:
            return None

    def _ranked_entries(self, include_unranked: bool) -> List[Tuple[WorktreeRecord, Optional[str]]]:
        ranked = []
        unranked = []
        for info in self.get_worktree_info():
            name = self.worktree_name(info)
            branch = self._branch_or_none(info)
            commit_time = self.branches.commit_time(branch) if branch else None
            record = WorktreeRecord(name=name, path=info.path, last_commit_time=commit_time)
            if record.is_ranked:
                ranked.append((record, branch))
            else:
                logger.debug(f"Worktree {name} has no resolvable branch, leaving it unranked")
                unranked.append((record, branch))

        ranked.sort(key=lambda entry: entry[0].last_commit_time, reverse=True)
        if include_unranked:
            return ranked + unranked
        return ranked

    def list(self, include_unranked: bool = False) -> List[WorktreeRecord]:
        """List worktrees, most recent branch tip commit first.

        Worktrees whose branch cannot be resolved have no rank. They are left
        out unless ``include_unranked`` is set, in which case they follow the
        ranked ones in enumeration order.
        """
        return [record for record, _ in self._ranked_entries(include_unranked)]

    def branch_map(self, include_unranked: bool = False) -> WorktreeBranchMap:
        """Worktree name -> checked-out branch, in ``list()`` order."""
        worktree_branches: WorktreeBranchMap = {}
        for record, branch in self._ranked_entries(include_unranked):
            worktree_branches[record.name] = branch
        return worktree_branches

    def path_of(self, worktree_name: str) -> str:
        """Filesystem path of a worktree, matched on the normalized name.

        Raises:
            NotFoundError: If no worktree has that name
        """
        info = self._find(worktree_name)
        if info is None:
            raise NotFoundError("worktree", normalize_workspace_name(worktree_name))
        return info.path

    def exists_by_name(self, worktree_name: str) -> bool:
        """Check for a worktree by (normalized) name. Errors count as "no"."""
        try:
            return self._find(worktree_name) is not None
        except Exception as e:
            logger.debug(f"Could not list worktrees: {e}")
            return False

    def worktree_for_branch(self, branch_name: str) -> str:
        """Name of the first worktree that has ``branch_name`` checked out.

        Raises:
            NotFoundError: If no worktree has it
        """
        for info in self.get_worktree_info():
            name = self.worktree_name(info)
            if self._branch_or_none(info) == branch_name:
                return name
        raise NotFoundError("worktree for branch", branch_name)

    def exists_by_branch(self, branch_name: str) -> bool:
        """Check whether any worktree has ``branch_name`` checked out. Errors count as "no"."""
        try:
            self.worktree_for_branch(branch_name)
            return True
        except NotFoundError:
            return False
        except Exception as e:
            logger.debug(f"Could not scan worktrees for {branch_name}: {e}")
            return False
