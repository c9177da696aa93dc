"""Idempotent creation of branches and worktrees."""

import os

import git

from git_worktree_cli.constants import DEFAULT_REMOTE
from git_worktree_cli.exceptions import GitOperationError
from git_worktree_cli.formatters.directives import cd_directive, checkout_directive
from git_worktree_cli.models.branch import BranchKind
from git_worktree_cli.models.workspace import AddOutcome, AddResult, RepoTopology
from git_worktree_cli.services.git.branches import BranchRegistry
from git_worktree_cli.services.git.operations import GitOperations, describe_git_error
from git_worktree_cli.services.git.topology import repo_root
from git_worktree_cli.services.git.worktrees import WorktreeRegistry, validate_worktree_name
from git_worktree_cli.utils.logging import get_logger

logger = get_logger(__name__)


class WorkspaceCreator:
    """Create the workspace for a name unless it already exists.

    Every call opens its own repository handle, so one creator per thread is
    all the isolation concurrent callers need.
    """

    def __init__(self, repo_path: str, remote_name: str = DEFAULT_REMOTE):
        """Initialize the creator.

        Args:
            repo_path: Path to the git repository
            remote_name: Remote to sync from and to look for same-named branches on
        """
        self.repo_path = repo_path
        self.remote_name = remote_name
        self.git_ops = GitOperations(repo_path, remote_name)
        self.branches = BranchRegistry(repo_path, remote_name)
        self.worktrees = WorktreeRegistry(repo_path, remote_name)

    def _get_repo(self):
        return git.Repo(self.repo_path)

    def add(self, name: str, topology: RepoTopology) -> AddResult:
        """Create a worktree or a branch, whichever the topology navigates by."""
        if topology.uses_worktrees:
            return self.add_worktree(name)
        return self.add_branch(name)

    def add_worktree(self, name: str) -> AddResult:
        """
        Make sure a worktree exists for ``name``.

        The worktree directory is the normalized name (``feature/x`` becomes
        ``feature_x``) directly under the repository root. A same-named
        remote branch seeds a local branch at the same commit; an existing
        local branch is checked out as is; otherwise a new branch is started
        from HEAD.

        Returns:
            ``cd`` directive to the worktree, EXISTED or ADDED

        Raises:
            InvalidWorkspaceNameError: Before anything else, for unusable names
            FetchError: If remote refs cannot be synchronized
            GitOperationError: If git refuses to create the branch or worktree
        """
        worktree_name = validate_worktree_name(name)
        branch_name = name.strip()

        self.git_ops.fetch_all()

        if self.worktrees.exists_by_name(worktree_name):
            logger.info(f"Worktree with name `{worktree_name}` already exists")
            path = self.worktrees.path_of(worktree_name)
            return AddResult(cd_directive(path), AddOutcome.EXISTED, worktree_name)

        repo = self._get_repo()
        worktree_path = os.path.join(repo_root(repo), worktree_name)
        if os.path.exists(worktree_path):
            raise GitOperationError("worktree add", worktree_name, f"'{worktree_path}' already exists and is not a worktree")

        remote_branch = self.branches.resolve(branch_name, BranchKind.REMOTE)

        try:
            if self.branches.exists(branch_name, BranchKind.LOCAL):
                logger.debug(f"Checking out existing branch {branch_name} in {worktree_path}")
                repo.git.worktree("add", worktree_path, branch_name)
            elif remote_branch is not None:
                logger.debug(f"Anchoring {branch_name} at {self.remote_name}/{branch_name} ({remote_branch.head[:8]})")
                self.branches.create(branch_name, remote_branch.head)
                repo.git.worktree("add", worktree_path, branch_name)
            else:
                logger.debug(f"Starting new branch {branch_name} from HEAD in {worktree_path}")
                repo.git.worktree("add", "-b", branch_name, worktree_path)
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error(e)
            logger.debug(f"Failed to add worktree {worktree_name}: {error_msg}")
            raise GitOperationError("worktree add", worktree_name, error_msg)

        logger.info(f"Added worktree {worktree_name} at {worktree_path}")
        return AddResult(cd_directive(worktree_path), AddOutcome.ADDED, worktree_name)

    def add_branch(self, name: str) -> AddResult:
        """
        Make sure a branch exists for ``name``.

        A remote branch of that name counts as existing: ``git checkout``
        creates the local tracking branch by itself.

        Returns:
            ``git checkout`` directive, EXISTED or ADDED

        Raises:
            FetchError: If remote refs cannot be synchronized
            GitOperationError: If the branch cannot be created
        """
        branch_name = name.strip()

        self.git_ops.fetch_all()

        existing = self.branches.resolve(branch_name, BranchKind.LOCAL)
        if existing is None:
            existing = self.branches.resolve(branch_name, BranchKind.REMOTE)
        if existing is not None:
            logger.info(f"Branch `{branch_name}` already exists")
            return AddResult(checkout_directive(existing.name), AddOutcome.EXISTED, existing.name)

        head = self.git_ops.head_commit()
        if head is None:
            raise GitOperationError("branch", branch_name, "repository has no commits to branch from")

        try:
            created = self.branches.create(branch_name, head)
        except git.exc.GitCommandError as e:
            raise GitOperationError("branch", branch_name, describe_git_error(e))

        return AddResult(checkout_directive(created.name), AddOutcome.ADDED, created.name)
