"""Resolving a name, or a picker choice, to a workspace directive."""

from typing import Optional, TYPE_CHECKING

from git_worktree_cli.constants import DEFAULT_REMOTE, HINT_BRANCH, HINT_WORKTREE
from git_worktree_cli.exceptions import DirtyWorkspaceError
from git_worktree_cli.formatters.directives import cd_directive, checkout_directive
from git_worktree_cli.formatters.labels import branch_label, worktree_label
from git_worktree_cli.models.branch import BranchKind
from git_worktree_cli.services.git.branches import BranchRegistry
from git_worktree_cli.services.git.operations import GitOperations
from git_worktree_cli.services.git.worktrees import WorktreeRegistry, normalize_workspace_name
from git_worktree_cli.ui.selection import require_selection
from git_worktree_cli.utils.logging import get_logger

if TYPE_CHECKING:
    from git_worktree_cli.ui.fuzzy_selector import FuzzySelector

logger = get_logger(__name__)


class WorkspaceNavigator:
    """Finds the workspace to switch to and returns the directive for it."""

    def __init__(self, repo_path: str, selector: "FuzzySelector", remote_name: str = DEFAULT_REMOTE):
        self.repo_path = repo_path
        self.selector = selector
        self.git_ops = GitOperations(repo_path, remote_name)
        self.branches = BranchRegistry(repo_path, remote_name)
        self.worktrees = WorktreeRegistry(repo_path, remote_name)

    def resolve_worktree(
        self,
        branch: Optional[str] = None,
        worktree: Optional[str] = None,
        query: Optional[str] = None,
    ) -> str:
        """
        ``cd`` directive for a worktree.

        An existing worktree name wins, then the worktree holding an existing
        local branch. Anything else goes through the picker, with the
        unresolved name as the query unless one was given.

        Raises:
            NotFoundError: The branch exists but no worktree has it checked out
            NothingSelectedError: No worktrees, or nothing picked
            OperationCancelled: The user aborted the picker
        """
        worktree_name = None
        if worktree:
            if self.worktrees.exists_by_name(worktree):
                worktree_name = normalize_workspace_name(worktree)
            else:
                logger.info(f"No worktree named {worktree}, opening picker")
        elif branch:
            if self.branches.exists(branch, BranchKind.LOCAL):
                worktree_name = self.worktrees.worktree_for_branch(branch)
            else:
                logger.info(f"No local branch named {branch}, opening picker")

        if worktree_name is None:
            if query is None:
                query = worktree or branch
            worktree_branches = self.worktrees.branch_map(include_unranked=True)
            result = self.selector.prompt(
                list(worktree_branches.items()),
                label=lambda entry: worktree_label(*entry),
                query=query,
                multi=False,
                hint=HINT_WORKTREE,
            )
            worktree_name, _ = require_selection(result, HINT_WORKTREE)[0]

        return cd_directive(self.worktrees.path_of(worktree_name))

    def resolve_branch(self, branch: Optional[str] = None, query: Optional[str] = None) -> str:
        """
        ``git checkout`` directive for a local branch of a regular checkout.

        Raises:
            DirtyWorkspaceError: Tracked files are modified or staged; checked first
            NothingSelectedError: No branches, or nothing picked
            OperationCancelled: The user aborted the picker
        """
        if not self.git_ops.is_branch_clear():
            logger.warning("Branch has uncommitted changes")
            raise DirtyWorkspaceError(self.repo_path)

        if branch and self.branches.exists(branch, BranchKind.LOCAL):
            return checkout_directive(branch)

        if query is None:
            query = branch
        result = self.selector.prompt(
            self.branches.list(BranchKind.LOCAL),
            label=branch_label,
            query=query,
            multi=False,
            hint=HINT_BRANCH,
        )
        selected = require_selection(result, HINT_BRANCH)[0]
        return checkout_directive(selected.name)
