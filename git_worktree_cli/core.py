"""Core functionality for git-worktree-cli"""

from typing import Optional, Union

from git_worktree_cli.config import Config
from git_worktree_cli.models.pull_request import PRKind, PRState
from git_worktree_cli.models.workspace import AddResult, BatchReport, SelectionMode
from git_worktree_cli.services.git.topology import classify, open_repository
from git_worktree_cli.services.github_service import GitHubService
from git_worktree_cli.services.navigation import WorkspaceNavigator
from git_worktree_cli.services.pr_sync import PRSyncOrchestrator
from git_worktree_cli.services.workspace_creator import WorkspaceCreator
from git_worktree_cli.ui.fuzzy_selector import FuzzySelector
from git_worktree_cli.utils.logging import get_logger

logger = get_logger(__name__)


class WorkspaceManager:
    """Entry point tying topology detection, navigation and creation together."""

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict],
        selector: Optional[FuzzySelector] = None,
        github_service: Optional[GitHubService] = None,
    ):
        """Initialize WorkspaceManager.

        Args:
            repo_path: Any path inside the repository
            config: Configuration dict or Config object
            selector: Interactive picker; the Textual one by default
            github_service: Pull request source; built from config by default

        Raises:
            GitOperationError: If there is no repository at ``repo_path``
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        self.repo = open_repository(repo_path)
        self.topology = classify(self.repo)
        # Worktree topologies work from the shared git directory so every
        # worktree of a hub sees the same registry.
        if self.topology.uses_worktrees:
            self.repo_path = self.repo.common_dir
        else:
            self.repo_path = self.repo.working_tree_dir
        self.remote_name = self.config.remote_name

        self.selector = selector or FuzzySelector()
        self.github_service = github_service or GitHubService(self.config)
        self.creator = WorkspaceCreator(self.repo_path, self.remote_name)
        self.navigator = WorkspaceNavigator(self.repo_path, self.selector, self.remote_name)

        logger.debug(f"Workspace manager ready for {self.repo_path} ({self.topology.value})")

    def add(self, name: str) -> AddResult:
        """Create (or find) the workspace for ``name``."""
        return self.creator.add(name, self.topology)

    def change(
        self,
        branch: Optional[str] = None,
        worktree: Optional[str] = None,
        query: Optional[str] = None,
    ) -> str:
        """Directive switching to an existing workspace."""
        if self.topology.uses_worktrees:
            return self.navigator.resolve_worktree(branch=branch, worktree=worktree, query=query)
        return self.navigator.resolve_branch(branch=branch, query=query)

    def add_from_pull_requests(
        self,
        state: Optional[PRState] = None,
        kind: Optional[PRKind] = None,
        mode: Optional[SelectionMode] = None,
    ) -> BatchReport:
        """Create workspaces for pull requests, defaults taken from config."""
        orchestrator = PRSyncOrchestrator(
            self.repo_path,
            self.topology,
            self.github_service,
            selector=self.selector,
            remote_name=self.remote_name,
        )
        try:
            return orchestrator.run(
                state=state or PRState(self.config.pr_state),
                kind=kind or PRKind(self.config.pr_kind),
                mode=mode or SelectionMode(self.config.selection_mode),
            )
        finally:
            self.github_service.close()

    def close(self) -> None:
        self.repo.close()
