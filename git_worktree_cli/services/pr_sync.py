"""Create workspaces for pull requests, concurrently and best effort."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, Set, TYPE_CHECKING

from rich.console import Console

from git_worktree_cli.constants import DEFAULT_REMOTE, HINT_PULL_REQUEST
from git_worktree_cli.exceptions import NothingSelectedError
from git_worktree_cli.formatters.labels import pull_request_label
from git_worktree_cli.formatters.notices import format_batch_failures, format_pr_notice
from git_worktree_cli.models.branch import BranchKind
from git_worktree_cli.models.pull_request import PRKind, PRState, PullRequestCandidate
from git_worktree_cli.models.workspace import (
    BatchReport,
    MaterializeResult,
    RepoTopology,
    SelectionMode,
)
from git_worktree_cli.services.git.branches import BranchRegistry
from git_worktree_cli.services.git.operations import GitOperations
from git_worktree_cli.services.git.worktrees import WorktreeRegistry
from git_worktree_cli.services.github_service import GitHubService, parse_github_url
from git_worktree_cli.services.workspace_creator import WorkspaceCreator
from git_worktree_cli.ui.selection import require_selection
from git_worktree_cli.utils.logging import get_logger

if TYPE_CHECKING:
    from git_worktree_cli.ui.fuzzy_selector import FuzzySelector

console = Console(stderr=True)
logger = get_logger(__name__)


def filter_pull_requests(
    pull_requests: List[PullRequestCandidate],
    kind: PRKind,
    existing_branches: Set[str],
) -> List[PullRequestCandidate]:
    """Keep the pull requests of the wanted kind that have no workspace yet."""
    kept = []
    for pr in pull_requests:
        if not kind.matches(pr.is_draft):
            continue
        if pr.head_ref in existing_branches:
            logger.debug(f"PR #{pr.number} ({pr.head_ref}) already has a workspace")
            continue
        kept.append(pr)
    return kept


class PRSyncOrchestrator:
    """Fetch → filter → select → materialize → report."""

    def __init__(
        self,
        repo_path: str,
        topology: RepoTopology,
        github_service: GitHubService,
        selector: Optional["FuzzySelector"] = None,
        remote_name: str = DEFAULT_REMOTE,
        creator_factory: Callable[[str, str], WorkspaceCreator] = WorkspaceCreator,
    ):
        """Initialize the orchestrator.

        Args:
            repo_path: Path to the git repository
            topology: Decides between worktrees and branches for every pull request
            github_service: Source of pull requests
            selector: Picker for the single/multiple selection modes
            remote_name: Remote whose URL names the GitHub repository
            creator_factory: Builds one WorkspaceCreator per task
        """
        self.repo_path = repo_path
        self.topology = topology
        self.github_service = github_service
        self.selector = selector
        self.remote_name = remote_name
        self.creator_factory = creator_factory

    def fetch(self, state: PRState) -> List[PullRequestCandidate]:
        remote_url = GitOperations(self.repo_path, self.remote_name).remote_url()
        repo_info = parse_github_url(remote_url)
        logger.debug(f"Listing {state.value} pull requests of {repo_info.full_name}")
        return self.github_service.list_pull_requests(repo_info, state)

    def existing_branches(self) -> Set[str]:
        """Branches that already have a workspace in this topology."""
        if self.topology.uses_worktrees:
            worktrees = WorktreeRegistry(self.repo_path, self.remote_name)
            return {branch for branch in worktrees.branch_map(include_unranked=True).values() if branch}
        branches = BranchRegistry(self.repo_path, self.remote_name)
        return {branch.name for branch in branches.list(BranchKind.LOCAL)}

    def select(self, pull_requests: List[PullRequestCandidate], mode: SelectionMode) -> List[PullRequestCandidate]:
        """
        Narrow the filtered pull requests down to the ones to materialize.

        Raises:
            NothingSelectedError: Nothing to select from, or nothing selected
            OperationCancelled: The user aborted the picker
        """
        if not pull_requests:
            raise NothingSelectedError(HINT_PULL_REQUEST, "No pull requests without a workspace to select from")
        if mode is SelectionMode.ALL:
            return pull_requests
        if self.selector is None:
            raise ValueError(f"Selection mode '{mode.value}' needs an interactive selector")

        result = self.selector.prompt(
            pull_requests,
            label=pull_request_label,
            multi=mode is SelectionMode.MULTIPLE,
            hint=HINT_PULL_REQUEST,
        )
        return require_selection(result, HINT_PULL_REQUEST)

    def _materialize_one(self, pr: PullRequestCandidate) -> MaterializeResult:
        creator = self.creator_factory(self.repo_path, self.remote_name)
        try:
            result = creator.add(pr.head_ref, self.topology)
        except Exception as e:
            logger.debug(f"PR #{pr.number} ({pr.head_ref}) failed: {e}")
            return MaterializeResult(pull_request=pr, error=e)
        return MaterializeResult(pull_request=pr, result=result)

    def materialize(self, pull_requests: List[PullRequestCandidate]) -> BatchReport:
        """Create every workspace in its own thread and wait for all of them.

        A failing pull request only fails its own task; the report collects
        every outcome. Anything that is not an ``Exception`` still propagates.
        """
        report = BatchReport()
        if not pull_requests:
            return report

        logger.debug(f"Materializing {len(pull_requests)} pull requests")
        with ThreadPoolExecutor(max_workers=len(pull_requests), thread_name_prefix="pr-sync") as executor:
            futures = {executor.submit(self._materialize_one, pr): pr for pr in pull_requests}
            for future in as_completed(futures):
                report.results.append(future.result())
        return report

    def report(self, report: BatchReport) -> None:
        """Announce new workspaces and log failures as one batch."""
        for item in report.added:
            logger.info(f"Added workspace for PR #{item.pull_request.number}")
            console.print(format_pr_notice(item.pull_request, item.result))
        for item in report.existed:
            logger.debug(f"Workspace for PR #{item.pull_request.number} already existed")
        if report.failures:
            logger.error(format_batch_failures(report.failures))

    def run(
        self,
        state: PRState = PRState.OPEN,
        kind: PRKind = PRKind.ALL,
        mode: SelectionMode = SelectionMode.ALL,
    ) -> BatchReport:
        pull_requests = self.fetch(state)
        candidates = filter_pull_requests(pull_requests, kind, self.existing_branches())
        logger.info(f"{len(candidates)} of {len(pull_requests)} pull requests need a workspace")
        selected = self.select(candidates, mode)
        report = self.materialize(selected)
        self.report(report)
        return report
