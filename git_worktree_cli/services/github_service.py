"""GitHub API integration service"""

import os
import re
from typing import List, Optional, TYPE_CHECKING, Union

from github import Auth, Github, GithubException

from git_worktree_cli.constants import GITHUB_TOKEN_ENV_VARS
from git_worktree_cli.exceptions import GitHubAPIError
from git_worktree_cli.models.pull_request import PRState, PullRequestCandidate, RepoInfo
from git_worktree_cli.utils.logging import get_logger

if TYPE_CHECKING:
    from git_worktree_cli.config import Config

logger = get_logger(__name__)

# git@github.com:owner/repo.git, https://github.com/owner/repo(.git), ssh://git@github.com/owner/repo
GITHUB_URL_PATTERN = re.compile(r"github\.com[:/](?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


def parse_github_url(url: str) -> RepoInfo:
    """Extract owner and repository name from a GitHub remote URL.

    Raises:
        GitHubAPIError: If the URL does not point at a GitHub repository
    """
    match = GITHUB_URL_PATTERN.search(url.strip())
    if not match:
        raise GitHubAPIError("parse_url", f"'{url}' is not a GitHub repository URL")
    return RepoInfo(owner=match.group("owner"), name=match.group("repo"))


class GitHubService:
    def __init__(self, config: Union["Config", dict], github: Optional[Github] = None):
        """Initialize the service.

        Args:
            config: Configuration dictionary or Config object
            github: Pre-built client, mostly for tests; created lazily otherwise
        """
        self.config = config
        self.max_prs_to_fetch = config.get("max_prs_to_fetch", 500)
        self.github_token = config.get("github_token") or self._token_from_env()
        self.github = github

    @staticmethod
    def _token_from_env() -> Optional[str]:
        for env_var in GITHUB_TOKEN_ENV_VARS:
            token = os.environ.get(env_var)
            if token:
                return token
        return None

    def setup_github_api(self) -> Github:
        """Create the API client, authenticated when a token is available.

        With a token, the remaining rate-limit quota is checked (and logged)
        right away so a bad token fails here rather than mid-batch.

        Raises:
            GitHubAPIError: If the token is rejected
        """
        if self.github is not None:
            return self.github

        if not self.github_token:
            logger.info("[GitHub] No token found, using unauthenticated access (lower rate limits)")
            self.github = Github()
            return self.github

        github = Github(auth=Auth.Token(self.github_token))
        try:
            remaining, limit = github.rate_limiting
        except GithubException as e:
            github.close()
            raise GitHubAPIError(
                "rate_limit",
                f"{e}. GitHub Personal Access Token might be invalid.",
            )
        logger.info(f"[GitHub] GitHub API rate limit: {limit - remaining}/{limit} used")

        self.github = github
        return self.github

    def list_pull_requests(self, repo_info: RepoInfo, state: PRState = PRState.OPEN) -> List[PullRequestCandidate]:
        """List pull requests of a repository.

        Pages are followed until ``max_prs_to_fetch`` pull requests are read.

        Raises:
            GitHubAPIError: If the repository or its pull requests cannot be read
        """
        github = self.setup_github_api()
        candidates: List[PullRequestCandidate] = []
        try:
            gh_repo = github.get_repo(repo_info.full_name)
            for pr in gh_repo.get_pulls(state=state.value):
                if len(candidates) >= self.max_prs_to_fetch:
                    logger.warning(
                        f"[GitHub] Stopped after {self.max_prs_to_fetch} pull requests of {repo_info.full_name}"
                    )
                    break
                candidates.append(
                    PullRequestCandidate(
                        number=pr.number,
                        head_ref=pr.head.ref,
                        url=pr.html_url,
                        is_draft=bool(pr.draft),
                    )
                )
        except GithubException as e:
            raise GitHubAPIError("list_pulls", f"{repo_info.full_name}: {e}")

        logger.debug(f"[GitHub] Fetched {len(candidates)} {state.value} pull requests of {repo_info.full_name}")
        return candidates

    def close(self) -> None:
        """Close the GitHub API connection to clean up resources."""
        if self.github:
            try:
                self.github.close()
                logger.debug("[GitHub] Closed GitHub API connection")
            except Exception as e:
                logger.debug(f"[GitHub] Error closing GitHub API connection: {e}")
