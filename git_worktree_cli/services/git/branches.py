"""Branch registry service for git-worktree-cli."""

import git
from typing import Iterator, List, Optional, Tuple

from git_worktree_cli.constants import DEFAULT_REMOTE
from git_worktree_cli.models.branch import BranchInfo, BranchKind
from git_worktree_cli.utils.logging import get_logger

logger = get_logger(__name__)


class BranchRegistry:
    """Service for enumerating and resolving local and remote branches."""

    def __init__(self, repo_path: str, remote_name: str = DEFAULT_REMOTE):
        """Initialize the branch registry.

        Args:
            repo_path: Path to the git repository
            remote_name: Remote whose namespace remote branch names are resolved in
        """
        self.repo_path = repo_path
        self.remote_name = remote_name

    def _get_repo(self):
        """Get a thread-safe git.Repo instance.

        Creates a new repo instance for each call to ensure thread safety.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    def _iter_refs(self, repo: git.Repo, kind: BranchKind) -> Iterator[git.Reference]:
        """Yield the refs of one namespace in the order git enumerates them."""
        if kind is BranchKind.LOCAL:
            yield from repo.heads
            return

        for ref in repo.refs:
            if not isinstance(ref, git.RemoteReference):
                continue
            # refs/remotes/<remote>/HEAD is a pointer, not a branch
            if ref.remote_head == "HEAD":
                continue
            yield ref

    def _entries(self, repo: git.Repo, kind: BranchKind) -> Iterator[Tuple[BranchInfo, int]]:
        for ref in self._iter_refs(repo, kind):
            try:
                commit = ref.commit
                yield BranchInfo(name=ref.name, head=commit.hexsha), commit.committed_date
            except (ValueError, git.exc.GitCommandError) as e:
                logger.debug(f"Skipping unreadable ref {ref.path}: {e}")

    def list(self, kind: BranchKind = BranchKind.LOCAL) -> List[BranchInfo]:
        """List branches, most recently committed first.

        Branches with the same commit time keep their enumeration order.

        Args:
            kind: Local branches or remote-tracking branches

        Returns:
            BranchInfo list; remote names carry their remote prefix (``origin/x``)
        """
        repo = self._get_repo()
        entries = list(self._entries(repo, kind))
        entries.sort(key=lambda entry: entry[1], reverse=True)
        logger.debug(f"Found {len(entries)} {kind.value} branches")
        return [info for info, _ in entries]

    def _comparison_name(self, name: str, kind: BranchKind) -> str:
        if kind is BranchKind.REMOTE:
            return f"{self.remote_name}/{name}"
        return name

    def resolve(self, name: str, kind: BranchKind = BranchKind.LOCAL) -> Optional[BranchInfo]:
        """Find a branch by name.

        Remote branches are looked up under the configured remote, so
        ``resolve("feature", REMOTE)`` matches ``origin/feature``. The
        returned BranchInfo always carries the unprefixed name.
        """
        target = self._comparison_name(name, kind)
        repo = self._get_repo()
        for ref in self._iter_refs(repo, kind):
            if ref.name == target:
                return BranchInfo(name=name, head=ref.commit.hexsha)
        return None

    def exists(self, name: str, kind: BranchKind = BranchKind.LOCAL) -> bool:
        """Check whether a branch exists. Errors count as "no"."""
        try:
            return self.resolve(name, kind) is not None
        except Exception as e:
            logger.debug(f"Error checking {kind.value} branch {name}: {e}")
            return False

    def commit_time(self, name: str) -> Optional[int]:
        """Commit timestamp of a local branch tip, None if the branch is gone."""
        try:
            repo = self._get_repo()
            return repo.heads[name].commit.committed_date
        except (IndexError, ValueError, git.exc.GitCommandError) as e:
            logger.debug(f"Failed to find branch {name}: {e}")
            return None

    def create(self, name: str, start_point: str) -> BranchInfo:
        """Create a local branch at ``start_point`` (a commit id or ref).

        Raises:
            git.exc.GitCommandError: If git rejects the name or start point
        """
        repo = self._get_repo()
        # The git CLI validates the ref name for us
        repo.git.branch(name, start_point)
        head = repo.heads[name].commit.hexsha
        logger.info(f"Created branch {name} at {head[:8]}")
        return BranchInfo(name=name, head=head)
