"""Pytest fixtures for git-worktree-cli tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_worktree_cli.models.pull_request import PullRequestCandidate
from git_worktree_cli.models.workspace import SelectionResult, TerminalKey

REFSPEC = "+refs/heads/*:refs/remotes/origin/*"


def configure_user(repo):
    """Give a repository a committer identity."""
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


def commit_file(repo, filename, content, date):
    """Write a file into a work tree and commit it with a fixed date."""
    path = Path(repo.working_dir) / filename
    path.write_text(content)
    repo.index.add([filename])
    return repo.index.commit(f"Add {filename}", author_date=date, commit_date=date)


def make_pr(number, head_ref, is_draft=False):
    return PullRequestCandidate(
        number=number,
        head_ref=head_ref,
        url=f"https://github.com/test/repo/pull/{number}",
        is_draft=is_draft,
    )


class FakeSelector:
    """Scripted stand-in for the interactive picker.

    Records every prompt and answers with ``pick(items)`` (the first item by
    default), or aborts.
    """

    def __init__(self, pick=None, abort=False):
        self.pick = pick
        self.abort = abort
        self.calls = []

    def prompt(self, items, label=str, query=None, multi=False, hint=""):
        self.calls.append({
            "labels": [label(item) for item in items],
            "query": query,
            "multi": multi,
            "hint": hint,
        })
        if not items:
            return None
        if self.abort:
            return SelectionResult([], TerminalKey.ABORT)
        chosen = self.pick(items) if self.pick else [items[0]]
        return SelectionResult(list(chosen), TerminalKey.ACCEPT)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'remote_name': 'origin',
        'verbose': False,
        'debug': False,
        'github_token': 'test_token_for_testing',
        'max_prs_to_fetch': 500,
        'pr_state': 'open',
        'pr_kind': 'all',
        'selection_mode': 'all',
    }


@pytest.fixture
def seed_repo(temp_dir):
    """Working repository the upstream is populated from.

    Branch tips, oldest first: main, feature/old, hotfix, feature/new.
    """
    repo_path = temp_dir / "seed"
    repo_path.mkdir()
    repo = git.Repo.init(repo_path)
    configure_user(repo)

    commit_file(repo, "README.md", "# Test Repository\n", "2024-01-01T10:00:00")
    repo.git.branch('-M', 'main')

    for branch, date in [
        ("feature/old", "2024-01-02T10:00:00"),
        ("hotfix", "2024-01-03T10:00:00"),
        ("feature/new", "2024-01-05T10:00:00"),
    ]:
        repo.git.checkout('-b', branch, 'main')
        commit_file(repo, f"{branch.replace('/', '_')}.txt", f"{branch}\n", date)

    repo.git.checkout('main')
    yield repo
    repo.close()


@pytest.fixture
def upstream_repo(temp_dir, seed_repo):
    """Bare repository every other fixture uses as ``origin``."""
    upstream_path = temp_dir / "upstream.git"
    upstream = git.Repo.init(upstream_path, bare=True)
    upstream.git.symbolic_ref('HEAD', 'refs/heads/main')

    seed_repo.create_remote('origin', str(upstream_path))
    seed_repo.git.push('origin', '--all')

    yield upstream
    upstream.close()


@pytest.fixture
def regular_repo(temp_dir, upstream_repo):
    """Regular clone with ``main`` checked out and remote-tracking refs for the rest."""
    repo = git.Repo.clone_from(upstream_repo.git_dir, temp_dir / "clone", branch='main')
    configure_user(repo)
    yield repo
    repo.close()


@pytest.fixture
def bare_hub(temp_dir, upstream_repo):
    """Bare hub at ``proj/.bare`` with worktrees for main, feature/new and hotfix.

    Yields the hub repository; its parent (``proj``) holds the worktrees.
    """
    project = temp_dir / "proj"
    project.mkdir()
    hub = git.Repo.clone_from(upstream_repo.git_dir, project / ".bare", bare=True)
    configure_user(hub)
    (project / ".git").write_text("gitdir: ./.bare\n")

    hub.remote('origin').fetch(REFSPEC)

    hub.git.worktree('add', str(project / "main"), 'main')
    hub.git.worktree('add', str(project / "feature_new"), 'feature/new')
    hub.git.worktree('add', str(project / "hotfix"), 'hotfix')

    yield hub
    hub.close()


@pytest.fixture
def hub_path(bare_hub):
    return bare_hub.git_dir


@pytest.fixture
def project_dir(bare_hub):
    return Path(bare_hub.git_dir).parent


@pytest.fixture
def fake_selector():
    return FakeSelector()


@pytest.fixture
def mock_github_service():
    """GitHubService stand-in serving a fixed pull request list."""
    service = Mock()
    service.list_pull_requests = Mock(return_value=[])
    service.close = Mock()
    return service


@pytest.fixture
def make_commit():
    return commit_file


@pytest.fixture
def make_pull_request():
    return make_pr


@pytest.fixture
def selector_factory():
    return FakeSelector
