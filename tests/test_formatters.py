"""Tests for directives, labels and notices"""
from git_worktree_cli.constants import BRANCH_ICON
from git_worktree_cli.exceptions import GitOperationError
from git_worktree_cli.formatters import (
    branch_label,
    cd_directive,
    checkout_directive,
    format_batch_failures,
    format_pr_notice,
    pull_request_label,
    worktree_label,
)
from git_worktree_cli.models.branch import BranchInfo
from git_worktree_cli.models.workspace import AddOutcome, AddResult, MaterializeResult


class TestDirectives:
    """Test the shell lines printed for the caller."""

    def test_plain_path(self):
        assert cd_directive("/proj/feature_x") == "cd /proj/feature_x"

    def test_path_with_spaces_is_quoted(self):
        assert cd_directive("/my proj/x") == "cd '/my proj/x'"

    def test_checkout(self):
        assert checkout_directive("feature/x") == "git checkout feature/x"

    def test_checkout_with_quote(self):
        assert checkout_directive("it's") == "git checkout 'it'\"'\"'s'"

    def test_empty_path_is_quoted(self):
        assert cd_directive("") == "cd ''"


class TestLabels:
    """Test picker labels."""

    def test_worktree_named_after_branch(self):
        assert worktree_label("hotfix", "hotfix") == "hotfix"

    def test_worktree_with_other_branch(self):
        assert worktree_label("feature_x", "feature/x") == f"feature_x -> {BRANCH_ICON}feature/x"

    def test_worktree_without_branch(self):
        assert worktree_label("scratch", None) == "scratch (detached)"

    def test_branch_and_pull_request(self, make_pull_request):
        assert branch_label(BranchInfo("main", "abc")) == "main"
        assert pull_request_label(make_pull_request(7, "feature/y")) == "feature/y"


class TestNotices:
    """Test the pull request report text."""

    def test_notice(self, make_pull_request):
        pr = make_pull_request(7, "feature/y", is_draft=True)
        result = AddResult("cd /proj/feature_y", AddOutcome.ADDED, "feature_y")

        notice = format_pr_notice(pr, result)

        assert "PR #7" in notice
        assert "(draft)" in notice
        assert "feature/y" in notice
        assert pr.url in notice
        assert "cd /proj/feature_y" in notice

    def test_batch_failures(self, make_pull_request):
        failures = [
            MaterializeResult(make_pull_request(3, "bad..ref"), error=GitOperationError("branch", "bad..ref")),
        ]

        text = format_batch_failures(failures)

        assert text.startswith("Failed to add 1 pull request workspace(s):")
        assert "PR #3 (bad..ref)" in text
