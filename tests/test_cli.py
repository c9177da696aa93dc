"""Tests for the command-line interface"""
from pathlib import Path
from unittest.mock import patch

import pytest

from git_worktree_cli.cli.args import parse_args
from git_worktree_cli.cli.main import main
from git_worktree_cli.constants import EXIT_CANCELLED, EXIT_ERROR, EXIT_OK, EXIT_SOFTWARE
from git_worktree_cli.models.workspace import SelectionResult, TerminalKey
from git_worktree_cli.ui.fuzzy_selector import FuzzySelector


class TestArgs:
    """Test argument parsing."""

    def test_change_branch_alias(self):
        args = parse_args(["cb", "main", "-w", "hotfix", "-q", "hot"])

        assert args.command == "change-branch"
        assert args.branch == "main"
        assert args.worktree == "hotfix"
        assert args.query == "hot"

    def test_add_from_pr_defaults(self):
        args = parse_args(["pr"])

        assert args.command == "add-from-pr"
        assert (args.state, args.kind, args.select) == ("open", "all", "all")

    def test_global_options(self):
        args = parse_args(["-v", "--remote", "upstream", "-C", "/tmp", "add", "x"])

        assert args.verbose
        assert args.remote == "upstream"
        assert args.path == "/tmp"
        assert args.name == "x"

    def test_command_required(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_args([])

        assert exc_info.value.code == 2

    def test_invalid_choice(self):
        with pytest.raises(SystemExit):
            parse_args(["pr", "--kind", "merged"])


class TestMain:
    """Test the main entry point end to end."""

    def test_add_prints_directive_only(self, regular_repo, capsys):
        exit_code = main(["-C", regular_repo.working_dir, "add", "topic"])

        captured = capsys.readouterr()
        assert exit_code == EXIT_OK
        assert captured.out == "git checkout topic\n"

    def test_change_worktree(self, project_dir, capsys):
        exit_code = main(["-C", str(project_dir / "hotfix"), "change-branch", "-w", "feature/new"])

        assert exit_code == EXIT_OK
        assert capsys.readouterr().out == f"cd {project_dir / 'feature_new'}\n"

    def test_dirty_workspace(self, regular_repo, capsys):
        (Path(regular_repo.working_dir) / "README.md").write_text("changed\n")

        exit_code = main(["-C", regular_repo.working_dir, "cb", "main"])

        captured = capsys.readouterr()
        assert exit_code == EXIT_SOFTWARE
        assert captured.out == ""
        assert "uncommitted" in captured.err

    def test_cancelled(self, regular_repo, capsys):
        with patch.object(FuzzySelector, "prompt", return_value=SelectionResult([], TerminalKey.ABORT)):
            exit_code = main(["-C", regular_repo.working_dir, "cb"])

        captured = capsys.readouterr()
        assert exit_code == EXIT_CANCELLED
        assert captured.out == ""
        assert "cancelled" in captured.err

    def test_not_a_repository(self, temp_dir, capsys):
        exit_code = main(["-C", str(temp_dir / "nothing"), "add", "x"])

        assert exit_code == EXIT_ERROR
        assert "Error" in capsys.readouterr().err

    def test_add_from_pr_with_non_github_remote(self, regular_repo, capsys):
        """The clone's origin is a local path, which names no GitHub repository."""
        exit_code = main(["-C", regular_repo.working_dir, "add-from-pr"])

        assert exit_code == EXIT_ERROR
        assert "not a GitHub repository URL" in capsys.readouterr().err
