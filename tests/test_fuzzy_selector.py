"""Tests for the Textual picker"""
import asyncio
from unittest.mock import patch

import pytest

from git_worktree_cli.exceptions import NothingSelectedError, OperationCancelled
from git_worktree_cli.models.workspace import SelectionResult, TerminalKey
from git_worktree_cli.ui.fuzzy_selector import FuzzyPickerApp, FuzzySelector
from git_worktree_cli.ui.selection import require_selection

LABELS = ["alpha", "beta", "gamma"]


def drive(app, *keys):
    """Run the app headless, press keys, return what it exited with."""
    async def run():
        async with app.run_test() as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)
        return app.return_value

    return asyncio.run(run())


class TestFuzzyPickerApp:
    """Test picker key handling."""

    def test_app_keeps_candidate_indices(self):
        """Filtered indices live beside the widget visibility flag, not on it."""
        app = FuzzyPickerApp(LABELS)

        assert app.visible_indices == [0, 1, 2]
        assert isinstance(app.visible, bool)

    def test_refilter_updates_indices(self):
        app = FuzzyPickerApp(LABELS)

        async def run():
            async with app.run_test() as pilot:
                await pilot.pause()
                app.refilter("gam")
                indices = list(app.visible_indices)
                await pilot.press("escape")
            return indices

        assert asyncio.run(run()) == [2]

    def test_enter_accepts_highlighted(self):
        result = drive(FuzzyPickerApp(LABELS), "enter")

        assert result.terminal_key is TerminalKey.ACCEPT
        assert result.selected_items == [0]

    def test_cursor_moves_highlight(self):
        result = drive(FuzzyPickerApp(LABELS), "down", "down", "enter")

        assert result.selected_items == [2]

    def test_prefilled_query_filters(self):
        result = drive(FuzzyPickerApp(LABELS, query="gam"), "enter")

        assert result.selected_items == [2]

    def test_typing_filters(self):
        result = drive(FuzzyPickerApp(LABELS), "b", "e", "enter")

        assert result.selected_items == [1]

    def test_no_match_accepts_nothing(self):
        result = drive(FuzzyPickerApp(LABELS, query="zzz"), "enter")

        assert result.terminal_key is TerminalKey.ACCEPT
        assert result.selected_items == []

    def test_escape_aborts(self):
        result = drive(FuzzyPickerApp(LABELS), "escape")

        assert result.terminal_key is TerminalKey.ABORT
        assert result.selected_items == []

    def test_multi_toggle(self):
        """Tab marks the highlighted line and moves on."""
        result = drive(FuzzyPickerApp(LABELS, multi=True), "tab", "down", "tab", "enter")

        assert result.selected_items == [0, 2]

    def test_multi_toggle_all(self):
        result = drive(FuzzyPickerApp(LABELS, multi=True), "ctrl+a", "enter")

        assert result.selected_items == [0, 1, 2]

    def test_multi_without_marks_takes_highlighted(self):
        result = drive(FuzzyPickerApp(LABELS, multi=True), "down", "enter")

        assert result.selected_items == [1]

    def test_toggle_disabled_in_single_mode(self):
        app = FuzzyPickerApp(LABELS)

        assert app.check_action("toggle", ()) is False
        assert app.check_action("accept", ()) is True


class TestFuzzySelector:
    """Test mapping picker results back to the caller's items."""

    def test_empty_items_do_not_block(self):
        with patch.object(FuzzyPickerApp, "run") as mock_run:
            assert FuzzySelector().prompt([]) is None

        mock_run.assert_not_called()

    def test_returns_original_items(self):
        items = [{"id": 1}, {"id": 2}]

        with patch.object(FuzzyPickerApp, "run", return_value=SelectionResult([1], TerminalKey.ACCEPT)):
            result = FuzzySelector().prompt(items, label=lambda item: str(item["id"]))

        assert result.selected_items == [{"id": 2}]
        assert result.selected_items[0] is items[1]

    def test_keyboard_interrupt_is_abort(self):
        with patch.object(FuzzyPickerApp, "run", side_effect=KeyboardInterrupt):
            result = FuzzySelector().prompt(["a"])

        assert result.aborted

    def test_runs_inline(self):
        with patch.object(FuzzyPickerApp, "run", return_value=SelectionResult([0], TerminalKey.ACCEPT)) as mock_run:
            FuzzySelector().prompt(["a"])

        mock_run.assert_called_once_with(inline=True)


class TestRequireSelection:
    """Test turning picker results into items or errors."""

    def test_nothing_to_pick(self):
        with pytest.raises(NothingSelectedError) as exc_info:
            require_selection(None, "Branch")

        assert "no branch candidates" in str(exc_info.value)

    def test_abort(self):
        with pytest.raises(OperationCancelled):
            require_selection(SelectionResult([], TerminalKey.ABORT), "Branch")

    def test_accept_without_selection(self):
        with pytest.raises(NothingSelectedError) as exc_info:
            require_selection(SelectionResult([], TerminalKey.ACCEPT), "Branch")

        assert str(exc_info.value) == "No branch selected"

    def test_selected_items(self):
        assert require_selection(SelectionResult(["x"], TerminalKey.ACCEPT), "Branch") == ["x"]
