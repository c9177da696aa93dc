"""Fuzzy-filtered picker built on Textual."""

from typing import Callable, List, Optional, Sequence, Set, TypeVar

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.fuzzy import Matcher
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from git_worktree_cli.models.workspace import SelectionResult, TerminalKey
from git_worktree_cli.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

MARKED = "● "
UNMARKED = "  "


class FuzzyPickerApp(App[SelectionResult[int]]):
    """Pick one or more lines out of a list, filtering as you type.

    Returns the indices of the chosen lines and the key that ended the session.
    """

    CSS = """
    Screen {
        height: auto;
        max-height: 20;
    }

    #prompt-row {
        height: 1;
    }

    #hint {
        width: auto;
        color: $accent;
    }

    #query {
        border: none;
        height: 1;
        padding: 0;
    }

    #candidates {
        height: auto;
        max-height: 16;
        border: none;
    }

    #counter {
        height: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("enter", "accept", "Accept", priority=True),
        Binding("escape", "abort", "Abort", priority=True),
        Binding("ctrl+c", "abort", "Abort", show=False, priority=True),
        Binding("ctrl+a", "toggle_all", "Toggle all", priority=True),
        Binding("tab", "toggle", "Toggle", priority=True),
        Binding("up", "cursor_up", show=False, priority=True),
        Binding("down", "cursor_down", show=False, priority=True),
    ]

    def __init__(self, labels: List[str], query: Optional[str] = None, multi: bool = False, hint: str = ""):
        super().__init__()
        self.labels = labels
        self.initial_query = query or ""
        self.multi = multi
        self.hint = hint
        self.visible_indices: List[int] = list(range(len(labels)))
        self.marked: Set[int] = set()

    def compose(self) -> ComposeResult:
        with Horizontal(id="prompt-row"):
            yield Static(f"({self.hint}) > ", id="hint")
            yield Input(value=self.initial_query, id="query")
        yield OptionList(id="candidates")
        yield Static("", id="counter")

    def on_mount(self) -> None:
        self.query_one("#query", Input).focus()
        self.refilter(self.initial_query)

    def on_input_changed(self, event: Input.Changed) -> None:
        self.refilter(event.value)

    def check_action(self, action: str, parameters) -> Optional[bool]:
        if action in ("toggle", "toggle_all") and not self.multi:
            return False
        return True

    def refilter(self, query: str) -> None:
        """Keep the lines matching ``query``, best match first."""
        if query:
            matcher = Matcher(query)
            scored = []
            for index, label in enumerate(self.labels):
                score = matcher.match(label)
                if score > 0:
                    scored.append((score, index))
            # sort is stable, so equal scores keep list order
            scored.sort(key=lambda entry: entry[0], reverse=True)
            self.visible_indices = [index for _, index in scored]
        else:
            self.visible_indices = list(range(len(self.labels)))
        self._render_options(highlight=0)

    def _decorate(self, index: int) -> Text:
        label = Text(self.labels[index])
        if not self.multi:
            return label
        marker = MARKED if index in self.marked else UNMARKED
        return Text.assemble(marker, label)

    def _render_options(self, highlight: Optional[int]) -> None:
        option_list = self.query_one("#candidates", OptionList)
        option_list.clear_options()
        option_list.add_options([Option(self._decorate(index), id=str(index)) for index in self.visible_indices])
        if self.visible_indices:
            option_list.highlighted = min(highlight or 0, len(self.visible_indices) - 1)

        counter = f"{len(self.visible_indices)}/{len(self.labels)}"
        if self.multi:
            counter += f" ({len(self.marked)} selected)"
        self.query_one("#counter", Static).update(counter)

    def current(self) -> Optional[int]:
        """Index (into the original labels) of the highlighted line."""
        highlighted = self.query_one("#candidates", OptionList).highlighted
        if highlighted is None or highlighted >= len(self.visible_indices):
            return None
        return self.visible_indices[highlighted]

    def action_cursor_up(self) -> None:
        self.query_one("#candidates", OptionList).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one("#candidates", OptionList).action_cursor_down()

    def action_toggle(self) -> None:
        index = self.current()
        if index is None:
            return
        self.marked.symmetric_difference_update({index})
        position = self.visible_indices.index(index)
        self._render_options(highlight=position + 1)

    def action_toggle_all(self) -> None:
        self.marked.symmetric_difference_update(self.visible_indices)
        highlighted = self.query_one("#candidates", OptionList).highlighted
        self._render_options(highlight=highlighted)

    def action_accept(self) -> None:
        if self.multi and self.marked:
            chosen = sorted(self.marked)
        else:
            index = self.current()
            chosen = [] if index is None else [index]
        self.exit(SelectionResult(chosen, TerminalKey.ACCEPT))

    def action_abort(self) -> None:
        self.exit(SelectionResult([], TerminalKey.ABORT))


class FuzzySelector:
    """Interactive picker returning the caller's own item objects."""

    def __init__(self, inline: bool = True):
        self.inline = inline

    def prompt(
        self,
        items: Sequence[T],
        label: Callable[[T], str] = str,
        query: Optional[str] = None,
        multi: bool = False,
        hint: str = "",
    ) -> Optional[SelectionResult[T]]:
        """
        Let the user pick from ``items``. Blocks until Enter or Escape/Ctrl-C.

        Args:
            items: Candidates, shown in the given order until a query is typed
            label: Turns a candidate into its one-line display text
            query: Pre-filled filter text
            multi: Allow toggling several items (Tab, Ctrl-A)
            hint: Shown in front of the query field

        Returns:
            None without blocking when there is nothing to pick from, else the
            chosen items and whether the session was accepted or aborted
        """
        if not items:
            return None

        app = FuzzyPickerApp([label(item) for item in items], query=query, multi=multi, hint=hint)
        try:
            outcome = app.run(inline=self.inline)
        except KeyboardInterrupt:
            outcome = None

        if outcome is None:
            logger.debug("Picker closed without a result, treating as abort")
            return SelectionResult([], TerminalKey.ABORT)

        return SelectionResult([items[index] for index in outcome.selected_items], outcome.terminal_key)
