"""Commit History Screen.

Displays the commit list with the commit graph drawn beside each commit.
The lines of the highlighted commit are drawn in the highlight colour and
its details are shown in the side panel.

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, ListItem, ListView, Static

from gitgraph_core.authors import author_style
from gitgraph_core.authors import make_style_function
from gitgraph_core.config import GraphConfig
from gitgraph_core.config import next_screen_mode
from gitgraph_core.config import prev_screen_mode
from gitgraph_core.graph import get_pipe_sets
from gitgraph_core.graph import graph_width
from gitgraph_core.graph import render_aux
from gitgraph_core.graph import row_to_text
from gitgraph_core.hash_pool import HashPool
from gitgraph_core.history import load_commits
from gitgraph_core.models import Commit
from gitgraph_core.pipe import PipeSet
from gitgraph_core.renderer import Row

from gitgraph_client.widgets.commit_detail import CommitDetailPanel

logger = logging.getLogger(__name__)


def build_row_text(
        commit: Commit,
        row: Row | None,
        width: int,
        author_colors: dict[str, str] | None = None,
) -> Text:
    """Build the list entry for one commit.

    Args:
        commit: Commit on this row.
        row: Rendered graph row, or None when the graph is hidden.
        width: Width the graph is padded to.
        author_colors: Configured author colours.

    Returns:
        Graph, short hash, refs, author and subject as rich Text.
    """
    text = Text(no_wrap=True, overflow="ellipsis")
    if row is not None:
        graph = row_to_text(row)
        text.append_text(graph)
        text.pad_right(width - len(graph))
    text.append(commit.short_hash(), style="yellow")
    if commit.refs:
        text.append(f" ({', '.join(commit.refs)})", style="bold green")
    text.append(f" {commit.author_name or 'Unknown'}", style=author_style(commit.author_name, author_colors))
    text.append(f" {commit.name}")
    return text


def changed_rows(
        old_rows: Sequence[Row],
        new_rows: Sequence[Row],
) -> list[int]:
    """Indices whose rendering differs between two renders of the same graph."""
    if len(old_rows) != len(new_rows):
        return list(range(len(new_rows)))
    return [i for i, (old, new) in enumerate(zip(old_rows, new_rows)) if old != new]


class CommitHistoryScreen(Screen):
    """Commit history screen showing the log with its graph.

    Pipe sets are computed once per load; moving the selection only
    re-renders rows and updates the entries whose rendering changed.
    """

    BINDINGS = [
        Binding("escape", "app.quit", "Quit", key_display="ESC"),
        Binding("r", "refresh", "Refresh", key_display="R"),
        Binding("j", "cursor_down", "Down", key_display="J"),
        Binding("k", "cursor_up", "Up", key_display="K"),
        Binding("plus", "next_screen_mode", "Bigger", key_display="+"),
        Binding("underscore", "prev_screen_mode", "Smaller", key_display="_"),
    ]

    def __init__(
            self,
            repo_path: Path,
            config: GraphConfig,
    ) -> None:
        """Initialize commit history view.

        Args:
            repo_path: Repository working tree.
            config: User display settings.
        """
        super().__init__()
        self.repo_path = repo_path
        self.config = config
        self.screen_mode = config.screen_mode
        self.pool = HashPool()
        self.commits: list[Commit] = []
        self._pipe_sets: list[PipeSet] = []
        self._rows: list[Row] = []
        self._entries: list[Static] = []
        self._width = 0

    def compose(
            self,
    ) -> ComposeResult:
        """Compose commit history widgets.

        Yields:
            UI widgets for commit history display.
        """
        yield Header()
        with Horizontal():
            yield ListView(id="commit-list")
            yield CommitDetailPanel(id="commit-detail")
        yield Footer()

    async def on_mount(
            self,
    ) -> None:
        """Load commits when screen mounts."""
        self._apply_screen_mode()
        await self.action_refresh()

    # ---- Rendering ------------------------------------------------------------------------------------------

    @property
    def show_graph(
            self,
    ) -> bool:
        return self.config.should_show_graph(self.screen_mode)

    @property
    def selected_commit(
            self,
    ) -> Commit | None:
        index = self.query_one("#commit-list", ListView).index
        if index is None or not 0 <= index < len(self.commits):
            return None
        return self.commits[index]

    def _render_rows(
            self,
    ) -> list[Row]:
        if not self.show_graph:
            return []
        selected = self.selected_commit
        return render_aux(self._pipe_sets, self.commits, selected.hash if selected else None)

    def _entry_text(
            self,
            index: int,
    ) -> Text:
        row = self._rows[index] if self._rows else None
        return build_row_text(self.commits[index], row, self._width, self.config.author_colors)

    def _update_rows(
            self,
    ) -> None:
        new_rows = self._render_rows()
        changed = changed_rows(self._rows, new_rows)
        self._rows = new_rows
        for index in changed:
            self._entries[index].update(self._entry_text(index))

    def _apply_screen_mode(
            self,
    ) -> None:
        for mode in ("normal", "half", "full"):
            self.set_class(mode == self.screen_mode, f"-{mode}")
        self.app.sub_title = f"{self.repo_path.name} ({self.screen_mode})"

    # ---- Actions --------------------------------------------------------------------------------------------

    async def action_refresh(
            self,
    ) -> None:
        """Reload history from git and rebuild the list."""
        list_view = self.query_one("#commit-list", ListView)
        try:
            self.pool = HashPool()
            self.commits = load_commits(
                self.repo_path,
                self.pool,
                limit=self.config.commit_limit,
                all_branches=self.config.all_branches,
            )
            self._pipe_sets = get_pipe_sets(
                self.pool,
                self.commits,
                make_style_function(self.config.author_colors),
            )
        except (RuntimeError, ValueError) as load_error:
            self.notify(f"Error loading commits: {load_error}", severity="error", timeout=10)
            return

        # the first entry is selected right after the list is rebuilt
        selected = self.commits[0].hash if self.commits else None
        self._rows = render_aux(self._pipe_sets, self.commits, selected) if self.show_graph else []
        self._width = graph_width(self._rows)
        self._entries = [Static(self._entry_text(index)) for index in range(len(self.commits))]

        await list_view.clear()
        await list_view.extend([ListItem(entry) for entry in self._entries])
        if self.commits:
            list_view.index = 0
        else:
            self.query_one(CommitDetailPanel).show_commit(None)
            self.notify("No commits yet", severity="information")
        logger.debug(f"Showing {len(self.commits)} commits from {self.repo_path}")

    def on_list_view_highlighted(
            self,
            event: ListView.Highlighted,
    ) -> None:
        """Re-render the graph for the newly highlighted commit."""
        if not self._entries:
            return
        self._update_rows()
        self.query_one(CommitDetailPanel).show_commit(self.selected_commit, self.config.author_colors)

    def action_cursor_down(
            self,
    ) -> None:
        self.query_one("#commit-list", ListView).action_cursor_down()

    def action_cursor_up(
            self,
    ) -> None:
        self.query_one("#commit-list", ListView).action_cursor_up()

    def action_next_screen_mode(
            self,
    ) -> None:
        """Grow the commit panel (normal -> half -> full)."""
        self._set_screen_mode(next_screen_mode(self.screen_mode))

    def action_prev_screen_mode(
            self,
    ) -> None:
        self._set_screen_mode(prev_screen_mode(self.screen_mode))

    def _set_screen_mode(
            self,
            mode: str,
    ) -> None:
        was_showing = self.show_graph
        self.screen_mode = mode
        self._apply_screen_mode()
        if was_showing != self.show_graph:
            # graph visibility changed, so the padding width changes too
            self._rows = self._render_rows()
            self._width = graph_width(self._rows)
            for index, entry in enumerate(self._entries):
                entry.update(self._entry_text(index))
