"""Commit Detail Panel Widget.

Displays the selected commit beside the commit list.
Shows hash, refs, author, date, parents and subject.

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

from gitgraph_core.authors import author_style
from gitgraph_core.models import Commit


def format_commit_details(
        commit: Commit,
        author_colors: dict[str, str] | None = None,
) -> str:
    """Build the panel markup for a commit.

    Args:
        commit: Commit to describe.
        author_colors: Configured author colours.

    Returns:
        Rich markup text.
    """
    author = escape(commit.author_name or "Unknown")
    if commit.author_email:
        author += escape(f" <{commit.author_email}>")

    lines = [
        f"[bold yellow]{commit.hash}[/bold yellow]",
    ]
    if commit.refs:
        lines.append(f"[bold green]{escape(', '.join(commit.refs))}[/bold green]")
    lines.extend([
        "",
        f"[bold cyan]Author:[/bold cyan] [{author_style(commit.author_name, author_colors)}]{author}[/]",
        f"[bold cyan]Date:[/bold cyan]   {commit.formatted_date() or '(unknown)'}",
    ])
    if commit.is_first_commit():
        lines.append("[bold cyan]Parents:[/bold cyan] [dim](root commit)[/dim]")
    else:
        parents = " ".join(parent[:8] for parent in commit.parents)
        label = "Merge:" if commit.is_merge() else "Parent:"
        lines.append(f"[bold cyan]{label}[/bold cyan] {parents}")
    lines.extend(["", escape(commit.name)])
    return "\n".join(lines)


class CommitDetailPanel(Vertical):
    """Detail panel widget for the highlighted commit.

    Displays:
        - Full hash and refs
        - Author and date
        - Parent hashes
        - Subject line
    """

    def compose(
            self,
    ) -> ComposeResult:
        """Compose detail panel widgets.

        Yields:
            Static text widgets with commit details.
        """
        yield Static("Commit", classes="panel-title")
        yield Static("No commit selected", id="commit-info")

    def show_commit(
            self,
            commit: Commit | None,
            author_colors: dict[str, str] | None = None,
    ) -> None:
        """Display a commit, or the empty state for None."""
        info_widget = self.query_one("#commit-info", Static)
        if commit is None:
            info_widget.update("No commit selected")
            return
        info_widget.update(format_commit_details(commit, author_colors))
