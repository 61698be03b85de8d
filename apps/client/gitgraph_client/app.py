"""GitGraph Client TUI Application.

Main application entry point for the GitGraph terminal user interface.
Opens the commit history of a repository with its graph.

Execution Context:
    TUI application - run via `gitgraph-client` command

Dependencies:
    - textual: TUI framework
    - gitgraph_core: Core library
    - rich: Terminal formatting

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from rich.console import Console
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from gitgraph_core.config import GraphConfig
from gitgraph_core.config import load_config
from gitgraph_core.history import find_repository

from gitgraph_client.screens.commit_history import CommitHistoryScreen

console = Console()


# ---- Main Application ---------------------------------------------------------------------------------------


class GitGraphClient(App):
    """GitGraph TUI Client Application.

    Interactive terminal interface for browsing a repository's history
    with its commit graph.
    """

    CSS = """
    Screen {
        background: $background;
    }

    #commit-list {
        width: 1fr;
        height: 100%;
    }

    #commit-detail {
        width: 50%;
        height: 100%;
        background: $panel;
        border-left: solid $primary;
        padding: 0 1;
    }

    .-half #commit-detail {
        width: 30%;
    }

    .-full #commit-detail {
        display: none;
    }

    .panel-title {
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    #welcome {
        padding: 1;
        text-align: center;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", key_display="Q"),
        Binding("l", "show_log", "Log", key_display="L"),
        Binding("?", "show_help", "Help", key_display="?"),
    ]

    TITLE = "GitGraph Client"
    SUB_TITLE = "Commit graphs for git repositories"

    def __init__(
            self,
            repo_path: Path | None = None,
            config: GraphConfig | None = None,
    ) -> None:
        """Initialize GitGraph Client.

        Args:
            repo_path: Path inside a git repository (optional, will search current directory).
            config: Display settings (loaded from the user config when omitted).
        """
        super().__init__()
        self.repo_path = repo_path
        self.config = config

    def compose(
            self,
    ) -> ComposeResult:
        """Compose the UI layout.

        Yields:
            UI widgets in layout order.
        """
        yield Header()
        yield Static("Looking for a git repository...", id="welcome")
        yield Footer()

    def on_mount(
            self,
    ) -> None:
        """Handle application mount event.

        Loads the user config, finds the repository and opens its history.
        """
        welcome = self.query_one("#welcome", Static)
        try:
            if self.config is None:
                self.config = load_config()
            self.repo_path = find_repository(self.repo_path)
        except (RuntimeError, ValueError) as init_error:
            welcome.update(f"[red]Error loading config:[/red] {init_error}")
            self.notify(f"Error loading config: {init_error}", severity="error", timeout=10)
            return

        if not self.repo_path:
            welcome.update("Not a git repository. Start from inside one or pass --repo.")
            return

        welcome.update(f"Repository: {self.repo_path}")
        self.action_show_log()

    def action_show_log(
            self,
    ) -> None:
        """Show commit log screen."""
        if not self.repo_path or self.config is None:
            self.notify("No repository loaded", severity="warning")
            return
        self.push_screen(CommitHistoryScreen(self.repo_path, self.config))

    def action_show_help(
            self,
    ) -> None:
        """Show help screen."""
        self.notify(
            "J/K move, R reloads, +/_ resize the commit panel, ESC quits",
            severity="information",
            timeout=5,
        )


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for GitGraph Client TUI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        description="GitGraph TUI Client - Browse a repository's commit graph"
    )
    parser.add_argument(
        "--repo",
        "-r",
        type=str,
        help="Path to git repository (default: search from current directory)",
    )
    parser.add_argument(
        "--cwd",
        "-C",
        type=str,
        help="Change to this directory before searching for repository",
    )

    args = parser.parse_args()

    if args.cwd:
        try:
            os.chdir(args.cwd)
        except OSError as chdir_error:
            console.print(f"[red]Failed to change directory: {chdir_error}[/red]")
            return 1

    try:
        repo_path = Path(args.repo).resolve() if args.repo else None
        app = GitGraphClient(repo_path=repo_path)
        app.run()
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Exited by user[/yellow]")
        return 0
    except Exception as app_error:
        console.print(f"[red]Error: {app_error}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
