"""GitGraph log command.

Shows commit history with the commit graph drawn beside each commit.

Execution Context:
    CLI command - invoked via `gitgraph log`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitgraph_core: Graph rendering and history loading

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import click
from rich.console import Console
from rich.text import Text

from gitgraph_core.authors import author_style
from gitgraph_core.authors import make_style_function
from gitgraph_core.config import load_config
from gitgraph_core.graph import graph_width
from gitgraph_core.graph import render_commit_graph
from gitgraph_core.graph import row_to_text
from gitgraph_core.hash_pool import HashPool
from gitgraph_core.history import find_repository
from gitgraph_core.history import load_commits
from gitgraph_core.models import Commit

console = Console()


# ---- Helpers ------------------------------------------------------------------------------------------------


def resolve_selection(
        commits: Sequence[Commit],
        prefix: str | None,
) -> str | None:
    """Find the commit a (possibly abbreviated) hash refers to.

    Args:
        commits: Loaded commits.
        prefix: Full or abbreviated hash.

    Returns:
        The commit's interned hash, or None when nothing is selected.

    Raises:
        click.ClickException: If no loaded commit matches, or several do.
    """
    if not prefix:
        return None

    matches = [commit.hash for commit in commits if commit.hash.startswith(prefix)]
    if not matches:
        raise click.ClickException(f"Unknown commit '{prefix}'")
    if len(matches) > 1:
        raise click.ClickException(f"Ambiguous commit '{prefix}' matches {len(matches)} commits")
    return matches[0]


def format_commit_line(
        commit: Commit,
        graph: Text | None,
        width: int,
        author_colors: dict[str, str],
) -> Text:
    """Build one output line: graph, short hash, refs, subject and author."""
    line = Text()
    if graph is not None:
        line.append_text(graph)
        line.pad_right(width - len(graph))
    line.append(commit.short_hash(), style="yellow")
    if commit.refs:
        line.append(f" ({', '.join(commit.refs)})", style="bold green")
    line.append(f" {commit.name}")
    if commit.author_name:
        line.append(f" <{commit.author_name}>", style=author_style(commit.author_name, author_colors))
    return line


# ---- Log Command --------------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--limit",
    "-n",
    type=int,
    default=None,
    help="Maximum number of commits to show (defaults to the configured commit limit).",
)
@click.option(
    "--all",
    "all_branches",
    is_flag=True,
    help="Show commits reachable from every ref, not only HEAD.",
)
@click.option(
    "--select",
    "-s",
    default=None,
    help="Highlight the lines of this commit (full or abbreviated hash).",
)
@click.option(
    "--path",
    "filter_path",
    default=None,
    help="Only show commits touching this path.",
)
@click.option(
    "--no-graph",
    is_flag=True,
    help="Print the commit list without the graph.",
)
@click.option(
    "--directory",
    "-C",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Run as if started in this directory.",
)
def log(
        limit: int | None,
        all_branches: bool,
        select: str | None,
        filter_path: str | None,
        no_graph: bool,
        directory: Path | None,
) -> None:
    """Show commit history with its graph.

    Commits are listed children first in topological order. Each line
    starts with the graph, then the short hash, refs, subject and author.

    Examples:
        gitgraph log
        gitgraph log -n 50 --all
        gitgraph log --select 1a2b3c4d
        gitgraph log -C ../other-repo --path src/
    """
    try:
        repo_path = find_repository(directory)

        if not repo_path:
            raise click.ClickException("Not a git repository")

        user_config = load_config()
        pool = HashPool()
        commits = load_commits(
            repo_path,
            pool,
            limit=limit or user_config.commit_limit,
            all_branches=all_branches or user_config.all_branches,
            filter_path=filter_path,
        )

        if not commits:
            console.print("[dim]No commits yet[/dim]")
            return

        selected_hash = resolve_selection(commits, select)

        graphs: list[Text | None] = [None] * len(commits)
        width = 0
        # the CLI prints the whole history, which counts as a maximised view
        if not no_graph and user_config.should_show_graph("full"):
            get_style = make_style_function(user_config.author_colors)
            rows = render_commit_graph(pool, commits, selected_hash, get_style)
            graphs = [row_to_text(row) for row in rows]
            width = graph_width(rows)

        for commit, graph in zip(commits, graphs):
            line = format_commit_line(commit, graph, width, user_config.author_colors)
            console.print(line, soft_wrap=True)

    except click.ClickException:
        raise
    except Exception as log_error:
        msg = f"Log failed: {log_error}"
        raise click.ClickException(msg) from log_error
