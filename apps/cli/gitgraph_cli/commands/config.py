"""GitGraph config command.

Manages the user's display settings.

Execution Context:
    CLI command - invoked via `gitgraph config`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitgraph_core: Config storage and validation

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

import click
from rich.console import Console

from gitgraph_core.authors import parse_color
from gitgraph_core.config import SCREEN_MODES
from gitgraph_core.config import SHOW_GRAPH_VALUES
from gitgraph_core.config import GraphConfig
from gitgraph_core.config import default_config_path
from gitgraph_core.config import load_config

console = Console()


def _parse_author_color(
        value: str,
) -> tuple[str, str]:
    name, sep, color = value.partition("=")
    if not sep or not name:
        raise click.ClickException(f"Expected NAME=COLOR, got '{value}'")
    return name, color


def _show_config(
        config_obj: GraphConfig,
) -> None:
    console.print("[bold]GitGraph Configuration:[/bold]")
    console.print()
    console.print(f"  [bold]File:[/bold] {default_config_path()}")
    console.print(f"  [bold]Show Graph:[/bold] {config_obj.show_graph}")
    console.print(f"  [bold]Screen Mode:[/bold] {config_obj.screen_mode}")
    console.print(f"  [bold]Commit Limit:[/bold] {config_obj.commit_limit}")
    console.print(f"  [bold]All Branches:[/bold] {'enabled' if config_obj.all_branches else 'disabled'}")
    if config_obj.author_colors:
        console.print("  [bold]Author Colours:[/bold]")
        for name, color in sorted(config_obj.author_colors.items()):
            console.print(f"    {name}: [{parse_color(color)}]{color}[/]", highlight=False)
    else:
        console.print("  [bold]Author Colours:[/bold] [dim](hashed from author name)[/dim]")
    console.print()


# ---- Config Command -----------------------------------------------------------------------------------------


@click.command()
@click.option(
    "--show-graph",
    type=click.Choice(SHOW_GRAPH_VALUES),
    default=None,
    help="When to draw the commit graph.",
)
@click.option(
    "--screen-mode",
    type=click.Choice(SCREEN_MODES),
    default=None,
    help="Initial panel size of the TUI.",
)
@click.option(
    "--commit-limit",
    type=int,
    default=None,
    help="Maximum number of commits to load.",
)
@click.option(
    "--all-branches/--no-all-branches",
    "all_branches",
    default=None,
    help="Show commits from every ref by default.",
)
@click.option(
    "--author-color",
    "author_colors",
    multiple=True,
    metavar="NAME=COLOR",
    help="Colour lines opened by an author ('*' for everyone, empty COLOR to unset).",
)
@click.option(
    "--show",
    is_flag=True,
    help="Print the configuration after applying changes.",
)
def config(
        show_graph: str | None,
        screen_mode: str | None,
        commit_limit: int | None,
        all_branches: bool | None,
        author_colors: tuple[str, ...],
        show: bool,
) -> None:
    """Manage display settings.

    Settings are stored in ~/.config/gitgraph/config.json, or in the file
    named by GITGRAPH_CONFIG.

    Examples:
        gitgraph config --show
        gitgraph config --show-graph when-maximised
        gitgraph config --commit-limit 1000
        gitgraph config --author-color "Jane Doe=#ff8800"
        gitgraph config --author-color "Jane Doe="
    """
    try:
        config_path = default_config_path()
        config_obj = load_config(config_path)
        changes_made = False

        if show_graph is not None:
            config_obj.show_graph = show_graph
            changes_made = True
            console.print(f"[green]Show graph set to '{show_graph}'[/green]")

        if screen_mode is not None:
            config_obj.screen_mode = screen_mode
            changes_made = True
            console.print(f"[green]Screen mode set to '{screen_mode}'[/green]")

        if commit_limit is not None:
            config_obj.commit_limit = commit_limit
            changes_made = True
            console.print(f"[green]Commit limit set to {commit_limit}[/green]")

        if all_branches is not None:
            config_obj.all_branches = all_branches
            changes_made = True
            console.print(f"[green]All branches {'enabled' if all_branches else 'disabled'}[/green]")

        for value in author_colors:
            name, color = _parse_author_color(value)
            if color:
                config_obj.author_colors[name] = color
                console.print(f"[green]Colour for '{name}' set to '{color}'[/green]", highlight=False)
            elif config_obj.author_colors.pop(name, None) is not None:
                console.print(f"[green]Colour for '{name}' removed[/green]")
            changes_made = True

        if changes_made:
            config_obj.validate()
            config_obj.save(config_path)

        if show or not changes_made:
            _show_config(config_obj)

    except click.ClickException:
        raise
    except Exception as config_error:
        msg = f"Config operation failed: {config_error}"
        raise click.ClickException(msg) from config_error
