"""GitGraph CLI entry point.

Orchestrator for the GitGraph command-line interface. Registers all
command modules and provides the main entry point.

Execution Context:
    CLI application - run via `python main.py` or `gitgraph` command

Dependencies:
    - click: CLI framework
    - gitgraph_core: Core library

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

import logging
import sys

import click

from gitgraph_cli import __version__
from gitgraph_cli.commands.config import config
from gitgraph_cli.commands.log import log


# ---- CLI Group ----------------------------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="gitgraph")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log debug output (git invocations, commit counts) to stderr.",
)
def cli(
        verbose: bool,
) -> None:
    """GitGraph - Commit graphs for git repositories.

    Draws the branch and merge structure of a repository's history beside
    each commit, like `git log --graph`, with lines coloured by author.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )


# ---- Register Commands --------------------------------------------------------------------------------------


cli.add_command(log)
cli.add_command(config)


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for GitGraph CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        cli()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
