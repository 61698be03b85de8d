"""Commit graph builder.

Folds the transition engine over an ordered commit list and renders one row
per commit, analogous to ``git log --graph``.

Execution Context:
    Library module - imported by the CLI log command and the TUI history screen

Dependencies:
    - rich: Segment/Text output types

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.segment import Segment
from rich.text import Text

from gitgraph_core.hash_pool import HashPool
from gitgraph_core.models import START_COMMIT_HASH
from gitgraph_core.models import Commit
from gitgraph_core.pipe import Pipe
from gitgraph_core.pipe import PipeKind
from gitgraph_core.pipe import PipeSet
from gitgraph_core.renderer import DEFAULT_STYLE
from gitgraph_core.renderer import Row
from gitgraph_core.renderer import render_pipe_set
from gitgraph_core.transition import StyleFunction
from gitgraph_core.transition import get_next_pipes

logger = logging.getLogger(__name__)


# ---- Graph Building -----------------------------------------------------------------------------------------


def get_pipe_sets(
        pool: HashPool,
        commits: Sequence[Commit],
        get_style: StyleFunction,
) -> list[PipeSet]:
    """Lay out the whole graph.

    Args:
        pool: Pool every commit hash was interned into.
        commits: Commits, children before parents.
        get_style: Base style for the lines a commit opens.

    Returns:
        One pipe set per commit, in order.
    """
    if not commits:
        return []

    pipes: PipeSet = (
        Pipe(
            from_pos=0,
            to_pos=0,
            from_hash=pool.add(START_COMMIT_HASH),
            to_hash=commits[0].hash,
            kind=PipeKind.STARTS,
            style=DEFAULT_STYLE,
        ),
    )

    pipe_sets = []
    for commit in commits:
        pipes = get_next_pipes(pool, pipes, commit, get_style)
        pipe_sets.append(pipes)
    return pipe_sets


def render_aux(
        pipe_sets: Sequence[PipeSet],
        commits: Sequence[Commit],
        selected_hash: str | None,
) -> list[Row]:
    """Render previously computed pipe sets.

    Cheap compared to ``get_pipe_sets``; callers keep the pipe sets and only
    re-run this when the selection changes.

    Args:
        pipe_sets: Output of ``get_pipe_sets`` for ``commits``.
        commits: The commits the pipe sets were built from.
        selected_hash: Interned hash of the selected commit, if any.

    Returns:
        One rendered row per pipe set.
    """
    rows = []
    for i, pipe_set in enumerate(pipe_sets):
        prev_commit = commits[i - 1] if i > 0 else None
        rows.append(render_pipe_set(pipe_set, selected_hash, prev_commit))
    return rows


def render_commit_graph(
        pool: HashPool,
        commits: Sequence[Commit],
        selected_hash: str | None,
        get_style: StyleFunction,
) -> list[Row]:
    """Render the commit graph, one row per commit.

    Args:
        pool: Pool every commit hash was interned into.
        commits: Commits, children before parents.
        selected_hash: Interned hash of the selected commit, if any.
        get_style: Base style for the lines a commit opens.

    Returns:
        Rendered rows in commit order.
    """
    pipe_sets = get_pipe_sets(pool, commits, get_style)
    if not pipe_sets:
        return []
    logger.debug(f"Rendering graph for {len(commits)} commits")
    return render_aux(pipe_sets, commits, selected_hash)


# ---- Output Helpers -----------------------------------------------------------------------------------------


def row_to_text(
        row: Row,
) -> Text:
    """Convert a rendered row to rich Text."""
    return Text.assemble(*((segment.text, segment.style) for segment in row))


def row_to_plain(
        row: Row,
) -> str:
    return "".join(segment.text for segment in row)


def graph_width(
        rows: Sequence[Row],
) -> int:
    """Widest row in characters, for aligning the text beside the graph."""
    return max((len(row_to_plain(row)) for row in rows), default=0)
