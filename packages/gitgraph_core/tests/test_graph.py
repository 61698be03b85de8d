"""Tests for the commit graph builder.

Renders whole histories and compares the plain-text graph row by row, then
checks layout properties over randomly generated histories.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - gitgraph_core.graph: Module under test
"""
from __future__ import annotations

import pytest
from rich.style import Style
from rich.text import Text

from gitgraph_core.authors import make_style_function
from gitgraph_core.graph import get_pipe_sets
from gitgraph_core.graph import graph_width
from gitgraph_core.graph import render_aux
from gitgraph_core.graph import render_commit_graph
from gitgraph_core.graph import row_to_plain
from gitgraph_core.graph import row_to_text
from gitgraph_core.hash_pool import HashPool
from gitgraph_core.models import EMPTY_TREE_COMMIT_HASH
from gitgraph_core.models import START_COMMIT_HASH
from gitgraph_core.models import Commit
from gitgraph_core.pipe import PipeKind
from gitgraph_core.pipe import validate_pipe_set
from gitgraph_core.renderer import HIGHLIGHT_STYLE

# (name, [(hash, [parents])], expected "<hash> <graph>" lines)
GRAPH_CASES = [
    (
        "with some merges",
        [
            ("1", ["2"]),
            ("2", ["3"]),
            ("3", ["4"]),
            ("4", ["5", "7"]),
            ("7", ["5"]),
            ("5", ["8"]),
            ("8", ["9"]),
            ("9", ["A", "B"]),
            ("B", ["D"]),
            ("D", ["D"]),
            ("A", ["E"]),
            ("E", ["F"]),
            ("F", ["D"]),
            ("D", ["G"]),
        ],
        [
            "1 ◯",
            "2 ◯",
            "3 ◯",
            "4 ⏣─╮",
            "7 │ ◯",
            "5 ◯─╯",
            "8 ◯",
            "9 ⏣─╮",
            "B │ ◯",
            "D │ ◯",
            "A ◯ │",
            "E ◯ │",
            "F ◯ │",
            "D ◯─╯",
        ],
    ),
    (
        "with a path that has room to move to the left",
        [
            ("1", ["2"]),
            ("2", ["3", "4"]),
            ("4", ["3", "5"]),
            ("3", ["5"]),
            ("5", ["6"]),
            ("6", ["7"]),
        ],
        [
            "1 ◯",
            "2 ⏣─╮",
            "4 │ ⏣─╮",
            "3 ◯─╯ │",
            "5 ◯───╯",
            "6 ◯",
        ],
    ),
    (
        "with a new commit",
        [
            ("1", ["2"]),
            ("2", ["3", "4"]),
            ("4", ["3", "5"]),
            ("Z", ["Z"]),
            ("3", ["5"]),
            ("5", ["6"]),
            ("6", ["7"]),
        ],
        [
            "1 ◯",
            "2 ⏣─╮",
            "4 │ ⏣─╮",
            "Z │ │ │ ◯",
            "3 ◯─╯ │ │",
            "5 ◯───╯ │",
            "6 ◯ ╭───╯",
        ],
    ),
    (
        "with a path that has room to move to the left and continues",
        [
            ("1", ["2"]),
            ("2", ["3", "4"]),
            ("3", ["5", "4"]),
            ("5", ["7", "8"]),
            ("4", ["7"]),
            ("7", ["11"]),
        ],
        [
            "1 ◯",
            "2 ⏣─╮",
            "3 ⏣─│─╮",
            "5 ⏣─│─│─╮",
            "4 │ ◯─╯ │",
            "7 ◯─╯ ╭─╯",
        ],
    ),
    (
        "with several merges closing at once",
        [
            ("1", ["2"]),
            ("2", ["3", "4"]),
            ("3", ["5", "4"]),
            ("5", ["7", "8"]),
            ("7", ["4", "A"]),
            ("4", ["B"]),
            ("B", ["C"]),
        ],
        [
            "1 ◯",
            "2 ⏣─╮",
            "3 ⏣─│─╮",
            "5 ⏣─│─│─╮",
            "7 ⏣─│─│─│─╮",
            "4 ◯─┴─╯ │ │",
            "B ◯ ╭───╯ │",
        ],
    ),
    (
        "with a merge into a line still open",
        [
            ("1", ["2", "3"]),
            ("3", ["2"]),
            ("2", ["4", "5"]),
            ("4", ["6", "7"]),
            ("6", ["8"]),
        ],
        [
            "1 ⏣─╮",
            "3 │ ◯",
            "2 ⏣─│",
            "4 ⏣─│─╮",
            "6 ◯ │ │",
        ],
    ),
    (
        "new merge path fills gap before continuing path on right",
        [
            ("1", ["2", "3", "4", "5"]),
            ("4", ["2"]),
            ("2", ["A"]),
            ("A", ["6", "B"]),
            ("B", ["C"]),
        ],
        [
            "1 ⏣─┬─┬─╮",
            "4 │ │ ◯ │",
            "2 ◯─│─╯ │",
            "A ⏣─│─╮ │",
            "B │ │ ◯ │",
        ],
    ),
    (
        "with lines sliding left one row at a time",
        [
            ("1", ["2"]),
            ("2", ["3", "4"]),
            ("3", ["5", "4"]),
            ("5", ["7", "8"]),
            ("7", ["4", "A"]),
            ("4", ["B"]),
            ("B", ["C"]),
            ("C", ["D"]),
        ],
        [
            "1 ◯",
            "2 ⏣─╮",
            "3 ⏣─│─╮",
            "5 ⏣─│─│─╮",
            "7 ⏣─│─│─│─╮",
            "4 ◯─┴─╯ │ │",
            "B ◯ ╭───╯ │",
            "C ◯ │ ╭───╯",
        ],
    ),
    (
        "with many lines sliding left",
        [
            ("1", ["2"]),
            ("2", ["3", "4"]),
            ("3", ["5", "4"]),
            ("5", ["7", "G"]),
            ("7", ["8", "A"]),
            ("8", ["4", "E"]),
            ("4", ["B"]),
            ("B", ["C"]),
            ("C", ["D"]),
            ("D", ["F"]),
        ],
        [
            "1 ◯",
            "2 ⏣─╮",
            "3 ⏣─│─╮",
            "5 ⏣─│─│─╮",
            "7 ⏣─│─│─│─╮",
            "8 ⏣─│─│─│─│─╮",
            "4 ◯─┴─╯ │ │ │",
            "B ◯ ╭───╯ │ │",
            "C ◯ │ ╭───╯ │",
            "D ◯ │ │ ╭───╯",
        ],
    ),
]


def _render_plain(pool: HashPool, commits: list[Commit], get_style) -> list[str]:
    rows = render_commit_graph(pool, commits, pool.add("blah"), get_style)
    return [f"{commit.hash} {row_to_plain(row)}".strip() for commit, row in zip(commits, rows)]


# ---- Whole Graphs -------------------------------------------------------------------------------------------


class TestRenderCommitGraph:
    """Tests for render_commit_graph on fixed histories."""

    @pytest.mark.parametrize(
        ("specs", "expected"),
        [case[1:] for case in GRAPH_CASES],
        ids=[case[0] for case in GRAPH_CASES],
    )
    def test_graph_output(self, pool: HashPool, default_style, make_commits, specs, expected) -> None:
        """Rendered graph matches the expected drawing row for row."""
        commits = make_commits(*specs)

        assert _render_plain(pool, commits, default_style) == expected

    def test_linear_chain(self, pool: HashPool, default_style, make_commits) -> None:
        """A single-parent chain is a column of plain nodes."""
        commits = make_commits(("1", ["2"]), ("2", ["3"]), ("3", ["4"]), ("4", []))

        rows = render_commit_graph(pool, commits, None, default_style)

        assert [row_to_plain(row) for row in rows] == ["◯ "] * 4

    def test_merge_closing_one_row_later(self, pool: HashPool, default_style, make_commits) -> None:
        """A merge whose side branch rejoins on the next commit."""
        commits = make_commits(("4", ["5", "7"]), ("7", ["5"]), ("5", []))

        assert _render_plain(pool, commits, default_style) == ["4 ⏣─╮", "7 │ ◯", "5 ◯─╯"]

    def test_root_commit_is_last_row_of_branch(self, pool: HashPool, default_style, make_commits) -> None:
        """A root opens exactly one line, toward the empty tree, in its own column."""
        commits = make_commits(("a", ["r"]), ("r", []))

        pipe_sets = get_pipe_sets(pool, commits, default_style)

        root_starts = [pipe for pipe in pipe_sets[-1] if pipe.kind == PipeKind.STARTS]
        assert len(root_starts) == 1
        assert root_starts[0].to_hash is pool.add(EMPTY_TREE_COMMIT_HASH)
        assert root_starts[0].to_pos == 0

    def test_empty_history(self, pool: HashPool, default_style) -> None:
        assert render_commit_graph(pool, [], None, default_style) == []
        assert get_pipe_sets(pool, [], default_style) == []

    def test_selected_commit_node_is_highlighted(self, pool: HashPool, default_style, make_commits) -> None:
        """The selected commit's own node and its outgoing lines use the highlight style."""
        commits = make_commits(("1", ["2"]), ("2", ["3", "4"]), ("4", ["3"]), ("3", []))

        rows = render_commit_graph(pool, commits, pool.add("2"), default_style)

        assert rows[1][0].style == HIGHLIGHT_STYLE
        assert rows[1][1].style == HIGHLIGHT_STYLE
        assert all(segment.style != HIGHLIGHT_STYLE for segment in rows[0])

    def test_render_aux_reuses_pipe_sets(self, pool: HashPool, default_style, make_commits) -> None:
        """Re-rendering cached pipe sets gives the same rows as a full render."""
        commits = make_commits(("1", ["2", "3"]), ("3", ["2"]), ("2", []))
        pipe_sets = get_pipe_sets(pool, commits, default_style)

        for selected in ["1", "2", "3", None]:
            token = pool.add(selected) if selected else None
            assert render_aux(pipe_sets, commits, token) == render_commit_graph(
                pool, commits, token, default_style
            )


# ---- Output Helpers -----------------------------------------------------------------------------------------


class TestOutputHelpers:
    """Tests for row conversion helpers."""

    def test_row_to_text_keeps_styles(self, pool: HashPool, make_commits) -> None:
        red = Style(color="red")
        commits = make_commits(("1", ["2", "3"]))

        rows = render_commit_graph(pool, commits, None, lambda commit: red)
        text = row_to_text(rows[0])

        assert isinstance(text, Text)
        assert text.plain == "⏣─╮ "
        assert all(span.style == red for span in text.spans)

    def test_graph_width(self, pool: HashPool, default_style, make_commits) -> None:
        commits = make_commits(("1", ["2", "3"]), ("3", ["2"]), ("2", []))

        rows = render_commit_graph(pool, commits, None, default_style)

        assert graph_width(rows) == 4
        assert graph_width([]) == 0


# ---- Layout Properties --------------------------------------------------------------------------------------


class TestLayoutProperties:
    """Properties that must hold for any well-ordered history."""

    @pytest.fixture(params=[1, 7, 42, 1234, 9001])
    def history(self, request, random_history) -> list[Commit]:
        return random_history(60, seed=request.param)

    def test_one_row_per_commit(self, pool: HashPool, history: list[Commit]) -> None:
        rows = render_commit_graph(pool, history, None, make_style_function())

        assert len(rows) == len(history)

    def test_columns_never_claimed_twice(self, pool: HashPool, history: list[Commit]) -> None:
        """No two lines share a column above or below any row."""
        pipe_sets = get_pipe_sets(pool, history, make_style_function())

        for commit, pipes in zip(history, pipe_sets):
            assert validate_pipe_set(pipes, commit.hash)

    def test_lines_start_and_end_at_their_commit(self, pool: HashPool, history: list[Commit]) -> None:
        pipe_sets = get_pipe_sets(pool, history, make_style_function())

        for commit, pipes in zip(history, pipe_sets):
            for pipe in pipes:
                if pipe.kind == PipeKind.STARTS:
                    assert pipe.from_hash is commit.hash
                elif pipe.kind == PipeKind.TERMINATES:
                    assert pipe.to_hash is commit.hash

    def test_lineage_style_is_stable(self, pool: HashPool, history: list[Commit]) -> None:
        """A line keeps the style it started with on every later row."""
        pipe_sets = get_pipe_sets(pool, history, make_style_function())

        start_token = pool.add(START_COMMIT_HASH)
        started: dict[tuple[int, int], Style] = {}
        for pipes in pipe_sets:
            for pipe in pipes:
                if pipe.from_hash is start_token:
                    continue
                key = (id(pipe.from_hash), id(pipe.to_hash))
                if pipe.kind == PipeKind.STARTS:
                    started[key] = pipe.style
                else:
                    assert started[key] == pipe.style

    def test_rendering_is_idempotent(self, pool: HashPool, history: list[Commit]) -> None:
        get_style = make_style_function()
        selected = history[len(history) // 2].hash

        first = render_commit_graph(pool, history, selected, get_style)
        second = render_commit_graph(pool, history, selected, get_style)

        assert first == second

    def test_highlight_only_on_selected_lines(self, pool: HashPool, history: list[Commit]) -> None:
        """Only rows carrying a line from the selected commit show the highlight."""
        get_style = make_style_function()
        selected = history[len(history) // 3].hash
        pipe_sets = get_pipe_sets(pool, history, get_style)

        rows = render_aux(pipe_sets, history, selected)

        for commit, pipes, row in zip(history, pipe_sets, rows):
            has_selected_line = any(pipe.from_hash is selected for pipe in pipes)
            if not has_selected_line:
                assert all(segment.style != HIGHLIGHT_STYLE for segment in row)
            if commit.hash is selected:
                commit_pos = next(p.from_pos for p in pipes if p.kind == PipeKind.STARTS)
                assert row[commit_pos * 2].style == HIGHLIGHT_STYLE

