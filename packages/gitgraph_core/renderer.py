"""Row renderer for the commit graph.

Turns one pipe set into a row of styled segments: the commit's node or merge
glyph plus the box-drawing connectors of every line crossing the row.

Execution Context:
    Library module - called once per row by gitgraph_core.graph

Dependencies:
    - rich: Style and Segment types for the rendered cells

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

from enum import Enum

from rich.segment import Segment
from rich.style import Style

from gitgraph_core.hash_pool import equal_hashes
from gitgraph_core.models import Commit
from gitgraph_core.pipe import Pipe
from gitgraph_core.pipe import PipeKind
from gitgraph_core.pipe import PipeSet


# ---- Configuration Constants --------------------------------------------------------------------------------


COMMIT_SYMBOL = "◯"
MERGE_SYMBOL = "⏣"

DEFAULT_STYLE = Style(color="default")
HIGHLIGHT_STYLE = Style(color="bright_white", bold=True)

# (up, down, left, right) -> (cell glyph, glyph in the gap to its right)
BOX_DRAWING_CHARS: dict[tuple[bool, bool, bool, bool], tuple[str, str]] = {
    (True, True, True, True): ("│", "─"),
    (True, True, True, False): ("│", " "),
    (True, True, False, True): ("│", "─"),
    (True, True, False, False): ("│", " "),
    (True, False, True, True): ("┴", "─"),
    (True, False, True, False): ("╯", " "),
    (True, False, False, True): ("╰", "─"),
    (True, False, False, False): ("╵", " "),
    (False, True, True, True): ("┬", "─"),
    (False, True, True, False): ("╮", " "),
    (False, True, False, True): ("╭", "─"),
    (False, True, False, False): ("╷", " "),
    (False, False, True, True): ("─", "─"),
    (False, False, True, False): ("─", " "),
    (False, False, False, True): ("─", "─"),
    (False, False, False, False): (" ", " "),
}

Row = list[Segment]


# ---- Cells --------------------------------------------------------------------------------------------------


class CellType(Enum):
    CONNECTION = "connection"
    COMMIT = "commit"
    MERGE = "merge"


class Cell:
    """One column of a rendered row.

    Tracks which directions lines leave the cell in, the style of the cell's
    own glyph and, separately, the style of the connector drawn in the gap to
    its right.
    """

    def __init__(
            self,
            style: Style = DEFAULT_STYLE,
    ) -> None:
        self.up = False
        self.down = False
        self.left = False
        self.right = False
        self.cell_type = CellType.CONNECTION
        self.style = style
        self.right_style: Style | None = None

    def reset(
            self,
    ) -> None:
        """Drop all connections, keeping styles."""
        self.up = False
        self.down = False
        self.left = False
        self.right = False

    def set_up(
            self,
            style: Style,
    ) -> Cell:
        self.up = True
        self.style = style
        return self

    def set_down(
            self,
            style: Style,
    ) -> Cell:
        self.down = True
        self.style = style
        return self

    def set_left(
            self,
            style: Style,
    ) -> Cell:
        self.left = True
        # a vertical line keeps its colour against a horizontal one
        if not self.up and not self.down:
            self.style = style
        return self

    def set_right(
            self,
            style: Style,
            override: bool,
    ) -> Cell:
        self.right = True
        if self.right_style is None or override:
            self.right_style = style
        return self

    def set_style(
            self,
            style: Style,
    ) -> Cell:
        self.style = style
        return self

    def set_type(
            self,
            cell_type: CellType,
    ) -> Cell:
        self.cell_type = cell_type
        return self

    def render(
            self,
    ) -> list[Segment]:
        """Render the cell as its glyph and the gap glyph to its right.

        Returns:
            Two segments; a blank gap carries no style.
        """
        first, second = BOX_DRAWING_CHARS[(self.up, self.down, self.left, self.right)]
        if self.cell_type == CellType.COMMIT:
            first = COMMIT_SYMBOL
        elif self.cell_type == CellType.MERGE:
            first = MERGE_SYMBOL

        right_style = self.style if self.right_style is None else self.right_style
        if second == " ":
            gap = Segment(" ")
        else:
            gap = Segment(second, right_style)
        return [Segment(first, self.style), gap]


# ---- Row Rendering ------------------------------------------------------------------------------------------


def _render_pipe(
        cells: list[Cell],
        pipe: Pipe,
        style: Style,
        override_right_style: bool,
) -> None:
    left, right = pipe.left, pipe.right
    if left != right:
        for i in range(left + 1, right):
            cells[i].set_left(style).set_right(style, override_right_style)
        cells[left].set_right(style, override_right_style)
        cells[right].set_left(style)

    if pipe.kind == PipeKind.STARTS:
        cells[pipe.to_pos].set_down(style)
    elif pipe.kind == PipeKind.TERMINATES:
        cells[pipe.from_pos].set_up(style)
    elif pipe.kind == PipeKind.CONTINUES:
        cells[pipe.to_pos].set_down(style)
        cells[pipe.from_pos].set_up(style)
    else:
        raise ValueError(f"Unknown pipe kind: {pipe.kind!r}")


def render_pipe_set(
        pipes: PipeSet,
        selected_hash: str | None,
        prev_commit: Commit | None,
) -> Row:
    """Render one pipe set as a row of styled segments.

    Args:
        pipes: Pipe set of the row, in the order the transition engine built it.
        selected_hash: Interned hash of the selected commit, if any.
        prev_commit: Commit drawn on the row above, if any.

    Returns:
        Two segments per column.
    """
    max_pos = 0
    commit_pos = 0
    start_count = 0
    for pipe in pipes:
        if pipe.kind == PipeKind.STARTS:
            start_count += 1
            commit_pos = pipe.from_pos
        elif pipe.kind == PipeKind.TERMINATES:
            commit_pos = pipe.to_pos
        max_pos = max(max_pos, pipe.right)
    is_merge = start_count > 1

    cells = [Cell() for _ in range(max_pos + 1)]

    # two adjacent commits are only both highlighted when a visible line joins them
    highlight = True
    if prev_commit is not None and equal_hashes(prev_commit.hash, selected_hash):
        highlight = any(
            equal_hashes(pipe.from_hash, selected_hash)
            and (pipe.kind != PipeKind.TERMINATES or pipe.from_pos != pipe.to_pos)
            for pipe in pipes
        )

    selected_pipes: list[Pipe] = []
    non_selected_pipes: list[Pipe] = []
    for pipe in pipes:
        if highlight and equal_hashes(pipe.from_hash, selected_hash):
            selected_pipes.append(pipe)
        else:
            non_selected_pipes.append(pipe)

    for pipe in non_selected_pipes:
        if pipe.kind == PipeKind.STARTS:
            _render_pipe(cells, pipe, pipe.style, True)

    for pipe in non_selected_pipes:
        if pipe.kind == PipeKind.STARTS:
            continue
        if pipe.kind == PipeKind.TERMINATES and pipe.from_pos == commit_pos and pipe.to_pos == commit_pos:
            continue
        _render_pipe(cells, pipe, pipe.style, False)

    # selected lines are drawn last so they win every cell they cross
    for pipe in selected_pipes:
        for i in range(pipe.left, pipe.right + 1):
            cells[i].reset()
    for pipe in selected_pipes:
        _render_pipe(cells, pipe, HIGHLIGHT_STYLE, True)
        if pipe.to_pos == commit_pos:
            cells[pipe.to_pos].set_style(HIGHLIGHT_STYLE)

    cells[commit_pos].set_type(CellType.MERGE if is_merge else CellType.COMMIT)

    row: Row = []
    for cell in cells:
        row.extend(cell.render())
    return row
