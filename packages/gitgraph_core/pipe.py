"""Pipe model for the commit graph.

A pipe is one line segment of the graph spanning the gap between two rows.
A pipe set is the immutable, ordered tuple of pipes describing one row.

Execution Context:
    Library module - imported by the transition engine and renderer

Dependencies:
    - rich: Style type carried by each pipe

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from rich.style import Style

from gitgraph_core.hash_pool import equal_hashes


# ---- Pipe Types ---------------------------------------------------------------------------------------------


class PipeKind(IntEnum):
    """How a pipe relates to the row it belongs to.

    The numeric order is the tie-breaker when sorting a pipe set by column.
    """

    TERMINATES = 0
    STARTS = 1
    CONTINUES = 2


@dataclass(frozen=True)
class Pipe:
    """One line segment between row ``i`` (``from_pos``) and row ``i+1`` (``to_pos``).

    Attributes:
        from_pos: Column above the row.
        to_pos: Column below the row.
        from_hash: Commit the line comes from.
        to_hash: Commit the line leads to.
        kind: STARTS, CONTINUES or TERMINATES.
        style: Colour of the lineage, fixed when the pipe starts.
    """

    from_pos: int
    to_pos: int
    from_hash: str
    to_hash: str
    kind: PipeKind
    style: Style

    @property
    def left(
            self,
    ) -> int:
        return min(self.from_pos, self.to_pos)

    @property
    def right(
            self,
    ) -> int:
        return max(self.from_pos, self.to_pos)


PipeSet = tuple[Pipe, ...]


# ---- Invariant Checks ---------------------------------------------------------------------------------------


def validate_pipe_set(
        pipes: PipeSet,
        commit_hash: str | None = None,
) -> bool:
    """Check the column invariants of a pipe set.

    Intended for ``assert validate_pipe_set(...)`` so the checks vanish under
    ``python -O``.

    Args:
        pipes: Pipe set to check.
        commit_hash: Hash of the row's commit, to check STARTS/TERMINATES ends.

    Returns:
        True when every invariant holds.

    Raises:
        AssertionError: Describing the first violated invariant.
    """
    above: set[int] = set()
    below: set[int] = set()
    for pipe in pipes:
        if pipe.from_pos < 0 or pipe.to_pos < 0:
            raise AssertionError(f"negative column in {pipe}")
        if pipe.kind != PipeKind.STARTS:
            if pipe.from_pos in above:
                raise AssertionError(f"column {pipe.from_pos} claimed twice above the row")
            above.add(pipe.from_pos)
        if pipe.kind != PipeKind.TERMINATES:
            if pipe.to_pos in below:
                raise AssertionError(f"column {pipe.to_pos} claimed twice below the row")
            below.add(pipe.to_pos)
        if commit_hash is not None:
            if pipe.kind == PipeKind.STARTS and not equal_hashes(pipe.from_hash, commit_hash):
                raise AssertionError(f"{pipe} starts at another commit than {commit_hash}")
            if pipe.kind == PipeKind.TERMINATES and not equal_hashes(pipe.to_hash, commit_hash):
                raise AssertionError(f"{pipe} terminates at another commit than {commit_hash}")
    return True
