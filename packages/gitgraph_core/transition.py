"""Row transition engine for the commit graph.

Given the pipe set left by the previous row and the next commit, computes the
pipe set of the commit's own row: which lines end at the commit, which pass
by, and which new lines the commit opens toward its parents.

Execution Context:
    Library module - called once per commit by gitgraph_core.graph

Dependencies:
    - rich: Style values carried by pipes

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

from collections.abc import Callable

from rich.style import Style

from gitgraph_core.hash_pool import HashPool
from gitgraph_core.hash_pool import equal_hashes
from gitgraph_core.models import EMPTY_TREE_COMMIT_HASH
from gitgraph_core.models import Commit
from gitgraph_core.pipe import Pipe
from gitgraph_core.pipe import PipeKind
from gitgraph_core.pipe import PipeSet
from gitgraph_core.pipe import validate_pipe_set

StyleFunction = Callable[[Commit], Style]


# ---- Transition ---------------------------------------------------------------------------------------------


def get_next_pipes(
        pool: HashPool,
        prev_pipes: PipeSet,
        commit: Commit,
        get_style: StyleFunction,
) -> PipeSet:
    """Compute the pipe set for ``commit``'s row.

    Args:
        pool: Pool the commit hashes were interned into.
        prev_pipes: Pipe set of the previous row.
        commit: Commit drawn on this row.
        get_style: Base style for lines the commit opens.

    Returns:
        New pipe set sorted by (to_pos, kind).
    """
    max_pos = max((pipe.to_pos for pipe in prev_pipes), default=0)

    # lines that ended on the previous row play no part in this one
    current_pipes = [pipe for pipe in prev_pipes if pipe.kind != PipeKind.TERMINATES]

    # a commit nobody points at yet (a new tip under `git log --all`) goes on the far right
    pos = max_pos + 1
    for pipe in current_pipes:
        if equal_hashes(pipe.to_hash, commit.hash):
            pos = pipe.to_pos
            break

    # spots where a pipe on this row ends
    taken_spots: set[int] = {pos}
    # spots a pipe on this row starts on, ends on, or passes through
    traversed_spots: set[int] = set()

    if commit.is_first_commit():
        first_parent = pool.add(EMPTY_TREE_COMMIT_HASH)
    else:
        first_parent = commit.parents[0]

    commit_style = get_style(commit)
    new_pipes = [
        Pipe(
            from_pos=pos,
            to_pos=pos,
            from_hash=commit.hash,
            to_hash=first_parent,
            kind=PipeKind.STARTS,
            style=commit_style,
        )
    ]

    traversed_spots_for_continuing_pipes = {
        pipe.to_pos
        for pipe in current_pipes
        if not equal_hashes(pipe.to_hash, commit.hash)
    }

    def next_available_pos_for_continuing_pipe() -> int:
        i = 0
        while i in traversed_spots:
            i += 1
        return i

    def next_available_pos_for_new_pipe() -> int:
        # a new pipe may not end where another pipe ends, nor where a continuing pipe sits
        i = 0
        while i in taken_spots or i in traversed_spots_for_continuing_pipes:
            i += 1
        return i

    def traverse(from_pos: int, to_pos: int) -> None:
        left, right = min(from_pos, to_pos), max(from_pos, to_pos)
        traversed_spots.update(range(left, right + 1))
        taken_spots.add(to_pos)

    for pipe in current_pipes:
        if equal_hashes(pipe.to_hash, commit.hash):
            new_pipes.append(
                Pipe(
                    from_pos=pipe.to_pos,
                    to_pos=pos,
                    from_hash=pipe.from_hash,
                    to_hash=pipe.to_hash,
                    kind=PipeKind.TERMINATES,
                    style=pipe.style,
                )
            )
            traverse(pipe.to_pos, pos)
        elif pipe.to_pos < pos:
            available_pos = next_available_pos_for_continuing_pipe()
            new_pipes.append(
                Pipe(
                    from_pos=pipe.to_pos,
                    to_pos=available_pos,
                    from_hash=pipe.from_hash,
                    to_hash=pipe.to_hash,
                    kind=PipeKind.CONTINUES,
                    style=pipe.style,
                )
            )
            traverse(pipe.to_pos, available_pos)

    for parent in commit.parents[1:]:
        available_pos = next_available_pos_for_new_pipe()
        new_pipes.append(
            Pipe(
                from_pos=pos,
                to_pos=available_pos,
                from_hash=commit.hash,
                to_hash=parent,
                kind=PipeKind.STARTS,
                style=commit_style,
            )
        )
        taken_spots.add(available_pos)

    for pipe in current_pipes:
        if equal_hashes(pipe.to_hash, commit.hash) or pipe.to_pos <= pos:
            continue
        # slide left into free columns, but never past the commit
        last = pipe.to_pos
        for i in range(pipe.to_pos, pos, -1):
            if i in taken_spots or i in traversed_spots:
                break
            last = i
        new_pipes.append(
            Pipe(
                from_pos=pipe.to_pos,
                to_pos=last,
                from_hash=pipe.from_hash,
                to_hash=pipe.to_hash,
                kind=PipeKind.CONTINUES,
                style=pipe.style,
            )
        )
        traverse(pipe.to_pos, last)

    result = tuple(sorted(new_pipes, key=lambda pipe: (pipe.to_pos, pipe.kind)))
    assert validate_pipe_set(result, commit.hash)
    return result
