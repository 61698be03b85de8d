"""Shared test configuration and fixtures for gitgraph_core tests.

Provides:
- a fresh ``HashPool`` per test;
- a plain style function that colours every line the same;
- ``generate_commits``: a seeded random history generator producing
  well-ordered commit lists with merges and shared parents.
"""
from __future__ import annotations

import random
from collections.abc import Callable

import pytest
from rich.style import Style

from gitgraph_core.hash_pool import HashPool
from gitgraph_core.models import Commit
from gitgraph_core.renderer import DEFAULT_STYLE

AUTHOR_POOL = [chr(code) for code in range(ord("A"), ord("Z") + 1)]


@pytest.fixture
def pool() -> HashPool:
    """Create an empty hash pool."""
    return HashPool()


@pytest.fixture
def default_style() -> Callable[[Commit], Style]:
    """Style function returning the default foreground for every commit."""
    return lambda commit: DEFAULT_STYLE


@pytest.fixture
def make_commits(pool: HashPool) -> Callable[..., list[Commit]]:
    """Build commits from ``(hash, [parents])`` pairs."""

    def _make(*specs: tuple[str, list[str]]) -> list[Commit]:
        return [Commit.create(pool, commit_hash, parents) for commit_hash, parents in specs]

    return _make


def generate_commits(
        pool: HashPool,
        count: int,
        seed: int = 1234,
) -> list[Commit]:
    """Generate a random but well-ordered history.

    Each step takes a pending commit, gives it one or two parents (a fresh
    commit or, mostly, another pending one) and emits it. Pending commits are
    only ever emitted after every child that names them.
    """
    rnd = random.Random(seed)
    # pending entries: [hash, author, parents]
    pending: list[list] = [["a", "A", []]]
    emitted: list[list] = []

    while len(emitted) < count and pending:
        current = pending.pop(rnd.randrange(len(pending)))
        parent_count = rnd.randint(1, 2)
        for j in range(parent_count):
            reuse_parent = rnd.randrange(6) != 1 and j <= len(pending) - 1 and j != 0
            if reuse_parent:
                parent = pending[j]
            else:
                parent = [f"{current[0]}{j}", rnd.choice(AUTHOR_POOL), []]
                pending.append(parent)
            current[2].append(parent[0])
        emitted.append(current)

    return [
        Commit.create(pool, commit_hash, parents, author_name=author)
        for commit_hash, author, parents in emitted
    ]


@pytest.fixture
def random_history(pool: HashPool) -> Callable[..., list[Commit]]:
    """Generate seeded random histories interned into the test's pool."""

    def _generate(count: int, seed: int = 1234) -> list[Commit]:
        return generate_commits(pool, count, seed)

    return _generate
