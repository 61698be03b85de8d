"""Commit hash interning for gitgraph.

Deduplicates hash strings so that the graph layout can compare hashes by
identity. Every commit and parent hash handed to the renderer must come from
the same pool.

Execution Context:
    Library module - owned by the caller, passed into graph functions

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

from collections.abc import Iterator


class HashPool:
    """Append-only pool of canonical hash strings.

    ``add`` returns the same ``str`` object for equal content, so callers can
    compare tokens with ``is``. The pool never evicts; a token stays valid for
    as long as the pool is alive.
    """

    def __init__(
            self,
    ) -> None:
        self._tokens: dict[str, str] = {}

    def add(
            self,
            value: str,
    ) -> str:
        """Intern a hash string.

        Args:
            value: Hash string to intern.

        Returns:
            The canonical instance for ``value``.
        """
        return self._tokens.setdefault(value, value)

    def __contains__(
            self,
            value: object,
    ) -> bool:
        return value in self._tokens

    def __len__(
            self,
    ) -> int:
        return len(self._tokens)

    def __iter__(
            self,
    ) -> Iterator[str]:
        return iter(self._tokens.values())


def equal_hashes(
        a: str | None,
        b: str | None,
) -> bool:
    """Compare two interned hashes.

    An empty or missing hash never matches anything, so an empty selection
    means "nothing selected".

    Args:
        a: First token.
        b: Second token.

    Returns:
        True if both are the same pooled token.
    """
    if not a or not b:
        return False
    return a is b
