"""Data models for gitgraph.

Defines the commit record consumed by the graph renderer and the history
views, plus the sentinel hashes the layout uses at the ends of the graph.

Execution Context:
    Library module - imported by other gitgraph_core modules

Dependencies:
    - dataclasses: Data class decorators

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from gitgraph_core.hash_pool import HashPool


# ---- Sentinel Hashes ----------------------------------------------------------------------------------------

# git's well-known empty tree; root commits draw a line toward it
EMPTY_TREE_COMMIT_HASH = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

# source of the synthetic pipe that feeds the first row
START_COMMIT_HASH = "START"


# ---- Data Model Classes -------------------------------------------------------------------------------------


@dataclass(frozen=True)
class Commit:
    """A commit as seen by the graph renderer and the log views.

    ``hash`` and ``parents`` must be tokens from the caller's ``HashPool``.
    The remaining fields are display metadata and never affect layout.

    Attributes:
        hash: Interned commit hash.
        parents: Interned parent hashes, first parent first.
        name: Commit subject line.
        author_name: Author display name.
        author_email: Author email address.
        unix_timestamp: Author date as seconds since the epoch.
        refs: Decorations (branch and tag names) pointing at the commit.
    """

    hash: str
    parents: tuple[str, ...] = ()
    name: str = ""
    author_name: str = ""
    author_email: str = ""
    unix_timestamp: int = 0
    refs: tuple[str, ...] = ()

    @classmethod
    def create(
            cls,
            pool: HashPool,
            commit_hash: str,
            parents: list[str] | tuple[str, ...] = (),
            **metadata: Any,
    ) -> Commit:
        """Create a commit, interning its hash and parents.

        Args:
            pool: Pool to intern hashes into.
            commit_hash: Commit hash.
            parents: Parent hashes in order.
            **metadata: Display fields (name, author_name, ...).

        Returns:
            New Commit instance.
        """
        return cls(
            hash=pool.add(commit_hash),
            parents=tuple(pool.add(parent) for parent in parents),
            **metadata,
        )

    def is_first_commit(
            self,
    ) -> bool:
        """Whether the commit has no parents in the loaded history."""
        return not self.parents

    def is_merge(
            self,
    ) -> bool:
        """Whether the commit has more than one parent."""
        return len(self.parents) > 1

    def short_hash(
            self,
            length: int = 8,
    ) -> str:
        return self.hash[:length]

    def formatted_date(
            self,
            fmt: str = "%Y-%m-%d %H:%M",
    ) -> str:
        """Format the author date for display.

        Args:
            fmt: strftime format.

        Returns:
            Formatted local time, or an empty string when no date is known.
        """
        if not self.unix_timestamp:
            return ""
        return datetime.fromtimestamp(self.unix_timestamp).strftime(fmt)
