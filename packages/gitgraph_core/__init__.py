"""GitGraph Core Library.

Provides the commit-graph layout and rendering used by the gitgraph CLI and
TUI, plus history loading from git, author colouring and user configuration.

Execution Context:
    Library package - imported by CLI and other applications

Dependencies:
    - rich: Styled output types

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

from gitgraph_core.graph import get_pipe_sets
from gitgraph_core.graph import render_aux
from gitgraph_core.graph import render_commit_graph
from gitgraph_core.graph import row_to_plain
from gitgraph_core.graph import row_to_text
from gitgraph_core.hash_pool import HashPool
from gitgraph_core.models import Commit
from gitgraph_core.pipe import Pipe
from gitgraph_core.pipe import PipeKind

__version__ = "0.1.0"

__all__ = [
    "Commit",
    "HashPool",
    "Pipe",
    "PipeKind",
    "get_pipe_sets",
    "render_aux",
    "render_commit_graph",
    "row_to_plain",
    "row_to_text",
    "__version__",
]
