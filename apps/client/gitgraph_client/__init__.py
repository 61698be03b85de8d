"""GitGraph Client - TUI for GitGraph.

Interactive terminal user interface showing a repository's commit graph,
with the selected commit's lines highlighted and its details beside the list.

Version: 0.1.0
Author: GitGraph Team
"""
from __future__ import annotations

__version__ = "0.1.0"
