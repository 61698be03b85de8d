"""GitGraph CLI Application.

Command-line interface that prints a repository's history with its commit
graph drawn beside each commit.

Execution Context:
    CLI application - invoked from terminal

Dependencies:
    - click: CLI framework
    - rich: Terminal formatting
    - gitgraph_core: Core library

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

__version__ = "0.1.0"
