"""User configuration for gitgraph.

Stores display preferences (graph visibility, screen mode, commit limit and
author colours) in a JSON file and validates enum-valued settings.

Execution Context:
    Library module - imported by the CLI and the TUI

Dependencies:
    - dataclasses: Data class decorators

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from gitgraph_core.authors import parse_color

logger = logging.getLogger(__name__)


# ---- Configuration Constants --------------------------------------------------------------------------------


CONFIG_ENV_VAR = "GITGRAPH_CONFIG"

SHOW_GRAPH_VALUES = ["always", "never", "when-maximised"]
SCREEN_MODES = ["normal", "half", "full"]

DEFAULT_COMMIT_LIMIT = 300


# ---- Config Model -------------------------------------------------------------------------------------------


@dataclass
class GraphConfig:
    """Display preferences stored in the user's config.json.

    Attributes:
        show_graph: When to draw the commit graph (always, never, when-maximised).
        screen_mode: Initial panel size of the TUI (normal, half, full).
        commit_limit: Maximum number of commits to load.
        all_branches: Show commits from every ref, not only HEAD.
        author_colors: Colour per author name; ``"*"`` applies to everyone.
    """

    show_graph: str = "always"
    screen_mode: str = "normal"
    commit_limit: int = DEFAULT_COMMIT_LIMIT
    all_branches: bool = False
    author_colors: dict[str, str] = field(default_factory=dict)

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization.

        Returns:
            Dictionary representation.
        """
        return {
            "show_graph": self.show_graph,
            "screen_mode": self.screen_mode,
            "commit_limit": self.commit_limit,
            "all_branches": self.all_branches,
            "author_colors": dict(self.author_colors),
        }

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> GraphConfig:
        """Create config from dictionary.

        Unknown keys are ignored so older binaries can read newer files.

        Args:
            data: Dictionary with config fields.

        Returns:
            GraphConfig instance.
        """
        unknown = set(data) - set(cls().to_dict())
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        return cls(
            show_graph=data.get("show_graph", "always"),
            screen_mode=data.get("screen_mode", "normal"),
            commit_limit=int(data.get("commit_limit", DEFAULT_COMMIT_LIMIT)),
            all_branches=bool(data.get("all_branches", False)),
            author_colors=dict(data.get("author_colors") or {}),
        )

    def validate(
            self,
    ) -> None:
        """Check every setting.

        Raises:
            ValueError: Naming the first invalid setting.
        """
        validate_enum("show_graph", self.show_graph, SHOW_GRAPH_VALUES)
        validate_enum("screen_mode", self.screen_mode, SCREEN_MODES)
        if self.commit_limit < 1:
            msg = f"Unexpected value '{self.commit_limit}' for 'commit_limit'. Must be at least 1"
            raise ValueError(msg)
        for author, color in self.author_colors.items():
            try:
                parse_color(color)
            except ValueError as color_error:
                msg = f"Unexpected value '{color}' for 'author_colors.{author}': {color_error}"
                raise ValueError(msg) from color_error

    def should_show_graph(
            self,
            screen_mode: str | None = None,
    ) -> bool:
        """Whether the graph is drawn in the given screen mode.

        Args:
            screen_mode: Current screen mode (defaults to the configured one).

        Returns:
            True if the graph should be drawn.
        """
        mode = screen_mode or self.screen_mode
        if self.show_graph == "always":
            return True
        if self.show_graph == "never":
            return False
        return mode != "normal"

    def save(
            self,
            config_path: Path,
    ) -> None:
        """Save config to file.

        Args:
            config_path: Path to config.json file.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def load(
            cls,
            config_path: Path,
    ) -> GraphConfig:
        """Load config from file.

        Args:
            config_path: Path to config.json file.

        Returns:
            GraphConfig instance.

        Raises:
            RuntimeError: If config file cannot be loaded.
        """
        try:
            data = json.loads(config_path.read_text())
            return cls.from_dict(data)
        except Exception as file_error:
            msg = f"Failed to load config from {config_path}: {file_error}"
            raise RuntimeError(msg) from file_error


# ---- Module Functions ---------------------------------------------------------------------------------------


def validate_enum(
        name: str,
        value: str,
        allowed_values: list[str],
) -> None:
    """Reject a setting outside its allowed values.

    Raises:
        ValueError: If ``value`` is not allowed.
    """
    if value in allowed_values:
        return
    msg = f"Unexpected value '{value}' for '{name}'. Allowed values: {', '.join(allowed_values)}"
    raise ValueError(msg)


def default_config_path() -> Path:
    """Config file location, overridable through ``GITGRAPH_CONFIG``."""
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "gitgraph" / "config.json"


def load_config(
        config_path: Path | None = None,
) -> GraphConfig:
    """Load and validate the user config.

    Args:
        config_path: Explicit path (defaults to ``default_config_path()``).

    Returns:
        The stored config, or defaults when no file exists.

    Raises:
        RuntimeError: If the file exists but cannot be read.
        ValueError: If a setting is invalid.
    """
    path = config_path or default_config_path()
    if not path.exists():
        logger.debug(f"No config at {path}, using defaults")
        return GraphConfig()

    config = GraphConfig.load(path)
    config.validate()
    return config


def next_screen_mode(
        mode: str,
) -> str:
    """Cycle normal -> half -> full -> normal."""
    index = SCREEN_MODES.index(mode)
    return SCREEN_MODES[(index + 1) % len(SCREEN_MODES)]


def prev_screen_mode(
        mode: str,
) -> str:
    index = SCREEN_MODES.index(mode)
    return SCREEN_MODES[(index - 1) % len(SCREEN_MODES)]
