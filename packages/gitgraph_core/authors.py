"""Author-based styles for the commit graph.

Each lineage is coloured after the author of the commit that opened it. A
configured colour wins; otherwise the colour is derived from a hash of the
author's name so the same author always gets the same hue.

Execution Context:
    Library module - supplies the style function passed to the graph builder

Dependencies:
    - rich: Style and Color parsing

Metadata:
    Version: 0.1.0
    Author: GitGraph Team
"""
from __future__ import annotations

import colorsys
import hashlib
from collections.abc import Mapping
from functools import lru_cache

from rich.color import Color
from rich.color import ColorParseError
from rich.style import Style

from gitgraph_core.models import Commit
from gitgraph_core.transition import StyleFunction

# key in the author colour map that applies to every author
WILDCARD_AUTHOR = "*"


# ---- Author Colours -----------------------------------------------------------------------------------------


@lru_cache(maxsize=1024)
def _hashed_style(
        author_name: str,
) -> Style:
    digest = hashlib.sha256(author_name.encode()).digest()
    hue = int.from_bytes(digest[:2], "big") / 0xFFFF
    r, g, b = colorsys.hls_to_rgb(hue, 0.6, 0.7)
    return Style(color=Color.from_rgb(r * 255, g * 255, b * 255))


def parse_color(
        value: str,
) -> Style:
    """Parse a configured colour name or hex code.

    Args:
        value: Colour such as ``"red"`` or ``"#ff8800"``.

    Returns:
        Foreground style with that colour.

    Raises:
        ValueError: If rich does not recognise the colour.
    """
    try:
        return Style(color=Color.parse(value))
    except ColorParseError as color_error:
        msg = f"Invalid colour '{value}': {color_error}"
        raise ValueError(msg) from color_error


def author_style(
        author_name: str,
        author_colors: Mapping[str, str] | None = None,
) -> Style:
    """Style for lines opened by ``author_name``.

    Args:
        author_name: Author display name.
        author_colors: Configured colours by author name, optionally with a
            ``"*"`` entry applying to everyone.

    Returns:
        Foreground style for the author.
    """
    if author_colors:
        configured = author_colors.get(author_name) or author_colors.get(WILDCARD_AUTHOR)
        if configured:
            return parse_color(configured)
    return _hashed_style(author_name)


def make_style_function(
        author_colors: Mapping[str, str] | None = None,
) -> StyleFunction:
    """Build the ``Commit -> Style`` callable handed to the graph builder.

    Args:
        author_colors: Configured colours by author name.

    Returns:
        Style function colouring each commit by its author.
    """
    colors = dict(author_colors or {})
    # fail on a bad colour now rather than halfway through a render
    for value in colors.values():
        parse_color(value)

    def get_style(commit: Commit) -> Style:
        return author_style(commit.author_name, colors)

    return get_style
