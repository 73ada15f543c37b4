#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdtree.constants import DEFAULT_HTML_COMPACT_OUTPUT, DEFAULT_HTML_ESCAPE
from mdtree.options.base import BaseRendererOptions


# src/mdtree/options/html.py
@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering the AST to HTML.

    Parameters
    ----------
    escape : bool, default True
        HTML-escape text leaves. Children of verbatim nodes are always
        emitted unescaped.
    compact_output : bool, default False
        Omit the newlines emitted after block-level tags.

    """

    escape: bool = field(
        default=DEFAULT_HTML_ESCAPE,
        metadata={"help": "Escape HTML special characters in text", "cli_name": "no-escape", "importance": "core"},
    )
    compact_output: bool = field(
        default=DEFAULT_HTML_COMPACT_OUTPUT,
        metadata={"help": "Do not emit newlines between block tags", "importance": "advanced"},
    )
