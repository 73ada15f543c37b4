#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for parsing and rendering."""

from mdtree.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdtree.options.html import HtmlRendererOptions
from mdtree.options.markdown import ParserOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "HtmlRendererOptions",
    "ParserOptions",
]
