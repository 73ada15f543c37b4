"""mdtree - Markdown to AST parser with HTML rendering.

mdtree converts Markdown source into a language-agnostic abstract syntax
tree of ``(tag, attributes, children, meta)`` nodes and optionally renders
that tree to HTML. Parsing never fails on malformed Markdown: local
problems are reported as ``(severity, line, description)`` messages next
to a complete AST.

Key Features
------------
- Block structure: headings, paragraphs, lists, block quotes, fenced and
  indented code, thematic breaks
- GFM extensions: strikethrough, pipe tables, significant line breaks
- Inline attribute lists (``{: .class #id name=value}``) on blocks,
  links and images
- Verbatim capture of HTML blocks and comments
- Smartypants typography, bare URL links, optional footnotes
- Concurrent assembly of top-level blocks with a fail-fast timeout

Requirements
------------
- Python 3.10+

Examples
--------
Parse to an AST:

    >>> from mdtree import parse
    >>> status, ast, messages = parse("# Hello\\n\\nSome *text*")
    >>> status
    'ok'

Render to HTML:

    >>> from mdtree import render
    >>> status, html, messages = render("~~hello~~")
    >>> html
    '<p><del>hello</del></p>\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdtree/__init__.py

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        f"mdtree requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdtree.api import parse, render, render_or_print  # noqa: E402
from mdtree.ast import AstNode, ast_to_json, ast_to_wire, json_to_ast, wire_to_ast  # noqa: E402
from mdtree.diagnostics import Message  # noqa: E402
from mdtree.exceptions import (  # noqa: E402
    InvalidOptionsError,
    MdTreeError,
    ParseTimeoutError,
    ParsingError,
    RenderingError,
    UnitFailedError,
    ValidationError,
)
from mdtree.options import HtmlRendererOptions, ParserOptions  # noqa: E402
from mdtree.scheduler import parallel_map, sequential_map  # noqa: E402

__all__ = [
    "AstNode",
    "HtmlRendererOptions",
    "InvalidOptionsError",
    "MdTreeError",
    "Message",
    "ParseTimeoutError",
    "ParserOptions",
    "ParsingError",
    "RenderingError",
    "UnitFailedError",
    "ValidationError",
    "__version__",
    "ast_to_json",
    "ast_to_wire",
    "json_to_ast",
    "parallel_map",
    "parse",
    "render",
    "render_or_print",
    "sequential_map",
    "wire_to_ast",
]
