#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/renderers/html.py
"""HTML rendering of the mdtree AST.

Text leaves are HTML-escaped unless disabled. Children of verbatim nodes
(captured HTML blocks, inline raw HTML) are emitted exactly as captured;
comment nodes become ``<!-- ... -->``.
"""

from __future__ import annotations

import logging

from mdtree.ast.nodes import Ast, AstItem, AstNode
from mdtree.ast.visitors import NodeVisitor
from mdtree.constants import META_RAW, VOID_ELEMENTS
from mdtree.exceptions import RenderingError
from mdtree.options.html import HtmlRendererOptions
from mdtree.renderers.base import BaseRenderer
from mdtree.utils.html_utils import escape_html, format_attributes

logger = logging.getLogger(__name__)

# Tags whose children are blocks; a newline follows the opening tag
_CONTAINER_TAGS = frozenset({"blockquote", "div", "ol", "table", "tbody", "thead", "tr", "ul"})

# Tags followed by a newline after the closing tag
_BLOCK_TAGS = _CONTAINER_TAGS | frozenset({"h1", "h2", "h3", "h4", "h5", "h6", "hr", "li", "p", "pre", "td", "th"})


class HtmlRenderer(NodeVisitor, BaseRenderer):
    """Render AST items to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
        >>> from mdtree.ast import AstNode
        >>> HtmlRenderer().render_to_string([AstNode("p", [], ["a < b"])])
        '<p>a &lt; b</p>\\n'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._output: list[str] = []

    def render_to_string(self, ast: Ast) -> str:
        """Render an AST to an HTML string.

        Raises
        ------
        RenderingError
            If the AST contains something other than nodes and strings

        """
        self._output = []
        for item in ast:
            self.visit(item)
        html = "".join(self._output)
        logger.debug("Rendered %d top-level items to %d characters of HTML", len(ast), len(html))
        return html

    def visit(self, item: AstItem) -> None:
        if not isinstance(item, (AstNode, str)):
            raise RenderingError(
                f"Cannot render AST item of type {type(item).__name__}", rendering_stage="html"
            )
        super().visit(item)

    def _newline(self) -> str:
        return "" if self.options.compact_output else "\n"

    def visit_text(self, text: str) -> None:
        self._output.append(escape_html(text, enabled=self.options.escape))

    def visit_node(self, node: AstNode) -> None:
        if node.is_comment:
            self._output.append(f"<!--{self._raw_children(node)}-->{self._newline()}")
            return

        if node.meta.get(META_RAW):
            self._output.append(self._raw_children(node))
            return

        attributes = format_attributes(node.attributes)
        trailer = self._newline() if node.tag in _BLOCK_TAGS or node.verbatim else ""

        if node.verbatim:
            if not node.children and node.tag in VOID_ELEMENTS:
                self._output.append(f"<{node.tag}{attributes} />{trailer}")
            else:
                self._output.append(f"<{node.tag}{attributes}>{self._raw_children(node)}</{node.tag}>{trailer}")
            return

        if node.tag in VOID_ELEMENTS:
            self._output.append(f"<{node.tag}{attributes} />{trailer}")
            return

        opener = self._newline() if node.tag in _CONTAINER_TAGS else ""
        self._output.append(f"<{node.tag}{attributes}>{opener}")
        for child in node.children:
            self.visit(child)
        self._output.append(f"</{node.tag}>{trailer}")

    @staticmethod
    def _raw_children(node: AstNode) -> str:
        parts: list[str] = []
        for child in node.children:
            if not isinstance(child, str):
                raise RenderingError(
                    f"Verbatim node <{node.tag}> must only contain text, got {type(child).__name__}",
                    rendering_stage="html",
                )
            parts.append(child)
        return "\n".join(parts)
