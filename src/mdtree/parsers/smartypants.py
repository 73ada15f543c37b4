#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/smartypants.py
"""Typographic replacements for text leaves.

Straight quotes become curly quotes, ``---`` an em dash, ``--`` an en dash
and ``...`` an ellipsis. Only text leaves are rewritten; code spans, code
blocks, verbatim HTML and links showing their own URL are copied unchanged.
"""

from __future__ import annotations

from mdtree.ast.nodes import AstItem, AstNode
from mdtree.ast.utils import extract_text
from mdtree.ast.visitors import NodeTransformer
from mdtree.constants import (
    ELLIPSIS,
    EM_DASH,
    EN_DASH,
    LEFT_DOUBLE_QUOTE,
    LEFT_SINGLE_QUOTE,
    RIGHT_DOUBLE_QUOTE,
    RIGHT_SINGLE_QUOTE,
)

_PROTECTED_TAGS = frozenset({"code", "pre"})
_OPENING_CONTEXT = "([{" + EN_DASH + EM_DASH


def _opens(previous: str) -> bool:
    return not previous or previous.isspace() or previous in _OPENING_CONTEXT


def _is_autolink(node: AstNode) -> bool:
    """Whether ``node`` is a link showing its own target, like ``<http://x.com>``."""
    if node.tag != "a" or len(node.children) != 1 or not isinstance(node.children[0], str):
        return False
    href = dict(node.attributes).get("href")
    return href in (node.children[0], f"mailto:{node.children[0]}")


def smarten(text: str, previous: str = "") -> str:
    """Apply the replacements to ``text``.

    Parameters
    ----------
    text : str
        Text to rewrite
    previous : str, default ""
        Character preceding ``text`` in the document, used to decide
        whether a leading quote opens or closes

    Examples
    --------
        >>> smarten('"Hello" -- it\\'s...')
        '“Hello” – it’s…'

    """
    text = text.replace("---", EM_DASH).replace("--", EN_DASH).replace("...", ELLIPSIS)

    result: list[str] = []
    for char in text:
        if char == '"':
            result.append(LEFT_DOUBLE_QUOTE if _opens(previous) else RIGHT_DOUBLE_QUOTE)
        elif char == "'":
            result.append(LEFT_SINGLE_QUOTE if _opens(previous) else RIGHT_SINGLE_QUOTE)
        else:
            result.append(char)
        previous = char
    return "".join(result)


class SmartypantsTransformer(NodeTransformer):
    """Rewrite the text leaves of an inline sequence.

    The character preceding each leaf is tracked across node boundaries,
    so a quote directly after ``**bold**`` closes.
    """

    def __init__(self) -> None:
        self._previous = ""

    def should_descend(self, node: AstNode) -> bool:
        return not (node.verbatim or node.tag in _PROTECTED_TAGS or _is_autolink(node))

    def visit_text(self, text: str) -> AstItem:
        result = smarten(text, self._previous)
        if text:
            self._previous = text[-1]
        return result

    def visit_node(self, node: AstNode) -> AstItem:
        if not self.should_descend(node):
            skipped = extract_text(node)
            if skipped:
                self._previous = skipped[-1]
        return super().visit_node(node)
