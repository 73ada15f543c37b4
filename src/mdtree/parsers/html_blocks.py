#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/html_blocks.py
"""Verbatim capture of HTML blocks and HTML comments.

HTML is never parsed as Markdown. A line starting with an opening tag is
captured in one of three ways:

- a self-closing tag alone on its line (``<stupid />``) gives a node
  without children
- a line that ends with the matching closing tag (``<not>better</not>``)
  gives a node whose single child is the text between the tags
- otherwise the capture extends to the next line starting with the
  matching closing tag, counting nested openings of the same tag; the
  remainder of the opening line, every line in between and the text
  before the closing tag become the children, and text after the closing
  tag is kept as a bare top-level string

Any tag name is accepted. When no closing line exists, known block-level
elements capture up to the end of the input with a warning; any other tag
is left to the paragraph parser as inline HTML.

Attributes of the opening tag are read with BeautifulSoup's
``html.parser`` so quoting and entity rules follow a real HTML parser.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from bs4 import BeautifulSoup

from mdtree.constants import BLOCK_HTML_TAGS, VOID_ELEMENTS
from mdtree.diagnostics import DiagnosticsCollector
from mdtree.parsers.blocks import Block, HtmlBlock, HtmlComment, Text
from mdtree.parsers.lines import Line

logger = logging.getLogger(__name__)

OPENING_TAG_PATTERN = re.compile(r"^<([A-Za-z][A-Za-z0-9-]*)((?:\s[^>]*?)?)\s*(/?)>")
COMMENT_OPEN_PATTERN = re.compile(r"^\s*<!--")

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"


def parse_tag_attributes(tag_text: str) -> list[tuple[str, str]]:
    """Return the attributes of the first element in ``tag_text``.

    Parameters
    ----------
    tag_text : str
        An opening tag such as ``<span class="superspan">``

    Returns
    -------
    list of (str, str)
        Attribute pairs in source order; valueless attributes map to ``""``

    Examples
    --------
        >>> parse_tag_attributes('<span class="superspan" hidden>')
        [('class', 'superspan'), ('hidden', '')]

    """
    soup = BeautifulSoup(tag_text, "html.parser", multi_valued_attributes=None)
    element = soup.find(True)
    if element is None:
        return []
    return [(name, value if isinstance(value, str) else " ".join(value)) for name, value in element.attrs.items()]


def opening_tag_name(text: str) -> Optional[str]:
    """Return the lowercased tag name if ``text`` starts with an opening tag."""
    match = OPENING_TAG_PATTERN.match(text)
    return match.group(1).lower() if match else None


def can_interrupt_paragraph(text: str) -> bool:
    """Whether an HTML line ends a preceding paragraph.

    Only block-level and void elements at the very start of a line do;
    other tags continue the paragraph as inline HTML.
    """
    tag = opening_tag_name(text)
    return tag is not None and (tag in BLOCK_HTML_TAGS or tag in VOID_ELEMENTS)


def _closing_tag(tag: str) -> re.Pattern[str]:
    return re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE)


def _nested_opening(tag: str) -> re.Pattern[str]:
    return re.compile(rf"^<{re.escape(tag)}(?:\s[^>]*)?>", re.IGNORECASE)


def match_html_block(
    lines: Sequence[Line], index: int, diagnostics: DiagnosticsCollector
) -> Optional[tuple[list[Block], int]]:
    """Try to capture an HTML block starting at ``lines[index]``.

    Parameters
    ----------
    lines : sequence of Line
        Lines of the current container
    index : int
        Position of the candidate opening line
    diagnostics : DiagnosticsCollector
        Receives the warning for unterminated block-level elements

    Returns
    -------
    tuple of (list of Block, int) or None
        The captured blocks (the HTML block, possibly followed by a
        :class:`Text` block) and the index of the next unconsumed line;
        None if the line does not open an HTML block

    """
    first = lines[index]
    match = OPENING_TAG_PATTERN.match(first.text)
    if not match:
        return None

    tag = match.group(1).lower()
    self_closing = bool(match.group(3))
    rest = first.text[match.end() :]
    attributes = parse_tag_attributes(match.group(0))

    if self_closing:
        if rest.strip():
            return None
        return [HtmlBlock(tag=tag, html_attributes=attributes, line=first.number)], index + 1

    closing = _closing_tag(tag)
    stripped_rest = rest.rstrip()
    tail = None
    for tail in closing.finditer(stripped_rest):
        pass
    if tail is not None and tail.end() == len(stripped_rest):
        inner = stripped_rest[: tail.start()]
        return [HtmlBlock(tag=tag, html_attributes=attributes, lines=[inner] if inner else [], line=first.number)], (
            index + 1
        )

    nested = _nested_opening(tag)
    depth = 1
    for end in range(index + 1, len(lines)):
        text = lines[end].text.lstrip()
        close = closing.match(text)
        if close:
            depth -= 1
            if depth == 0:
                captured = ([rest] if rest else []) + [line.text for line in lines[index + 1 : end]]
                blocks: list[Block] = [
                    HtmlBlock(tag=tag, html_attributes=attributes, lines=captured, line=first.number)
                ]
                trailing = text[close.end() :].strip()
                if trailing:
                    blocks.append(Text(text=trailing, line=lines[end].number))
                logger.debug("Captured <%s> block at lines %d-%d", tag, first.number, lines[end].number)
                return blocks, end + 1
        elif nested.match(text) and not closing.search(text):
            depth += 1

    if tag in VOID_ELEMENTS:
        if rest.strip():
            return None
        return [HtmlBlock(tag=tag, html_attributes=attributes, line=first.number)], index + 1

    if tag not in BLOCK_HTML_TAGS:
        return None

    diagnostics.warning(first.number, f"Failed to find closing <{tag}>")
    captured = ([rest] if rest else []) + [line.text for line in lines[index + 1 :]]
    return [HtmlBlock(tag=tag, html_attributes=attributes, lines=captured, line=first.number)], len(lines)


def match_html_comment(
    lines: Sequence[Line], index: int, diagnostics: DiagnosticsCollector
) -> Optional[tuple[HtmlComment, int]]:
    """Try to capture an HTML comment starting at ``lines[index]``.

    The children are the text after ``<!--`` on the first line, every
    following line, and the text before the first ``-->``. Anything after
    ``-->`` on the closing line is discarded. An unterminated comment
    captures up to the end of the input with a warning.

    Returns
    -------
    tuple of (HtmlComment, int) or None
        The comment block and the index of the next unconsumed line

    """
    first = lines[index]
    if not COMMENT_OPEN_PATTERN.match(first.text):
        return None

    opened = first.text[first.text.index(COMMENT_OPEN) + len(COMMENT_OPEN) :]
    if COMMENT_CLOSE in opened:
        content = opened[: opened.index(COMMENT_CLOSE)]
        return HtmlComment(lines=[content], line=first.number), index + 1

    captured = [opened]
    for end in range(index + 1, len(lines)):
        text = lines[end].text
        if COMMENT_CLOSE in text:
            captured.append(text[: text.index(COMMENT_CLOSE)])
            return HtmlComment(lines=captured, line=first.number), end + 1
        captured.append(text)

    diagnostics.warning(first.number, "Failed to find closing --> for HTML comment")
    return HtmlComment(lines=captured, line=first.number), len(lines)
