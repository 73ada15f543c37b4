#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/block_parser.py
"""Block structure classifier and tree builder.

The builder makes a single pass over the lines of a container. Each
non-blank line is offered to a fixed sequence of line handlers; the first
handler that recognizes the line consumes it (and any continuation lines)
and appends a block. Lines no handler claims accumulate into the current
paragraph.

Container blocks (block quotes, list items, footnote definitions) collect
their own lines, stripped of markers and indentation, and are parsed by a
recursive call, so every container owns its children directly. Containers
nested more than ``MAX_NESTING_DEPTH`` levels deep are not opened; their
marker lines stay paragraph text and a warning is reported once per
container.

Notable rules:

- A line that looks like a list item always starts a list item, even in
  the middle of a paragraph.
- Indented code is only recognized outside list items and block quotes.
- Block-level and void HTML tags at the very start of a line end the
  preceding paragraph; other tags continue it.
- IAL lines become pending blocks that are attached to the previous block
  of the same container once the container is complete.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from mdtree.constants import MAX_NESTING_DEPTH
from mdtree.parsers.blocks import (
    Block,
    BlockQuote,
    CodeBlock,
    FootnoteDefinition,
    Heading,
    LinkDefinition,
    List,
    ListItem,
    Paragraph,
    PendingIal,
    ThematicBreak,
)
from mdtree.parsers.context import ParseContext
from mdtree.parsers.html_blocks import (
    COMMENT_OPEN_PATTERN,
    can_interrupt_paragraph,
    match_html_block,
    match_html_comment,
)
from mdtree.parsers.ial import IAL_LINE_PATTERN, attach_ials
from mdtree.parsers.lines import Line
from mdtree.parsers.tables import match_table

logger = logging.getLogger(__name__)

FENCE_OPEN_PATTERN = re.compile(r"^( {0,3})(`{3,}|~{3,})[ \t]*([^`]*?)[ \t]*$")
THEMATIC_BREAK_PATTERN = re.compile(r"^ {0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$")
ATX_HEADING_PATTERN = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
SETEXT_UNDERLINE_PATTERN = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
BLOCKQUOTE_PATTERN = re.compile(r"^ {0,3}> ?(.*)$")
LIST_ITEM_PATTERN = re.compile(r"^( *)([-*+]|\d{1,9}[.)])(?:([ \t]+)(.*))?$")
LINK_DEFINITION_PATTERN = re.compile(
    r"""^ {0,3}\[([^\]^][^\]]*)\]:[ \t]*<?([^\s>]+)>?(?:[ \t]+(?:"([^"]*)"|'([^']*)'|\(([^)]*)\)))?[ \t]*$"""
)
FOOTNOTE_DEFINITION_PATTERN = re.compile(r"^ {0,3}\[\^([^\]\s]+)\]:[ \t]?(.*)$")

_CODE_INDENT = 4


@dataclass
class _ListMarker:
    ordered: bool
    number: int
    content_offset: int
    content: Line


@dataclass
class _ContainerState:
    """Scanning state for the lines of one container."""

    lines: Sequence[Line]
    depth: int = 0
    index: int = 0
    blocks: list[Block] = field(default_factory=list)
    paragraph: list[Line] = field(default_factory=list)
    after_blank: bool = True
    depth_reported: bool = False

    @property
    def nested(self) -> bool:
        return self.depth > 0

    def flush_paragraph(self) -> None:
        if self.paragraph:
            text_lines = [line.text.lstrip() for line in self.paragraph]
            self.blocks.append(Paragraph(lines=text_lines, line=self.paragraph[0].number))
            self.paragraph = []

    def add(self, block: Block) -> None:
        self.flush_paragraph()
        self.blocks.append(block)
        self.after_blank = False


def _expanded(line: Line) -> str:
    return line.dedent(0).text


def _strip_trailing_blanks(lines: list[Line]) -> list[Line]:
    end = len(lines)
    while end and lines[end - 1].blank:
        end -= 1
    return lines[:end]


class BlockParser:
    """Build the block tree of a document.

    Parameters
    ----------
    context : ParseContext
        Parse state; receives diagnostics, link and footnote definitions

    Examples
    --------
        >>> from mdtree.options import ParserOptions
        >>> from mdtree.parsers.lines import to_lines
        >>> blocks = BlockParser(ParseContext(ParserOptions())).parse(to_lines("# Title\\n\\ntext"))
        >>> [type(block).__name__ for block in blocks]
        ['Heading', 'Paragraph']

    """

    def __init__(self, context: ParseContext) -> None:
        self._context = context
        self._options = context.options
        self._handlers: list[Callable[[_ContainerState, Line], bool]] = [
            self._fenced_code,
            self._indented_code,
            self._html_comment,
            self._html_block,
            self._ial,
            self._setext_heading,
            self._thematic_break,
            self._atx_heading,
            self._block_quote,
            self._footnote_definition,
            self._link_definition,
            self._list,
            self._table,
        ]

    def parse(self, lines: Sequence[Line]) -> list[Block]:
        """Parse document lines into top-level blocks."""
        blocks = self._parse(lines, depth=0)
        logger.debug("Built %d top-level blocks from %d lines", len(blocks), len(lines))
        return blocks

    def _parse(self, lines: Sequence[Line], depth: int) -> list[Block]:
        state = _ContainerState(lines=lines, depth=depth)

        while state.index < len(lines):
            line = lines[state.index]
            if line.blank:
                state.flush_paragraph()
                state.after_blank = True
                state.index += 1
                continue

            if not any(handler(state, line) for handler in self._handlers):
                state.paragraph.append(line)
                state.after_blank = False
                state.index += 1

        state.flush_paragraph()
        return attach_ials(state.blocks, self._context.diagnostics)

    def _too_deep(self, state: _ContainerState, line: Line) -> bool:
        """Whether a container opened on ``line`` would exceed the nesting limit."""
        if state.depth < MAX_NESTING_DEPTH:
            return False
        if not state.depth_reported:
            self._context.diagnostics.warning(
                line.number, f"Blocks nested more than {MAX_NESTING_DEPTH} levels deep are kept as text"
            )
            state.depth_reported = True
        return True

    def _starts_block(self, line: Line) -> bool:
        """Whether ``line`` would open a block instead of continuing text."""
        text = line.text
        return bool(
            FENCE_OPEN_PATTERN.match(text)
            or THEMATIC_BREAK_PATTERN.match(text)
            or ATX_HEADING_PATTERN.match(text)
            or BLOCKQUOTE_PATTERN.match(text)
            or LIST_ITEM_PATTERN.match(_expanded(line))
            or COMMENT_OPEN_PATTERN.match(text)
            or IAL_LINE_PATTERN.match(text)
            or can_interrupt_paragraph(text)
        )

    # ------------------------------------------------------------------
    # Leaf blocks
    # ------------------------------------------------------------------

    def _fenced_code(self, state: _ContainerState, line: Line) -> bool:
        match = FENCE_OPEN_PATTERN.match(line.text)
        if not match:
            return False

        indent = len(match.group(1))
        fence = match.group(2)
        info = match.group(3).strip()
        closing = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")

        content: list[str] = []
        end = state.index + 1
        while end < len(state.lines) and not closing.match(state.lines[end].text):
            content.append(state.lines[end].dedent(indent).text)
            end += 1

        if end >= len(state.lines):
            self._context.diagnostics.warning(
                line.number, f"Fenced Code Block opened with {fence} not closed at end of input"
            )
            state.index = end
        else:
            state.index = end + 1

        language = info.split()[0] if info else None
        state.add(CodeBlock(lines=content, language=language, fenced=True, line=line.number))
        return True

    def _indented_code(self, state: _ContainerState, line: Line) -> bool:
        if state.nested or state.paragraph or line.indent < _CODE_INDENT:
            return False

        collected: list[Line] = []
        end = state.index
        while end < len(state.lines) and (state.lines[end].blank or state.lines[end].indent >= _CODE_INDENT):
            collected.append(state.lines[end])
            end += 1

        collected = _strip_trailing_blanks(collected)
        state.index = state.index + len(collected)
        lines = [entry.dedent(_CODE_INDENT).text for entry in collected]
        state.add(CodeBlock(lines=lines, language=None, fenced=False, line=line.number))
        return True

    def _html_comment(self, state: _ContainerState, line: Line) -> bool:
        result = match_html_comment(state.lines, state.index, self._context.diagnostics)
        if result is None:
            return False
        comment, state.index = result
        state.add(comment)
        return True

    def _html_block(self, state: _ContainerState, line: Line) -> bool:
        if not line.text.startswith("<"):
            return False
        if state.paragraph and not can_interrupt_paragraph(line.text):
            return False

        result = match_html_block(state.lines, state.index, self._context.diagnostics)
        if result is None:
            return False
        blocks, state.index = result
        for block in blocks:
            state.add(block)
        return True

    def _ial(self, state: _ContainerState, line: Line) -> bool:
        match = IAL_LINE_PATTERN.match(line.text)
        if not match:
            return False

        adjacent = not state.after_blank and bool(state.blocks or state.paragraph)
        state.flush_paragraph()
        state.blocks.append(PendingIal(source=match.group(1), adjacent=adjacent, line=line.number))
        state.after_blank = False
        state.index += 1
        return True

    def _setext_heading(self, state: _ContainerState, line: Line) -> bool:
        if not state.paragraph:
            return False
        match = SETEXT_UNDERLINE_PATTERN.match(line.text)
        if not match:
            return False

        level = 1 if match.group(1).startswith("=") else 2
        text = "\n".join(entry.text.strip() for entry in state.paragraph)
        number = state.paragraph[0].number
        state.paragraph = []
        state.add(Heading(level=level, text=text, line=number))
        state.index += 1
        return True

    def _thematic_break(self, state: _ContainerState, line: Line) -> bool:
        match = THEMATIC_BREAK_PATTERN.match(line.text)
        if not match:
            return False
        state.add(ThematicBreak(marker=match.group(1), line=line.number))
        state.index += 1
        return True

    def _atx_heading(self, state: _ContainerState, line: Line) -> bool:
        match = ATX_HEADING_PATTERN.match(line.text)
        if not match:
            return False
        state.add(Heading(level=len(match.group(1)), text=(match.group(2) or "").strip(), line=line.number))
        state.index += 1
        return True

    def _table(self, state: _ContainerState, line: Line) -> bool:
        if "|" not in line.text:
            return False
        result = match_table(
            state.lines, state.index, state.after_blank, self._options.gfm_tables, self._context.diagnostics
        )
        if result is None:
            return False
        table, state.index = result
        state.add(table)
        return True

    def _link_definition(self, state: _ContainerState, line: Line) -> bool:
        match = LINK_DEFINITION_PATTERN.match(line.text)
        if not match:
            return False

        title = next((group for group in match.groups()[2:] if group is not None), None)
        definition = LinkDefinition(id=match.group(1), url=match.group(2), title=title, line=line.number)
        self._context.define_link(definition)
        state.add(definition)
        state.index += 1
        return True

    # ------------------------------------------------------------------
    # Container blocks
    # ------------------------------------------------------------------

    def _block_quote(self, state: _ContainerState, line: Line) -> bool:
        if not BLOCKQUOTE_PATTERN.match(line.text):
            return False
        if self._too_deep(state, line):
            return False

        inner: list[Line] = []
        end = state.index
        while end < len(state.lines):
            current = state.lines[end]
            match = BLOCKQUOTE_PATTERN.match(current.text)
            if match:
                inner.append(current.with_text(match.group(1)))
            elif not current.blank and inner and not inner[-1].blank and not self._starts_block(current):
                inner.append(current.with_text(current.text.lstrip()))
            else:
                break
            end += 1

        state.index = end
        state.add(BlockQuote(children=self._parse(inner, depth=state.depth + 1), line=line.number))
        return True

    def _footnote_definition(self, state: _ContainerState, line: Line) -> bool:
        if not self._options.footnotes:
            return False
        match = FOOTNOTE_DEFINITION_PATTERN.match(line.text)
        if not match:
            return False
        if self._too_deep(state, line):
            return False

        content = [line.with_text(match.group(2))]
        end = state.index + 1
        while end < len(state.lines):
            current = state.lines[end]
            if current.blank:
                content.append(current.with_text(""))
            elif current.indent >= _CODE_INDENT:
                content.append(current.dedent(_CODE_INDENT))
            elif (
                not content[-1].blank
                and not self._starts_block(current)
                and not FOOTNOTE_DEFINITION_PATTERN.match(current.text)
            ):
                content.append(current.with_text(current.text.lstrip()))
            else:
                break
            end += 1

        content = _strip_trailing_blanks(content)
        state.index = state.index + max(1, len(content))
        definition = FootnoteDefinition(
            id=match.group(1), children=self._parse(content, depth=state.depth + 1), line=line.number
        )
        self._context.define_footnote(definition)
        state.add(definition)
        return True

    def _list_marker(self, line: Line) -> Optional[_ListMarker]:
        match = LIST_ITEM_PATTERN.match(_expanded(line))
        if not match:
            return None

        indent = len(match.group(1))
        marker = match.group(2)
        spacing = match.group(3) or ""
        rest = match.group(4) or ""
        ordered = marker[0].isdigit()
        number = int(marker[:-1]) if ordered else 1

        if not spacing or len(spacing) > _CODE_INDENT or not rest:
            offset = indent + len(marker) + 1
            content = (" " * (len(spacing) - 1) + rest) if len(spacing) > _CODE_INDENT else rest
        else:
            offset = indent + len(marker) + len(spacing)
            content = rest
        return _ListMarker(ordered=ordered, number=number, content_offset=offset, content=line.with_text(content))

    def _list(self, state: _ContainerState, line: Line) -> bool:
        first = self._list_marker(line)
        if first is None:
            return False
        if self._too_deep(state, line):
            return False

        offset = first.content_offset
        items: list[list[Line]] = [[first.content]]
        item_lines = [line.number]
        loose = False
        blank = False

        end = state.index + 1
        consumed = end
        while end < len(state.lines):
            current = state.lines[end]
            if current.blank:
                blank = True
                items[-1].append(current.with_text(""))
                end += 1
                continue

            marker = self._list_marker(current)
            if marker is not None and current.indent < offset:
                if marker.ordered != first.ordered:
                    break
                loose = loose or blank
                offset = marker.content_offset
                items.append([marker.content])
                item_lines.append(current.number)
            elif current.indent >= offset:
                loose = loose or blank
                items[-1].append(current.dedent(offset))
            elif not blank and not self._starts_block(current):
                items[-1].append(current.with_text(current.text.lstrip()))
            else:
                break
            blank = False
            end += 1
            consumed = end

        state.index = consumed
        block = List(ordered=first.ordered, start=first.number, tight=not loose, line=line.number)
        for number, item in zip(item_lines, items):
            children = self._parse(_strip_trailing_blanks(item), depth=state.depth + 1)
            block.items.append(ListItem(children=children, line=number))

        logger.debug("List at line %d: %d items, tight=%s", line.number, len(block.items), block.tight)
        state.add(block)
        return True
