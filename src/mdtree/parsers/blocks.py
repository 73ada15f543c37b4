#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/blocks.py
"""Intermediate block model.

The block parser turns numbered lines into a tree of block records. The
tree mirrors the container structure of the document: block quotes, lists,
list items and footnote definitions own their child blocks directly, so no
back-references are needed. Inline text is still raw at this stage; the
assembler parses it while turning blocks into AST nodes.

Every block carries the 1-based ``line`` it starts on and the
``attributes`` assigned to it by an IAL.

Block Types
-----------
Leaf blocks:
    - Paragraph, Heading, ThematicBreak, CodeBlock, Table
    - HtmlBlock, HtmlComment, Text
Container blocks:
    - BlockQuote, List, ListItem, FootnoteDefinition
Bookkeeping blocks:
    - PendingIal, LinkDefinition

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from mdtree.constants import Alignment


class Block(ABC):
    """Base class for all blocks.

    Parameters
    ----------
    line : int
        1-based source line the block starts on
    attributes : list of (str, str)
        Attributes assigned by an IAL

    """

    line: int
    attributes: list[tuple[str, str]]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Dispatch to the matching ``visit_*`` method of ``visitor``."""
        ...


@dataclass
class Paragraph(Block):
    """Run of text lines, stored with leading indentation removed.

    Parameters
    ----------
    lines : list of str
        Raw text lines of the paragraph

    """

    lines: list[str] = field(default_factory=list)
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    @property
    def text(self) -> str:
        """The paragraph text, lines joined by newlines, trailing blanks removed."""
        return "\n".join(self.lines).rstrip()

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_paragraph(self)


@dataclass
class Heading(Block):
    """ATX (``# Title``) or setext (underlined) heading.

    Parameters
    ----------
    level : int
        Heading level from 1 to 6
    text : str
        Raw heading text

    """

    level: int
    text: str = ""
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_heading(self)


@dataclass
class ThematicBreak(Block):
    """Horizontal rule; ``marker`` is one of ``-``, ``*`` or ``_``."""

    marker: str
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_thematic_break(self)


@dataclass
class CodeBlock(Block):
    """Fenced or indented code block.

    Parameters
    ----------
    lines : list of str
        Code lines, fence and indentation removed
    language : str or None
        First word of the fence info string
    fenced : bool
        True for fenced blocks, False for indented ones

    """

    lines: list[str] = field(default_factory=list)
    language: Optional[str] = None
    fenced: bool = True
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Block):
    """Block quote owning its nested blocks."""

    children: list[Block] = field(default_factory=list)
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_block_quote(self)


@dataclass
class ListItem(Block):
    """List item owning its nested blocks."""

    children: list[Block] = field(default_factory=list)
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list_item(self)


@dataclass
class List(Block):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool
        True for numbered lists
    items : list of ListItem
        The list items
    start : int, default 1
        Number of the first item of an ordered list
    tight : bool, default True
        False when blank lines separate items or the blocks of an item

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    tight: bool = True
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list(self)


@dataclass
class TableRow:
    """Cells of one table row with the row's source line."""

    cells: list[str]
    line: int = 0


@dataclass
class Table(Block):
    """Pipe table.

    Parameters
    ----------
    header : TableRow or None
        Header row, present only when a separator row follows it
    rows : list of TableRow
        Body rows
    alignments : list of {"left", "center", "right"}
        One alignment per column

    """

    header: Optional[TableRow] = None
    rows: list[TableRow] = field(default_factory=list)
    alignments: list[Alignment] = field(default_factory=list)
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.alignments)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table(self)


@dataclass
class HtmlBlock(Block):
    """Raw HTML block captured verbatim.

    Parameters
    ----------
    tag : str
        Lowercased element name of the opening tag
    html_attributes : list of (str, str)
        Attributes of the opening tag in source order
    lines : list of str
        Captured content lines, never parsed as Markdown

    """

    tag: str
    html_attributes: list[tuple[str, str]] = field(default_factory=list)
    lines: list[str] = field(default_factory=list)
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_html_block(self)


@dataclass
class HtmlComment(Block):
    """HTML comment; ``lines`` hold the text between the delimiters."""

    lines: list[str] = field(default_factory=list)
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_html_comment(self)


@dataclass
class Text(Block):
    """Bare text emitted as a top-level string, e.g. after a closing HTML tag."""

    text: str
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text(self)


@dataclass
class PendingIal(Block):
    """An IAL line waiting to be attached to the block before it.

    Parameters
    ----------
    source : str
        The IAL body between ``{:`` and ``}``
    adjacent : bool
        True when no blank line separates the IAL from the previous block

    """

    source: str
    adjacent: bool = True
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_pending_ial(self)


@dataclass
class LinkDefinition(Block):
    """Reference link definition ``[id]: url "title"``."""

    id: str
    url: str
    title: Optional[str] = None
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_link_definition(self)


@dataclass
class FootnoteDefinition(Block):
    """Footnote definition ``[^id]: text`` owning its blocks."""

    id: str
    children: list[Block] = field(default_factory=list)
    number: int = 0
    line: int = 0
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_footnote_definition(self)


class BlockVisitor(ABC):
    """Visitor over the block tree.

    Every block kind has an abstract ``visit_*`` method, so a concrete
    visitor that misses a kind fails at instantiation instead of silently
    skipping it.
    """

    @abstractmethod
    def visit_paragraph(self, block: Paragraph) -> Any: ...

    @abstractmethod
    def visit_heading(self, block: Heading) -> Any: ...

    @abstractmethod
    def visit_thematic_break(self, block: ThematicBreak) -> Any: ...

    @abstractmethod
    def visit_code_block(self, block: CodeBlock) -> Any: ...

    @abstractmethod
    def visit_block_quote(self, block: BlockQuote) -> Any: ...

    @abstractmethod
    def visit_list(self, block: List) -> Any: ...

    @abstractmethod
    def visit_list_item(self, block: ListItem) -> Any: ...

    @abstractmethod
    def visit_table(self, block: Table) -> Any: ...

    @abstractmethod
    def visit_html_block(self, block: HtmlBlock) -> Any: ...

    @abstractmethod
    def visit_html_comment(self, block: HtmlComment) -> Any: ...

    @abstractmethod
    def visit_text(self, block: Text) -> Any: ...

    @abstractmethod
    def visit_pending_ial(self, block: PendingIal) -> Any: ...

    @abstractmethod
    def visit_link_definition(self, block: LinkDefinition) -> Any: ...

    @abstractmethod
    def visit_footnote_definition(self, block: FootnoteDefinition) -> Any: ...
