#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/assembler.py
"""AST assembler.

Walks the finalized block tree and emits AST nodes. Text-bearing blocks
are passed through the inline parser; verbatim HTML and comments bypass
it. IAL attributes are merged into the generated attributes of the node
the block produces, with :func:`~mdtree.ast.utils.merge_attributes`.

Each top-level block is assembled independently so the scheduler can run
them concurrently; :meth:`AstAssembler.assemble_block` is the unit of work.
"""

from __future__ import annotations

import logging

from mdtree.ast.nodes import AstItem, AstNode, element, verbatim_node
from mdtree.ast.utils import merge_attributes
from mdtree.constants import (
    COMMENT_TAG,
    FOOTNOTE_BACKLINK_CLASS,
    FOOTNOTE_BACKLINK_TEXT,
    FOOTNOTE_BACKLINK_TITLE,
    META_COMMENT,
    RULER_CLASSES,
)
from mdtree.parsers.blocks import (
    Block,
    BlockQuote,
    BlockVisitor,
    CodeBlock,
    FootnoteDefinition,
    Heading,
    HtmlBlock,
    HtmlComment,
    LinkDefinition,
    List,
    ListItem,
    Paragraph,
    PendingIal,
    Table,
    Text,
    ThematicBreak,
)
from mdtree.parsers.context import ParseContext
from mdtree.parsers.inline import InlineParser

logger = logging.getLogger(__name__)


class AstAssembler(BlockVisitor):
    """Convert blocks into AST items.

    Every ``visit_*`` method returns a list of items, empty for blocks
    that produce no output (link definitions, footnote definitions).

    Parameters
    ----------
    context : ParseContext
        Context of the parse unit; inline diagnostics go to its collector

    """

    def __init__(self, context: ParseContext) -> None:
        self._context = context
        self._options = context.options
        self._inline = InlineParser(context)
        self._tight = False

    def assemble_block(self, block: Block) -> list[AstItem]:
        """Assemble one block subtree."""
        return block.accept(self)

    def assemble(self, blocks: list[Block]) -> list[AstItem]:
        """Assemble a sequence of sibling blocks."""
        items: list[AstItem] = []
        for block in blocks:
            items.extend(block.accept(self))
        return items

    def code_classes(self, language: str) -> str:
        """Return the class attribute value for a code block in ``language``.

        Examples
        --------
        With ``code_class_prefix="lang- language-"``, ``"elixir"`` gives
        ``"elixir lang-elixir language-elixir"``.

        """
        return " ".join([language] + [prefix + language for prefix in self._options.code_class_prefixes])

    def visit_paragraph(self, block: Paragraph) -> list[AstItem]:
        children = self._inline.parse(block.text, block.line)
        if self._tight and not block.attributes:
            return children
        return [element("p", children, block.attributes)]

    def visit_heading(self, block: Heading) -> list[AstItem]:
        children = self._inline.parse(block.text, block.line)
        return [element(f"h{block.level}", children, block.attributes)]

    def visit_thematic_break(self, block: ThematicBreak) -> list[AstItem]:
        attributes = merge_attributes([("class", RULER_CLASSES[block.marker])], block.attributes)
        return [element("hr", [], attributes)]

    def visit_code_block(self, block: CodeBlock) -> list[AstItem]:
        generated = [("class", self.code_classes(block.language))] if block.language else []
        code = element("code", ["\n".join(block.lines)], merge_attributes(generated, block.attributes))
        return [element("pre", [code])]

    def visit_block_quote(self, block: BlockQuote) -> list[AstItem]:
        return [element("blockquote", self._assemble_container(block.children, tight=False), block.attributes)]

    def visit_list(self, block: List) -> list[AstItem]:
        generated = [("start", str(block.start))] if block.ordered and block.start != 1 else []
        tag = "ol" if block.ordered else "ul"

        previous = self._tight
        self._tight = block.tight
        try:
            items = [item for list_item in block.items for item in list_item.accept(self)]
        finally:
            self._tight = previous
        return [element(tag, items, merge_attributes(generated, block.attributes))]

    def visit_list_item(self, block: ListItem) -> list[AstItem]:
        return [element("li", self._assemble_container(block.children, tight=self._tight), block.attributes)]

    def visit_table(self, block: Table) -> list[AstItem]:
        styles = [("style", f"text-align: {alignment};") for alignment in block.alignments]

        def row(cells: list[str], line: int, cell_tag: str) -> AstNode:
            return element(
                "tr",
                [element(cell_tag, self._inline.parse(cell, line), [style]) for cell, style in zip(cells, styles)],
            )

        sections: list[AstItem] = []
        if block.header is not None:
            sections.append(element("thead", [row(block.header.cells, block.header.line, "th")]))
        sections.append(element("tbody", [row(entry.cells, entry.line, "td") for entry in block.rows]))
        return [element("table", sections, block.attributes)]

    def visit_html_block(self, block: HtmlBlock) -> list[AstItem]:
        return [verbatim_node(block.tag, block.lines, merge_attributes(block.html_attributes, block.attributes))]

    def visit_html_comment(self, block: HtmlComment) -> list[AstItem]:
        return [AstNode(COMMENT_TAG, [], list(block.lines), {META_COMMENT: True})]

    def visit_text(self, block: Text) -> list[AstItem]:
        return [block.text]

    def visit_pending_ial(self, block: PendingIal) -> list[AstItem]:
        return []

    def visit_link_definition(self, block: LinkDefinition) -> list[AstItem]:
        return []

    def visit_footnote_definition(self, block: FootnoteDefinition) -> list[AstItem]:
        return []

    def _assemble_container(self, blocks: list[Block], tight: bool) -> list[AstItem]:
        previous = self._tight
        self._tight = tight
        try:
            return self.assemble(blocks)
        finally:
            self._tight = previous

    def footnotes_section(self) -> list[AstItem]:
        """Build the footnotes section for every defined footnote.

        Returns
        -------
        list of AstItem
            ``[div.footnotes [hr, ol [li#fn:N ...]]]``, or an empty list
            when no footnote is defined

        """
        definitions = sorted(self._context.footnotes.values(), key=lambda definition: definition.number)
        if not definitions:
            return []

        entries: list[AstItem] = []
        for definition in definitions:
            number = str(definition.number)
            backlink = element(
                "a",
                [FOOTNOTE_BACKLINK_TEXT],
                [
                    ("class", FOOTNOTE_BACKLINK_CLASS),
                    ("href", f"#fnref:{number}"),
                    ("title", FOOTNOTE_BACKLINK_TITLE),
                ],
            )
            children = self._assemble_container(definition.children, tight=False)
            if children and isinstance(children[-1], AstNode) and children[-1].tag == "p":
                children[-1].children.extend([" ", backlink])
            else:
                children.append(element("p", [backlink]))
            entries.append(element("li", children, [("id", f"fn:{number}")]))

        logger.debug("Assembled %d footnotes", len(entries))
        return [element("div", [element("hr"), element("ol", entries)], [("class", "footnotes")])]
