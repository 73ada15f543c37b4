#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/__init__.py
"""Markdown parsing stages.

- lines: input normalization into numbered lines
- block_parser: block structure classifier and tree builder
- tables, ial, html_blocks: extension resolvers used by the builder
- inline: inline span parser
- smartypants: typographic text pass
- assembler: block tree to AST
"""

from mdtree.parsers.assembler import AstAssembler
from mdtree.parsers.block_parser import BlockParser
from mdtree.parsers.context import ParseContext
from mdtree.parsers.inline import InlineParser
from mdtree.parsers.lines import Line, to_lines

__all__ = ["AstAssembler", "BlockParser", "InlineParser", "Line", "ParseContext", "to_lines"]
