#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/ast/__init__.py
"""Abstract Syntax Tree module for parsed Markdown.

The module consists of several components:

- nodes: the AstNode record and helpers to build nodes
- visitors: visitor and transformer base classes for traversal
- serialization: wire form and JSON conversion
- utils: text extraction and attribute merging

Examples
--------
    >>> from mdtree import parse
    >>> status, ast, messages = parse("My `code` is **best**")
    >>> ast[0].tag
    'p'

"""

from __future__ import annotations

from mdtree.ast.nodes import Ast, AstItem, AstNode, element, is_text, verbatim_node
from mdtree.ast.serialization import ast_to_json, ast_to_wire, json_to_ast, wire_to_ast
from mdtree.ast.utils import extract_text, merge_attributes
from mdtree.ast.visitors import NodeTransformer, NodeVisitor

__all__ = [
    "Ast",
    "AstItem",
    "AstNode",
    "NodeTransformer",
    "NodeVisitor",
    "ast_to_json",
    "ast_to_wire",
    "element",
    "extract_text",
    "is_text",
    "json_to_ast",
    "merge_attributes",
    "verbatim_node",
    "wire_to_ast",
]
