#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

The mdtree AST has two kinds of items, text leaves (``str``) and tagged
:class:`~mdtree.ast.nodes.AstNode` instances, so visitors implement two
methods. :class:`NodeTransformer` rebuilds a tree, which is how text-level
passes such as smartypants are applied.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mdtree.ast.nodes import AstItem, AstNode


class NodeVisitor(ABC):
    """Abstract base class for AST visitors.

    Examples
    --------
    Count the text leaves of a tree:

        >>> class TextCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def visit_text(self, text):
        ...         self.count += 1
        ...
        ...     def visit_node(self, node):
        ...         for child in node.children:
        ...             self.visit(child)

    """

    def visit(self, item: AstItem) -> Any:
        """Dispatch ``item`` to :meth:`visit_text` or :meth:`visit_node`."""
        if isinstance(item, AstNode):
            return item.accept(self)
        return self.visit_text(item)

    @abstractmethod
    def visit_text(self, text: str) -> Any:
        """Visit a text leaf.

        Parameters
        ----------
        text : str
            The text to visit

        Returns
        -------
        Any
            Result of processing this leaf

        """
        pass

    @abstractmethod
    def visit_node(self, node: AstNode) -> Any:
        """Visit a tagged node.

        Parameters
        ----------
        node : AstNode
            The node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass


class NodeTransformer(NodeVisitor):
    """Visitor that rebuilds the tree it walks.

    Subclasses override :meth:`visit_text` to rewrite leaves and
    :meth:`should_descend` to protect subtrees from rewriting. The default
    implementation returns an identical copy.
    """

    def transform(self, items: list[AstItem]) -> list[AstItem]:
        """Transform a sequence of items, returning a new list."""
        return [self.visit(item) for item in items]

    def should_descend(self, node: AstNode) -> bool:
        """Return False to copy ``node`` without transforming its children."""
        return True

    def visit_text(self, text: str) -> AstItem:
        return text

    def visit_node(self, node: AstNode) -> AstItem:
        children = self.transform(node.children) if self.should_descend(node) else list(node.children)
        return AstNode(tag=node.tag, attributes=list(node.attributes), children=children, meta=dict(node.meta))
