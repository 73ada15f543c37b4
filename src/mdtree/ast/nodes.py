#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/ast/nodes.py
"""AST node model.

The AST produced by mdtree is deliberately format independent: an ordered
list whose items are either plain ``str`` text leaves or :class:`AstNode`
instances. A tagged node carries four fields:

- ``tag``: element name (``"p"``, ``"h1"``, ``"a"``, ``"comment"``, ...)
- ``attributes``: ordered ``(name, value)`` pairs with unique names
- ``children``: ordered child nodes and text leaves
- ``meta``: flags such as ``{"verbatim": True}`` or ``{"comment": True}``

The children of a verbatim node are raw source lines that are never
re-interpreted as Markdown.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from mdtree.constants import META_COMMENT, META_VERBATIM


@dataclass
class AstNode:
    """A tagged AST node.

    Parameters
    ----------
    tag : str
        Element name
    attributes : list of (str, str), default = empty list
        Ordered attribute pairs; names are unique within the list
    children : list of AstNode or str, default = empty list
        Child nodes and text leaves
    meta : dict, default = empty dict
        Flags describing the node (``verbatim``, ``comment``)

    Examples
    --------
        >>> AstNode("p", [], ["hello"])
        AstNode(tag='p', attributes=[], children=['hello'], meta={})

    """

    tag: str
    attributes: list[tuple[str, str]] = field(default_factory=list)
    children: list[AstNode | str] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with a ``visit_node`` method

        Returns
        -------
        Any
            Result from ``visitor.visit_node(self)``

        """
        return visitor.visit_node(self)

    @property
    def verbatim(self) -> bool:
        """Whether the children are raw lines emitted without escaping."""
        return bool(self.meta.get(META_VERBATIM))

    @property
    def is_comment(self) -> bool:
        """Whether the node holds a captured HTML comment."""
        return bool(self.meta.get(META_COMMENT))

    def get_attribute(self, name: str) -> str | None:
        """Return the value of attribute ``name`` or None."""
        for attr_name, value in self.attributes:
            if attr_name == name:
                return value
        return None

    def set_attribute(self, name: str, value: str) -> None:
        """Set ``name`` to ``value``, replacing an existing entry in place."""
        for i, (attr_name, _) in enumerate(self.attributes):
            if attr_name == name:
                self.attributes[i] = (name, value)
                return
        self.attributes.append((name, value))

    def to_tuple(self) -> tuple[str, list[tuple[str, str]], list[Any], dict[str, Any]]:
        """Return the 4-field record form ``(tag, attributes, children, meta)``.

        Children are converted recursively; text leaves stay strings.
        """
        return (
            self.tag,
            list(self.attributes),
            [child.to_tuple() if isinstance(child, AstNode) else child for child in self.children],
            dict(self.meta),
        )


AstItem = Union[AstNode, str]
Ast = list[AstItem]


def is_text(item: AstItem) -> bool:
    """Return True if ``item`` is a text leaf."""
    return isinstance(item, str)


def element(tag: str, children: list[AstItem] | None = None, attributes: list[tuple[str, str]] | None = None) -> AstNode:
    """Build a plain tagged node with empty meta.

    Parameters
    ----------
    tag : str
        Element name
    children : list, optional
        Child nodes and text leaves
    attributes : list of (str, str), optional
        Attribute pairs

    Returns
    -------
    AstNode
        The new node

    """
    return AstNode(tag=tag, attributes=list(attributes or []), children=list(children or []))


def verbatim_node(tag: str, lines: list[str], attributes: list[tuple[str, str]] | None = None) -> AstNode:
    """Build a node whose children are raw captured lines."""
    return AstNode(tag=tag, attributes=list(attributes or []), children=list(lines), meta={META_VERBATIM: True})
