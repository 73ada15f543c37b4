#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from an item or list of items
merge_attributes : Merge attribute lists with the class-concatenation policy

Examples
--------
    >>> from mdtree.ast.nodes import AstNode
    >>> extract_text(["Hello ", AstNode("em", [], ["world"])])
    'Hello world'

"""

from __future__ import annotations

from typing import Union

from mdtree.ast.nodes import AstItem, AstNode


def extract_text(item_or_items: Union[AstItem, list[AstItem]], joiner: str = "") -> str:
    """Extract plain text from an item or list of items.

    Parameters
    ----------
    item_or_items : AstItem or list of AstItem
        A text leaf, a node, or a list of either
    joiner : str, default = ""
        String used to join the collected text parts

    Returns
    -------
    str
        Concatenated text of every leaf in document order

    """
    parts: list[str] = []

    def _collect(item: AstItem) -> None:
        if isinstance(item, AstNode):
            for child in item.children:
                _collect(child)
        else:
            parts.append(item)

    if isinstance(item_or_items, list):
        for entry in item_or_items:
            _collect(entry)
    else:
        _collect(item_or_items)

    return joiner.join(parts)


def merge_attributes(
    existing: list[tuple[str, str]],
    additional: list[tuple[str, str]],
) -> list[tuple[str, str]]:
    """Merge ``additional`` attributes into ``existing``.

    ``class`` values concatenate: the existing classes come first, then
    the new ones, duplicates dropped. Any other attribute present in both
    lists takes the value from ``additional`` while keeping its original
    position. Names only in ``additional`` are appended in order.

    Parameters
    ----------
    existing : list of (str, str)
        Attributes generated for the node
    additional : list of (str, str)
        Attributes to merge in (typically from an IAL)

    Returns
    -------
    list of (str, str)
        New attribute list with unique names

    Examples
    --------
        >>> merge_attributes([("class", "elixir")], [("class", "red"), ("id", "x")])
        [('class', 'elixir red'), ('id', 'x')]
        >>> merge_attributes([("start", "3")], [("start", "5")])
        [('start', '5')]

    """
    merged: list[tuple[str, str]] = []
    positions: dict[str, int] = {}

    for name, value in list(existing) + list(additional):
        if name not in positions:
            positions[name] = len(merged)
            merged.append((name, value))
            continue

        index = positions[name]
        if name == "class":
            classes = merged[index][1].split()
            classes.extend(cls for cls in value.split() if cls not in classes)
            merged[index] = (name, " ".join(classes))
        else:
            merged[index] = (name, value)

    return merged
