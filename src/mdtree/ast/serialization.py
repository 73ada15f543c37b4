#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/ast/serialization.py
"""JSON serialization and deserialization for the AST.

The wire form of a tagged node is a 4-element list
``[tag, [[name, value], ...], children, meta]``; text leaves stay strings.
This is the shape other tools consume, so the JSON form carries no extra
wrapper beyond an optional schema version.

Examples
--------
Serialize an AST to JSON:

    >>> from mdtree.ast import AstNode
    >>> ast = [AstNode("p", [], ["Hello"])]
    >>> ast_to_json(ast)
    '{"schema_version": 1, "ast": [["p", [], ["Hello"], {}]]}'

Deserialize it again:

    >>> json_to_ast(ast_to_json(ast)) == ast
    True

"""

from __future__ import annotations

import json
from typing import Any

from mdtree.ast.nodes import Ast, AstItem, AstNode

SCHEMA_VERSION = 1


def _item_to_wire(item: AstItem) -> Any:
    if isinstance(item, AstNode):
        return [
            item.tag,
            [[name, value] for name, value in item.attributes],
            [_item_to_wire(child) for child in item.children],
            dict(item.meta),
        ]
    if isinstance(item, str):
        return item
    raise ValueError(f"Unknown AST item for serialization: {type(item).__name__}")


def ast_to_wire(ast: Ast) -> list[Any]:
    """Convert an AST to plain nested lists.

    Parameters
    ----------
    ast : list of AstItem
        The AST to convert

    Returns
    -------
    list
        JSON compatible wire form

    """
    return [_item_to_wire(item) for item in ast]


def _item_from_wire(data: Any) -> AstItem:
    if isinstance(data, str):
        return data
    if not isinstance(data, (list, tuple)) or len(data) != 4:
        raise ValueError(f"Invalid wire node, expected text or a 4-element list: {data!r}")

    tag, attributes, children, meta = data
    if not isinstance(tag, str):
        raise ValueError(f"Invalid tag in wire node: {tag!r}")
    if not isinstance(meta, dict):
        raise ValueError(f"Invalid meta in wire node {tag!r}: {meta!r}")

    pairs: list[tuple[str, str]] = []
    for pair in attributes:
        if len(pair) != 2:
            raise ValueError(f"Invalid attribute in wire node {tag!r}: {pair!r}")
        pairs.append((str(pair[0]), str(pair[1])))

    return AstNode(tag=tag, attributes=pairs, children=[_item_from_wire(child) for child in children], meta=dict(meta))


def wire_to_ast(data: list[Any]) -> Ast:
    """Rebuild an AST from its wire form.

    Raises
    ------
    ValueError
        If the data is not a valid wire form

    """
    if not isinstance(data, list):
        raise ValueError(f"Wire AST must be a list, got {type(data).__name__}")
    return [_item_from_wire(item) for item in data]


def ast_to_json(ast: Ast, indent: int | None = None) -> str:
    """Serialize an AST to a JSON string with schema versioning.

    Parameters
    ----------
    ast : list of AstItem
        The AST to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        ``{"schema_version": 1, "ast": [...]}``

    """
    return json.dumps({"schema_version": SCHEMA_VERSION, "ast": ast_to_wire(ast)}, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str) -> Ast:
    """Deserialize a JSON string produced by :func:`ast_to_json`.

    A bare JSON list (wire form without the version wrapper) is accepted too.

    Raises
    ------
    ValueError
        If the JSON is invalid or has an unsupported schema version

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    if isinstance(data, dict):
        version = data.get("schema_version", SCHEMA_VERSION)
        if version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported schema version: {version}")
        data = data.get("ast")

    return wire_to_ast(data)
