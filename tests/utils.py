"""Test utilities for the mdtree test suite.

Helpers for comparing ASTs and collecting message fields in assertions.
"""

from mdtree.ast import AstNode


def as_tuples(ast):
    """Convert an AST to nested ``(tag, attributes, children, meta)`` tuples for comparison."""
    return [item.to_tuple() if isinstance(item, AstNode) else item for item in ast]


def descriptions(messages):
    """Return the descriptions of a message list, in order."""
    return [message.description for message in messages]


def find_nodes(ast, tag):
    """Return every node with ``tag`` in document order."""
    found = []

    def _walk(item):
        if isinstance(item, AstNode):
            if item.tag == tag:
                found.append(item)
            for child in item.children:
                _walk(child)

    for entry in ast:
        _walk(entry)
    return found
