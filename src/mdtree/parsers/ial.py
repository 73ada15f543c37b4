#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/ial.py
"""Inline attribute lists (IALs).

An IAL is a ``{: ...}`` annotation assigning HTML attributes to the block
line before it, or to the link or image it directly follows. Supported
tokens:

- ``.name`` adds a class
- ``#name`` sets the id
- ``name=value``, ``name="value"``, ``name='value'`` set any attribute

Anything else is an illegal token, reported with a warning and ignored.
"""

from __future__ import annotations

import json
import logging
import re

from mdtree.ast.utils import merge_attributes
from mdtree.diagnostics import DiagnosticsCollector
from mdtree.parsers.blocks import Block, PendingIal

logger = logging.getLogger(__name__)

IAL_LINE_PATTERN = re.compile(r"^ {0,3}\{:\s*(.*?)\s*\}\s*$")
INLINE_IAL_PATTERN = re.compile(r"[ \t]*\{:\s*([^}]*?)\s*\}")

_TOKEN_PATTERN = re.compile(r"""(?:[^\s"']+|"[^"]*"|'[^']*')+""")
_NAME_VALUE_PATTERN = re.compile(r"""^([A-Za-z_:][-\w:.]*)=(?:"([^"]*)"|'([^']*)'|(.*))$""", re.DOTALL)


def parse_ial(source: str) -> tuple[list[tuple[str, str]], list[str]]:
    """Parse the body of an IAL.

    Parameters
    ----------
    source : str
        Text between ``{:`` and ``}``

    Returns
    -------
    tuple of (list of (str, str), list of str)
        Attributes in token order (classes merged into one ``class``
        entry) and the illegal tokens

    Examples
    --------
        >>> parse_ial('.a #main title="x y" hello')
        ([('class', 'a'), ('id', 'main'), ('title', 'x y')], ['hello'])

    """
    pairs: list[tuple[str, str]] = []
    illegal: list[str] = []

    for token in _TOKEN_PATTERN.findall(source):
        if token.startswith(".") and len(token) > 1:
            pairs.append(("class", token[1:]))
        elif token.startswith("#") and len(token) > 1:
            pairs.append(("id", token[1:]))
        else:
            match = _NAME_VALUE_PATTERN.match(token)
            if match:
                value = next(group for group in match.groups()[1:] if group is not None)
                pairs.append((match.group(1), value))
            else:
                illegal.append(token)

    return merge_attributes([], pairs), illegal


def illegal_attributes_message(illegal: list[str]) -> str:
    """Format the warning for illegal IAL tokens."""
    return f"Illegal attributes {json.dumps(illegal, ensure_ascii=False)} ignored in IAL"


def read_ial(source: str, line: int, diagnostics: DiagnosticsCollector) -> list[tuple[str, str]]:
    """Parse an IAL body, reporting illegal tokens at ``line``."""
    attributes, illegal = parse_ial(source)
    if illegal:
        diagnostics.warning(line, illegal_attributes_message(illegal))
    return attributes


def attach_ials(blocks: list[Block], diagnostics: DiagnosticsCollector) -> list[Block]:
    """Attach pending IALs to the block directly before them.

    A pending IAL attaches when no blank line separates it from a preceding
    block of the same container. Otherwise it is dropped with a warning.

    Parameters
    ----------
    blocks : list of Block
        Blocks of one container, in source order
    diagnostics : DiagnosticsCollector
        Receives warnings for illegal tokens and unattached IALs

    Returns
    -------
    list of Block
        ``blocks`` without the pending IALs

    """
    result: list[Block] = []
    for block in blocks:
        if not isinstance(block, PendingIal):
            result.append(block)
            continue

        attributes = read_ial(block.source, block.line, diagnostics)
        if block.adjacent and result:
            target = result[-1]
            target.attributes = merge_attributes(target.attributes, attributes)
            logger.debug("Attached IAL at line %d to %s", block.line, type(target).__name__)
        else:
            diagnostics.warning(block.line, f"IAL {{: {block.source}}} does not follow any block and was ignored")

    return result
