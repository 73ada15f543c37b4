#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/tables.py
"""Pipe table detection and row splitting.

Two detection modes exist:

Strict (default)
    The table must follow a blank line (or start its container). Every
    line of the table must contain a column delimiter; without exterior
    bars, interior bars only count when surrounded by spaces.
Lenient (``gfm_tables``)
    A row containing ``|`` directly followed by a separator row is a
    table wherever it appears; bars need no surrounding spaces.

A separator row right after the first row makes that row the header and
gives the column alignments. Without one, every row is a body row and all
columns are left aligned.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from mdtree.constants import Alignment
from mdtree.diagnostics import DiagnosticsCollector
from mdtree.parsers.blocks import Table, TableRow
from mdtree.parsers.lines import Line

logger = logging.getLogger(__name__)

_SEPARATOR_CELL = re.compile(r"^:?-+:?$")
_SPACED_BAR = re.compile(r"\s\|\s")
_UNESCAPED_BAR = re.compile(r"(?<!\\)\|")


def parse_alignment(cell: str) -> Alignment:
    """Return the alignment encoded by one separator cell.

    Examples
    --------
        >>> [parse_alignment(c) for c in (":---:", "---:", ":---", "---")]
        ['center', 'right', 'left', 'left']

    """
    cell = cell.strip()
    if cell.startswith(":") and cell.endswith(":") and len(cell) > 1:
        return "center"
    if cell.endswith(":"):
        return "right"
    return "left"


def _has_exterior_bars(text: str) -> bool:
    stripped = text.strip()
    return stripped.startswith("|") or (stripped.endswith("|") and not stripped.endswith("\\|"))


def split_row(text: str, strict: bool = True) -> list[str]:
    """Split a table line into stripped cell texts.

    Leading and trailing bars are removed. In strict mode, a line without
    exterior bars is split only at bars surrounded by whitespace. Escaped
    bars (``\\|``) never split and are unescaped in the cell text.
    """
    stripped = text.strip()
    exterior = _has_exterior_bars(stripped)
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]

    if strict and not exterior:
        cells = _SPACED_BAR.split(stripped)
    else:
        cells = _UNESCAPED_BAR.split(stripped)
    return [cell.strip().replace("\\|", "|") for cell in cells]


def is_separator_row(text: str) -> bool:
    """Whether ``text`` is a header separator such as ``| :--- | ---: |``."""
    if "-" not in text:
        return False
    cells = split_row(text, strict=False)
    return bool(cells) and all(_SEPARATOR_CELL.match(cell) for cell in cells)


def is_strict_table_line(text: str) -> bool:
    """Whether ``text`` can be a table line without the lenient rules."""
    stripped = text.strip()
    if not stripped or "|" not in stripped:
        return False
    if _has_exterior_bars(stripped):
        return len(split_row(stripped)) >= 1 and stripped != "|"
    return bool(_SPACED_BAR.search(stripped))


def _is_lenient_row(text: str) -> bool:
    return bool(text.strip()) and bool(_UNESCAPED_BAR.search(text))


def _fit_row(cells: list[str], columns: int, line: int, diagnostics: DiagnosticsCollector) -> list[str]:
    if len(cells) < columns:
        diagnostics.warning(line, f"Table row has {len(cells)} cells, expected {columns}; padded")
        return cells + [""] * (columns - len(cells))
    if len(cells) > columns:
        diagnostics.warning(line, f"Table row has {len(cells)} cells, expected {columns}; truncated")
        return cells[:columns]
    return cells


def match_table(
    lines: Sequence[Line],
    index: int,
    after_blank: bool,
    lenient: bool,
    diagnostics: DiagnosticsCollector,
) -> Optional[tuple[Table, int]]:
    """Try to read a table starting at ``lines[index]``.

    Parameters
    ----------
    lines : sequence of Line
        Lines of the current container
    index : int
        Position of the candidate first row
    after_blank : bool
        True when a blank line (or the container start) precedes the row
    lenient : bool
        Enable the ``gfm_tables`` detection rules
    diagnostics : DiagnosticsCollector
        Receives row shape warnings

    Returns
    -------
    tuple of (Table, int) or None
        The table and the index of the next unconsumed line

    """
    first = lines[index]
    has_separator = index + 1 < len(lines) and is_separator_row(lines[index + 1].text)

    strict = True
    if after_blank and is_strict_table_line(first.text) and (
        has_separator or (index + 1 < len(lines) and is_strict_table_line(lines[index + 1].text))
    ):
        accepts = is_strict_table_line
    elif lenient and has_separator and _is_lenient_row(first.text):
        accepts = _is_lenient_row
        strict = False
    else:
        return None

    end = index + 2 if has_separator else index + 1
    while end < len(lines) and accepts(lines[end].text):
        end += 1

    rows = [TableRow(cells=split_row(line.text, strict=strict), line=line.number) for line in lines[index:end]]

    header: Optional[TableRow] = None
    if has_separator:
        header = rows[0]
        alignments = [parse_alignment(cell) for cell in split_row(lines[index + 1].text, strict=False)]
        body = rows[2:]
        columns = len(header.cells)
        if len(alignments) < columns:
            alignments.extend(["left"] * (columns - len(alignments)))
        alignments = alignments[:columns]
    else:
        body = rows
        columns = len(rows[0].cells)
        alignments = ["left"] * columns

    if header is not None:
        header.cells = _fit_row(header.cells, columns, header.line, diagnostics)
    for row in body:
        row.cells = _fit_row(row.cells, columns, row.line, diagnostics)

    logger.debug("Table at line %d: %d columns, %d body rows", first.number, columns, len(body))
    return Table(header=header, rows=body, alignments=alignments, line=first.number), end
