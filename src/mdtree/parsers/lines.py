#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/lines.py
"""Source line model.

The parser works on numbered lines. Input is either a single string or a
list of strings; both are normalized into :class:`Line` records with
1-based line numbers, so every later stage can attribute messages to a
source line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Union

_NEWLINE = re.compile(r"\r\n|\r|\n")

SourceInput = Union[str, Sequence[str]]


@dataclass(frozen=True)
class Line:
    """One source line.

    Parameters
    ----------
    text : str
        Line content without the line terminator
    number : int
        1-based line number in the original input

    """

    text: str
    number: int

    @property
    def blank(self) -> bool:
        """True for empty or whitespace-only lines."""
        return not self.text.strip()

    @property
    def indent(self) -> int:
        """Width of the leading whitespace, tabs counting as 4 columns."""
        width = 0
        for char in self.text:
            if char == " ":
                width += 1
            elif char == "\t":
                width += 4 - (width % 4)
            else:
                break
        return width

    def dedent(self, columns: int) -> Line:
        """Return the line with up to ``columns`` leading columns removed."""
        text = _expand_leading_tabs(self.text)
        strip = 0
        while strip < columns and strip < len(text) and text[strip] == " ":
            strip += 1
        return Line(text[strip:], self.number)

    def with_text(self, text: str) -> Line:
        """Return a line with the same number and new content."""
        return Line(text, self.number)


def _expand_leading_tabs(text: str) -> str:
    stripped = text.lstrip(" \t")
    leading = text[: len(text) - len(stripped)]
    if "\t" not in leading:
        return text
    return leading.expandtabs(4) + stripped


def to_lines(source: SourceInput) -> list[Line]:
    """Normalize parser input into numbered lines.

    Parameters
    ----------
    source : str or sequence of str
        Markdown as one string, or as a list of lines. List entries that
        contain line breaks are split further.

    Returns
    -------
    list of Line
        Lines numbered from 1

    Raises
    ------
    TypeError
        If ``source`` is neither a string nor a sequence of strings

    """
    if isinstance(source, str):
        texts = _NEWLINE.split(source)
    else:
        texts = []
        for entry in source:
            if not isinstance(entry, str):
                raise TypeError(f"Input lines must be strings, got {type(entry).__name__}")
            texts.extend(_NEWLINE.split(entry))

    return [Line(text, number) for number, text in enumerate(texts, start=1)]
