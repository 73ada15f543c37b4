#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/inline.py
"""Inline span parser.

Turns the raw text of one leaf block (paragraph, heading, table cell) into
inline AST items. Each call works on its own text only, which is what lets
top-level blocks be assembled concurrently.

The scanner walks the text left to right. At each character that can start
a span it tries the matching recognizer; a recognizer that fails leaves the
character as plain text. Delimiter searches skip escaped characters and
code spans, so escapes bind first, then code spans, then emphasis and the
other spans.

Recognized spans:

- backslash escapes of ASCII punctuation, backslash and double-space hard
  breaks
- code spans delimited by backtick runs of any equal length
- ``*``/``_`` emphasis and strong emphasis with flanking rules
- ``~~`` strikethrough (with ``gfm``)
- inline, reference and shortcut links and images, each optionally
  followed by an IAL
- ``[^id]`` footnote references (with ``footnotes``)
- ``<scheme:...>`` and ``<user@host>`` autolinks, bare ``http(s)://`` URLs
  (with ``pure_links``)
- raw inline HTML tags and comments, kept verbatim
"""

from __future__ import annotations

import logging
import re
import string
from bisect import bisect_left, bisect_right
from typing import Callable, Optional

from mdtree.ast.nodes import AstItem, AstNode
from mdtree.ast.utils import extract_text, merge_attributes
from mdtree.constants import (
    FOOTNOTE_REF_CLASS,
    FOOTNOTE_REF_TITLE,
    INLINE_CODE_CLASS,
    META_RAW,
    META_VERBATIM,
    RAW_HTML_TAG,
)
from mdtree.parsers.context import ParseContext
from mdtree.parsers.ial import INLINE_IAL_PATTERN, read_ial
from mdtree.parsers.smartypants import SmartypantsTransformer

logger = logging.getLogger(__name__)

_ESCAPABLE = frozenset(string.punctuation)

HARD_BREAK_PATTERN = re.compile(r" {2,}\n")
LINK_DESTINATION_PATTERN = re.compile(
    r"""\(\s*(<[^<>\n]*>|(?:[^\s()\\]|\\.|\([^\s()]*\))*)(?:\s+("[^"]*"|'[^']*'|\([^)]*\)))?\s*\)"""
)
REFERENCE_LABEL_PATTERN = re.compile(r"\[([^\[\]]*)\]")
FOOTNOTE_REF_PATTERN = re.compile(r"\[\^([^\]\s]+)\]")
AUTOLINK_PATTERN = re.compile(r"<([A-Za-z][A-Za-z0-9+.-]{1,31}:[^\s<>]*)>")
EMAIL_AUTOLINK_PATTERN = re.compile(r"<([\w.+-]+@[\w-]+(?:\.[\w-]+)+)>")
INLINE_HTML_PATTERN = re.compile(r"<!--.*?-->|</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?>", re.DOTALL)
PURE_LINK_PATTERN = re.compile(r"https?://[^\s<>]+")

_PURE_LINK_TRAILING = ".,:;!?\"'*~"

SpanResult = Optional[tuple[list[AstItem], int]]


def merge_text(items: list[AstItem]) -> list[AstItem]:
    """Join adjacent text leaves and drop empty ones."""
    merged: list[AstItem] = []
    for item in items:
        if isinstance(item, str):
            if not item:
                continue
            if merged and isinstance(merged[-1], str):
                merged[-1] = merged[-1] + item
                continue
        merged.append(item)
    return merged


def _backtick_run(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] == "`":
        end += 1
    return end - start


class _DelimiterIndex:
    """Delimiter positions of one text, each kind found in a single scan.

    Lookups return what a forward search from a position would find, so a
    paragraph full of unmatched openers is still parsed in near linear time.

    Parameters
    ----------
    text : str
        Text the parser is scanning
    can_close : callable
        ``(text, start, end, char) -> bool`` flanking test for closing runs

    """

    def __init__(self, text: str, can_close: Callable[[str, int, int, str], bool]) -> None:
        self._text = text
        self._can_close = can_close
        self._backtick_runs: dict[int, list[int]] = {}
        self._brackets: Optional[dict[int, int]] = None
        self._runs: dict[str, tuple[list[int], list[int], dict[int, list[int]]]] = {}

        index = text.find("`")
        while index != -1:
            run = _backtick_run(text, index)
            self._backtick_runs.setdefault(run, []).append(index)
            index = text.find("`", index + run)

    def backtick_run(self, start: int, length: int) -> int:
        """Return the index of the next backtick run of exactly ``length`` at or after ``start``."""
        starts = self._backtick_runs.get(length, [])
        found = bisect_left(starts, start)
        return starts[found] if found < len(starts) else -1

    def skip_code_span(self, position: int) -> int:
        run = _backtick_run(self._text, position)
        close = self.backtick_run(position + run, run)
        return close + run if close != -1 else position + run

    def bracket_close(self, position: int) -> Optional[int]:
        """Return the ``]`` matching the ``[`` at ``position``, -1 if unmatched.

        ``None`` means the scan never saw ``position`` as a bracket (it lies
        inside an escape or code span from the start of the text).
        """
        if self._brackets is None:
            self._brackets = self._match_brackets()
        return self._brackets.get(position)

    def closer(self, start: int, char: str, width: int) -> int:
        """Return the start of the first run after ``start`` that closes a ``width`` span."""
        if char not in self._runs:
            self._runs[char] = self._index_runs(char)
        starts, ends, next_closer = self._runs[char]
        found = next_closer[width][bisect_right(starts, start)]
        return ends[found] - width if found != -1 else -1

    def _match_brackets(self) -> dict[int, int]:
        text = self._text
        matches: dict[int, int] = {}
        open_brackets: list[int] = []
        index = 0
        while index < len(text):
            current = text[index]
            if current == "\\":
                index += 2
                continue
            if current == "`":
                index = self.skip_code_span(index)
                continue
            if current == "[":
                matches[index] = -1
                open_brackets.append(index)
            elif current == "]" and open_brackets:
                matches[open_brackets.pop()] = index
            index += 1
        return matches

    def _index_runs(self, char: str) -> tuple[list[int], list[int], dict[int, list[int]]]:
        text = self._text
        starts: list[int] = []
        ends: list[int] = []
        index = 0
        while index < len(text):
            current = text[index]
            if current == "\\":
                index += 2
                continue
            if current == "`":
                index = self.skip_code_span(index)
                continue
            if current != char:
                index += 1
                continue
            end = index
            while end < len(text) and text[end] == char:
                end += 1
            starts.append(index)
            ends.append(end)
            index = end

        # next_closer[width][k]: first run at or after k that can close a span of that width
        next_closer = {1: [-1] * (len(starts) + 1), 2: [-1] * (len(starts) + 1)}
        for position in range(len(starts) - 1, -1, -1):
            length = ends[position] - starts[position]
            closes = self._can_close(text, starts[position], ends[position], char)
            for width, table in next_closer.items():
                # A run of exactly two belongs to a nested strong span
                fits = length >= 2 if width == 2 else length != 2
                table[position] = position if closes and fits else table[position + 1]
        return starts, ends, next_closer


class InlineParser:
    """Parse inline spans of leaf block text.

    Parameters
    ----------
    context : ParseContext
        Context of the current parse unit; supplies options and
        definitions and receives diagnostics

    """

    def __init__(self, context: ParseContext) -> None:
        self._context = context
        self._options = context.options
        self._indexes: dict[str, _DelimiterIndex] = {}
        self._recognizers: dict[str, Callable[[str, int, int, bool], SpanResult]] = {
            "\\": self._escape,
            "`": self._code_span,
            "*": self._emphasis,
            "_": self._emphasis,
            "!": self._image,
            "[": self._link,
            "<": self._angle,
            " ": self._hard_break,
            "\n": self._newline,
        }
        if self._options.gfm:
            self._recognizers["~"] = self._strikethrough
        if self._options.pure_links:
            self._recognizers["h"] = self._pure_link

    def parse(self, text: str, line: int) -> list[AstItem]:
        """Parse ``text`` starting on source line ``line``.

        Parameters
        ----------
        text : str
            Raw block text, lines joined by newlines
        line : int
            Source line of the first character, for diagnostics

        Returns
        -------
        list of AstItem
            Inline nodes and text leaves, adjacent text merged

        """
        self._indexes = {}
        items = self._parse(text, line, allow_links=True)
        if self._options.smartypants:
            items = SmartypantsTransformer().transform(items)
        return merge_text(items)

    def _parse(self, text: str, line: int, allow_links: bool) -> list[AstItem]:
        items: list[AstItem] = []
        buffer: list[str] = []
        position = 0

        while position < len(text):
            recognizer = self._recognizers.get(text[position])
            result = recognizer(text, position, line, allow_links) if recognizer else None
            if result is None:
                buffer.append(text[position])
                position += 1
                continue

            nodes, position = result
            if buffer:
                items.append("".join(buffer))
                buffer = []
            items.extend(nodes)

        if buffer:
            items.append("".join(buffer))
        return merge_text(items)

    @staticmethod
    def _line_at(text: str, position: int, line: int) -> int:
        return line + text.count("\n", 0, position)

    def _index(self, text: str) -> _DelimiterIndex:
        index = self._indexes.get(text)
        if index is None:
            index = self._indexes[text] = _DelimiterIndex(text, self._can_close)
        return index

    # ------------------------------------------------------------------
    # Escapes and breaks
    # ------------------------------------------------------------------

    def _escape(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        if position + 1 >= len(text):
            return None
        following = text[position + 1]
        if following == "\n":
            return [AstNode("br"), "\n"], position + 2
        if following in _ESCAPABLE:
            return [following], position + 2
        return None

    def _hard_break(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        match = HARD_BREAK_PATTERN.match(text, position)
        if not match:
            return None
        return [AstNode("br"), "\n"], match.end()

    def _newline(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        if not self._options.significant_breaks:
            return None
        return [AstNode("br"), "\n"], position + 1

    # ------------------------------------------------------------------
    # Code spans
    # ------------------------------------------------------------------

    def _code_span(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        run = _backtick_run(text, position)
        close = self._index(text).backtick_run(position + run, run)
        if close == -1:
            self._context.diagnostics.warning(
                self._line_at(text, position, line), f"Closing unclosed backquotes {'`' * run} at end of input"
            )
            return ["`" * run], position + run

        content = text[position + run : close].replace("\n", " ")
        if len(content) > 1 and content.startswith(" ") and content.endswith(" ") and content.strip():
            content = content[1:-1]
        return [AstNode("code", [("class", INLINE_CODE_CLASS)], [content])], close + run

    # ------------------------------------------------------------------
    # Emphasis, strong emphasis and strikethrough
    # ------------------------------------------------------------------

    @staticmethod
    def _can_open(text: str, start: int, end: int, char: str) -> bool:
        following = text[end] if end < len(text) else ""
        if not following or following.isspace():
            return False
        if char == "_" and start > 0 and text[start - 1].isalnum():
            return False
        return True

    @staticmethod
    def _can_close(text: str, start: int, end: int, char: str) -> bool:
        if start == 0 or text[start - 1].isspace():
            return False
        if char == "_" and end < len(text) and text[end].isalnum():
            return False
        return True

    def _find_closer(self, text: str, start: int, char: str, width: int) -> int:
        """Return the start of the closing delimiter for a span opened before ``start``.

        ``width`` is 2 for strong emphasis and strikethrough, 1 for
        emphasis. A closing run longer than ``width`` closes with its last
        characters, so nested spans inside close first. While looking for a
        single closer, runs of exactly two belong to nested strong spans and
        are skipped.
        """
        return self._index(text).closer(start, char, width)

    def _delimiter_run(self, text: str, position: int) -> int:
        end = position
        while end < len(text) and text[end] == text[position]:
            end += 1
        return end

    def _emphasis(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        char = text[position]
        run_end = self._delimiter_run(text, position)
        if not self._can_open(text, position, run_end, char):
            return [text[position:run_end]], run_end

        if run_end - position >= 2:
            close = self._find_closer(text, position + 2, char, 2)
            if close != -1:
                children = self._parse(text[position + 2 : close], self._line_at(text, position, line), allow_links)
                return [AstNode("strong", [], children)], close + 2

        close = self._find_closer(text, position + 1, char, 1)
        if close != -1:
            children = self._parse(text[position + 1 : close], self._line_at(text, position, line), allow_links)
            return [AstNode("em", [], children)], close + 1

        return [text[position:run_end]], run_end

    def _strikethrough(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        run_end = self._delimiter_run(text, position)
        if run_end - position < 2 or not self._can_open(text, position, run_end, "~"):
            return [text[position:run_end]], run_end

        close = self._find_closer(text, position + 2, "~", 2)
        if close == -1:
            return [text[position:run_end]], run_end
        children = self._parse(text[position + 2 : close], self._line_at(text, position, line), allow_links)
        return [AstNode("del", [], children)], close + 2

    # ------------------------------------------------------------------
    # Links, images and footnote references
    # ------------------------------------------------------------------

    def _find_bracket_close(self, text: str, position: int) -> int:
        close = self._index(text).bracket_close(position)
        if close is not None:
            return close
        return self._scan_bracket_close(text, position)

    def _scan_bracket_close(self, text: str, position: int) -> int:
        depth = 0
        index = position
        while index < len(text):
            current = text[index]
            if current == "\\":
                index += 2
                continue
            if current == "`":
                index = self._index(text).skip_code_span(index)
                continue
            if current == "[":
                depth += 1
            elif current == "]":
                depth -= 1
                if depth == 0:
                    return index
            index += 1
        return -1

    def _resolve_target(self, text: str, label: str, after: int) -> Optional[tuple[str, Optional[str], int]]:
        """Return ``(url, title, end)`` for the link whose label ends before ``after``."""
        match = LINK_DESTINATION_PATTERN.match(text, after)
        if match:
            url = match.group(1)
            if url.startswith("<") and url.endswith(">"):
                url = url[1:-1]
            title = match.group(2)[1:-1] if match.group(2) else None
            return url, title, match.end()

        reference = REFERENCE_LABEL_PATTERN.match(text, after)
        if reference:
            definition = self._context.lookup_link(reference.group(1) or label)
            if definition is not None:
                return definition.url, definition.title, reference.end()
            return None

        definition = self._context.lookup_link(label)
        if definition is not None:
            return definition.url, definition.title, after
        return None

    def _apply_ial(self, node: AstNode, text: str, position: int, line: int) -> int:
        match = INLINE_IAL_PATTERN.match(text, position)
        if not match:
            return position
        attributes = read_ial(match.group(1), self._line_at(text, position, line), self._context.diagnostics)
        node.attributes = merge_attributes(node.attributes, attributes)
        return match.end()

    def _link(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        if self._options.footnotes and text.startswith("[^", position):
            return self._footnote_reference(text, position, line)
        if not allow_links:
            return None

        close = self._find_bracket_close(text, position)
        if close == -1:
            return None
        label = text[position + 1 : close]
        target = self._resolve_target(text, label, close + 1)
        if target is None:
            return None

        url, title, end = target
        attributes = [("href", url)]
        if title is not None:
            attributes.append(("title", title))
        node = AstNode("a", attributes, self._parse(label, self._line_at(text, position, line), allow_links=False))
        return [node], self._apply_ial(node, text, end, line)

    def _image(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        if not text.startswith("![", position):
            return None

        close = self._find_bracket_close(text, position + 1)
        if close == -1:
            return None
        label = text[position + 2 : close]
        target = self._resolve_target(text, label, close + 1)
        if target is None:
            return None

        url, title, end = target
        alt = extract_text(self._parse(label, self._line_at(text, position, line), allow_links=False))
        attributes = [("src", url), ("alt", alt)]
        if title is not None:
            attributes.append(("title", title))
        node = AstNode("img", attributes, [])
        return [node], self._apply_ial(node, text, end, line)

    def _footnote_reference(self, text: str, position: int, line: int) -> SpanResult:
        match = FOOTNOTE_REF_PATTERN.match(text, position)
        if not match:
            return None

        label = match.group(1)
        definition = self._context.lookup_footnote(label)
        if definition is None:
            self._context.diagnostics.error(self._line_at(text, position, line), f"Footnote {label} is undefined")
            return [match.group(0)], match.end()

        number = str(definition.number)
        attributes = [
            ("href", f"#fn:{number}"),
            ("id", f"fnref:{number}"),
            ("class", FOOTNOTE_REF_CLASS),
            ("title", FOOTNOTE_REF_TITLE),
        ]
        return [AstNode("a", attributes, [number])], match.end()

    # ------------------------------------------------------------------
    # Autolinks and raw HTML
    # ------------------------------------------------------------------

    def _angle(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        if allow_links:
            match = AUTOLINK_PATTERN.match(text, position)
            if match:
                url = match.group(1)
                return [AstNode("a", [("href", url)], [url])], match.end()

            match = EMAIL_AUTOLINK_PATTERN.match(text, position)
            if match:
                address = match.group(1)
                return [AstNode("a", [("href", f"mailto:{address}")], [address])], match.end()

        match = INLINE_HTML_PATTERN.match(text, position)
        if match:
            raw = AstNode(RAW_HTML_TAG, [], [match.group(0)], {META_VERBATIM: True, META_RAW: True})
            return [raw], match.end()
        return None

    def _pure_link(self, text: str, position: int, line: int, allow_links: bool) -> SpanResult:
        if not allow_links:
            return None
        if position > 0 and (text[position - 1].isalnum() or text[position - 1] in "/=\"'"):
            return None

        match = PURE_LINK_PATTERN.match(text, position)
        if not match:
            return None

        url = match.group(0)
        while url and (url[-1] in _PURE_LINK_TRAILING or (url[-1] == ")" and url.count("(") < url.count(")"))):
            url = url[:-1]
        if url.endswith("://"):
            return None
        return [AstNode("a", [("href", url)], [url])], position + len(url)
