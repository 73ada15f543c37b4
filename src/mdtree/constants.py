#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdtree library.

This module centralizes the hardcoded values, default option values and
literal types used across mdtree.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Parser Defaults - Default values for ParserOptions
3. Renderer Defaults - Default values for HtmlRendererOptions
4. Markup Constants - Tag names, meta flags and marker tables
5. CLI Exit Codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

Severity = Literal["error", "warning", "deprecation"]
Status = Literal["ok", "error"]
Alignment = Literal["left", "center", "right"]

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_GFM = True
DEFAULT_BREAKS = False
DEFAULT_CODE_CLASS_PREFIX: str | None = None
DEFAULT_SMARTYPANTS = True
DEFAULT_PURE_LINKS = True
DEFAULT_GFM_TABLES = False
DEFAULT_FOOTNOTES = False
DEFAULT_TIMEOUT_MS = 5000

# Container blocks nested deeper than this keep their markers as paragraph text
MAX_NESTING_DEPTH = 32

# =============================================================================
# Renderer Defaults
# =============================================================================

DEFAULT_HTML_ESCAPE = True
DEFAULT_HTML_COMPACT_OUTPUT = False

# =============================================================================
# Markup Constants
# =============================================================================

COMMENT_TAG = "comment"
META_VERBATIM = "verbatim"
META_COMMENT = "comment"

# Inline raw HTML passes through unescaped and unwrapped
RAW_HTML_TAG = "raw"
META_RAW = "raw"

INLINE_CODE_CLASS = "inline"

FOOTNOTE_REF_CLASS = "footnote"
FOOTNOTE_REF_TITLE = "see footnote"
FOOTNOTE_BACKLINK_CLASS = "reversefootnote"
FOOTNOTE_BACKLINK_TITLE = "return to article"
FOOTNOTE_BACKLINK_TEXT = "↩"

# Elements that may open a multi-line HTML block
BLOCK_HTML_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "details",
        "dialog",
        "dd",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
        "video",
        "audio",
        "canvas",
        "iframe",
        "noscript",
        "script",
        "style",
        "svg",
        "template",
    }
)

# Thematic break marker -> class attribute
RULER_CLASSES = {"-": "thin", "*": "medium", "_": "thick"}

# HTML elements without a closing tag
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Smartypants replacements
EN_DASH = "–"
EM_DASH = "—"
ELLIPSIS = "…"
LEFT_SINGLE_QUOTE = "‘"
RIGHT_SINGLE_QUOTE = "’"
LEFT_DOUBLE_QUOTE = "“"
RIGHT_DOUBLE_QUOTE = "”"

# =============================================================================
# CLI Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
