#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing.

This module defines the options controlling how Markdown source is turned
into the AST: GFM extensions, smartypants, link detection and the bounds
of the concurrency scheduler.
"""
# src/mdtree/options/markdown.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mdtree.constants import (
    DEFAULT_BREAKS,
    DEFAULT_CODE_CLASS_PREFIX,
    DEFAULT_FOOTNOTES,
    DEFAULT_GFM,
    DEFAULT_GFM_TABLES,
    DEFAULT_PURE_LINKS,
    DEFAULT_SMARTYPANTS,
    DEFAULT_TIMEOUT_MS,
)
from mdtree.options.base import BaseParserOptions

if TYPE_CHECKING:
    from mdtree.scheduler import Mapper


@dataclass(frozen=True)
class ParserOptions(BaseParserOptions):
    """Configuration options for Markdown-to-AST parsing.

    Parameters
    ----------
    gfm : bool, default True
        Enable the supported GitHub Flavored Markdown extensions
        (strikethrough, tables, significant line breaks with ``breaks``).
    breaks : bool, default False
        Make every line break inside a paragraph significant. Only
        effective when ``gfm`` is enabled.
    code_class_prefix : str or None, default None
        Space separated prefixes. For a code block in language ``elixir``
        each prefix ``p`` adds the class ``p + "elixir"`` after the bare
        language name.
    smartypants : bool, default True
        Convert straight quotes to curly quotes, ``--``/``---`` to en/em
        dashes and ``...`` to an ellipsis in text.
    pure_links : bool, default True
        Render bare ``http(s)://`` URLs as links.
    gfm_tables : bool, default False
        Lenient table detection: a header row immediately followed by a
        separator row is a table, no preceding blank line needed and no
        spaces needed around interior bars.
    footnotes : bool, default False
        Parse ``[^id]`` footnote references and ``[^id]: text`` definitions.
    timeout : int or None, default 5000
        Bound in milliseconds on the whole batch of concurrent parse units.
        ``None`` disables the bound.
    mapper : Mapper or None, default None
        Replacement dispatch/join strategy ``(func, items, timeout) -> list``.
        When None, :func:`mdtree.scheduler.parallel_map` is used.

    Examples
    --------
        >>> options = ParserOptions(code_class_prefix="lang- language-")
        >>> strict = options.create_updated(smartypants=False)

    """

    gfm: bool = field(
        default=DEFAULT_GFM,
        metadata={"help": "Enable GitHub Flavored Markdown extensions", "cli_name": "no-gfm", "importance": "core"},
    )
    breaks: bool = field(
        default=DEFAULT_BREAKS,
        metadata={"help": "Make every line break significant (requires gfm)", "importance": "core"},
    )
    code_class_prefix: str | None = field(
        default=DEFAULT_CODE_CLASS_PREFIX,
        metadata={"help": "Space separated prefixes added to code block language classes", "importance": "core"},
    )
    smartypants: bool = field(
        default=DEFAULT_SMARTYPANTS,
        metadata={
            "help": "Curly quotes, dashes and ellipses in text",
            "cli_name": "no-smartypants",
            "importance": "core",
        },
    )
    pure_links: bool = field(
        default=DEFAULT_PURE_LINKS,
        metadata={"help": "Render bare URLs as links", "cli_name": "no-pure-links", "importance": "core"},
    )
    gfm_tables: bool = field(
        default=DEFAULT_GFM_TABLES,
        metadata={"help": "Lenient GFM table detection", "importance": "advanced"},
    )
    footnotes: bool = field(
        default=DEFAULT_FOOTNOTES,
        metadata={"help": "Parse footnote references and definitions", "importance": "advanced"},
    )
    timeout: int | None = field(
        default=DEFAULT_TIMEOUT_MS,
        metadata={"help": "Timeout in milliseconds for concurrent parse units", "type": int, "importance": "advanced"},
    )
    mapper: Mapper | None = field(
        default=None,
        compare=False,
        metadata={"help": "Custom dispatch/join strategy", "exclude_from_cli": True, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If ``timeout`` is not a positive integer or ``mapper`` is not callable.

        """
        super().__post_init__()

        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, int):
                raise ValueError(f"timeout must be an integer number of milliseconds, got {self.timeout!r}")
            if self.timeout <= 0:
                raise ValueError(f"timeout must be positive, got {self.timeout}")

        if self.mapper is not None and not callable(self.mapper):
            raise ValueError(f"mapper must be callable, got {type(self.mapper).__name__}")

    @property
    def significant_breaks(self) -> bool:
        """Whether every newline inside a paragraph becomes a line break."""
        return self.gfm and self.breaks

    @property
    def code_class_prefixes(self) -> list[str]:
        """Return the configured code class prefixes in order."""
        if not self.code_class_prefix:
            return []
        return self.code_class_prefix.split()
