#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/parsers/context.py
"""Per-parse state threaded through the parsing stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mdtree.diagnostics import DiagnosticsCollector
from mdtree.options.markdown import ParserOptions
from mdtree.parsers.blocks import FootnoteDefinition, LinkDefinition


def normalize_label(label: str) -> str:
    """Normalize a link or footnote label for lookup.

    Labels match case-insensitively with runs of whitespace collapsed.
    """
    return " ".join(label.split()).casefold()


@dataclass
class ParseContext:
    """State of one parse call.

    Parameters
    ----------
    options : ParserOptions
        Effective options, immutable for the whole parse
    diagnostics : DiagnosticsCollector
        Messages emitted by the stage owning this context
    links : dict
        Reference link definitions by normalized label
    footnotes : dict
        Footnote definitions by label, in definition order

    Notes
    -----
    Definitions are collected by the block parser before any concurrent
    unit starts. A unit context made by :meth:`fork` shares the
    definition tables and must treat them as read-only; it gets its own
    diagnostics collector, merged back by the caller after the join.

    """

    options: ParserOptions
    diagnostics: DiagnosticsCollector = field(default_factory=DiagnosticsCollector)
    links: dict[str, LinkDefinition] = field(default_factory=dict)
    footnotes: dict[str, FootnoteDefinition] = field(default_factory=dict)

    def fork(self) -> ParseContext:
        """Return a context for one parse unit with a fresh collector."""
        return ParseContext(options=self.options, links=self.links, footnotes=self.footnotes)

    def define_link(self, definition: LinkDefinition) -> None:
        """Register a link definition; the first definition of a label wins."""
        self.links.setdefault(normalize_label(definition.id), definition)

    def lookup_link(self, label: str) -> Optional[LinkDefinition]:
        return self.links.get(normalize_label(label))

    def define_footnote(self, definition: FootnoteDefinition) -> None:
        """Register a footnote and number it in definition order."""
        if definition.id in self.footnotes:
            self.diagnostics.warning(definition.line, f"Footnote {definition.id} is defined more than once")
            return
        definition.number = len(self.footnotes) + 1
        self.footnotes[definition.id] = definition

    def lookup_footnote(self, label: str) -> Optional[FootnoteDefinition]:
        return self.footnotes.get(label)
