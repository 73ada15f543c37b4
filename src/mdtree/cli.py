"""Command-line interface for the mdtree Markdown parser.

Reads Markdown from a file or standard input and prints the rendered HTML,
or the AST as JSON with ``--ast``. Diagnostic messages go to standard
error, one per line.

Examples
--------
Render a file::

    $ mdtree README.md

Print the AST::

    $ mdtree README.md --ast

Read from standard input with lenient tables::

    $ cat table.md | mdtree --gfm-tables

Exit Codes
----------
0 when the status is ``ok``, 1 when it is ``error``, 3 for invalid
arguments, 4 when the input cannot be read and 6 when parsing failed
terminally (a unit fault or a timeout).
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdtree/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from mdtree import __version__
from mdtree.api import parse
from mdtree.ast.serialization import ast_to_json
from mdtree.constants import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from mdtree.diagnostics import emit_messages
from mdtree.exceptions import ParsingError, RenderingError, ValidationError
from mdtree.logging_utils import configure_logging
from mdtree.options.html import HtmlRendererOptions
from mdtree.options.markdown import ParserOptions
from mdtree.renderers.html import HtmlRenderer

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdtree",
        description="Parse Markdown into an AST and render it to HTML.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Markdown file to read (default: standard input)")
    parser.add_argument("--ast", action="store_true", help="Print the AST as JSON instead of HTML")

    parsing = parser.add_argument_group("parser options")
    parsing.add_argument("--no-gfm", dest="gfm", action="store_false", help="Disable GitHub Flavored Markdown")
    parsing.add_argument("--breaks", action="store_true", help="Make every line break significant (requires gfm)")
    parsing.add_argument(
        "--no-smartypants", dest="smartypants", action="store_false", help="Keep straight quotes, dashes and dots"
    )
    parsing.add_argument("--no-pure-links", dest="pure_links", action="store_false", help="Do not link bare URLs")
    parsing.add_argument("--gfm-tables", action="store_true", help="Lenient GFM table detection")
    parsing.add_argument("--footnotes", action="store_true", help="Parse footnote references and definitions")
    parsing.add_argument(
        "--code-class-prefix",
        metavar="PREFIXES",
        help='Space separated prefixes for code block language classes, e.g. "lang- language-"',
    )
    parsing.add_argument(
        "--timeout", type=int, metavar="MS", help="Timeout in milliseconds for concurrent parse units (default: 5000)"
    )

    rendering = parser.add_argument_group("renderer options")
    rendering.add_argument("--no-escape", dest="escape", action="store_false", help="Do not escape text in HTML")
    rendering.add_argument("--compact-output", action="store_true", help="No newlines between block tags")

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level for debugging (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with very verbose logging and timing information",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _build_options(parsed_args: argparse.Namespace) -> tuple[ParserOptions, HtmlRendererOptions]:
    parser_kwargs = {
        "gfm": parsed_args.gfm,
        "breaks": parsed_args.breaks,
        "smartypants": parsed_args.smartypants,
        "pure_links": parsed_args.pure_links,
        "gfm_tables": parsed_args.gfm_tables,
        "footnotes": parsed_args.footnotes,
        "code_class_prefix": parsed_args.code_class_prefix,
    }
    if parsed_args.timeout is not None:
        parser_kwargs["timeout"] = parsed_args.timeout
    try:
        parser_options = ParserOptions(**parser_kwargs)
    except ValueError as e:
        raise ValidationError(str(e), parameter_name="timeout", parameter_value=parsed_args.timeout) from e
    renderer_options = HtmlRendererOptions(escape=parsed_args.escape, compact_output=parsed_args.compact_output)
    return parser_options, renderer_options


def main(args: Optional[list[str]] = None) -> int:
    """Run the CLI and return the exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    console = Console(stderr=True, highlight=False, soft_wrap=True)
    filename = None if parsed_args.input == "-" else parsed_args.input

    try:
        parser_options, renderer_options = _build_options(parsed_args)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        return EXIT_VALIDATION_ERROR

    try:
        source = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] Cannot read {escape(parsed_args.input)}: {escape(str(e))}")
        return EXIT_FILE_ERROR

    try:
        status, ast, messages = parse(source, parser_options)
        if parsed_args.ast:
            output = ast_to_json(ast, indent=2) + "\n"
        else:
            output = HtmlRenderer(renderer_options).render_to_string(ast)
    except (ParsingError, RenderingError) as e:
        logger.error("Parsing failed: %s", e.message)
        console.print(f"[red]Error:[/red] {escape(e.message)}")
        return EXIT_PARSING_ERROR

    sys.stdout.write(output)
    emit_messages(messages, filename=filename, console=console)
    return EXIT_SUCCESS if status == "ok" else EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
