"""The major exported API functions for Markdown parsing and rendering."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/mdtree/api.py
from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Optional

from mdtree.ast.nodes import Ast, AstItem
from mdtree.constants import Status
from mdtree.diagnostics import Message, emit_messages
from mdtree.exceptions import InvalidOptionsError, ValidationError
from mdtree.options.html import HtmlRendererOptions
from mdtree.options.markdown import ParserOptions
from mdtree.parsers.assembler import AstAssembler
from mdtree.parsers.block_parser import BlockParser
from mdtree.parsers.blocks import Block
from mdtree.parsers.context import ParseContext
from mdtree.parsers.lines import SourceInput, to_lines
from mdtree.renderers.html import HtmlRenderer
from mdtree.scheduler import parallel_map
from mdtree.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


def _resolve_parser_options(options: Optional[ParserOptions], **kwargs: Any) -> ParserOptions:
    """Merge an options object and keyword overrides into one ParserOptions.

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a ParserOptions instance
    ValidationError
        If a keyword is not a ParserOptions field or has an invalid value

    """
    if options is not None and not isinstance(options, ParserOptions):
        raise InvalidOptionsError(converter_name="markdown", expected_type=ParserOptions, received_type=type(options))

    option_names = {field.name for field in fields(ParserOptions)}
    unknown = sorted(name for name in kwargs if name not in option_names)
    if unknown:
        raise ValidationError(
            f"Unknown parser options: {', '.join(unknown)}", parameter_name=unknown[0], parameter_value=kwargs[unknown[0]]
        )

    try:
        if options is None:
            return ParserOptions(**kwargs)
        return options.create_updated(**kwargs) if kwargs else options
    except ValueError as e:
        raise ValidationError(f"Invalid parser options: {e}", original_error=e) from e


def _assemble_units(context: ParseContext, blocks: list[Block]) -> Ast:
    """Assemble top-level blocks as independent units and join them in order."""

    def unit(block: Block) -> tuple[list[AstItem], list[Message]]:
        unit_context = context.fork()
        items = AstAssembler(unit_context).assemble_block(block)
        return items, unit_context.diagnostics.messages

    options = context.options
    if options.mapper is not None:
        results = options.mapper(unit, blocks, options.timeout)
    else:
        results = parallel_map(unit, blocks, options.timeout)

    ast: Ast = []
    for items, messages in results:
        ast.extend(items)
        context.diagnostics.extend(messages)

    if options.footnotes:
        footnotes_context = context.fork()
        ast.extend(AstAssembler(footnotes_context).footnotes_section())
        context.diagnostics.extend(footnotes_context.diagnostics.messages)
    return ast


def parse(
    source: SourceInput,
    options: Optional[ParserOptions] = None,
    **kwargs: Any,
) -> tuple[Status, Ast, list[Message]]:
    """Parse Markdown into an AST.

    Parameters
    ----------
    source : str or list of str
        Markdown text, or its lines
    options : ParserOptions, optional
        Parser configuration
    kwargs : Any
        Individual options overriding the ones in ``options``, e.g.
        ``smartypants=False``

    Returns
    -------
    tuple of (str, list of AstItem, list of Message)
        ``(status, ast, messages)``. ``status`` is ``"error"`` when any
        message is an error or a warning, ``"ok"`` otherwise; messages are
        sorted by line.

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a ParserOptions instance
    ValidationError
        If an option override is unknown or invalid
    UnitFailedError
        If a parse unit raised an internal fault
    ParseTimeoutError
        If the parse units did not complete within ``options.timeout``

    Examples
    --------
        >>> status, ast, messages = parse("My `code` is **best**")
        >>> status
        'ok'
        >>> [item.to_tuple() if not isinstance(item, str) else item for item in ast]
        [('p', [], ['My ', ('code', [('class', 'inline')], ['code'], {}), ' is ', ('strong', [], ['best'], {})], {})]

    """
    parser_options = _resolve_parser_options(options, **kwargs)
    context = ParseContext(options=parser_options)

    with debug_timer(logger, "Block parsing"):
        lines = to_lines(source)
        blocks = BlockParser(context).parse(lines)

    with debug_timer(logger, f"Assembling {len(blocks)} units"):
        ast = _assemble_units(context, blocks)

    status, messages = context.diagnostics.finalize()
    logger.debug("Parsed %d lines: status=%s, %d messages", len(lines), status, len(messages))
    return status, ast, messages


def render(
    source: SourceInput,
    options: Optional[ParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    **kwargs: Any,
) -> tuple[Status, str, list[Message]]:
    """Parse Markdown and render the AST to HTML.

    Parameters
    ----------
    source : str or list of str
        Markdown text, or its lines
    options : ParserOptions, optional
        Parser configuration
    renderer_options : HtmlRendererOptions, optional
        HTML rendering configuration
    kwargs : Any
        Individual parser options overriding the ones in ``options``

    Returns
    -------
    tuple of (str, str, list of Message)
        ``(status, html, messages)`` with the same status and messages as
        :func:`parse`

    Raises
    ------
    RenderingError
        If the HTML transform fails

    """
    status, ast, messages = parse(source, options, **kwargs)
    with debug_timer(logger, "Rendering (html)"):
        html = HtmlRenderer(renderer_options).render_to_string(ast)
    return status, html, messages


def render_or_print(
    source: SourceInput,
    options: Optional[ParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    filename: Optional[str] = None,
    **kwargs: Any,
) -> str:
    """Render Markdown to HTML, printing any messages to stderr.

    Each message is printed as ``<file>:<line>: <severity>: <description>``.
    The HTML is returned whatever the status.

    Parameters
    ----------
    filename : str, optional
        Name used as the message location, ``<no file>`` by default

    """
    _status, html, messages = render(source, options, renderer_options, **kwargs)
    emit_messages(messages, filename=filename)
    return html
