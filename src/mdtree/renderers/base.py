#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that AST renderers inherit
from. A renderer consumes the AST produced by :func:`mdtree.parse` and
turns it into an output format.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdtree.ast.nodes import Ast
from mdtree.exceptions import InvalidOptionsError
from mdtree.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, ast: Ast) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        ast : list of AstItem
            The AST returned by :func:`mdtree.parse`

        Returns
        -------
        str
            Rendered output

        Raises
        ------
        RenderingError
            If the AST contains items the renderer cannot handle

        """
        ...

    def render(self, ast: Ast, output: Union[str, Path, IO[str]]) -> None:
        """Render the AST and write it to a file path or text stream."""
        self.write_text_output(self.render_to_string(ast), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[str]]) -> None:
        """Write text to a path (UTF-8) or to a text stream.

        Examples
        --------
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("<p>Hello</p>", buffer)
            >>> buffer.getvalue()
            '<p>Hello</p>'

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
        else:
            output.write(text)
