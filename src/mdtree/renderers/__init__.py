#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/renderers/__init__.py
"""Renderers turning the mdtree AST into output formats."""

from mdtree.renderers.base import BaseRenderer
from mdtree.renderers.html import HtmlRenderer

__all__ = ["BaseRenderer", "HtmlRenderer"]
