#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/utils/__init__.py
"""Utility modules for the mdtree package."""

from mdtree.utils.decorators import debug_timer
from mdtree.utils.html_utils import escape_attribute, escape_html, format_attributes

__all__ = ["debug_timer", "escape_attribute", "escape_html", "format_attributes"]
