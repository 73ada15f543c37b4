#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/utils/html_utils.py
"""HTML escaping helpers shared by the HTML renderer."""

from __future__ import annotations

from html import escape as _html_escape


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text, quote=False)


def escape_attribute(value: str) -> str:
    """Escape an attribute value for use inside double quotes."""
    return _html_escape(value, quote=True)


def format_attributes(attributes: list[tuple[str, str]]) -> str:
    """Render attribute pairs as ``' name="value"'`` in order.

    Examples
    --------
        >>> format_attributes([("class", "a b"), ("href", "x?a=1&b=2")])
        ' class="a b" href="x?a=1&amp;b=2"'

    """
    return "".join(f' {name}="{escape_attribute(value)}"' for name, value in attributes)
