#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_html_renderer.py
"""Tests for the HTML renderer."""

import io

import pytest

from mdtree.ast import AstNode, element, verbatim_node
from mdtree.exceptions import InvalidOptionsError, RenderingError
from mdtree.options import HtmlRendererOptions, ParserOptions
from mdtree.renderers.html import HtmlRenderer
from mdtree.utils.html_utils import escape_html, format_attributes


def _render(ast, **options):
    return HtmlRenderer(HtmlRendererOptions(**options)).render_to_string(ast)


@pytest.mark.unit
class TestHtmlUtils:
    """Tests for escaping helpers."""

    def test_escape_html(self):
        assert escape_html('a < b & "c"') == 'a &lt; b &amp; "c"'
        assert escape_html("a < b", enabled=False) == "a < b"

    def test_format_attributes(self):
        assert format_attributes([("class", "a b"), ("title", 'say "hi"')]) == ' class="a b" title="say &quot;hi&quot;"'
        assert format_attributes([]) == ""


@pytest.mark.unit
class TestHtmlRenderer:
    """Tests for HtmlRenderer."""

    def test_paragraph_text_escaped(self):
        assert _render([element("p", ["a < b"])]) == "<p>a &lt; b</p>\n"

    def test_escape_disabled(self):
        assert _render([element("p", ["a < b"])], escape=False) == "<p>a < b</p>\n"

    def test_inline_nesting(self):
        ast = [element("p", ["x ", element("strong", ["y ", element("em", ["z"])])])]
        assert _render(ast) == "<p>x <strong>y <em>z</em></strong></p>\n"

    def test_list_layout(self):
        ast = [element("ul", [element("li", ["a"]), element("li", ["b"])])]
        assert _render(ast) == "<ul>\n<li>a</li>\n<li>b</li>\n</ul>\n"

    def test_compact_output(self):
        ast = [element("ul", [element("li", ["a"])]), element("p", ["b"])]
        assert _render(ast, compact_output=True) == "<ul><li>a</li></ul><p>b</p>"

    def test_void_elements(self):
        ast = [element("p", ["a", AstNode("br"), "\nb ", element("img", [], [("src", "i.png"), ("alt", "i")])])]
        assert _render(ast) == '<p>a<br />\nb <img src="i.png" alt="i" /></p>\n'

    def test_ruler(self):
        assert _render([element("hr", [], [("class", "thin")])]) == '<hr class="thin" />\n'

    def test_code_block(self):
        ast = [element("pre", [element("code", ["x < y\nz"], [("class", "python")])])]
        assert _render(ast) == '<pre><code class="python">x &lt; y\nz</code></pre>\n'

    def test_verbatim_children_not_escaped(self):
        ast = [verbatim_node("div", ["<span>", "some</span><text>"], [("class", "note")])]
        assert _render(ast) == '<div class="note"><span>\nsome</span><text></div>\n'

    def test_verbatim_not_escaped_even_with_escape_enabled(self):
        assert _render([verbatim_node("not", ["a & b"])], escape=True) == "<not>a & b</not>\n"

    def test_empty_verbatim_void_element(self):
        assert _render([verbatim_node("hr", [], [("id", "x")])]) == '<hr id="x" />\n'

    def test_comment(self):
        assert _render([AstNode("comment", [], [" a", "b "], {"comment": True})]) == "<!-- a\nb -->\n"

    def test_raw_inline_html(self):
        raw = AstNode("raw", [], ["<b>"], {"verbatim": True, "raw": True})
        assert _render([element("p", ["a ", raw, "x"])]) == "<p>a <b>x</p>\n"

    def test_bare_top_level_text(self):
        assert _render([verbatim_node("div", ["x"]), "more & text"]) == "<div>x</div>\nmore &amp; text"

    def test_attribute_values_escaped(self):
        ast = [element("p", [element("a", ["x"], [("href", "u?a=1&b=2")])])]
        assert _render(ast) == '<p><a href="u?a=1&amp;b=2">x</a></p>\n'

    def test_invalid_item_raises(self):
        with pytest.raises(RenderingError, match="Cannot render"):
            _render([element("p", [42])])

    def test_verbatim_with_node_child_raises(self):
        with pytest.raises(RenderingError):
            _render([verbatim_node("div", [element("p")])])

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            HtmlRenderer(ParserOptions())

    def test_render_to_stream_and_path(self, tmp_path):
        ast = [element("p", ["hi"])]
        buffer = io.StringIO()
        HtmlRenderer().render(ast, buffer)
        assert buffer.getvalue() == "<p>hi</p>\n"

        target = tmp_path / "out.html"
        HtmlRenderer().render(ast, target)
        assert target.read_text(encoding="utf-8") == "<p>hi</p>\n"

    def test_renderer_reusable(self):
        renderer = HtmlRenderer()
        renderer.render_to_string([element("p", ["a"])])
        assert renderer.render_to_string([element("p", ["b"])]) == "<p>b</p>\n"
