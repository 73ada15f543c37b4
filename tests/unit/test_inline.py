#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_inline.py
"""Tests for the inline span parser."""

import time

import pytest

from mdtree.ast import AstNode, element
from mdtree.options import ParserOptions
from mdtree.parsers.blocks import FootnoteDefinition, LinkDefinition
from mdtree.parsers.context import ParseContext
from mdtree.parsers.inline import InlineParser, merge_text


def _context(**options):
    options.setdefault("smartypants", False)
    return ParseContext(ParserOptions(**options))


def _inline(text, context=None, **options):
    context = context or _context(**options)
    return InlineParser(context).parse(text, 1)


def _raw(html):
    return AstNode("raw", [], [html], {"verbatim": True, "raw": True})


def _code(text):
    return element("code", [text], [("class", "inline")])


@pytest.mark.unit
class TestMergeText:
    """Tests for merge_text."""

    def test_adjacent_text_joined_and_empty_dropped(self):
        node = element("em", ["x"])
        assert merge_text(["a", "", "b", node, "c", "d"]) == ["ab", node, "cd"]


@pytest.mark.unit
class TestEmphasis:
    """Tests for emphasis, strong emphasis and strikethrough."""

    def test_mixed_spans(self):
        assert _inline("My `code` is **best**") == ["My ", _code("code"), " is ", element("strong", ["best"])]

    def test_star_and_underscore_emphasis(self):
        assert _inline("*em* and _em_") == [element("em", ["em"]), " and ", element("em", ["em"])]

    def test_intraword_underscore_is_literal(self):
        assert _inline("snake_case_name") == ["snake_case_name"]

    def test_triple_delimiters(self):
        assert _inline("***both***") == [element("strong", [element("em", ["both"])])]

    def test_nested_emphasis_in_strong(self):
        assert _inline("**a *b* c**") == [element("strong", ["a ", element("em", ["b"]), " c"])]

    def test_unclosed_delimiters_are_literal(self):
        assert _inline("**unclosed") == ["**unclosed"]

    def test_delimiter_followed_by_space_is_literal(self):
        assert _inline("a * b * c") == ["a * b * c"]

    def test_strikethrough(self):
        assert _inline("~~hello~~") == [element("del", ["hello"])]

    def test_strikethrough_requires_gfm(self):
        assert _inline("~~hello~~", gfm=False) == ["~~hello~~"]

    def test_emphasis_closer_skips_code_span(self):
        assert _inline("*a `*` b*") == [element("em", ["a ", _code("*"), " b"])]


@pytest.mark.unit
class TestUnmatchedDelimiters:
    """Long paragraphs of unmatched openers stay literal and parse quickly."""

    @pytest.mark.parametrize("opener", [" *a", " **a", " _a", " ~~a", " [a", " ![a"])
    def test_thousands_of_unmatched_openers(self, opener):
        text = "a" + opener * 6000
        context = _context()
        started = time.perf_counter()
        result = _inline(text, context=context)
        elapsed = time.perf_counter() - started

        assert result == [text]
        assert context.diagnostics.messages == []
        assert elapsed < 2.0

    def test_matched_span_after_unmatched_openers(self):
        text = "a" + " *a" * 3000 + " **b**"
        assert _inline(text) == ["a" + " *a" * 3000 + " ", element("strong", ["b"])]


@pytest.mark.unit
class TestEscapesAndBreaks:
    """Tests for backslash escapes and line breaks."""

    def test_escaped_punctuation(self):
        assert _inline(r"\*not\* \[x\]") == ["*not* [x]"]

    def test_backslash_before_letter_kept(self):
        assert _inline(r"a\b") == [r"a\b"]

    def test_hard_break_from_trailing_spaces(self):
        assert _inline("a  \nb") == ["a", AstNode("br"), "\nb"]

    def test_hard_break_from_backslash(self):
        assert _inline("a\\\nb") == ["a", AstNode("br"), "\nb"]

    def test_soft_break_by_default(self):
        assert _inline("a\nb") == ["a\nb"]

    def test_significant_breaks(self):
        assert _inline("a\nb", breaks=True) == ["a", AstNode("br"), "\nb"]

    def test_breaks_ignored_without_gfm(self):
        assert _inline("a\nb", breaks=True, gfm=False) == ["a\nb"]


@pytest.mark.unit
class TestCodeSpans:
    """Tests for code spans."""

    def test_longer_backtick_runs(self):
        assert _inline("``a ` b``") == [_code("a ` b")]

    def test_single_surrounding_space_stripped(self):
        assert _inline("`` `x` ``") == [_code("`x`")]

    def test_code_content_not_parsed(self):
        assert _inline("`*a* [b](c)`") == [_code("*a* [b](c)")]

    def test_unclosed_backquote_warns_and_stays_literal(self):
        context = _context()
        assert _inline("a\n`oops", context=context) == ["a\n`oops"]
        assert [(m.severity, m.line, m.description) for m in context.diagnostics.messages] == [
            ("warning", 2, "Closing unclosed backquotes ` at end of input")
        ]


@pytest.mark.unit
class TestLinks:
    """Tests for links, images and their IALs."""

    def test_inline_link_with_title(self):
        assert _inline('[link](http://x.com "T")') == [element("a", ["link"], [("href", "http://x.com"), ("title", "T")])]

    def test_angle_bracket_destination(self):
        assert _inline("[a](<my url>)") == [element("a", ["a"], [("href", "my url")])]

    def test_link_text_is_parsed(self):
        assert _inline("[*hi*](u)") == [element("a", [element("em", ["hi"])], [("href", "u")])]

    def test_no_nested_links(self):
        assert _inline("[a [b](c)](d)") == [element("a", ["a [b](c)"], [("href", "d")])]

    def test_link_ial(self):
        assert _inline("[link](url){: .classy}") == [element("a", ["link"], [("href", "url"), ("class", "classy")])]

    def test_link_ial_after_space(self):
        assert _inline("[link](url) {: #l1}") == [element("a", ["link"], [("href", "url"), ("id", "l1")])]

    def test_link_ial_overrides_generated_title(self):
        assert _inline('[x](u "old"){: title=new}') == [element("a", ["x"], [("href", "u"), ("title", "new")])]

    def test_escaped_ial_is_literal(self):
        assert _inline(r"[link](url)\{: .classy}") == [element("a", ["link"], [("href", "url")]), "{: .classy}"]

    def test_text_ial_is_literal(self):
        assert _inline("hello {:world}") == ["hello {:world}"]

    def test_link_ial_illegal_token_warns(self):
        context = _context()
        assert _inline("[x](u){:bad}", context=context) == [element("a", ["x"], [("href", "u")])]
        assert context.diagnostics.messages[0].description == 'Illegal attributes ["bad"] ignored in IAL'

    def test_reference_links(self):
        context = _context()
        context.define_link(LinkDefinition("Ref", "http://r", "T"))

        expected = element("a", ["text"], [("href", "http://r"), ("title", "T")])
        assert _inline("[text][ref]", context=context) == [expected]
        assert _inline("[Ref][]", context=context) == [element("a", ["Ref"], expected.attributes)]
        assert _inline("[ref]", context=context) == [element("a", ["ref"], expected.attributes)]

    def test_undefined_reference_is_literal(self):
        assert _inline("[text][nope]") == ["[text][nope]"]

    def test_image(self):
        assert _inline('![alt *text*](a.png "T")') == [
            element("img", [], [("src", "a.png"), ("alt", "alt text"), ("title", "T")])
        ]

    def test_image_ial(self):
        assert _inline("![a](b.png){: width=20}") == [
            element("img", [], [("src", "b.png"), ("alt", "a"), ("width", "20")])
        ]

    def test_image_inside_link(self):
        assert _inline("[![i](i.png)](u)") == [
            element("a", [element("img", [], [("src", "i.png"), ("alt", "i")])], [("href", "u")])
        ]


@pytest.mark.unit
class TestAutolinksAndHtml:
    """Tests for autolinks, bare URLs and raw inline HTML."""

    def test_autolink(self):
        assert _inline("<http://x.com>") == [element("a", ["http://x.com"], [("href", "http://x.com")])]

    def test_email_autolink(self):
        assert _inline("<me@x.org>") == [element("a", ["me@x.org"], [("href", "mailto:me@x.org")])]

    def test_inline_html_is_raw(self):
        assert _inline("a <b>bold</b> c") == ["a ", _raw("<b>"), "bold", _raw("</b>"), " c"]

    def test_inline_comment_is_raw(self):
        assert _inline("x <!-- c --> y") == ["x ", _raw("<!-- c -->"), " y"]

    def test_lone_angle_bracket(self):
        assert _inline("a < b") == ["a < b"]

    def test_pure_link_trailing_punctuation(self):
        assert _inline("see http://x.com/a.") == ["see ", element("a", ["http://x.com/a"], [("href", "http://x.com/a")]), "."]

    def test_pure_link_balanced_parentheses(self):
        url = "http://x.com/a_(b)"
        assert _inline(f"({url})") == ["(", element("a", [url], [("href", url)]), ")"]

    def test_pure_links_disabled(self):
        assert _inline("see http://x.com", pure_links=False) == ["see http://x.com"]

    def test_url_inside_word_not_linked(self):
        assert _inline("xhttp://x.com") == ["xhttp://x.com"]


@pytest.mark.unit
class TestFootnoteReferences:
    """Tests for footnote references."""

    def test_defined_reference(self):
        context = _context(footnotes=True)
        context.define_footnote(FootnoteDefinition("note", [], line=3))

        assert _inline("text[^note]", context=context) == [
            "text",
            element(
                "a",
                ["1"],
                [("href", "#fn:1"), ("id", "fnref:1"), ("class", "footnote"), ("title", "see footnote")],
            ),
        ]

    def test_undefined_reference_is_error(self):
        context = _context(footnotes=True)

        assert _inline("text[^x]", context=context) == ["text[^x]"]
        assert [(m.severity, m.description) for m in context.diagnostics.messages] == [
            ("error", "Footnote x is undefined")
        ]

    def test_references_ignored_without_option(self):
        assert _inline("text[^x]") == ["text[^x]"]


@pytest.mark.unit
class TestSmartypantsIntegration:
    """Tests for smartypants applied by the inline parser."""

    def test_quotes_dashes_ellipsis(self):
        assert _inline("\"Hello\" -- it's...", smartypants=True) == ["“Hello” – it’s…"]

    def test_code_spans_untouched(self):
        assert _inline('`"x"` "y"', smartypants=True) == [_code('"x"'), " “y”"]

    def test_quote_after_node_closes(self):
        assert _inline('"**bold**"', smartypants=True) == ["“", element("strong", ["bold"]), "”"]

    @pytest.mark.parametrize("source", ["see http://a.com/x--y...z", "see <http://a.com/x--y...z>"])
    def test_autolink_text_untouched(self, source):
        url = "http://a.com/x--y...z"
        assert _inline(source, smartypants=True) == ["see ", element("a", [url], [("href", url)])]
