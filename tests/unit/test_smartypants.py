#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_smartypants.py
"""Tests for typographic replacements."""

import pytest

from mdtree.ast import AstNode, element, verbatim_node
from mdtree.parsers.smartypants import SmartypantsTransformer, smarten


@pytest.mark.unit
class TestSmarten:
    """Tests for smarten."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("a -- b", "a – b"),
            ("a --- b", "a — b"),
            ("wait...", "wait…"),
            ('"quoted"', "“quoted”"),
            ("'single'", "‘single’"),
            ("don't", "don’t"),
            ('("nested")', "(“nested”)"),
            ("plain", "plain"),
        ],
    )
    def test_replacements(self, text, expected):
        assert smarten(text) == expected

    def test_previous_character_decides_direction(self):
        assert smarten('"', previous="x") == "”"
        assert smarten('"', previous=" ") == "“"


@pytest.mark.unit
class TestSmartypantsTransformer:
    """Tests for SmartypantsTransformer."""

    def test_text_inside_nodes_rewritten(self):
        result = SmartypantsTransformer().transform([element("em", ['"a"'])])
        assert result == [element("em", ["“a”"])]

    def test_code_and_pre_protected(self):
        items = [element("code", ['"x" -- y']), element("pre", [element("code", ["..."])])]
        assert SmartypantsTransformer().transform(items) == items

    def test_verbatim_protected(self):
        raw = AstNode("raw", [], ['<a title="x">'], {"verbatim": True, "raw": True})
        assert SmartypantsTransformer().transform([raw]) == [raw]

    def test_attributes_untouched(self):
        link = element("a", ["it's"], [("title", "it's")])
        assert SmartypantsTransformer().transform([link]) == [element("a", ["it’s"], [("title", "it's")])]

    def test_previous_tracked_across_leaves(self):
        result = SmartypantsTransformer().transform([element("code", ["x"]), "'s"])
        assert result[1] == "’s"

    @pytest.mark.parametrize(
        "link",
        [
            element("a", ["http://a.com/x--y...z"], [("href", "http://a.com/x--y...z")]),
            element("a", ["a--b@x.org"], [("href", "mailto:a--b@x.org")]),
        ],
    )
    def test_link_showing_its_url_protected(self, link):
        assert SmartypantsTransformer().transform([link]) == [link]

    def test_link_text_differing_from_href_rewritten(self):
        link = element("a", ["a--b"], [("href", "http://a.com/a--b")])
        assert SmartypantsTransformer().transform([link]) == [element("a", ["a–b"], [("href", "http://a.com/a--b")])]
