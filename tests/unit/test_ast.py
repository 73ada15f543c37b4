#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast.py
"""Tests for AST nodes, visitors and utility functions."""

import pytest

from mdtree.ast import AstNode, NodeTransformer, NodeVisitor, element, extract_text, merge_attributes, verbatim_node


@pytest.mark.unit
class TestAstNode:
    """Tests for AstNode."""

    def test_defaults(self):
        node = AstNode("p")
        assert node.attributes == []
        assert node.children == []
        assert node.meta == {}

    def test_defaults_are_not_shared(self):
        first, second = AstNode("p"), AstNode("p")
        first.children.append("x")
        assert second.children == []

    def test_flags(self):
        assert verbatim_node("div", ["x"]).verbatim
        assert not element("p").verbatim
        assert AstNode("comment", [], [" c "], {"comment": True}).is_comment

    def test_get_and_set_attribute(self):
        node = element("a", ["x"], [("href", "u"), ("title", "t")])

        node.set_attribute("href", "v")
        node.set_attribute("id", "i")

        assert node.attributes == [("href", "v"), ("title", "t"), ("id", "i")]
        assert node.get_attribute("title") == "t"
        assert node.get_attribute("missing") is None

    def test_to_tuple_is_recursive(self):
        node = element("p", ["a ", element("em", ["b"])])
        assert node.to_tuple() == ("p", [], ["a ", ("em", [], ["b"], {})], {})

    def test_equality_is_structural(self):
        assert element("p", ["x"]) == AstNode("p", [], ["x"], {})


@pytest.mark.unit
class TestVisitors:
    """Tests for NodeVisitor dispatch and NodeTransformer."""

    def test_visitor_dispatch(self):
        class Collector(NodeVisitor):
            def __init__(self):
                self.seen = []

            def visit_text(self, text):
                self.seen.append(("text", text))

            def visit_node(self, node):
                self.seen.append(("node", node.tag))
                for child in node.children:
                    self.visit(child)

        collector = Collector()
        collector.visit(element("p", ["a", element("em", ["b"])]))

        assert collector.seen == [("node", "p"), ("text", "a"), ("node", "em"), ("text", "b")]

    def test_visitor_is_abstract(self):
        with pytest.raises(TypeError):
            NodeVisitor()

    def test_transformer_copies(self):
        tree = [element("p", ["a", element("em", ["b"])])]
        copied = NodeTransformer().transform(tree)

        assert copied == tree
        assert copied[0] is not tree[0]

    def test_transformer_respects_should_descend(self):
        class Upper(NodeTransformer):
            def visit_text(self, text):
                return text.upper()

            def should_descend(self, node):
                return node.tag != "code"

        result = Upper().transform([element("p", ["a", element("code", ["b"])])])

        assert result == [element("p", ["A", element("code", ["b"])])]


@pytest.mark.unit
class TestExtractText:
    """Tests for extract_text."""

    def test_nested(self):
        assert extract_text(["Hello ", element("em", ["big ", element("strong", ["world"])])]) == "Hello big world"

    def test_single_leaf(self):
        assert extract_text("plain") == "plain"

    def test_joiner(self):
        assert extract_text([element("td", ["a"]), element("td", ["b"])], joiner=" | ") == "a | b"


@pytest.mark.unit
class TestMergeAttributes:
    """Tests for the attribute merge policy."""

    def test_classes_concatenate_existing_first(self):
        assert merge_attributes([("class", "elixir")], [("class", "red")]) == [("class", "elixir red")]

    def test_duplicate_classes_dropped(self):
        assert merge_attributes([("class", "a b")], [("class", "b c")]) == [("class", "a b c")]

    def test_other_names_overridden_in_place(self):
        existing = [("href", "x"), ("title", "old")]
        assert merge_attributes(existing, [("title", "new")]) == [("href", "x"), ("title", "new")]

    def test_new_names_appended(self):
        assert merge_attributes([("src", "a.png")], [("id", "pic"), ("width", "20")]) == [
            ("src", "a.png"),
            ("id", "pic"),
            ("width", "20"),
        ]

    def test_repeated_names_within_one_list_collapse(self):
        assert merge_attributes([], [("id", "a"), ("id", "b")]) == [("id", "b")]

    def test_inputs_not_mutated(self):
        existing = [("class", "a")]
        merge_attributes(existing, [("class", "b")])
        assert existing == [("class", "a")]
