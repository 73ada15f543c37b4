#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_serialization.py
"""Tests for the AST wire form and JSON serialization."""

import json

import pytest

from mdtree.ast import AstNode, ast_to_json, ast_to_wire, element, json_to_ast, verbatim_node, wire_to_ast


@pytest.fixture
def sample_ast():
    return [
        element("h1", ["Title"], [("id", "top")]),
        element("p", ["Some ", element("em", ["text"])]),
        verbatim_node("div", ["<span>", "raw"]),
        "more text",
    ]


@pytest.mark.unit
class TestWireForm:
    """Tests for ast_to_wire and wire_to_ast."""

    def test_four_field_records(self, sample_ast):
        wire = ast_to_wire(sample_ast)

        assert wire[0] == ["h1", [["id", "top"]], ["Title"], {}]
        assert wire[1] == ["p", [], ["Some ", ["em", [], ["text"], {}]], {}]
        assert wire[2] == ["div", [], ["<span>", "raw"], {"verbatim": True}]
        assert wire[3] == "more text"

    def test_rebuild(self, sample_ast):
        assert wire_to_ast(ast_to_wire(sample_ast)) == sample_ast

    def test_unknown_item_rejected(self):
        with pytest.raises(ValueError, match="Unknown AST item"):
            ast_to_wire([42])

    @pytest.mark.parametrize(
        "data",
        [
            [["p", [], []]],
            [[1, [], [], {}]],
            [["p", [], [], "meta"]],
            [["p", [["only-name"]], [], {}]],
        ],
    )
    def test_invalid_wire_nodes(self, data):
        with pytest.raises(ValueError):
            wire_to_ast(data)

    def test_wire_must_be_list(self):
        with pytest.raises(ValueError):
            wire_to_ast({"tag": "p"})


@pytest.mark.unit
class TestJson:
    """Tests for ast_to_json and json_to_ast."""

    def test_schema_wrapper(self, sample_ast):
        data = json.loads(ast_to_json(sample_ast))
        assert data["schema_version"] == 1
        assert data["ast"][3] == "more text"

    def test_non_ascii_kept(self):
        assert "“quoted”" in ast_to_json([AstNode("p", [], ["“quoted”"])])

    def test_round_trip(self, sample_ast):
        assert json_to_ast(ast_to_json(sample_ast, indent=2)) == sample_ast

    def test_bare_list_accepted(self):
        assert json_to_ast('[["p", [], ["x"], {}]]') == [element("p", ["x"])]

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="Invalid JSON"):
            json_to_ast("{not json")

    def test_unsupported_version(self):
        with pytest.raises(ValueError, match="Unsupported schema version"):
            json_to_ast('{"schema_version": 99, "ast": []}')
