#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ial.py
"""Tests for inline attribute list parsing and attachment."""

import pytest

from mdtree.diagnostics import DiagnosticsCollector, Message
from mdtree.parsers.blocks import Paragraph, PendingIal, ThematicBreak
from mdtree.parsers.ial import (
    IAL_LINE_PATTERN,
    attach_ials,
    illegal_attributes_message,
    parse_ial,
    read_ial,
)


@pytest.mark.unit
class TestParseIal:
    """Tests for parse_ial."""

    def test_class_and_id(self):
        assert parse_ial(".red #main") == ([("class", "red"), ("id", "main")], [])

    def test_classes_collect_into_one_attribute(self):
        assert parse_ial(".a .b .a") == ([("class", "a b")], [])

    def test_name_value_forms(self):
        attributes, illegal = parse_ial("width=20 title=\"x y\" lang='en'")
        assert attributes == [("width", "20"), ("title", "x y"), ("lang", "en")]
        assert illegal == []

    def test_illegal_tokens(self):
        attributes, illegal = parse_ial(".ok hello #")
        assert attributes == [("class", "ok")]
        assert illegal == ["hello", "#"]

    def test_empty(self):
        assert parse_ial("") == ([], [])

    def test_illegal_message_format(self):
        assert illegal_attributes_message(["hello"]) == 'Illegal attributes ["hello"] ignored in IAL'
        assert illegal_attributes_message(["a", "b"]) == 'Illegal attributes ["a", "b"] ignored in IAL'

    def test_read_ial_reports_at_line(self):
        collector = DiagnosticsCollector()
        attributes = read_ial("hello", 4, collector)

        assert attributes == []
        assert collector.messages == [Message("warning", 4, 'Illegal attributes ["hello"] ignored in IAL')]


@pytest.mark.unit
class TestIalLinePattern:
    """Tests for recognizing IAL lines."""

    @pytest.mark.parametrize("text,body", [("{: .red}", ".red"), ("{:hello}", "hello"), ("   {: #x }  ", "#x")])
    def test_matches(self, text, body):
        match = IAL_LINE_PATTERN.match(text)
        assert match is not None
        assert match.group(1) == body

    @pytest.mark.parametrize("text", ["{ .red}", "    {: .red}", "text {: .red}", "{: .red} text"])
    def test_does_not_match(self, text):
        assert IAL_LINE_PATTERN.match(text) is None


@pytest.mark.unit
class TestAttachIals:
    """Tests for attach_ials."""

    def test_attaches_to_previous_block(self):
        collector = DiagnosticsCollector()
        paragraph = Paragraph(lines=["text"], line=1)

        result = attach_ials([paragraph, PendingIal(".red", adjacent=True, line=2)], collector)

        assert result == [paragraph]
        assert paragraph.attributes == [("class", "red")]
        assert len(collector) == 0

    def test_merges_into_existing_attributes(self):
        rule = ThematicBreak("-", line=1, attributes=[("class", "a"), ("id", "old")])

        attach_ials([rule, PendingIal(".b #new", line=2)], DiagnosticsCollector())

        assert rule.attributes == [("class", "a b"), ("id", "new")]

    def test_not_adjacent_is_dropped_with_warning(self):
        collector = DiagnosticsCollector()
        paragraph = Paragraph(lines=["text"], line=1)

        attach_ials([paragraph, PendingIal(".red", adjacent=False, line=3)], collector)

        assert paragraph.attributes == []
        assert collector.messages == [
            Message("warning", 3, "IAL {: .red} does not follow any block and was ignored")
        ]

    def test_first_block_has_nothing_to_attach_to(self):
        collector = DiagnosticsCollector()

        assert attach_ials([PendingIal("#x", line=1)], collector) == []
        assert collector.status == "error"
