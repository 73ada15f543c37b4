#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_lines.py
"""Tests for input normalization into numbered lines."""

import pytest

from mdtree.parsers.lines import Line, to_lines


@pytest.mark.unit
class TestToLines:
    """Tests for to_lines."""

    def test_single_string_is_split_and_numbered(self):
        lines = to_lines("a\nb\nc")
        assert lines == [Line("a", 1), Line("b", 2), Line("c", 3)]

    def test_all_line_terminators(self):
        lines = to_lines("a\r\nb\rc\nd")
        assert [line.text for line in lines] == ["a", "b", "c", "d"]

    def test_list_input_keeps_order(self):
        lines = to_lines(["first", "second"])
        assert [(line.text, line.number) for line in lines] == [("first", 1), ("second", 2)]

    def test_list_entries_with_newlines_are_split(self):
        lines = to_lines(["one\ntwo", "three"])
        assert [(line.text, line.number) for line in lines] == [("one", 1), ("two", 2), ("three", 3)]

    def test_empty_string_gives_one_blank_line(self):
        lines = to_lines("")
        assert len(lines) == 1
        assert lines[0].blank

    def test_empty_list_gives_no_lines(self):
        assert to_lines([]) == []

    def test_non_string_entry_raises(self):
        with pytest.raises(TypeError, match="must be strings"):
            to_lines(["ok", 3])


@pytest.mark.unit
class TestLine:
    """Tests for the Line record."""

    def test_blank(self):
        assert Line("   \t", 1).blank
        assert not Line("  x", 1).blank

    def test_indent_counts_tabs_to_next_stop(self):
        assert Line("    code", 1).indent == 4
        assert Line("\tcode", 1).indent == 4
        assert Line("  \tcode", 1).indent == 4
        assert Line("text", 1).indent == 0

    def test_dedent_removes_at_most_columns(self):
        assert Line("      x", 7).dedent(4) == Line("  x", 7)
        assert Line("  x", 7).dedent(4) == Line("x", 7)

    def test_dedent_expands_leading_tab(self):
        assert Line("\tx", 1).dedent(2).text == "  x"

    def test_with_text_keeps_number(self):
        assert Line("a", 9).with_text("b") == Line("b", 9)

    def test_lines_are_immutable(self):
        line = Line("a", 1)
        with pytest.raises(AttributeError):
            line.text = "b"
