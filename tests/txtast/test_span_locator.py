"""
Tests for literal text span recovery
"""
import logging
import pytest

from txtast.search_window import SearchWindow
from txtast.source_index import SourceIndex
from txtast.span_locator import SpanLocator


def locator_for(text, comment_marker="//"):
    """Create a locator over some text."""
    return SpanLocator(SourceIndex(text), comment_marker)


def as_tuple(loc):
    """Return a location as (start line, start column, end line, end column)."""
    return (loc.start.line, loc.start.column, loc.end.line, loc.end.column)


class TestSourceIndex:
    """Tests for the SourceIndex class."""

    def test_lines_and_offsets(self):
        """Test line splitting and offset computation."""
        index = SourceIndex("ab\ncd\n")
        assert index.lines == ["ab", "cd", ""]
        assert index.line_count == 3
        assert index.line(2) == "cd"
        assert index.offset_of(1, 0) == 0
        assert index.offset_of(2, 1) == 4
        assert index.offset_of(3, 0) == 6

    def test_carriage_returns_are_kept(self):
        """Test that offsets index the original text when lines end in CRLF."""
        text = "ab\r\ncd"
        index = SourceIndex(text)
        assert index.line(1) == "ab\r"
        offset = index.offset_of(2, 0)
        assert text[offset:offset + 2] == "cd"

    def test_empty_text(self):
        """Test the index of empty text."""
        index = SourceIndex("")
        assert index.line_count == 1
        assert index.offset_of(1, 0) == 0


class TestSearchWindow:
    """Tests for the SearchWindow class."""

    def test_narrowed_resets_column(self):
        """Test that narrowing starts the new window at column 0."""
        window = SearchWindow(1, 10, start_idx=5)
        narrowed = window.narrowed(3)
        assert (narrowed.min_line, narrowed.max_line, narrowed.start_idx) == (3, 10, 0)
        assert window.start_idx == 5

    def test_narrowed_with_max(self):
        """Test narrowing both ends of a window."""
        window = SearchWindow(1, 10).narrowed(4, 6)
        assert (window.min_line, window.max_line) == (4, 6)

    def test_update_flag(self):
        """Test switching sibling narrowing off and on."""
        window = SearchWindow(1, 10)
        assert window.update
        assert not window.with_update(False).update
        assert window.with_update(False).with_update(True).update

    def test_from_column(self):
        """Test setting the first-line column."""
        window = SearchWindow(2, 3).from_column(7)
        assert window.start_idx == 7
        assert (window.min_line, window.max_line) == (2, 3)


class TestSpanLocator:
    """Tests for the SpanLocator class."""

    def test_find_single_line(self):
        """Test finding text on one line."""
        loc = locator_for("ab\ncd\n").find(["cd"], SearchWindow(1, 3), "Paragraph")
        assert as_tuple(loc) == (2, 0, 2, 2)

    def test_find_multiple_lines(self):
        """Test finding text across consecutive lines."""
        loc = locator_for("x\n  one\ntwo\n").find(["one", "two"], SearchWindow(1, 4), "Paragraph")
        assert as_tuple(loc) == (2, 2, 3, 3)

    def test_empty_lines_are_not_found(self):
        """Test that there is nothing to find for no lines."""
        assert locator_for("text").find([], SearchWindow(1, 1), "Paragraph") is None

    def test_not_found(self):
        """Test text that does not occur in the window."""
        assert locator_for("a\nb\n").find(["b"], SearchWindow(1, 1), "Paragraph") is None

    def test_window_bounds_are_respected(self):
        """Test that text outside the window is not matched."""
        locator = locator_for("A\n\nA\n")
        assert as_tuple(locator.find(["A"], SearchWindow(2, 4), "Paragraph")) == (3, 0, 3, 1)

    def test_window_beyond_text(self):
        """Test that a window reaching past the end of the text is clamped."""
        loc = locator_for("a\nb").find(["b"], SearchWindow(0, 99), "Paragraph")
        assert as_tuple(loc) == (2, 0, 2, 1)

    def test_start_column(self):
        """Test that the first line is searched from the window's column."""
        loc = locator_for("x x").find(["x"], SearchWindow(1, 1, start_idx=1), "Paragraph")
        assert as_tuple(loc) == (1, 2, 1, 3)

    def test_start_column_only_applies_to_first_line(self):
        """Test that later segments are searched from column 0."""
        loc = locator_for("ab a\na").find(["a", "a"], SearchWindow(1, 2, start_idx=2), "TableCell")
        assert as_tuple(loc) == (1, 3, 2, 1)

    def test_start_column_only_applies_to_first_window_line(self):
        """Test that candidate lines after the first are searched from column 0."""
        loc = locator_for("A\n\nA\n").find(["A"], SearchWindow(1, 3, start_idx=1), "Paragraph")
        assert as_tuple(loc) == (3, 0, 3, 1)

    def test_comment_lines_are_skipped(self):
        """Test that comment lines between segments are skipped."""
        loc = locator_for("A\n// c\nB").find(["A", "B"], SearchWindow(1, 3), "Paragraph")
        assert as_tuple(loc) == (1, 0, 3, 1)

    def test_comment_lines_are_code_in_code_blocks(self):
        """Test that code blocks do not skip comment lines."""
        assert locator_for("A\n// c\nB").find(["A", "B"], SearchWindow(1, 3), "CodeBlock") is None

    def test_leading_comment_line_starts_at_column_zero(self):
        """Test a match that begins after a comment at the start of the window."""
        loc = locator_for("// c\nA").find(["A"], SearchWindow(1, 2), "Paragraph")
        assert as_tuple(loc) == (1, 0, 2, 1)

    def test_trailing_comment_does_not_overrun(self):
        """Test that a comment on the last line does not read past the text."""
        assert locator_for("A\n// c").find(["A", "B"], SearchWindow(1, 2), "Paragraph") is None

    def test_custom_comment_marker(self):
        """Test skipping comments with a configured marker."""
        loc = locator_for("A\n# c\nB", "#").find(["A", "B"], SearchWindow(1, 3), "Paragraph")
        assert as_tuple(loc) == (1, 0, 3, 1)

    def test_find_backward(self):
        """Test finding text on a line before the window."""
        loc = locator_for("[id='x']\n= Title").find_backward(["x"], SearchWindow(2, 2), "ID", 2)
        assert as_tuple(loc) == (1, 5, 1, 6)

    def test_find_backward_prefers_nearest_line(self):
        """Test that the nearest preceding line is tried first."""
        loc = locator_for(".T\n.T\nbody").find_backward([".T"], SearchWindow(3, 3), "BlockTitle", 3)
        assert as_tuple(loc) == (2, 0, 2, 2)

    def test_find_backward_lookback_limit(self, caplog):
        """Test that text further back than the lookback is not found."""
        caplog.set_level(logging.DEBUG, logger="SpanLocator")
        loc = locator_for("x\n\n\nTitle").find_backward(["x"], SearchWindow(4, 4), "ID", 2)
        assert loc is None
        assert "within 2 lines" in caplog.text

    @pytest.mark.parametrize("lookback", [0, 1])
    def test_find_backward_without_room(self, lookback):
        """Test looking back from the first line, or not at all."""
        locator = locator_for("x\ny")
        assert locator.find_backward(["x"], SearchWindow(1, 1), "ID", lookback) is None
