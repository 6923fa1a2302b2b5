"""Tests for text highlighting utilities."""

from rich.text import Span, Text

from delta_lines.utils.lines import LineNumber, LineRange
from delta_lines.utils.text import highlight_ranges


def line_range(start, end):
    return LineRange(line=LineNumber(0), start=start, end=end)


class TestHighlightRanges:
    """Test the highlight_ranges function."""

    def test_no_ranges(self):
        """Test that a line without ranges is returned unstyled."""
        text = highlight_ranges("hello world", [])

        assert isinstance(text, Text)
        assert text.plain == "hello world"
        assert text.spans == []

    def test_single_range(self):
        """Test styling one range."""
        text = highlight_ranges("hello world", [line_range(0, 5)], "bold red")
        assert text.spans == [Span(0, 5, "bold red")]

    def test_multiple_ranges(self):
        """Test that each range gets its own span."""
        text = highlight_ranges("hello world", [line_range(0, 1), line_range(6, 11)], "green")
        assert text.spans == [Span(0, 1, "green"), Span(6, 11, "green")]

    def test_shift(self):
        """Test that shift moves ranges past a gutter."""
        text = highlight_ranges("   1 foo", [line_range(0, 3)], "red", shift=5)
        assert text.spans == [Span(5, 8, "red")]

    def test_ranges_clipped_to_line(self):
        """Test that ranges running past the end of the line are clipped."""
        text = highlight_ranges("abc", [line_range(1, 10)], "red")
        assert text.spans == [Span(1, 3, "red")]

    def test_empty_and_out_of_bounds_ranges_skipped(self):
        """Test that empty spans produce no styling."""
        text = highlight_ranges("abc", [line_range(2, 2), line_range(5, 8)], "red")
        assert text.spans == []
