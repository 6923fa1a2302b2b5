"""Tests for the validation module.

These checks guard the position helpers against malformed caller input:
negative widths or radii, and ranges that do not fit their buffer.
"""

import pytest

from delta_lines.utils.lines import AbsoluteRange, Change, LineNumber
from delta_lines.utils.validation import (
    ValidationError,
    validate_change,
    validate_changes,
    validate_non_negative,
    validate_range,
)


class TestValidateNonNegative:
    """Tests for non-negative integer validation."""

    def test_valid_values(self):
        """Test that zero and positive ints pass through."""
        assert validate_non_negative(0) == 0
        assert validate_non_negative(12, "Width") == 12

    def test_negative_value_raises_error(self):
        """Test that negative values are rejected."""
        with pytest.raises(ValidationError, match="Width must be non-negative, got: -3"):
            validate_non_negative(-3, "Width")

    @pytest.mark.parametrize("value", ["3", 2.5, None, True])
    def test_non_int_raises_error(self, value):
        """Test that anything but a plain int is rejected."""
        with pytest.raises(ValidationError, match="must be an integer"):
            validate_non_negative(value)


class TestValidateRange:
    """Tests for absolute range validation."""

    def test_valid_ranges(self):
        """Test ranges inside the buffer, including empty and full ranges."""
        validate_range(AbsoluteRange(0, 3), "foo")
        validate_range(AbsoluteRange(3, 3), "foo")
        validate_range(AbsoluteRange(0, 0), "")

    def test_start_after_end(self):
        """Test that reversed ranges are rejected."""
        with pytest.raises(ValidationError, match="start 2 is after end 1"):
            validate_range(AbsoluteRange(2, 1), "foo")

    def test_end_past_buffer(self):
        """Test that ranges past the buffer end are rejected."""
        with pytest.raises(ValidationError, match="past the end of the buffer"):
            validate_range(AbsoluteRange(0, 4), "foo")

    def test_negative_start(self):
        """Test that negative offsets are rejected."""
        with pytest.raises(ValidationError, match="start must be non-negative"):
            validate_range(AbsoluteRange(-1, 2), "foo")


class TestValidateChange:
    """Tests for change validation."""

    def test_valid_change(self):
        """Test a well-formed change."""
        validate_change(Change(range=AbsoluteRange(1, 2), opposite_line=LineNumber(0)), "foo")

    def test_negative_opposite_line(self):
        """Test that negative opposite lines are rejected."""
        with pytest.raises(ValidationError, match="Opposite line must be non-negative"):
            validate_change(Change(range=AbsoluteRange(1, 2), opposite_line=LineNumber(-1)), "foo")

    def test_validate_changes_reports_first_bad_change(self):
        """Test that a list is rejected if any change is malformed."""
        changes = [
            Change(range=AbsoluteRange(0, 1), opposite_line=LineNumber(0)),
            Change(range=AbsoluteRange(0, 10), opposite_line=LineNumber(0)),
        ]
        with pytest.raises(ValidationError, match="Change range end 10"):
            validate_changes(changes, "foo")
