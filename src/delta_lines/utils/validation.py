"""Input validation utilities for delta_lines.

The position and context helpers never fail on well-formed input. These
checks reject malformed caller arguments up front (negative widths, ranges
that run past the buffer) with a ``ValidationError`` instead of letting them
surface later as an ``IndexError`` deep inside the range splitter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from .error_handling import log_validation_error

if TYPE_CHECKING:
    from .lines import AbsoluteRange, Change


class ValidationError(Exception):
    """Raised when input validation fails."""

    pass


def validate_non_negative(value: Any, name: str = "Value") -> int:
    """Validate a non-negative integer argument.

    Args:
        value: The value to validate
        name: Human-readable name for error messages

    Returns:
        The validated integer

    Raises:
        ValidationError: If the value is not an int or is negative
    """
    if not isinstance(value, int) or isinstance(value, bool):
        error = ValidationError(f"{name} must be an integer, got {type(value).__name__}")
        log_validation_error(name, value, error)
        raise error

    if value < 0:
        error = ValidationError(f"{name} must be non-negative, got: {value}")
        log_validation_error(name, value, error)
        raise error

    return value


def validate_range(range_: AbsoluteRange, text: str, name: str = "Range") -> None:
    """Validate an absolute range against the buffer it points into.

    Args:
        range_: The range to check
        text: The buffer the range refers to
        name: Human-readable name for error messages

    Raises:
        ValidationError: If ``0 <= start <= end <= len(text)`` does not hold
    """
    start, end = range_.start, range_.end

    if start < 0:
        error = ValidationError(f"{name} start must be non-negative, got: {start}")
    elif start > end:
        error = ValidationError(f"{name} start {start} is after end {end}")
    elif end > len(text):
        error = ValidationError(f"{name} end {end} is past the end of the buffer ({len(text)})")
    else:
        return

    log_validation_error(name, range_, error)
    raise error


def validate_change(change: Change, text: str) -> None:
    """Validate a single change produced by a comparison engine.

    Raises:
        ValidationError: If the range is malformed or the opposite line is negative
    """
    validate_range(change.range, text, "Change range")
    validate_non_negative(change.opposite_line.number, "Opposite line")


def validate_changes(changes: Iterable[Change], text: str) -> None:
    """Validate every change in a list against its buffer."""
    for change in changes:
        validate_change(change, text)
