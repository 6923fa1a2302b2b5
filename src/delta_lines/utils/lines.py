"""Line-relative positions and line selection for diff rendering.

A comparison engine reports changes as absolute offsets into a buffer. The
helpers here convert those offsets to (line, column) positions, split ranges
that cross newlines into one range per line, pick the lines a diff view has
to show, widen that selection with context lines, and pad or truncate text to
fixed-width display columns.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from .error_handling import log_failed_operation
from .logger import log
from .validation import ValidationError, validate_changes, validate_non_negative

# Compiled once at import; a failure here is a programming error and is fatal.
_NEWLINE_RE = re.compile("\n")


@dataclass(frozen=True)
class AbsoluteRange:
    """A range in a string, relative to the string start."""

    start: int  # inclusive
    end: int  # exclusive


@dataclass(frozen=True, order=True)
class LineNumber:
    """A zero-indexed line number.

    Kept distinct from plain ints so it can't be mixed up with offsets or
    columns; comparing a LineNumber with an int raises TypeError.
    """

    number: int

    def __str__(self) -> str:
        return str(self.number)


@dataclass(frozen=True)
class LinePosition:
    """A position in a single line of a string. Both fields are zero-indexed."""

    line: LineNumber
    column: int


@dataclass(frozen=True)
class LineRange:
    """A range within a single line of a string."""

    line: LineNumber
    start: int
    end: int


@dataclass(frozen=True)
class Change:
    """A changed region in one text plus its counterpart line in the other."""

    range: AbsoluteRange
    opposite_line: LineNumber


@dataclass(frozen=True)
class MatchedLine:
    """A line to display together with its line in the opposite text."""

    line: LineNumber
    opposite_line: LineNumber


class NewlinePositions:
    """Converts absolute string offsets to line-relative positions.

    Holds the start offset of every line in the source text. The text itself
    is not retained, and the table never changes after construction.
    """

    __slots__ = ("_positions",)

    def __init__(self, text: str):
        newlines = [match.end() for match in _NEWLINE_RE.finditer(text)]
        self._positions: tuple[int, ...] = (0, *newlines)

    @property
    def positions(self) -> tuple[int, ...]:
        return self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"NewlinePositions(lines={len(self._positions)})"

    def from_offset(self, offset: int) -> LinePosition:
        """Return the line and column that ``offset`` falls on."""
        index = bisect_right(self._positions, offset) - 1
        if index < 0:
            return LinePosition(line=LineNumber(0), column=offset)

        return LinePosition(line=LineNumber(index), column=offset - self._positions[index])

    def _line_length(self, line_num: int) -> int:
        # Excludes the terminating newline.
        return self._positions[line_num + 1] - 1 - self._positions[line_num]

    def split_line_boundaries(self, start: LinePosition, end: LinePosition) -> list[LineRange]:
        """Split the range between two positions into one range per line.

        Every line before ``end.line`` must be newline-terminated; positions
        past the indexed text raise ValidationError.
        """
        if start.line == end.line:
            return [LineRange(line=start.line, start=start.column, end=end.column)]

        try:
            ranges = [
                LineRange(
                    line=start.line,
                    start=start.column,
                    end=self._line_length(start.line.number),
                )
            ]

            for line_num in range(start.line.number + 1, end.line.number):
                ranges.append(LineRange(line=LineNumber(line_num), start=0, end=self._line_length(line_num)))
        except IndexError as e:
            log_failed_operation(f"split lines {start.line}..{end.line}", e, prefix="LINES")
            raise ValidationError(
                f"Range ends on line {end.line} but the text has {len(self._positions)} lines"
            ) from e

        ranges.append(LineRange(line=end.line, start=0, end=end.column))
        return ranges

    def from_range(self, range_: AbsoluteRange) -> list[LineRange]:
        """Convert one absolute range to line-relative ranges."""
        return self.split_line_boundaries(self.from_offset(range_.start), self.from_offset(range_.end))

    def from_ranges(self, ranges: Iterable[AbsoluteRange]) -> list[LineRange]:
        """Convert absolute ranges to line-relative ranges.

        A range that crosses a newline is split into one range per line.
        """
        rel_positions: list[LineRange] = []
        for range_ in ranges:
            rel_positions.extend(self.from_range(range_))
        return rel_positions


def relevant_lines(changes: Iterable[Change], text: str) -> list[MatchedLine]:
    """Return the unique lines that ``changes`` land on.

    Each line is paired with the opposite line of the first change that
    touched it. Lines come out in the order they are first seen, which is
    only sorted if the changes are. A change whose range does not fit
    ``text`` raises ValidationError before any line is mapped.
    """
    changes = list(changes)
    validate_changes(changes, text)

    newlines = NewlinePositions(text)

    line_nums_seen: set[LineNumber] = set()
    result: list[MatchedLine] = []
    for change in changes:
        for line_range in newlines.from_range(change.range):
            if line_range.line in line_nums_seen:
                continue

            line_nums_seen.add(line_range.line)
            result.append(MatchedLine(line=line_range.line, opposite_line=change.opposite_line))

    log.debug(f"[LINES] {len(result)} relevant lines across {len(newlines)} lines")
    return result


def add_context(lines: Sequence[MatchedLine], context: int, max_line: LineNumber) -> list[MatchedLine]:
    """Expand each matched line into a window of ``context`` lines either side.

    ``lines`` must be sorted by line number: overlapping windows are merged by
    skipping anything at or before the last emitted line. Context lines assume
    the two texts line up, so context line -1 gets opposite line -1. Opposite
    lines are clamped at zero only.
    """
    validate_non_negative(context, "Context")

    result: list[MatchedLine] = []
    for matched_line in lines:
        opposite_offset = matched_line.opposite_line.number - matched_line.line.number

        line_number = matched_line.line.number
        earliest = max(0, line_number - context)
        latest = min(line_number + context, max_line.number)

        for i in range(earliest, latest + 1):
            if result and i <= result[-1].line.number:
                continue
            result.append(
                MatchedLine(
                    line=LineNumber(i),
                    opposite_line=LineNumber(max(i + opposite_offset, 0)),
                )
            )

    return result


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of ``text`` without their terminators.

    Splits on "\\n" only, drops one trailing "\\r" per line, and yields no
    empty line after a final newline.
    """
    if not text:
        return

    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()

    for part in parts:
        yield part[:-1] if part.endswith("\r") else part


def max_line(text: str) -> LineNumber:
    """Return the last valid line number of ``text``.

    Empty text has a single empty line 0.
    """
    count = sum(1 for _ in iter_lines(text))
    return LineNumber(max(count - 1, 0))


def enforce_length(text: str, line_length: int) -> str:
    """Ensure every line in ``text`` has exactly ``line_length`` characters.

    Short lines are padded with spaces, long lines truncated, and every
    output line is newline-terminated. Widths count ``str`` units, not
    display cells.
    """
    validate_non_negative(line_length, "Line length")

    result: list[str] = []
    for line in iter_lines(text):
        if len(line) > line_length:
            result.append(line[:line_length])
        else:
            result.append(line.ljust(line_length))
        result.append("\n")

    return "".join(result)
