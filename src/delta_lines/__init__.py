"""delta_lines package initialization.

Line-relative positions, diff line selection with context, and fixed-width
formatting for side-by-side diff rendering.
"""

from __future__ import annotations

from delta_lines.utils.lines import (
    AbsoluteRange,
    Change,
    LineNumber,
    LinePosition,
    LineRange,
    MatchedLine,
    NewlinePositions,
    add_context,
    enforce_length,
    max_line,
    relevant_lines,
)

__all__ = [
    "AbsoluteRange",
    "Change",
    "LineNumber",
    "LinePosition",
    "LineRange",
    "MatchedLine",
    "NewlinePositions",
    "add_context",
    "enforce_length",
    "max_line",
    "relevant_lines",
]
