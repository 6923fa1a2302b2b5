"""Side-by-side rows for rendering a diff between two texts.

Runs the full pipeline: changes from the diff engine are mapped to lines,
sorted, widened with context, and laid out along the line alignment. The rows
can then be rendered as fixed-width plain text or as a rich Text with the
changed spans highlighted.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional, Sequence

from rich.text import Text

from .config import config
from .diff_engine import compare_texts
from .lines import (
    Change,
    LineNumber,
    LineRange,
    MatchedLine,
    NewlinePositions,
    add_context,
    enforce_length,
    iter_lines,
    max_line,
    relevant_lines,
)
from .logger import log
from .text import highlight_ranges

_SEPARATOR = " | "
_GUTTER_WIDTH = 5


@dataclass
class DiffRow:
    """One display row: a line from each side, either of which may be blank."""

    left_line_num: Optional[LineNumber]
    right_line_num: Optional[LineNumber]
    left_content: str
    right_content: str
    left_ranges: list[LineRange] = field(default_factory=list)
    right_ranges: list[LineRange] = field(default_factory=list)


def matched_lines_with_context(changes: Sequence[Change], text: str, context: int) -> list[MatchedLine]:
    """Lines touched by ``changes`` plus ``context`` lines around each, ascending."""
    matched = sorted(relevant_lines(changes, text), key=lambda m: m.line)
    return add_context(matched, context, max_line(text))


def build_rows(lhs: str, rhs: str, context: Optional[int] = None) -> list[DiffRow]:
    """Build side-by-side rows for the changed regions of two texts.

    Args:
        lhs: The old text
        rhs: The new text
        context: Lines of context around each change; config.context_lines if None

    Returns:
        Rows in the order of the line alignment. A row is kept when either of
        its lines is changed or within ``context`` of a change. Inserted and
        deleted lines get a blank cell on the other side, and the pairing
        after such a block follows the alignment rather than a fixed offset.
    """
    if context is None:
        context = config.context_lines

    comparison = compare_texts(lhs, rhs)
    lhs_changes, rhs_changes = comparison.lhs_changes, comparison.rhs_changes

    visible_left = {m.line for m in matched_lines_with_context(lhs_changes, lhs, context)}
    visible_right = {m.line for m in matched_lines_with_context(rhs_changes, rhs, context)}

    lhs_lines = list(iter_lines(lhs))
    rhs_lines = list(iter_lines(rhs))
    lhs_ranges = _ranges_by_line(lhs_changes, lhs)
    rhs_ranges = _ranges_by_line(rhs_changes, rhs)

    rows: list[DiffRow] = []
    for left_num, right_num in comparison.alignment:
        if left_num not in visible_left and right_num not in visible_right:
            continue

        rows.append(
            DiffRow(
                left_line_num=left_num,
                right_line_num=right_num,
                left_content=lhs_lines[left_num.number] if left_num is not None else "",
                right_content=rhs_lines[right_num.number] if right_num is not None else "",
                left_ranges=lhs_ranges.get(left_num, []) if left_num is not None else [],
                right_ranges=rhs_ranges.get(right_num, []) if right_num is not None else [],
            )
        )

    if len(rows) > config.max_render_lines:
        log.debug(f"[DISPLAY] Truncating {len(rows)} rows to {config.max_render_lines}")
        rows = rows[: config.max_render_lines]

    return rows


def _ranges_by_line(changes: Sequence[Change], text: str) -> dict[LineNumber, list[LineRange]]:
    """Group the line-relative ranges of ``changes`` by line."""
    newlines = NewlinePositions(text)
    grouped: dict[LineNumber, list[LineRange]] = defaultdict(list)
    for line_range in newlines.from_ranges(change.range for change in changes):
        grouped[line_range.line].append(line_range)
    return dict(grouped)


def _cell_text(line_num: Optional[LineNumber], content: str) -> str:
    if line_num is None:
        return ""
    return f"{line_num.number + 1:>{_GUTTER_WIDTH - 1}} {content}"


def _fit_cell(cell: str, width: int) -> str:
    """Pad or truncate a single cell to ``width``."""
    if not cell:
        return " " * width
    return enforce_length(cell, width).rstrip("\n")


def render_plain(rows: Sequence[DiffRow], column_width: Optional[int] = None) -> str:
    """Render rows as two fixed-width columns of plain text."""
    width = config.column_width if column_width is None else column_width

    out: list[str] = []
    for row in rows:
        left = _fit_cell(_cell_text(row.left_line_num, row.left_content), width)
        right = _fit_cell(_cell_text(row.right_line_num, row.right_content), width)
        out.append(f"{left}{_SEPARATOR}{right}\n")
    return "".join(out)


def render_rich(
    rows: Sequence[DiffRow],
    column_width: Optional[int] = None,
    lhs_style: str = "bold red",
    rhs_style: str = "bold green",
) -> Text:
    """Render rows like render_plain, with the changed spans stylized."""
    width = config.column_width if column_width is None else column_width

    result = Text()
    for row in rows:
        left = _fit_cell(_cell_text(row.left_line_num, row.left_content), width)
        right = _fit_cell(_cell_text(row.right_line_num, row.right_content), width)
        result.append(highlight_ranges(left, row.left_ranges, lhs_style, shift=_GUTTER_WIDTH))
        result.append(_SEPARATOR)
        result.append(highlight_ranges(right, row.right_ranges, rhs_style, shift=_GUTTER_WIDTH))
        result.append("\n")
    return result
