from __future__ import annotations

from typing import Iterable

from rich.text import Text

from delta_lines.utils.lines import LineRange


def highlight_ranges(
    line: str,
    ranges: Iterable[LineRange],
    style: str = "bold red",
    *,
    shift: int = 0,
) -> Text:
    """Build a rich Text for one line with the given ranges stylized.

    - ``shift`` moves every range right, e.g. past a line-number gutter.
    - Ranges are clipped to the line; empty spans are skipped.
    - Columns are ``str`` indices, matching LineRange.
    """
    text = Text(line)
    length = len(line)
    for line_range in ranges:
        start = min(max(line_range.start + shift, 0), length)
        end = min(max(line_range.end + shift, start), length)
        if end > start:
            text.stylize(style, start, end)
    return text
