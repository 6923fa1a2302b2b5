"""Change computation for delta_lines.

This module compares two texts with Python's difflib and reports, for each
side, the changed absolute ranges together with the line they correspond to
in the other text. Replaced blocks are refined character by character so
that only the edited spans are reported. The line alignment behind those
changes is kept as well, for side-by-side display.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import Optional

from .config import config
from .lines import AbsoluteRange, Change, LineNumber, NewlinePositions
from .logger import log

# One display row: (old line, new line), None where that side has no line.
AlignedPair = tuple[Optional[LineNumber], Optional[LineNumber]]


@dataclass
class Comparison:
    """Result of comparing two texts."""

    lhs_changes: list[Change] = field(default_factory=list)
    rhs_changes: list[Change] = field(default_factory=list)
    alignment: list[AlignedPair] = field(default_factory=list)


def compare_texts(lhs: str, rhs: str) -> Comparison:
    """Compare two texts - orchestrator for change computation.

    Args:
        lhs: The old text
        rhs: The new text

    Returns:
        Comparison with the changes of each side, in ascending offset order,
        and the line alignment: equal lines paired, inserted and deleted lines
        against None, replaced blocks paired line by line.
    """
    state = _initialize_change_state(lhs, rhs)

    for opcode in state["matcher"].get_opcodes():
        _process_opcode(opcode, state)

    comparison = state["comparison"]
    log.debug(
        f"[DIFF] {len(comparison.lhs_changes)} lhs changes, {len(comparison.rhs_changes)} rhs changes"
    )
    return comparison


def compute_changes(lhs: str, rhs: str) -> tuple[list[Change], list[Change]]:
    """Return (lhs_changes, rhs_changes) for two texts."""
    comparison = compare_texts(lhs, rhs)
    return comparison.lhs_changes, comparison.rhs_changes


def _initialize_change_state(lhs: str, rhs: str) -> dict:
    """Initialize state for change computation."""
    lhs_lines = _split_lines(lhs)
    rhs_lines = _split_lines(rhs)
    comparison = Comparison()
    return {
        "comparison": comparison,
        "lhs_changes": comparison.lhs_changes,
        "rhs_changes": comparison.rhs_changes,
        "alignment": comparison.alignment,
        "matcher": SequenceMatcher(None, lhs_lines, rhs_lines, autojunk=False),
        "lhs": lhs,
        "rhs": rhs,
        "lhs_offsets": _line_offsets(lhs_lines),
        "rhs_offsets": _line_offsets(rhs_lines),
        "lhs_index": NewlinePositions(lhs),
        "rhs_index": NewlinePositions(rhs),
    }


def _split_lines(text: str) -> list[str]:
    """Split on "\\n" only, keeping terminators, to agree with NewlinePositions."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _line_offsets(lines: list[str]) -> list[int]:
    """Start offset of every line, plus the total length as a sentinel."""
    offsets = [0]
    for line in lines:
        offsets.append(offsets[-1] + len(line))
    return offsets


def _process_opcode(opcode: tuple, state: dict):
    """Process a single opcode and dispatch to appropriate handler."""
    tag, i1, i2, j1, j2 = opcode

    if tag == 'equal':
        _handle_equal_lines(i1, i2, j1, state)
    elif tag == 'replace':
        _handle_replace_lines(i1, i2, j1, j2, state)
    elif tag == 'delete':
        _handle_delete_lines(i1, i2, j1, state)
    elif tag == 'insert':
        _handle_insert_lines(i1, j1, j2, state)


def _handle_equal_lines(i1: int, i2: int, j1: int, state: dict):
    """Handle lines present in both texts."""
    for offset in range(i2 - i1):
        state["alignment"].append((LineNumber(i1 + offset), LineNumber(j1 + offset)))


def _handle_delete_lines(i1: int, i2: int, j1: int, state: dict):
    """Handle lines only present in the old text."""
    change = _create_block_change(state["lhs"], state["lhs_offsets"], i1, i2, _clamp_line(j1, state["rhs_index"]))
    state["lhs_changes"].append(change)
    state["alignment"].extend((LineNumber(i), None) for i in range(i1, i2))


def _handle_insert_lines(i1: int, j1: int, j2: int, state: dict):
    """Handle lines only present in the new text."""
    change = _create_block_change(state["rhs"], state["rhs_offsets"], j1, j2, _clamp_line(i1, state["lhs_index"]))
    state["rhs_changes"].append(change)
    state["alignment"].extend((None, LineNumber(j)) for j in range(j1, j2))


def _handle_replace_lines(i1: int, i2: int, j1: int, j2: int, state: dict):
    """Handle replaced lines, refining to character spans where affordable."""
    _align_replaced_lines(i1, i2, j1, j2, state)

    lhs_start, lhs_end = state["lhs_offsets"][i1], state["lhs_offsets"][i2]
    rhs_start, rhs_end = state["rhs_offsets"][j1], state["rhs_offsets"][j2]

    if max(lhs_end - lhs_start, rhs_end - rhs_start) > config.max_inline_chars:
        log.debug(f"[DIFF] Replaced block {i1}-{i2} too large for inline refinement")
        state["lhs_changes"].append(
            _create_block_change(state["lhs"], state["lhs_offsets"], i1, i2, LineNumber(j1))
        )
        state["rhs_changes"].append(
            _create_block_change(state["rhs"], state["rhs_offsets"], j1, j2, LineNumber(i1))
        )
        return

    matcher = SequenceMatcher(
        None, state["lhs"][lhs_start:lhs_end], state["rhs"][rhs_start:rhs_end], autojunk=False
    )
    for tag, a1, a2, b1, b2 in matcher.get_opcodes():
        if tag == 'equal':
            continue
        if a1 < a2:
            opposite = state["rhs_index"].from_offset(rhs_start + b1).line
            _append_span_change(state["lhs"], lhs_start + a1, lhs_start + a2, opposite, state["lhs_changes"])
        if b1 < b2:
            opposite = state["lhs_index"].from_offset(lhs_start + a1).line
            _append_span_change(state["rhs"], rhs_start + b1, rhs_start + b2, opposite, state["rhs_changes"])


def _create_block_change(text: str, offsets: list[int], first: int, last: int, opposite: LineNumber) -> Change:
    """Create a change covering whole lines ``first``..``last`` (exclusive)."""
    start = offsets[first]
    end = _trim_trailing_newlines(text, start, offsets[last])
    return Change(range=AbsoluteRange(start=start, end=end), opposite_line=opposite)


def _append_span_change(text: str, start: int, end: int, opposite: LineNumber, changes: list[Change]):
    """Append a character-span change unless it was only line terminators."""
    end = _trim_trailing_newlines(text, start, end)
    if end > start:
        changes.append(Change(range=AbsoluteRange(start=start, end=end), opposite_line=opposite))


def _trim_trailing_newlines(text: str, start: int, end: int) -> int:
    # A range ending just past "\n" would also touch the following line.
    while end > start and text[end - 1] in "\r\n":
        end -= 1
    return end


def _clamp_line(line_num: int, index: NewlinePositions) -> LineNumber:
    """Clamp a line number to the last line the index knows about."""
    return LineNumber(min(line_num, len(index) - 1))


def _align_replaced_lines(i1: int, i2: int, j1: int, j2: int, state: dict):
    """Pair replaced lines side by side; the shorter side is padded with None."""
    for offset in range(max(i2 - i1, j2 - j1)):
        left = LineNumber(i1 + offset) if i1 + offset < i2 else None
        right = LineNumber(j1 + offset) if j1 + offset < j2 else None
        state["alignment"].append((left, right))
