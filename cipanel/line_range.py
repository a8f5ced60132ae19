"""Vim-style line range selection for copying job logs."""

from __future__ import annotations

import re
from collections.abc import Sequence

ALL_LINES = "%"
LAST_LINE = "$"

_SEPARATOR = re.compile(r"[,:]")
_NUMBER = re.compile(r"\+?[0-9]+", re.ASCII)


class LineRangeError(ValueError):
    """Raised when a line range cannot be understood or does not fit the log."""


def _parse_position(text: str, max_lines: int) -> int:
    text = text.strip()
    if text == LAST_LINE:
        return max_lines
    if not _NUMBER.fullmatch(text):
        raise LineRangeError(f"Invalid line number: {text}")
    return int(text)


def parse_line_range(text: str, max_lines: int) -> tuple[int, int]:
    """Parse a range such as "1,1000", "1:1000", "100,$", "%" or "1000".

    Returns 1-indexed ``(start, end)`` with ``end`` clamped to ``max_lines``.
    A single number ``N`` means lines 1 to ``N``.
    """
    text = text.strip()
    if not text:
        raise LineRangeError("Empty input")
    if text == ALL_LINES:
        return 1, max_lines

    match = _SEPARATOR.search(text)
    if match is None:
        end = _parse_position(text, max_lines)
        if end < 1:
            raise LineRangeError("Line number must be >= 1")
        return 1, min(end, max_lines)

    start = _parse_position(text[: match.start()], max_lines)
    end = _parse_position(text[match.end() :], max_lines)
    if start < 1:
        raise LineRangeError("Start line must be >= 1")
    if end < start:
        raise LineRangeError("End line must be >= start line")
    if start > max_lines:
        raise LineRangeError(f"Start line {start} exceeds total lines {max_lines}")
    return start, min(end, max_lines)


def extract_line_range(logs: Sequence[str], start: int, end: int) -> list[str]:
    """Return log lines ``start`` to ``end`` inclusive (1-indexed).

    Out-of-range or inverted requests give an empty list.
    """
    if not logs or start < 1 or end < start:
        return []
    start_idx = start - 1
    if start_idx >= len(logs):
        return []
    return list(logs[start_idx : min(end, len(logs))])


def format_copy_message(start: int, end: int, count: int) -> str:
    """Fixed-width notification text shown after a successful copy."""
    return f"Copied lines {start:>5}-{end:<5} ({count:>4} lines)"