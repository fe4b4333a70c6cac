from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Position:
    """A validated position on the failing line.

    Both fields are 1-based. `column` points at the offending character and
    may be one past the end of the line when the fault is at end-of-line.
    """

    line: int
    column: int

    @property
    def caret_index(self) -> int:
        """0-based character offset of the caret within the line."""
        return self.column - 1


def canonicalize_tabs(text: str) -> str:
    # One tab is one column for the parsers we report on.
    return text.replace("\t", " ")


def split_lines(text: str) -> list[str]:
    """Split on newlines only, dropping a single trailing terminator and any `\\r`."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def normalize_position(lines: Sequence[str], line: int, column: int) -> Position:
    """Clamp a reported `(line, column)` onto `lines`.

    `column` counts the characters preceding the fault, so the caret goes on
    character `column` (0-based). Never raises; an empty source yields
    `Position(1, 1)`.
    """
    if not lines:
        return Position(line=1, column=1)

    total = len(lines)
    ln = min(max(line, 1), total)
    if ln != line:
        logger.debug("line %d outside 1..%d; clamped to %d", line, total, ln)

    text = lines[ln - 1]
    col = min(max(column + 1, 1), len(text) + 1)
    if col != column + 1:
        logger.debug("column %d outside line %d (length %d); clamped", column, ln, len(text))
    return Position(line=ln, column=col)
