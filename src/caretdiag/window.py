from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DisplayLine:
    line_number: int | None  # None renders a blank gutter
    text: str
    is_error_line: bool = False


def select_window(lines: Sequence[str], error_index: int, line_context: int) -> list[DisplayLine]:
    """Lines `[error_index - line_context, error_index + line_context]` clipped to the source.

    `error_index` is 0-based. Lines outside the window are dropped without a marker.
    An empty source yields a single blank error line.
    """
    if not lines:
        return [DisplayLine(line_number=None, text="", is_error_line=True)]

    start = max(error_index - line_context, 0)
    stop = min(error_index + line_context + 1, len(lines))
    return [
        DisplayLine(line_number=i + 1, text=lines[i], is_error_line=(i == error_index))
        for i in range(start, stop)
    ]


def common_indent(window: Sequence[DisplayLine]) -> int:
    """Leading whitespace shared by every non-blank line."""
    widths = [len(d.text) - len(d.text.lstrip()) for d in window if d.text.strip()]
    return min(widths, default=0)


def dedent_window(window: Sequence[DisplayLine], indent: int) -> list[DisplayLine]:
    if indent <= 0:
        return list(window)
    return [DisplayLine(d.line_number, d.text[indent:], d.is_error_line) for d in window]
