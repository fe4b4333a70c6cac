from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .segment import Segmenter, unit_index


logger = logging.getLogger(__name__)

ELLIPSIS = "..."


@dataclass(frozen=True, slots=True)
class ContextLine:
    """The visible part of the failing line.

    `caret` is the 0-based unit offset of the caret within `body`, not
    counting a leading ellipsis.
    """

    body: str
    caret: int
    cut_before: bool = False
    cut_after: bool = False

    @property
    def text(self) -> str:
        head = ELLIPSIS if self.cut_before else ""
        tail = ELLIPSIS if self.cut_after else ""
        return f"{head}{self.body}{tail}"

    @property
    def caret_offset(self) -> int:
        return self.caret + (len(ELLIPSIS) if self.cut_before else 0)


def shorten_units(units: Sequence[str], caret: int, char_context: int) -> ContextLine:
    """Keep `char_context` units either side of `caret`.

    A line no longer than the window is returned whole. When the caret sits
    near the start, the window keeps its full width and extends to the right.
    """
    n = len(units)
    width = 2 * char_context + 1
    if n <= width:
        return ContextLine(body="".join(units), caret=caret)

    start = max(caret - char_context, 0)
    stop = min(start + width, n)
    return ContextLine(
        body="".join(units[start:stop]),
        caret=caret - start,
        cut_before=start > 0,
        cut_after=stop < n,
    )


def contextualize_line(text: str, caret_index: int, char_context: int, *, segmenter: Segmenter) -> ContextLine:
    """Shorten `text` around the code point offset `caret_index`."""
    units = segmenter.split(text)
    caret = unit_index(units, caret_index)
    out = shorten_units(units, caret, char_context)
    if out.cut_before or out.cut_after:
        logger.debug("shortened line of %d units to %d around unit %d", len(units), len(out.body), caret)
    return out
