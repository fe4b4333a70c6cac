from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import regex


_GRAPHEME_RE = regex.compile(r"\X")


class Segmenter(Protocol):
    """Splits a line into the units that columns are counted in."""

    def split(self, text: str) -> list[str]: ...


class CharSegmenter:
    """One unit per code point."""

    def split(self, text: str) -> list[str]:
        return list(text)


class GraphemeSegmenter:
    """One unit per extended grapheme cluster (UAX #29)."""

    def split(self, text: str) -> list[str]:
        return _GRAPHEME_RE.findall(text)


CHARS = CharSegmenter()
GRAPHEMES = GraphemeSegmenter()


def segmenter_for(graphemes_enabled: bool) -> Segmenter:
    return GRAPHEMES if graphemes_enabled else CHARS


def unit_index(units: Sequence[str], char_offset: int) -> int:
    """Map a code point offset onto the unit containing it.

    Offsets inside a cluster land on that cluster; offsets at or past the end
    map to `len(units)`.
    """
    consumed = 0
    for i, u in enumerate(units):
        consumed += len(u)
        if consumed > char_offset:
            return i
    return len(units)
