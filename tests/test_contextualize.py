from __future__ import annotations

from caretdiag.contextualize import ELLIPSIS, ContextLine, contextualize_line, shorten_units
from caretdiag.segment import CHARS, GRAPHEMES, unit_index


SHORT_LINE = "abc!def"
LONG_LINE = (
    "?orem ipsum dolor sit amet, consectetur adipiscing elit. Morbi "
    "luctus accumsan lorem, vulputate laci!nia tellus sodales sed. "
    "Phasellus libero ipsum, ornare quis ullamcorper sed, porttitor "
    "congue lorem. Phasellus turpis lectus, vestibulum sit amet ex in, "
    "dignissim rhoncus dolor."
)


def _caret_char(out: ContextLine, segmenter=CHARS) -> str:
    return segmenter.split(out.body)[out.caret]


def test_short_line_is_kept_whole() -> None:
    out = contextualize_line(SHORT_LINE, 3, 1000, segmenter=CHARS)
    assert out.text == SHORT_LINE
    assert _caret_char(out) == "!"
    assert not out.cut_before
    assert not out.cut_after


def test_short_line_using_context() -> None:
    out = contextualize_line(SHORT_LINE, 3, 2, segmenter=CHARS)
    assert out.body == "bc!de"
    assert out.text == "...bc!de..."
    assert _caret_char(out) == "!"
    assert out.caret_offset == 3 + 2


def test_error_at_line_start_extends_right() -> None:
    out = contextualize_line(LONG_LINE, 0, 20, segmenter=CHARS)
    assert out.body == "?orem ipsum dolor sit amet, consectetur a"
    assert len(out.body) == 41
    assert not out.cut_before
    assert out.cut_after
    assert out.caret_offset == 0


def test_long_line_middle() -> None:
    idx = LONG_LINE.index("!")
    out = contextualize_line(LONG_LINE, idx, 20, segmenter=CHARS)
    assert out.body == "orem, vulputate laci!nia tellus sodales s"
    assert _caret_char(out) == "!"
    assert out.cut_before and out.cut_after


def test_structured_line() -> None:
    out = contextualize_line("abcdefghij0123456789!0123456789klmnopqrst", 20, 10, segmenter=CHARS)
    assert out.body == "0123456789!0123456789"
    assert out.text.index("!") == out.caret_offset


def test_last_char_is_error() -> None:
    out = contextualize_line("abcdefghij01234567890123456789klmnopqrst!", 40, 10, segmenter=CHARS)
    assert out.body == "klmnopqrst!"
    assert out.cut_before
    assert not out.cut_after
    assert _caret_char(out) == "!"


def test_caret_past_end_of_long_line() -> None:
    line = "x" * 30
    out = contextualize_line(line, 30, 5, segmenter=CHARS)
    assert out.body == "xxxxx"
    assert out.caret == 5
    assert out.text == ELLIPSIS + "xxxxx"


def test_zero_context_shows_only_the_caret_unit() -> None:
    out = contextualize_line("abcdefg", 3, 0, segmenter=CHARS)
    assert out.text == "...d..."
    assert out.caret_offset == 3


def test_unicode_code_points() -> None:
    line = "€123456789!€123456789"
    out = contextualize_line(line, 10, 5, segmenter=CHARS)
    assert out.body == "56789!€1234"
    assert _caret_char(out) == "!"


def test_graphemes_are_never_split() -> None:
    cluster = "a\u0310e\u0301o\u0308\u0332"
    line = cluster + "3456789!" + cluster + "3456789"
    idx = line.index("!")
    out = contextualize_line(line, idx, 5, segmenter=GRAPHEMES)
    assert out.body == "56789!" + cluster + "34"
    assert _caret_char(out, GRAPHEMES) == "!"
    assert out.caret == 5


def test_grapheme_caret_counts_clusters_before_it() -> None:
    line = "e\u0301e\u0301!"
    out = contextualize_line(line, line.index("!"), 45, segmenter=GRAPHEMES)
    assert out.caret_offset == 2
    out = contextualize_line(line, line.index("!"), 45, segmenter=CHARS)
    assert out.caret_offset == 4


def test_unit_index_inside_cluster() -> None:
    units = GRAPHEMES.split("ae\u0301b")
    assert units == ["a", "e\u0301", "b"]
    assert unit_index(units, 0) == 0
    assert unit_index(units, 2) == 1  # combining mark belongs to the cluster
    assert unit_index(units, 3) == 2
    assert unit_index(units, 10) == 3


def test_shorten_units_keeps_line_that_fits() -> None:
    units = list("abcde")
    assert shorten_units(units, 4, 2) == ContextLine(body="abcde", caret=4)
