from __future__ import annotations

from pathlib import Path

import pytest

from caretdiag import ContextConfig, SourceError, load_file, loads
from caretdiag.api import format_for_path


PLAIN = ContextConfig(color_enabled=False)


def test_loads_valid_documents() -> None:
    assert loads('{"values": ["a"]}', format="json") == {"values": ["a"]}
    assert loads("values:\n  - a\n", format="yaml") == {"values": ["a"]}
    assert loads('values = ["a"]\n', format="toml") == {"values": ["a"]}


def test_loads_json_failure_renders_excerpt() -> None:
    src = '{"values":["asd","asd2",{"invalid": },"asd3"]}'
    with pytest.raises(SourceError) as e:
        loads(src, format="json", config=PLAIN)
    err = e.value
    assert err.line == 1
    assert src[err.column] == "}"
    rows = str(err).split("\n")
    assert rows[0] == "Error:"
    assert rows[1] == " 1 | " + src
    assert rows[2] == "   | " + " " * err.column + f"^ Expecting value at line 1 column {err.column}"


def test_loads_keeps_original_exception_as_cause() -> None:
    with pytest.raises(SourceError) as e:
        loads("a: b: c", format="yaml", config=PLAIN)
    assert e.value.__cause__ is not None


def test_loads_unknown_format() -> None:
    with pytest.raises(ValueError) as e:
        loads("", format="ini")
    assert "unknown format" in str(e.value)


def test_empty_json_document() -> None:
    with pytest.raises(SourceError) as e:
        loads("", format="json", config=PLAIN)
    assert str(e.value) == "Error:\n   | \n   | ^ Expecting value at line 1 column 0"


def test_format_for_path() -> None:
    assert format_for_path("a.JSON") == "json"
    assert format_for_path("a/b.yml") == "yaml"
    assert format_for_path("x.toml") == "toml"
    with pytest.raises(ValueError):
        format_for_path("x.ini")


def test_load_file(tmp_path: Path) -> None:
    good = tmp_path / "good.yaml"
    good.write_text("a: 1\n", encoding="utf-8")
    assert load_file(good) == {"a": 1}

    bad = tmp_path / "bad.toml"
    bad.write_text("name = \n", encoding="utf-8")
    with pytest.raises(SourceError) as e:
        load_file(bad, config=PLAIN)
    assert "Invalid value" in str(e.value)

    as_json = tmp_path / "data.txt"
    as_json.write_text("[1, 2]", encoding="utf-8")
    assert load_file(as_json, format="json") == [1, 2]
