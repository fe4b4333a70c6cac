from __future__ import annotations

import json
import logging
import re
import tomllib
from dataclasses import dataclass
from typing import ClassVar, Protocol, cast

import yaml

from .errors import LocatedError, UnsupportedErrorShape
from .source import split_lines


logger = logging.getLogger(__name__)

_TOML_AT_RE = re.compile(r"\s*\(at line (\d+), column (\d+)\)$")
_TOML_EOF_RE = re.compile(r"\s*\(at end of document\)$")


@dataclass(frozen=True, slots=True)
class ErrorLocation:
    """A parser error reduced to what the renderer needs.

    `column` counts the characters before the fault on `line` (1-based).
    """

    message: str
    line: int | None
    column: int | None


class PositionExtractor(Protocol):
    error_type: ClassVar[type[BaseException]]

    def extract(self, error: BaseException, source: str) -> ErrorLocation: ...


def _offset_to_location(source: str, index: int) -> tuple[int, int]:
    """Map a character offset to `(line, column)` counting only `\\n` as a break."""
    idx = min(max(index, 0), len(source))
    line = source.count("\n", 0, idx) + 1
    column = idx - (source.rfind("\n", 0, idx) + 1)
    return line, column


class JsonExtractor:
    error_type: ClassVar[type[BaseException]] = json.JSONDecodeError

    def extract(self, error: BaseException, source: str) -> ErrorLocation:
        err = cast(json.JSONDecodeError, error)
        # colno is 1-based on the offending character.
        return ErrorLocation(message=err.msg, line=err.lineno, column=err.colno - 1)


class YamlExtractor:
    error_type: ClassVar[type[BaseException]] = yaml.MarkedYAMLError

    def extract(self, error: BaseException, source: str) -> ErrorLocation:
        err = cast(yaml.MarkedYAMLError, error)
        mark = err.problem_mark or err.context_mark
        if mark is None:
            raise UnsupportedErrorShape(error)
        parts = [p for p in (err.context, err.problem) if p]
        message = ", ".join(parts) if parts else type(error).__name__
        # PyYAML also breaks lines on \r, \x85, \u2028 and \u2029; recount
        # from the character offset so line and column match split_lines.
        line, column = _offset_to_location(source, mark.index)
        return ErrorLocation(message=message, line=line, column=column)


class TomlExtractor:
    error_type: ClassVar[type[BaseException]] = tomllib.TOMLDecodeError

    def extract(self, error: BaseException, source: str) -> ErrorLocation:
        lineno = getattr(error, "lineno", None)
        colno = getattr(error, "colno", None)
        msg = getattr(error, "msg", None)
        if lineno is not None and colno is not None and msg is not None:
            return ErrorLocation(message=msg, line=lineno, column=colno - 1)

        text = str(error)
        m = _TOML_AT_RE.search(text)
        if m is not None:
            return ErrorLocation(
                message=text[: m.start()],
                line=int(m.group(1)),
                column=int(m.group(2)) - 1,
            )
        m = _TOML_EOF_RE.search(text)
        if m is not None:
            lines = split_lines(source)
            last = lines[-1] if lines else ""
            return ErrorLocation(message=text[: m.start()], line=max(len(lines), 1), column=len(last))
        raise UnsupportedErrorShape(error)


class LocatedExtractor:
    error_type: ClassVar[type[BaseException]] = LocatedError

    def extract(self, error: BaseException, source: str) -> ErrorLocation:
        err = cast(LocatedError, error)
        if err.line is None and err.column is None:
            raise UnsupportedErrorShape(error)
        return ErrorLocation(message=err.message, line=err.line, column=err.column)


EXTRACTORS: tuple[PositionExtractor, ...] = (
    LocatedExtractor(),
    JsonExtractor(),
    YamlExtractor(),
    TomlExtractor(),
)


def extract_location(error: BaseException, source: str) -> ErrorLocation:
    """Pull `(message, line, column)` out of a supported parser error."""
    for ex in EXTRACTORS:
        if isinstance(error, ex.error_type):
            return ex.extract(error, source)
    logger.debug("no extractor for %s", type(error).__name__)
    raise UnsupportedErrorShape(error)
