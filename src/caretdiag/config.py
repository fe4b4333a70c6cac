from __future__ import annotations

import dataclasses
import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from functools import cache
from typing import TextIO


logger = logging.getLogger(__name__)

DEFAULT_LINE_CONTEXT = 3
DEFAULT_CHAR_CONTEXT = 45

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ColoringMode(str, Enum):
    ALWAYS = "always"
    NEVER = "never"
    ENVIRONMENT = "environment"


def color_supported(stream: TextIO | None = None, *, environ: Mapping[str, str] | None = None) -> bool:
    """Whether `stream` looks like a sink that understands ANSI escapes."""
    env = os.environ if environ is None else environ
    if "ANSI_COLORS_DISABLED" in env or "NO_COLOR" in env:
        return False
    if "FORCE_COLOR" in env:
        return True
    if env.get("TERM") == "dumb":
        return False
    s = sys.stderr if stream is None else stream
    isatty = getattr(s, "isatty", None)
    return bool(isatty and isatty())


def resolve_coloring(mode: ColoringMode, stream: TextIO | None = None) -> bool:
    if mode is ColoringMode.ALWAYS:
        return True
    if mode is ColoringMode.NEVER:
        return False
    return color_supported(stream)


@dataclass(frozen=True, slots=True)
class ContextConfig:
    """How much surrounding source a diagnostic shows and how it is styled.

    line_context: lines shown before and after the failing line.
    char_context: characters shown before and after the caret when the
        failing line has to be shortened.
    trim_indent: strip indentation shared by every line in the window.
    """

    line_context: int = DEFAULT_LINE_CONTEXT
    char_context: int = DEFAULT_CHAR_CONTEXT
    color_enabled: bool = False
    graphemes_enabled: bool = True
    trim_indent: bool = False

    def __post_init__(self) -> None:
        if self.line_context < 0:
            raise ValueError(f"line_context must be >= 0, got {self.line_context}")
        if self.char_context < 0:
            raise ValueError(f"char_context must be >= 0, got {self.char_context}")

    def replace(self, **overrides: object) -> ContextConfig:
        return dataclasses.replace(self, **overrides)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        stream: TextIO | None = None,
    ) -> ContextConfig:
        env = os.environ if environ is None else environ
        mode_raw = env.get("CARETDIAG_COLOR", ColoringMode.ENVIRONMENT.value)
        try:
            mode = ColoringMode(mode_raw.strip().lower())
        except ValueError:
            raise ValueError(
                f"CARETDIAG_COLOR must be one of always, never, environment; got {mode_raw!r}"
            ) from None
        color = color_supported(stream, environ=env) if mode is ColoringMode.ENVIRONMENT else mode is ColoringMode.ALWAYS
        return cls(
            line_context=_env_int(env, "CARETDIAG_LINE_CONTEXT", DEFAULT_LINE_CONTEXT),
            char_context=_env_int(env, "CARETDIAG_CHAR_CONTEXT", DEFAULT_CHAR_CONTEXT),
            color_enabled=color,
            graphemes_enabled=_env_bool(env, "CARETDIAG_GRAPHEMES", True),
            trim_indent=_env_bool(env, "CARETDIAG_TRIM_INDENT", False),
        )


@cache
def default_config() -> ContextConfig:
    """Process-wide defaults, read from the environment on first use.

    Malformed `CARETDIAG_*` values are logged and ignored so rendering never
    fails; the CLI validates them up front with `ContextConfig.from_env`.
    """
    try:
        return ContextConfig.from_env()
    except ValueError as e:
        logger.warning("ignoring environment configuration: %s", e)
        return ContextConfig()


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (0/1/true/false), got {raw!r}")
