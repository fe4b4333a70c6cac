from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from .config import ContextConfig
from .errors import SourceError


logger = logging.getLogger(__name__)

_LOADERS: dict[str, Callable[[str], Any]] = {
    "json": json.loads,
    "yaml": yaml.safe_load,
    "toml": tomllib.loads,
}

_SUFFIXES: dict[str, str] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
}

FORMATS: tuple[str, ...] = tuple(_LOADERS)


def loads(source: str, *, format: str, config: ContextConfig | None = None) -> Any:
    """Parse `source` as `format`, raising SourceError with a rendered excerpt on failure."""
    try:
        loader = _LOADERS[format]
    except KeyError:
        raise ValueError(f"unknown format {format!r}; expected one of {', '.join(FORMATS)}") from None
    try:
        return loader(source)
    except (ValueError, yaml.YAMLError) as e:
        # JSONDecodeError and TOMLDecodeError are ValueErrors.
        logger.debug("%s parse failed: %s", format, e)
        raise SourceError.from_exception(source, e, config=config) from e


def format_for_path(path: str | Path) -> str:
    suffix = Path(path).suffix.lower()
    try:
        return _SUFFIXES[suffix]
    except KeyError:
        raise ValueError(f"cannot infer format from suffix {suffix!r}; pass format=") from None


def load_file(path: str | Path, *, format: str | None = None, config: ContextConfig | None = None) -> Any:
    p = Path(path).expanduser()
    src = p.read_text(encoding="utf-8")
    return loads(src, format=format or format_for_path(p), config=config)
