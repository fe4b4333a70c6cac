from __future__ import annotations

from .adapters import ErrorLocation, extract_location
from .api import load_file, loads
from .config import ColoringMode, ContextConfig, default_config
from .errors import LocatedError, SourceError, UnsupportedErrorShape
from .render import render

__all__ = [
    "ColoringMode",
    "ContextConfig",
    "ErrorLocation",
    "LocatedError",
    "SourceError",
    "UnsupportedErrorShape",
    "default_config",
    "extract_location",
    "load_file",
    "loads",
    "render",
]
