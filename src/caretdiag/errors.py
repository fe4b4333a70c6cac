from __future__ import annotations

from dataclasses import dataclass

from .config import ContextConfig, default_config
from .render import Renderer, render


@dataclass(slots=True)
class UnsupportedErrorShape(Exception):
    """The error carries no line/column we know how to extract."""

    error: BaseException

    def __str__(self) -> str:
        return f"no position available in {type(self.error).__name__}: {self.error}"


@dataclass(slots=True)
class LocatedError(Exception):
    """An error from any source that knows where it happened.

    `column` counts the characters before the fault on `line`.
    """

    message: str
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class SourceError(Exception):
    """A parse failure bundled with the text it happened in.

    `str()` renders the excerpt with a caret; without a position only the
    message is shown.
    """

    source: str
    message: str
    line: int | None = None
    column: int | None = None
    config: ContextConfig | None = None

    def __str__(self) -> str:
        cfg = default_config() if self.config is None else self.config
        if self.line is None and self.column is None:
            return Renderer(color_enabled=cfg.color_enabled).render_message(self.message)
        return render(self.source, self.line or 0, self.column or 0, self.message, cfg)

    @classmethod
    def from_exception(
        cls,
        source: str,
        error: BaseException,
        *,
        config: ContextConfig | None = None,
    ) -> SourceError:
        from .adapters import extract_location

        try:
            loc = extract_location(error, source)
        except UnsupportedErrorShape:
            return cls(source=source, message=str(error), config=config)
        return cls(source=source, message=loc.message, line=loc.line, column=loc.column, config=config)
