from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from termcolor import colored

from .config import ContextConfig, default_config
from .contextualize import ELLIPSIS, ContextLine, contextualize_line
from .segment import segmenter_for
from .source import Position, canonicalize_tabs, normalize_position, split_lines
from .window import DisplayLine, common_indent, dedent_window, select_window


HEADER = "Error:"
SEPARATOR = " | "


@dataclass(frozen=True, slots=True)
class Caret:
    offset: int  # 0-based display column on the rendered error line
    width: int = 1


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Everything one diagnostic needs, built fresh per call."""

    source: str  # tab-canonicalized
    position: Position
    message: str
    config: ContextConfig

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(split_lines(self.source))

    @classmethod
    def create(
        cls,
        source_text: str,
        line: int,
        column: int,
        message: str,
        config: ContextConfig,
    ) -> ErrorContext:
        source = canonicalize_tabs(source_text)
        return cls(
            source=source,
            position=normalize_position(split_lines(source), line, column),
            message=f"{message} at line {line} column {column}",
            config=config,
        )


class Renderer:
    def __init__(self, *, color_enabled: bool = False) -> None:
        self.color_enabled = color_enabled

    def render(
        self,
        lines: Sequence[DisplayLine],
        caret: Caret,
        message: str,
        *,
        error_line: ContextLine | None = None,
    ) -> str:
        """Lay out gutter, source lines and the caret line.

        `error_line` carries the shortened failing line; when omitted the
        error DisplayLine's text is shown as is.
        """
        numbers = [d.line_number for d in lines if d.line_number is not None]
        width = max((len(str(n)) for n in numbers), default=1)
        blank = " " * width

        out = [HEADER]
        for d in lines:
            if not d.is_error_line:
                out.append(f" {blank}{SEPARATOR}{d.text}")
                continue
            num = blank if d.line_number is None else str(d.line_number).rjust(width)
            out.append(f" {self._paint(num, 'blue', bold=True)}{SEPARATOR}{self._error_text(d, error_line)}")
            marker = self._paint("^" * caret.width, "red", bold=True)
            out.append(f" {blank}{SEPARATOR}{' ' * caret.offset}{marker} {self._paint(message, 'red')}")
        return "\n".join(out)

    def render_message(self, message: str) -> str:
        return self._paint(message, "red", bold=True)

    def _error_text(self, d: DisplayLine, error_line: ContextLine | None) -> str:
        if error_line is None:
            return self._paint(d.text, None, bold=True)
        head = self._paint(ELLIPSIS, "blue", bold=True) if error_line.cut_before else ""
        tail = self._paint(ELLIPSIS, "blue", bold=True) if error_line.cut_after else ""
        return f"{head}{self._paint(error_line.body, None, bold=True)}{tail}"

    def _paint(self, text: str, color: str | None, *, bold: bool = False) -> str:
        if not self.color_enabled or not text:
            return text
        return colored(text, color, attrs=["bold"] if bold else None, force_color=True)


def format_context(ctx: ErrorContext) -> str:
    cfg = ctx.config
    window = select_window(ctx.lines, ctx.position.line - 1, cfg.line_context)
    caret_index = ctx.position.caret_index
    if cfg.trim_indent:
        indent = common_indent(window)
        window = dedent_window(window, indent)
        caret_index = max(caret_index - indent, 0)

    error = next(d for d in window if d.is_error_line)
    shown = contextualize_line(
        error.text,
        caret_index,
        cfg.char_context,
        segmenter=segmenter_for(cfg.graphemes_enabled),
    )
    renderer = Renderer(color_enabled=cfg.color_enabled)
    return renderer.render(window, Caret(offset=shown.caret_offset), ctx.message, error_line=shown)


def render(
    source_text: str,
    line: int,
    column: int,
    message: str,
    config: ContextConfig | None = None,
) -> str:
    """Render a parse failure as a source excerpt with a caret under the fault.

    `line` is 1-based; `column` is the number of characters on that line
    before the fault, so the caret lands on the first offending character.
    Out-of-range positions are clamped and an empty source still renders.
    """
    cfg = default_config() if config is None else config
    return format_context(ErrorContext.create(source_text, line, column, message, cfg))
