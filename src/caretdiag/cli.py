from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .api import FORMATS, format_for_path, loads
from .config import ColoringMode, ContextConfig, resolve_coloring
from .errors import SourceError
from .render import render


_COLOR_CHOICES = {"auto": ColoringMode.ENVIRONMENT, "always": ColoringMode.ALWAYS, "never": ColoringMode.NEVER}


def _position(raw: str) -> tuple[int, int]:
    line, sep, column = raw.partition(":")
    try:
        if not sep:
            raise ValueError
        return int(line), int(column)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LINE:COLUMN, got {raw!r}") from None


def _non_negative(raw: str) -> int:
    try:
        n = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="caretdiag",
        description="Check JSON/YAML/TOML files and show parse errors in context",
    )
    ap.add_argument("files", nargs="+", help="Files to check")
    ap.add_argument("--format", choices=FORMATS, help="Input format (default: from file suffix)")
    ap.add_argument("--color", choices=sorted(_COLOR_CHOICES), default="auto", help="Colorize output")
    ap.add_argument(
        "-C",
        "--context-lines",
        type=_non_negative,
        default=None,
        help="Lines shown before and after the failing line",
    )
    ap.add_argument(
        "--context-chars",
        type=_non_negative,
        default=None,
        help="Characters shown either side of the caret on long lines",
    )
    ap.add_argument("--no-graphemes", action="store_true", help="Count code points instead of grapheme clusters")
    ap.add_argument("--trim-indent", action="store_true", help="Strip indentation shared by the shown lines")
    ap.add_argument("--at", type=_position, metavar="LINE:COLUMN", help="Report a custom error at this position")
    ap.add_argument("--message", default="error", help="Message for --at")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def _config(args: argparse.Namespace) -> ContextConfig:
    cfg = ContextConfig.from_env(stream=sys.stderr)
    overrides: dict[str, object] = {}
    if args.color != "auto":
        overrides["color_enabled"] = resolve_coloring(_COLOR_CHOICES[args.color], sys.stderr)
    if args.context_lines is not None:
        overrides["line_context"] = args.context_lines
    if args.context_chars is not None:
        overrides["char_context"] = args.context_chars
    if args.no_graphemes:
        overrides["graphemes_enabled"] = False
    if args.trim_indent:
        overrides["trim_indent"] = True
    return cfg.replace(**overrides)


def main(argv: list[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s: %(message)s")

    try:
        cfg = _config(args)
    except ValueError as e:
        ap.error(str(e))

    if args.at is not None:
        if len(args.files) != 1:
            ap.error("--at takes exactly one file")
        try:
            src = Path(args.files[0]).read_text(encoding="utf-8")
        except (OSError, ValueError) as e:
            print(f"{args.files[0]}: {e}", file=sys.stderr)
            return 1
        line, column = args.at
        print(render(src, line, column, args.message, cfg), file=sys.stderr)
        return 1

    failed = 0
    for f in args.files:
        p = Path(f)
        try:
            fmt = args.format or format_for_path(p)
            loads(p.read_text(encoding="utf-8"), format=fmt, config=cfg)
        except SourceError as e:
            failed += 1
            print(f"{p}:", file=sys.stderr)
            print(str(e), file=sys.stderr)
            continue
        except (OSError, ValueError) as e:
            failed += 1
            print(f"{p}: {e}", file=sys.stderr)
            continue
        print(f"ok: {p}")
    return 1 if failed else 0
