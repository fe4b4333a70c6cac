from __future__ import annotations

import argparse

from caretdiag import ContextConfig, SourceError, loads
from caretdiag.testing import generate_broken_documents


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="render_corpus")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=20)
    ap.add_argument("--color", action="store_true")
    args = ap.parse_args(argv)

    cfg = ContextConfig(color_enabled=args.color)
    for name, src in generate_broken_documents(seed=args.seed, count=args.count):
        fmt = name.rsplit(".", 1)[1]
        try:
            loads(src, format=fmt, config=cfg)
        except SourceError as e:
            print(f"--- {name}")
            print(e)
        else:
            raise SystemExit(f"{name} unexpectedly parsed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
