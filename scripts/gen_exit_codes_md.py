#!/usr/bin/env python3
"""Write (or check) docs/exit_codes.md from huffpack.errors.EXIT_CODES.

  python scripts/gen_exit_codes_md.py           # rewrite the doc
  python scripts/gen_exit_codes_md.py --check   # exit 1 if the doc is stale
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from huffpack.errors import render_exit_codes_markdown

DOC_PATH = Path(__file__).resolve().parents[1] / "docs" / "exit_codes.md"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="gen_exit_codes_md.py")
    ap.add_argument("--check", action="store_true", help="Compare only, do not write")
    ns = ap.parse_args(argv)

    text = render_exit_codes_markdown()
    if ns.check:
        current = DOC_PATH.read_text(encoding="utf-8") if DOC_PATH.is_file() else ""
        if current != text:
            print(f"[huffpack] {DOC_PATH} non aggiornato: rigenera senza --check", file=sys.stderr)
            return 1
        print("OK")
        return 0

    DOC_PATH.parent.mkdir(parents=True, exist_ok=True)
    DOC_PATH.write_text(text, encoding="utf-8")
    print(f"[huffpack] wrote {DOC_PATH}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
