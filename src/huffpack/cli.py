"""huffpack CLI.

This is the stable CLI entrypoint (console-script: ``huffpack``).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from huffpack import __version__
from huffpack.core.format import PSEUDO_EOF
from huffpack.errors import EXIT_GENERIC, HuffpackError, UsageError


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _require_input(path: Path) -> None:
    if not path.is_file():
        raise UsageError(f"input non trovato: {path}")


def _cmd_compress(input_path: Path, output_path: Path, *, stats: bool) -> int:
    from huffpack.core.codec_huffman import compress_file

    _require_input(input_path)
    st = compress_file(input_path, output_path)
    if stats:
        print(
            f"in={st.n_in} out={st.n_out} ratio={st.ratio:.4f} "
            f"header_bits={st.header_bits} body_bits={st.body_bits} leaves={st.n_leaves}"
        )
    return 0


def _cmd_decompress(input_path: Path, output_path: Path) -> int:
    from huffpack.core.codec_huffman import decompress_file

    _require_input(input_path)
    decompress_file(input_path, output_path)
    return 0


def _cmd_verify(input_path: Path) -> int:
    from huffpack.verify import verify_file

    _require_input(input_path)
    verify_file(input_path)
    print("OK")
    return 0


def _symbol_label(sym: int) -> str:
    if sym == PSEUDO_EOF:
        return "EOF"
    if 0x20 <= sym < 0x7F:
        return repr(chr(sym))
    return f"0x{sym:02x}"


def _cmd_show(input_path: Path) -> int:
    from huffpack.verify import describe_file

    _require_input(input_path)
    info = describe_file(input_path)
    print(f"header_bits={info.header_bits} leaves={info.n_leaves}")
    for sym, code in info.codes:
        print(f"{sym:>3}  {_symbol_label(sym):<6}  {len(code):>3}  {code}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="huffpack", description="Static Huffman file compressor")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Lossless compress")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    p_c.add_argument("--stats", action="store_true", help="Print size/ratio summary")
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Lossless decompress")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Decode a compressed file without writing output")
    p_v.add_argument("input", type=Path)
    _add_common_args(p_v)

    p_s = sub.add_parser("show", help="Print the code table stored in the header")
    p_s.add_argument("input", type=Path)
    _add_common_args(p_s)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "compress":
            return _cmd_compress(ns.input, ns.output, stats=bool(ns.stats))
        if ns.cmd == "decompress":
            return _cmd_decompress(ns.input, ns.output)
        if ns.cmd == "verify":
            return _cmd_verify(ns.input)
        if ns.cmd == "show":
            return _cmd_show(ns.input)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except HuffpackError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
