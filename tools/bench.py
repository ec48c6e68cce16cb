#!/usr/bin/env python3
"""File benchmark: huffpack vs reference byte compressors.

Runs compress -> verify -> decompress -> compare for every input file, and
reports size/ratio/timing next to zlib and (if installed) zstd.

Usage example:
  python tools/bench.py data/*.txt --iters 3

Notes:
- Uses internal APIs (no subprocess). Run inside repo venv.
- zstd needs the optional extra: pip install -e '.[zstd]'
"""

from __future__ import annotations

import argparse
import json
import resource
import tempfile
import time
import zlib
from pathlib import Path
from typing import Any

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None


def _peak_rss_kb() -> int:
    # Linux: ru_maxrss is KB
    return int(resource.getrusage(resource.RUSAGE_SELF).ru_maxrss)


def _reference_sizes(data: bytes, zstd_level: int) -> dict[str, int | None]:
    sizes: dict[str, int | None] = {"zlib9": len(zlib.compress(data, 9)), "zstd": None}
    if zstd is not None:
        c = zstd.ZstdCompressor(level=int(zstd_level))
        sizes["zstd"] = len(c.compress(data))
    return sizes


def _bench_one(idx: int, inp: Path, work: Path, zstd_level: int) -> dict[str, Any]:
    from huffpack.core.codec_huffman import compress_file, decompress_file
    from huffpack.verify import verify_file

    # prefisso indice: input omonimi da cartelle diverse non si sovrascrivono
    out = work / f"{idx:04d}_{inp.name}.hp"
    back = work / f"{idx:04d}_{inp.name}.back"

    t0 = time.perf_counter()
    st = compress_file(inp, out)
    t_comp = time.perf_counter() - t0

    t1 = time.perf_counter()
    verify_file(out)
    t_verify = time.perf_counter() - t1

    t2 = time.perf_counter()
    decompress_file(out, back)
    t_decomp = time.perf_counter() - t2

    data = inp.read_bytes()
    same = back.read_bytes() == data

    return {
        "file": str(inp),
        "n_in": st.n_in,
        "n_out": st.n_out,
        "ratio": st.ratio,
        "header_bits": st.header_bits,
        "body_bits": st.body_bits,
        "leaves": st.n_leaves,
        "reference": _reference_sizes(data, zstd_level),
        "times_sec": {
            "compress": t_comp,
            "verify": t_verify,
            "decompress": t_decomp,
            "total": t_comp + t_verify + t_decomp,
        },
        "peak_rss_kb": _peak_rss_kb(),
        "roundtrip_ok": bool(same),
    }


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="bench.py", description="huffpack file benchmark")
    ap.add_argument("inputs", type=Path, nargs="+")
    ap.add_argument("--iters", type=int, default=1)
    ap.add_argument("--zstd-level", type=int, default=19)
    ns = ap.parse_args(argv)

    rows: list[dict[str, Any]] = []
    t0_all = time.perf_counter()

    with tempfile.TemporaryDirectory(prefix="huffpack_bench_") as tmp:
        work = Path(tmp)
        for i in range(int(ns.iters)):
            for idx, inp in enumerate(ns.inputs):
                if not inp.is_file():
                    raise SystemExit(f"input non valido: {inp}")
                row = {"iter": i + 1, **_bench_one(idx, inp.resolve(), work, int(ns.zstd_level))}
                rows.append(row)
                print(json.dumps(row, ensure_ascii=False))
                if not row["roundtrip_ok"]:
                    raise SystemExit(f"mismatch: roundtrip non lossless ({inp})")

    total_in = sum(r["n_in"] for r in rows)
    total_out = sum(r["n_out"] for r in rows)
    summary = {
        "schema": "huffpack.bench.v1",
        "runs": len(rows),
        "total_in": total_in,
        "total_out": total_out,
        "ratio": (total_out / total_in) if total_in else 0.0,
        "zstd_available": zstd is not None,
        "wall_total_sec": time.perf_counter() - t0_all,
        "max_peak_rss_kb": max((r["peak_rss_kb"] for r in rows), default=0),
    }
    print(json.dumps(summary, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
