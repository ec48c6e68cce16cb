"""Verification and inspection of compressed files.

  - verify: full decode, nothing written
  - describe: header only (magic + tree), no body decode
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from huffpack.core.bitio import BitReader
from huffpack.core.body import decode_body
from huffpack.core.codes import build_code_table
from huffpack.core.header import read_header
from huffpack.core.tree import iter_leaves


@dataclass(frozen=True)
class VerifyReport:
    n_bytes: int
    n_leaves: int
    header_bits: int


@dataclass(frozen=True)
class HeaderInfo:
    header_bits: int
    codes: list[tuple[int, str]]  # (symbol, "0101"), sorted by length then symbol

    @property
    def n_leaves(self) -> int:
        return len(self.codes)


def verify_file(path: str | Path) -> VerifyReport:
    with Path(path).open("rb") as fp:
        reader = BitReader(fp)
        root = read_header(reader)
        header_bits = reader.bits_read
        data = decode_body(root, reader)
    return VerifyReport(
        n_bytes=len(data),
        n_leaves=sum(1 for _ in iter_leaves(root)),
        header_bits=header_bits,
    )


def describe_file(path: str | Path) -> HeaderInfo:
    with Path(path).open("rb") as fp:
        reader = BitReader(fp)
        root = read_header(reader)
        header_bits = reader.bits_read

    table = build_code_table(root)
    rows = [(sym, "".join(str(b) for b in bits)) for sym, bits in table.items()]
    rows.sort(key=lambda r: (len(r[1]), r[0]))
    return HeaderInfo(header_bits=header_bits, codes=rows)
