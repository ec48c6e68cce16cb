from __future__ import annotations

import io
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from huffpack.errors import UsageError

from .bitio import BitReader, BitWriter
from .body import decode_body, encode_body
from .codes import build_code_table
from .format import CHUNK_SIZE
from .freq import count_frequencies, count_stream
from .header import read_header, write_header
from .tree import build_tree, iter_leaves


@dataclass(frozen=True)
class CompressStats:
    n_in: int
    n_out: int
    header_bits: int
    body_bits: int
    n_leaves: int

    @property
    def ratio(self) -> float:
        """Output size / input size (0.0 for empty input)."""
        if self.n_in == 0:
            return 0.0
        return self.n_out / self.n_in


def _iter_chunks(fp: IO[bytes], chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    while True:
        chunk = fp.read(chunk_size)
        if not chunk:
            return
        yield chunk


def compress_stream(freq: list[int], src: IO[bytes], dst: IO[bytes]) -> CompressStats:
    """Encode src into dst with the tree built from freq.

    freq must come from an earlier, independent pass over the same content
    (see count_stream): src is read once, from its current position.
    """
    root = build_tree(freq)
    codes = build_code_table(root)

    with BitWriter(dst) as writer:
        write_header(root, writer)
        header_bits = writer.bits_written
        body_bits = encode_body(_iter_chunks(src), codes, writer)

    total_bits = header_bits + body_bits
    return CompressStats(
        n_in=sum(freq),
        n_out=(total_bits + 7) // 8,
        header_bits=header_bits,
        body_bits=body_bits,
        n_leaves=sum(1 for _ in iter_leaves(root)),
    )


def decompress_stream(src: IO[bytes]) -> bytes:
    reader = BitReader(src)
    root = read_header(reader)
    return decode_body(root, reader)


def compress_bytes(data: bytes) -> bytes:
    data = bytes(data)
    out = io.BytesIO()
    compress_stream(count_frequencies(data), io.BytesIO(data), out)
    return out.getvalue()


def decompress_bytes(blob: bytes) -> bytes:
    return decompress_stream(io.BytesIO(bytes(blob)))


def compress_file(input_path: str | Path, output_path: str | Path) -> CompressStats:
    """Two passes over input_path, each with its own handle: count, then encode."""
    input_path = Path(input_path)
    output_path = Path(output_path)

    # open("wb") troncherebbe l'input prima della passata di encode
    if output_path.exists() and os.path.samefile(input_path, output_path):
        raise UsageError(f"input e output sono lo stesso file: {output_path}")

    with input_path.open("rb") as fp:
        freq = count_stream(fp)

    with input_path.open("rb") as src, output_path.open("wb") as dst:
        return compress_stream(freq, src, dst)


def decompress_file(input_path: str | Path, output_path: str | Path) -> int:
    """Decode input_path fully, then write output_path. Returns bytes written.

    On a decode error nothing is written.
    """
    with Path(input_path).open("rb") as fp:
        data = decompress_stream(fp)
    Path(output_path).write_bytes(data)
    return len(data)


class CodecHuffman:
    """Static Huffman byte codec: self-describing stream, no external metadata."""

    codec_id: str = "huffman"

    def compress(self, data: bytes) -> bytes:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes")
        return compress_bytes(bytes(data))

    def decompress(self, comp: bytes, out_size: int | None = None) -> bytes:
        if not isinstance(comp, (bytes, bytearray, memoryview)):
            raise TypeError("comp must be bytes")
        data = decompress_bytes(bytes(comp))
        if out_size is not None and len(data) != int(out_size):
            raise ValueError(f"huffman: out_size mismatch: got={len(data)} expected={out_size}")
        return data
