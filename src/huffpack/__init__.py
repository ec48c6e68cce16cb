"""huffpack: static Huffman compression with a self-describing bitstream."""

from __future__ import annotations

__version__ = "0.1.0"

from huffpack.core.codec_huffman import (  # noqa: E402
    CodecHuffman,
    CompressStats,
    compress_bytes,
    compress_file,
    decompress_bytes,
    decompress_file,
)

__all__ = [
    "CodecHuffman",
    "CompressStats",
    "compress_bytes",
    "compress_file",
    "decompress_bytes",
    "decompress_file",
    "__version__",
]
