from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import IO

from .format import ALPH_SIZE, CHUNK_SIZE


def _add_counts(freq: list[int], counts: Counter) -> None:
    for sym, n in counts.items():
        if not (0 <= sym < ALPH_SIZE):
            raise ValueError(f"simbolo fuori range per count_frequencies: {sym}")
        freq[sym] += n


def count_frequencies(data: bytes | Iterable[int]) -> list[int]:
    """Histogram of byte values: freq[b] = occurrences of b in data."""
    freq = [0] * ALPH_SIZE
    _add_counts(freq, Counter(data))
    return freq


def count_stream(fp: IO[bytes], chunk_size: int = CHUNK_SIZE) -> list[int]:
    """Histogram of a binary stream, read to EOF in chunks.

    The stream is consumed, not rewound: the encode pass needs its own handle.
    """
    freq = [0] * ALPH_SIZE
    while True:
        chunk = fp.read(chunk_size)
        if not chunk:
            break
        _add_counts(freq, Counter(chunk))
    return freq
