"""Bit-level source and sink over binary file objects.

Both sides are MSB-first:
  - BitReader.read_bits(n) -> int, or None when fewer than n bits remain
  - BitWriter.write_bits(nbits, value); close() pads the last byte with zeros

BitWriter does not own the underlying file object: the caller closes it.
"""

from __future__ import annotations

import io
from typing import IO

from .format import CHUNK_SIZE


class BitReader:
    def __init__(self, fp: IO[bytes], chunk_size: int = CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
        self._fp = fp
        self._chunk_size = int(chunk_size)
        self._buf = b""
        self._pos = 0
        self._acc = 0
        self._nacc = 0
        self._eof = False
        self.bits_read = 0

    @classmethod
    def from_bytes(cls, data: bytes, chunk_size: int = CHUNK_SIZE) -> "BitReader":
        return cls(io.BytesIO(bytes(data)), chunk_size=chunk_size)

    def _next_byte(self) -> int | None:
        if self._pos >= len(self._buf):
            if self._eof:
                return None
            self._buf = self._fp.read(self._chunk_size)
            self._pos = 0
            if not self._buf:
                self._eof = True
                return None
        b = self._buf[self._pos]
        self._pos += 1
        return b

    def read_bits(self, n: int) -> int | None:
        """Read n bits as an unsigned int. Return None on exhaustion.

        A short read does not consume anything: the bits stay buffered.
        """
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        while self._nacc < n:
            b = self._next_byte()
            if b is None:
                return None
            self._acc = (self._acc << 8) | b
            self._nacc += 8
        self._nacc -= n
        value = self._acc >> self._nacc
        self._acc &= (1 << self._nacc) - 1
        self.bits_read += n
        return value

    def read_bit(self) -> int | None:
        if self._nacc == 0:
            b = self._next_byte()
            if b is None:
                return None
            self._acc = b
            self._nacc = 8
        self._nacc -= 1
        bit = (self._acc >> self._nacc) & 1
        self._acc &= (1 << self._nacc) - 1
        self.bits_read += 1
        return bit


class BitWriter:
    def __init__(self, fp: IO[bytes], chunk_size: int = CHUNK_SIZE):
        self._fp = fp
        self._chunk_size = int(chunk_size)
        self._out = bytearray()
        self._acc = 0
        self._nacc = 0
        self._closed = False
        self.bits_written = 0

    def __enter__(self) -> "BitWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # flush anche su eccezione: l'ultimo byte parziale non va perso
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def write_bits(self, nbits: int, value: int) -> None:
        """Write the low ``nbits`` of ``value``, most significant bit first."""
        if self._closed:
            raise ValueError("write su BitWriter chiuso")
        if nbits < 0:
            raise ValueError(f"nbits must be >= 0, got {nbits}")
        if nbits == 0:
            return
        if value < 0 or value >> nbits:
            raise ValueError(f"value {value} non sta in {nbits} bit")

        self._acc = (self._acc << nbits) | value
        self._nacc += nbits
        self.bits_written += nbits

        while self._nacc >= 8:
            self._nacc -= 8
            self._out.append((self._acc >> self._nacc) & 0xFF)
        self._acc &= (1 << self._nacc) - 1

        if len(self._out) >= self._chunk_size:
            self._fp.write(bytes(self._out))
            self._out.clear()

    def close(self) -> None:
        """Pad the final partial byte with zeros and flush. Idempotent."""
        if self._closed:
            return
        if self._nacc > 0:
            self._out.append((self._acc << (8 - self._nacc)) & 0xFF)
            self._acc = 0
            self._nacc = 0
        if self._out:
            self._fp.write(bytes(self._out))
            self._out.clear()
        self._fp.flush()
        self._closed = True
