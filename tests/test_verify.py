from __future__ import annotations

from pathlib import Path

import pytest

from huffpack import compress_bytes
from huffpack.core.format import PSEUDO_EOF
from huffpack.errors import FormatError, TruncatedStreamError
from huffpack.verify import describe_file, verify_file


def _write(tmp_path: Path, name: str, blob: bytes) -> Path:
    p = tmp_path / name
    p.write_bytes(blob)
    return p


def test_verify_ok(tmp_path: Path) -> None:
    data = b"verify me, verify me twice\n" * 8
    p = _write(tmp_path, "ok.hp", compress_bytes(data))
    rep = verify_file(p)
    assert rep.n_bytes == len(data)
    assert rep.n_leaves == len(set(data)) + 1
    # magic + one '0' per internal node + (1 + 9) per leaf
    assert rep.header_bits == 32 + (rep.n_leaves - 1) + 10 * rep.n_leaves


def test_verify_empty_payload(tmp_path: Path) -> None:
    p = _write(tmp_path, "empty.hp", compress_bytes(b""))
    rep = verify_file(p)
    assert rep.n_bytes == 0
    assert rep.n_leaves == 2


def test_verify_errors(tmp_path: Path) -> None:
    with pytest.raises(FormatError):
        verify_file(_write(tmp_path, "bad.hp", b"\x00" * 16))
    with pytest.raises(TruncatedStreamError):
        verify_file(_write(tmp_path, "cut.hp", compress_bytes(b"abcdefgh" * 30)[:-2]))


def test_describe_file_aaaa(tmp_path: Path) -> None:
    p = _write(tmp_path, "aaaa.hp", compress_bytes(b"aaaa"))
    info = describe_file(p)
    assert info.header_bits == 32 + 21
    assert info.n_leaves == 2
    assert info.codes == [(ord("a"), "1"), (PSEUDO_EOF, "0")]


def test_describe_file_sorted_by_length(tmp_path: Path) -> None:
    p = _write(tmp_path, "skew.hp", compress_bytes(b"e" * 100 + b"t" * 20 + b"xyz"))
    info = describe_file(p)
    lengths = [len(code) for _, code in info.codes]
    assert lengths == sorted(lengths)
    assert info.codes[0][0] == ord("e")
