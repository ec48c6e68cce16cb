from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

from huffpack import compress_bytes

pytestmark = pytest.mark.p1


def _run_cli(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Run huffpack CLI through a python -c wrapper.

    This avoids assuming the console-script entrypoint is installed.
    """
    src = str(Path(__file__).resolve().parents[1] / "src")
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (src, env.get("PYTHONPATH", "")) if p)
    cmd = [
        sys.executable,
        "-c",
        "from huffpack.cli import main; raise SystemExit(main())",
        *args,
    ]
    return subprocess.run(
        cmd,
        cwd=str(cwd) if cwd else None,
        env=env,
        text=True,
        capture_output=True,
    )


def test_cli_roundtrip_verify_show(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.hp"
    back = tmp_path / "back.txt"

    data = "HELLO 123\nRIGA ARTICOLO: vite M3 qty=10 prezzo=1.20\n"
    inp.write_text(data, encoding="utf-8")

    r = _run_cli("compress", str(inp), str(out), "--stats")
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "ratio=" in r.stdout

    r = _run_cli("verify", str(out))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "OK" in r.stdout

    r = _run_cli("show", str(out))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "EOF" in r.stdout
    assert "'H'" in r.stdout

    r = _run_cli("decompress", str(out), str(back))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert back.read_text(encoding="utf-8") == data


def test_cli_version() -> None:
    r = _run_cli("--version")
    assert r.returncode == 0
    assert "huffpack" in r.stdout


def test_cli_missing_input_exit_2(tmp_path: Path) -> None:
    r = _run_cli("compress", str(tmp_path / "nope"), str(tmp_path / "out.hp"))
    assert r.returncode == 2
    assert "[huffpack]" in r.stderr


def test_cli_bad_magic_exit_11(tmp_path: Path) -> None:
    bad = tmp_path / "bad.hp"
    bad.write_bytes(b"not a huffpack file")
    r = _run_cli("verify", str(bad))
    assert r.returncode == 11
    assert "[huffpack]" in r.stderr
    assert "magic" in r.stderr


def test_cli_truncated_exit_12(tmp_path: Path) -> None:
    cut = tmp_path / "cut.hp"
    back = tmp_path / "back.bin"
    cut.write_bytes(compress_bytes(b"truncate me please " * 20)[:-3])

    r = _run_cli("decompress", str(cut), str(back))
    assert r.returncode == 12
    assert "[huffpack]" in r.stderr
    assert not back.exists()


def test_cli_debug_reraises(tmp_path: Path) -> None:
    bad = tmp_path / "bad.hp"
    bad.write_bytes(b"\x00\x00\x00\x00")
    r = _run_cli("verify", str(bad), "--debug")
    assert r.returncode != 0
    assert "Traceback" in r.stderr
    assert "FormatError" in r.stderr


def test_cli_compress_onto_itself_exit_2(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    data = "do not eat me\n" * 10
    inp.write_text(data, encoding="utf-8")

    r = _run_cli("compress", str(inp), str(inp))
    assert r.returncode == 2
    assert "[huffpack]" in r.stderr
    assert inp.read_text(encoding="utf-8") == data


def test_cli_output_in_missing_dir_exit_10(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    inp.write_text("hello\n", encoding="utf-8")

    r = _run_cli("compress", str(inp), str(tmp_path / "no_such_dir" / "out.hp"))
    assert r.returncode == 10
    assert "[huffpack] error:" in r.stderr
