"""Run the import-direction check (huffpack.core must not import cli/verify).

Thin wrapper over tests/test_arch_boundaries.py, for CI steps that do not run
the whole suite.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

TEST_FILE = Path(__file__).resolve().parents[1] / "tests" / "test_arch_boundaries.py"


def main() -> int:
    if not TEST_FILE.is_file():
        print(f"ERROR: {TEST_FILE} not found.", file=sys.stderr)
        return 3
    return int(pytest.main(["-q", "-p", "no:cacheprovider", str(TEST_FILE)]))


if __name__ == "__main__":
    raise SystemExit(main())
