"""Typed errors for huffpack.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_BAD_FORMAT = 11
EXIT_TRUNCATED = 12


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage error (invalid args, missing input, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (corrupt payload, unexpected error, etc.)"),
    ExitCodeInfo(EXIT_BAD_FORMAT, "BAD_FORMAT", "Not a huffpack stream (bad magic) or malformed tree header"),
    ExitCodeInfo(EXIT_TRUNCATED, "TRUNCATED", "Stream ended before the end-of-payload code"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/huffpack/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `HuffpackError` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffpackError(Exception):
    """Base error for huffpack."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffpackError):
    exit_code = EXIT_USAGE


class CorruptPayload(HuffpackError):
    exit_code = EXIT_GENERIC


class FormatError(CorruptPayload):
    """Magic value missing or mismatched."""

    exit_code = EXIT_BAD_FORMAT


class CorruptHeader(CorruptPayload):
    exit_code = EXIT_BAD_FORMAT


class TruncatedStreamError(CorruptPayload):
    """Source exhausted before the end-of-payload leaf was reached."""

    exit_code = EXIT_TRUNCATED
