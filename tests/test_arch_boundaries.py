from __future__ import annotations

import ast
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

# Front-end modules. The codec (huffpack.core.*) must NEVER import these.
FRONTEND_PREFIXES: tuple[str, ...] = (
    "huffpack.cli",
    "huffpack.verify",
    "huffpack.__main__",
)

PACKAGE_ROOT = "huffpack"
CORE_PREFIX = "huffpack.core"


@dataclass(frozen=True)
class ImportEdge:
    src: str
    dst: str
    file: Path
    lineno: int


def _has_prefix(mod: str, prefix: str) -> bool:
    return mod == prefix or mod.startswith(prefix + ".")


def _is_frontend(mod: str) -> bool:
    return any(_has_prefix(mod, p) for p in FRONTEND_PREFIXES)


def _module_name_from_path(src_dir: Path, py_file: Path) -> str | None:
    try:
        rel = py_file.relative_to(src_dir)
    except ValueError:
        return None

    parts = list(rel.parts)
    if not parts or parts[0] != PACKAGE_ROOT:
        return None

    if py_file.name == "__init__.py":
        parts = parts[:-1]
    else:
        parts[-1] = py_file.stem

    if not parts:
        return None
    return ".".join(parts)


def _resolve_relative(current_mod: str, level: int, module: str | None, is_pkg: bool) -> str | None:
    if level <= 0:
        return module

    base = current_mod.split(".")
    if not is_pkg:
        base = base[:-1]  # package of current module

    if level - 1 > len(base):
        return None
    base = base[: len(base) - level + 1]

    if module:
        return ".".join(base + module.split("."))
    return ".".join(base)


def _iter_import_edges(src_dir: Path) -> Iterable[ImportEdge]:
    for py in src_dir.rglob("*.py"):
        mod = _module_name_from_path(src_dir, py)
        if not mod:
            continue

        tree = ast.parse(py.read_text(encoding="utf-8"), filename=str(py))
        is_pkg = py.name == "__init__.py"

        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if _has_prefix(alias.name, PACKAGE_ROOT):
                        yield ImportEdge(mod, alias.name, py, getattr(node, "lineno", 0))

            elif isinstance(node, ast.ImportFrom):
                if node.module is None and node.level == 0:
                    continue
                abs_mod = _resolve_relative(mod, node.level, node.module, is_pkg)
                if abs_mod and _has_prefix(abs_mod, PACKAGE_ROOT):
                    yield ImportEdge(mod, abs_mod, py, getattr(node, "lineno", 0))


def test_core_does_not_import_frontends() -> None:
    """
    Hard dependency direction:
      cli / verify -> may depend on core
      core         -> must NOT depend on cli / verify
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if not src_dir.is_dir():
        raise AssertionError(f"Expected src/ directory at: {src_dir}")

    violations = [
        e
        for e in _iter_import_edges(src_dir)
        if _has_prefix(e.src, CORE_PREFIX) and _is_frontend(e.dst)
    ]

    if violations:
        lines = ["Forbidden imports detected (core -> frontend):"]
        for v in sorted(violations, key=lambda e: (str(e.file), e.lineno, e.src, e.dst)):
            lines.append(f"  {v.file}:{v.lineno}  {v.src}  ->  {v.dst}")
        lines.append("")
        lines.append("Fix: move front-end logic out of huffpack.core, or invert the dependency.")
        raise AssertionError("\n".join(lines))


def test_edge_scanner_sees_core_modules() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    edges = list(_iter_import_edges(repo_root / "src"))
    srcs = {e.src for e in edges}
    assert "huffpack.core.header" in srcs
    assert any(e.src == "huffpack.core.body" and e.dst == "huffpack.core.bitio" for e in edges)
