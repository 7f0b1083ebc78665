"""
Determinism guard (static check).

Purpose:
- Prevent nondeterministic inputs from leaking into code that must replay bit-exactly
  (seed derivation, fork trees, anything fed by an injected Generator).

What we flag:
- Wall-clock-ish time: time.time(), time.monotonic(), datetime.now(), etc.
- Global RNG: random.random/randint/choice/shuffle/...
- Python's hash() (process-randomized by default)
- Unseeded generators: Generator() with no seed falls back to wall-clock time

We intentionally DO NOT scan:
- seedforge/timebase.py (the one place allowed to read the wall clock)

Usage:
  python tools/determinism_guard.py
  python tools/determinism_guard.py --paths path/to/host/systems --json
"""

from __future__ import annotations

import argparse
import ast
import json
from pathlib import Path
from typing import Iterable


PROJECT_ROOT = Path(__file__).resolve().parents[1]


DEFAULT_SCAN_DIRS = [
    PROJECT_ROOT / "seedforge",
]

DEFAULT_EXCLUDE_PATHS = [
    PROJECT_ROOT / "seedforge" / "timebase.py",
]


_RANDOM_ATTRS = {
    "random",
    "randint",
    "uniform",
    "choice",
    "choices",
    "shuffle",
    "sample",
    "seed",
    "randrange",
    "getrandbits",
}

_TIME_ATTRS_FORBIDDEN = {
    "time",
    "time_ns",
    "monotonic",
    "perf_counter",
}

_DATETIME_ATTRS_FORBIDDEN = {
    "now",
    "utcnow",
    "today",
}


def _is_under(path: Path, parent: Path) -> bool:
    try:
        path.resolve().relative_to(parent.resolve())
        return True
    except ValueError:
        return False


def _iter_py_files(roots: Iterable[Path], *, exclude: list[Path]) -> list[Path]:
    out: list[Path] = []
    for root in roots:
        if not root.exists():
            continue
        candidates = [root] if root.is_file() else list(root.rglob("*.py"))
        for p in candidates:
            if p.suffix.lower() != ".py":
                continue
            if any(_is_under(p, ex) for ex in exclude):
                continue
            out.append(p)
    return sorted(set(out))


def _attr_chain(node: ast.AST) -> list[str] | None:
    """
    For Attribute chains, return list like ["datetime", "datetime", "now"].
    For Names, return ["name"].
    """
    if isinstance(node, ast.Name):
        return [node.id]
    if isinstance(node, ast.Attribute):
        base = _attr_chain(node.value)
        if base is None:
            return None
        return [*base, node.attr]
    return None


def _display_path(file: Path) -> str:
    try:
        return str(file.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(file)


def _violation(kind: str, file: Path, node: ast.AST, detail: str) -> dict:
    return {
        "kind": kind,
        "file": _display_path(file),
        "line": int(getattr(node, "lineno", 0) or 0),
        "col": int(getattr(node, "col_offset", 0) or 0),
        "detail": detail,
    }


def scan_source(src: str, file_path: Path) -> list[dict]:
    try:
        tree = ast.parse(src, filename=str(file_path))
    except SyntaxError as e:
        return [
            {
                "kind": "parse_error",
                "file": _display_path(file_path),
                "line": int(getattr(e, "lineno", 0) or 0),
                "col": int(getattr(e, "offset", 0) or 0),
                "detail": f"SyntaxError: {e}",
            }
        ]

    findings: list[dict] = []

    for node in ast.walk(tree):
        if not isinstance(node, ast.Call):
            continue

        chain = _attr_chain(node.func)
        if not chain:
            continue

        # time.time() / time.monotonic()
        if len(chain) == 2 and chain[0] == "time" and chain[1] in _TIME_ATTRS_FORBIDDEN:
            findings.append(
                _violation(
                    "wall_clock_time",
                    file_path,
                    node,
                    f"Avoid time.{chain[1]}() in deterministic code; seeds come from seedforge.timebase.now_ms().",
                )
            )
            continue

        # datetime.datetime.now()/utcnow() or datetime.now()/utcnow()
        if chain[-1] in _DATETIME_ATTRS_FORBIDDEN and ("datetime" in chain or "date" in chain):
            findings.append(
                _violation(
                    "wall_clock_time",
                    file_path,
                    node,
                    "Avoid datetime.now()/utcnow() in deterministic code.",
                )
            )
            continue

        # random.<...>()
        if len(chain) == 2 and chain[0] == "random" and chain[1] in _RANDOM_ATTRS:
            findings.append(
                _violation(
                    "global_rng",
                    file_path,
                    node,
                    "Draw from an injected seedforge.Generator (or a fork of one) instead of random.*.",
                )
            )
            continue

        # hash(...)
        if chain == ["hash"]:
            findings.append(
                _violation(
                    "unstable_hash",
                    file_path,
                    node,
                    "Avoid Python hash() for deterministic behavior; use seedforge.engine.hash_string.",
                )
            )
            continue

        # Generator() with no seed
        if chain[-1] == "Generator" and not node.args and not node.keywords:
            findings.append(
                _violation(
                    "unseeded_generator",
                    file_path,
                    node,
                    "Generator() without a seed uses wall-clock time; pass a seed or fork an injected generator.",
                )
            )
            continue

    return findings


def scan_file(file_path: Path) -> list[dict]:
    try:
        src = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        src = file_path.read_text(encoding="utf-8", errors="replace")
    return scan_source(src, file_path)


def scan_paths(roots: Iterable[Path], *, exclude: Iterable[Path] = ()) -> list[dict]:
    files = _iter_py_files(roots, exclude=list(exclude))
    all_findings: list[dict] = []
    for f in files:
        all_findings.extend(scan_file(f))
    return all_findings


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Static determinism guard")
    ap.add_argument(
        "--paths",
        nargs="*",
        default=[],
        help="Optional paths to scan (files or dirs). Default scans seedforge/.",
    )
    ap.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    ns = ap.parse_args(argv)

    roots = [Path(p) for p in ns.paths] if ns.paths else list(DEFAULT_SCAN_DIRS)
    all_findings = scan_paths(roots, exclude=DEFAULT_EXCLUDE_PATHS)

    if ns.json:
        print(json.dumps({"findings": all_findings}, indent=2))
    else:
        if not all_findings:
            print("[determinism_guard] PASS: no violations found")
        else:
            print(f"[determinism_guard] FAIL: {len(all_findings)} violation(s)")
            for v in all_findings:
                print(f"- {v['file']}:{v['line']}:{v['col']} [{v['kind']}] {v['detail']}")

    return 0 if not all_findings else 1


if __name__ == "__main__":
    raise SystemExit(main())
