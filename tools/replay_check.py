"""
Headless replay check.

Drives a fixed, mixed operation script (floats, ints, ranges, picks, weighted picks,
uuids and a fork tree) from one seed and verifies:
- two fresh generators with the same seed produce the same trace
- snapshot -> advance -> restore reproduces the same continuation

Usage:
  python tools/replay_check.py --seed 2025 --steps 64
  python tools/replay_check.py --json
"""

from __future__ import annotations

import argparse
import hashlib
import json
import sys
from pathlib import Path

# Ensure imports work when running as `python tools/replay_check.py`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from seedforge import ForkTree, Generator  # noqa: E402

DIRECTIONS = ["north", "south", "east", "west"]
ORE_WEIGHTS = {"common": 70, "iron": 20, "gold": 8, "crystal": 2}
FORK_SCOPES = {"spawn": "enemy.spawn", "loot": "enemy.loot", "audio": "audio.variation"}


def run_script(rng: Generator, steps: int) -> list:
    """Run the mixed script; returns a JSON-safe trace."""
    trace: list = []
    for i in range(steps):
        trace.append(
            [
                rng.float(),
                rng.int(1, 100),
                rng.range(-25, 42),
                rng.chance(0.7),
                rng.pick(DIRECTIONS),
                rng.weighted_pick(ORE_WEIGHTS),
                rng.uuid(f"step-{i}"),
            ]
        )
    tree = ForkTree(rng, FORK_SCOPES)
    for key in tree:
        child = tree[key]
        trace.append([key, child.seed, child.float(), child.int(0, 9)])
    return trace


def digest(trace: list) -> str:
    payload = json.dumps(trace, separators=(",", ":"), sort_keys=True)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def check(seed, steps: int) -> dict:
    first = run_script(Generator(seed), steps)
    second = run_script(Generator(seed), steps)

    rng = Generator(seed)
    run_script(rng, max(1, steps // 2))
    snap = rng.debug_snapshot()
    continuation = run_script(rng, steps)
    rng.restore(snap)
    replayed = run_script(rng, steps)

    result = {
        "seed": Generator(seed).seed,
        "steps": int(steps),
        "digest_a": digest(first),
        "digest_b": digest(second),
        "digest_continuation": digest(continuation),
        "digest_restored": digest(replayed),
    }
    result["ok"] = (
        result["digest_a"] == result["digest_b"]
        and result["digest_continuation"] == result["digest_restored"]
    )
    return result


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Verify seeded replays are bit-exact")
    ap.add_argument("--seed", type=int, default=2025, help="rng seed")
    ap.add_argument("--steps", type=int, default=64, help="script iterations per run")
    ap.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    ns = ap.parse_args(argv)

    result = check(ns.seed, ns.steps)

    if ns.json:
        print(json.dumps(result, indent=2))
    else:
        print(f"[replay_check] seed={result['seed']} steps={result['steps']}")
        print(f"[replay_check] fresh runs:      {result['digest_a'][:16]} / {result['digest_b'][:16]}")
        print(f"[replay_check] restore replay:  {result['digest_continuation'][:16]} / {result['digest_restored'][:16]}")
        print("[replay_check] DONE:", "PASS" if result["ok"] else "FAIL (replay diverged)")

    return 0 if result["ok"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
