"""
seedforge - inspect a seed's stream, its forks and its snapshot payload.

Usage:
    python main.py [--seed <seed>] [--count <n>] [--fork <label> ...] [--json]

Seeds may be integers or strings (strings are hashed the same way save files hash them).
"""
import argparse
import json

from seedforge import Generator


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="seedforge - deterministic, forkable random streams"
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=None,
        help="Seed (integer or string). Default: SEEDFORGE_SEED or wall-clock time"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=8,
        help="How many floats to print from the root stream (default: 8)"
    )
    parser.add_argument(
        "--fork",
        action="append",
        default=[],
        help="Scope label to fork before drawing (repeatable, forked in order)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable JSON"
    )
    return parser.parse_args(argv)


def _parse_seed(raw):
    if raw is None:
        return None
    try:
        return int(raw, 0)
    except ValueError:
        return raw


def build_report(seed, count, fork_labels):
    rng = Generator(seed)
    forks = []
    for label in fork_labels:
        child = rng.fork(label)
        forks.append({"scope": label, "seed": child.seed, "first_float": child.float()})
    floats = [rng.float() for _ in range(count)]
    return {
        "seed": rng.seed,
        "forks": forks,
        "floats": floats,
        "snapshot": rng.debug_snapshot(),
    }


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    report = build_report(_parse_seed(args.seed), args.count, args.fork)

    if args.json:
        print(json.dumps(report, indent=2))
        return 0

    print("=" * 50)
    print(f"  seedforge - seed {report['seed']}")
    print("=" * 50)
    for entry in report["forks"]:
        print(f"fork scope:{entry['scope']:<20} seed={entry['seed']:>10}  first={entry['first_float']:.12f}")
    for i, value in enumerate(report["floats"]):
        print(f"float[{i}] = {value:.12f}")
    print(f"state after draws: {report['snapshot']['state']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
