"""
Thin, stable data contracts for generator statistics and snapshots.

These are intentionally small "struct-like" dataclasses so:
- generator state can be serialized into plain dicts (replay recordings, debug dumps)
- restored payloads are deep copies, never shared with the object that produced them
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .config import SEED_HISTORY_LIMIT, UINT32_MASK

CALL_NAMES = (
    "reset",
    "float",
    "int",
    "range",
    "chance",
    "pick",
    "weighted_pick",
    "uuid",
    "fork",
    "serialize",
    "restore",
    "debug_snapshot",
)


def _optional_u32(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value) & UINT32_MASK


@dataclass(slots=True)
class GeneratorStats:
    """
    Per-generator bookkeeping: call counters, bounded seed history and the fork registry.

    `history` is a ring buffer capped at SEED_HISTORY_LIMIT; `forks` maps the last-used
    label to its derived seed (later forks with the same label overwrite).
    """

    calls: dict[str, int] = field(default_factory=lambda: {name: 0 for name in CALL_NAMES})
    initial: Optional[int] = None
    current: Optional[int] = None
    history: deque = field(default_factory=lambda: deque(maxlen=SEED_HISTORY_LIMIT))
    forks: dict[str, int] = field(default_factory=dict)

    def record_call(self, name: str) -> None:
        if name in self.calls:
            self.calls[name] += 1

    def push_seed(self, seed: int) -> None:
        self.history.append(int(seed))

    def to_dict(self) -> dict[str, Any]:
        return {
            "calls": dict(self.calls),
            "seeds": {
                "initial": self.initial,
                "current": self.current,
                "history": list(self.history),
                "forks": dict(self.forks),
            },
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "GeneratorStats":
        stats = cls()
        for name, count in dict(d.get("calls") or {}).items():
            stats.calls[str(name)] = int(count)
        seeds = d.get("seeds") or {}
        stats.initial = _optional_u32(seeds.get("initial"))
        stats.current = _optional_u32(seeds.get("current"))
        stats.history.extend(int(s) & UINT32_MASK for s in seeds.get("history") or ())
        stats.forks = {str(k): int(v) & UINT32_MASK for k, v in dict(seeds.get("forks") or {}).items()}
        return stats


@dataclass(slots=True)
class GeneratorSnapshot:
    """Typed view of a `serialize()` / `debug_snapshot()` payload."""

    seed: int
    state: int
    stats: Optional[GeneratorStats] = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"seed": int(self.seed), "state": int(self.state)}
        if self.stats is not None:
            d["stats"] = self.stats.to_dict()
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "GeneratorSnapshot":
        stats = d.get("stats")
        return cls(
            seed=int(d["seed"]) & UINT32_MASK,
            state=int(d["state"]) & UINT32_MASK,
            stats=None if stats is None else GeneratorStats.from_dict(stats),
        )
