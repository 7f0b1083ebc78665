"""
Seedable generator with derived operations, scope forking and snapshot/restore.

Determinism contract:
- identical seed + identical ordered sequence of calls => identical outputs
- a fork is a brand-new Generator; it never references its parent after creation
- fork creation order on a shared parent is part of the contract (build fork trees
  sequentially, before per-subsystem consumption starts)

Non-goals:
- Cryptographic security (`uuid()` included)
- Thread safety of a single instance (give each concurrent owner its own fork)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from . import config, timebase
from .contracts import GeneratorSnapshot, GeneratorStats
from .engine import is_number, mulberry32_step, normalize_seed
from .errors import InvalidSnapshot, TypeMismatch

logger = logging.getLogger(__name__)


def _coerce_weight(weight: Any) -> float:
    # Weights that do not coerce to a number (or are NaN) count as zero.
    try:
        w = float(weight)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(w):
        return 0.0
    return w


def _weighted_entries(weights: Any) -> list[tuple[Any, Any]]:
    """Normalize a weighted collection into ordered (value, weight) pairs."""
    if isinstance(weights, Mapping):
        return list(weights.items())
    if isinstance(weights, Sequence) and not isinstance(weights, (str, bytes)):
        entries: list[tuple[Any, Any]] = []
        for item in weights:
            if isinstance(item, Mapping):
                entries.append((item.get("value"), item.get("weight")))
            elif isinstance(item, Sequence) and not isinstance(item, (str, bytes)):
                value = item[0] if len(item) > 0 else None
                weight = item[1] if len(item) > 1 else None
                entries.append((value, weight))
            else:
                entries.append((item, 1))
        return entries
    raise TypeMismatch("weighted_pick expects a mapping or a sequence")


def _seed_label(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return f"seed:{int(value)}"
    return f"seed:{value}"


class Generator:
    """
    Deterministic random-number generator (Mulberry32 core, 32-bit state).

    Pass instances explicitly to the code that consumes them; use `fork()` to hand each
    subsystem its own independent stream.
    """

    def __init__(self, seed: Any = None):
        self._stats = GeneratorStats()
        self._seed = 0
        self._state = 0
        if seed is None:
            seed = config.DEFAULT_SEED if config.DEFAULT_SEED is not None else timebase.now_ms()
        self.reset(seed)

    def __repr__(self) -> str:
        return f"Generator(seed={self._seed}, state={self._state})"

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def state(self) -> int:
        return self._state

    # ------------------------------------------------------------------
    # Core engine
    # ------------------------------------------------------------------

    def next_uint32(self) -> int:
        """Advance one step and return the raw unsigned 32-bit output."""
        self._state, out = mulberry32_step(self._state)
        return out

    def _push_seed_history(self, seed: int) -> None:
        self._stats.push_seed(seed)

    def reset(self, seed: Any = None) -> int:
        """
        Reinitialize seed and state (default: the current seed).

        Statistics keep their lineage: the new seed is appended to the history rather
        than clearing it.
        """
        self._stats.record_call("reset")
        normalized = normalize_seed(self._seed if seed is None else seed)
        self._seed = normalized
        self._state = normalized

        if self._stats.initial is None:
            self._stats.initial = normalized
        self._stats.current = normalized
        self._push_seed_history(normalized)
        logger.debug("reset seed=%d", normalized)
        return normalized

    # ------------------------------------------------------------------
    # Derived operations
    # ------------------------------------------------------------------

    def float(self) -> float:
        """Uniform float in [0, 1)."""
        self._stats.record_call("float")
        return self.next_uint32() * config.UINT32_FACTOR

    def int(self, low, high):
        """Uniform integer in [low, high] inclusive; bounds are swapped if reversed."""
        self._stats.record_call("int")
        if not (is_number(low) and is_number(high)):
            raise TypeMismatch("int(low, high) expects numeric bounds")
        if not (math.isfinite(low) and math.isfinite(high)):
            raise TypeMismatch("int(low, high) expects finite bounds")
        if high < low:
            low, high = high, low
        span = high - low + 1
        return low + math.floor(self.next_uint32() * (span * config.UINT32_FACTOR))

    def range(self, low, high):
        """Continuous uniform value between the bounds; `range(v, v)` returns v without a draw."""
        self._stats.record_call("range")
        if not (is_number(low) and is_number(high)):
            raise TypeMismatch("range(low, high) expects numeric bounds")
        if high == low:
            return low
        if high < low:
            low, high = high, low
        return low + (high - low) * self.float()

    def chance(self, probability) -> bool:
        self._stats.record_call("chance")
        if not is_number(probability):
            raise TypeMismatch("chance(probability) expects a number")
        if probability <= 0:
            return False
        if probability >= 1:
            return True
        return self.float() < probability

    def pick(self, items: Sequence[Any]) -> Any:
        """Uniformly chosen element, or None for an empty sequence."""
        self._stats.record_call("pick")
        if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
            raise TypeMismatch("pick(items) expects a sequence")
        if len(items) == 0:
            return None
        return items[self.int(0, len(items) - 1)]

    def weighted_pick(self, weights: Any) -> Any:
        """
        Pick a value proportionally to its weight.

        Accepts a mapping of value -> weight (insertion order), or a sequence of
        `(value, weight)` pairs, `{"value": ..., "weight": ...}` mappings or bare values
        (weight 1). Returns None when the total weight is not a positive finite number.
        """
        self._stats.record_call("weighted_pick")
        entries = _weighted_entries(weights)

        total = sum(_coerce_weight(weight) for _, weight in entries)
        if not math.isfinite(total) or total <= 0:
            return None

        threshold = self.range(0, total)
        for value, weight in entries:
            w = _coerce_weight(weight)
            if w <= 0:
                continue
            if threshold < w:
                return value
            threshold -= w
        # Rounding can walk past the end; the last entry absorbs it.
        return entries[-1][0]

    def uuid(self, scope: Any = config.DEFAULT_UUID_SCOPE) -> str:
        """
        Scoped pseudo-unique id from two raw draws: `<scope>-xxxxxxxx-xxxxxxxx`.

        Not cryptographic. Replays compare these byte for byte, so the format and the
        draw count must stay as they are.
        """
        self._stats.record_call("uuid")
        prefix = config.DEFAULT_UUID_SCOPE if scope is None else str(scope)
        part_a = self.next_uint32()
        part_b = self.next_uint32()
        return f"{prefix}-{part_a:08x}-{part_b:08x}"

    # ------------------------------------------------------------------
    # Fork protocol
    # ------------------------------------------------------------------

    def fork(self, scope_or_seed: Any = None) -> "Generator":
        """
        Derive an independent child generator.

        - no argument: child seed is one raw draw from this generator
        - int/float: child seed is the normalized number; no draw is consumed
        - anything else: treated as a scope label, child seed is
          `next_uint32() ^ hash(label)` (one draw consumed)
        """
        self._stats.record_call("fork")
        label = config.DEFAULT_FORK_LABEL

        if scope_or_seed is None:
            derived = self.next_uint32()
        elif is_number(scope_or_seed):
            derived = normalize_seed(scope_or_seed)
            label = _seed_label(scope_or_seed)
        else:
            scope = str(scope_or_seed)
            label = f"scope:{scope}"
            derived = self.next_uint32() ^ normalize_seed(scope)

        derived &= config.UINT32_MASK
        self._stats.forks[label] = derived
        self._push_seed_history(derived)
        logger.debug("fork label=%s derived_seed=%d", label, derived)
        return Generator(derived)

    # ------------------------------------------------------------------
    # Snapshot / restore
    # ------------------------------------------------------------------

    def _payload(self) -> dict[str, Any]:
        return GeneratorSnapshot(seed=self._seed, state=self._state, stats=self._stats).to_dict()

    def serialize(self) -> dict[str, Any]:
        """Return `{seed, state, stats}` as a plain, JSON-safe dict (deep copy)."""
        self._stats.record_call("serialize")
        return self._payload()

    def debug_snapshot(self) -> dict[str, Any]:
        """Same payload as `serialize()`; never advances the state."""
        self._stats.record_call("debug_snapshot")
        return self._payload()

    def restore(self, snapshot: Mapping[str, Any]) -> None:
        """
        Reinstate a payload produced by `serialize()` / `debug_snapshot()`.

        Restores the full stats when present, otherwise keeps the current stats and
        appends the restored seed to the history.
        """
        self._stats.record_call("restore")
        if not isinstance(snapshot, Mapping):
            raise InvalidSnapshot("restore(snapshot) expects a mapping")
        for key in ("seed", "state"):
            value = snapshot.get(key)
            if not is_number(value) or not math.isfinite(value):
                raise InvalidSnapshot(f"Invalid snapshot payload: {key}={value!r}")

        stats = snapshot.get("stats")
        if stats is not None and not isinstance(stats, Mapping):
            raise InvalidSnapshot(f"Invalid snapshot payload: stats={stats!r}")
        try:
            parsed = GeneratorSnapshot.from_dict(snapshot)
        except (AttributeError, TypeError, ValueError) as e:
            raise InvalidSnapshot(f"Invalid snapshot stats: {e}") from e

        self._seed = parsed.seed
        self._state = parsed.state
        if parsed.stats is not None:
            self._stats = parsed.stats
        else:
            self._stats.current = self._seed
            self._push_seed_history(self._seed)
        logger.debug("restore seed=%d state=%d", self._seed, self._state)
