"""
Named-scope convenience helpers for systems that look their forks up by name.

A host supplies `get_random_fork(name)`. When it has no fork for a name, the helpers fall
back to a deterministic fork of their own, cached per name, so callers never need a
global generator.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any, Optional

from .config import DEFAULT_HELPER_PREFIX
from .engine import is_number
from .errors import TypeMismatch
from .generator import Generator


def _usable(fork: Any) -> bool:
    return fork is not None and callable(getattr(fork, "float", None))


def _finite(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


class RandomHelpers:
    def __init__(
        self,
        get_random_fork: Callable[[str], Any],
        *,
        random: Optional[Generator] = None,
        fallback_seed_prefix: str = DEFAULT_HELPER_PREFIX,
    ):
        if not callable(get_random_fork):
            raise TypeMismatch("RandomHelpers requires a get_random_fork callable")
        self._get_random_fork = get_random_fork
        self._random = random if random is not None and callable(getattr(random, "fork", None)) else None
        self._prefix = fallback_seed_prefix
        self._fallback_base: Optional[Generator] = None
        self._fallback_forks: dict[str, Generator] = {}

    def _resolve_fallback_base(self) -> Generator:
        if self._fallback_base is None:
            label = f"{self._prefix}:fallback-base"
            if self._random is not None:
                self._fallback_base = self._random.fork(label)
            else:
                self._fallback_base = Generator(label)
        return self._fallback_base

    def _get_fork(self, name: str) -> Any:
        fork = self._get_random_fork(name)
        return fork if _usable(fork) else None

    def ensure_random(self, name: str = "base") -> Any:
        """Injected fork for `name`, else a cached fallback fork."""
        fork = self._get_fork(name)
        if fork is not None:
            return fork

        if name not in self._fallback_forks:
            # The base fork is always created first; with a parent it takes one parent draw.
            base = self._resolve_fallback_base()
            source = self._random if self._random is not None else base
            self._fallback_forks[name] = source.fork(f"{self._prefix}:fallback:{name}")
        return self._fallback_forks[name]

    def random_float(self, name: str = "base") -> float:
        return self.ensure_random(name).float()

    def random_range(self, low, high, name: str = "base"):
        fork = self._get_fork(name)
        if fork is not None and callable(getattr(fork, "range", None)):
            return fork.range(low, high)

        start = low if _finite(low) else 0
        end = high if _finite(high) else start
        if end == start:
            return start
        lo, hi = min(start, end), max(start, end)
        return lo + self.random_float(name) * (hi - lo)

    def random_int(self, low, high, name: str = "base"):
        fork = self._get_fork(name)
        if fork is not None and callable(getattr(fork, "int", None)):
            return fork.int(low, high)

        lo, hi = min(low, high), max(low, high)
        return lo + int((hi - lo + 1) * self.random_float(name))

    def random_chance(self, probability, name: str = "base") -> bool:
        if probability <= 0:
            return False
        if probability >= 1:
            return True

        fork = self._get_fork(name)
        if fork is not None and callable(getattr(fork, "chance", None)):
            return fork.chance(probability)
        return self.random_float(name) < probability

    def random_centered(self, span: float = 1, name: str = "base") -> float:
        """Value in [-span/2, span/2)."""
        return (self.random_float(name) - 0.5) * span

    def random_pick(self, items: Sequence[Any], name: str = "base") -> Any:
        if not isinstance(items, Sequence) or isinstance(items, (str, bytes)) or len(items) == 0:
            return None

        fork = self._get_fork(name)
        if fork is not None and callable(getattr(fork, "pick", None)):
            return fork.pick(items)
        return items[self.random_int(0, len(items) - 1, name)]
