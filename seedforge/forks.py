"""
Fork trees: a fixed set of named child generators derived from one parent.

Building the tree is a strictly sequential phase. The fork order decides every child's
seed, so build all forks up front (in one place) and only then hand them to their owners.
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Optional, Union

from .engine import is_number, normalize_seed
from .generator import Generator

logger = logging.getLogger(__name__)

Scopes = Union[Mapping[str, str], Iterable[str]]


def _finite(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def _scope_items(scopes: Scopes) -> list[tuple[str, str]]:
    if isinstance(scopes, Mapping):
        return [(str(key), str(label)) for key, label in scopes.items()]
    return [(str(label), str(label)) for label in scopes]


def build_forks(parent: Generator, scopes: Scopes, *, preserve_parent: bool = False) -> dict[str, Generator]:
    """
    Fork `parent` once per scope, in iteration order.

    With `preserve_parent=True` the parent is snapshotted first and restored afterwards,
    so its own future stream is exactly what it would have been without the forks.
    """
    items = _scope_items(scopes)
    snapshot = parent.debug_snapshot() if preserve_parent else None
    forks: dict[str, Generator] = {}
    for key, label in items:
        forks[key] = parent.fork(label)
    if snapshot is not None:
        parent.restore(snapshot)
    return forks


class ForkTree:
    """
    Named forks of one parent, with refresh and seed capture/reseed for replays.

    Example:
        tree = ForkTree(rng, {"laser": "audio:laser", "shield": "audio:shield"})
        laser_rng = tree["laser"]
    """

    def __init__(self, parent: Generator, scopes: Scopes, *, preserve_parent: bool = False):
        self.parent = parent
        self._scopes: dict[str, str] = dict(_scope_items(scopes))
        self._forks = build_forks(parent, self._scopes, preserve_parent=preserve_parent)
        self._seed_snapshot: Optional[dict[str, Any]] = None

    def __getitem__(self, key: str) -> Generator:
        return self._forks[key]

    def __contains__(self, key: object) -> bool:
        return key in self._forks

    def __iter__(self) -> Iterator[str]:
        return iter(self._forks)

    def __len__(self) -> int:
        return len(self._forks)

    def get(self, key: str, default: Optional[Generator] = None) -> Optional[Generator]:
        return self._forks.get(key, default)

    def keys(self):
        return self._forks.keys()

    def scope_of(self, key: str) -> str:
        return self._scopes[key]

    def refresh(self) -> dict[str, Generator]:
        """Rebuild every fork from the parent's current state without advancing the parent."""
        self._forks = build_forks(self.parent, self._scopes, preserve_parent=True)
        logger.debug("fork tree refreshed keys=%s", list(self._forks))
        return dict(self._forks)

    def capture_seeds(self) -> dict[str, Any]:
        """Record the parent seed and each child's seed (JSON-safe deep copy)."""
        snapshot = {
            "base_seed": self.parent.seed,
            "forks": [
                {"key": key, "scope": self._scopes[key], "seed": fork.seed}
                for key, fork in self._forks.items()
            ],
        }
        self._seed_snapshot = copy.deepcopy(snapshot)
        return copy.deepcopy(snapshot)

    def reseed(self, payload: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        """
        Reinstate captured seeds: reset the parent, re-create the forks from their recorded
        scopes and reset each child to its recorded seed.

        Entries without a numeric seed are skipped. Returns the payload that was applied.
        """
        if payload is not None:
            data = copy.deepcopy(dict(payload))
        elif self._seed_snapshot is not None:
            data = copy.deepcopy(self._seed_snapshot)
        else:
            data = self.capture_seeds()

        base_seed = data.get("base_seed")
        if _finite(base_seed):
            self.parent.reset(normalize_seed(base_seed))

        scopes: dict[str, str] = {}
        forks: dict[str, Generator] = {}
        for entry in data.get("forks") or ():
            seed = entry.get("seed") if isinstance(entry, Mapping) else None
            if not _finite(seed):
                continue
            key = str(entry.get("key"))
            scope = str(entry.get("scope") or key)
            child = self.parent.fork(scope)
            child.reset(normalize_seed(seed))
            scopes[key] = scope
            forks[key] = child

        self._scopes = scopes
        self._forks = forks
        self._seed_snapshot = copy.deepcopy(data)
        logger.debug("fork tree reseeded keys=%s", list(forks))
        return data
