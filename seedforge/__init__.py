"""
Deterministic, seedable random-number generation with hierarchical scope forking.

Subsystems receive a `Generator` (or a fork of one) by explicit injection. There is no
module-level shared generator: every stream has exactly one owner.
"""

from .errors import InvalidSeedKind, InvalidSnapshot, SeedforgeError, TypeMismatch
from .forks import ForkTree, build_forks
from .generator import Generator
from .helpers import RandomHelpers

__all__ = [
    "ForkTree",
    "Generator",
    "InvalidSeedKind",
    "InvalidSnapshot",
    "RandomHelpers",
    "SeedforgeError",
    "TypeMismatch",
    "build_forks",
]
