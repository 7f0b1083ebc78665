"""
Exceptions raised by seedforge.

Every failure surfaces synchronously to the caller. The "no value" results of `pick` and
`weighted_pick` are not errors and never raise.
"""


class SeedforgeError(Exception):
    """Base class for seedforge errors."""


class InvalidSeedKind(SeedforgeError, TypeError):
    """Seed is not an integer, finite float or string."""


class TypeMismatch(SeedforgeError, TypeError):
    """An operation received an argument of the wrong kind (no silent coercion)."""


class InvalidSnapshot(SeedforgeError, ValueError):
    """`restore` received a payload without numeric `seed` / `state`."""
