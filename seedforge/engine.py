"""
Core 32-bit engine: the Mulberry32 mixing step plus seed normalization.

All arithmetic is unsigned 32-bit with wrap-around, emulated with masks so results are
bit-exact with any other Mulberry32 implementation (no floating point involved).
"""

from __future__ import annotations

import math
from numbers import Integral, Real
from typing import Any

from .config import MULBERRY32_INCREMENT, UINT32_MASK
from .errors import InvalidSeedKind


def _imul(a: int, b: int) -> int:
    return (a * b) & UINT32_MASK


def mulberry32_step(state: int) -> tuple[int, int]:
    """
    Advance `state` by one step.

    Returns `(new_state, output)`, both unsigned 32-bit.
    """
    state = (state + MULBERRY32_INCREMENT) & UINT32_MASK
    t = state
    t = _imul(t ^ (t >> 15), t | 1)
    t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
    return state, (t ^ (t >> 14)) & UINT32_MASK


def _utf16_units(text: str):
    for ch in text:
        code = ord(ch)
        if code > 0xFFFF:
            code -= 0x10000
            yield 0xD800 + (code >> 10)
            yield 0xDC00 + (code & 0x3FF)
        else:
            yield code


def hash_string(text: str) -> int:
    """
    32-bit rolling hash (`h = h * 31 + unit`) over UTF-16 code units.

    Saved seeds and replays depend on this exact formula.
    """
    h = 0
    for unit in _utf16_units(text):
        h = (h * 31 + unit) & UINT32_MASK
    return h


def is_number(value: Any) -> bool:
    """True for ints and floats, but not for bools."""
    return isinstance(value, Real) and not isinstance(value, bool)


def normalize_seed(seed: Any) -> int:
    """Coerce an integer, finite float or string into a canonical u32 seed."""
    if isinstance(seed, bool):
        raise InvalidSeedKind(f"Unsupported seed type: {type(seed).__name__}")
    if isinstance(seed, Integral):
        # Arbitrary-width (including 64-bit) integers keep their low 32 bits.
        return int(seed) & UINT32_MASK
    if isinstance(seed, Real):
        if not math.isfinite(seed):
            raise InvalidSeedKind(f"Seed must be finite, got {seed!r}")
        return int(seed) & UINT32_MASK
    if isinstance(seed, str):
        return hash_string(seed)
    raise InvalidSeedKind(f"Unsupported seed type: {type(seed).__name__}")
