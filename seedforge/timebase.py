"""
Wall-clock seed source.

Unseeded generators take their seed from here. Tools and tests can pin the clock with
`set_now_ms()` so "unseeded" runs become reproducible too.
"""

from __future__ import annotations

import time
from typing import Optional

_NOW_MS_OVERRIDE: Optional[int] = None


def set_now_ms(now_ms: Optional[int]) -> None:
    """
    Override the clock in milliseconds.

    If set to None, `now_ms()` falls back to real wall-clock time.
    """
    global _NOW_MS_OVERRIDE
    _NOW_MS_OVERRIDE = None if now_ms is None else int(now_ms)


def now_ms() -> int:
    """Return the override (if provided), otherwise wall-clock milliseconds since the epoch."""
    if _NOW_MS_OVERRIDE is not None:
        return int(_NOW_MS_OVERRIDE)
    return int(time.time() * 1000)
