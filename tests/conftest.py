"""Ensure the seedforge package and tools/ are importable for local pytest runs."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from seedforge import config, timebase  # noqa: E402


@pytest.fixture(autouse=True)
def _no_pinned_seed(monkeypatch):
    """Keep SEEDFORGE_SEED from a developer's .env out of the tests."""
    monkeypatch.setattr(config, "DEFAULT_SEED", None)
    yield
    timebase.set_now_ms(None)
