"""
Configuration settings for seedforge.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# 32-bit arithmetic
UINT32_MASK = 0xFFFFFFFF
UINT32_FACTOR = 1.0 / (UINT32_MASK + 1)
MULBERRY32_INCREMENT = 0x6D2B79F5

# Statistics
SEED_HISTORY_LIMIT = 10  # ring buffer cap, oldest evicted first

# Labels
DEFAULT_UUID_SCOPE = "global"
DEFAULT_FORK_LABEL = "fork"
DEFAULT_HELPER_PREFIX = "random-helper"


def _env_seed(name: str):
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw, 0)
    except ValueError:
        # Non-numeric values are treated as string seeds and hashed by the engine.
        return raw


# Pin every unseeded Generator() to one seed (QA / replay capture). Unset -> wall clock.
DEFAULT_SEED = _env_seed("SEEDFORGE_SEED")
