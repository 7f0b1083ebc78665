"""Environment-driven configuration."""

from seedforge import config


def test_env_seed_unset(monkeypatch):
    monkeypatch.delenv("SEEDFORGE_SEED", raising=False)
    assert config._env_seed("SEEDFORGE_SEED") is None


def test_env_seed_parses_integers(monkeypatch):
    monkeypatch.setenv("SEEDFORGE_SEED", "2025")
    assert config._env_seed("SEEDFORGE_SEED") == 2025
    monkeypatch.setenv("SEEDFORGE_SEED", "0xDEADBEEF")
    assert config._env_seed("SEEDFORGE_SEED") == 0xDEADBEEF


def test_env_seed_keeps_text_as_string_seed(monkeypatch):
    monkeypatch.setenv("SEEDFORGE_SEED", "  weekly-challenge ")
    assert config._env_seed("SEEDFORGE_SEED") == "weekly-challenge"


def test_contract_constants():
    assert config.SEED_HISTORY_LIMIT == 10
    assert config.UINT32_FACTOR == 2**-32
    assert config.MULBERRY32_INCREMENT == 0x6D2B79F5
