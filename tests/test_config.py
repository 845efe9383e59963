"""Tests for settings loading (steam_market/config.py)."""

from __future__ import annotations

from steam_market.config import Settings


def test_defaults() -> None:
    """Defaults apply when nothing is set in the environment."""
    s = Settings(_env_file=None)
    assert s.STEAM_COMMUNITY_URL == "https://steamcommunity.com"
    assert s.DEFAULT_CURRENCY == "1"
    assert s.SEARCH_PAGE_SIZE == 100
    assert s.HTTP_TIMEOUT_SECONDS == 30.0


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("SEARCH_PAGE_SIZE", "50")
    monkeypatch.setenv("STEAM_SESSION_ID", "abc123")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "5")
    s = Settings(_env_file=None)
    assert s.SEARCH_PAGE_SIZE == 50
    assert s.STEAM_SESSION_ID == "abc123"
    assert s.HTTP_TIMEOUT_SECONDS == 5.0


def test_trailing_slash_is_stripped() -> None:
    s = Settings(_env_file=None, STEAM_COMMUNITY_URL="https://steamcommunity.com/")
    assert s.STEAM_COMMUNITY_URL == "https://steamcommunity.com"


def test_blank_log_level_falls_back_to_info(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "   ")
    assert Settings(_env_file=None).LOG_LEVEL == "INFO"


def test_env_file(tmp_path) -> None:
    env = tmp_path / ".env"
    env.write_text("DEFAULT_COUNTRY=DE\nDEFAULT_CURRENCY=3\nUNRELATED_KEY=ignored\n")
    s = Settings(_env_file=env)
    assert s.DEFAULT_COUNTRY == "DE"
    assert s.DEFAULT_CURRENCY == "3"
