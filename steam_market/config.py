"""
Steam Market — Configuration & Constants

Every endpoint root, timeout and request default lives here. No hardcoded
values in the clients.

Usage:
    from steam_market.config import settings
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Central configuration for the Steam Market client.

    Loads from environment variables (or a local .env file) with fallback
    defaults.
    """

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # -----------------------------------------------------------------------
    # Endpoints
    # -----------------------------------------------------------------------
    STEAM_COMMUNITY_URL: str = "https://steamcommunity.com"

    # -----------------------------------------------------------------------
    # Session: handed to the transport, never inspected by the parsers
    # -----------------------------------------------------------------------
    STEAM_SESSION_ID: str = ""              # "sessionid" cookie, echoed in order forms
    STEAM_LOGIN_SECURE: str = ""            # "steamLoginSecure" cookie

    # -----------------------------------------------------------------------
    # HTTP
    # -----------------------------------------------------------------------
    HTTP_TIMEOUT_SECONDS: float = 30.0
    USER_AGENT: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    )

    # -----------------------------------------------------------------------
    # Logging
    # -----------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"

    # -----------------------------------------------------------------------
    # Request defaults
    # -----------------------------------------------------------------------
    DEFAULT_COUNTRY: str = "US"
    DEFAULT_CURRENCY: str = "1"             # Steam currency id, 1 = USD
    SEARCH_PAGE_SIZE: int = 100             # Upstream caps search/render at 100

    @field_validator("STEAM_COMMUNITY_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined with a leading slash."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Convert empty/whitespace strings to default."""
        if isinstance(v, str) and not v.strip():
            return "INFO"
        return v


# Singleton instance
settings = Settings()
