# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Group related settings together; each group is a section of the Settings class.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "kvartplan"
    DEBUG: bool = False
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level applied at startup (DEBUG, INFO, WARNING, ...).",
    )

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:3000"]

    # -- Market price feed (restate.ru) --
    RESTATE_URL: str = Field(
        default="https://msk.restate.ru/action/graph2/data/",
        description="restate.ru price-per-square-meter graph endpoint.",
    )

    # -- Reference rate feed (Bank of Russia) --
    CBR_URL: str = Field(
        default="https://www.cbr.ru/key-indicators/",
        description="cbr.ru key indicators page, scraped for key rate and inflation.",
    )

    # -- Outbound HTTP --
    FEED_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Timeout for a single upstream feed request.",
    )
    FEED_CACHE_TTL: int = Field(
        default=3600,
        description="Lifetime in seconds of a cached successful feed response (default 1 hour).",
    )
    FEED_USER_AGENT: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


settings = Settings()
