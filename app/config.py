"""
Configuration Management

Uses Pydantic BaseSettings to load configuration from environment variables.
All settings can be overridden via .env file or environment variables.

Environment Variables:
    REDIS_URL: Redis connection string
    REDIS_SESSION_TTL: Lifetime of session-scoped safety data (seconds)
    REDIS_RECONNECT_COOLDOWN_SECONDS: Pause before retrying a failed Redis connect
    APP_ENV: Environment name (development/staging/production)
    DEBUG: Enable debug mode (default: False)
    DEFAULT_LOCALE: Locale used when the client sends none (default: en-US)
    FOLLOW_UP_COOLDOWN_SECONDS: Delay before the follow-up banner (default: 600)
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Redis Configuration
    redis_url: str = "redis://localhost:6379/0"
    """Redis connection URL.

    Format: redis://host:port/db
    Example: redis://localhost:6379/0

    Used for the session-scoped intervention record.
    """

    redis_session_ttl: int = 1800
    """Session TTL in seconds (default: 30 minutes).

    The intervention record expires with the session; nothing about an
    intervention outlives it.
    """

    redis_reconnect_cooldown_seconds: float = 15.0
    """Seconds to wait after a failed Redis connect before trying again.

    While waiting, storage goes straight to the in-memory fallback.
    """

    # Application Environment
    app_env: Literal["development", "staging", "production"] = "development"
    """Current application environment.

    Options:
    - development: Local development, verbose logging, docs enabled
    - staging: Pre-production testing environment
    - production: Live production environment, minimal logging
    """

    debug: bool = False
    """Enable debug mode (DEBUG logging, request timing)."""

    # Application Configuration
    app_name: str = "assessment-safety"
    """Application name."""

    host: str = "0.0.0.0"
    """Host to bind the application server."""

    port: int = 8000
    """Port to bind the application server."""

    # CORS Configuration
    cors_origins: str = "http://localhost:3000"
    """Comma-separated list of allowed CORS origins."""

    # Safety Layer
    default_locale: str = "en-US"
    """Locale used for crisis resources when the client does not send one."""

    lexicon_version: str = "2024.1"
    """Version tag of the phrase lexicon, included in log lines."""

    moderate_vote_threshold: int = 2
    """Number of distinct moderate-tier phrases needed before text is flagged."""

    follow_up_cooldown_seconds: int = 600
    """Seconds after an intervention before the follow-up banner is shown."""

    adhd_probability_threshold: float = 0.8
    autism_probability_threshold: float = 0.8
    dyslexia_indicator_threshold: float = 0.7
    depression_score_threshold: int = 15
    anxiety_score_threshold: int = 15

    # Pydantic configuration
    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env file if it exists
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @property
    def cors_origins_list(self) -> list[str]:
        """Split cors_origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached settings instance

    Example:
        >>> from app.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.follow_up_cooldown_seconds)
        600
    """
    return Settings()


# Module-level settings instance for easy imports
settings = get_settings()
