"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Logging
    log_level: str = "INFO"

    # Rate limit budgets (attempts per window)
    rate_limit_window_ms: int = 60_000
    sign_up_max_attempts: int = 3
    sign_in_max_attempts: int = 5
    todo_max_attempts: int = 10

    # Limiter memory bound
    rate_limit_max_keys: int = 10_000

    # Compose the client host into rate limit keys (default: one budget per action)
    rate_limit_per_client: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
