"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables with HEROFORGE_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="HEROFORGE_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Administration ---
    owner_account: str = "admin"

    # --- Events ---
    log_events: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached engine settings."""
    return Settings()
