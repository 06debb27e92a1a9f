"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LEMO_VALIDATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    APP_NAME: str = "Lemo Validator"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FILE: Optional[str] = None  # File logging is enabled only when set

    # Validation Configuration
    VALIDATION_RULES_PATH: Optional[str] = None  # Falls back to the packaged lemo_validator/config/validation/rules.yaml


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
