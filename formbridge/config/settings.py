"""
Runtime configuration for formbridge.

Values come from FORMBRIDGE_-prefixed environment variables or a .env file.
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from formbridge.constants import CQL_LANGUAGE
from formbridge.models.form import EntryMode

load_dotenv()


class Settings(BaseSettings):
    """formbridge settings."""

    model_config = SettingsConfigDict(
        env_prefix="FORMBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Reject log levels the logging module does not know."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Comma-separated origins, or * for any
    cors_origins: str = "*"

    # Request limits
    max_request_body_size: int = 5 * 1024 * 1024  # 5 MB

    # Conversion settings
    default_entry_mode: EntryMode = EntryMode.PRIOR_EDIT  # Used when no entryMode extension
    expression_language: str = CQL_LANGUAGE  # Only language accepted for expressions


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings, read once."""
    return Settings()


def reset_settings() -> None:
    """Clear the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
