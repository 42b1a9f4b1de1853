"""
Package configuration.

Settings are read from ``SHUNTING_``-prefixed environment variables or a
``.env`` file, e.g. ``SHUNTING_LOG_LEVEL=DEBUG``.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Package settings"""

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: Literal["text", "json"] = "text"
    LOG_FILE: Optional[str] = None

    # Conversion
    OPERATORS_FILE: Optional[str] = None  # YAML operator table; defaults to + - * / ^
    STRICT: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SHUNTING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
