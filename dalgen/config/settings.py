"""Runtime settings read from the environment (DALGEN_*) or a .env file."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DALGEN_",
        env_file=".env",
        extra="ignore"  # Ignore extra environment variables
    )

    # Logging
    log_level: str = "ERROR"
    log_format: Literal["simple", "detailed"] = "simple"
    log_to_file: bool = False
    # Absolute, or relative to the dalgen package root
    log_file: Optional[str] = None


def get_settings() -> Settings:
    """Read settings fresh from the current environment."""
    return Settings()
