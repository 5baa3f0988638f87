"""
promptlayers - Configuration and settings.

All settings can be overridden with PROMPTLAYERS_* environment variables
or a local .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class ContextSettings(BaseSettings):
    """Settings for the composition engine and its CLI."""

    model_config = SettingsConfigDict(
        env_prefix="PROMPTLAYERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Joins layer fragments in the markup projection
    layer_separator: str = "\n"

    # False -> registering a different template under a taken id raises
    allow_template_overwrite: bool = True

    # Install StandardTemplate into the process-wide manager on first use
    register_default_templates: bool = True


@lru_cache
def get_settings() -> ContextSettings:
    """Get cached ContextSettings instance."""
    return ContextSettings()
