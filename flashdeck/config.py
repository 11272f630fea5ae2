"""
Centralized configuration management for flashdeck.
"""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Defines library settings, loaded from FLASHDECK_* environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FLASHDECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # When True, error messages include the file and line that raised them.
    # Meant for development; leave off in production.
    debug_errors: bool = False

    # gzip level used when building deck archives.
    compression_level: int = Field(default=6, ge=0, le=9)

    # Parent directory for scratch areas. None means the system temp dir.
    scratch_dir: Optional[Path] = None

    # Only the CLI configures logging; the library never adds handlers.
    log_level: str = "WARNING"


# Create a singleton instance of the settings
settings = Settings()
