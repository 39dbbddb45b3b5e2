"""
Global settings management using Pydantic.

This module provides a singleton Settings class that loads configuration
from environment variables and .env files.
"""
import os
from pathlib import Path
from typing import Literal, Any

from loguru import logger
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_env_file() -> str | None:
    """
    Find the .env file.

    Search order:
    1. Path specified by STATETABLE_ENV_FILE environment variable
    2. Current working directory (.env)

    Returns:
        str | None: Path to .env file if found, None otherwise
    """
    custom_path = os.getenv('STATETABLE_ENV_FILE')
    if custom_path and Path(custom_path).exists():
        return custom_path

    env_file = Path.cwd() / '.env'
    if env_file.exists():
        return str(env_file)

    return None


class Settings(BaseSettings):
    """Global library settings."""

    model_config = SettingsConfigDict(
        env_prefix="STATETABLE_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    def __init__(self, **kwargs: Any):
        """Initialize Settings, reading the discovered .env file if there is one."""
        env_file_path = _find_env_file()
        if env_file_path and "_env_file" not in kwargs:
            kwargs["_env_file"] = env_file_path
        super().__init__(**kwargs)

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    log_file: str | None = Field(
        default=None,
        description="Log file path, no file sink when unset"
    )

    strict_decode: bool = Field(
        default=False,
        description="Raise on handler ids that cannot be resolved while decoding a snapshot"
    )


# Global singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global singleton Settings instance.

    Creates the instance on first call, subsequent calls return the same instance.

    Returns:
        Settings: The global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings from environment variables.

    This is useful for testing or when environment variables change at runtime.

    Returns:
        Settings: The new settings instance
    """
    global _settings
    _settings = Settings()
    return _settings


class DecodeSettings(BaseSettings):
    """Only the snapshot decoding option, read apart from the other settings."""

    model_config = Settings.model_config

    def __init__(self, **kwargs: Any):
        env_file_path = _find_env_file()
        if env_file_path and "_env_file" not in kwargs:
            kwargs["_env_file"] = env_file_path
        super().__init__(**kwargs)

    strict_decode: bool = Field(
        default=False,
        description="Raise on handler ids that cannot be resolved while decoding a snapshot"
    )


def strict_decode_enabled() -> bool:
    """
    Read the strict decoding option.

    Uses the global settings when they are valid. If another setting is
    malformed, only STATETABLE_STRICT_DECODE is read, so decoding does not
    depend on unrelated options such as the log level.

    Returns:
        bool: Whether unresolved handler ids must raise while decoding

    Raises:
        ValidationError: If STATETABLE_STRICT_DECODE itself is malformed
    """
    try:
        return get_settings().strict_decode
    except ValidationError as e:
        logger.warning(f"Settings are invalid, reading strict_decode alone: {e.error_count()} error(s)")
        return DecodeSettings().strict_decode
